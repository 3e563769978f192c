"""CHIP-8 sound timer."""

import jax.numpy as jnp
from flax.struct import PyTreeNode, field


class Sound(PyTreeNode):
    """Countdown timer and the pending beep edge."""
    timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    beep: bool = False


def create_sound() -> Sound:
    return Sound()


def set_timer(sound: Sound, value) -> Sound:
    return sound.replace(timer=jnp.asarray(int(value) & 0xFF, dtype=jnp.uint8))


def tick(sound: Sound) -> Sound:
    """Decrement the timer; a 1 -> 0 transition raises the beep flag."""
    timer = int(sound.timer)
    if timer == 0:
        return sound
    return sound.replace(
        timer=jnp.asarray(timer - 1, dtype=jnp.uint8),
        beep=sound.beep or timer == 1,
    )


def acknowledge(sound: Sound) -> Sound:
    """Clear the beep flag once the host's audio layer has played it."""
    return sound.replace(beep=False)
