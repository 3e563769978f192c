"""CHIP-8 emulator state structures."""

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from chip8vm.constants import PROGRAM_START, STACK_SIZE, NUM_REGISTERS, INITIAL_DELAY_TIMER
from chip8vm.memory import Memory, create_memory
from chip8vm.display import Display, create_display
from chip8vm.sound import Sound, create_sound
from chip8vm.keypad import Keypad, create_keypad


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Complete CHIP-8 session state: CPU registers plus the four devices.

    ``waiting_for_key`` is set by FX0A while no key is held so the next step
    can poll the keypad without re-fetching. ``legacy_timers`` ties the timer
    tick to F-family instructions, as the original interpreter did.
    """
    rng: jax.Array
    memory: Memory
    display: Display
    sound: Sound
    keypad: Keypad
    stack: StackState = StackState()
    pc: jnp.ndarray = field(default_factory=lambda: jnp.astype(PROGRAM_START, jnp.uint16))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.astype(INITIAL_DELAY_TIMER, jnp.uint8))
    waiting_for_key: bool = False
    legacy_timers: bool = field(pytree_node=False, default=False)


def create_state(rng: jax.Array = jax.random.PRNGKey(0), legacy_timers: bool = False) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    return EmulatorState(
        rng=rng,
        memory=create_memory(),
        display=create_display(),
        sound=create_sound(),
        keypad=create_keypad(),
        legacy_timers=legacy_timers,
    )
