"""CHIP-8 hexadecimal keypad."""

from typing import Optional

import jax.numpy as jnp
from flax.struct import PyTreeNode, field

from chip8vm.constants import NUM_KEYS
from chip8vm.errors import InvalidKeyIndexError


class Keypad(PyTreeNode):
    """Pressed state of keys 0x0-0xF, written by the host before each step."""
    keys: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))


def create_keypad() -> Keypad:
    return Keypad()


def _check_index(index) -> int:
    index = int(index)
    if not 0 <= index < NUM_KEYS:
        raise InvalidKeyIndexError(index)
    return index


def set_key_state(keypad: Keypad, index, pressed: bool) -> Keypad:
    index = _check_index(index)
    return keypad.replace(keys=keypad.keys.at[index].set(bool(pressed)))


def is_pressed(keypad: Keypad, index) -> bool:
    index = _check_index(index)
    return bool(keypad.keys[index])


def pressed_key(keypad: Keypad) -> Optional[int]:
    """Highest-numbered pressed key, or None when no key is down."""
    pressed = jnp.flatnonzero(keypad.keys)
    if pressed.size == 0:
        return None
    return int(pressed[-1])


def release_all(keypad: Keypad) -> Keypad:
    return keypad.replace(keys=jnp.zeros_like(keypad.keys))
