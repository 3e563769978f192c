"""Helpers shared by the instruction families."""

import jax
import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.constants import FLAG_REGISTER


@jax.jit
def store_byte(V: jnp.ndarray, index, value) -> jnp.ndarray:
    return V.at[index].set(jnp.asarray(value).astype(V.dtype))


@jax.jit
def offset_pc(pc: jnp.ndarray, offset) -> jnp.ndarray:
    return (pc + offset).astype(jnp.uint16)


def advance(state: EmulatorState, skip: bool = False) -> EmulatorState:
    """Move PC past the current instruction, and past the next one when skipping."""
    return state.replace(pc=offset_pc(state.pc, 4 if skip else 2))


def set_register(state: EmulatorState, index: int, value: int) -> EmulatorState:
    """Write an 8-bit value into VX."""
    return state.replace(V=store_byte(state.V, index, int(value) & 0xFF))


def set_flag(state: EmulatorState, value: int) -> EmulatorState:
    """Write VF."""
    return set_register(state, FLAG_REGISTER, value)


def register(state: EmulatorState, index: int) -> int:
    return int(state.V[index])
