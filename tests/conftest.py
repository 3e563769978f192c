"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chip8vm import create_state, System
from chip8vm.logging import EmulatorLogger


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def legacy_state():
    """Provide a fresh state with timers tied to F-family instructions."""
    return create_state(legacy_timers=True)


@pytest.fixture
def system():
    """Provide a session that only logs errors."""
    return System(logger=EmulatorLogger(log_level="ERROR", use_colors=False))


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.replace(
            cells=state.memory.cells.at[address:address + len(sprite_bytes)].set(
                jnp.array(sprite_bytes, dtype=jnp.uint8)
            )
        )
    )


def program(*words):
    """Assemble instruction words into big-endian ROM bytes."""
    return b"".join(word.to_bytes(2, "big") for word in words)
