"""Main CHIP-8 emulator execution engine."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import decode
from chip8vm.errors import RomReadError
from chip8vm.keypad import pressed_key
from chip8vm.memory import fetch_word, load
from chip8vm.sound import tick
from chip8vm.instructions.system import execute_system_instruction
from chip8vm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset, execute_skip_if_key
)
from chip8vm.instructions.alu import execute_alu_operation
from chip8vm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.misc import execute_misc_instruction

FAMILY_HANDLERS = (
    execute_system_instruction,
    execute_jump,
    execute_call,
    execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register,
    execute_set,
    execute_add,
    execute_alu_operation,
    execute_skip_if_not_equal_register,
    execute_set_index,
    execute_jump_with_offset,
    execute_random,
    execute_display,
    execute_skip_if_key,
    execute_misc_instruction,
)

TIMER_FAMILY = 0xF


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction."""
    decoded_instruction = decode(instruction)
    return FAMILY_HANDLERS[decoded_instruction.opcode](state, decoded_instruction)


def fetch(state: EmulatorState) -> int:
    """Fetch the big-endian instruction word at PC without advancing."""
    return fetch_word(state.memory, state.pc)


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Count delay and sound timers down by one."""
    delay = int(state.delay_timer)
    return state.replace(
        delay_timer=jnp.astype(max(delay - 1, 0), jnp.uint8),
        sound=tick(state.sound),
    )


def step(state: EmulatorState, timers: bool = True) -> EmulatorState:
    """Run one fetch-decode-execute cycle and tick the timers.

    While FX0A is waiting and no key is held, the instruction is not
    re-executed. In legacy timer mode the timers only tick after an F-family
    instruction completes. With ``timers=False`` the timers are left for the
    host to tick at its own cadence.
    """
    if state.waiting_for_key and pressed_key(state.keypad) is None:
        if not timers or state.legacy_timers:
            return state
        return tick_timers(state)

    instruction = fetch(state)
    state = execute(state, instruction)

    if not timers:
        return state
    if not state.legacy_timers:
        return tick_timers(state)
    if decode(instruction).opcode == TIMER_FAMILY and not state.waiting_for_key:
        return tick_timers(state)
    return state


def load_program(state: EmulatorState, data: bytes) -> EmulatorState:
    """Load ROM bytes into CHIP-8 memory starting at 0x200."""
    return state.replace(memory=load(state.memory, data))


def read_rom(filename: str) -> bytes:
    """Read a raw ROM image from disk."""
    try:
        with open(filename, 'rb') as f:
            return f.read()
    except OSError as e:
        raise RomReadError(str(filename), e.strerror or str(e)) from e


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM file into CHIP-8 memory starting at 0x200."""
    return load_program(state, read_rom(filename))
