"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.constants import FONT_START, FONT_GLYPH_SIZE, ADDRESS_MASK
from chip8vm.errors import UnrecognizedOpcodeError
from chip8vm.keypad import pressed_key
from chip8vm.memory import read_block, write_block, write_cells
from chip8vm.sound import set_timer
from chip8vm.instructions.common import advance, register, set_register, set_flag


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return advance(set_register(state, instruction.x, int(state.delay_timer)))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return advance(state.replace(delay_timer=state.V[instruction.x]))


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return advance(state.replace(sound=set_timer(state.sound, register(state, instruction.x))))


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register, VF = 1 when the result leaves 12-bit range."""
    new_i = int(state.I) + register(state, instruction.x)
    state = state.replace(I=jnp.astype(new_i & ADDRESS_MASK, jnp.uint16))
    return advance(set_flag(state, int(new_i > ADDRESS_MASK)))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    Without a pressed key the PC stays put and the state is marked as waiting,
    so the host's next step polls the keypad again.
    """
    key = pressed_key(state.keypad)
    if key is None:
        return state.replace(waiting_for_key=True)
    state = set_register(state, instruction.x, key)
    return advance(state.replace(waiting_for_key=False))


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for the low nibble of VX."""
    font_address = FONT_START + (register(state, instruction.x) & 0xF) * FONT_GLYPH_SIZE
    return advance(state.replace(I=jnp.astype(font_address, jnp.uint16)))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = register(state, instruction.x)
    digits = [value // 100, (value // 10) % 10, value % 10]
    return advance(state.replace(memory=write_block(state.memory, state.I, digits)))


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I, then I += X + 1."""
    count = instruction.x + 1
    memory = write_block(state.memory, state.I, state.V[:count])
    return advance(state.replace(memory=memory, I=jnp.astype(state.I + count, jnp.uint16)))


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I, then I += X + 1."""
    count = instruction.x + 1
    values = read_block(state.memory, state.I, count)
    new_V = write_cells(state.V, 0, values)
    return advance(state.replace(V=new_V, I=jnp.astype(state.I + count, jnp.uint16)))


MISC_INSTRUCTIONS = {
    0x07: execute_get_delay_timer,
    0x0A: execute_wait_for_key,
    0x15: execute_set_delay_timer,
    0x18: execute_set_sound_timer,
    0x1E: execute_add_to_index,
    0x29: execute_font_character,
    0x33: execute_bcd_conversion,
    0x55: execute_store_registers,
    0x65: execute_load_registers,
}


def execute_misc_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch misc instructions on the low byte."""
    handler = MISC_INSTRUCTIONS.get(instruction.nn)
    if handler is None:
        raise UnrecognizedOpcodeError(instruction.raw)
    return handler(state, instruction)
