"""CHIP-8 control flow instructions."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.constants import ADDRESS_MASK
from chip8vm.errors import UnrecognizedOpcodeError
from chip8vm.keypad import is_pressed
from chip8vm.stack import push
from chip8vm.instructions.common import advance, register


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.astype(instruction.nnn, jnp.uint16))


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn, check_n: bool = False):
    """Factory for skip instructions.

    With ``check_n`` the low nibble must be zero (5XY0, 9XY0).
    """
    def skip_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        if check_n and instruction.n != 0:
            raise UnrecognizedOpcodeError(instruction.raw)
        return advance(state, skip=bool(condition_fn(state, instruction)))
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: register(state, inst.x) == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: register(state, inst.x) != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: register(state, inst.x) == register(state, inst.y),
    check_n=True,
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: register(state, inst.x) != register(state, inst.y),
    check_n=True,
)


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - Jump to address NNN + V0."""
    jump_address = (instruction.nnn + register(state, 0)) & ADDRESS_MASK
    return state.replace(pc=jnp.astype(jump_address, jnp.uint16))


def execute_skip_if_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """EX9E/EXA1 - Skip if key VX pressed/not pressed."""
    if instruction.nn not in (0x9E, 0xA1):
        raise UnrecognizedOpcodeError(instruction.raw)

    key_pressed = is_pressed(state.keypad, register(state, instruction.x))
    is_not_instruction = instruction.nn == 0xA1
    return advance(state, skip=key_pressed ^ is_not_instruction)
