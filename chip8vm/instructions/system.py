"""CHIP-8 system instructions (0x0xxx)."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.display import clear
from chip8vm.errors import UnrecognizedOpcodeError
from chip8vm.stack import pop
from chip8vm.instructions.common import advance


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return advance(state.replace(display=clear(state.display)))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine to the instruction after the call."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=jnp.astype(address + 2, jnp.uint16))


def execute_system_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch system instructions."""
    if instruction.raw == 0x00E0:
        return execute_clear_screen(state, instruction)
    if instruction.raw == 0x00EE:
        return execute_return(state, instruction)
    raise UnrecognizedOpcodeError(instruction.raw)
