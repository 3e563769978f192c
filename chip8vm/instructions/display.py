"""CHIP-8 display operations."""

from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.display import draw_sprite
from chip8vm.memory import read_block
from chip8vm.instructions.common import advance, register, set_flag


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N, VF = collision."""
    rows = read_block(state.memory, state.I, instruction.n)
    display, collision = draw_sprite(
        state.display,
        register(state, instruction.x),
        register(state, instruction.y),
        rows,
    )
    return advance(set_flag(state.replace(display=display), int(collision)))
