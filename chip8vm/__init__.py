"""CHIP-8 virtual machine package."""

from chip8vm.state import EmulatorState, create_state
from chip8vm.emulator import execute, fetch, step, load_program, load_rom
from chip8vm.decode import DecodedInstruction, decode
from chip8vm.disassemble import disassemble
from chip8vm.system import System
from chip8vm.errors import (
    Chip8Error,
    UnrecognizedOpcodeError,
    RomTooLargeError,
    RomReadError,
    RomNotLoadedError,
    InvalidKeyIndexError,
    MemoryAccessError,
    StackOverflowError,
    StackUnderflowError,
)
from chip8vm.constants import *
from chip8vm.rendering import display_to_rgb, create_color_scheme

__all__ = [
    "EmulatorState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "load_program",
    "load_rom",
    "DecodedInstruction",
    "decode",
    "disassemble",
    "System",
    "Chip8Error",
    "UnrecognizedOpcodeError",
    "RomTooLargeError",
    "RomReadError",
    "RomNotLoadedError",
    "InvalidKeyIndexError",
    "MemoryAccessError",
    "StackOverflowError",
    "StackUnderflowError",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "display_to_rgb",
    "create_color_scheme",
]
