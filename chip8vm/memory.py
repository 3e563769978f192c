"""CHIP-8 memory: 4 KiB of bounds-checked byte storage."""

from functools import partial

import jax
import jax.numpy as jnp
from jax import lax
from flax.struct import PyTreeNode, field

from chip8vm.constants import MEMORY_SIZE, PROGRAM_START, MAX_ROM_SIZE, FONT_START, FONT_DATA
from chip8vm.errors import MemoryAccessError, RomTooLargeError


class Memory(PyTreeNode):
    """Flat byte-addressable store backing code, data and font sprites."""
    cells: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))


@partial(jax.jit, static_argnums=2)
def read_cells(cells: jnp.ndarray, address, length: int) -> jnp.ndarray:
    return lax.dynamic_slice(cells, (address,), (length,))


@jax.jit
def write_cells(cells: jnp.ndarray, address, values: jnp.ndarray) -> jnp.ndarray:
    return lax.dynamic_update_slice(cells, values.astype(jnp.uint8), (address,))


@jax.jit
def read_word(cells: jnp.ndarray, address) -> jnp.ndarray:
    """Big-endian 16-bit word at ``address``."""
    return (cells[address].astype(jnp.uint16) << 8) | cells[address + 1]


def create_memory() -> Memory:
    """Create zeroed memory with the hex font loaded at FONT_START."""
    memory = Memory()
    return memory.replace(cells=memory.cells.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA))


def _check_range(address: int, length: int = 1):
    # Kernels clamp out-of-range slices, so every access is checked here first
    if address < 0 or address + length > MEMORY_SIZE:
        raise MemoryAccessError(address, length)


def read(memory: Memory, address) -> int:
    """Read a single byte."""
    address = int(address)
    _check_range(address)
    return int(memory.cells[address])


def write(memory: Memory, address, value) -> Memory:
    """Write a single byte, truncating value to 8 bits."""
    return write_block(memory, address, [int(value) & 0xFF])


def read_block(memory: Memory, address, length: int) -> jnp.ndarray:
    """Read ``length`` consecutive bytes starting at ``address``."""
    address = int(address)
    _check_range(address, length)
    return read_cells(memory.cells, address, length)


def write_block(memory: Memory, address, values) -> Memory:
    """Write consecutive bytes starting at ``address``."""
    address = int(address)
    values = jnp.asarray(values, dtype=jnp.uint8)
    _check_range(address, len(values))
    return memory.replace(cells=write_cells(memory.cells, address, values))


def fetch_word(memory: Memory, address) -> int:
    """Read the instruction word at ``address``."""
    address = int(address)
    _check_range(address, 2)
    return int(read_word(memory.cells, address))


def load(memory: Memory, data: bytes) -> Memory:
    """Copy a ROM image to PROGRAM_START.

    The size is checked before anything is written, so an oversized image
    leaves memory untouched.
    """
    if len(data) > MAX_ROM_SIZE:
        raise RomTooLargeError(len(data), MAX_ROM_SIZE)
    if not data:
        return memory
    rom_array = jnp.array(list(data), dtype=jnp.uint8)
    return write_block(memory, PROGRAM_START, rom_array)
