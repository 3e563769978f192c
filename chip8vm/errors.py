"""CHIP-8 emulator errors.

Every failure the interpreter core can report derives from ``Chip8Error`` so
that a host can catch them in one place and decide whether to halt, reset or
keep stepping.
"""


class Chip8Error(Exception):
    """Base class for emulator errors."""


class UnrecognizedOpcodeError(Chip8Error):
    """Raised when a fetched word does not decode to a known instruction."""

    def __init__(self, opcode: int):
        self.opcode = opcode
        self.family = (opcode & 0xF000) >> 12
        super().__init__(f"Unknown opcode [0x{self.family:X}000]: 0x{opcode:04X}")


class RomTooLargeError(Chip8Error):
    """Raised when a ROM does not fit between 0x200 and the end of memory."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"ROM too big for memory: {size} bytes (limit {limit})")


class RomReadError(Chip8Error):
    """Raised when a ROM file cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Could not read ROM '{path}': {reason}")


class RomNotLoadedError(Chip8Error):
    """Raised when stepping a session that has no program loaded."""

    def __init__(self):
        super().__init__("No ROM loaded")


class InvalidKeyIndexError(Chip8Error):
    """Raised for key indices outside 0x0-0xF."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Invalid key index: {index}")


class MemoryAccessError(Chip8Error):
    """Raised for reads or writes outside the 4 KiB address space.

    ``address`` is the start of the faulting access and ``length`` its size
    in bytes.
    """

    def __init__(self, address: int, length: int = 1):
        self.address = address
        self.length = length
        span = f" (+{length} bytes)" if length > 1 else ""
        super().__init__(f"Memory access out of range: 0x{address:X}{span}")


class StackOverflowError(Chip8Error):
    """Raised when a call would nest deeper than the stack allows."""

    def __init__(self, depth: int):
        self.depth = depth
        super().__init__(f"Stack overflow: call depth exceeds {depth}")


class StackUnderflowError(Chip8Error):
    """Raised when returning with an empty call stack."""

    def __init__(self):
        super().__init__("Stack underflow: return with empty stack")
