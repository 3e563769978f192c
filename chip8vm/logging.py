"""Console logging utilities for chip8vm sessions.

Provides a levelled console logger, an emulator-specific subclass that knows
how to report ROM loads, beeps, errors and opcode traces, and a tqdm progress
bar for long headless runs.
"""

import time
import sys
from typing import Optional

from tqdm import tqdm

from chip8vm.disassemble import disassemble

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
}
RESET = "\033[0m"


class ConsoleLogger:
    """Levelled console logger.

    Lines go through ``tqdm.write`` so they print above a running progress
    bar instead of tearing it.
    """

    def __init__(
        self,
        name: str = "chip8vm",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.log_level = log_level.upper()
        if self.log_level not in LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")
        self.use_colors = use_colors and sys.stdout.isatty()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def enabled(self, level: str) -> bool:
        return LEVELS.index(level) >= LEVELS.index(self.log_level)

    def _format_message(self, level: str, message: str) -> str:
        timestamp = f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        level_str = f"[{level:>7s}]"
        if self.use_colors:
            level_str = f"{LEVEL_COLORS[level]}{level_str}{RESET}"
        return f"{timestamp}{level_str}[{self.name}] {message}"

    def log(self, level: str, message: str):
        if self.enabled(level):
            tqdm.write(self._format_message(level, message), file=sys.stdout)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)


class EmulatorLogger(ConsoleLogger):
    """Logger for emulation sessions.

    Opcode tracing happens at DEBUG level only; callers should check
    ``tracing`` before paying for a fetch just to log it.
    """

    def __init__(self, name: str = "chip8vm", **kwargs):
        super().__init__(name, **kwargs)

    @property
    def tracing(self) -> bool:
        return self.enabled("DEBUG")

    def log_rom_loaded(self, size: int, source: Optional[str] = None):
        origin = f" from {source}" if source else ""
        self.info(f"Loaded ROM{origin}: {size} bytes")

    def log_step(self, pc: int, instruction: int):
        self.debug(f"0x{pc:03X}: {instruction:04X}  {disassemble(instruction)}")

    def log_beep(self):
        self.info("BEEP!")

    def log_error(self, error: Exception):
        self.error(f"{type(error).__name__}: {error}")


def build_progress_bar(n: int, desc: str = "Emulating", **kwargs) -> tqdm:
    """Build a tqdm progress bar counting emulator steps."""
    return tqdm(total=n, desc=desc, unit="step", **kwargs)
