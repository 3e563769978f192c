"""CHIP-8 session: the composition root handed to the host."""

from typing import Mapping, Optional

import jax
import numpy as np

from chip8vm.state import EmulatorState, create_state
from chip8vm.emulator import step, fetch, tick_timers, load_program, read_rom
from chip8vm.errors import Chip8Error, RomNotLoadedError
from chip8vm.keypad import set_key_state, release_all
from chip8vm import display as display_ops
from chip8vm import sound as sound_ops
from chip8vm.logging import EmulatorLogger, build_progress_bar


class System:
    """One emulation session.

    Owns the current ``EmulatorState`` and replaces it with the successor
    state after every successful operation. Operations that raise leave the
    session exactly as it was.

    Example:
        ```python
        system = System()
        system.load_rom("roms/PONG")
        while running:
            system.set_keys(host_keys)
            system.step()
            if system.redraw:
                draw(system.frame)
                system.acknowledge_frame()
        ```
    """

    def __init__(
        self,
        seed: int = 0,
        legacy_timers: bool = False,
        logger: Optional[EmulatorLogger] = None,
    ):
        """
        Args:
            seed: Seed for the CXNN random number generator
            legacy_timers: Tick timers only after F-family instructions
            logger: Session logger, defaults to a warnings-only EmulatorLogger
        """
        self.seed = seed
        self.legacy_timers = legacy_timers
        self.logger = logger if logger is not None else EmulatorLogger(log_level="WARNING")
        self._program: Optional[bytes] = None
        self.state: EmulatorState = self._initial_state()

    def _initial_state(self) -> EmulatorState:
        return create_state(jax.random.PRNGKey(self.seed), legacy_timers=self.legacy_timers)

    @property
    def loaded(self) -> bool:
        """Whether a program is loaded and the session can step."""
        return self._program is not None

    def reset(self):
        """Re-run initialisation and reload the current program, if any."""
        state = self._initial_state()
        if self._program is not None:
            state = load_program(state, self._program)
        self.state = state

    def load_program(self, data: bytes, source: Optional[str] = None):
        """Start a fresh session running ``data``.

        Raises:
            RomTooLargeError: ROM exceeds 3584 bytes; the session is unchanged.
        """
        data = bytes(data)
        self.state = load_program(self._initial_state(), data)
        self._program = data
        self.logger.log_rom_loaded(len(data), source)

    def load_rom(self, path: str):
        """Read a ROM file and load it.

        Raises:
            RomReadError: File could not be read.
            RomTooLargeError: ROM exceeds 3584 bytes.
        """
        self.load_program(read_rom(path), source=str(path))

    def step(self, timers: bool = True):
        """Execute one instruction and, unless ``timers`` is False, tick the timers."""
        if not self.loaded:
            raise RomNotLoadedError()

        previous = self.state
        try:
            if self.logger.tracing and not previous.waiting_for_key:
                self.logger.log_step(int(previous.pc), fetch(previous))
            self._commit(step(previous, timers=timers))
        except Chip8Error as e:
            self.logger.log_error(e)
            raise

    def tick_timers(self):
        """Count the delay and sound timers down once, at the host's 60 Hz cadence."""
        self._commit(tick_timers(self.state))

    def run_frame(self, n_steps: int):
        """Run one host frame: ``n_steps`` instructions, then one timer tick.

        In legacy timer mode the instructions tick the timers themselves and
        no extra tick is added.
        """
        for _ in range(n_steps):
            self.step(timers=self.legacy_timers)
        if not self.legacy_timers:
            self.tick_timers()

    def _commit(self, state: EmulatorState):
        beep_edge = bool(state.sound.beep) and not bool(self.state.sound.beep)
        self.state = state
        if beep_edge:
            self.logger.log_beep()

    def run(self, n_steps: int, progress: bool = False):
        """Step ``n_steps`` times, optionally with a progress bar."""
        if not progress:
            for _ in range(n_steps):
                self.step()
            return

        with build_progress_bar(n_steps) as bar:
            for _ in range(n_steps):
                self.step()
                bar.update(1)

    def set_key_state(self, index: int, pressed: bool):
        """Set one key.

        Raises:
            InvalidKeyIndexError: index outside 0x0-0xF.
        """
        self.state = self.state.replace(keypad=set_key_state(self.state.keypad, index, pressed))

    def set_keys(self, pressed: Mapping[int, bool]):
        """Overwrite the whole keypad; keys absent from ``pressed`` are released."""
        keypad = release_all(self.state.keypad)
        for index, is_down in pressed.items():
            keypad = set_key_state(keypad, index, is_down)
        self.state = self.state.replace(keypad=keypad)

    @property
    def frame(self) -> np.ndarray:
        """Read-only copy of the 2048-cell framebuffer."""
        frame = np.array(self.state.display.frame)
        frame.setflags(write=False)
        return frame

    @property
    def redraw(self) -> bool:
        return bool(self.state.display.redraw)

    def acknowledge_frame(self):
        self.state = self.state.replace(display=display_ops.acknowledge(self.state.display))

    @property
    def beep(self) -> bool:
        return bool(self.state.sound.beep)

    def acknowledge_beep(self):
        self.state = self.state.replace(sound=sound_ops.acknowledge(self.state.sound))

    @property
    def registers(self) -> np.ndarray:
        return np.array(self.state.V)

    @property
    def pc(self) -> int:
        return int(self.state.pc)

    @property
    def index(self) -> int:
        return int(self.state.I)

    @property
    def delay_timer(self) -> int:
        return int(self.state.delay_timer)

    @property
    def sound_timer(self) -> int:
        return int(self.state.sound.timer)
