# machine.py  ─────────────────────────────────────────────────────────
from __future__ import annotations

import threading
from collections.abc import Sequence
from typing import TYPE_CHECKING, List, Tuple

from alphabet import fold_case, index_of, is_index, letter_at
from debug import Debug
from errors import ConfigError, InvalidLetter, InvalidRotorIndex
from rotor_and_reflector import Reflector, Rotor

if TYPE_CHECKING:
    from config import MachineConfig

debug = Debug()

ROTOR_COUNT = 3
SLOW, MIDDLE, FAST = range(ROTOR_COUNT)


class Machine:
    """Three rotors (slow, middle, fast) in front of a fixed reflector.

    Each keystroke first steps the rotors like an odometer, then sends the
    signal right-to-left through the rotors, off the reflector and back
    left-to-right. The same settings therefore encipher and decipher.
    """

    def __init__(
        self,
        rotor_wirings: Sequence[str | Sequence[int]],
        reflector_wiring: str | Sequence[int],
        initial_offsets: Sequence[int] = (0, 0, 0),
    ) -> None:
        if len(rotor_wirings) != ROTOR_COUNT:
            raise ConfigError(f"Need exactly {ROTOR_COUNT} rotor wirings, got {len(rotor_wirings)}")
        if len(initial_offsets) != ROTOR_COUNT:
            raise ConfigError(f"Need exactly {ROTOR_COUNT} initial offsets, got {len(initial_offsets)}")

        self.rotors: List[Rotor] = [
            Rotor(wiring, offset) for wiring, offset in zip(rotor_wirings, initial_offsets)
        ]
        self.reflector = Reflector(reflector_wiring)
        self.initial_offsets: Tuple[int, ...] = tuple(initial_offsets)
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, cfg: "MachineConfig") -> "Machine":
        return cls(cfg.rotor_wirings, cfg.reflector_wiring, cfg.initial_offsets)

    # ── position helpers ────────────────────────────────────────

    def get_offset(self, rotor_index: int) -> int:
        rotor = self._rotor(rotor_index)
        with self._lock:
            return rotor.offset

    def set_offset(self, rotor_index: int, value: int) -> None:
        """Turn one rotor by hand. Does not step or encode."""
        rotor = self._rotor(rotor_index)
        with self._lock:
            rotor.offset = value

    def turn(self, rotor_index: int) -> int:
        """Click one rotor forward a notch, without carrying into its neighbour."""
        rotor = self._rotor(rotor_index)
        with self._lock:
            rotor.advance()
            return rotor.offset

    @property
    def offsets(self) -> Tuple[int, ...]:
        with self._lock:
            return self._offsets()

    @property
    def window(self) -> str:
        """Letters visible in the rotor windows, slow rotor first."""
        return "".join(letter_at(o) for o in self.offsets)

    def _offsets(self) -> Tuple[int, ...]:
        return tuple(r.offset for r in self.rotors)

    def set_window(self, letters: str) -> None:
        """Rotate each rotor to its visible window letter."""
        if not isinstance(letters, str) or len(letters) != ROTOR_COUNT:
            raise InvalidLetter(f"Window setting must be {ROTOR_COUNT} letters, got {letters!r}")
        offsets = [index_of(fold_case(ch)) for ch in letters]
        with self._lock:
            for rotor, offset in zip(self.rotors, offsets):
                rotor.offset = offset

    def reset(self) -> None:
        """Return every rotor to the construction-time offsets."""
        with self._lock:
            for rotor, offset in zip(self.rotors, self.initial_offsets):
                rotor.offset = offset

    # ── stepping logic  ─────────────────────────────────────────

    def step(self) -> None:
        with self._lock:
            self._step_rotors()

    def _step_rotors(self) -> None:
        """Advance rotors one key-press: fast every time, carry on roll-over."""
        slow, middle, fast = self.rotors

        if fast.advance():
            middle.advance()
        if middle.offset == 0 and fast.offset == 0:
            slow.advance()

        if debug.is_on("stepping"):
            debug.log("stepping", f"offsets {list(self._offsets())}")

    # ── signal path  ────────────────────────────────────────────

    def encode(self, signal: int) -> int:
        """Run one signal through the current rotor positions without stepping."""
        if not is_index(signal):
            raise InvalidLetter(f"Signal {signal!r} out of range 0–25")
        with self._lock:
            return self._signal_path(signal)

    def _signal_path(self, signal: int) -> int:
        for rotor in reversed(self.rotors):
            signal = rotor.forward(signal)

        signal = self.reflector.reflect(signal)

        for rotor in self.rotors:
            signal = rotor.backward(signal)
        return signal

    # ── encipher one symbol  ────────────────────────────────────

    def step_and_encode(self, letter: str) -> str:
        # validate first so a rejected key never moves a rotor
        signal = index_of(fold_case(letter))
        with self._lock:
            self._step_rotors()
            out_ch = letter_at(self._signal_path(signal))
        if debug.is_on("encipher"):
            debug.log("encipher", f"{letter_at(signal)} -> {out_ch}")
        return out_ch

    def encipher(self, text: str) -> str:
        """Key in every letter of *text*; the whole text is checked up front."""
        for ch in text:
            index_of(fold_case(ch))
        return "".join(self.step_and_encode(ch) for ch in text)

    # ── helpers ─────────────────────────────────────────────────

    def _rotor(self, rotor_index: int) -> Rotor:
        if (
            not isinstance(rotor_index, int)
            or isinstance(rotor_index, bool)
            or not 0 <= rotor_index < ROTOR_COUNT
        ):
            raise InvalidRotorIndex(f"Rotor index must be 0–{ROTOR_COUNT - 1}, got {rotor_index!r}")
        return self.rotors[rotor_index]

    def __repr__(self) -> str:
        return f"<Machine window={self.window}>"
