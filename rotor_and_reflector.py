# rotor_and_reflector.py
from __future__ import annotations

from collections.abc import Sequence

from alphabet import (
    SIZE,
    invert,
    is_index,
    letter_at,
    parse_permutation,
    to_letters,
    validate_reflector,
)
from debug import Debug
from errors import InvalidOffset

debug = Debug()


class Rotor:
    def __init__(self, wiring: str | Sequence[int], offset: int = 0) -> None:
        # integer lookup tables, fixed for the rotor's lifetime
        self._fwd = parse_permutation(wiring)
        self._rev = invert(self._fwd)
        self.offset = offset

    @property
    def wiring(self) -> str:
        return to_letters(self._fwd)

    @property
    def offset(self) -> int:
        return self._offset

    @offset.setter
    def offset(self, value: int) -> None:
        if not is_index(value):
            raise InvalidOffset(f"Rotor offset must be an int in 0–{SIZE - 1}, got {value!r}")
        self._offset = value

    @property
    def window(self) -> str:
        """Letter shown in the rotor window."""
        return letter_at(self._offset)

    # ── stepping --------------------------------------------------
    def advance(self) -> bool:
        """Advance one and return True on *roll-over* (new offset is 0)."""
        self._offset = (self._offset + 1) % SIZE
        if debug.is_on("rotor"):
            debug.log("rotor", f"{self.wiring[:4]}… offset -> {self._offset}")
        return self._offset == 0

    # ── signal paths ---------------------------------------------
    def forward(self, sig: int) -> int:
        shift = (sig + self._offset) % SIZE
        mapped = self._fwd[shift]
        return (mapped - self._offset) % SIZE

    def backward(self, sig: int) -> int:
        shift = (sig + self._offset) % SIZE
        mapped = self._rev[shift]
        return (mapped - self._offset) % SIZE

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        return f"<Rotor {self.wiring} pos={self.window}>"


class Reflector:
    def __init__(self, wiring: str | Sequence[int]) -> None:
        perm = parse_permutation(wiring)
        # involution property (w[i] = j ⇒ w[j] = i) and no self-maps
        validate_reflector(perm)
        self._map = perm

    @property
    def wiring(self) -> str:
        return to_letters(self._map)

    def reflect(self, sig: int) -> int:
        mapped = self._map[sig]
        if debug.is_on("reflector"):
            debug.log("reflector", f"{letter_at(sig)}->{letter_at(mapped)}")
        return mapped

    def __repr__(self) -> str:
        return f"<Reflector {self.wiring}>"
