# errors.py
from __future__ import annotations


class RotorMachineError(ValueError):
    """Base class for every bad-input condition raised by the simulator."""


class InvalidPermutation(RotorMachineError):
    """A wiring table is not a bijection over the 26 letters."""


class InvalidReflector(RotorMachineError):
    """A reflector wiring is not a fixed-point-free involution."""


class InvalidLetter(RotorMachineError):
    """A letter or signal index outside the alphabet."""


class InvalidRotorIndex(RotorMachineError):
    pass


class InvalidOffset(RotorMachineError):
    pass


class ConfigError(RotorMachineError):
    """Malformed configuration document (missing field, wrong shape)."""
