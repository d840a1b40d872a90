# alphabet.py
from __future__ import annotations

import string
from collections.abc import Sequence
from typing import Dict, List, Tuple

from debug import Debug
from errors import InvalidLetter, InvalidPermutation, InvalidReflector

debug = Debug()

ALPHABET: str = string.ascii_uppercase
SIZE: int = len(ALPHABET)

_alpha_to_index: Dict[str, int] = {ch: i for i, ch in enumerate(ALPHABET)}
# only ASCII a-z fold; str.upper() would also turn "ı" into "I"
_fold: Dict[str, str] = {ch: ch for ch in ALPHABET}
_fold.update((ch, ch.upper()) for ch in string.ascii_lowercase)

Permutation = Tuple[int, ...]


# ── letters ↔ signal indices ─────────────────────────────────────
def index_of(letter: str) -> int:
    """Letter → integer signal. Callers normalise case beforehand."""
    if not isinstance(letter, str):
        raise InvalidLetter(f"Expected a letter, got {letter!r}")
    try:
        return _alpha_to_index[letter]
    except KeyError:
        raise InvalidLetter(f"Invalid character {letter!r} for alphabet {ALPHABET}")


def letter_at(index: int) -> str:
    """Integer signal → letter."""
    if not is_index(index):
        raise InvalidLetter(f"Signal {index!r} out of range 0–{SIZE - 1}")
    return ALPHABET[index]


def is_index(value) -> bool:
    # bool is an int subclass; True must not pass as signal 1
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < SIZE


def fold_case(letter):
    """Upper-case ASCII a–z; anything else comes back unchanged."""
    if isinstance(letter, str):
        return _fold.get(letter, letter)
    return letter


# ── permutations ─────────────────────────────────────────────────
def parse_permutation(wiring: str | Sequence[int]) -> Permutation:
    """Return *wiring* as a tuple of indices.

    Accepts a 26-letter string such as ``"EKMFLGDQVZNTOWYHXUSPAIBRCJ"`` or a
    sequence of 26 ints. Raises InvalidPermutation unless every index 0–25
    appears exactly once.
    """
    if isinstance(wiring, str):
        text = "".join(fold_case(ch) for ch in wiring)
        bad = [ch for ch in text if ch not in _alpha_to_index]
        if bad:
            raise InvalidPermutation(f"Wiring {wiring!r} contains non-alphabet symbols {bad}")
        perm = tuple(_alpha_to_index[ch] for ch in text)
    else:
        try:
            items = list(wiring)
        except TypeError:
            raise InvalidPermutation(f"Wiring must be a string or a sequence of ints, got {wiring!r}")
        if not all(is_index(i) for i in items):
            raise InvalidPermutation(f"Wiring {items!r} must hold ints in 0–{SIZE - 1}")
        perm = tuple(items)

    if len(perm) != SIZE:
        raise InvalidPermutation(f"Wiring must have {SIZE} entries, got {len(perm)}")
    if sorted(perm) != list(range(SIZE)):
        dupes = sorted({letter_at(i) for i in perm if perm.count(i) > 1})
        raise InvalidPermutation(f"Wiring is not a permutation (repeated: {''.join(dupes)})")

    if debug.is_on("alphabet"):
        debug.log("alphabet", f"parsed wiring {to_letters(perm)}")
    return perm


def to_letters(perm: Sequence[int]) -> str:
    return "".join(ALPHABET[i] for i in perm)


def invert(perm: Sequence[int]) -> Permutation:
    """Inverse table: ``invert(p)[p[i]] == i``."""
    inverse: List[int] = [0] * len(perm)
    for i, j in enumerate(perm):
        inverse[j] = i
    return tuple(inverse)


def compose(first: Sequence[int], second: Sequence[int]) -> Permutation:
    """Apply *first*, then *second*."""
    return tuple(second[first[i]] for i in range(len(first)))


def fixed_points(perm: Sequence[int]) -> List[int]:
    return [i for i, j in enumerate(perm) if i == j]


def is_involution(perm: Sequence[int]) -> bool:
    return all(perm[perm[i]] == i for i in range(len(perm)))


def validate_reflector(perm: Sequence[int]) -> None:
    """Raise InvalidReflector unless *perm* pairs every letter with another."""
    fixed = fixed_points(perm)
    if fixed:
        raise InvalidReflector(
            f"Reflector maps {', '.join(letter_at(i) for i in fixed)} to itself"
        )
    if not is_involution(perm):
        raise InvalidReflector("Reflector wiring must be an involution (w[w[i]] == i)")


# ── text helpers ─────────────────────────────────────────────────
def preprocess_message(msg: str) -> str:
    """Upper‑case ASCII letters and drop everything else."""
    return "".join(_fold[ch] for ch in msg if ch in _fold)


def group_blocks(text: str, block: int = 5) -> str:
    if block <= 0:
        return text
    return " ".join(text[i : i + block] for i in range(0, len(text), block))
