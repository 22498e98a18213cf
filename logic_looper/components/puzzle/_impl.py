"""
Seeded PRNG and date seeding.

Output must be bit-for-bit identical on every platform for the same seed and
call sequence: two processes looking at the same date have to show the same
puzzle. All arithmetic is therefore done on Python ints with explicit 32-bit
masking; floats only appear as the final seed / 2**32 division, which is exact.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

_MULTIPLIER = 1664525
_INCREMENT = 1013904223
_MODULUS = 2**32

DEFAULT_NAMESPACE = "logic-looper"
DEFAULT_SEED_VERSION = "v1"


class SeededRandom:
    """Linear congruential generator (Numerical Recipes constants)."""

    def __init__(self, seed: int) -> None:
        self.seed = seed % _MODULUS

    def next(self) -> float:
        """Advance the state and return a float in [0, 1)."""
        self.seed = (self.seed * _MULTIPLIER + _INCREMENT) % _MODULUS
        return self.seed / _MODULUS

    def next_int(self, min_value: int, max_value: int) -> int:
        """Integer in [min_value, max_value], both inclusive."""
        return int(self.next() * (max_value - min_value + 1)) + min_value

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Fisher-Yates shuffle of a copy; the input is left untouched."""
        arr = list(items)
        for i in range(len(arr) - 1, 0, -1):
            j = self.next_int(0, i)
            arr[i], arr[j] = arr[j], arr[i]
        return arr


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def hash_string(text: str) -> int:
    """
    Polynomial rolling hash (h = h*31 + code), signed 32-bit wrap, absolute value.

    Characters are taken as UTF-16 code units so non-BMP characters hash the
    same way a browser client would hash them.
    """
    h = 0
    units = text.encode("utf-16-le")
    for i in range(0, len(units), 2):
        code = units[i] | (units[i + 1] << 8)
        h = _to_int32(h * 31 + code)
    return abs(h)


def seed_string(date_str: str, namespace: str = DEFAULT_NAMESPACE, version: str = DEFAULT_SEED_VERSION) -> str:
    return f"{namespace}-{date_str}-{version}"


def date_seed(date_str: str, namespace: str = DEFAULT_NAMESPACE, version: str = DEFAULT_SEED_VERSION) -> int:
    """Seed for the given ISO date string."""
    return hash_string(seed_string(date_str, namespace, version))
