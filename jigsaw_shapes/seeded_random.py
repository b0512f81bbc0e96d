"""Deterministic pseudo-random source keyed by a string or number seed.

The seed text is hashed into a 32-bit state (FNV-1a over UTF-16 code units)
and every draw advances the state through a mulberry32 mixing step. Two
sources built from the same seed yield identical sequences, so each puzzle
seam can own an independent stream.
"""

from typing import Iterator, List, Sequence, TypeVar, Union

T = TypeVar("T")

Seed = Union[str, int, float]

_MASK32 = 0xFFFFFFFF
_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619
_GOLDEN_STEP = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    """32-bit integer multiply, truncated to an unsigned result."""
    return (a * b) & _MASK32


def _utf16_units(text: str) -> Iterator[int]:
    data = text.encode("utf-16-le")
    for index in range(0, len(data), 2):
        yield data[index] | (data[index + 1] << 8)


def seed_text(seed: Seed) -> str:
    """Render a seed the way it is keyed, dropping a trailing ``.0`` on whole floats."""
    if isinstance(seed, float) and seed.is_integer():
        return str(int(seed))
    return str(seed)


def hash_seed(seed: Seed) -> int:
    """Hash a seed into an unsigned 32-bit integer (FNV-1a)."""
    value = _FNV_OFFSET
    for unit in _utf16_units(seed_text(seed)):
        value ^= unit
        value = _imul(value, _FNV_PRIME)
    return value


class SeededRandom:
    """Repeatable stream of floats in [0, 1)."""

    def __init__(self, seed: Seed):
        self.seed = seed
        self._state = hash_seed(seed) or 1

    def random(self) -> float:
        """Draw the next value in [0, 1)."""
        self._state = (self._state + _GOLDEN_STEP) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296

    __call__ = random

    def uniform(self, low: float, high: float) -> float:
        """Draw a value in [low, high)."""
        return low + (high - low) * self.random()

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Return a Fisher-Yates shuffled copy of ``items``."""
        return shuffled(items, self.random)


def shuffled(items: Sequence[T], draw) -> List[T]:
    """Fisher-Yates shuffle of a copy of ``items`` using ``draw()`` in [0, 1)."""
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = int(draw() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result
