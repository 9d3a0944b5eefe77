"""
Deterministic random number streams for weather generation.

Every weather draw goes through a zero-argument callable returning a float
in [0, 1). Seeded streams use mulberry32 so that a given seed reproduces
the same weather on every machine:
- Same seed, same infinite sequence
- Nearby seeds are decorrelated by the avalanche mix
- Dates map to seeds without any external bookkeeping
"""

from __future__ import annotations

import random
from typing import Callable, Optional

from tabletop_weather.data_models import WeatherEngineError

RandomFn = Callable[[], float]

_MASK_32 = 0xFFFFFFFF
_GOLDEN_GAMMA = 0x6D2B79F5


class SeedError(WeatherEngineError, TypeError):
    """Raised when a seed is not an integer."""


def _imul(a: int, b: int) -> int:
    """32-bit integer multiply, wrapping like C unsigned arithmetic."""
    return (a * b) & _MASK_32


class Mulberry32:
    """
    Seeded mulberry32 stream.

    Instances are callable and expose random() so they can stand in for
    random.random wherever a plain float source is expected.

    Usage:
        rng = Mulberry32(20240515)
        roll = rng()  # 0.0 <= roll < 1.0
    """

    def __init__(self, seed: int):
        self._state = seed & _MASK_32
        self._draws = 0

    def random(self) -> float:
        """Return the next float in [0.0, 1.0)."""
        self._state = (self._state + _GOLDEN_GAMMA) & _MASK_32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK_32
        self._draws += 1
        return ((t ^ (t >> 14)) & _MASK_32) / 4294967296

    __call__ = random

    @property
    def draw_count(self) -> int:
        """Number of values drawn from this stream so far."""
        return self._draws


def seeded_random(seed: int) -> RandomFn:
    """
    Create a reproducible random stream for a seed.

    Args:
        seed: Integer seed (reduced to 32 bits)

    Returns:
        Zero-argument callable returning floats in [0, 1)

    Raises:
        SeedError: If seed is not an int
    """
    _check_seed(seed)
    return Mulberry32(seed)


def date_seed(year: int, month: int, day: int) -> int:
    """
    Derive a seed from a calendar date.

    Positional encoding year*10000 + month*100 + day, so weather for a given
    date is the same every time it is generated.
    """
    return year * 10000 + month * 100 + day


def resolve_rng(seed: Optional[int] = None) -> RandomFn:
    """
    Get the random stream for an optional seed.

    None means a one-off, non-reproducible draw using the process-wide
    generator. Anything other than an int or None fails fast.
    """
    if seed is None:
        return random.random
    return seeded_random(seed)


def _check_seed(seed: object) -> None:
    # bool is an int subclass
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise SeedError(f"Seed must be an integer, got {type(seed).__name__}: {seed!r}")
