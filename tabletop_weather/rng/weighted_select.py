"""
Weighted selection from a table of outcome weights.
"""

from __future__ import annotations

import random
from typing import Mapping, Optional, TypeVar

from tabletop_weather.rng.seeded_rng import RandomFn

K = TypeVar("K")


def weighted_select(
    weights: Mapping[K, float],
    rng: Optional[RandomFn] = None,
) -> Optional[K]:
    """
    Pick one outcome from a weight table using a single draw.

    Weights are walked in iteration order. A table whose total is not
    positive yields its first outcome; floating point rounding that
    exhausts every subtraction yields the last outcome.

    Args:
        weights: Mapping of outcome id to non-negative weight
        rng: Random stream; non-seeded randomness when None

    Returns:
        Selected outcome id, or None for an empty table
    """
    if not weights:
        return None

    entries = list(weights.items())
    total = sum(weight for _, weight in entries)
    if total <= 0:
        return entries[0][0]

    draw = rng if rng is not None else random.random
    roll = draw() * total

    for outcome, weight in entries:
        roll -= weight
        if roll <= 0:
            return outcome

    return entries[-1][0]
