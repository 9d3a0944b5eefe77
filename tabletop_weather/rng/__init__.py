"""
Deterministic randomness for the weather engine.
"""

from tabletop_weather.rng.seeded_rng import (
    Mulberry32,
    RandomFn,
    SeedError,
    date_seed,
    resolve_rng,
    seeded_random,
)
from tabletop_weather.rng.weighted_select import weighted_select

__all__ = [
    "Mulberry32",
    "RandomFn",
    "SeedError",
    "date_seed",
    "resolve_rng",
    "seeded_random",
    "weighted_select",
]
