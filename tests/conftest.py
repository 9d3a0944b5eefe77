"""
Pytest fixtures for the weather engine test suite.

Provides seeded random streams, calendar callbacks, and sample climate
configuration.
"""

import pytest

from tabletop_weather.data_models import SeasonClimate, ZoneConfig
from tabletop_weather.rng import seeded_random


# =============================================================================
# RANDOMNESS FIXTURES
# =============================================================================


@pytest.fixture
def seeded_rng():
    """Provide a seeded random stream for reproducible tests."""
    return seeded_random(42)


@pytest.fixture
def rng_factory():
    """Provide a factory for seeded random streams."""
    return seeded_random


class SequenceRng:
    """Random stream that replays fixed values, for exercising exact branches."""

    def __init__(self, *values: float):
        self._values = list(values)
        self.calls = 0

    def __call__(self) -> float:
        value = self._values[self.calls % len(self._values)]
        self.calls += 1
        return value


@pytest.fixture
def fixed_rng():
    """Provide a factory for random streams that replay given values."""
    return SequenceRng


# =============================================================================
# CALENDAR FIXTURES
# =============================================================================


@pytest.fixture
def days_in_month():
    """A calendar of twelve 30-day months."""

    def get_days_in_month(month, year):
        return 30

    get_days_in_month.months_per_year = 12
    return get_days_in_month


# =============================================================================
# CLIMATE FIXTURES
# =============================================================================


@pytest.fixture
def summer_climate():
    """A season climate with two presets."""
    return SeasonClimate.from_dict(
        {
            "temperatures": {"min": 20, "max": 30},
            "presets": [{"id": "clear", "chance": 30}, {"id": "rain", "chance": 20}],
        }
    )


@pytest.fixture
def clear_only_climate():
    """A season climate that can only produce clear weather."""
    return SeasonClimate.from_dict(
        {"temperatures": {"min": 20, "max": 30}, "presets": [{"id": "clear", "chance": 100}]}
    )


@pytest.fixture
def valley_zone():
    """A zone with presets, a summer override and prevailing winds."""
    return ZoneConfig.from_dict(
        {
            "id": "valley",
            "name": "Green Valley",
            "presets": [
                {"id": "clear", "enabled": True, "chance": 40},
                {"id": "rain", "enabled": True, "chance": 30},
                {"id": "fog", "enabled": False, "chance": 30},
            ],
            "seasonOverrides": {
                "Summer": {
                    "presets": [{"id": "clear", "chance": "+10"}],
                    "temperatures": {"min": "2+", "max": "2-"},
                }
            },
            "temperatures": {
                "Winter": {"min": -10, "max": 0},
                "_default": {"min": 8, "max": 18},
            },
            "windSpeedRange": {"min": 0, "max": 3},
            "windDirections": {"W": 3, "SW": 1},
        }
    )
