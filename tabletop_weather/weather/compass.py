"""
Compass points and the wind speed scale.
"""

from dataclasses import dataclass
from typing import Optional


# 16-point compass, degrees clockwise from north
COMPASS_DIRECTIONS: dict[str, float] = {
    "N": 0.0,
    "NNE": 22.5,
    "NE": 45.0,
    "ENE": 67.5,
    "E": 90.0,
    "ESE": 112.5,
    "SE": 135.0,
    "SSE": 157.5,
    "S": 180.0,
    "SSW": 202.5,
    "SW": 225.0,
    "WSW": 247.5,
    "W": 270.0,
    "WNW": 292.5,
    "NW": 315.0,
    "NNW": 337.5,
}

COMPASS_ORDER: tuple[str, ...] = tuple(COMPASS_DIRECTIONS)


@dataclass(frozen=True)
class WindSpeed:
    """
    One step of the 0-5 wind scale.

    Attributes:
        value: Scale value (0-5)
        key: Short identifier
        label: Display label
        kph: Representative speed in km/h
    """

    value: int
    key: str
    label: str
    kph: int


WIND_SPEEDS: dict[int, WindSpeed] = {
    0: WindSpeed(0, "calm", "Calm", 1),
    1: WindSpeed(1, "light", "Light", 19),
    2: WindSpeed(2, "moderate", "Moderate", 38),
    3: WindSpeed(3, "strong", "Strong", 61),
    4: WindSpeed(4, "severe", "Severe", 88),
    5: WindSpeed(5, "extreme", "Extreme", 118),
}


def compass_degrees(compass_id: str) -> Optional[float]:
    """Degrees for a compass id ("NE" -> 45.0), None when unknown."""
    return COMPASS_DIRECTIONS.get(compass_id.upper())


def get_wind_direction_label(degrees: Optional[float]) -> Optional[str]:
    """Nearest 16-point compass id for a bearing (e.g., 50 -> "NE")."""
    if degrees is None:
        return None
    index = int((degrees % 360) / 22.5 + 0.5) % 16
    return COMPASS_ORDER[index]


def get_wind_speed_label(speed: int) -> str:
    """Display label for a 0-5 wind speed, clamped to the scale."""
    return WIND_SPEEDS[max(0, min(5, int(speed)))].label
