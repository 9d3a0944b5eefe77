"""
Climate zone templates.

Ready-made climates a calendar can copy into its own zone configuration.
Weather weights are relative (higher = more likely) and grouped by
normalized season key, with a "default" table for seasons the template
does not single out.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

from tabletop_weather.data_models import (
    DEFAULT_TEMPERATURE_RANGE,
    PresetEntry,
    TemperatureBounds,
    TemperatureRange,
    WindSpeedRange,
    ZoneConfig,
    ZoneSeasonOverride,
)
from tabletop_weather.modifiers import Modifier
from tabletop_weather.weather.presets import ALL_PRESETS

logger = logging.getLogger(__name__)

DEFAULT_SEASON_NAMES: tuple[str, ...] = ("Spring", "Summer", "Autumn", "Winter")


@dataclass(frozen=True)
class ClimateZoneTemplate:
    """
    A predefined climate.

    Attributes:
        id: Template identifier
        name: Display name
        description: Short description
        temperatures: Season name (or "_default") to temperature range
        weather: Normalized season key (or "default") to preset weights
        wind_speed_range: Unforced wind speed limits
    """

    id: str
    name: str
    description: str
    temperatures: dict[str, TemperatureRange]
    weather: dict[str, dict[str, float]]
    wind_speed_range: WindSpeedRange = field(default_factory=WindSpeedRange)


def _temps(**ranges: tuple[int, int]) -> dict[str, TemperatureRange]:
    return {
        ("_default" if name == "default" else name): TemperatureRange(min=low, max=high)
        for name, (low, high) in ranges.items()
    }


CLIMATE_ZONE_TEMPLATES: dict[str, ClimateZoneTemplate] = {
    "arctic": ClimateZoneTemplate(
        id="arctic",
        name="Arctic",
        description="Bitterly cold year-round with brief, cool summers.",
        temperatures=_temps(
            Spring=(-15, 0), Summer=(-5, 8), Autumn=(-20, -5), Winter=(-45, -20), default=(-25, -5)
        ),
        weather={
            "summer": {"clear": 3, "partly-cloudy": 3, "snow": 3, "blizzard": 2, "windy": 3, "fog": 1},
            "winter": {"blizzard": 6, "snow": 5, "overcast": 2, "windy": 4},
            "default": {"snow": 5, "blizzard": 4, "overcast": 3, "windy": 3, "clear": 1},
        },
        wind_speed_range=WindSpeedRange(min=1, max=5),
    ),
    "subarctic": ClimateZoneTemplate(
        id="subarctic",
        name="Subarctic",
        description="Long, severe winters and short, mild summers.",
        temperatures=_temps(
            Spring=(-10, 8), Summer=(5, 18), Autumn=(-5, 10), Winter=(-35, -10), default=(-10, 5)
        ),
        weather={
            "summer": {"clear": 4, "partly-cloudy": 4, "rain": 3, "snow": 1, "mist": 2},
            "winter": {"snow": 6, "blizzard": 4, "overcast": 3, "windy": 3},
            "default": {"snow": 4, "cloudy": 3, "overcast": 3, "windy": 2, "clear": 2},
        },
    ),
    "temperate": ClimateZoneTemplate(
        id="temperate",
        name="Temperate",
        description="Four distinct seasons with moderate temperatures.",
        temperatures=_temps(
            Spring=(8, 18), Summer=(18, 30), Autumn=(8, 18), Winter=(-5, 5), default=(8, 20)
        ),
        weather={
            "summer": {"clear": 6, "partly-cloudy": 4, "thunderstorm": 2, "rain": 2},
            "winter": {"snow": 5, "blizzard": 2, "fog": 2, "overcast": 3, "clear": 2},
            "spring": {"rain": 4, "drizzle": 3, "partly-cloudy": 3, "clear": 2, "mist": 2},
            "autumn": {"cloudy": 4, "rain": 3, "fog": 3, "partly-cloudy": 2, "windy": 2},
            "default": {"rain": 3, "cloudy": 3, "mist": 2, "drizzle": 2, "clear": 3},
        },
        wind_speed_range=WindSpeedRange(min=0, max=4),
    ),
    "subtropical": ClimateZoneTemplate(
        id="subtropical",
        name="Subtropical",
        description="Hot, humid summers and mild winters.",
        temperatures=_temps(
            Spring=(15, 28), Summer=(22, 35), Autumn=(15, 28), Winter=(5, 17), default=(12, 28)
        ),
        weather={
            "summer": {
                "clear": 5, "partly-cloudy": 4, "rain": 5, "drizzle": 2, "thunderstorm": 3, "sunshower": 1,
            },
            "winter": {"clear": 2, "cloudy": 4, "rain": 3, "mist": 2, "fog": 1},
            "default": {"clear": 4, "partly-cloudy": 5, "cloudy": 3, "rain": 2},
        },
        wind_speed_range=WindSpeedRange(min=0, max=4),
    ),
    "tropical": ClimateZoneTemplate(
        id="tropical",
        name="Tropical",
        description="Hot year-round with frequent heavy rain.",
        temperatures=_temps(
            Spring=(24, 32), Summer=(26, 35), Autumn=(24, 32), Winter=(22, 30), default=(24, 35)
        ),
        weather={
            "default": {"clear": 8, "partly-cloudy": 5, "rain": 7, "thunderstorm": 3, "fog": 2, "sunshower": 1},
        },
    ),
    "arid": ClimateZoneTemplate(
        id="arid",
        name="Arid",
        description="Dry desert with scorching days and little rain.",
        temperatures=_temps(
            Spring=(18, 35), Summer=(28, 48), Autumn=(18, 35), Winter=(5, 22), default=(15, 40)
        ),
        weather={
            "summer": {"clear": 10, "partly-cloudy": 3, "sandstorm": 2, "windy": 1},
            "winter": {"clear": 6, "partly-cloudy": 4, "cloudy": 2, "drizzle": 1},
            "default": {"clear": 8, "partly-cloudy": 4, "sandstorm": 1, "windy": 1},
        },
        wind_speed_range=WindSpeedRange(min=0, max=4),
    ),
    "polar": ClimateZoneTemplate(
        id="polar",
        name="Polar",
        description="Extreme cold, ice and months of darkness.",
        temperatures=_temps(
            Spring=(-20, -5), Summer=(-5, 10), Autumn=(-25, -10), Winter=(-50, -25), default=(-30, -10)
        ),
        weather={
            "summer": {"clear": 4, "partly-cloudy": 3, "windy": 2, "mist": 1, "snow": 2},
            "winter": {"blizzard": 6, "snow": 5, "overcast": 2, "windy": 3},
            "default": {"snow": 4, "overcast": 3, "blizzard": 2, "windy": 2, "clear": 1},
        },
        wind_speed_range=WindSpeedRange(min=1, max=5),
    ),
}


def get_climate_zone_template(template_id: str) -> Optional[ClimateZoneTemplate]:
    return CLIMATE_ZONE_TEMPLATES.get(template_id)


def get_climate_zone_template_ids() -> list[str]:
    return list(CLIMATE_ZONE_TEMPLATES)


def get_climate_template_options() -> list[dict[str, str]]:
    """Templates as value/label pairs, for selection lists."""
    return [{"value": t.id, "label": t.name} for t in CLIMATE_ZONE_TEMPLATES.values()]


def normalize_season_name(season_name: Optional[str]) -> str:
    """
    Map a calendar's season name onto a template weather key.

    "Early Spring" -> "spring", "Fall" -> "autumn", "Wet Season" -> "default"
    """
    if not season_name:
        return "default"

    lower = season_name.lower()
    if "spring" in lower or "vernal" in lower:
        return "spring"
    if "summer" in lower or "estival" in lower:
        return "summer"
    if "autumn" in lower or "fall" in lower:
        return "autumn"
    if "winter" in lower or "hibernal" in lower:
        return "winter"
    return "default"


def _percentages(weights: dict[str, float]) -> dict[str, float]:
    total = sum(weights.values())
    if total <= 0:
        return {preset_id: 0 for preset_id in weights}
    return {
        preset_id: math.floor(weight / total * 10000 + 0.5) / 100
        for preset_id, weight in weights.items()
    }


def _absolute(value: Optional[float]) -> Optional[Modifier]:
    return Modifier.absolute(value) if value is not None else None


def get_default_zone_config(
    template_id: str,
    season_names: Iterable[str] = DEFAULT_SEASON_NAMES,
) -> Optional[ZoneConfig]:
    """
    Build a complete zone configuration from a template.

    Every built-in preset gets a zone entry: templates' default weights
    become percentage chances, presets the template never mentions are
    disabled. Seasons the template weights separately become season
    overrides.

    Args:
        template_id: Climate template id (e.g., "temperate")
        season_names: The calendar's season names, used as temperature keys

    Returns:
        ZoneConfig, or None for an unknown template
    """
    template = get_climate_zone_template(template_id)
    if template is None:
        logger.warning(f"Unknown climate template '{template_id}'")
        return None

    default_range = template.temperatures.get("_default", DEFAULT_TEMPERATURE_RANGE)
    temperatures: dict[str, TemperatureBounds] = {"_default": _bounds(default_range)}
    season_overrides: dict[str, ZoneSeasonOverride] = {}

    for season in season_names:
        season_range = (
            template.temperatures.get(season)
            or template.temperatures.get(season.capitalize())
            or default_range
        )
        temperatures[season] = _bounds(season_range)

        season_key = normalize_season_name(season)
        season_weights = template.weather.get(season_key)
        if season_key != "default" and season_weights:
            season_overrides[season] = ZoneSeasonOverride(
                presets=tuple(
                    PresetEntry(id=preset_id, chance=Modifier.absolute(chance))
                    for preset_id, chance in _percentages(season_weights).items()
                    if chance > 0
                )
            )

    default_weights = template.weather.get("default", {})
    chances = _percentages(default_weights)
    presets = tuple(
        PresetEntry(
            id=preset.id,
            chance=Modifier.absolute(chances.get(preset.id, 0)),
            enabled=default_weights.get(preset.id, 0) > 0,
            temp_min=_absolute(preset.temp_min),
            temp_max=_absolute(preset.temp_max),
        )
        for preset in ALL_PRESETS
    )

    return ZoneConfig(
        id=template.id,
        name=template.name,
        description=template.description,
        presets=presets,
        season_overrides=season_overrides,
        temperatures=temperatures,
        wind_speed_range=template.wind_speed_range,
    )


def _bounds(temp_range: TemperatureRange) -> TemperatureBounds:
    return TemperatureBounds(
        min=Modifier.absolute(temp_range.min),
        max=Modifier.absolute(temp_range.max),
    )
