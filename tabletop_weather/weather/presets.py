"""
Built-in weather presets.

The catalogue covers four categories:
- standard: everyday conditions, the bulk of any climate table
- severe: rare, high-impact storms with forced winds
- environmental: regional or seasonal phenomena (sandstorms, leaf fall)
- fantasy: magical weather, zero chance unless a climate enables it

Caller-supplied presets are merged in by id; a built-in preset always wins
an id collision.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from tabletop_weather.data_models import (
    ConfigValidationError,
    PrecipitationSettings,
    WeatherPreset,
    WindSettings,
)

logger = logging.getLogger(__name__)

PresetLike = Union[WeatherPreset, dict]


WEATHER_CATEGORIES: dict[str, str] = {
    "standard": "Standard",
    "severe": "Severe",
    "environmental": "Environmental",
    "fantasy": "Fantasy",
    "custom": "Custom",
}


def _preset(
    preset_id: str,
    category: str,
    chance: float,
    temp_min: int,
    temp_max: int,
    icon: str,
    color: str,
    description: str,
    wind_speed: int = 0,
    forced: bool = False,
    precip: Optional[str] = None,
    intensity: float = 0.0,
    inertia_weight: float = 1.0,
) -> WeatherPreset:
    return WeatherPreset(
        id=preset_id,
        label=preset_id.replace("-", " ").title(),
        category=category,
        chance=chance,
        temp_min=temp_min,
        temp_max=temp_max,
        wind=WindSettings(speed=wind_speed, forced=forced),
        precipitation=PrecipitationSettings(type=precip, intensity=intensity),
        inertia_weight=inertia_weight,
        description=description,
        icon=icon,
        color=color,
    )


STANDARD_WEATHER: tuple[WeatherPreset, ...] = (
    _preset("clear", "standard", 15, 18, 32, "fa-sun", "#FFEE88",
            "Cloudless skies.", inertia_weight=1.2),
    _preset("partly-cloudy", "standard", 18, 15, 28, "fa-cloud-sun", "#D0E8FF",
            "Scattered clouds with sun breaking through.", wind_speed=1),
    _preset("cloudy", "standard", 14, 12, 24, "fa-cloud", "#B0C4DE",
            "Mostly cloudy skies.", wind_speed=1, inertia_weight=1.2),
    _preset("overcast", "standard", 10, 10, 20, "fa-smog", "#CCCCCC",
            "A flat grey ceiling of cloud.", wind_speed=1, inertia_weight=1.5),
    _preset("drizzle", "standard", 8, 8, 18, "fa-cloud-rain", "#CDEFFF",
            "Light, fine rain.", precip="drizzle", intensity=0.2),
    _preset("rain", "standard", 10, 10, 22, "fa-cloud-showers-heavy", "#A0D8EF",
            "Steady rainfall.", wind_speed=2, precip="rain", intensity=0.6,
            inertia_weight=1.3),
    _preset("fog", "standard", 5, 5, 15, "fa-smog", "#E6E6E6",
            "Thick fog; visibility is poor.", precip="drizzle", intensity=0.1,
            inertia_weight=1.5),
    _preset("mist", "standard", 4, 8, 18, "fa-water", "#F0F8FF",
            "Thin, low-lying mist."),
    _preset("windy", "standard", 4, 10, 25, "fa-wind", "#E0F7FA",
            "Strong, gusting winds.", wind_speed=3),
    _preset("sunshower", "standard", 2, 15, 26, "fa-cloud-sun-rain", "#FCEABB",
            "Rain falling while the sun shines.", wind_speed=1, precip="rain",
            intensity=0.3, inertia_weight=0),
    _preset("snow", "standard", 1, -10, 2, "fa-snowflake", "#FFFFFF",
            "Falling snow.", wind_speed=1, precip="snow", intensity=0.5,
            inertia_weight=1.3),
    _preset("sleet", "standard", 1, -2, 4, "fa-cloud-rain", "#C0D8E8",
            "Freezing rain mixed with snow.", wind_speed=2, precip="sleet",
            intensity=0.5),
    _preset("heat-wave", "standard", 1, 35, 48, "fa-temperature-arrow-up", "#FF9944",
            "Oppressive, unrelenting heat.", inertia_weight=1.5),
)

SEVERE_WEATHER: tuple[WeatherPreset, ...] = (
    _preset("thunderstorm", "severe", 2, 15, 28, "fa-cloud-bolt", "#3D3560",
            "Lightning, thunder and heavy rain.", wind_speed=4, forced=True,
            precip="rain", intensity=0.9, inertia_weight=0.3),
    _preset("blizzard", "severe", 0.5, -20, -5, "fa-snowflake", "#C8DCE8",
            "Heavy snow driven by fierce winds.", wind_speed=5, forced=True,
            precip="snow", intensity=1.0, inertia_weight=0.5),
    _preset("hail", "severe", 0.5, 5, 18, "fa-cloud-meatball", "#D1EFFF",
            "Pelting hailstones.", wind_speed=3, precip="hail", intensity=0.7,
            inertia_weight=0.3),
    _preset("tornado", "severe", 0.5, 18, 35, "fa-tornado", "#4A5A3A",
            "A violent rotating column of air.", wind_speed=5, forced=True,
            precip="rain", intensity=0.8, inertia_weight=0),
    _preset("hurricane", "severe", 0.5, 22, 35, "fa-hurricane", "#445566",
            "A massive storm system with devastating winds.", wind_speed=5,
            forced=True, precip="rain", intensity=1.0, inertia_weight=0),
    _preset("ice-storm", "severe", 0.5, -10, 0, "fa-icicles", "#A0C8E0",
            "Freezing rain glazing everything in ice.", wind_speed=4, forced=True,
            precip="hail", intensity=0.8, inertia_weight=0.3),
    _preset("monsoon", "severe", 0.5, 22, 35, "fa-cloud-showers-water", "#3A6080",
            "Torrential seasonal rains.", wind_speed=4, forced=True, precip="rain",
            intensity=1.0, inertia_weight=0.5),
)

ENVIRONMENTAL_WEATHER: tuple[WeatherPreset, ...] = (
    _preset("ashfall", "environmental", 1.5, 15, 40, "fa-volcano", "#8B5A30",
            "Volcanic ash drifting from the sky.", wind_speed=1, inertia_weight=0.5),
    _preset("sandstorm", "environmental", 1.5, 25, 45, "fa-wind", "#C49A44",
            "Blinding walls of wind-driven sand.", wind_speed=4, inertia_weight=0.3),
    _preset("luminous-sky", "environmental", 1.5, -5, 10, "fa-star", "#2E8B57",
            "Shimmering lights dance across the night sky.", inertia_weight=0),
    _preset("sakura-bloom", "environmental", 1.5, 18, 32, "fa-spa", "#ffb7c5",
            "Blossom petals drift on a gentle breeze.", wind_speed=1,
            inertia_weight=0),
    _preset("autumn-leaves", "environmental", 1.5, 5, 18, "fa-leaf", "#CC7733",
            "Falling leaves swirl in the wind.", wind_speed=1, inertia_weight=0),
    _preset("rolling-fog", "environmental", 1.5, 2, 12, "fa-smog", "#D0D0D0",
            "Banks of fog roll in over the land.", inertia_weight=1.5),
    _preset("wildfire-smoke", "environmental", 1, 20, 40, "fa-fire", "#8B6040",
            "Smoke from distant fires hazes the sky.", wind_speed=1,
            inertia_weight=0.5),
    _preset("dust-devil", "environmental", 1, 28, 45, "fa-wind", "#C8A060",
            "Small whirlwinds of dust spin across open ground.", wind_speed=3,
            inertia_weight=0),
)

FANTASY_WEATHER: tuple[WeatherPreset, ...] = (
    _preset("black-sun", "fantasy", 0.5, 5, 20, "fa-circle", "#1A0E22",
            "The sun darkens to a black disc.", wind_speed=1, inertia_weight=0),
    _preset("ley-surge", "fantasy", 0, 10, 25, "fa-wand-sparkles", "#3A9BDC",
            "Raw magic crackles along the ley lines.", wind_speed=2,
            inertia_weight=0),
    _preset("aether-haze", "fantasy", 0, 12, 22, "fa-smog", "#7B3F96",
            "A violet haze thick with arcane residue.", inertia_weight=0),
    _preset("nullfront", "fantasy", 0, 0, 15, "fa-ban", "#2A2030",
            "A front of dead air where magic falters.", inertia_weight=0),
    _preset("permafrost-surge", "fantasy", 0, -30, -10, "fa-icicles", "#A8D8EA",
            "Unnatural cold spreads in a creeping wave.", wind_speed=3,
            precip="snow", intensity=0.4, inertia_weight=0),
    _preset("gravewind", "fantasy", 0, 5, 18, "fa-ghost", "#3A5040",
            "A cold wind carrying whispers of the dead.", wind_speed=3,
            inertia_weight=0),
    _preset("veilfall", "fantasy", 0, 8, 20, "fa-droplet", "#6A5A8E",
            "A shimmering rain that thins the veil between worlds.", wind_speed=1,
            precip="rain", intensity=0.3, inertia_weight=0),
    _preset("arcane-winds", "fantasy", 0, 15, 28, "fa-hat-wizard", "#8A40B0",
            "Winds charged with wild magic.", wind_speed=2, inertia_weight=0),
    _preset("acid-rain", "fantasy", 0, 10, 25, "fa-flask", "#55BB33",
            "Caustic rain that stings and corrodes.", wind_speed=1, precip="rain",
            intensity=0.6, inertia_weight=0),
    _preset("blood-rain", "fantasy", 0, 12, 28, "fa-droplet", "#880022",
            "Rain the colour of blood.", wind_speed=1, precip="rain",
            intensity=0.7, inertia_weight=0),
    _preset("meteor-shower", "fantasy", 0, 10, 30, "fa-meteor", "#FF6622",
            "Streaks of fire cross the sky.", inertia_weight=0),
    _preset("spore-cloud", "fantasy", 0, 15, 28, "fa-disease", "#88AA44",
            "Drifting clouds of fungal spores.", inertia_weight=0),
    _preset("divine-light", "fantasy", 0, 18, 30, "fa-sun", "#FFD700",
            "Radiant light pours down from the heavens.", inertia_weight=0),
    _preset("plague-miasma", "fantasy", 0, 10, 22, "fa-biohazard", "#556B2F",
            "A sickly, foul-smelling fog.", inertia_weight=0),
)

ALL_PRESETS: tuple[WeatherPreset, ...] = (
    STANDARD_WEATHER + SEVERE_WEATHER + ENVIRONMENTAL_WEATHER + FANTASY_WEATHER
)

BUILTIN_PRESETS: dict[str, WeatherPreset] = {preset.id: preset for preset in ALL_PRESETS}


def _coerce(preset: PresetLike) -> WeatherPreset:
    if isinstance(preset, WeatherPreset):
        return preset
    if isinstance(preset, dict):
        return WeatherPreset.from_dict(preset)
    raise ConfigValidationError(f"Custom preset must be a WeatherPreset or mapping, got {preset!r}")


def get_all_presets(custom_presets: Iterable[PresetLike] = ()) -> list[WeatherPreset]:
    """
    Get the built-in presets followed by custom presets, deduplicated by id.

    A custom preset sharing an id with a built-in (or an earlier custom
    preset) is dropped.
    """
    presets = list(ALL_PRESETS)
    seen = set(BUILTIN_PRESETS)
    for raw in custom_presets:
        preset = _coerce(raw)
        if preset.id in seen:
            logger.debug(f"Ignoring custom preset '{preset.id}': id already defined")
            continue
        seen.add(preset.id)
        presets.append(preset)
    return presets


def build_preset_catalog(custom_presets: Iterable[PresetLike] = ()) -> dict[str, WeatherPreset]:
    """Index every known preset by id."""
    return {preset.id: preset for preset in get_all_presets(custom_presets)}


def get_preset(preset_id: str, custom_presets: Iterable[PresetLike] = ()) -> Optional[WeatherPreset]:
    """Look up a preset by id, built-ins first."""
    builtin = BUILTIN_PRESETS.get(preset_id)
    if builtin is not None:
        return builtin
    for raw in custom_presets:
        preset = _coerce(raw)
        if preset.id == preset_id:
            return preset
    return None


def get_presets_by_category(
    category: str,
    custom_presets: Iterable[PresetLike] = (),
) -> list[WeatherPreset]:
    """All known presets in a category, in catalogue order."""
    return [preset for preset in get_all_presets(custom_presets) if preset.category == category]
