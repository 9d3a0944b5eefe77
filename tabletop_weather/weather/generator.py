"""
Single-day weather generation.

One call turns a climate, a season and a seed into a GeneratedWeather.
Random draws always happen in the same order (condition, temperature, wind,
precipitation) so a seed reproduces the whole result, not just the
condition.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Union

from tabletop_weather.data_models import (
    GeneratedWeather,
    PrecipitationSettings,
    SeasonClimate,
    TemperatureRange,
    WeatherPreset,
    WindSettings,
    WindSpeedRange,
    ZoneConfig,
)
from tabletop_weather.rng import RandomFn, date_seed, resolve_rng, weighted_select
from tabletop_weather.weather.climate import merge_climate_config
from tabletop_weather.weather.compass import COMPASS_ORDER, compass_degrees
from tabletop_weather.weather.inertia import apply_weather_inertia
from tabletop_weather.weather.presets import PresetLike, build_preset_catalog, get_preset

logger = logging.getLogger(__name__)

FALLBACK_WEATHER_ID = "clear"

# Temperature bounds for a preset without its own range
DEFAULT_PRESET_TEMP_MIN = 10
DEFAULT_PRESET_TEMP_MAX = 25

DEFAULT_WIND_SPEED_RANGE = WindSpeedRange(min=0, max=5)

MIN_PRECIPITATION_INTENSITY = 0.1
MAX_PRECIPITATION_INTENSITY = 1.0
PRECIPITATION_JITTER = 0.3


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity."""
    return math.floor(value + 0.5)


def as_zone_config(zone_config: Union[ZoneConfig, dict, None]) -> Optional[ZoneConfig]:
    if zone_config is None or isinstance(zone_config, ZoneConfig):
        return zone_config
    return ZoneConfig.from_dict(zone_config)


def as_season_climate(season_climate: Union[SeasonClimate, dict, None]) -> Optional[SeasonClimate]:
    if season_climate is None or isinstance(season_climate, SeasonClimate):
        return season_climate
    return SeasonClimate.from_dict(season_climate)


def random_compass_direction(rng: RandomFn) -> float:
    """Uniformly random 16-point compass bearing."""
    index = min(int(rng() * len(COMPASS_ORDER)), len(COMPASS_ORDER) - 1)
    return compass_degrees(COMPASS_ORDER[index])


def generate_wind(
    preset: WeatherPreset,
    zone_config: Optional[ZoneConfig],
    rng: RandomFn,
) -> WindSettings:
    """
    Roll wind for a chosen preset.

    Forced winds (storms) keep the preset's speed verbatim and ignore the
    zone's speed range. Otherwise the speed is jittered around the preset's
    and clamped to the zone range, and the direction comes from the zone's
    prevailing-wind weights when it has any.
    """
    if preset.wind.forced:
        direction = preset.wind.direction
        if direction is None:
            direction = random_compass_direction(rng)
        return WindSettings(speed=preset.wind.speed, direction=direction, forced=True)

    speed_range = DEFAULT_WIND_SPEED_RANGE
    if zone_config is not None and zone_config.wind_speed_range is not None:
        speed_range = zone_config.wind_speed_range
    speed = speed_range.clamp(preset.wind.speed + round_half_up(rng() - 0.5) * 2)

    direction: Optional[float] = None
    if zone_config is not None and zone_config.wind_directions:
        compass_id = weighted_select(zone_config.wind_directions, rng)
        direction = compass_degrees(compass_id) if compass_id else None
        if direction is None:
            logger.warning(f"Zone '{zone_config.id}' has unknown wind direction '{compass_id}'")
    if direction is None:
        direction = preset.wind.direction
    if direction is None:
        direction = random_compass_direction(rng)

    return WindSettings(speed=speed, direction=direction, forced=False)


def generate_precipitation(preset: WeatherPreset, rng: RandomFn) -> PrecipitationSettings:
    """Roll precipitation intensity around the preset's own."""
    base = preset.precipitation
    if not base.type:
        return PrecipitationSettings(type=None, intensity=0)

    intensity = base.intensity + (rng() - 0.5) * PRECIPITATION_JITTER
    intensity = max(MIN_PRECIPITATION_INTENSITY, min(MAX_PRECIPITATION_INTENSITY, intensity))
    return PrecipitationSettings(type=base.type, intensity=math.floor(intensity * 100 + 0.5) / 100)


def _roll_temperature(temp_range: TemperatureRange, rng: RandomFn) -> int:
    return round_half_up(temp_range.min + rng() * (temp_range.max - temp_range.min))


def _resolve_preset(
    weather_id: str,
    catalog: dict[str, WeatherPreset],
) -> WeatherPreset:
    preset = catalog.get(weather_id)
    if preset is None:
        logger.warning(f"Unknown weather preset '{weather_id}', using placeholder")
        return WeatherPreset.stub(weather_id)
    return preset


def _preset_own_range(preset: Optional[WeatherPreset]) -> TemperatureRange:
    low = preset.temp_min if preset is not None else None
    high = preset.temp_max if preset is not None else None
    return TemperatureRange(
        min=DEFAULT_PRESET_TEMP_MIN if low is None else low,
        max=DEFAULT_PRESET_TEMP_MAX if high is None else high,
    )


def _apply_zone_entry_range(
    zone_config: Optional[ZoneConfig],
    preset_id: str,
    temp_range: TemperatureRange,
) -> TemperatureRange:
    """Shift a merged range by the zone's enabled entry for the preset, if any."""
    entry = zone_config.find_preset(preset_id, enabled_only=True) if zone_config else None
    if entry is None:
        return temp_range
    return TemperatureRange(
        min=entry.temp_min.apply(temp_range.min) if entry.temp_min else temp_range.min,
        max=entry.temp_max.apply(temp_range.max) if entry.temp_max else temp_range.max,
    )


def _generate_unconfigured(catalog: dict[str, WeatherPreset], rng: RandomFn) -> GeneratedWeather:
    presets = list(catalog.values())
    index = min(int(rng() * len(presets)), len(presets) - 1)
    preset = presets[index]

    temperature = _roll_temperature(_preset_own_range(preset), rng)

    return GeneratedWeather(
        preset=preset,
        temperature=temperature,
        wind=generate_wind(preset, None, rng),
        precipitation=generate_precipitation(preset, rng),
    )


def generate_weather(
    season_climate: Union[SeasonClimate, dict, None] = None,
    zone_config: Union[ZoneConfig, dict, None] = None,
    season: Optional[str] = None,
    seed: Optional[int] = None,
    custom_presets: Iterable[PresetLike] = (),
    current_weather_id: Optional[str] = None,
    inertia: float = 0,
) -> GeneratedWeather:
    """
    Generate one day of weather.

    Args:
        season_climate: The season's base climate, if the calendar has one
        zone_config: The active climate zone
        season: Season name, used for zone overrides and temperatures
        seed: Integer seed for a reproducible result; None for a one-off roll
        custom_presets: Extra presets beyond the built-in catalogue
        current_weather_id: Yesterday's preset id, for inertia
        inertia: Persistence toward current_weather_id, 0-1

    Returns:
        GeneratedWeather

    Raises:
        SeedError: If seed is not an int or None
    """
    rng = resolve_rng(seed)
    season_climate = as_season_climate(season_climate)
    zone_config = as_zone_config(zone_config)
    catalog = build_preset_catalog(custom_presets)

    if zone_config is None and season_climate is None:
        return _generate_unconfigured(catalog, rng)

    zone_override = zone_config.get_season_override(season) if zone_config else None
    merged = merge_climate_config(season_climate, zone_override, zone_config, season)

    probabilities = merged.probabilities
    if current_weather_id and inertia > 0:
        probabilities = apply_weather_inertia(
            current_weather_id,
            probabilities,
            inertia,
            custom_presets=list(catalog.values()),
            zone_presets=zone_config.presets if zone_config else (),
        )
    probabilities = {preset_id: weight for preset_id, weight in probabilities.items() if weight > 0}

    if not probabilities:
        logger.warning(
            f"No weather presets available for season '{season}', defaulting to '{FALLBACK_WEATHER_ID}'"
        )
        probabilities = {FALLBACK_WEATHER_ID: 100}

    weather_id = weighted_select(probabilities, rng)
    preset = _resolve_preset(weather_id, catalog)

    temp_range = _apply_zone_entry_range(zone_config, weather_id, merged.temp_range)
    temperature = _roll_temperature(temp_range, rng)

    logger.debug(f"Generated '{weather_id}' at {temperature}°C (season '{season}', seed {seed})")
    return GeneratedWeather(
        preset=preset,
        temperature=temperature,
        wind=generate_wind(preset, zone_config, rng),
        precipitation=generate_precipitation(preset, rng),
    )


def generate_weather_for_date(
    year: int,
    month: int,
    day: int,
    season_climate: Union[SeasonClimate, dict, None] = None,
    zone_config: Union[ZoneConfig, dict, None] = None,
    season: Optional[str] = None,
    custom_presets: Iterable[PresetLike] = (),
    current_weather_id: Optional[str] = None,
    inertia: float = 0,
) -> GeneratedWeather:
    """Generate the weather for a calendar date, seeded by the date itself."""
    return generate_weather(
        season_climate=season_climate,
        zone_config=zone_config,
        season=season,
        seed=date_seed(year, month, day),
        custom_presets=custom_presets,
        current_weather_id=current_weather_id,
        inertia=inertia,
    )


def generate_temperature_for_preset(
    preset_id: str,
    season_climate: Union[SeasonClimate, dict, None] = None,
    zone_config: Union[ZoneConfig, dict, None] = None,
    season: Optional[str] = None,
    seed: Optional[int] = None,
    custom_presets: Iterable[PresetLike] = (),
) -> int:
    """
    Roll a temperature for a preset chosen by hand rather than by the tables.

    The range is the merged climate range shifted by the zone's enabled
    entry for the preset. With no climate or zone configured, the preset's
    own range is used (10..25 for presets without one).

    Raises:
        SeedError: If seed is not an int or None
    """
    rng = resolve_rng(seed)
    season_climate = as_season_climate(season_climate)
    zone_config = as_zone_config(zone_config)

    if zone_config is None and season_climate is None:
        temp_range = _preset_own_range(get_preset(preset_id, custom_presets))
    else:
        zone_override = zone_config.get_season_override(season) if zone_config else None
        merged = merge_climate_config(season_climate, zone_override, zone_config, season)
        temp_range = _apply_zone_entry_range(zone_config, preset_id, merged.temp_range)

    temperature = _roll_temperature(temp_range, rng)
    logger.debug(f"Rolled {temperature}°C for '{preset_id}' ({temp_range.min}..{temp_range.max})")
    return temperature
