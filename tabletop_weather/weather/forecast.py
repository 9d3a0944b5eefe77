"""
Multi-day forecasts.

A forecast chains single-day generation across consecutive calendar dates:
each day is seeded by its date, inherits inertia from the day before, and
is blurred by forecast variance the further out it lies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from tabletop_weather.data_models import (
    ForecastEntry,
    GeneratedWeather,
    SeasonInfo,
    ZoneConfig,
)
from tabletop_weather.rng import RandomFn, date_seed, seeded_random
from tabletop_weather.weather.generator import as_zone_config, generate_weather, round_half_up
from tabletop_weather.weather.presets import PresetLike, get_all_presets

logger = logging.getLogger(__name__)

DEFAULT_FORECAST_DAYS = 7
DEFAULT_DAYS_IN_MONTH = 30
DEFAULT_MONTHS_PER_YEAR = 12

# Largest temperature swing (°C) at zero accuracy on the last forecast day
MAX_TEMPERATURE_VARIANCE = 8

SeasonResult = Union[SeasonInfo, Mapping[str, Any], str, None]
SeasonForDate = Callable[[int, int, int], SeasonResult]
DaysInMonth = Callable[[int, int], int]


@dataclass(frozen=True)
class VariedWeather:
    """Weather after forecast variance, flagged when it was perturbed."""

    weather: GeneratedWeather
    is_varied: bool = False


def apply_forecast_variance(
    weather: GeneratedWeather,
    day_distance: int,
    total_days: int,
    accuracy: float,
    rng: RandomFn,
    custom_presets: Iterable[PresetLike] = (),
) -> VariedWeather:
    """
    Blur a forecast day according to forecast accuracy.

    Lower accuracy and days further out get larger temperature swings and a
    higher chance of a different condition from the same category.

    Args:
        weather: The generated weather for the day
        day_distance: How many days ahead this day is (1 = tomorrow)
        total_days: Length of the whole forecast
        accuracy: Forecast accuracy, 0-100
        rng: Random stream for the variance rolls
        custom_presets: Custom presets eligible for substitution

    Returns:
        VariedWeather
    """
    if accuracy >= 100:
        return VariedWeather(weather=weather, is_varied=False)

    inaccuracy = 1 - max(0.0, accuracy) / 100
    distance = day_distance / total_days if total_days > 0 else 1.0
    is_varied = False

    temp_delta = round_half_up((rng() * 2 - 1) * MAX_TEMPERATURE_VARIANCE * inaccuracy * distance)
    if temp_delta:
        weather = replace(weather, temperature=weather.temperature + temp_delta)
        if abs(temp_delta) > 1:
            is_varied = True

    if rng() < inaccuracy * distance:
        category = weather.preset.category
        candidates = [
            preset
            for preset in get_all_presets(custom_presets)
            if preset.category == category and preset.id != weather.preset.id
        ]
        if candidates:
            index = min(int(rng() * len(candidates)), len(candidates) - 1)
            substitute = candidates[index]
            logger.debug(f"Forecast variance swapped '{weather.preset.id}' for '{substitute.id}'")
            weather = replace(weather, preset=substitute)
            is_varied = True

    return VariedWeather(weather=weather, is_varied=is_varied)


def _resolve_season(
    get_season_for_date: Optional[SeasonForDate],
    year: int,
    month: int,
    day: int,
    season: Optional[str],
) -> SeasonInfo:
    if get_season_for_date is None:
        return SeasonInfo(name=season)

    result = get_season_for_date(year, month, day)
    if result is None:
        return SeasonInfo(name=season)
    if isinstance(result, SeasonInfo):
        return result
    if isinstance(result, str):
        return SeasonInfo(name=result)
    return SeasonInfo.from_dict(result)


def _months_per_year(
    months_per_year: Optional[int],
    get_days_in_month: Optional[DaysInMonth],
) -> int:
    if months_per_year:
        return months_per_year
    return getattr(get_days_in_month, "months_per_year", None) or DEFAULT_MONTHS_PER_YEAR


def generate_forecast(
    zone_config: Union[ZoneConfig, dict, None] = None,
    start_year: int = 0,
    start_month: int = 0,
    start_day: int = 1,
    days: int = DEFAULT_FORECAST_DAYS,
    custom_presets: Iterable[PresetLike] = (),
    current_weather_id: Optional[str] = None,
    inertia: float = 0,
    accuracy: float = 100,
    get_season_for_date: Optional[SeasonForDate] = None,
    get_days_in_month: Optional[DaysInMonth] = None,
    season: Optional[str] = None,
    months_per_year: Optional[int] = None,
) -> list[ForecastEntry]:
    """
    Generate a forecast for consecutive days.

    Months are 0-indexed and days 1-indexed. The date rolls into the next
    month after get_days_in_month(month, year) days, and into the next year
    after months_per_year months (falling back to the callback's
    months_per_year attribute, then 12).

    Args:
        zone_config: The active climate zone
        start_year: Year of the first forecast day
        start_month: Month of the first forecast day (0-indexed)
        start_day: Day of the first forecast day (1-indexed)
        days: Number of days to forecast
        custom_presets: Extra presets beyond the built-in catalogue
        current_weather_id: Today's preset id, seeds the inertia chain
        inertia: Day-to-day persistence, 0-1
        accuracy: Forecast accuracy, 0-100 (100 disables variance)
        get_season_for_date: (year, month, day) -> SeasonInfo, mapping or name
        get_days_in_month: (month, year) -> number of days
        season: Static season name when there is no season callback
        months_per_year: Months in a year

    Returns:
        Chronological list of ForecastEntry
    """
    zone_config = as_zone_config(zone_config)
    custom_presets = list(custom_presets)
    year_length = _months_per_year(months_per_year, get_days_in_month)

    forecast: list[ForecastEntry] = []
    year, month, day = start_year, start_month, start_day
    previous_id = current_weather_id

    for i in range(max(0, days)):
        season_info = _resolve_season(get_season_for_date, year, month, day, season)
        seed = date_seed(year, month, day)

        weather = generate_weather(
            season_climate=season_info.climate,
            zone_config=zone_config,
            season=season_info.name,
            seed=seed,
            custom_presets=custom_presets,
            current_weather_id=previous_id,
            inertia=inertia,
        )
        previous_id = weather.preset.id

        is_varied = False
        if accuracy < 100:
            varied = apply_forecast_variance(
                weather, i + 1, days, accuracy, seeded_random(seed + 1), custom_presets
            )
            weather, is_varied = varied.weather, varied.is_varied

        forecast.append(ForecastEntry.from_weather(year, month, day, weather, is_varied))

        day += 1
        month_length = get_days_in_month(month, year) if get_days_in_month else DEFAULT_DAYS_IN_MONTH
        if day > month_length:
            day = 1
            month += 1
            if month >= year_length:
                month = 0
                year += 1

    logger.debug(f"Built {len(forecast)}-day forecast from {start_year}-{start_month}-{start_day}")
    return forecast
