"""
Weather engine facade.

Bundles an engine configuration and custom presets so callers only supply
the zone, the date and the current weather.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from tabletop_weather.config import WeatherEngineConfig
from tabletop_weather.content_loader.climate_loader import load_custom_presets
from tabletop_weather.data_models import (
    ForecastEntry,
    GeneratedWeather,
    SeasonInfo,
    WeatherPreset,
    ZoneConfig,
)
from tabletop_weather.rng import date_seed
from tabletop_weather.weather.forecast import DaysInMonth, SeasonForDate, generate_forecast
from tabletop_weather.weather.generator import (
    as_zone_config,
    generate_temperature_for_preset,
    generate_weather,
)
from tabletop_weather.weather.presets import ALL_PRESETS, PresetLike, get_all_presets
from tabletop_weather.weather.units import to_display_unit

logger = logging.getLogger(__name__)

ZoneLike = Union[ZoneConfig, dict, None]


class WeatherEngine:
    """
    Stateless weather generation with configured defaults.

    The engine never remembers generated weather; callers pass the current
    preset id back in to get inertia.

    Usage:
        engine = WeatherEngine(WeatherEngineConfig(inertia=0.4))
        today = engine.generate(zone, SeasonInfo(name="Summer"), seed=42)
        week = engine.forecast(zone, 1024, 5, 14, current_weather_id=today.preset.id)
    """

    def __init__(
        self,
        config: Optional[WeatherEngineConfig] = None,
        custom_presets: Iterable[PresetLike] = (),
    ):
        self.config = config or WeatherEngineConfig()

        presets = list(custom_presets)
        if self.config.custom_presets_path is not None:
            presets.extend(load_custom_presets(self.config.custom_presets_path))
        # Built-ins come first and win id collisions
        self._custom_presets: tuple[WeatherPreset, ...] = tuple(
            get_all_presets(presets)[len(ALL_PRESETS):]
        )

        logger.info(
            f"Weather engine ready: inertia={self.config.inertia}, "
            f"accuracy={self.config.forecast_accuracy}, {len(self._custom_presets)} custom presets"
        )

    @property
    def custom_presets(self) -> tuple[WeatherPreset, ...]:
        return self._custom_presets

    def effective_inertia(
        self,
        season: Optional[str],
        previous_season: Optional[str],
    ) -> float:
        """Configured inertia, damped when the season has just changed."""
        inertia = self.config.inertia
        if previous_season is not None and season is not None and previous_season != season:
            inertia *= self.config.season_change_inertia_factor
            logger.debug(f"Season changed {previous_season} -> {season}, inertia {inertia}")
        return inertia

    def generate(
        self,
        zone_config: ZoneLike,
        season_info: Optional[SeasonInfo] = None,
        seed: Optional[int] = None,
        current_weather_id: Optional[str] = None,
        previous_season: Optional[str] = None,
    ) -> GeneratedWeather:
        """
        Generate one day of weather for a zone.

        Args:
            zone_config: The active climate zone
            season_info: Season name and climate for the day
            seed: Integer seed, or None for a one-off roll
            current_weather_id: Current preset id, for inertia
            previous_season: Season of the current weather, damps inertia on change
        """
        season_info = season_info or SeasonInfo()
        return generate_weather(
            season_climate=season_info.climate,
            zone_config=as_zone_config(zone_config),
            season=season_info.name,
            seed=seed,
            custom_presets=self._custom_presets,
            current_weather_id=current_weather_id,
            inertia=self.effective_inertia(season_info.name, previous_season),
        )

    def generate_for_date(
        self,
        zone_config: ZoneLike,
        year: int,
        month: int,
        day: int,
        season_info: Optional[SeasonInfo] = None,
        current_weather_id: Optional[str] = None,
        previous_season: Optional[str] = None,
    ) -> GeneratedWeather:
        """Generate the reproducible weather for a calendar date."""
        return self.generate(
            zone_config,
            season_info=season_info,
            seed=date_seed(year, month, day),
            current_weather_id=current_weather_id,
            previous_season=previous_season,
        )

    def temperature_for_preset(
        self,
        zone_config: ZoneLike,
        preset_id: str,
        season_info: Optional[SeasonInfo] = None,
        seed: Optional[int] = None,
    ) -> int:
        """Temperature for a preset the GM set by hand, from the zone and season."""
        season_info = season_info or SeasonInfo()
        return generate_temperature_for_preset(
            preset_id,
            season_climate=season_info.climate,
            zone_config=as_zone_config(zone_config),
            season=season_info.name,
            seed=seed,
            custom_presets=self._custom_presets,
        )

    def forecast(
        self,
        zone_config: ZoneLike,
        start_year: int,
        start_month: int,
        start_day: int,
        days: Optional[int] = None,
        accuracy: Optional[float] = None,
        current_weather_id: Optional[str] = None,
        get_season_for_date: Optional[SeasonForDate] = None,
        get_days_in_month: Optional[DaysInMonth] = None,
        season: Optional[str] = None,
        months_per_year: Optional[int] = None,
    ) -> list[ForecastEntry]:
        """
        Forecast consecutive days starting at the given date.

        days defaults to the configured forecast length and is capped at
        max_forecast_days; accuracy defaults to the configured accuracy.
        """
        requested = days if days is not None else self.config.forecast_days
        days = min(requested, self.config.max_forecast_days)
        if requested > days:
            logger.debug(f"Forecast of {requested} days capped at {days}")

        forecast = generate_forecast(
            zone_config=as_zone_config(zone_config),
            start_year=start_year,
            start_month=start_month,
            start_day=start_day,
            days=days,
            custom_presets=self._custom_presets,
            current_weather_id=current_weather_id,
            inertia=self.config.inertia,
            accuracy=self.config.forecast_accuracy if accuracy is None else accuracy,
            get_season_for_date=get_season_for_date,
            get_days_in_month=get_days_in_month,
            season=season,
            months_per_year=months_per_year,
        )
        logger.info(f"Built {len(forecast)}-day forecast starting {start_year}-{start_month}-{start_day}")
        return forecast

    def display_temperature(self, celsius: float) -> float:
        """A stored temperature in the configured display unit."""
        return to_display_unit(celsius, self.config.temperature_unit)
