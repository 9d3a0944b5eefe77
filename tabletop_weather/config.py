"""
Weather engine configuration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional

from tabletop_weather.data_models import ConfigValidationError
from tabletop_weather.weather.units import TemperatureUnit

logger = logging.getLogger(__name__)


@dataclass
class WeatherEngineConfig:
    """Configuration for a weather engine."""

    # Generation
    inertia: float = 0.3  # Day-to-day persistence, 0-1
    season_change_inertia_factor: float = 0.5  # Inertia multiplier on a season change

    # Forecasts
    forecast_accuracy: float = 70  # 0-100, 100 disables variance
    forecast_days: int = 7
    max_forecast_days: int = 30

    # Display
    temperature_unit: str = TemperatureUnit.CELSIUS.value

    # Content
    custom_presets_path: Optional[Path] = None

    def __post_init__(self):
        """Ensure paths are Path objects and values are in range."""
        if isinstance(self.custom_presets_path, str):
            self.custom_presets_path = Path(self.custom_presets_path)

        if not 0 <= self.inertia <= 1:
            raise ConfigValidationError(f"inertia must be between 0 and 1, got {self.inertia}")
        if not 0 <= self.season_change_inertia_factor <= 1:
            raise ConfigValidationError(
                "season_change_inertia_factor must be between 0 and 1, "
                f"got {self.season_change_inertia_factor}"
            )
        if not 0 <= self.forecast_accuracy <= 100:
            raise ConfigValidationError(
                f"forecast_accuracy must be between 0 and 100, got {self.forecast_accuracy}"
            )
        if self.max_forecast_days < 1:
            raise ConfigValidationError(
                f"max_forecast_days must be at least 1, got {self.max_forecast_days}"
            )
        if not 1 <= self.forecast_days <= self.max_forecast_days:
            raise ConfigValidationError(
                f"forecast_days must be between 1 and {self.max_forecast_days}, got {self.forecast_days}"
            )
        try:
            self.temperature_unit = TemperatureUnit(self.temperature_unit).value
        except ValueError as e:
            raise ConfigValidationError(f"Unknown temperature unit: {self.temperature_unit}") from e

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WeatherEngineConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        if not isinstance(data, Mapping):
            raise ConfigValidationError("Engine configuration must be a mapping")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown engine settings: {', '.join(unknown)}")
        return cls(**{key: value for key, value in data.items() if key in known})
