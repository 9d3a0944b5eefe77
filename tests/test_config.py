"""
Tests for engine configuration.
"""

import logging
from pathlib import Path

import pytest

from tabletop_weather.config import WeatherEngineConfig
from tabletop_weather.data_models import ConfigValidationError


class TestWeatherEngineConfig:
    """Tests for WeatherEngineConfig."""

    def test_defaults(self):
        config = WeatherEngineConfig()
        assert config.inertia == 0.3
        assert config.season_change_inertia_factor == 0.5
        assert config.forecast_accuracy == 70
        assert config.forecast_days == 7
        assert config.temperature_unit == "celsius"
        assert config.custom_presets_path is None

    def test_path_coercion(self):
        config = WeatherEngineConfig(custom_presets_path="data/presets.json")
        assert config.custom_presets_path == Path("data/presets.json")

    def test_unit_enum_accepted(self):
        from tabletop_weather.weather.units import TemperatureUnit

        assert WeatherEngineConfig(temperature_unit=TemperatureUnit.FAHRENHEIT).temperature_unit == "fahrenheit"

    @pytest.mark.parametrize(
        "settings",
        [
            {"inertia": 1.5},
            {"inertia": -0.1},
            {"season_change_inertia_factor": 2},
            {"forecast_accuracy": 101},
            {"max_forecast_days": 0},
            {"forecast_days": 0},
            {"forecast_days": 40},
            {"temperature_unit": "kelvin"},
        ],
    )
    def test_invalid_values(self, settings):
        with pytest.raises(ConfigValidationError):
            WeatherEngineConfig(**settings)

    def test_from_dict(self):
        config = WeatherEngineConfig.from_dict({"inertia": 0.6, "forecast_accuracy": 90})
        assert config.inertia == 0.6
        assert config.forecast_accuracy == 90

    def test_from_dict_ignores_unknown_keys(self, caplog):
        with caplog.at_level(logging.WARNING, logger="tabletop_weather.config"):
            config = WeatherEngineConfig.from_dict({"inertia": 0.2, "moon_phase": "full"})
        assert config.inertia == 0.2
        assert "moon_phase" in caplog.text

    def test_from_dict_requires_mapping(self):
        with pytest.raises(ConfigValidationError):
            WeatherEngineConfig.from_dict(["inertia"])
