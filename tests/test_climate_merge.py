"""
Tests for merging season climates with zone overrides.
"""

from tabletop_weather.data_models import (
    SeasonClimate,
    TemperatureRange,
    ZoneConfig,
    ZoneSeasonOverride,
)
from tabletop_weather.weather.climate import merge_climate_config


def _season(**data):
    return SeasonClimate.from_dict(data)


def _override(**data):
    return ZoneSeasonOverride.from_dict(data)


class TestProbabilityMerge:
    """Tests for merging preset probability tables."""

    def test_season_presets_are_base(self):
        season = _season(presets=[{"id": "clear", "chance": 30}, {"id": "rain", "chance": 20}])
        merged = merge_climate_config(season, None, None, None)
        assert merged.probabilities == {"clear": 30, "rain": 20}

    def test_zero_chance_season_entries_skipped(self):
        season = _season(presets=[{"id": "clear", "chance": 30}, {"id": "rain", "chance": 0}])
        assert merge_climate_config(season).probabilities == {"clear": 30}

    def test_absolute_override_replaces(self):
        season = _season(presets=[{"id": "clear", "chance": 30}, {"id": "rain", "chance": 20}])
        override = _override(presets=[{"id": "rain", "chance": 40}])
        merged = merge_climate_config(season, override)
        assert merged.probabilities == {"clear": 30, "rain": 40}

    def test_plus_delta_adds(self):
        season = _season(presets=[{"id": "clear", "chance": 30}])
        override = _override(presets=[{"id": "clear", "chance": "+10"}])
        assert merge_climate_config(season, override).probabilities["clear"] == 40

    def test_minus_delta_subtracts(self):
        season = _season(presets=[{"id": "rain", "chance": 20}])
        override = _override(presets=[{"id": "rain", "chance": "-5"}])
        assert merge_climate_config(season, override).probabilities["rain"] == 15

    def test_delta_below_zero_removes(self):
        season = _season(presets=[{"id": "rain", "chance": 3}])
        override = _override(presets=[{"id": "rain", "chance": "-10"}])
        assert "rain" not in merge_climate_config(season, override).probabilities

    def test_absolute_zero_removes(self):
        season = _season(presets=[{"id": "clear", "chance": 30}, {"id": "rain", "chance": 20}])
        override = _override(presets=[{"id": "rain", "chance": 0}])
        assert merge_climate_config(season, override).probabilities == {"clear": 30}

    def test_delta_on_missing_preset_adds_it(self):
        season = _season(presets=[{"id": "clear", "chance": 30}])
        override = _override(presets=[{"id": "fog", "chance": "+5"}])
        assert merge_climate_config(season, override).probabilities == {"clear": 30, "fog": 5}

    def test_zone_fallback_enabled_presets(self):
        zone = ZoneConfig.from_dict(
            {
                "presets": [
                    {"id": "snow", "enabled": True, "chance": 25},
                    {"id": "rain", "enabled": False, "chance": 10},
                ]
            }
        )
        merged = merge_climate_config(None, None, zone, None)
        assert merged.probabilities == {"snow": 25}

    def test_override_presets_suppress_zone_fallback(self, valley_zone):
        season = _season(presets=[{"id": "clear", "chance": 30}])
        override = valley_zone.get_season_override("Summer")
        merged = merge_climate_config(season, override, valley_zone, "Summer")
        assert merged.probabilities == {"clear": 40}

    def test_season_table_survives_zone_fallback(self, valley_zone):
        season = _season(presets=[{"id": "snow", "chance": 10}])
        merged = merge_climate_config(season, None, valley_zone, "Winter")
        assert merged.probabilities == {"snow": 10}

    def test_winter_season_not_overwritten_by_zone_defaults(self):
        """A zone-wide table must not leak clear skies into a snowy winter."""
        season = _season(
            temperatures={"min": -20, "max": -5},
            presets=[{"id": "snow", "chance": 80}, {"id": "blizzard", "chance": 20}],
        )
        zone = ZoneConfig.from_dict(
            {
                "presets": [
                    {"id": "clear", "enabled": True, "chance": 60},
                    {"id": "snow", "enabled": True, "chance": 5},
                ]
            }
        )
        merged = merge_climate_config(season, None, zone, "Winter")
        assert merged.probabilities == {"snow": 80, "blizzard": 20}
        assert merged.temp_range == TemperatureRange(-20, -5)

    def test_override_without_presets_keeps_season(self):
        season = _season(presets=[{"id": "snow", "chance": 10}])
        override = _override(temperatures={"min": "2+"})
        zone = ZoneConfig.from_dict({"presets": [{"id": "clear", "enabled": True, "chance": 60}]})
        assert merge_climate_config(season, override, zone, "Winter").probabilities == {"snow": 10}

    def test_inputs_not_mutated(self):
        season = _season(presets=[{"id": "clear", "chance": 30}])
        override = _override(presets=[{"id": "clear", "chance": 0}])
        merge_climate_config(season, override)
        assert merge_climate_config(season).probabilities == {"clear": 30}


class TestTemperatureMerge:
    """Tests for merging temperature ranges."""

    def test_season_temperatures_are_base(self):
        merged = merge_climate_config(_season(temperatures={"min": 5, "max": 15}))
        assert merged.temp_range == TemperatureRange(5, 15)

    def test_override_modifiers_apply_to_season(self):
        season = _season(temperatures={"min": 10, "max": 20})
        override = _override(temperatures={"min": "5+", "max": "3-"})
        merged = merge_climate_config(season, override)
        assert merged.temp_range == TemperatureRange(15, 17)

    def test_zone_season_temperatures(self):
        zone = ZoneConfig.from_dict(
            {"temperatures": {"Winter": {"min": -10, "max": 0}, "_default": {"min": 10, "max": 20}}}
        )
        merged = merge_climate_config(None, None, zone, "Winter")
        assert merged.temp_range == TemperatureRange(-10, 0)

    def test_zone_default_temperatures(self):
        zone = ZoneConfig.from_dict({"temperatures": {"_default": {"min": 8, "max": 18}}})
        merged = merge_climate_config(None, None, zone, "Monsoon")
        assert merged.temp_range == TemperatureRange(8, 18)

    def test_zone_relative_temperatures_resolve_against_default(self):
        zone = ZoneConfig.from_dict({"temperatures": {"_default": {"min": "5+", "max": "2-"}}})
        merged = merge_climate_config(None, None, zone, None)
        assert merged.temp_range == TemperatureRange(15, 20)

    def test_built_in_default(self):
        assert merge_climate_config().temp_range == TemperatureRange(10, 22)
