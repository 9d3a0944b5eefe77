"""
Tests for loading climate data from JSON files.
"""

import json

import pytest

from tabletop_weather.content_loader import (
    ClimateDataLoader,
    ClimateLoadError,
    load_custom_presets,
    load_season_climates,
    load_zone_config,
)
from tabletop_weather.data_models import TemperatureRange
from tabletop_weather.modifiers import Modifier


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


ZONE = {
    "content_type": "climate_zone",
    "id": "misty_vale",
    "name": "Misty Vale",
    "presets": [{"id": "fog", "enabled": True, "chance": 40}, {"id": "clear", "chance": "10+"}],
    "temperatures": {"_default": {"min": 5, "max": 15}},
    "windSpeedRange": {"min": 0, "max": 3},
}


class TestLoadFile:
    """Tests for ClimateDataLoader.load_file."""

    @pytest.fixture
    def loader(self):
        return ClimateDataLoader()

    def test_single_object(self, loader, tmp_path):
        result = loader.load_file(_write(tmp_path / "zone.json", ZONE))
        assert result.success
        assert result.items_loaded == 1
        assert result.zones[0].id == "misty_vale"
        assert result.zones[0].find_preset("clear").chance == Modifier.delta(10)

    def test_wrapper_format(self, loader, tmp_path):
        data = {
            "_metadata": {"source_file": "vale.json", "content_type": "mixed", "item_count": 2},
            "items": [ZONE, {"content_type": "weather_preset", "id": "glitter", "label": "Glitter"}],
        }
        result = loader.load_file(_write(tmp_path / "mixed.json", data))
        assert result.success
        assert result.metadata.item_count == 2
        assert [zone.id for zone in result.zones] == ["misty_vale"]
        assert [preset.id for preset in result.presets] == ["glitter"]

    def test_list_uses_default_type(self, loader, tmp_path):
        path = _write(tmp_path / "presets.json", [{"id": "glitter"}, {"id": "sparkle"}])
        result = loader.load_file(path, default_type=ClimateDataLoader.PRESET)
        assert [preset.id for preset in result.presets] == ["glitter", "sparkle"]

    def test_unrelated_content_skipped(self, loader, tmp_path):
        data = {"items": [ZONE, {"content_type": "fairy_road", "id": "x"}]}
        result = loader.load_file(_write(tmp_path / "mixed.json", data))
        assert result.success
        assert result.items_loaded == 1

    def test_bad_json(self, loader, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        result = loader.load_file(path)
        assert not result.success
        assert "Failed to read JSON" in result.errors[0]

    def test_invalid_item_recorded(self, loader, tmp_path):
        data = {"items": [ZONE, {"content_type": "weather_preset", "label": "No id"}, "text"]}
        result = loader.load_file(_write(tmp_path / "mixed.json", data))
        assert not result.success
        assert result.items_loaded == 1
        assert result.items_failed == 2
        assert len(result.errors) == 2


class TestLoadDirectory:
    """Tests for ClimateDataLoader.load_directory."""

    def test_collects_all_files(self, tmp_path):
        _write(tmp_path / "a.json", ZONE)
        _write(tmp_path / "b.json", {"content_type": "weather_preset", "id": "glitter"})
        _write(tmp_path / "c.json", {"content_type": "weather_preset"})
        result = ClimateDataLoader().load_directory(tmp_path)
        assert result.files_processed == 3
        assert result.files_successful == 2
        assert result.files_failed == 1
        assert [zone.id for zone in result.all_zones] == ["misty_vale"]
        assert [preset.id for preset in result.all_presets] == ["glitter"]
        assert result.errors[0].startswith("c.json:")

    def test_recursive(self, tmp_path):
        nested = tmp_path / "zones"
        nested.mkdir()
        _write(nested / "vale.json", ZONE)
        loader = ClimateDataLoader()
        assert loader.load_directory(tmp_path).files_processed == 0
        assert len(loader.load_directory(tmp_path, recursive=True).all_zones) == 1

    def test_missing_directory(self, tmp_path):
        result = ClimateDataLoader().load_directory(tmp_path / "nowhere")
        assert result.files_processed == 0
        assert "Directory not found" in result.errors[0]


class TestConvenienceLoaders:
    """Tests for the raising convenience functions."""

    def test_load_zone_config(self, tmp_path):
        zone = load_zone_config(_write(tmp_path / "zone.json", ZONE))
        assert zone.name == "Misty Vale"
        assert zone.wind_speed_range.max == 3

    def test_zone_without_content_type(self, tmp_path):
        data = {key: value for key, value in ZONE.items() if key != "content_type"}
        assert load_zone_config(str(_write(tmp_path / "zone.json", data))).id == "misty_vale"

    def test_zone_file_must_hold_one_zone(self, tmp_path):
        path = _write(tmp_path / "zones.json", [ZONE, ZONE])
        with pytest.raises(ClimateLoadError, match="expected one climate zone"):
            load_zone_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ClimateLoadError, match="file not found"):
            load_zone_config(tmp_path / "missing.json")

    def test_invalid_zone(self, tmp_path):
        data = dict(ZONE, windSpeedRange={"min": 4, "max": 1})
        with pytest.raises(ClimateLoadError) as excinfo:
            load_zone_config(_write(tmp_path / "zone.json", data))
        assert excinfo.value.path == tmp_path / "zone.json"

    def test_load_custom_presets(self, tmp_path):
        path = _write(
            tmp_path / "presets.json",
            [{"id": "glitter", "precipitation": {"type": "glitter", "intensity": 0.4}}],
        )
        presets = load_custom_presets(path)
        assert presets[0].precipitation.intensity == 0.4

    def test_load_season_climates(self, tmp_path):
        data = {
            "content_type": "season_climates",
            "seasons": {
                "Summer": {"temperatures": {"min": 20, "max": 30}, "presets": [{"id": "clear", "chance": 60}]},
                "Winter": {"presets": {"0": {"id": "snow", "chance": 50}, "1": {"id": "fog", "chance": 10}}},
            },
        }
        seasons = load_season_climates(_write(tmp_path / "seasons.json", data))
        assert seasons["Summer"].temperatures == TemperatureRange(20, 30)
        assert [entry.id for entry in seasons["Winter"].presets] == ["snow", "fog"]
        assert seasons["Winter"].temperatures is None

    def test_bare_season_mapping(self, tmp_path):
        data = {"Spring": {"presets": [{"id": "drizzle", "chance": 5}]}}
        seasons = load_season_climates(_write(tmp_path / "seasons.json", data))
        assert list(seasons) == ["Spring"]
