"""Climate Data Loader.

Loads zone configurations, custom weather presets and season climates
from JSON files.

Supported formats:
1) Single-object file:
    {
      "content_type": "climate_zone",
      "id": "misty_vale",
      "presets": [{"id": "fog", "enabled": true, "chance": 40}, ...],
      "temperatures": {"_default": {"min": 5, "max": 15}},
      "windSpeedRange": {"min": 0, "max": 3}
    }

2) Wrapper file (one or many items):
    { "_metadata": {...}, "items": [ <objects> ] }

3) Season climates file, keyed by season name:
    {
      "content_type": "season_climates",
      "seasons": {"Summer": {"temperatures": {...}, "presets": [...]}}
    }

Objects without a content_type are parsed as whatever the caller asked for.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from tabletop_weather.data_models import (
    ConfigValidationError,
    SeasonClimate,
    WeatherEngineError,
    WeatherPreset,
    ZoneConfig,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ClimateLoadError(WeatherEngineError):
    """Raised when a climate data file cannot be read or validated."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


# =============================================================================
# RESULT DATACLASSES
# =============================================================================

@dataclass
class ClimateFileMetadata:
    """Metadata from a JSON file that optionally includes _metadata."""

    source_file: str = ""
    content_type: str = ""
    item_count: int = 0
    note: str = ""


@dataclass
class ClimateFileLoadResult:
    file_path: Path
    success: bool
    metadata: Optional[ClimateFileMetadata] = None
    items_loaded: int = 0
    items_failed: int = 0
    errors: list[str] = field(default_factory=list)
    zones: list[ZoneConfig] = field(default_factory=list)
    presets: list[WeatherPreset] = field(default_factory=list)
    seasons: dict[str, SeasonClimate] = field(default_factory=dict)


@dataclass
class ClimateDirectoryLoadResult:
    directory: Path
    files_processed: int = 0
    files_successful: int = 0
    files_failed: int = 0
    file_results: list[ClimateFileLoadResult] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    all_zones: list[ZoneConfig] = field(default_factory=list)
    all_presets: list[WeatherPreset] = field(default_factory=list)


# =============================================================================
# LOADER
# =============================================================================

class ClimateDataLoader:
    """Loads climate zones, custom presets and season climates from JSON files."""

    ZONE = "climate_zone"
    PRESET = "weather_preset"
    SEASONS = "season_climates"

    def load_directory(
        self,
        directory: Path,
        recursive: bool = False,
        pattern: str = "*.json",
    ) -> ClimateDirectoryLoadResult:
        result = ClimateDirectoryLoadResult(directory=directory)

        if not directory.exists():
            result.errors.append(f"Directory not found: {directory}")
            return result

        files = list(directory.rglob(pattern) if recursive else directory.glob(pattern))
        result.files_processed = len(files)

        for f in sorted(files):
            fr = self.load_file(f)
            result.file_results.append(fr)
            if fr.success:
                result.files_successful += 1
            else:
                result.files_failed += 1
                result.errors.extend(f"{f.name}: {e}" for e in fr.errors)
            result.all_zones.extend(fr.zones)
            result.all_presets.extend(fr.presets)

        logger.info(
            f"Loaded {len(result.all_zones)} zones and {len(result.all_presets)} presets "
            f"from {result.files_successful}/{result.files_processed} files in {directory}"
        )
        return result

    def load_file(self, file_path: Path, default_type: str = ZONE) -> ClimateFileLoadResult:
        result = ClimateFileLoadResult(file_path=file_path, success=False)

        try:
            raw = json.loads(file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            result.errors.append(f"Failed to read JSON: {e}")
            return result

        # Wrapper format: {"_metadata": {...}, "items": [...]}
        if isinstance(raw, dict) and isinstance(raw.get("items"), list):
            result.metadata = self._parse_metadata(raw.get("_metadata"))
            for item in raw["items"]:
                self._parse_item(item, default_type, result)
        elif isinstance(raw, list):
            for item in raw:
                self._parse_item(item, default_type, result)
        else:
            self._parse_item(raw, default_type, result)

        result.success = result.items_loaded > 0 and result.items_failed == 0
        return result

    # ----- parsing helpers -----

    def _parse_metadata(self, meta: Any) -> Optional[ClimateFileMetadata]:
        if not isinstance(meta, dict):
            return None
        return ClimateFileMetadata(
            source_file=str(meta.get("source_file", "")),
            content_type=str(meta.get("content_type", "")),
            item_count=int(meta.get("item_count", 0) or 0),
            note=str(meta.get("note", "")),
        )

    def _parse_item(self, obj: Any, default_type: str, result: ClimateFileLoadResult) -> None:
        if not isinstance(obj, dict):
            result.items_failed += 1
            result.errors.append("Top-level item is not an object")
            return

        ctype = str(obj.get("content_type") or default_type).strip().lower()
        try:
            if ctype == self.ZONE:
                result.zones.append(ZoneConfig.from_dict(obj))
            elif ctype == self.PRESET:
                result.presets.append(WeatherPreset.from_dict(obj))
            elif ctype == self.SEASONS:
                seasons = obj.get("seasons", obj)
                if not isinstance(seasons, dict):
                    raise ConfigValidationError("seasons must be a mapping")
                for name, climate in seasons.items():
                    if name == "content_type":
                        continue
                    result.seasons[str(name)] = SeasonClimate.from_dict(climate)
            else:
                # Unrelated content in a mixed directory
                return
        except ConfigValidationError as e:
            result.items_failed += 1
            result.errors.append(f"Invalid {ctype}: {e}")
            return

        result.items_loaded += 1


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def _load(path: PathLike, default_type: str) -> ClimateFileLoadResult:
    file_path = Path(path)
    if not file_path.exists():
        raise ClimateLoadError(file_path, "file not found")
    result = ClimateDataLoader().load_file(file_path, default_type=default_type)
    if result.errors:
        raise ClimateLoadError(file_path, "; ".join(result.errors))
    return result


def load_zone_config(path: PathLike) -> ZoneConfig:
    """Load a single climate zone from a JSON file."""
    result = _load(path, ClimateDataLoader.ZONE)
    if len(result.zones) != 1:
        raise ClimateLoadError(Path(path), f"expected one climate zone, found {len(result.zones)}")
    zone = result.zones[0]
    logger.info(f"Loaded climate zone '{zone.id}' from {path}")
    return zone


def load_custom_presets(path: PathLike) -> list[WeatherPreset]:
    """Load custom weather presets from a JSON file (object, list or wrapper)."""
    result = _load(path, ClimateDataLoader.PRESET)
    logger.info(f"Loaded {len(result.presets)} custom presets from {path}")
    return result.presets


def load_season_climates(path: PathLike) -> dict[str, SeasonClimate]:
    """Load season climates keyed by season name from a JSON file."""
    result = _load(path, ClimateDataLoader.SEASONS)
    logger.info(f"Loaded {len(result.seasons)} season climates from {path}")
    return result.seasons
