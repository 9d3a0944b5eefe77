"""
Content loading for climate zones, custom presets and season climates.
"""

from tabletop_weather.content_loader.climate_loader import (
    ClimateDataLoader,
    ClimateDirectoryLoadResult,
    ClimateFileLoadResult,
    ClimateLoadError,
    load_custom_presets,
    load_season_climates,
    load_zone_config,
)

__all__ = [
    "ClimateDataLoader",
    "ClimateDirectoryLoadResult",
    "ClimateFileLoadResult",
    "ClimateLoadError",
    "load_custom_presets",
    "load_season_climates",
    "load_zone_config",
]
