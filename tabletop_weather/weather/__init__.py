"""
Procedural weather generation.

Climate merging, inertia, single-day generation and multi-day forecasts,
plus the built-in preset catalogue and climate zone templates.
"""

from tabletop_weather.weather.climate import MergedClimate, merge_climate_config
from tabletop_weather.weather.climate_templates import (
    CLIMATE_ZONE_TEMPLATES,
    ClimateZoneTemplate,
    get_climate_template_options,
    get_climate_zone_template,
    get_climate_zone_template_ids,
    get_default_zone_config,
    normalize_season_name,
)
from tabletop_weather.weather.compass import (
    COMPASS_DIRECTIONS,
    WIND_SPEEDS,
    WindSpeed,
    get_wind_direction_label,
    get_wind_speed_label,
)
from tabletop_weather.weather.forecast import (
    VariedWeather,
    apply_forecast_variance,
    generate_forecast,
)
from tabletop_weather.weather.generator import (
    generate_precipitation,
    generate_temperature_for_preset,
    generate_weather,
    generate_weather_for_date,
    generate_wind,
)
from tabletop_weather.weather.inertia import apply_weather_inertia, get_inertia_weight
from tabletop_weather.weather.presets import (
    ALL_PRESETS,
    WEATHER_CATEGORIES,
    build_preset_catalog,
    get_all_presets,
    get_preset,
    get_presets_by_category,
)
from tabletop_weather.weather.units import (
    TemperatureUnit,
    celsius_to_fahrenheit,
    fahrenheit_to_celsius,
    from_display_delta,
    from_display_unit,
    to_display_delta,
    to_display_unit,
)

__all__ = [
    # Climate
    "MergedClimate",
    "merge_climate_config",
    "apply_weather_inertia",
    "get_inertia_weight",
    # Generation
    "generate_weather",
    "generate_weather_for_date",
    "generate_wind",
    "generate_precipitation",
    "generate_temperature_for_preset",
    # Forecast
    "VariedWeather",
    "apply_forecast_variance",
    "generate_forecast",
    # Presets
    "ALL_PRESETS",
    "WEATHER_CATEGORIES",
    "build_preset_catalog",
    "get_all_presets",
    "get_preset",
    "get_presets_by_category",
    # Templates
    "CLIMATE_ZONE_TEMPLATES",
    "ClimateZoneTemplate",
    "get_climate_template_options",
    "get_climate_zone_template",
    "get_climate_zone_template_ids",
    "get_default_zone_config",
    "normalize_season_name",
    # Wind
    "COMPASS_DIRECTIONS",
    "WIND_SPEEDS",
    "WindSpeed",
    "get_wind_direction_label",
    "get_wind_speed_label",
    # Units
    "TemperatureUnit",
    "celsius_to_fahrenheit",
    "fahrenheit_to_celsius",
    "from_display_delta",
    "from_display_unit",
    "to_display_delta",
    "to_display_unit",
]
