"""
Shared data structures for the weather engine.

Configuration records are parsed and validated once, at the boundary, by
their from_dict constructors. Everything past that point works with these
immutable records and never re-inspects raw dictionaries. Output records
(GeneratedWeather, ForecastEntry) are plain values that serialize with
to_dict.

Wire dictionaries keep the host platform's camelCase keys (tempMin,
inertiaWeight, seasonOverrides, ...) so existing climate configuration can
be loaded unchanged.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping, Optional, Union

from tabletop_weather.modifiers import Modifier, parse_chance_modifier, parse_modifier

Number = Union[int, float]


# =============================================================================
# ERRORS
# =============================================================================


class WeatherEngineError(Exception):
    """Base class for all weather engine errors."""


class ConfigValidationError(WeatherEngineError, ValueError):
    """Raised when climate or preset configuration is structurally invalid."""


# =============================================================================
# VALIDATION HELPERS
# =============================================================================


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ConfigValidationError(f"{what} must be a mapping, got {type(data).__name__}")
    return data


def _finite(value: Any, what: str) -> Number:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigValidationError(f"{what} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ConfigValidationError(f"{what} must be finite, got {value!r}")
    return value


def _optional_finite(value: Any, what: str) -> Optional[Number]:
    if value is None:
        return None
    return _finite(value, what)


def _non_negative(value: Any, what: str) -> Number:
    number = _finite(value, what)
    if number < 0:
        raise ConfigValidationError(f"{what} must not be negative, got {number!r}")
    return number


def _bounded_modifier(raw: Any, what: str) -> Optional[Modifier]:
    # Raw numbers are checked here so inf/nan are rejected, not silently ignored
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        _finite(raw, what)
    return parse_modifier(raw)


def table_entries(raw: Any, what: str) -> list[Any]:
    """
    Normalize a preset table to a list.

    Host configuration stores tables either as lists or as index-keyed
    mappings ({0: {...}, 1: {...}}); mappings are ordered by numeric key.
    """
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return list(raw)
    if isinstance(raw, Mapping):
        keys = list(raw.keys())
        try:
            keys.sort(key=lambda k: int(k))
        except (TypeError, ValueError):
            pass
        return [raw[k] for k in keys]
    raise ConfigValidationError(f"{what} must be a list or index-keyed mapping")


# =============================================================================
# TEMPERATURE
# =============================================================================


@dataclass(frozen=True)
class TemperatureRange:
    """A resolved temperature range in degrees Celsius."""

    min: Number
    max: Number

    def contains(self, value: Number) -> bool:
        return self.min <= value <= self.max

    def to_dict(self) -> dict[str, Number]:
        return {"min": self.min, "max": self.max}

    @classmethod
    def from_dict(
        cls,
        data: Any,
        default: Optional["TemperatureRange"] = None,
    ) -> "TemperatureRange":
        data = _require_mapping(data, "temperatures")
        base = default or DEFAULT_TEMPERATURE_RANGE
        low = data.get("min")
        high = data.get("max")
        low = base.min if low is None else _finite(low, "temperatures.min")
        high = base.max if high is None else _finite(high, "temperatures.max")
        if low > high:
            raise ConfigValidationError(f"temperatures.min ({low}) exceeds max ({high})")
        return cls(min=low, max=high)


DEFAULT_TEMPERATURE_RANGE = TemperatureRange(min=10, max=22)


@dataclass(frozen=True)
class TemperatureBounds:
    """
    Temperature bounds that may be absolute or relative to a base range.

    Used by zone configuration, where "5+" means five degrees warmer than
    the season's own bound.
    """

    min: Optional[Modifier] = None
    max: Optional[Modifier] = None

    def resolve(self, base: TemperatureRange) -> TemperatureRange:
        return TemperatureRange(
            min=self.min.apply(base.min) if self.min else base.min,
            max=self.max.apply(base.max) if self.max else base.max,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "min": self.min.to_wire() if self.min else None,
            "max": self.max.to_wire() if self.max else None,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "TemperatureBounds":
        data = _require_mapping(data, "temperatures")
        low = _bounded_modifier(data.get("min"), "temperatures.min")
        high = _bounded_modifier(data.get("max"), "temperatures.max")
        if low and high and not low.is_delta and not high.is_delta and low.amount > high.amount:
            raise ConfigValidationError(f"temperatures.min ({low.amount}) exceeds max ({high.amount})")
        return cls(min=low, max=high)


# =============================================================================
# PRESET COMPONENTS
# =============================================================================


@dataclass(frozen=True)
class WindSettings:
    """Wind on a 0-5 speed scale with an optional compass bearing."""

    speed: int = 0
    direction: Optional[float] = None  # Degrees, 0 = north
    forced: bool = False  # Forced winds are never clamped or randomized

    def to_dict(self) -> dict[str, Any]:
        return {"speed": self.speed, "direction": self.direction, "forced": self.forced}

    @classmethod
    def from_dict(cls, data: Any) -> "WindSettings":
        if data is None:
            return cls()
        data = _require_mapping(data, "wind")
        speed = _non_negative(data.get("speed", 0), "wind.speed")
        if speed > 5:
            raise ConfigValidationError(f"wind.speed must be on the 0-5 scale, got {speed!r}")
        return cls(
            speed=int(speed),
            direction=_optional_finite(data.get("direction"), "wind.direction"),
            forced=bool(data.get("forced", False)),
        )


@dataclass(frozen=True)
class PrecipitationSettings:
    """Precipitation type (None for dry weather) and intensity 0-1."""

    type: Optional[str] = None
    intensity: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "intensity": self.intensity}

    @classmethod
    def from_dict(cls, data: Any) -> "PrecipitationSettings":
        if data is None:
            return cls()
        data = _require_mapping(data, "precipitation")
        intensity = _non_negative(data.get("intensity", 0), "precipitation.intensity")
        if intensity > 1:
            raise ConfigValidationError(
                f"precipitation.intensity must be between 0 and 1, got {intensity!r}"
            )
        precip_type = data.get("type")
        return cls(type=str(precip_type) if precip_type else None, intensity=float(intensity))


@dataclass(frozen=True)
class WindSpeedRange:
    """Zone limits for unforced wind speed."""

    min: int = 0
    max: int = 5

    def clamp(self, speed: int) -> int:
        return max(self.min, min(self.max, speed))

    def to_dict(self) -> dict[str, int]:
        return {"min": self.min, "max": self.max}

    @classmethod
    def from_dict(cls, data: Any) -> "WindSpeedRange":
        data = _require_mapping(data, "windSpeedRange")
        low = int(_non_negative(data.get("min", 0), "windSpeedRange.min"))
        high = int(_non_negative(data.get("max", 5), "windSpeedRange.max"))
        if low > high:
            raise ConfigValidationError(f"windSpeedRange.min ({low}) exceeds max ({high})")
        return cls(min=low, max=high)


# =============================================================================
# WEATHER PRESET
# =============================================================================


@dataclass(frozen=True)
class WeatherPreset:
    """
    A named weather condition template.

    Attributes:
        id: Unique preset identifier (e.g., "rain")
        label: Display label
        category: Grouping key; forecast variance only swaps within a category
        chance: Default selection weight
        temp_min: Preset's own minimum temperature (°C)
        temp_max: Preset's own maximum temperature (°C)
        wind: Default wind
        precipitation: Default precipitation
        inertia_weight: Persistence multiplier (0 never persists, >1 sticky)
    """

    id: str
    label: str
    category: str = "custom"
    chance: float = 1.0
    temp_min: Optional[Number] = None
    temp_max: Optional[Number] = None
    wind: WindSettings = field(default_factory=WindSettings)
    precipitation: PrecipitationSettings = field(default_factory=PrecipitationSettings)
    inertia_weight: float = 1.0
    description: str = ""
    icon: str = "fa-question"
    color: str = "#888888"

    @classmethod
    def stub(cls, preset_id: str) -> "WeatherPreset":
        """Placeholder for a preset id that is not in any catalogue."""
        return cls(id=preset_id, label=preset_id, category="custom", icon="fa-question", color="#888888")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "description": self.description,
            "icon": self.icon,
            "color": self.color,
            "category": self.category,
            "chance": self.chance,
            "tempMin": self.temp_min,
            "tempMax": self.temp_max,
            "wind": self.wind.to_dict(),
            "precipitation": self.precipitation.to_dict(),
            "inertiaWeight": self.inertia_weight,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "WeatherPreset":
        data = _require_mapping(data, "preset")
        preset_id = str(data.get("id") or "").strip()
        if not preset_id:
            raise ConfigValidationError("preset is missing required field: id")
        temp_min = _optional_finite(data.get("tempMin"), f"{preset_id}.tempMin")
        temp_max = _optional_finite(data.get("tempMax"), f"{preset_id}.tempMax")
        if temp_min is not None and temp_max is not None and temp_min > temp_max:
            raise ConfigValidationError(f"{preset_id}.tempMin ({temp_min}) exceeds tempMax ({temp_max})")
        return cls(
            id=preset_id,
            label=str(data.get("label") or preset_id),
            category=str(data.get("category") or "custom"),
            chance=float(_non_negative(data.get("chance", 1.0), f"{preset_id}.chance")),
            temp_min=temp_min,
            temp_max=temp_max,
            wind=WindSettings.from_dict(data.get("wind")),
            precipitation=PrecipitationSettings.from_dict(data.get("precipitation")),
            inertia_weight=float(
                _non_negative(data.get("inertiaWeight", 1.0), f"{preset_id}.inertiaWeight")
            ),
            description=str(data.get("description") or ""),
            icon=str(data.get("icon") or "fa-question"),
            color=str(data.get("color") or "#888888"),
        )


# =============================================================================
# CLIMATE CONFIGURATION
# =============================================================================


@dataclass(frozen=True)
class PresetEntry:
    """
    One row of a climate preset table.

    Season climates only use id and chance. Zone tables may also disable a
    preset, shift its temperature range, or override its inertia weight.
    """

    id: str
    chance: Optional[Modifier] = None
    enabled: bool = True
    temp_min: Optional[Modifier] = None
    temp_max: Optional[Modifier] = None
    inertia_weight: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "enabled": self.enabled}
        if self.chance is not None:
            data["chance"] = self.chance.to_wire()
        if self.temp_min is not None:
            data["tempMin"] = self.temp_min.to_wire()
        if self.temp_max is not None:
            data["tempMax"] = self.temp_max.to_wire()
        if self.inertia_weight is not None:
            data["inertiaWeight"] = self.inertia_weight
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "PresetEntry":
        data = _require_mapping(data, "preset entry")
        preset_id = str(data.get("id") or "").strip()
        if not preset_id:
            raise ConfigValidationError("preset entry is missing required field: id")

        raw_chance = data.get("chance")
        if isinstance(raw_chance, (int, float)) and not isinstance(raw_chance, bool):
            _non_negative(raw_chance, f"{preset_id}.chance")
        chance = parse_chance_modifier(raw_chance)
        if chance is not None and not chance.is_delta and chance.amount < 0:
            raise ConfigValidationError(f"{preset_id}.chance must not be negative")

        inertia_weight = data.get("inertiaWeight")
        return cls(
            id=preset_id,
            chance=chance,
            enabled=data.get("enabled") is not False,
            temp_min=_bounded_modifier(data.get("tempMin"), f"{preset_id}.tempMin"),
            temp_max=_bounded_modifier(data.get("tempMax"), f"{preset_id}.tempMax"),
            inertia_weight=(
                None
                if inertia_weight is None
                else float(_non_negative(inertia_weight, f"{preset_id}.inertiaWeight"))
            ),
        )


def _preset_table(raw: Any, what: str) -> tuple[PresetEntry, ...]:
    return tuple(PresetEntry.from_dict(entry) for entry in table_entries(raw, what))


@dataclass(frozen=True)
class SeasonClimate:
    """A season's base climate as supplied by the calendar."""

    temperatures: Optional[TemperatureRange] = None
    presets: tuple[PresetEntry, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "temperatures": self.temperatures.to_dict() if self.temperatures else None,
            "presets": [entry.to_dict() for entry in self.presets],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "SeasonClimate":
        data = _require_mapping(data, "season climate")
        temps = data.get("temperatures")
        return cls(
            temperatures=TemperatureRange.from_dict(temps) if temps is not None else None,
            presets=_preset_table(data.get("presets"), "season climate presets"),
        )


@dataclass(frozen=True)
class ZoneSeasonOverride:
    """A zone's adjustments to one season's climate."""

    temperatures: Optional[TemperatureBounds] = None
    presets: tuple[PresetEntry, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "temperatures": self.temperatures.to_dict() if self.temperatures else None,
            "presets": [entry.to_dict() for entry in self.presets],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ZoneSeasonOverride":
        data = _require_mapping(data, "season override")
        temps = data.get("temperatures")
        return cls(
            temperatures=TemperatureBounds.from_dict(temps) if temps is not None else None,
            presets=_preset_table(data.get("presets"), "season override presets"),
        )


@dataclass(frozen=True)
class ZoneConfig:
    """
    A climate zone: a location's climate identity.

    Attributes:
        id: Zone identifier
        name: Display name
        presets: Zone-wide preset table (fallback when a season has no data)
        season_overrides: Per-season adjustments keyed by season name
        temperatures: Per-season bounds keyed by season name, plus "_default"
        wind_speed_range: Limits for unforced wind speed
        wind_directions: Compass id to prevailing-wind weight
    """

    id: str = ""
    name: str = ""
    description: str = ""
    presets: tuple[PresetEntry, ...] = ()
    season_overrides: Mapping[str, ZoneSeasonOverride] = field(default_factory=dict)
    temperatures: Mapping[str, TemperatureBounds] = field(default_factory=dict)
    wind_speed_range: Optional[WindSpeedRange] = None
    wind_directions: Mapping[str, float] = field(default_factory=dict)

    def get_season_override(self, season: Optional[str]) -> Optional[ZoneSeasonOverride]:
        if not season:
            return None
        return self.season_overrides.get(season)

    def find_preset(self, preset_id: str, enabled_only: bool = False) -> Optional[PresetEntry]:
        for entry in self.presets:
            if entry.id == preset_id and (entry.enabled or not enabled_only):
                return entry
        return None

    def with_presets(self, presets: Iterable[PresetEntry]) -> "ZoneConfig":
        return replace(self, presets=tuple(presets))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "presets": [entry.to_dict() for entry in self.presets],
            "seasonOverrides": {
                name: override.to_dict() for name, override in self.season_overrides.items()
            },
            "temperatures": {name: bounds.to_dict() for name, bounds in self.temperatures.items()},
            "windSpeedRange": self.wind_speed_range.to_dict() if self.wind_speed_range else None,
            "windDirections": dict(self.wind_directions),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ZoneConfig":
        data = _require_mapping(data, "zone config")

        overrides = _require_mapping(data.get("seasonOverrides") or {}, "seasonOverrides")
        temperatures = _require_mapping(data.get("temperatures") or {}, "temperatures")
        directions = _require_mapping(data.get("windDirections") or {}, "windDirections")
        wind_range = data.get("windSpeedRange")

        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
            presets=_preset_table(data.get("presets"), "zone presets"),
            season_overrides={
                str(name): ZoneSeasonOverride.from_dict(override)
                for name, override in overrides.items()
                if override is not None
            },
            temperatures={
                str(name): TemperatureBounds.from_dict(bounds)
                for name, bounds in temperatures.items()
                if bounds is not None
            },
            wind_speed_range=WindSpeedRange.from_dict(wind_range) if wind_range else None,
            wind_directions={
                str(compass_id): float(_non_negative(weight, f"windDirections.{compass_id}"))
                for compass_id, weight in directions.items()
                if weight is not None and weight != ""
            },
        )


@dataclass(frozen=True)
class SeasonInfo:
    """What the calendar reports about the season on a given date."""

    name: Optional[str] = None
    climate: Optional[SeasonClimate] = None

    @classmethod
    def from_dict(cls, data: Any) -> "SeasonInfo":
        data = _require_mapping(data, "season")
        climate = data.get("climate")
        return cls(
            name=data.get("name"),
            climate=SeasonClimate.from_dict(climate) if climate is not None else None,
        )


# =============================================================================
# GENERATED OUTPUT
# =============================================================================


@dataclass(frozen=True)
class GeneratedWeather:
    """The result of one weather generation call."""

    preset: WeatherPreset
    temperature: int
    wind: WindSettings = field(default_factory=WindSettings)
    precipitation: PrecipitationSettings = field(default_factory=PrecipitationSettings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "preset": self.preset.to_dict(),
            "temperature": self.temperature,
            "wind": self.wind.to_dict(),
            "precipitation": self.precipitation.to_dict(),
        }


@dataclass(frozen=True)
class ForecastEntry:
    """
    One day of a forecast.

    Months are 0-indexed and days 1-indexed, matching the calendar
    callbacks the forecast was built with.
    """

    year: int
    month: int
    day: int
    preset: WeatherPreset
    temperature: int
    wind: WindSettings = field(default_factory=WindSettings)
    precipitation: PrecipitationSettings = field(default_factory=PrecipitationSettings)
    is_varied: bool = False

    @property
    def date(self) -> tuple[int, int, int]:
        return (self.year, self.month, self.day)

    @classmethod
    def from_weather(
        cls,
        year: int,
        month: int,
        day: int,
        weather: GeneratedWeather,
        is_varied: bool = False,
    ) -> "ForecastEntry":
        return cls(
            year=year,
            month=month,
            day=day,
            preset=weather.preset,
            temperature=weather.temperature,
            wind=weather.wind,
            precipitation=weather.precipitation,
            is_varied=is_varied,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "preset": self.preset.to_dict(),
            "temperature": self.temperature,
            "wind": self.wind.to_dict(),
            "precipitation": self.precipitation.to_dict(),
            "isVaried": self.is_varied,
        }
