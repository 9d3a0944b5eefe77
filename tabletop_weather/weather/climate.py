"""
Climate merging.

Combines a season's base climate with a zone's adjustments into the two
things a single day of weather needs: a probability table over preset ids
and a temperature range.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from tabletop_weather.data_models import (
    DEFAULT_TEMPERATURE_RANGE,
    PresetEntry,
    SeasonClimate,
    TemperatureRange,
    ZoneConfig,
    ZoneSeasonOverride,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergedClimate:
    """
    Result of merging season and zone climate data.

    Attributes:
        probabilities: Preset id to positive weight, in table order
        temp_range: Resolved temperature range (°C)
    """

    probabilities: dict[str, float] = field(default_factory=dict)
    temp_range: TemperatureRange = DEFAULT_TEMPERATURE_RANGE


def _apply_entries(probabilities: dict[str, float], entries: Iterable[PresetEntry]) -> None:
    """Layer preset entries onto an accumulated probability table in place."""
    for entry in entries:
        if entry.chance is None:
            continue
        current = probabilities.get(entry.id, 0)
        resolved = max(0, entry.chance.apply(current))
        if resolved > 0:
            probabilities[entry.id] = resolved
        else:
            probabilities.pop(entry.id, None)


def merge_climate_config(
    season_climate: Optional[SeasonClimate] = None,
    zone_override: Optional[ZoneSeasonOverride] = None,
    zone_fallback: Optional[ZoneConfig] = None,
    season_name: Optional[str] = None,
) -> MergedClimate:
    """
    Merge a season climate with zone overrides.

    Zone chances are absolute ("15") or relative to the season's chance
    ("+10", "-5"); a preset whose chance reaches zero drops out of the
    table. When there is no season climate and the zone declares no presets
    for this season, its zone-wide enabled presets are used instead.

    Args:
        season_climate: The season's base climate
        zone_override: The zone's override for this season
        zone_fallback: The full zone, used when neither the season nor the
            override supplies presets
        season_name: Season name used to look up zone temperatures

    Returns:
        MergedClimate with the probability table and temperature range
    """
    probabilities: dict[str, float] = {}

    if season_climate is not None:
        for entry in season_climate.presets:
            chance = entry.chance.apply(0) if entry.chance is not None else 0
            if chance > 0:
                probabilities[entry.id] = chance

    if zone_override is not None and zone_override.presets:
        _apply_entries(probabilities, zone_override.presets)
    elif season_climate is None and zone_fallback is not None:
        _apply_entries(
            probabilities,
            (
                entry
                for entry in zone_fallback.presets
                if entry.enabled and entry.chance is not None and entry.chance.amount > 0
            ),
        )

    temp_range = _merge_temperatures(season_climate, zone_override, zone_fallback, season_name)

    logger.debug(
        f"Merged climate for season '{season_name}': "
        f"{len(probabilities)} presets, {temp_range.min}..{temp_range.max}°C"
    )
    return MergedClimate(probabilities=probabilities, temp_range=temp_range)


def _merge_temperatures(
    season_climate: Optional[SeasonClimate],
    zone_override: Optional[ZoneSeasonOverride],
    zone_fallback: Optional[ZoneConfig],
    season_name: Optional[str],
) -> TemperatureRange:
    if season_climate is not None:
        temp_range = season_climate.temperatures or DEFAULT_TEMPERATURE_RANGE
        if zone_override is not None and zone_override.temperatures is not None:
            temp_range = zone_override.temperatures.resolve(temp_range)
        return temp_range

    if zone_fallback is not None:
        bounds = zone_fallback.temperatures.get(season_name) if season_name else None
        if bounds is None:
            bounds = zone_fallback.temperatures.get("_default")
        if bounds is not None:
            return bounds.resolve(DEFAULT_TEMPERATURE_RANGE)

    return DEFAULT_TEMPERATURE_RANGE
