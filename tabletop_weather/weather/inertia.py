"""
Weather inertia: day-to-day persistence of conditions.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional

from tabletop_weather.data_models import PresetEntry
from tabletop_weather.weather.presets import PresetLike, get_preset

logger = logging.getLogger(__name__)


def get_inertia_weight(
    preset_id: str,
    custom_presets: Iterable[PresetLike] = (),
    zone_presets: Iterable[PresetEntry] = (),
) -> float:
    """
    Persistence multiplier for a preset.

    A zone entry's inertia weight wins, then the preset's own, then 1.
    """
    for entry in zone_presets:
        if entry.id == preset_id and entry.inertia_weight is not None:
            return entry.inertia_weight

    preset = get_preset(preset_id, custom_presets)
    if preset is not None:
        return preset.inertia_weight
    return 1.0


def apply_weather_inertia(
    current_weather_id: Optional[str],
    probabilities: Mapping[str, float],
    inertia: float = 0.3,
    custom_presets: Iterable[PresetLike] = (),
    zone_presets: Iterable[PresetEntry] = (),
) -> dict[str, float]:
    """
    Bias a probability table toward yesterday's weather.

    The current preset gains a share of every other preset's weight, so the
    table total is unchanged. The share is inertia scaled by the preset's
    inertia weight, capped at 1 (at 1 nothing else can be picked).

    Args:
        current_weather_id: Preset id of the current weather
        probabilities: Preset id to weight
        inertia: Base persistence, 0-1
        custom_presets: Custom presets, for inertia weights
        zone_presets: Zone preset entries, for inertia weight overrides

    Returns:
        New adjusted table; the input is never modified
    """
    adjusted = dict(probabilities)
    if not current_weather_id or not adjusted.get(current_weather_id) or inertia <= 0:
        return adjusted

    weight = get_inertia_weight(current_weather_id, custom_presets, zone_presets)
    effective = min(1.0, inertia * weight)
    if effective <= 0:
        return adjusted

    current = adjusted[current_weather_id]
    total_other = sum(adjusted.values()) - current
    if total_other <= 0:
        return adjusted

    adjusted[current_weather_id] = current + total_other * effective
    for preset_id in adjusted:
        if preset_id != current_weather_id:
            adjusted[preset_id] *= 1 - effective

    logger.debug(
        f"Inertia {effective:.2f} toward '{current_weather_id}': "
        f"{current} -> {adjusted[current_weather_id]}"
    )
    return adjusted
