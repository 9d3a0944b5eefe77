"""
Temperature unit conversion.

Weather is always generated and stored in Celsius; these helpers convert
at the display boundary.
"""

from enum import Enum
from typing import Union

Number = Union[int, float]


class TemperatureUnit(str, Enum):
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"


def celsius_to_fahrenheit(celsius: Number) -> float:
    return celsius * 9 / 5 + 32


def fahrenheit_to_celsius(fahrenheit: Number) -> float:
    return (fahrenheit - 32) * 5 / 9


def to_display_unit(celsius: Number, unit: Union[TemperatureUnit, str] = TemperatureUnit.CELSIUS) -> Number:
    """Convert a stored Celsius temperature to the display unit."""
    if TemperatureUnit(unit) == TemperatureUnit.FAHRENHEIT:
        return celsius_to_fahrenheit(celsius)
    return celsius


def from_display_unit(value: Number, unit: Union[TemperatureUnit, str] = TemperatureUnit.CELSIUS) -> Number:
    """Convert a temperature entered in the display unit back to Celsius."""
    if TemperatureUnit(unit) == TemperatureUnit.FAHRENHEIT:
        return fahrenheit_to_celsius(value)
    return value


def to_display_delta(delta: Number, unit: Union[TemperatureUnit, str] = TemperatureUnit.CELSIUS) -> Number:
    """Convert a Celsius temperature difference (no offset) to the display unit."""
    if TemperatureUnit(unit) == TemperatureUnit.FAHRENHEIT:
        return delta * 9 / 5
    return delta


def from_display_delta(delta: Number, unit: Union[TemperatureUnit, str] = TemperatureUnit.CELSIUS) -> Number:
    """Convert a display-unit temperature difference back to Celsius."""
    if TemperatureUnit(unit) == TemperatureUnit.FAHRENHEIT:
        return delta * 5 / 9
    return delta
