"""
Absolute and relative value modifiers.

Climate configuration stores chances and temperature bounds either as plain
numbers or as compact relative strings:

    15      absolute 15
    "20"    absolute 20
    "-5"    absolute -5 (temperature) / minus 5 (chance)
    "5+"    base plus 5
    "3-"    base minus 3
    "+10"   base plus 10 (chance)

Raw values are parsed once into a Modifier and applied against a base value
wherever a resolved number is needed.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

Number = Union[int, float]

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


class ModifierKind(str, Enum):
    """How a modifier combines with its base value."""

    ABSOLUTE = "absolute"  # Replaces the base
    DELTA = "delta"  # Added to the base


@dataclass(frozen=True)
class Modifier:
    """A parsed chance or temperature modifier."""

    kind: ModifierKind
    amount: Number

    @classmethod
    def absolute(cls, amount: Number) -> "Modifier":
        return cls(ModifierKind.ABSOLUTE, amount)

    @classmethod
    def delta(cls, amount: Number) -> "Modifier":
        return cls(ModifierKind.DELTA, amount)

    @property
    def is_delta(self) -> bool:
        return self.kind == ModifierKind.DELTA

    def apply(self, base: Number) -> Number:
        """Resolve this modifier against a base value."""
        if self.kind == ModifierKind.DELTA:
            return base + self.amount
        return self.amount

    def to_wire(self) -> Union[Number, str]:
        """Serialize back to the configuration format."""
        if self.kind == ModifierKind.ABSOLUTE:
            return self.amount
        sign = "+" if self.amount >= 0 else "-"
        return f"{_format_number(abs(self.amount))}{sign}"

    def __str__(self) -> str:
        return str(self.to_wire())


def parse_modifier(raw: Any) -> Optional[Modifier]:
    """
    Parse a temperature-style modifier.

    Strings ending in "+" or "-" are deltas on their numeric prefix, other
    numeric strings and plain numbers are absolute. Missing values and
    non-numeric text parse to None, meaning "use the base value".
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Modifier):
        return raw
    if isinstance(raw, (int, float)):
        return Modifier.absolute(raw) if math.isfinite(raw) else None
    if not isinstance(raw, str):
        return None

    text = raw.strip()
    if text.endswith("+") or text.endswith("-"):
        amount = _to_number(text[:-1])
        if amount is None:
            return None
        return Modifier.delta(amount if text.endswith("+") else -amount)

    amount = _to_number(text)
    return Modifier.absolute(amount) if amount is not None else None


def parse_chance_modifier(raw: Any) -> Optional[Modifier]:
    """
    Parse a chance modifier.

    Same rules as parse_modifier, plus a leading sign on a string
    ("+10", "-5") marks a delta against the accumulated chance.
    """
    if isinstance(raw, str):
        text = raw.strip()
        if text[:1] in ("+", "-") and not text.endswith(("+", "-")):
            amount = _to_number(text)
            if amount is not None:
                return Modifier.delta(amount)
    return parse_modifier(raw)


def apply_temp_modifier(raw: Any, base: Number) -> Number:
    """
    Apply a raw modifier value to a base number.

    Examples:
        apply_temp_modifier("5+", 10) -> 15
        apply_temp_modifier("3-", 10) -> 7
        apply_temp_modifier("abc", 10) -> 10
        apply_temp_modifier(None, 10) -> 10
        apply_temp_modifier(15, 10) -> 15
    """
    modifier = parse_modifier(raw)
    if modifier is None:
        return base
    return modifier.apply(base)


def _to_number(text: str) -> Optional[Number]:
    text = text.strip()
    if not _NUMBER_RE.match(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value


def _format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
