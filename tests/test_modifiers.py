"""
Tests for absolute and relative modifiers.
"""

import pytest

from tabletop_weather.modifiers import (
    Modifier,
    ModifierKind,
    apply_temp_modifier,
    parse_chance_modifier,
    parse_modifier,
)


class TestApplyTempModifier:
    """Tests for resolving raw temperature modifiers."""

    def test_plus_suffix_adds(self):
        assert apply_temp_modifier("5+", 10) == 15

    def test_minus_suffix_subtracts(self):
        assert apply_temp_modifier("3-", 10) == 7

    def test_non_numeric_returns_base(self):
        assert apply_temp_modifier("abc", 10) == 10

    def test_none_returns_base(self):
        assert apply_temp_modifier(None, 10) == 10

    def test_number_is_absolute(self):
        assert apply_temp_modifier(15, 10) == 15

    def test_numeric_string_is_absolute(self):
        assert apply_temp_modifier("20", 10) == 20

    def test_negative_numeric_string_is_absolute(self):
        """A leading minus is a negative number, not a delta."""
        assert apply_temp_modifier("-5", 10) == -5

    def test_fractional_delta(self):
        assert apply_temp_modifier("1.5+", 10) == 11.5


class TestParseModifier:
    """Tests for parsing raw values into modifiers."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (15, Modifier.absolute(15)),
            (-3.5, Modifier.absolute(-3.5)),
            ("20", Modifier.absolute(20)),
            ("5+", Modifier.delta(5)),
            ("3-", Modifier.delta(-3)),
            (" 4+ ", Modifier.delta(4)),
        ],
    )
    def test_parses(self, raw, expected):
        assert parse_modifier(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "abc", "+", "5++", True, float("nan"), float("inf"), [5]])
    def test_absent_values(self, raw):
        """Missing, non-numeric and non-finite values parse to None."""
        assert parse_modifier(raw) is None

    def test_modifier_passes_through(self):
        modifier = Modifier.delta(2)
        assert parse_modifier(modifier) is modifier

    def test_kind_flags(self):
        assert Modifier.delta(1).is_delta
        assert Modifier.absolute(1).kind == ModifierKind.ABSOLUTE


class TestParseChanceModifier:
    """Tests for chance modifiers, which also accept sign prefixes."""

    def test_plus_prefix_is_delta(self):
        assert parse_chance_modifier("+10") == Modifier.delta(10)

    def test_minus_prefix_is_delta(self):
        assert parse_chance_modifier("-5") == Modifier.delta(-5)

    def test_suffix_still_delta(self):
        assert parse_chance_modifier("5+") == Modifier.delta(5)

    def test_plain_values_absolute(self):
        assert parse_chance_modifier(25) == Modifier.absolute(25)
        assert parse_chance_modifier("25") == Modifier.absolute(25)


class TestModifierWireFormat:
    """Tests for serializing modifiers back to configuration values."""

    def test_absolute_serializes_as_number(self):
        assert Modifier.absolute(12).to_wire() == 12

    def test_delta_serializes_with_suffix(self):
        assert Modifier.delta(5).to_wire() == "5+"
        assert Modifier.delta(-3).to_wire() == "3-"

    def test_wire_round_trip(self):
        for modifier in (Modifier.delta(2.5), Modifier.delta(-4), Modifier.absolute(-7)):
            assert parse_modifier(modifier.to_wire()) == modifier
