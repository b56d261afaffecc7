"""
Unit tests for stat_display.py - input parsing and value formatting.
"""
from decimal import Decimal

import pytest
from stat_catalog import CRITICAL_HIT, PIETY, SPEED
from stat_display import (
    DisplayRow,
    build_display_row,
    build_display_rows,
    format_decimal,
    format_percent,
    format_signed,
    format_value,
    parse_stat_input,
)
from stat_engine import Breakpoints, DerivedValue, StatDefinition, StatEngine, derived_value


class TestParseStatInput:
    """Invalid input becomes 0 instead of an error."""

    @pytest.mark.parametrize("text, expected", [
        ("412", 412),
        ("  412", 412),
        ("412abc", 412),
        ("3.9", 3),
        ("-5", -5),
        ("+7", 7),
        ("abc", 0),
        ("", 0),
        (None, 0),
        ("   ", 0),
        ("0x1A", 26),
        ("-0x1a", -26),
        ("0X10 extra", 16),
        ("0x", 0),
        ("0xG", 0),
        ("\u0663\u0668\u0660", 0),
        ("4\u0663", 4),
    ])
    def test_parse(self, text, expected):
        assert parse_stat_input(text) == Decimal(expected)

    def test_returns_decimal(self):
        assert isinstance(parse_stat_input("380"), Decimal)


class TestFormatting:
    """Tests for decimal, signed and percent formatting."""

    def test_format_decimal_strips_zeros(self):
        assert format_decimal(Decimal("1.020")) == "1.02"
        assert format_decimal(Decimal("0.400")) == "0.4"

    def test_format_decimal_no_exponent(self):
        assert format_decimal(Decimal("2500")) == "2500"
        assert format_decimal(Decimal("102.000")) == "102"

    def test_format_decimal_zero(self):
        assert format_decimal(Decimal("0.000")) == "0"
        assert format_decimal(Decimal("-0")) == "0"

    def test_format_signed(self):
        assert format_signed(Decimal(3)) == "+3"
        assert format_signed(Decimal(-2)) == "-2"
        assert format_signed(Decimal(0)) == "+0"

    def test_format_percent(self):
        assert format_percent(Decimal("0.05")) == "5%"
        assert format_percent(Decimal("1.02")) == "102%"
        assert format_percent(Decimal("0.051")) == "5.1%"

    def test_format_value_percent(self):
        assert format_value(Decimal("0.05"), True) == "5% (0.05)"

    def test_format_value_raw(self):
        assert format_value(Decimal(0), False) == "0"
        assert format_value(Decimal("2.5"), False) == "2.5"


class TestDisplayRows:
    """Tests for turning engine output into display rows."""

    def test_critical_hit_rows(self):
        rows = build_display_rows(StatEngine(CRITICAL_HIT))
        assert [row.display_name for row in rows] == ['Crit Rate', 'Bonus Dmg', 'Expected Dmg']

        rate = rows[0]
        assert rate.formatted_value == "5% (0.05)"
        assert rate.lesser_breakpoint == "379"
        assert rate.lesser_delta == "-1"
        assert rate.greater_breakpoint == "397"
        assert rate.greater_delta == "+17"
        assert rate.to_text() == (
            "Crit Rate = 5% (0.05) | next lowest: 379 (-1), next highest: 397 (+17)"
        )

        edmg = rows[2]
        assert not edmg.has_breakpoints
        assert edmg.lesser_breakpoint is None
        assert edmg.to_text() == "Expected Dmg = 102% (1.02)"

    def test_piety_is_not_percent(self):
        [row] = build_display_rows(StatEngine(PIETY))
        assert row.formatted_value == "0"
        assert not row.is_percent

    def test_speed_inverted_deltas(self):
        rows = build_display_rows(StatEngine(SPEED))
        row = [r for r in rows if r.display_name == '2.5s'][0]
        assert row.formatted_value == "2.5"
        assert row.lesser_delta == "+26"
        assert row.greater_delta == "-77"

    def test_below_base_has_no_breakpoints(self):
        engine = StatEngine(CRITICAL_HIT)
        engine.set_value(0)
        rows = build_display_rows(engine)
        assert not any(row.has_breakpoints for row in rows)

    def test_inconclusive_marker(self):
        engine = StatEngine(StatDefinition('Flat', 0, 1, (
            derived_value('c', 'Constant', lambda v, e, i: Decimal(1)),
        )), search_limit=2)
        [row] = build_display_rows(engine)
        assert row.inconclusive
        assert row.to_text().endswith("(search limit reached)")

    def test_row_from_record(self):
        record = DerivedValue('mit', 'Mitigation%', Decimal("0.97"), True,
                              Breakpoints(Decimal(500), Decimal(440)))
        row = build_display_row(record, Decimal(470))
        assert row == DisplayRow(
            display_name='Mitigation%',
            formatted_value="97% (0.97)",
            is_percent=True,
            has_breakpoints=True,
            lesser_breakpoint="500",
            lesser_delta="+30",
            greater_breakpoint="440",
            greater_delta="-30",
        )
