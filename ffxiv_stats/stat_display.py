"""
FFXIV Stat Calculator - Display Helpers
=======================================
Shared input parsing and value formatting for the UI.
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from stat_engine import DerivedValue, StatEngine

# Leading integer of a text field: "  412abc" -> 412, "0x1A" -> 26
_LEADING_INT = re.compile(r"\s*([+-]?)(?:0[xX]([0-9a-fA-F]+)|([0-9]+))")


def parse_stat_input(text: Optional[str]) -> Decimal:
    """
    Parse user text into a stat value.

    Uses the leading integer and ignores the rest ("412abc" -> 412,
    "3.9" -> 3). A 0x prefix reads the digits as hex. Only ASCII digits
    count. Anything without a leading integer becomes 0.
    """
    match = _LEADING_INT.match(text or "")
    if not match:
        return Decimal(0)
    sign, hex_digits, digits = match.groups()
    number = int(hex_digits, 16) if hex_digits else int(digits)
    return Decimal(-number if sign == "-" else number)


def format_decimal(value: Decimal) -> str:
    """Plain decimal string without trailing zeros or exponent (1.020 -> "1.02")."""
    if value == 0:
        return "0"
    return format(value.normalize(), 'f')


def format_signed(value: Decimal) -> str:
    """Format as +Y or -Y (zero is +0)."""
    text = format_decimal(value)
    return f"+{text}" if value >= 0 else text


def format_percent(value: Decimal) -> str:
    """0.05 -> "5%" """
    return f"{format_decimal(value * 100)}%"


def format_value(value: Decimal, is_percent: bool) -> str:
    """Percent values show both forms, e.g. "5% (0.05)"."""
    if is_percent:
        return f"{format_percent(value)} ({format_decimal(value)})"
    return format_decimal(value)


@dataclass
class DisplayRow:
    """Derived value formatted for one line of output."""
    display_name: str
    formatted_value: str
    is_percent: bool
    has_breakpoints: bool
    lesser_breakpoint: Optional[str] = None
    lesser_delta: Optional[str] = None
    greater_breakpoint: Optional[str] = None
    greater_delta: Optional[str] = None
    inconclusive: bool = False

    def to_text(self) -> str:
        """Single-line text, e.g. 'Crit Rate = 5% (0.05) | next lowest: 379 (-1), ...'"""
        text = f"{self.display_name} = {self.formatted_value}"
        if not self.has_breakpoints:
            return text
        text += (f" | next lowest: {self.lesser_breakpoint} ({self.lesser_delta}),"
                 f" next highest: {self.greater_breakpoint} ({self.greater_delta})")
        if self.inconclusive:
            text += " (search limit reached)"
        return text


def build_display_row(derived: DerivedValue, current_value: Decimal) -> DisplayRow:
    row = DisplayRow(
        display_name=derived.display_name,
        formatted_value=format_value(derived.value, derived.is_percent),
        is_percent=derived.is_percent,
        has_breakpoints=derived.has_breakpoints,
    )
    if derived.breakpoints is not None:
        bp = derived.breakpoints
        row.lesser_breakpoint = format_decimal(bp.lesser)
        row.lesser_delta = format_signed(bp.lesser - current_value)
        row.greater_breakpoint = format_decimal(bp.greater)
        row.greater_delta = format_signed(bp.greater - current_value)
        row.inconclusive = bp.inconclusive
    return row


def build_display_rows(engine: StatEngine) -> List[DisplayRow]:
    """Evaluate a stat and format every derived value."""
    current = engine.current_value
    return [build_display_row(derived, current) for derived in engine.derived_values()]
