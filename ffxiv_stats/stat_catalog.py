"""
FFXIV Stat Calculator - Level 80 Stat Catalog
=============================================
Stat and derived value definitions for level 80.

Formulas taken from the Theoryjerks website (http://theoryjerks.akhmorning.com/).
A different level or patch only needs its own tuple of StatDefinitions.
"""

from decimal import Decimal
from typing import Tuple

from stat_engine import (
    SPEED_TIME_CONSTANTS,
    StatDefinition,
    StatSheet,
    derived_value,
    inverted_value,
    no_breakpoint_value,
    speed_value,
)

ONE = Decimal(1)
THOUSAND = Decimal(1000)

# Direct hits always deal +25%
DIRECT_HIT_BONUS = Decimal("0.25")


def _per_thousand(offset: int):
    """(extra + offset) / 1000"""
    offset = Decimal(offset)
    return lambda value, extra, inter: (extra + offset) / THOUSAND


def _expected_damage(value, extra, inter):
    """1 + rate * bonus"""
    return ONE + inter['rate'] * inter['bonus']


CRITICAL_HIT = StatDefinition('Critical Hit', 380, 200, (
    derived_value('rate', 'Crit Rate', _per_thousand(50)),
    derived_value('bonus', 'Bonus Dmg', _per_thousand(400)),
    no_breakpoint_value('edmg', 'Expected Dmg', _expected_damage,
                        requires=('rate', 'bonus')),
))

DIRECT_HIT = StatDefinition('Direct Hit', 380, 550, (
    derived_value('rate', 'DH Hit', _per_thousand(0)),
    no_breakpoint_value('bonus', 'Bonus Dmg', lambda value, extra, inter: DIRECT_HIT_BONUS),
    no_breakpoint_value('edmg', 'Expected Dmg', _expected_damage,
                        requires=('rate', 'bonus')),
))

DETERMINATION = StatDefinition('Determination', 340, 130, (
    derived_value('damage mult', 'Damage Multiplier', _per_thousand(1000)),
))

SPEED = StatDefinition('Spell/Skill Speed', 380, 130, (
    derived_value('mult', 'DoT Scalar', _per_thousand(1000)),
    *(speed_value(label, constant) for label, constant in SPEED_TIME_CONSTANTS.items()),
))

TENACITY = StatDefinition('Tenacity', 380, 100, (
    derived_value('mult', 'Damage Multiplier', _per_thousand(1000)),
    inverted_value('mit', 'Mitigation%',
                   lambda value, extra, inter: (THOUSAND - extra) / THOUSAND),
))

PIETY = StatDefinition('Piety', 340, 150, (
    derived_value('mp', 'Additional MP per Tick',
                  lambda value, extra, inter: extra, is_percent=False),
))

DEFENSE = StatDefinition('Defense', 0, 15, (
    derived_value('mit', 'Mitigation%', lambda value, extra, inter: extra / Decimal(100)),
))

LEVEL_80_STATS: Tuple[StatDefinition, ...] = (
    CRITICAL_HIT,
    DIRECT_HIT,
    DETERMINATION,
    SPEED,
    TENACITY,
    PIETY,
    DEFENSE,
)


def create_stat_sheet(definitions: Tuple[StatDefinition, ...] = LEVEL_80_STATS,
                      **kwargs) -> StatSheet:
    """Build a StatSheet for a catalog (level 80 by default)."""
    return StatSheet(definitions, **kwargs)
