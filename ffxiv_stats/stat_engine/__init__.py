"""
FFXIV Stat Calculator - Core Math Module
========================================
Single source of truth for the stat engine: decimal arithmetic, derived value
specs and breakpoint search.

The catalog of stats lives outside this package and is passed in.
"""

from .constants import (
    LEVEL_MOD,
    BREAKPOINT_SEARCH_LIMIT,
    DECIMAL_PRECISION,
    DECIMAL_ROUNDING,
    SPEED_DECIMAL_PLACES,
    SPEED_TIME_CONSTANTS,
)

from .decimal_math import (
    ENGINE_CONTEXT,
    engine_context,
    to_decimal,
    floor_decimal,
    round_down,
)

from .derived import (
    BreakpointKind,
    CatalogError,
    DerivedValueSpec,
    derived_value,
    inverted_value,
    no_breakpoint_value,
    speed_value,
    validate_specs,
)

from .stats import (
    Breakpoints,
    DerivedValue,
    StatDefinition,
    StatEngine,
    StatSheet,
)

__all__ = [
    # Constants
    'LEVEL_MOD',
    'BREAKPOINT_SEARCH_LIMIT',
    'DECIMAL_PRECISION',
    'DECIMAL_ROUNDING',
    'SPEED_DECIMAL_PLACES',
    'SPEED_TIME_CONSTANTS',
    # Decimal arithmetic
    'ENGINE_CONTEXT',
    'engine_context',
    'to_decimal',
    'floor_decimal',
    'round_down',
    # Specs
    'BreakpointKind',
    'CatalogError',
    'DerivedValueSpec',
    'derived_value',
    'inverted_value',
    'no_breakpoint_value',
    'speed_value',
    'validate_specs',
    # Engine
    'Breakpoints',
    'DerivedValue',
    'StatDefinition',
    'StatEngine',
    'StatSheet',
]
