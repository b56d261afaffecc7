"""
FFXIV Stat Calculator - Core Constants
======================================
Single source of truth for the level-80 stat math constants.

Values follow the Theoryjerks level-80 formulas.
"""

from decimal import ROUND_HALF_UP
from typing import Dict


# =============================================================================
# LEVEL MODIFIERS
# =============================================================================

# Level-80 divisor used by every "extra" computation:
# extra = floor(delta_rate * (value - base) / LEVEL_MOD)
LEVEL_MOD = 3300


# =============================================================================
# DECIMAL ARITHMETIC
# =============================================================================

# Significant digits kept by inexact operations (division mostly).
DECIMAL_PRECISION = 20
DECIMAL_ROUNDING = ROUND_HALF_UP

# Speed results are shown in seconds with two decimals, truncated.
SPEED_DECIMAL_PLACES = 2


# =============================================================================
# BREAKPOINT SEARCH
# =============================================================================

# Max stat steps per search direction. Reaching it means a spec is
# misconfigured or not monotonic.
BREAKPOINT_SEARCH_LIMIT = 10_000


# =============================================================================
# SPEED (GCD / CAST TIME) TABLE
# =============================================================================

# Label -> base recast time in milliseconds
SPEED_TIME_CONSTANTS: Dict[str, int] = {
    "1.5s": 1500,
    "2.0s": 2000,
    "2.5s": 2500,
    "2.8s": 2800,
    "3.0s": 3000,
    "3.5s": 3500,
    "4.0s": 4000,
}
