"""
FFXIV Stat Calculator - Derived Value Specs
===========================================
Declarative description of a value computed from a stat, e.g. "Additional
MP per Tick" computed from Piety.

A spec's compute function receives:
    value          - the stat value being evaluated
    extra          - the stat's extra contribution at that value
    intermediates  - read-only mapping of earlier specs' results by name

Breakpoint behavior is a tag on the spec:
    NORMAL    - raising the stat raises the value (eventually)
    INVERTED  - raising the stat lowers the value (e.g. recast times)
    NONE      - no breakpoint search (value depends on other specs, or is constant)
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Callable, Mapping, Tuple

from .constants import SPEED_DECIMAL_PLACES
from .decimal_math import THOUSAND, floor_decimal, round_down

ComputeFn = Callable[[Decimal, Decimal, Mapping[str, Decimal]], Decimal]


class CatalogError(ValueError):
    """Raised when a stat's derived value specs are misconfigured."""


class BreakpointKind(Enum):
    """How the breakpoint search walks the stat for a derived value."""
    NONE = "none"
    NORMAL = "normal"
    INVERTED = "inverted"


@dataclass(frozen=True)
class DerivedValueSpec:
    """Definition of one derived value and how to compute it."""
    name: str                                   # Key for intermediate lookups
    display_name: str                           # Label shown to the user
    compute: ComputeFn
    is_percent: bool = True                     # Display only
    breakpoints: BreakpointKind = BreakpointKind.NORMAL
    requires: Tuple[str, ...] = ()              # Intermediates read by compute

    @property
    def has_breakpoints(self) -> bool:
        return self.breakpoints is not BreakpointKind.NONE

    def breakpoint_direction(self, is_lesser: bool) -> int:
        """
        Step (+1 or -1) applied to the stat when searching for a breakpoint.

        Args:
            is_lesser: True when searching for the value's lesser breakpoint

        Returns:
            -1/+1 for lesser/greater on NORMAL specs, swapped on INVERTED specs
        """
        if self.breakpoints is BreakpointKind.NORMAL:
            return -1 if is_lesser else 1
        elif self.breakpoints is BreakpointKind.INVERTED:
            return 1 if is_lesser else -1
        raise ValueError(f"'{self.name}' has no breakpoints")


# =============================================================================
# FACTORIES
# =============================================================================

def derived_value(name: str, display_name: str, compute: ComputeFn,
                  is_percent: bool = True) -> DerivedValueSpec:
    """Ordinary derived value: grows with the stat."""
    return DerivedValueSpec(name, display_name, compute, is_percent=is_percent)


def inverted_value(name: str, display_name: str, compute: ComputeFn,
                   is_percent: bool = True) -> DerivedValueSpec:
    """Derived value that shrinks as the stat grows."""
    return DerivedValueSpec(name, display_name, compute, is_percent=is_percent,
                            breakpoints=BreakpointKind.INVERTED)


def no_breakpoint_value(name: str, display_name: str, compute: ComputeFn,
                        requires: Tuple[str, ...] = (),
                        is_percent: bool = True) -> DerivedValueSpec:
    """Derived value built from intermediates, or a constant."""
    return DerivedValueSpec(name, display_name, compute, is_percent=is_percent,
                            breakpoints=BreakpointKind.NONE, requires=tuple(requires))


def speed_value(label: str, time_constant: int) -> DerivedValueSpec:
    """
    Recast time (seconds) for a base recast of `time_constant` ms.

    Formula:
        floor((1000 - extra) * time_constant / 1000) / 1000,
        truncated to 2 decimal places

    Example: 2500 ms at base speed (extra = 0) → 2.5
    """
    constant = Decimal(time_constant)

    def compute(value, extra, intermediates):
        ticks = floor_decimal((THOUSAND - extra) * constant / THOUSAND)
        return round_down(ticks / THOUSAND, SPEED_DECIMAL_PLACES)

    return DerivedValueSpec(label, label, compute, is_percent=False,
                            breakpoints=BreakpointKind.INVERTED)


def validate_specs(stat_name: str, specs: Tuple[DerivedValueSpec, ...]) -> None:
    """
    Check a stat's spec list before it is ever evaluated.

    Raises:
        CatalogError: duplicate names, a reference to an intermediate that is
            not declared earlier, or breakpoints on a spec that reads
            intermediates
    """
    declared = set()
    for spec in specs:
        if spec.name in declared:
            raise CatalogError(f"{stat_name}: duplicate derived value '{spec.name}'")
        for required in spec.requires:
            if required not in declared:
                raise CatalogError(
                    f"{stat_name}: '{spec.name}' reads '{required}' before it is computed"
                )
        if spec.requires and spec.has_breakpoints:
            raise CatalogError(
                f"{stat_name}: '{spec.name}' reads intermediates and cannot have breakpoints"
            )
        declared.add(spec.name)
