"""
FFXIV Stat Calculator - Stat Engine
===================================
Evaluates a stat's derived values and finds their breakpoints.

A breakpoint is the nearest stat value below/above the current one at which
a derived value changes. The search is linear: step the stat by one and
recompute the spec until its value moves past the current one.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .constants import BREAKPOINT_SEARCH_LIMIT, LEVEL_MOD
from .decimal_math import DecimalLike, ONE, engine_context, floor_decimal, to_decimal
from .derived import DerivedValueSpec, validate_specs

logger = logging.getLogger(__name__)


# =============================================================================
# DEFINITIONS & RESULTS
# =============================================================================

@dataclass(frozen=True)
class StatDefinition:
    """A stat and its derived values, as listed in the catalog."""
    name: str
    base_value: Decimal
    delta_rate: Decimal
    specs: Tuple[DerivedValueSpec, ...]
    level_mod: Decimal = Decimal(LEVEL_MOD)

    def __post_init__(self):
        # Accept ints/strings from catalog code
        object.__setattr__(self, 'base_value', to_decimal(self.base_value))
        object.__setattr__(self, 'delta_rate', to_decimal(self.delta_rate))
        object.__setattr__(self, 'level_mod', to_decimal(self.level_mod))
        object.__setattr__(self, 'specs', tuple(self.specs))
        validate_specs(self.name, self.specs)

    def extra_value(self, value: Decimal) -> Decimal:
        """
        Extra contribution of having `value` of this stat.

        Formula:
            extra = floor(delta_rate * (value - base_value) / level_mod)

        Floors toward negative infinity, so values just below base give -1.
        """
        with engine_context():
            delta = value - self.base_value
            return floor_decimal(self.delta_rate * delta / self.level_mod)


@dataclass(frozen=True)
class Breakpoints:
    """Nearest stat values at which a derived value changes."""
    lesser: Decimal
    greater: Decimal
    lesser_exhausted: bool = False
    greater_exhausted: bool = False

    @property
    def inconclusive(self) -> bool:
        """True if either search hit the step limit without a change."""
        return self.lesser_exhausted or self.greater_exhausted


@dataclass(frozen=True)
class DerivedValue:
    """One evaluated derived value, ready for display."""
    key: str
    display_name: str
    value: Decimal
    is_percent: bool
    breakpoints: Optional[Breakpoints] = None

    @property
    def has_breakpoints(self) -> bool:
        return self.breakpoints is not None


# =============================================================================
# ENGINE
# =============================================================================

class StatEngine:
    """
    Owns one stat's current value and computes its derived values.

    The UI sends commands (set_value, increment, decrement) rather than
    assigning to current_value.
    """

    def __init__(self, definition: StatDefinition,
                 search_limit: int = BREAKPOINT_SEARCH_LIMIT):
        self.definition = definition
        self.search_limit = search_limit
        self._current_value = definition.base_value

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def current_value(self) -> Decimal:
        return self._current_value

    @property
    def above_minimum(self) -> bool:
        """Breakpoints only make sense at or above the stat base."""
        return self._current_value >= self.definition.base_value

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def set_value(self, value: DecimalLike) -> None:
        self._current_value = to_decimal(value)

    def increment(self) -> None:
        self._current_value = self._current_value + ONE

    def decrement(self) -> None:
        self._current_value = self._current_value - ONE

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def extra_value(self, value: Optional[Decimal] = None) -> Decimal:
        if value is None:
            value = self._current_value
        return self.definition.extra_value(value)

    def evaluate(self, value: Optional[Decimal] = None) -> List[Tuple[DerivedValueSpec, Decimal]]:
        """
        Compute every derived value at `value` (default: current value).

        Later specs may read earlier results through the intermediates
        mapping, e.g. Expected Dmg = 1 + rate * bonus. Each spec only sees
        the names listed in its `requires`.

        Returns:
            List of (spec, result) in catalog order
        """
        if value is None:
            value = self._current_value

        extra = self.extra_value(value)
        intermediates: Dict[str, Decimal] = {}
        results = []

        with engine_context():
            for spec in self.definition.specs:
                visible = {name: intermediates[name] for name in spec.requires}
                result = spec.compute(value, extra, MappingProxyType(visible))
                intermediates[spec.name] = result
                results.append((spec, result))

        return results

    def derived_values(self) -> List[DerivedValue]:
        """Evaluate the current value and attach breakpoints where they apply."""
        records = []
        for spec, result in self.evaluate():
            breakpoints = None
            if spec.has_breakpoints and self.above_minimum:
                breakpoints = self.find_breakpoints(spec, result)
            records.append(DerivedValue(
                key=spec.name,
                display_name=spec.display_name,
                value=result,
                is_percent=spec.is_percent,
                breakpoints=breakpoints,
            ))
        return records

    def find_breakpoints(self, spec: DerivedValueSpec, real_value: Decimal) -> Breakpoints:
        """
        Find the lesser and greater breakpoints of `spec` around the current value.

        Only valid for specs without intermediates: the search recomputes the
        spec on its own at each candidate stat value.
        """
        lesser, lesser_exhausted = self._search(spec, real_value, is_lesser=True)
        greater, greater_exhausted = self._search(spec, real_value, is_lesser=False)
        return Breakpoints(lesser, greater, lesser_exhausted, greater_exhausted)

    def _search(self, spec: DerivedValueSpec, real_value: Decimal,
                is_lesser: bool) -> Tuple[Decimal, bool]:
        """
        Step the stat until the spec's value leaves `real_value` behind.

        Lesser stops once the value is below real_value, greater once it is
        above. Returns (candidate, exhausted).
        """
        direction = spec.breakpoint_direction(is_lesser)
        no_intermediates = MappingProxyType({})

        def unchanged(candidate: Decimal) -> bool:
            with engine_context():
                value = spec.compute(candidate, self.extra_value(candidate), no_intermediates)
            if is_lesser:
                return value >= real_value
            return value <= real_value

        candidate = self._current_value
        for _ in range(self.search_limit):
            if not unchanged(candidate):
                return candidate, False
            candidate = candidate + direction

        exhausted = unchanged(candidate)
        if exhausted:
            logger.warning(
                f"Breakpoint search for {self.name} / {spec.display_name} "
                f"({'lesser' if is_lesser else 'greater'}) gave up after "
                f"{self.search_limit} steps at {candidate}"
            )
        return candidate, exhausted


# =============================================================================
# STAT SHEET
# =============================================================================

class StatSheet:
    """
    One engine per stat in a catalog, kept in catalog order.

    The catalog is injected, so another level's table can be used without
    touching the engine.
    """

    def __init__(self, definitions: Iterable[StatDefinition],
                 search_limit: int = BREAKPOINT_SEARCH_LIMIT):
        self._engines: Dict[str, StatEngine] = {}
        for definition in definitions:
            if definition.name in self._engines:
                raise ValueError(f"duplicate stat '{definition.name}'")
            self._engines[definition.name] = StatEngine(definition, search_limit)
        logger.debug(f"Built stat sheet with {len(self._engines)} stats")

    def __getitem__(self, name: str) -> StatEngine:
        return self._engines[name]

    def __iter__(self) -> Iterator[StatEngine]:
        return iter(self._engines.values())

    def __len__(self) -> int:
        return len(self._engines)

    @property
    def names(self) -> List[str]:
        return list(self._engines)
