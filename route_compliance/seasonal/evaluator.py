"""
Seasonal Restriction Evaluator

Frost-law checks for a route: which traversed states have a seasonal weight
restriction active on the ship date, and what gross weight the most
restrictive of them allows.

A state with no rule on file has no restriction. Each state is evaluated once
per route even when the route re-enters it.
"""

import calendar
import math
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from functools import reduce
from typing import Iterable

import polars as pl

from ..data import ReferenceTables, resolve_tables
from ..data.reference.federal_limits import MAX_GROSS_WEIGHT_LBS
from ..data.reference.seasonal_restrictions import (
    SeasonalRestrictionRule,
    WARNING_TEMPLATE,
    RECOMMENDATIONS,
    PERMIT_RECOMMENDATION,
    ALL_STATE_CODES,
)
from ..errors import ValidationError
from ..inputs import StateSegment, parse_ship_date
from .windows import in_period, in_period_expr


logger = logging.getLogger(__name__)

# How far ahead to look for the first unrestricted ship date
CLEAR_DATE_HORIZON_DAYS = 366


# =============================================================================
# RESULTS
# =============================================================================

@dataclass(frozen=True, slots=True)
class SeasonalReport:
    """
    Seasonal restrictions affecting a route.

    Attributes:
        has_restrictions - True if any traversed state is restricted on the ship date
        affected_rules   - Active rules, in route order
        warnings         - One line per affected state
        recommendations  - Route-level advice (empty when unaffected)
        clear_from       - First date on/after the ship date with no active
                           restriction on the route (None if unaffected, or
                           none within the horizon)
    """

    has_restrictions: bool
    affected_rules: tuple[SeasonalRestrictionRule, ...] = ()
    warnings: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    clear_from: date | None = None

    @property
    def affected_states(self) -> list[str]:
        return [r.state_code for r in self.affected_rules]

    def to_dict(self) -> dict:
        return {
            "has_restrictions": self.has_restrictions,
            "affected_rules": [
                {
                    "state_code": r.state_code,
                    "state_name": r.state_name,
                    "restriction_name": r.restriction_name,
                    "period": format_restriction_period(r),
                    "weight_reduction_percent": r.weight_reduction_percent,
                    "max_gross_weight": r.max_gross_weight,
                    "permit_available": r.permit_available,
                    "permit_fee": r.permit_fee,
                    "exempt_roads": list(r.exempt_roads),
                    "website": r.website,
                }
                for r in self.affected_rules
            ],
            "warnings": list(self.warnings),
            "recommendations": list(self.recommendations),
            "clear_from": self.clear_from.isoformat() if self.clear_from else None,
        }


@dataclass(frozen=True, slots=True)
class WeightLimit:
    adjusted_max_weight: int
    reduction_percent: float
    most_restrictive_state: str | None
    base_gross_weight: float = MAX_GROSS_WEIGHT_LBS

    def to_dict(self) -> dict:
        return {
            "adjusted_max_weight": self.adjusted_max_weight,
            "reduction_percent": self.reduction_percent,
            "most_restrictive_state": self.most_restrictive_state,
            "base_gross_weight": self.base_gross_weight,
        }


# =============================================================================
# RULE LOOKUP
# =============================================================================

def restriction_for(
    state_code: str,
    tables: ReferenceTables | None = None
) -> SeasonalRestrictionRule | None:
    """Seasonal rule for a state, or None if the state has none on file."""
    return resolve_tables(tables).seasonal.get(state_code.strip().upper())


def has_active_restriction(
    state_code: str,
    when: date | str | None = None,
    tables: ReferenceTables | None = None
) -> bool:
    """True if the state's restriction window contains the date (default today)."""
    rule = restriction_for(state_code, tables)
    if rule is None:
        return False
    return in_period(rule.start, rule.end, parse_ship_date(when))


def active_restrictions(
    when: date | str | None = None,
    tables: ReferenceTables | None = None
) -> tuple[SeasonalRestrictionRule, ...]:
    """All rules active on a date, in table order."""
    when = parse_ship_date(when)
    return tuple(
        r for r in resolve_tables(tables).seasonal.values()
        if in_period(r.start, r.end, when)
    )


def states_without_restrictions(tables: ReferenceTables | None = None) -> list[str]:
    seasonal = resolve_tables(tables).seasonal
    return [code for code in ALL_STATE_CODES if code not in seasonal]


def format_restriction_period(rule: SeasonalRestrictionRule) -> str:
    """Readable window, e.g. "March 1 - May 15"."""
    start_month, start_day = rule.start
    end_month, end_day = rule.end
    return (
        f"{calendar.month_name[start_month]} {start_day} - "
        f"{calendar.month_name[end_month]} {end_day}"
    )


# =============================================================================
# ROUTE EVALUATION
# =============================================================================

def evaluate_route(
    segments: Iterable[StateSegment | str],
    ship_date: date | str | None = None,
    tables: ReferenceTables | None = None
) -> SeasonalReport:
    """
    Check every traversed state for an active seasonal restriction.

    Args:
        segments: Route state segments (or bare state codes), in route order
        ship_date: Ship date (default today)
        tables: Reference snapshot (process-wide if not provided)

    Returns:
        SeasonalReport
    """
    tables = resolve_tables(tables)
    when = parse_ship_date(ship_date)
    codes = _state_codes(segments)
    affected = _active_rules(codes, when, tables)

    if not affected:
        logger.debug("No seasonal restrictions on %s for %s", codes, when)
        return SeasonalReport(has_restrictions=False)

    warnings = tuple(WARNING_TEMPLATE.format(**r._asdict()) for r in affected)

    recommendations = list(RECOMMENDATIONS)
    if any(r.permit_available for r in affected):
        recommendations.append(PERMIT_RECOMMENDATION)

    clear_from = next_unrestricted_date(codes, when, tables)

    logger.debug(
        "Seasonal restrictions active in %s on %s (clear from %s)",
        [r.state_code for r in affected], when, clear_from,
    )
    return SeasonalReport(
        has_restrictions=True,
        affected_rules=affected,
        warnings=warnings,
        recommendations=tuple(recommendations),
        clear_from=clear_from,
    )


def adjusted_weight_limit(
    segments: Iterable[StateSegment | str],
    base_gross_weight: float = MAX_GROSS_WEIGHT_LBS,
    ship_date: date | str | None = None,
    tables: ReferenceTables | None = None
) -> WeightLimit:
    """
    Gross weight allowed on the route once seasonal reductions apply.

    Each restricted state caps weight at its max_gross_weight override if it
    has one, otherwise at base * (1 - reduction). A cap never exceeds the base,
    and is reported in whole pounds rounded down to the base.
    The lowest cap governs; on a tie the state reached first keeps it.
    """
    if not isinstance(base_gross_weight, (int, float)) or base_gross_weight <= 0:
        raise ValidationError([f"base_gross_weight must be greater than zero, got {base_gross_weight!r}"])

    tables = resolve_tables(tables)
    when = parse_ship_date(ship_date)
    affected = _active_rules(_state_codes(segments), when, tables)

    caps = [(_state_cap(rule, base_gross_weight), rule) for rule in affected]
    cap, rule = reduce(_tighter, caps, (base_gross_weight, None))

    return WeightLimit(
        adjusted_max_weight=int(min(round(cap), math.floor(base_gross_weight))),
        reduction_percent=rule.weight_reduction_percent if rule else 0,
        most_restrictive_state=rule.state_code if rule else None,
        base_gross_weight=base_gross_weight,
    )


def next_unrestricted_date(
    segments: Iterable[StateSegment | str],
    ship_date: date | str | None = None,
    tables: ReferenceTables | None = None,
    horizon_days: int = CLEAR_DATE_HORIZON_DAYS
) -> date | None:
    """
    First date on/after the ship date when no traversed state is restricted.

    Returns None if every day in the horizon is restricted somewhere.
    """
    tables = resolve_tables(tables)
    when = parse_ship_date(ship_date)
    rules = [tables.seasonal[c] for c in _state_codes(segments) if c in tables.seasonal]
    if not rules:
        return when

    days = pl.DataFrame({
        "ship_date": pl.date_range(when, when + timedelta(days=horizon_days), interval="1d", eager=True)
    })
    restricted = pl.any_horizontal([in_period_expr(r.start, r.end) for r in rules])
    clear = days.filter(~restricted)

    return clear["ship_date"][0] if clear.height else None


# =============================================================================
# HELPERS
# =============================================================================

def _state_codes(segments: Iterable[StateSegment | str]) -> list[str]:
    """Distinct upper-case state codes in route order."""
    codes = (s if isinstance(s, str) else s.state_code for s in segments)
    return list(dict.fromkeys(c.strip().upper() for c in codes))


def _active_rules(
    codes: list[str],
    when: date,
    tables: ReferenceTables
) -> tuple[SeasonalRestrictionRule, ...]:
    rules = (tables.seasonal.get(code) for code in codes)
    return tuple(r for r in rules if r is not None and in_period(r.start, r.end, when))


def _state_cap(rule: SeasonalRestrictionRule, base: float) -> float:
    if rule.max_gross_weight is not None:
        return min(rule.max_gross_weight, base)
    return base * (1 - rule.weight_reduction_percent / 100)


def _tighter(best, candidate):
    # Strict less-than keeps the earlier state on ties
    return candidate if candidate[0] < best[0] else best


__all__ = [
    "SeasonalReport",
    "WeightLimit",
    "restriction_for",
    "has_active_restriction",
    "active_restrictions",
    "states_without_restrictions",
    "format_restriction_period",
    "evaluate_route",
    "adjusted_weight_limit",
    "next_unrestricted_date",
]
