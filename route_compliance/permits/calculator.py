"""
Route Permit Calculator

Aggregates per-state permit requirements and escort costs across a route.

PERMIT FEES
-----------
Charged once per distinct state, in route order, priced on the state's total
mileage across every visit.

ESCORT COSTS
------------
Charged per traversed segment, since escorts are paid for the time they
drive. For each segment, with the state's escort count and rate:

    per_mile  - rate * escorts * segment miles
    per_day   - rate * escorts * days
    flat      - rate * escorts, on the state's first segment only

    days = max(MIN_DAYS_PER_SEGMENT, segment miles / MILES_PER_DAY)

A 0-mile segment bills no days. Pole car and police escorts are charged per day on the same days.

estimated_escorts_per_day is the largest escort count of any segment: the
same pilot cars follow the load across state lines.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Mapping

import polars as pl

from ..data import ReferenceTables, resolve_tables
from ..data.reference.escort_rates import (
    POLE_CAR_COST_PER_DAY,
    POLICE_COST_PER_HOUR,
    POLICE_HOURS_PER_DAY,
    MILES_PER_DAY,
    MIN_DAYS_PER_SEGMENT,
    HIGH_PERMIT_COST_THRESHOLD,
)
from ..data.reference.state_permits import (
    SUPERLOAD_WARNING,
    HIGH_COST_WARNING,
    TWO_ESCORT_WARNING,
    POLICE_WARNING,
    MISSING_RULE_NOTICE,
)
from ..inputs import CargoSpecs, StateSegment, _is_number
from .state_permit import StatePermitRequirement, calculate_state_permit, as_cargo


logger = logging.getLogger(__name__)

SEGMENT_SCHEMA = {
    "order": pl.Int64,
    "position": pl.Int64,
    "state_code": pl.Utf8,
    "distance_miles": pl.Float64,
}


# =============================================================================
# RESULTS
# =============================================================================

@dataclass(frozen=True, slots=True)
class SegmentEscortCost:
    position: int
    state_code: str
    distance_miles: float
    days: float
    escorts: int
    escort_cost: float
    pole_car_cost: float
    police_cost: float

    @property
    def total(self) -> float:
        return round(self.escort_cost + self.pole_car_cost + self.police_cost, 2)

    def to_dict(self) -> dict:
        return {
            "position": self.position,
            "state_code": self.state_code,
            "distance_miles": self.distance_miles,
            "days": self.days,
            "escorts": self.escorts,
            "escort_cost": self.escort_cost,
            "pole_car_cost": self.pole_car_cost,
            "police_cost": self.police_cost,
            "total": self.total,
        }


@dataclass(frozen=True, slots=True)
class RoutePermitSummary:
    """
    Permit and escort requirements for a whole route.

    Attributes:
        states                    - One requirement per distinct state, route order
        segment_escorts           - Escort costs per traversed segment, route order
        total_permit_fees         - Sum of state permit fees, dollars
        total_escort_cost         - Sum of segment escort, pole car and police costs, dollars
        estimated_escorts_per_day - Largest escort count of any segment
        overall_restrictions      - Travel restrictions of permitted states, verbatim, de-duplicated
        warnings                  - Conditions needing attention before dispatch
        notices                   - Informational (e.g. states with no schedule on file)
    """

    states: tuple[StatePermitRequirement, ...]
    segment_escorts: tuple[SegmentEscortCost, ...]
    total_permit_fees: float
    total_escort_cost: float
    estimated_escorts_per_day: int
    overall_restrictions: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    notices: tuple[str, ...] = ()

    @property
    def total_cost(self) -> float:
        return round(self.total_permit_fees + self.total_escort_cost, 2)

    @property
    def states_requiring_permits(self) -> list[str]:
        return [s.state_code for s in self.states if s.requires_permit]

    def to_dict(self) -> dict:
        return {
            "states": [s.to_dict() for s in self.states],
            "segment_escorts": [s.to_dict() for s in self.segment_escorts],
            "total_permit_fees": self.total_permit_fees,
            "total_escort_cost": self.total_escort_cost,
            "total_cost": self.total_cost,
            "estimated_escorts_per_day": self.estimated_escorts_per_day,
            "overall_restrictions": list(self.overall_restrictions),
            "warnings": list(self.warnings),
            "notices": list(self.notices),
        }


# =============================================================================
# ROUTE
# =============================================================================

def calculate_route_permits(
    segments: Iterable[StateSegment | str],
    cargo: CargoSpecs | Mapping,
    state_distances: Mapping[str, float] | None = None,
    tables: ReferenceTables | None = None
) -> RoutePermitSummary:
    """
    Calculate permits and escort costs for a route.

    Args:
        segments: State segments in route order, or bare state codes
                  (mileage then comes from state_distances)
        cargo: Load specification
        state_distances: Miles per state code, used only for bare codes
        tables: Reference snapshot (process-wide if not provided)

    Returns:
        RoutePermitSummary
    """
    cargo = as_cargo(cargo)
    tables = resolve_tables(tables)
    segs = _segment_frame(segments, state_distances)

    state_miles = (
        segs
        .group_by("state_code", maintain_order=True)
        .agg(pl.col("distance_miles").sum())
    )
    states = tuple(
        calculate_state_permit(row["state_code"], cargo, row["distance_miles"], tables)
        for row in state_miles.iter_rows(named=True)
    )

    escorts = _segment_escort_costs(segs, states)
    segment_escorts = tuple(SegmentEscortCost(**row) for row in escorts.iter_rows(named=True))

    total_permit_fees = round(sum(s.permit_fee for s in states), 2)
    total_escort_cost = round(sum(s.total for s in segment_escorts), 2)
    escorts_per_day = max((s.escorts for s in segment_escorts), default=0)

    summary = RoutePermitSummary(
        states=states,
        segment_escorts=segment_escorts,
        total_permit_fees=total_permit_fees,
        total_escort_cost=total_escort_cost,
        estimated_escorts_per_day=escorts_per_day,
        overall_restrictions=tuple(dict.fromkeys(
            r for s in states if s.requires_permit for r in s.travel_restrictions
        )),
        warnings=tuple(_warnings(states, total_permit_fees, escorts_per_day)),
        notices=tuple(
            MISSING_RULE_NOTICE.format(state_code=s.state_code) for s in states if not s.has_rule
        ),
    )

    logger.debug(
        "Permits for %s: fees $%.2f, escorts $%.2f, %d escort(s) per day",
        [s.state_code for s in states], total_permit_fees, total_escort_cost, escorts_per_day,
    )
    return summary


def states_requiring_permits(
    segments: Iterable[StateSegment | str],
    cargo: CargoSpecs | Mapping,
    tables: ReferenceTables | None = None
) -> list[str]:
    """Distinct states on the route, in order, whose schedule requires a permit for the load."""
    return calculate_route_permits(segments, cargo, tables=tables).states_requiring_permits


def estimate_total_cost(
    segments: Iterable[StateSegment | str],
    cargo: CargoSpecs | Mapping,
    state_distances: Mapping[str, float] | None = None,
    tables: ReferenceTables | None = None
) -> float:
    """Permit fees plus escort costs for a route, in dollars."""
    return calculate_route_permits(segments, cargo, state_distances, tables).total_cost


def format_permit_summary(summary: RoutePermitSummary) -> str:
    """Plain-text summary for display."""
    lines = [
        f"States: {len(summary.states)}",
        f"Total Permit Fees: ${summary.total_permit_fees:,.2f}",
        f"Estimated Escort Cost: ${summary.total_escort_cost:,.2f}",
    ]

    if summary.estimated_escorts_per_day > 0:
        lines.append(f"Escorts Required: {summary.estimated_escorts_per_day}")

    if summary.overall_restrictions:
        lines.append("")
        lines.append("Restrictions:")
        lines.extend(f"  - {r}" for r in summary.overall_restrictions)

    if summary.warnings:
        lines.append("")
        lines.append("Warnings:")
        lines.extend(f"  ! {w}" for w in summary.warnings)

    if summary.notices:
        lines.append("")
        lines.append("Notices:")
        lines.extend(f"  * {n}" for n in summary.notices)

    return "\n".join(lines)


# =============================================================================
# ESCORT COSTS
# =============================================================================

def _segment_frame(
    segments: Iterable[StateSegment | str],
    state_distances: Mapping[str, float] | None
) -> pl.DataFrame:
    """
    Route segments as a frame, in route order.

    state_distances holds miles per state, so a bare code that recurs gets an
    equal share of its state's miles on each visit.
    """
    segments = list(segments)
    distances = {k.strip().upper(): v for k, v in (state_distances or {}).items()}
    visits = Counter(s.strip().upper() for s in segments if isinstance(s, str))

    rows = []
    for i, seg in enumerate(segments):
        if isinstance(seg, str):
            code = seg.strip().upper()
            miles = distances.get(code, 0.0)
            seg = StateSegment(
                state_code=code,
                distance_miles=miles / visits[code] if _is_number(miles) else miles,
                position=i,
            )
        rows.append({
            "order": i,
            "position": seg.position,
            "state_code": seg.state_code,
            "distance_miles": float(seg.distance_miles),
        })
    return pl.DataFrame(rows, schema=SEGMENT_SCHEMA)


def _segment_escort_costs(
    segs: pl.DataFrame,
    states: tuple[StatePermitRequirement, ...]
) -> pl.DataFrame:
    """
    Escort, pole car and police cost per segment.

    Returns:
        DataFrame with columns: position, state_code, distance_miles, days,
        escorts, escort_cost, pole_car_cost, police_cost (route order)
    """
    requirements = pl.DataFrame(
        {
            "state_code": [s.state_code for s in states],
            "escorts": [s.escorts_required for s in states],
            "pole_car": [s.pole_car_required for s in states],
            "police": [s.police_escort_required for s in states],
            "rate_basis": [s.escort_rate.basis for s in states],
            "rate": [float(s.escort_rate.amount) for s in states],
        },
        schema={
            "state_code": pl.Utf8,
            "escorts": pl.Int64,
            "pole_car": pl.Boolean,
            "police": pl.Boolean,
            "rate_basis": pl.Utf8,
            "rate": pl.Float64,
        },
    )

    police_per_day = POLICE_COST_PER_HOUR * POLICE_HOURS_PER_DAY

    return (
        segs
        .join(requirements, on="state_code", how="left")
        .with_columns([
            # Billable days, with a floor per driven segment
            pl.when(pl.col("distance_miles") > 0)
            .then(pl.max_horizontal(
                pl.col("distance_miles") / MILES_PER_DAY,
                pl.lit(MIN_DAYS_PER_SEGMENT),
            ))
            .otherwise(0.0)
            .alias("days"),

            # Flat rates are charged on the first visit only
            (pl.col("order") == pl.col("order").min().over("state_code")).alias("_first_visit"),
        ])
        .with_columns([
            (
                pl.when(pl.col("rate_basis") == "per_mile")
                .then(pl.col("rate") * pl.col("distance_miles"))
                .when(pl.col("rate_basis") == "flat")
                .then(pl.when(pl.col("_first_visit")).then(pl.col("rate")).otherwise(0.0))
                .otherwise(pl.col("rate") * pl.col("days"))
                * pl.col("escorts")
            ).round(2).alias("escort_cost"),

            pl.when(pl.col("pole_car"))
            .then(POLE_CAR_COST_PER_DAY * pl.col("days"))
            .otherwise(0.0)
            .round(2)
            .alias("pole_car_cost"),

            pl.when(pl.col("police"))
            .then(police_per_day * pl.col("days"))
            .otherwise(0.0)
            .round(2)
            .alias("police_cost"),
        ])
        .sort("order")
        .select([
            "position",
            "state_code",
            "distance_miles",
            pl.col("days").round(3),
            "escorts",
            "escort_cost",
            "pole_car_cost",
            "police_cost",
        ])
    )


def _warnings(
    states: tuple[StatePermitRequirement, ...],
    total_permit_fees: float,
    escorts_per_day: int
) -> list[str]:
    warnings = [
        SUPERLOAD_WARNING.format(state_name=s.state_name) for s in states if s.is_superload
    ]
    if total_permit_fees > HIGH_PERMIT_COST_THRESHOLD:
        warnings.append(HIGH_COST_WARNING.format(total=total_permit_fees))
    if escorts_per_day >= 2:
        warnings.append(TWO_ESCORT_WARNING)
    if any(s.police_escort_required for s in states):
        warnings.append(POLICE_WARNING)
    return warnings


__all__ = [
    "SegmentEscortCost",
    "RoutePermitSummary",
    "calculate_route_permits",
    "states_requiring_permits",
    "estimate_total_cost",
    "format_permit_summary",
]
