"""
Bridge Clearance Checker

Matches the low-clearance bridge catalog against sampled route waypoints and
classifies each matched bridge by the margin between its posted clearance and
the loaded cargo height.

Matching, thresholds and advisory text are configured in
data/reference/clearance.py.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, NamedTuple

import polars as pl

from ..data import ReferenceTables, resolve_tables
from ..data.reference.clearance import (
    ClearanceThresholds,
    DEFAULT_THRESHOLDS,
    CORRIDOR_MILES,
    CLEARANCE_PRECISION,
    TOP_BRIDGES,
    WARNING_TEMPLATES,
    RECOMMENDATIONS,
    LIMIT_NOTE,
)
from ..errors import ValidationError
from ..inputs import Waypoint, _positive_number_problem
from ..severity import Severity
from .geometry import haversine_miles, bounding_box


logger = logging.getLogger(__name__)


class LowClearanceBridge(NamedTuple):
    bridge_id: str
    name: str
    location: str
    state_code: str
    lat: float
    lng: float
    clearance_ft: float
    road: str | None = None

    @classmethod
    def from_row(cls, row: dict) -> "LowClearanceBridge":
        return cls(**{field: row.get(field) for field in cls._fields})


# =============================================================================
# RESULTS
# =============================================================================

@dataclass(frozen=True, slots=True)
class ClearanceResult:
    """
    Clearance of one load under one bridge.

    Attributes:
        clears    - True if the load fits (clearance >= 0)
        clearance - Posted clearance minus loaded height, feet (negative = too tall)
        deficit   - How much too tall, feet (0 when the load fits)
        severity  - Classification of clearance
    """

    clears: bool
    clearance: float
    deficit: float
    severity: Severity


@dataclass(frozen=True, slots=True)
class BridgeMatch:
    """A catalog bridge found within the route corridor."""

    bridge: LowClearanceBridge
    result: ClearanceResult
    route_mile: float
    offset_miles: float

    def to_dict(self) -> dict:
        return {
            "bridge_id": self.bridge.bridge_id,
            "name": self.bridge.name,
            "location": self.bridge.location,
            "state_code": self.bridge.state_code,
            "road": self.bridge.road,
            "clearance_ft": self.bridge.clearance_ft,
            "clearance": self.result.clearance,
            "deficit": self.result.deficit,
            "clears": self.result.clears,
            "severity": self.result.severity.value,
            "route_mile": round(self.route_mile, 1),
            "offset_miles": round(self.offset_miles, 3),
        }


@dataclass(frozen=True, slots=True)
class BridgeReport:
    """
    Low-clearance bridges along a route.

    Attributes:
        has_issues      - True if any matched bridge is worse than ok
        bridges         - Every non-ok match, worst first
        warnings        - One line per listed bridge (top N), plus a count of the rest
        recommendations - One line per severity present, worst first
        bridges_checked - Catalog bridges found within the corridor
    """

    has_issues: bool
    bridges: tuple[BridgeMatch, ...] = ()
    warnings: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    bridges_checked: int = 0

    @property
    def worst_severity(self) -> Severity:
        return Severity.worst(m.result.severity for m in self.bridges)

    def to_dict(self) -> dict:
        return {
            "has_issues": self.has_issues,
            "worst_severity": self.worst_severity.value,
            "bridges": [m.to_dict() for m in self.bridges],
            "warnings": list(self.warnings),
            "recommendations": list(self.recommendations),
            "bridges_checked": self.bridges_checked,
        }


# =============================================================================
# SINGLE BRIDGE
# =============================================================================

def classify_clearance(
    clearance: float,
    thresholds: ClearanceThresholds | None = None
) -> Severity:
    thresholds = thresholds or DEFAULT_THRESHOLDS
    if clearance >= thresholds.ok_min:
        return Severity.OK
    if clearance >= 0:
        return Severity.CAUTION
    if clearance >= thresholds.warning_min:
        return Severity.WARNING
    return Severity.DANGER


def check_clearance(
    bridge: LowClearanceBridge,
    total_cargo_height: float,
    thresholds: ClearanceThresholds | None = None
) -> ClearanceResult:
    """
    Check a loaded height against one bridge.

    Clearance is rounded to 0.01 ft before it is classified, so 0.999 ft of
    margin counts as 1.00 ft.
    """
    _check_height(total_cargo_height)
    thresholds = _check_thresholds(thresholds)

    # + 0.0 folds -0.0 into 0.0
    clearance = round(bridge.clearance_ft - total_cargo_height, CLEARANCE_PRECISION) + 0.0
    return ClearanceResult(
        clears=clearance >= 0,
        clearance=clearance,
        deficit=round(max(0.0, -clearance), CLEARANCE_PRECISION),
        severity=classify_clearance(clearance, thresholds),
    )


# =============================================================================
# ROUTE
# =============================================================================

def bridges_near_route(
    waypoints: Iterable[Waypoint],
    bridges: pl.DataFrame,
    corridor_miles: float = CORRIDOR_MILES
) -> pl.DataFrame:
    """
    Catalog bridges within corridor_miles of any waypoint.

    Returns:
        Catalog columns plus route_mile (cumulative miles at the nearest
        waypoint) and offset_miles (distance to it), one row per bridge,
        ordered by bridge_id
    """
    waypoints = list(waypoints)
    points = pl.DataFrame(
        {
            "wp_lat": [w.lat for w in waypoints],
            "wp_lng": [w.lng for w in waypoints],
            "route_mile": [w.cumulative_miles for w in waypoints],
        },
        schema={"wp_lat": pl.Float64, "wp_lng": pl.Float64, "route_mile": pl.Float64},
    )

    candidates = bridges
    if waypoints:
        south, west, north, east = bounding_box(
            points["wp_lat"].to_list(), points["wp_lng"].to_list(), corridor_miles
        )
        candidates = bridges.filter(
            pl.col("lat").is_between(south, north) & pl.col("lng").is_between(west, east)
        )

    return (
        candidates
        .join(points, how="cross")
        .with_columns(
            haversine_miles("lat", "lng", "wp_lat", "wp_lng").alias("offset_miles")
        )
        .filter(pl.col("offset_miles") <= corridor_miles)
        .sort(["bridge_id", "offset_miles", "route_mile"])
        .group_by("bridge_id", maintain_order=True)
        .first()
        .drop(["wp_lat", "wp_lng"])
    )


def check_route_bridge_clearances(
    waypoints: Iterable[Waypoint],
    total_cargo_height: float,
    tables: ReferenceTables | None = None,
    corridor_miles: float | None = None,
    thresholds: ClearanceThresholds | None = None,
    limit: int | None = None
) -> BridgeReport:
    """
    Find every low-clearance bridge on the route the load would not clear comfortably.

    Args:
        waypoints: Sampled route points, in route order
        total_cargo_height: Loaded height in feet
        tables: Reference snapshot (process-wide if not provided)
        corridor_miles: Matching radius around waypoints (default CORRIDOR_MILES)
        thresholds: Severity thresholds (default DEFAULT_THRESHOLDS)
        limit: Bridges rendered into warning text (default TOP_BRIDGES)

    Returns:
        BridgeReport
    """
    _check_height(total_cargo_height)
    thresholds = _check_thresholds(thresholds)
    corridor_miles = CORRIDOR_MILES if corridor_miles is None else corridor_miles
    limit = TOP_BRIDGES if limit is None else limit
    if corridor_miles < 0 or limit < 0:
        raise ValidationError([
            f"corridor_miles and limit must be non-negative, got {corridor_miles!r} and {limit!r}"
        ])

    tables = resolve_tables(tables)
    near = bridges_near_route(waypoints, tables.bridges, corridor_miles)

    matches = [
        _match(row, total_cargo_height, thresholds)
        for row in near.iter_rows(named=True)
    ]

    flagged = sorted(
        (m for m in matches if m.result.severity is not Severity.OK),
        key=lambda m: (-m.result.severity.rank, m.result.clearance, m.route_mile, m.bridge.bridge_id),
    )

    logger.debug(
        "%d bridge(s) within %.2f mi of route, %d flagged for %.2f ft load",
        len(matches), corridor_miles, len(flagged), total_cargo_height,
    )

    if not flagged:
        return BridgeReport(has_issues=False, bridges_checked=len(matches))

    return BridgeReport(
        has_issues=True,
        bridges=tuple(flagged),
        warnings=tuple(_warnings(flagged, limit)),
        recommendations=tuple(
            RECOMMENDATIONS[severity.value]
            for severity in sorted({m.result.severity for m in flagged}, reverse=True)
        ),
        bridges_checked=len(matches),
    )


# =============================================================================
# HELPERS
# =============================================================================

def _match(row: dict, height: float, thresholds: ClearanceThresholds) -> BridgeMatch:
    bridge = LowClearanceBridge.from_row(row)
    return BridgeMatch(
        bridge=bridge,
        result=check_clearance(bridge, height, thresholds),
        route_mile=row["route_mile"],
        offset_miles=row["offset_miles"],
    )


def _warnings(flagged: list[BridgeMatch], limit: int) -> list[str]:
    lines = [
        WARNING_TEMPLATES[m.result.severity.value].format(
            **m.bridge._asdict(),
            clearance=m.result.clearance,
            deficit=m.result.deficit,
        )
        for m in flagged[:limit]
    ]
    hidden = len(flagged) - limit
    if hidden > 0:
        lines.append(LIMIT_NOTE.format(hidden=hidden))
    return lines


def _check_height(height) -> None:
    problem = _positive_number_problem("total_cargo_height", height)
    if problem:
        raise ValidationError([problem])


def _check_thresholds(thresholds: ClearanceThresholds | None) -> ClearanceThresholds:
    thresholds = thresholds or DEFAULT_THRESHOLDS
    if not thresholds.warning_min <= 0 <= thresholds.ok_min:
        raise ValidationError([
            f"clearance thresholds must satisfy warning_min <= 0 <= ok_min, got {tuple(thresholds)}"
        ])
    return thresholds


__all__ = [
    "LowClearanceBridge",
    "ClearanceResult",
    "BridgeMatch",
    "BridgeReport",
    "classify_clearance",
    "check_clearance",
    "bridges_near_route",
    "check_route_bridge_clearances",
]
