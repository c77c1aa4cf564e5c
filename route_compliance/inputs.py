"""
Analysis Inputs

Request types consumed by the engine:

    CargoSpecs   - Load dimensions (feet) and gross weight (lbs), from the caller
    StateSegment - Mileage driven inside one state, in route order
    Waypoint     - Sampled route point with cumulative mileage
    RouteResult  - Finished route from the external Route Provider

The engine never mutates or recomputes a RouteResult. Everything here is
immutable, and invalid values are rejected on construction so that no rule
evaluation ever runs against a bad request.

ROUTE PROVIDER PAYLOAD
----------------------
RouteResult.from_dict() accepts the provider's JSON shape (camelCase) or the
snake_case field names used here:

    totalDistanceMiles, estimatedDriveTime,
    stateSegments: [{stateCode, distanceMiles}],
    waypoints:     [{lat, lng, cumulativeMiles}]
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime

from .errors import ValidationError


# Segment mileage may drift from the provider's total by rounding
DISTANCE_TOLERANCE_MILES = 1.0
DISTANCE_TOLERANCE_RATIO = 0.01


# =============================================================================
# CARGO
# =============================================================================

@dataclass(frozen=True, slots=True)
class CargoSpecs:
    """
    Cargo specification for one load.

    Attributes:
        length_ft          - Overall length
        width_ft           - Overall width
        height_ft          - Cargo height (above the deck when deck_height_ft is given)
        weight_lbs         - Gross weight (cargo + trailer + tractor)
        deck_height_ft     - Trailer deck height, added to height_ft for loaded height
        axle_configuration - Free text (e.g. "5-axle", "13-axle perimeter"), informational
    """

    length_ft: float
    width_ft: float
    height_ft: float
    weight_lbs: float
    deck_height_ft: float | None = None
    axle_configuration: str | None = None

    def __post_init__(self):
        problems = []
        for name in ("length_ft", "width_ft", "height_ft", "weight_lbs"):
            problem = _positive_number_problem(name, getattr(self, name))
            if problem:
                problems.append(problem)
        if self.deck_height_ft is not None:
            problem = _positive_number_problem("deck_height_ft", self.deck_height_ft)
            if problem:
                problems.append(problem)
        if problems:
            raise ValidationError(problems)

    @property
    def total_height_ft(self) -> float:
        """Loaded height: cargo height plus deck height when known."""
        return self.height_ft + (self.deck_height_ft or 0.0)

    @classmethod
    def from_dict(cls, data: dict) -> "CargoSpecs":
        """Build from a caller payload (camelCase or snake_case keys)."""
        return cls(
            length_ft=_pick(data, "length_ft", "length"),
            width_ft=_pick(data, "width_ft", "width"),
            height_ft=_pick(data, "height_ft", "height"),
            weight_lbs=_pick(data, "weight_lbs", "weight", "grossWeight"),
            deck_height_ft=_pick(data, "deck_height_ft", "deckHeight", default=None),
            axle_configuration=_pick(data, "axle_configuration", "axleConfiguration", default=None),
        )


# =============================================================================
# ROUTE
# =============================================================================

@dataclass(frozen=True, slots=True)
class StateSegment:
    state_code: str
    distance_miles: float
    position: int

    def __post_init__(self):
        problems = []
        code = self.state_code.strip().upper() if isinstance(self.state_code, str) else ""
        if not code:
            problems.append(f"segment {self.position}: state_code must be a non-empty string")
        if not _is_number(self.distance_miles) or self.distance_miles < 0:
            problems.append(
                f"segment {self.position}: distance_miles must be a non-negative number, "
                f"got {self.distance_miles!r}"
            )
        if problems:
            raise ValidationError(problems)
        object.__setattr__(self, "state_code", code)


@dataclass(frozen=True, slots=True)
class Waypoint:
    lat: float
    lng: float
    cumulative_miles: float = 0.0

    def __post_init__(self):
        problems = []
        if not _is_number(self.lat) or not -90 <= self.lat <= 90:
            problems.append(f"waypoint lat must be within [-90, 90], got {self.lat!r}")
        if not _is_number(self.lng) or not -180 <= self.lng <= 180:
            problems.append(f"waypoint lng must be within [-180, 180], got {self.lng!r}")
        if problems:
            raise ValidationError(problems)


@dataclass(frozen=True, slots=True)
class RouteResult:
    """
    Finished route from the Route Provider.

    Attributes:
        total_distance_miles - Provider's route total
        estimated_drive_time - Provider's display string (e.g. "14h 32m")
        state_segments       - Ordered state traversal (a state may recur)
        waypoints            - Ordered sampled route points
    """

    total_distance_miles: float
    estimated_drive_time: str = ""
    state_segments: tuple[StateSegment, ...] = field(default_factory=tuple)
    waypoints: tuple[Waypoint, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not _is_number(self.total_distance_miles) or self.total_distance_miles < 0:
            raise ValidationError([
                f"total_distance_miles must be a non-negative number, got {self.total_distance_miles!r}"
            ])
        object.__setattr__(self, "state_segments", tuple(self.state_segments))
        object.__setattr__(self, "waypoints", tuple(self.waypoints))

    @property
    def states_traversed(self) -> list[str]:
        """Distinct state codes in route order."""
        return list(dict.fromkeys(s.state_code for s in self.state_segments))

    @property
    def segment_distance_miles(self) -> float:
        return sum(s.distance_miles for s in self.state_segments)

    @classmethod
    def from_dict(cls, data: dict) -> "RouteResult":
        """Build from a Route Provider payload."""
        segments = [
            StateSegment(
                state_code=_pick(seg, "state_code", "stateCode", "state"),
                distance_miles=_pick(seg, "distance_miles", "distanceMiles", "distance", default=0.0),
                position=i,
            )
            for i, seg in enumerate(_pick(data, "state_segments", "stateSegments", default=[]))
        ]
        waypoints = [
            Waypoint(
                lat=_pick(wp, "lat"),
                lng=_pick(wp, "lng", "lon"),
                cumulative_miles=_pick(wp, "cumulative_miles", "cumulativeMiles", default=0.0),
            )
            for wp in _pick(data, "waypoints", default=[])
        ]
        return cls(
            total_distance_miles=_pick(data, "total_distance_miles", "totalDistanceMiles"),
            estimated_drive_time=_pick(data, "estimated_drive_time", "estimatedDriveTime", default=""),
            state_segments=tuple(segments),
            waypoints=tuple(waypoints),
        )


def make_segments(*legs: tuple[str, float]) -> tuple[StateSegment, ...]:
    """Build ordered segments from (state_code, miles) pairs."""
    return tuple(
        StateSegment(state_code=code, distance_miles=miles, position=i)
        for i, (code, miles) in enumerate(legs)
    )


def route_notices(route: RouteResult) -> list[str]:
    """
    Non-fatal data quality notices for a route.

    Segment mileage should add up to the provider's total; a larger gap than
    rounding can explain usually means a state was missed during detection.
    """
    notices = []
    segment_total = route.segment_distance_miles
    gap = abs(segment_total - route.total_distance_miles)
    tolerance = max(DISTANCE_TOLERANCE_MILES, route.total_distance_miles * DISTANCE_TOLERANCE_RATIO)
    if gap > tolerance:
        notices.append(
            f"State segment mileage ({segment_total:,.1f} mi) differs from route total "
            f"({route.total_distance_miles:,.1f} mi) by {gap:,.1f} mi"
        )
    if not route.waypoints:
        notices.append("Route has no waypoints - bridge clearances were not checked")
    return notices


# =============================================================================
# SHIP DATE
# =============================================================================

def parse_ship_date(value) -> date:
    """
    Normalise a ship date to a date.

    Accepts date, datetime (date part used) or an ISO "YYYY-MM-DD" string.
    None means today.
    """
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise ValidationError([f"ship_date is not a valid ISO date: {value!r}"]) from None
    raise ValidationError([f"ship_date must be a date or ISO string, got {type(value).__name__}"])


# =============================================================================
# HELPERS
# =============================================================================

_MISSING = object()


def _pick(data: dict, *keys, default=_MISSING):
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    if default is _MISSING:
        raise ValidationError([f"missing required field: {keys[0]}"])
    return default


def _is_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _positive_number_problem(name: str, value) -> str | None:
    if not _is_number(value):
        return f"{name} must be a number, got {value!r}"
    if value <= 0:
        return f"{name} must be greater than zero, got {value!r}"
    return None


__all__ = [
    "CargoSpecs",
    "StateSegment",
    "Waypoint",
    "RouteResult",
    "make_segments",
    "route_notices",
    "parse_ship_date",
]
