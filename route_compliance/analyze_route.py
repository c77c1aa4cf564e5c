"""
Compliance Aggregator

One consolidated compliance report for a planned route and load.

Route + cargo + ship date in, RouteAnalysis out. The route comes from the
external Route Provider and is never modified; everything the report says is
derived from it and the reference tables in effect when the analysis starts.

WHAT IS CHECKED
---------------
    permits  - Per-state permits, fees, escorts and travel restrictions
    seasonal - Frost-law restrictions active on the ship date, and the
               resulting gross weight cap
    bridges  - Low-clearance bridges near the route versus loaded height

The report never approves or blocks a shipment: has_warnings says whether
anything needs a human look before the load is quoted.

USAGE
-----
    from route_compliance import analyze_route, CargoSpecs, RouteResult

    route = RouteResult.from_dict(provider_payload)
    cargo = CargoSpecs(length_ft=95, width_ft=14, height_ft=16, weight_lbs=95000)
    analysis = analyze_route(route, cargo, ship_date="2025-04-01")
    print(analysis.to_json())
"""

import json
import logging
from dataclasses import dataclass
from datetime import date
from typing import Mapping

from .bridges import BridgeReport, check_route_bridge_clearances
from .data import ReferenceTables, resolve_tables
from .errors import ValidationError, MissingRouteDataError
from .inputs import CargoSpecs, RouteResult, parse_ship_date, route_notices
from .permits import RoutePermitSummary, calculate_route_permits, as_cargo
from .seasonal import SeasonalReport, WeightLimit, evaluate_route, adjusted_weight_limit
from .version import VERSION


logger = logging.getLogger(__name__)


# =============================================================================
# RESULT
# =============================================================================

@dataclass(frozen=True, slots=True)
class RouteAnalysis:
    """
    Consolidated compliance report.

    Attributes:
        route        - The analysed route, as supplied
        cargo        - The analysed load
        ship_date    - Resolved ship date
        permits      - Permit and escort summary
        seasonal     - Seasonal restriction report
        bridges      - Bridge clearance report
        weight_limit - Gross weight cap after seasonal reductions
        notices      - Informational notes (route data quality, states not on file)
        version      - Engine version that produced the report
    """

    route: RouteResult
    cargo: CargoSpecs
    ship_date: date
    permits: RoutePermitSummary
    seasonal: SeasonalReport
    bridges: BridgeReport
    weight_limit: WeightLimit
    notices: tuple[str, ...] = ()
    version: str = VERSION

    @property
    def has_warnings(self) -> bool:
        return self.seasonal.has_restrictions or self.bridges.has_issues or bool(self.permits.warnings)

    @property
    def status(self) -> str:
        return "Warnings" if self.has_warnings else "Clear"

    @property
    def all_warnings(self) -> list[str]:
        return [*self.permits.warnings, *self.seasonal.warnings, *self.bridges.warnings]

    @property
    def all_recommendations(self) -> list[str]:
        return [*self.seasonal.recommendations, *self.bridges.recommendations]

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "status": self.status,
            "has_warnings": self.has_warnings,
            "ship_date": self.ship_date.isoformat(),
            "route": {
                "total_distance_miles": self.route.total_distance_miles,
                "estimated_drive_time": self.route.estimated_drive_time,
                "states_traversed": self.route.states_traversed,
                "waypoints": len(self.route.waypoints),
            },
            "cargo": {
                "length_ft": self.cargo.length_ft,
                "width_ft": self.cargo.width_ft,
                "height_ft": self.cargo.height_ft,
                "total_height_ft": self.cargo.total_height_ft,
                "weight_lbs": self.cargo.weight_lbs,
                "axle_configuration": self.cargo.axle_configuration,
            },
            "permits": self.permits.to_dict(),
            "seasonal": self.seasonal.to_dict(),
            "bridges": self.bridges.to_dict(),
            "weight_limit": self.weight_limit.to_dict(),
            "warnings": self.all_warnings,
            "recommendations": self.all_recommendations,
            "notices": list(self.notices),
        }

    def to_json(self, indent: int | None = 2) -> str:
        """JSON report; identical inputs give byte-identical output."""
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def analyze_route(
    route: RouteResult | Mapping,
    cargo: CargoSpecs | Mapping,
    ship_date: date | str | None = None,
    tables: ReferenceTables | None = None
) -> RouteAnalysis:
    """
    Analyse a route for permits, seasonal restrictions and bridge clearances.

    All inputs are validated before any rule is evaluated. The reference
    snapshot is resolved once, so every check in one analysis sees the same
    tables even if they are swapped mid-flight.

    Args:
        route: Route Provider result (RouteResult or its JSON payload)
        cargo: Load specification (CargoSpecs or a payload dict)
        ship_date: Ship date (date, datetime or ISO string; default today)
        tables: Reference snapshot (process-wide if not provided)

    Returns:
        RouteAnalysis

    Raises:
        ValidationError: listing every invalid input
        MissingRouteDataError: if the route has no state segments
    """
    route, cargo, when = _validate(route, cargo, ship_date)
    if not route.state_segments:
        raise MissingRouteDataError("Route has no state segments - cannot assess compliance")

    tables = resolve_tables(tables)

    notices = route_notices(route)
    for notice in notices:
        logger.warning("Route data: %s", notice)

    permits = calculate_route_permits(route.state_segments, cargo, tables=tables)
    seasonal = evaluate_route(route.state_segments, when, tables)
    weight_limit = adjusted_weight_limit(route.state_segments, ship_date=when, tables=tables)
    bridges = check_route_bridge_clearances(route.waypoints, cargo.total_height_ft, tables)

    analysis = RouteAnalysis(
        route=route,
        cargo=cargo,
        ship_date=when,
        permits=permits,
        seasonal=seasonal,
        bridges=bridges,
        weight_limit=weight_limit,
        notices=tuple(notices) + permits.notices,
    )

    logger.info(
        "Analysed %s on %s: %s (%d warning(s), total cost $%.2f)",
        "-".join(route.states_traversed), when, analysis.status,
        len(analysis.all_warnings), permits.total_cost,
    )
    return analysis


def _validate(route, cargo, ship_date) -> tuple[RouteResult, CargoSpecs, date]:
    """Resolve every input, collecting all problems before raising."""
    problems = []
    resolved = []
    steps = (
        (_as_route, route),
        (as_cargo, cargo),
        (parse_ship_date, ship_date),
    )
    for resolve, value in steps:
        try:
            resolved.append(resolve(value))
        except ValidationError as e:
            problems.extend(e.problems)

    if problems:
        raise ValidationError(problems)
    return tuple(resolved)


def _as_route(route) -> RouteResult:
    if isinstance(route, RouteResult):
        return route
    if isinstance(route, Mapping):
        return RouteResult.from_dict(route)
    raise ValidationError([f"route must be RouteResult or a mapping, got {type(route).__name__}"])


__all__ = ["RouteAnalysis", "analyze_route"]
