"""
Route Compliance Engine

Permit, escort, seasonal restriction and bridge clearance screening for
oversize/overweight truck routes.

Structure:
    - analyze_route.py: Consolidated report (main entry point)
    - permits/: State permit fees, escorts, route cost aggregation
    - seasonal/: Frost-law windows and seasonal weight caps
    - bridges/: Low-clearance bridge matching and severity
    - data/: Reference tables (rule modules, bridge catalog) and their lifecycle
    - scripts/: Command-line report
"""

from .analyze_route import RouteAnalysis, analyze_route
from .data import ReferenceTables, build_reference_tables, get_reference_tables, swap_reference_tables
from .errors import RouteComplianceError, ValidationError, MissingRouteDataError, ReferenceDataError
from .inputs import CargoSpecs, StateSegment, Waypoint, RouteResult, make_segments
from .severity import Severity
from .version import VERSION

__all__ = [
    "RouteAnalysis",
    "analyze_route",
    "ReferenceTables",
    "build_reference_tables",
    "get_reference_tables",
    "swap_reference_tables",
    "RouteComplianceError",
    "ValidationError",
    "MissingRouteDataError",
    "ReferenceDataError",
    "CargoSpecs",
    "StateSegment",
    "Waypoint",
    "RouteResult",
    "make_segments",
    "Severity",
    "VERSION",
]
