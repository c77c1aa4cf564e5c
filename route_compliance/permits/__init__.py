"""
Permit & Escort Calculator

State permit fees, escort requirements and route-level cost aggregation for
oversize/overweight loads.
"""

from .state_permit import (
    StatePermitRequirement,
    PermitCheck,
    calculate_state_permit,
    escort_count,
    needs_permit,
    cargo_dimensions,
    as_cargo,
    DEFAULT_ESCORT_RATE,
)
from .calculator import (
    SegmentEscortCost,
    RoutePermitSummary,
    calculate_route_permits,
    states_requiring_permits,
    estimate_total_cost,
    format_permit_summary,
)

__all__ = [
    "StatePermitRequirement",
    "PermitCheck",
    "calculate_state_permit",
    "escort_count",
    "needs_permit",
    "cargo_dimensions",
    "as_cargo",
    "DEFAULT_ESCORT_RATE",
    "SegmentEscortCost",
    "RoutePermitSummary",
    "calculate_route_permits",
    "states_requiring_permits",
    "estimate_total_cost",
    "format_permit_summary",
]
