"""
Bridge Clearance Checker

Low-clearance bridge screening for a route's loaded cargo height.
"""

from .checker import (
    LowClearanceBridge,
    ClearanceResult,
    BridgeMatch,
    BridgeReport,
    classify_clearance,
    check_clearance,
    bridges_near_route,
    check_route_bridge_clearances,
)
from .geometry import haversine_miles, bounding_box

__all__ = [
    "LowClearanceBridge",
    "ClearanceResult",
    "BridgeMatch",
    "BridgeReport",
    "classify_clearance",
    "check_clearance",
    "bridges_near_route",
    "check_route_bridge_clearances",
    "haversine_miles",
    "bounding_box",
]
