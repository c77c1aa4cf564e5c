"""
Bridge Clearance Configuration

Corridor matching and severity thresholds for low-clearance bridges.

HOW MATCHING WORKS
------------------
A bridge is "on route" when the great-circle (haversine) distance from the
bridge to its nearest route waypoint is at most CORRIDOR_MILES. Waypoints are
sampled by the Route Provider (roughly every few miles), so the corridor is a
screening radius, not survey-grade linear referencing. Widening it catches
more candidates at the cost of bridges on nearby parallel roads.

HOW SEVERITY WORKS
------------------
clearance = posted clearance - loaded cargo height (feet, rounded to 0.01)

    clearance >= OK_MIN_CLEARANCE        -> ok
    0 <= clearance < OK_MIN_CLEARANCE    -> caution
    WARNING_MIN_CLEARANCE <= clearance < 0 -> warning
    clearance < WARNING_MIN_CLEARANCE    -> danger
"""

from typing import NamedTuple


class ClearanceThresholds(NamedTuple):
    ok_min: float = 1.0
    warning_min: float = -0.5


CORRIDOR_MILES = 0.5
EARTH_RADIUS_MILES = 3958.8
CLEARANCE_PRECISION = 2         # Decimal places (0.01 ft)
TOP_BRIDGES = 5                 # Bridges rendered into warning text

OK_MIN_CLEARANCE = 1.0
WARNING_MIN_CLEARANCE = -0.5

DEFAULT_THRESHOLDS = ClearanceThresholds(ok_min=OK_MIN_CLEARANCE, warning_min=WARNING_MIN_CLEARANCE)


# =============================================================================
# ADVISORY TEXT
# =============================================================================

# Per flagged bridge, keyed by severity value
WARNING_TEMPLATES = {
    "caution": "{name} ({location}): {clearance_ft:.2f}' posted, only {clearance:.2f}' to spare",
    "warning": "{name} ({location}): {clearance_ft:.2f}' posted, load is {deficit:.2f}' too tall",
    "danger": "{name} ({location}): {clearance_ft:.2f}' posted, load is {deficit:.2f}' too tall - cannot pass",
}

# Once per route, for each severity present
RECOMMENDATIONS = {
    "caution": "Verify posted clearances on site - resurfacing and snowpack reduce actual clearance",
    "warning": "Request a route survey and obtain an alternate routing before quoting",
    "danger": "Reroute required - load cannot pass under one or more bridges on this route",
}

LIMIT_NOTE = "{hidden} more low-clearance bridge(s) on route not listed"
