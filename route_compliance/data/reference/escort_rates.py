"""
Escort Rates

Default pilot-car, pole-car and police escort rates, used for any state whose
permit schedule has no escort rate of its own.
Last updated: 2025-01-15

HOW ESCORT DAYS WORK
--------------------
Per-day costs are charged per traversed segment:

    days = max(MIN_DAYS_PER_SEGMENT, segment_miles / MILES_PER_DAY)

and 0 for a segment with no miles.

A state entered twice is billed for both segments, since escort time follows
distance driven.
"""

ESCORT_BASIS = "per_day"
ESCORT_COST_PER_DAY = 800.00      # Single pilot car
POLE_CAR_COST_PER_DAY = 1000.00   # Height pole car
POLICE_COST_PER_HOUR = 100.00
POLICE_HOURS_PER_DAY = 8

MILES_PER_DAY = 300               # Average oversize travel per day
MIN_DAYS_PER_SEGMENT = 0.5

HIGH_PERMIT_COST_THRESHOLD = 500.00   # Route permit fees above this raise a warning
