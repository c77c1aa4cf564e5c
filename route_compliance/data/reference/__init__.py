"""
Static Reference Data

    seasonal_restrictions - Frost-law windows and weight reductions
    state_permits         - OS/OW fee schedules, escort triggers, travel restrictions
    escort_rates          - Default escort rates and trip-day assumptions
    federal_limits        - Federal legal envelope
    clearance             - Bridge corridor and severity thresholds
    low_clearance_bridges.csv - Bridge catalog
"""
