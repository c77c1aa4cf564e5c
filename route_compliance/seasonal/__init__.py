"""
Seasonal Restriction Evaluator

Frost-law window checks and seasonal gross-weight caps along a route.
"""

from .windows import in_period, in_period_expr, month_day
from .evaluator import (
    SeasonalReport,
    WeightLimit,
    restriction_for,
    has_active_restriction,
    active_restrictions,
    states_without_restrictions,
    format_restriction_period,
    evaluate_route,
    adjusted_weight_limit,
    next_unrestricted_date,
)

__all__ = [
    "in_period",
    "in_period_expr",
    "month_day",
    "SeasonalReport",
    "WeightLimit",
    "restriction_for",
    "has_active_restriction",
    "active_restrictions",
    "states_without_restrictions",
    "format_restriction_period",
    "evaluate_route",
    "adjusted_weight_limit",
    "next_unrestricted_date",
]
