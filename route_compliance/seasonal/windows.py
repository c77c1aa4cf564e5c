"""
Recurring Date Windows

Year-agnostic (month, day) windows, as used by frost-law restrictions.
Dates are compared as month * 100 + day, so Mar 1 is 301 and May 15 is 515.
"""

from datetime import date

import polars as pl


def month_day(when: date) -> int:
    return when.month * 100 + when.day


def in_period(start: tuple[int, int], end: tuple[int, int], when: date) -> bool:
    """
    Check if a date falls within a (month, day) period, inclusive.

    Handles year boundary crossings (e.g., Nov 1 to Feb 1).
    """
    start_md = start[0] * 100 + start[1]
    end_md = end[0] * 100 + end[1]
    current = month_day(when)

    if start_md <= end_md:
        # Normal range (e.g., Mar 1 to May 15)
        return start_md <= current <= end_md
    # Crosses year boundary (e.g., Nov 1 to Feb 1)
    return current >= start_md or current <= end_md


def in_period_expr(
    start: tuple[int, int],
    end: tuple[int, int],
    date_col: str = "ship_date"
) -> pl.Expr:
    """Polars expression form of in_period for a column of dates."""
    start_md = start[0] * 100 + start[1]
    end_md = end[0] * 100 + end[1]
    current = (
        pl.col(date_col).dt.month().cast(pl.Int32) * 100 +
        pl.col(date_col).dt.day().cast(pl.Int32)
    )

    if start_md <= end_md:
        return (current >= start_md) & (current <= end_md)
    return (current >= start_md) | (current <= end_md)


__all__ = ["month_day", "in_period", "in_period_expr"]
