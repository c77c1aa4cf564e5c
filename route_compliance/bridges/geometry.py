"""
Route Geometry

Great-circle distance as a polars expression, for matching catalog bridges
against sampled route waypoints.
"""

import math

import polars as pl

from ..data.reference.clearance import EARTH_RADIUS_MILES

MILES_PER_DEGREE_LAT = 69.0


def haversine_miles(lat1: str, lng1: str, lat2: str, lng2: str) -> pl.Expr:
    """Haversine distance in miles between two lat/lng column pairs."""
    phi1 = pl.col(lat1).radians()
    phi2 = pl.col(lat2).radians()
    d_phi = (pl.col(lat2) - pl.col(lat1)).radians()
    d_lambda = (pl.col(lng2) - pl.col(lng1)).radians()

    a = (d_phi / 2).sin() ** 2 + phi1.cos() * phi2.cos() * (d_lambda / 2).sin() ** 2
    return 2 * EARTH_RADIUS_MILES * a.sqrt().clip(upper_bound=1.0).arcsin()


def bounding_box(
    lats: list[float],
    lngs: list[float],
    pad_miles: float
) -> tuple[float, float, float, float]:
    """
    (south, west, north, east) box around points, padded by pad_miles.

    Longitude padding widens toward the poles so the box never undercuts the
    corridor.
    """
    lat_pad = pad_miles / MILES_PER_DEGREE_LAT
    widest = max(abs(lat) for lat in lats) + lat_pad
    lng_pad = lat_pad / max(math.cos(math.radians(min(widest, 89.0))), 0.01)
    return (min(lats) - lat_pad, min(lngs) - lng_pad, max(lats) + lat_pad, max(lngs) + lng_pad)


__all__ = ["haversine_miles", "bounding_box", "MILES_PER_DEGREE_LAT"]
