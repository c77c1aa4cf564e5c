"""
Shared fixtures for route compliance tests.
"""

from dataclasses import replace

import pytest

from route_compliance.data import build_reference_tables, bridges_frame
from route_compliance.inputs import CargoSpecs, RouteResult, Waypoint, make_segments


def _bridge_row(bridge_id: str, lat: float, lng: float, clearance_ft: float, state_code: str = "MN") -> dict:
    return {
        "bridge_id": bridge_id,
        "name": f"Bridge {bridge_id}",
        "location": f"Testville, {state_code}",
        "state_code": state_code,
        "lat": lat,
        "lng": lng,
        "clearance_ft": clearance_ft,
        "road": "US-1",
    }


@pytest.fixture
def make_bridge():
    """Factory for synthetic bridge catalog rows."""
    return _bridge_row


@pytest.fixture(scope="session")
def default_tables():
    """Reference tables built from the shipped rule modules and bridge catalog."""
    return build_reference_tables()


@pytest.fixture
def no_bridge_tables(default_tables):
    """Default rules with an empty bridge catalog."""
    return replace(default_tables, bridges=bridges_frame([]))


@pytest.fixture
def oversize_cargo():
    """14' wide, 16' high, 95,000 lb load: oversize and overweight everywhere."""
    return CargoSpecs(length_ft=70, width_ft=14, height_ft=16, weight_lbs=95000)


@pytest.fixture
def legal_cargo():
    """Load inside the federal legal envelope."""
    return CargoSpecs(length_ft=40, width_ft=8, height_ft=12, weight_lbs=60000)


@pytest.fixture
def midwest_route():
    """MN -> WI -> MI, 450 miles."""
    return RouteResult(
        total_distance_miles=450,
        estimated_drive_time="7h 45m",
        state_segments=make_segments(("MN", 200), ("WI", 150), ("MI", 100)),
        waypoints=(
            Waypoint(44.0, -93.0, 0.0),
            Waypoint(44.5, -90.0, 200.0),
            Waypoint(42.5, -84.0, 350.0),
        ),
    )
