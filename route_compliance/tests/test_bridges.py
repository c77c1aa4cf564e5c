"""
Unit Tests for Bridge Clearance Checker

Tests clearance arithmetic, severity boundaries, corridor matching and
report ordering.
"""

import math
from dataclasses import replace

import polars as pl
import pytest

from route_compliance.bridges import (
    LowClearanceBridge,
    check_clearance,
    check_route_bridge_clearances,
    bridges_near_route,
    haversine_miles,
)
from route_compliance.data import bridges_frame, load_bridges
from route_compliance.data.reference.clearance import (
    ClearanceThresholds,
    EARTH_RADIUS_MILES,
    RECOMMENDATIONS,
)
from route_compliance.errors import ValidationError
from route_compliance.inputs import Waypoint
from route_compliance.severity import Severity


def _bridge(clearance_ft: float, bridge_id: str = "T-1") -> LowClearanceBridge:
    return LowClearanceBridge(
        bridge_id=bridge_id,
        name="Test Bridge",
        location="Testville, MN",
        state_code="MN",
        lat=44.0,
        lng=-93.0,
        clearance_ft=clearance_ft,
        road="US-1",
    )


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def waypoints():
    """Three points along an east-west line, roughly 5 miles apart."""
    return [
        Waypoint(44.0, -93.0, 0.0),
        Waypoint(44.0, -92.9, 5.0),
        Waypoint(44.0, -92.8, 10.0),
    ]


@pytest.fixture
def corridor_tables(no_bridge_tables, make_bridge):
    """
    Catalog around the test waypoints:
        A - on waypoint 1, 15.0'
        B - ~0.2 mi off waypoint 2, 16.5'
        C - on waypoint 3, 15.8'
        D - ~1 mi off waypoint 2, 12.0'
        F - on waypoint 2, 18.0'
    """
    return replace(no_bridge_tables, bridges=bridges_frame([
        make_bridge("A", 44.0, -93.0, 15.0),
        make_bridge("B", 44.003, -92.9, 16.5),
        make_bridge("C", 44.0, -92.8, 15.8),
        make_bridge("D", 44.0145, -92.9, 12.0),
        make_bridge("F", 44.0, -92.9, 18.0),
    ]))


# =============================================================================
# SINGLE BRIDGE TESTS
# =============================================================================

class TestCheckClearance:
    """Tests for clearance arithmetic and severity boundaries."""

    def test_one_foot_is_ok(self):
        result = check_clearance(_bridge(15.0), 14.0)
        assert result.severity is Severity.OK
        assert result.clearance == pytest.approx(1.0)
        assert result.clears is True
        assert result.deficit == 0.0

    def test_just_under_one_foot_is_caution(self):
        result = check_clearance(_bridge(14.99), 14.0)
        assert result.severity is Severity.CAUTION
        assert result.clearance == pytest.approx(0.99)
        assert result.clears is True

    def test_exact_fit_is_caution(self):
        result = check_clearance(_bridge(14.0), 14.0)
        assert result.severity is Severity.CAUTION
        assert result.clearance == 0.0
        assert result.clears is True
        assert result.deficit == 0.0

    def test_just_too_tall_is_warning(self):
        result = check_clearance(_bridge(13.99), 14.0)
        assert result.severity is Severity.WARNING
        assert result.clearance == pytest.approx(-0.01)
        assert result.clears is False
        assert result.deficit == pytest.approx(0.01)

    def test_half_foot_too_tall_is_warning(self):
        result = check_clearance(_bridge(13.5), 14.0)
        assert result.severity is Severity.WARNING

    def test_over_half_foot_too_tall_is_danger(self):
        result = check_clearance(_bridge(13.49), 14.0)
        assert result.severity is Severity.DANGER
        assert result.deficit == pytest.approx(0.51)

    def test_rounded_before_classification(self):
        """0.999' of margin rounds to 1.00' and counts as ok."""
        result = check_clearance(_bridge(14.999), 14.0)
        assert result.clearance == pytest.approx(1.0)
        assert result.severity is Severity.OK

    def test_custom_thresholds(self):
        thresholds = ClearanceThresholds(ok_min=2.0, warning_min=-1.0)
        assert check_clearance(_bridge(15.5), 14.0, thresholds).severity is Severity.CAUTION
        assert check_clearance(_bridge(13.2), 14.0, thresholds).severity is Severity.WARNING
        assert check_clearance(_bridge(12.9), 14.0, thresholds).severity is Severity.DANGER

    def test_invalid_thresholds(self):
        with pytest.raises(ValidationError):
            check_clearance(_bridge(15.0), 14.0, ClearanceThresholds(ok_min=-1.0, warning_min=-2.0))

    @pytest.mark.parametrize("height", [0, -1.0, float("nan"), "14"])
    def test_invalid_height(self, height):
        with pytest.raises(ValidationError):
            check_clearance(_bridge(15.0), height)


# =============================================================================
# GEOMETRY TESTS
# =============================================================================

class TestHaversine:
    """Tests for the great-circle distance expression."""

    def test_latitude_shift(self):
        """Due north, distance is R * delta-latitude."""
        df = pl.DataFrame({"a_lat": [44.0], "a_lng": [-93.0], "b_lat": [44.01], "b_lng": [-93.0]})
        miles = df.select(haversine_miles("a_lat", "a_lng", "b_lat", "b_lng"))[0, 0]
        assert miles == pytest.approx(EARTH_RADIUS_MILES * math.radians(0.01), rel=1e-6)

    def test_same_point(self):
        df = pl.DataFrame({"a_lat": [44.0], "a_lng": [-93.0], "b_lat": [44.0], "b_lng": [-93.0]})
        assert df.select(haversine_miles("a_lat", "a_lng", "b_lat", "b_lng"))[0, 0] == pytest.approx(0.0)

    def test_known_distance(self):
        """Minneapolis to Chicago is roughly 355 miles great-circle."""
        df = pl.DataFrame({"a_lat": [44.9778], "a_lng": [-93.2650], "b_lat": [41.8781], "b_lng": [-87.6298]})
        miles = df.select(haversine_miles("a_lat", "a_lng", "b_lat", "b_lng"))[0, 0]
        assert miles == pytest.approx(355, abs=5)


# =============================================================================
# CORRIDOR MATCHING TESTS
# =============================================================================

class TestBridgesNearRoute:
    """Tests for matching catalog bridges to waypoints."""

    def test_corridor(self, corridor_tables, waypoints):
        near = bridges_near_route(waypoints, corridor_tables.bridges, 0.5)
        assert near["bridge_id"].to_list() == ["A", "B", "C", "F"]

    def test_wider_corridor(self, corridor_tables, waypoints):
        near = bridges_near_route(waypoints, corridor_tables.bridges, 2.0)
        assert near["bridge_id"].to_list() == ["A", "B", "C", "D", "F"]

    def test_nearest_waypoint_mile(self, corridor_tables, waypoints):
        near = bridges_near_route(waypoints, corridor_tables.bridges, 0.5)
        miles = dict(zip(near["bridge_id"].to_list(), near["route_mile"].to_list()))
        assert miles == {"A": 0.0, "B": 5.0, "C": 10.0, "F": 5.0}

    def test_no_waypoints(self, corridor_tables):
        near = bridges_near_route([], corridor_tables.bridges, 0.5)
        assert near.height == 0


# =============================================================================
# ROUTE REPORT TESTS
# =============================================================================

class TestCheckRouteBridgeClearances:
    """Tests for the route-level bridge report."""

    def test_flagged_worst_first(self, corridor_tables, waypoints):
        report = check_route_bridge_clearances(waypoints, 16.0, corridor_tables)

        assert report.has_issues is True
        assert [m.bridge.bridge_id for m in report.bridges] == ["A", "C", "B"]
        assert [m.result.severity for m in report.bridges] == [
            Severity.DANGER, Severity.WARNING, Severity.CAUTION,
        ]
        assert report.bridges_checked == 4
        assert report.worst_severity is Severity.DANGER

    def test_warning_text(self, corridor_tables, waypoints):
        report = check_route_bridge_clearances(waypoints, 16.0, corridor_tables)
        assert report.warnings[0] == (
            "Bridge A (Testville, MN): 15.00' posted, load is 1.00' too tall - cannot pass"
        )
        assert report.warnings[2] == (
            "Bridge B (Testville, MN): 16.50' posted, only 0.50' to spare"
        )

    def test_recommendations_once_per_severity(self, corridor_tables, waypoints):
        report = check_route_bridge_clearances(waypoints, 16.0, corridor_tables)
        assert list(report.recommendations) == [
            RECOMMENDATIONS["danger"],
            RECOMMENDATIONS["warning"],
            RECOMMENDATIONS["caution"],
        ]

    def test_corridor_override(self, corridor_tables, waypoints):
        """D (12.0') sorts ahead of A (15.0') within danger."""
        report = check_route_bridge_clearances(waypoints, 16.0, corridor_tables, corridor_miles=2.0)
        assert [m.bridge.bridge_id for m in report.bridges] == ["D", "A", "C", "B"]
        assert report.bridges_checked == 5

    def test_limit(self, corridor_tables, waypoints):
        report = check_route_bridge_clearances(waypoints, 16.0, corridor_tables, limit=1)
        assert len(report.bridges) == 3
        assert report.warnings[1] == "2 more low-clearance bridge(s) on route not listed"
        assert len(report.warnings) == 2

    def test_ties_break_on_route_mile(self, no_bridge_tables, make_bridge, waypoints):
        tables = replace(no_bridge_tables, bridges=bridges_frame([
            make_bridge("Y", 44.0, -92.8, 15.0),
            make_bridge("Z", 44.0, -93.0, 15.0),
        ]))
        report = check_route_bridge_clearances(waypoints, 16.0, tables)
        assert [m.bridge.bridge_id for m in report.bridges] == ["Z", "Y"]

    def test_low_load_clears_everything(self, corridor_tables, waypoints):
        report = check_route_bridge_clearances(waypoints, 10.0, corridor_tables)
        assert report.has_issues is False
        assert report.bridges == ()
        assert report.warnings == ()
        assert report.bridges_checked == 4

    def test_no_waypoints(self, corridor_tables):
        report = check_route_bridge_clearances([], 16.0, corridor_tables)
        assert report.has_issues is False
        assert report.bridges_checked == 0

    def test_shipped_catalog(self, default_tables):
        """Waypoint at Rochester, MN picks up the US-52 rail bridge (14.83')."""
        report = check_route_bridge_clearances([Waypoint(44.0216, -92.4699, 0.0)], 16.0, default_tables)
        assert report.bridges[0].bridge.bridge_id == "MN-0001"
        assert report.bridges[0].result.severity is Severity.DANGER

    def test_invalid_corridor(self, corridor_tables, waypoints):
        with pytest.raises(ValidationError):
            check_route_bridge_clearances(waypoints, 16.0, corridor_tables, corridor_miles=-1)

    def test_to_dict(self, corridor_tables, waypoints):
        data = check_route_bridge_clearances(waypoints, 16.0, corridor_tables).to_dict()
        assert data["worst_severity"] == "danger"
        assert data["bridges"][0]["bridge_id"] == "A"
        assert data["bridges"][0]["severity"] == "danger"


class TestBridgeCatalog:
    """Tests for the shipped bridge catalog."""

    def test_loads(self):
        bridges = load_bridges()
        assert bridges.height == 18
        assert bridges["bridge_id"].n_unique() == bridges.height
        assert bridges["clearance_ft"].dtype == pl.Float64

    def test_no_hawaii_entries(self):
        assert load_bridges().filter(pl.col("state_code") == "HI").height == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
