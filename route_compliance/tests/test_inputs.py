"""
Unit Tests for Analysis Inputs

Tests request validation, payload parsing and route data notices.
"""

from datetime import date, datetime

import pytest

from route_compliance.errors import ValidationError
from route_compliance.inputs import (
    CargoSpecs,
    StateSegment,
    Waypoint,
    RouteResult,
    make_segments,
    route_notices,
    parse_ship_date,
)
from route_compliance.severity import Severity


# =============================================================================
# CARGO TESTS
# =============================================================================

class TestCargoSpecs:
    """Tests for cargo validation."""

    def test_valid(self):
        cargo = CargoSpecs(length_ft=70, width_ft=14, height_ft=16, weight_lbs=95000)
        assert cargo.total_height_ft == 16

    def test_total_height_includes_deck(self):
        cargo = CargoSpecs(length_ft=40, width_ft=8, height_ft=10, weight_lbs=60000, deck_height_ft=3.5)
        assert cargo.total_height_ft == pytest.approx(13.5)

    def test_all_problems_collected(self):
        with pytest.raises(ValidationError) as exc:
            CargoSpecs(length_ft=70, width_ft=-1, height_ft=0, weight_lbs=95000)
        assert len(exc.value.problems) == 2
        assert "width_ft must be greater than zero, got -1" in exc.value.problems

    @pytest.mark.parametrize("value", [True, "14", None, float("inf"), float("nan")])
    def test_non_numbers_rejected(self, value):
        with pytest.raises(ValidationError):
            CargoSpecs(length_ft=70, width_ft=value, height_ft=16, weight_lbs=95000)

    def test_bad_deck_height(self):
        with pytest.raises(ValidationError):
            CargoSpecs(length_ft=70, width_ft=14, height_ft=16, weight_lbs=95000, deck_height_ft=0)

    def test_is_validation_error_a_value_error(self):
        with pytest.raises(ValueError):
            CargoSpecs(length_ft=0, width_ft=14, height_ft=16, weight_lbs=95000)

    def test_from_payload(self):
        cargo = CargoSpecs.from_dict({
            "length": 70, "width": 14, "height": 12, "grossWeight": 95000,
            "deckHeight": 4, "axleConfiguration": "9-axle",
        })
        assert cargo.weight_lbs == 95000
        assert cargo.total_height_ft == 16
        assert cargo.axle_configuration == "9-axle"

    def test_from_payload_missing_field(self):
        with pytest.raises(ValidationError, match="missing required field: length_ft"):
            CargoSpecs.from_dict({"width": 14, "height": 12, "weight": 95000})

    def test_immutable(self):
        cargo = CargoSpecs(length_ft=70, width_ft=14, height_ft=16, weight_lbs=95000)
        with pytest.raises(AttributeError):
            cargo.width_ft = 20


# =============================================================================
# ROUTE TESTS
# =============================================================================

class TestRoute:
    """Tests for route segments, waypoints and payload parsing."""

    def test_state_code_normalised(self):
        assert StateSegment(state_code=" mn ", distance_miles=10, position=0).state_code == "MN"

    def test_blank_state_code(self):
        with pytest.raises(ValidationError):
            StateSegment(state_code="  ", distance_miles=10, position=0)

    def test_negative_distance(self):
        with pytest.raises(ValidationError):
            StateSegment(state_code="MN", distance_miles=-1, position=0)

    def test_zero_distance_allowed(self):
        assert StateSegment(state_code="MN", distance_miles=0, position=0).distance_miles == 0

    @pytest.mark.parametrize("lat,lng", [(91, 0), (-91, 0), (0, 181), (0, -181)])
    def test_waypoint_out_of_range(self, lat, lng):
        with pytest.raises(ValidationError):
            Waypoint(lat, lng)

    def test_make_segments(self):
        segments = make_segments(("MN", 200), ("WI", 150))
        assert [(s.state_code, s.distance_miles, s.position) for s in segments] == [
            ("MN", 200, 0), ("WI", 150, 1),
        ]

    def test_states_traversed(self):
        route = RouteResult(
            total_distance_miles=330,
            state_segments=make_segments(("MN", 100), ("WI", 150), ("MN", 80)),
        )
        assert route.states_traversed == ["MN", "WI"]
        assert route.segment_distance_miles == 330

    def test_from_payload(self):
        route = RouteResult.from_dict({
            "totalDistanceMiles": 350,
            "estimatedDriveTime": "5h 50m",
            "stateSegments": [
                {"stateCode": "MN", "distanceMiles": 200},
                {"state": "wi", "distance": 150},
            ],
            "waypoints": [
                {"lat": 44.0, "lng": -93.0, "cumulativeMiles": 0},
                {"lat": 44.5, "lon": -90.0, "cumulativeMiles": 200},
            ],
        })
        assert route.states_traversed == ["MN", "WI"]
        assert route.state_segments[1].position == 1
        assert route.waypoints[1].lng == -90.0
        assert route.estimated_drive_time == "5h 50m"

    def test_negative_total(self):
        with pytest.raises(ValidationError):
            RouteResult(total_distance_miles=-5)

    def test_notices_within_tolerance(self):
        """A 1% gap is rounding, not a missing state."""
        route = RouteResult(
            total_distance_miles=1000,
            state_segments=make_segments(("MN", 995)),
            waypoints=(Waypoint(44.0, -93.0),),
        )
        assert route_notices(route) == []

    def test_notice_for_gap(self):
        route = RouteResult(
            total_distance_miles=1000,
            state_segments=make_segments(("MN", 900)),
            waypoints=(Waypoint(44.0, -93.0),),
        )
        assert route_notices(route) == [
            "State segment mileage (900.0 mi) differs from route total (1,000.0 mi) by 100.0 mi"
        ]


# =============================================================================
# SHIP DATE TESTS
# =============================================================================

class TestParseShipDate:
    """Tests for ship date normalisation."""

    def test_date(self):
        assert parse_ship_date(date(2025, 4, 1)) == date(2025, 4, 1)

    def test_datetime(self):
        assert parse_ship_date(datetime(2025, 4, 1, 15, 30)) == date(2025, 4, 1)

    def test_iso_string(self):
        assert parse_ship_date(" 2025-04-01 ") == date(2025, 4, 1)

    def test_default_today(self):
        assert parse_ship_date(None) == date.today()

    @pytest.mark.parametrize("value", ["2025-13-01", "April 1", 20250401])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            parse_ship_date(value)


# =============================================================================
# SEVERITY TESTS
# =============================================================================

class TestSeverity:
    """Tests for severity ordering."""

    def test_order(self):
        assert Severity.OK < Severity.CAUTION < Severity.WARNING < Severity.DANGER

    def test_not_string_order(self):
        """'caution' < 'danger' < 'ok' < 'warning' alphabetically; rank wins."""
        assert sorted([Severity.OK, Severity.WARNING, Severity.DANGER, Severity.CAUTION]) == [
            Severity.OK, Severity.CAUTION, Severity.WARNING, Severity.DANGER,
        ]

    def test_worst(self):
        assert Severity.worst([Severity.CAUTION, Severity.DANGER, Severity.OK]) is Severity.DANGER

    def test_worst_empty(self):
        assert Severity.worst([]) is Severity.OK

    def test_from_rank(self):
        assert Severity.from_rank(2) is Severity.WARNING
        with pytest.raises(ValueError):
            Severity.from_rank(7)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
