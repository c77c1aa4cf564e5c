"""
Unit Tests for Reference Tables

Tests integrity checks on the shipped reference data and the snapshot
lifecycle (load once, swap atomically, inject per call).
"""

import pytest

from route_compliance.data import (
    ReferenceTables,
    build_reference_tables,
    bridges_frame,
    get_reference_tables,
    swap_reference_tables,
    validate_bridges,
    validate_permit_rules,
    validate_seasonal_rules,
)
from route_compliance.data.reference import seasonal_restrictions, state_permits
from route_compliance.data.reference.seasonal_restrictions import SeasonalRestrictionRule
from route_compliance.data.reference.state_permits import (
    PermitFeeRule,
    LegalLimits,
    OversizeFees,
    OverweightFees,
    WeightBracket,
    EscortTrigger,
    EscortRate,
)
from route_compliance.errors import ReferenceDataError
from route_compliance.seasonal import has_active_restriction


def _seasonal(state_code="AK", start=(3, 1), end=(5, 15), pct=20, **kwargs):
    return SeasonalRestrictionRule(
        state_code=state_code,
        state_name="Test",
        restriction_name="Test Limits",
        description="Synthetic rule",
        start=start,
        end=end,
        weight_reduction_percent=pct,
        **kwargs,
    )


def _permit(state_code="ZZ", **kwargs):
    fields = dict(
        state_code=state_code,
        state_name="Testland",
        legal=LegalLimits(),
        oversize=OversizeFees(base_fee=10),
        overweight=OverweightFees(base_fee=10),
    )
    fields.update(kwargs)
    return PermitFeeRule(**fields)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def restore_tables():
    """Put the process-wide snapshot back after a swap test."""
    original = get_reference_tables()
    yield original
    swap_reference_tables(original)


# =============================================================================
# SHIPPED DATA TESTS
# =============================================================================

class TestShippedData:
    """The reference data shipped with the package passes its own checks."""

    def test_seasonal_rules_valid(self):
        assert validate_seasonal_rules(seasonal_restrictions.RULES) == []

    def test_permit_rules_valid(self):
        assert validate_permit_rules(state_permits.RULES) == []

    def test_builds(self, default_tables):
        assert len(default_tables.seasonal) == 12
        assert len(default_tables.permits) == 14
        assert default_tables.bridges.height == 18

    def test_mappings_read_only(self, default_tables):
        with pytest.raises(TypeError):
            default_tables.seasonal["MN"] = None


# =============================================================================
# VALIDATION TESTS
# =============================================================================

class TestValidation:
    """Tests for reference integrity checks."""

    def test_duplicate_state(self):
        errors = validate_seasonal_rules((_seasonal("AK"), _seasonal("AK")))
        assert errors == ["seasonal AK: duplicate state_code"]

    def test_bad_state_code(self):
        errors = validate_seasonal_rules((_seasonal("ak"),))
        assert errors == ["seasonal ak: state_code must be a 2-letter upper-case code"]

    def test_invalid_date(self):
        errors = validate_seasonal_rules((_seasonal(end=(2, 30)),))
        assert errors == ["seasonal AK: invalid end date (2, 30)"]

    def test_leap_day_allowed(self):
        assert validate_seasonal_rules((_seasonal(end=(2, 29)),)) == []

    def test_reduction_out_of_range(self):
        assert len(validate_seasonal_rules((_seasonal(pct=100),))) == 1

    def test_permit_fee_without_permit(self):
        assert len(validate_seasonal_rules((_seasonal(permit_fee=50),))) == 1

    def test_unsorted_brackets(self):
        rule = _permit(overweight=OverweightFees(
            base_fee=10,
            brackets=(WeightBracket(150000, 90), WeightBracket(100000, 30)),
        ))
        assert validate_permit_rules((rule,)) == [
            "permit ZZ: weight brackets must be sorted by up_to_lbs"
        ]

    def test_unknown_trigger_dimension(self):
        rule = _permit(escort_triggers=(EscortTrigger("girth", 10, 1),))
        assert validate_permit_rules((rule,)) == [
            "permit ZZ: unknown escort trigger dimension 'girth'"
        ]

    def test_unknown_rate_basis(self):
        rule = _permit(escort_rate=EscortRate("per_hour", 100))
        assert validate_permit_rules((rule,)) == ["permit ZZ: unknown escort rate basis 'per_hour'"]

    def test_duplicate_bridge(self, make_bridge):
        bridges = bridges_frame([make_bridge("X", 44.0, -93.0, 14.0), make_bridge("X", 44.1, -93.0, 14.0)])
        assert validate_bridges(bridges) == ["bridges: duplicate bridge_id ['X']"]

    def test_bad_bridge_values(self, make_bridge):
        bridges = bridges_frame([make_bridge("X", 95.0, -93.0, 14.0), make_bridge("Y", 44.0, -93.0, 0.0)])
        assert validate_bridges(bridges) == ["bridges: out-of-range values for ['X', 'Y']"]

    def test_missing_columns(self, make_bridge):
        bridges = bridges_frame([make_bridge("X", 44.0, -93.0, 14.0)]).drop("clearance_ft")
        assert validate_bridges(bridges) == ["bridges: missing columns ['clearance_ft']"]

    def test_all_errors_raised_together(self, make_bridge):
        with pytest.raises(ReferenceDataError) as exc:
            build_reference_tables(
                seasonal_rules=[_seasonal(end=(13, 1))],
                permit_rules=[_permit(escort_rate=EscortRate("per_hour", 100))],
                bridges=bridges_frame([make_bridge("X", 44.0, -93.0, -1.0)]),
            )
        assert len(exc.value.problems) == 3


# =============================================================================
# LIFECYCLE TESTS
# =============================================================================

class TestLifecycle:
    """Tests for the process-wide snapshot."""

    def test_loaded_once(self):
        assert get_reference_tables() is get_reference_tables()

    def test_swap(self, restore_tables):
        custom = build_reference_tables(seasonal_rules=[], bridges=bridges_frame([]))

        previous = swap_reference_tables(custom)

        assert previous is restore_tables
        assert get_reference_tables() is custom
        assert has_active_restriction("MN", "2025-04-01") is False

    def test_snapshot_held_by_caller_unaffected(self, restore_tables):
        held = get_reference_tables()
        swap_reference_tables(build_reference_tables(seasonal_rules=[], bridges=bridges_frame([])))

        assert has_active_restriction("MN", "2025-04-01", held) is True

    def test_swap_rejects_other_types(self, restore_tables):
        with pytest.raises(TypeError):
            swap_reference_tables({"seasonal": {}})

    def test_swap_rejects_invalid_snapshot(self, restore_tables):
        tables = ReferenceTables(
            seasonal={"MN": _seasonal("MN", start=(13, 40))},
            permits={},
            bridges=bridges_frame([]),
        )
        with pytest.raises(ReferenceDataError) as exc:
            swap_reference_tables(tables)

        assert exc.value.problems == ["seasonal MN: invalid start date (13, 40)"]
        assert get_reference_tables() is restore_tables

    def test_swap_rejects_mismatched_key(self, restore_tables):
        tables = ReferenceTables(seasonal={"mn": _seasonal("MN")}, permits={}, bridges=bridges_frame([]))
        with pytest.raises(ReferenceDataError, match="keyed as 'mn'"):
            swap_reference_tables(tables)

    def test_snapshot_detached_from_source_dicts(self, restore_tables):
        rules = {"MN": _seasonal("MN")}
        swap_reference_tables(ReferenceTables(seasonal=rules, permits={}, bridges=bridges_frame([])))

        rules["TX"] = _seasonal("TX")

        live = get_reference_tables()
        assert "TX" not in live.seasonal
        assert has_active_restriction("TX", "2025-04-01") is False
        with pytest.raises(TypeError):
            live.permits["MN"] = None

    def test_injected_tables(self):
        tables = build_reference_tables(seasonal_rules=[_seasonal("TX")], bridges=bridges_frame([]))
        assert isinstance(tables, ReferenceTables)
        assert has_active_restriction("TX", "2025-04-01", tables) is True
        assert has_active_restriction("MN", "2025-04-01", tables) is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
