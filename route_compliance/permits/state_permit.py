"""
State Permit Evaluation

Permit, escort and superload requirements for one load in one state, priced
from that state's fee schedule (data/reference/state_permits.py).

A state with no schedule on file is not an error: it comes back as a
zero-cost requirement with has_rule=False so the route report can say the
state was not assessed.
"""

import logging
from dataclasses import dataclass
from typing import Mapping

from ..data import ReferenceTables, resolve_tables
from ..data.reference.escort_rates import ESCORT_BASIS, ESCORT_COST_PER_DAY
from ..data.reference.federal_limits import (
    MAX_WIDTH_FT,
    MAX_HEIGHT_FT,
    MAX_LENGTH_FT,
    MAX_GROSS_WEIGHT_LBS,
)
from ..data.reference.state_permits import (
    PermitFeeRule,
    EscortRate,
    EscortTrigger,
    OversizeFees,
    OverweightFees,
)
from ..errors import ValidationError
from ..inputs import CargoSpecs, _is_number


logger = logging.getLogger(__name__)

DEFAULT_ESCORT_RATE = EscortRate(ESCORT_BASIS, ESCORT_COST_PER_DAY)

LBS_PER_TON = 2000


# =============================================================================
# RESULTS
# =============================================================================

@dataclass(frozen=True, slots=True)
class StatePermitRequirement:
    """
    What one state requires of one load.

    Attributes:
        has_rule               - False if the state has no fee schedule on file
        distance_miles         - Miles driven in the state (all visits)
        permit_fee             - Oversize + overweight fee, dollars
        escorts_required       - Pilot cars required while in the state
        escort_rate            - State rate, or the default rate when it has none
        reasons                - Why a permit (or superload handling) is needed
        fee_details            - How permit_fee was built up, one line per charge
        travel_restrictions    - State travel restrictions, verbatim
    """

    state_code: str
    state_name: str
    has_rule: bool
    distance_miles: float = 0.0
    oversize_required: bool = False
    overweight_required: bool = False
    is_superload: bool = False
    oversize_fee: float = 0.0
    overweight_fee: float = 0.0
    escorts_required: int = 0
    pole_car_required: bool = False
    police_escort_required: bool = False
    escort_rate: EscortRate = DEFAULT_ESCORT_RATE
    reasons: tuple[str, ...] = ()
    fee_details: tuple[str, ...] = ()
    travel_restrictions: tuple[str, ...] = ()
    agency: str = ""
    phone: str = ""
    website: str = ""

    @property
    def requires_permit(self) -> bool:
        return self.oversize_required or self.overweight_required

    @property
    def permit_fee(self) -> float:
        return round(self.oversize_fee + self.overweight_fee, 2)

    def to_dict(self) -> dict:
        return {
            "state_code": self.state_code,
            "state_name": self.state_name,
            "has_rule": self.has_rule,
            "distance_miles": self.distance_miles,
            "requires_permit": self.requires_permit,
            "oversize_required": self.oversize_required,
            "overweight_required": self.overweight_required,
            "is_superload": self.is_superload,
            "oversize_fee": self.oversize_fee,
            "overweight_fee": self.overweight_fee,
            "permit_fee": self.permit_fee,
            "escorts_required": self.escorts_required,
            "pole_car_required": self.pole_car_required,
            "police_escort_required": self.police_escort_required,
            "escort_rate": {"basis": self.escort_rate.basis, "amount": self.escort_rate.amount},
            "reasons": list(self.reasons),
            "fee_details": list(self.fee_details),
            "travel_restrictions": list(self.travel_restrictions),
            "agency": self.agency,
            "phone": self.phone,
            "website": self.website,
        }


@dataclass(frozen=True, slots=True)
class PermitCheck:
    """Quick check of a load against federal legal limits."""

    oversize_needed: bool
    overweight_needed: bool
    reasons: tuple[str, ...] = ()

    @property
    def permit_needed(self) -> bool:
        return self.oversize_needed or self.overweight_needed


# =============================================================================
# SINGLE STATE
# =============================================================================

def calculate_state_permit(
    state_code: str,
    cargo: CargoSpecs | Mapping,
    distance_in_state: float = 0,
    tables: ReferenceTables | None = None
) -> StatePermitRequirement:
    """
    Evaluate one load against one state's fee schedule.

    Dimensions are over the legal limit when strictly greater than it.
    Surcharges, brackets, escort triggers and superload thresholds apply
    at or above their thresholds. Height is the loaded height.

    Args:
        state_code: Two-letter state code
        cargo: Load specification
        distance_in_state: Miles driven in the state, for per-mile and ton-mile fees
        tables: Reference snapshot (process-wide if not provided)

    Returns:
        StatePermitRequirement
    """
    cargo = as_cargo(cargo)
    if not _is_number(distance_in_state) or distance_in_state < 0:
        raise ValidationError([
            f"distance_in_state must be a non-negative number, got {distance_in_state!r}"
        ])

    code = state_code.strip().upper()
    rule = resolve_tables(tables).permits.get(code)
    if rule is None:
        logger.debug("No permit schedule for %s", code)
        return StatePermitRequirement(
            state_code=code,
            state_name=code,
            has_rule=False,
            distance_miles=distance_in_state,
        )

    dims = cargo_dimensions(cargo)
    legal = rule.legal
    over = {
        "width": dims["width"] > legal.width_ft,
        "height": dims["height"] > legal.height_ft,
        "length": dims["length"] > legal.length_ft,
        "weight": dims["weight"] > legal.gross_weight_lbs,
    }
    oversize = over["width"] or over["height"] or over["length"]
    overweight = over["weight"]

    reasons = _limit_reasons(dims, over, rule)
    superload = _is_superload(rule, dims)
    if superload:
        reasons.append("Load qualifies as superload - special routing required")

    details = []
    oversize_fee = _oversize_fee(rule.oversize, dims, details) if oversize else 0.0
    overweight_fee = (
        _overweight_fee(rule.overweight, dims["weight"], distance_in_state, details)
        if overweight else 0.0
    )

    police = rule.police
    return StatePermitRequirement(
        state_code=rule.state_code,
        state_name=rule.state_name,
        has_rule=True,
        distance_miles=distance_in_state,
        oversize_required=oversize,
        overweight_required=overweight,
        is_superload=superload,
        oversize_fee=round(oversize_fee, 2),
        overweight_fee=round(overweight_fee, 2),
        escorts_required=escort_count(rule.escort_triggers, dims),
        pole_car_required=(
            rule.pole_car_height_ft is not None and dims["height"] >= rule.pole_car_height_ft
        ),
        police_escort_required=police is not None and (
            (police.width_ft is not None and dims["width"] >= police.width_ft)
            or (police.height_ft is not None and dims["height"] >= police.height_ft)
        ),
        escort_rate=rule.escort_rate or DEFAULT_ESCORT_RATE,
        reasons=tuple(reasons),
        fee_details=tuple(details),
        travel_restrictions=rule.travel_restrictions,
        agency=rule.agency,
        phone=rule.phone,
        website=rule.website,
    )


def escort_count(triggers: tuple[EscortTrigger, ...], dims: Mapping[str, float]) -> int:
    """
    Escorts required by the triggers a load meets.

    Non-stacking triggers overlap, so the largest one governs. Stacking
    triggers add their escorts on top.
    """
    fired = [t for t in triggers if dims[t.dimension] >= t.at_least]
    overlapping = max((t.escorts for t in fired if not t.stacks), default=0)
    return overlapping + sum(t.escorts for t in fired if t.stacks)


def needs_permit(cargo: CargoSpecs | Mapping) -> PermitCheck:
    """Check a load against federal legal limits, without any state schedule."""
    cargo = as_cargo(cargo)
    height = cargo.total_height_ft
    reasons = []

    if cargo.width_ft > MAX_WIDTH_FT:
        reasons.append(f"Width {cargo.width_ft:g}' > {MAX_WIDTH_FT:g}' standard")
    if height > MAX_HEIGHT_FT:
        reasons.append(f"Height {height:g}' > {MAX_HEIGHT_FT:g}' standard")
    if cargo.length_ft > MAX_LENGTH_FT:
        reasons.append(f"Length {cargo.length_ft:g}' > {MAX_LENGTH_FT:g}' standard")
    if cargo.weight_lbs > MAX_GROSS_WEIGHT_LBS:
        reasons.append(f"Weight {cargo.weight_lbs:,.0f} lbs > {MAX_GROSS_WEIGHT_LBS:,.0f} lb standard")

    return PermitCheck(
        oversize_needed=(
            cargo.width_ft > MAX_WIDTH_FT or height > MAX_HEIGHT_FT or cargo.length_ft > MAX_LENGTH_FT
        ),
        overweight_needed=cargo.weight_lbs > MAX_GROSS_WEIGHT_LBS,
        reasons=tuple(reasons),
    )


def cargo_dimensions(cargo: CargoSpecs) -> dict[str, float]:
    """Load measurements keyed the way fee schedules name dimensions."""
    return {
        "width": cargo.width_ft,
        "height": cargo.total_height_ft,
        "length": cargo.length_ft,
        "weight": cargo.weight_lbs,
    }


def as_cargo(cargo: CargoSpecs | Mapping) -> CargoSpecs:
    if isinstance(cargo, CargoSpecs):
        return cargo
    if isinstance(cargo, Mapping):
        return CargoSpecs.from_dict(cargo)
    raise ValidationError([f"cargo must be CargoSpecs or a mapping, got {type(cargo).__name__}"])


# =============================================================================
# FEES
# =============================================================================

def _oversize_fee(fees: OversizeFees, dims: Mapping[str, float], details: list[str]) -> float:
    fee = fees.base_fee
    details.append(f"Base oversize permit fee: ${fees.base_fee:,.2f}")

    for s in fees.surcharges:
        if dims[s.dimension] >= s.at_least:
            fee += s.fee
            details.append(f"{s.dimension.capitalize()} surcharge (>= {s.at_least:g}'): +${s.fee:,.2f}")

    return fee


def _overweight_fee(
    fees: OverweightFees,
    weight: float,
    miles: float,
    details: list[str]
) -> float:
    """
    Base fee plus mileage charges, raised to the highest applicable bracket
    floor, plus the per-trip extra-legal fee.
    """
    fee = fees.base_fee
    details.append(f"Base overweight permit fee: ${fees.base_fee:,.2f}")

    if fees.per_mile_fee and miles > 0:
        charge = fees.per_mile_fee * miles
        fee += charge
        details.append(f"Per-mile fee ({miles:g} mi x ${fees.per_mile_fee:g}/mi): +${charge:,.2f}")

    if fees.ton_mile_fee and miles > 0:
        tons = weight / LBS_PER_TON
        charge = fees.ton_mile_fee * tons * miles
        fee += charge
        details.append(
            f"Ton-mile fee ({tons:.1f} tons x {miles:g} mi x ${fees.ton_mile_fee:g}): +${charge:,.2f}"
        )

    floors = [(fees.base_fee + b.fee, b) for b in fees.brackets if weight <= b.up_to_lbs]
    if floors:
        floor, bracket = max(floors, key=lambda f: f[0])
        if floor > fee:
            details.append(f"Weight bracket (up to {bracket.up_to_lbs:,.0f} lbs): +${floor - fee:,.2f}")
            fee = floor

    if fees.extra_legal_per_trip:
        fee += fees.extra_legal_per_trip
        details.append(f"Extra legal fee (per trip): +${fees.extra_legal_per_trip:,.2f}")

    return fee


# =============================================================================
# HELPERS
# =============================================================================

def _limit_reasons(dims: Mapping[str, float], over: Mapping[str, bool], rule: PermitFeeRule) -> list[str]:
    legal = rule.legal
    reasons = []
    if over["width"]:
        reasons.append(f"Width {dims['width']:g}' exceeds {legal.width_ft:g}' limit")
    if over["height"]:
        reasons.append(f"Height {dims['height']:g}' exceeds {legal.height_ft:g}' limit")
    if over["length"]:
        reasons.append(f"Length {dims['length']:g}' exceeds {legal.length_ft:g}' limit")
    if over["weight"]:
        reasons.append(
            f"Weight {dims['weight']:,.0f} lbs exceeds {legal.gross_weight_lbs:,.0f} lb limit"
        )
    return reasons


def _is_superload(rule: PermitFeeRule, dims: Mapping[str, float]) -> bool:
    s = rule.superload
    if s is None:
        return False
    checks = (
        (s.width_ft, dims["width"]),
        (s.height_ft, dims["height"]),
        (s.length_ft, dims["length"]),
        (s.weight_lbs, dims["weight"]),
    )
    return any(threshold is not None and value >= threshold for threshold, value in checks)


__all__ = [
    "StatePermitRequirement",
    "PermitCheck",
    "calculate_state_permit",
    "escort_count",
    "needs_permit",
    "cargo_dimensions",
    "as_cargo",
    "DEFAULT_ESCORT_RATE",
]
