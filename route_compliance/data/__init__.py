"""
Reference Tables

Loads, validates and serves the engine's reference data as one immutable
snapshot.

Structure:
    - reference/: Static rule modules and the bridge catalog CSV

LIFECYCLE
---------
get_reference_tables() builds the default snapshot on first use and returns
the same object afterwards. swap_reference_tables() replaces it with a new,
already-validated snapshot in a single reference assignment: analyses that
already hold the old snapshot finish against it, later calls see the new one.
Tables are never edited in place.

Every public engine operation also takes tables= so callers and tests can
inject a synthetic rule set without touching the process-wide snapshot.
"""

import calendar
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

import polars as pl

from ..errors import ReferenceDataError
from .reference import seasonal_restrictions, state_permits
from .reference.seasonal_restrictions import SeasonalRestrictionRule
from .reference.state_permits import PermitFeeRule, DIMENSIONS, ESCORT_BASES


logger = logging.getLogger(__name__)

REFERENCE_DIR = Path(__file__).parent / "reference"
BRIDGES_FILE = REFERENCE_DIR / "low_clearance_bridges.csv"

BRIDGE_SCHEMA = {
    "bridge_id": pl.Utf8,
    "name": pl.Utf8,
    "location": pl.Utf8,
    "state_code": pl.Utf8,
    "lat": pl.Float64,
    "lng": pl.Float64,
    "clearance_ft": pl.Float64,
    "road": pl.Utf8,
}


# =============================================================================
# SNAPSHOT
# =============================================================================

@dataclass(frozen=True, eq=False)
class ReferenceTables:
    """
    Immutable snapshot of all reference data used by one analysis.

    Attributes:
        seasonal - Seasonal restriction rules by state code
        permits  - Permit fee rules by state code
        bridges  - Bridge catalog (columns: see BRIDGE_SCHEMA)
    """

    seasonal: Mapping[str, SeasonalRestrictionRule]
    permits: Mapping[str, PermitFeeRule]
    bridges: pl.DataFrame

    def __post_init__(self):
        # Read-only copies: later edits to the caller's dicts never reach the snapshot
        object.__setattr__(self, "seasonal", MappingProxyType(dict(self.seasonal)))
        object.__setattr__(self, "permits", MappingProxyType(dict(self.permits)))
        object.__setattr__(self, "bridges", self.bridges.clone())


def build_reference_tables(
    seasonal_rules: Iterable[SeasonalRestrictionRule] = seasonal_restrictions.RULES,
    permit_rules: Iterable[PermitFeeRule] = state_permits.RULES,
    bridges: pl.DataFrame | None = None,
) -> ReferenceTables:
    """
    Validate rule sets and freeze them into a ReferenceTables snapshot.

    Args:
        seasonal_rules: Seasonal restriction rules (defaults to reference data)
        permit_rules: Permit fee rules (defaults to reference data)
        bridges: Bridge catalog (loaded from CSV if not provided)

    Raises:
        ReferenceDataError: listing every integrity problem found
    """
    seasonal_rules = tuple(seasonal_rules)
    permit_rules = tuple(permit_rules)
    if bridges is None:
        bridges = load_bridges()

    errors = (
        validate_seasonal_rules(seasonal_rules)
        + validate_permit_rules(permit_rules)
        + validate_bridges(bridges)
    )
    if errors:
        raise ReferenceDataError(errors)

    return ReferenceTables(
        seasonal={r.state_code: r for r in seasonal_rules},
        permits={r.state_code: r for r in permit_rules},
        bridges=bridges.select(list(BRIDGE_SCHEMA)),
    )


def load_bridges(path: Path | str | None = None) -> pl.DataFrame:
    """
    Load the low-clearance bridge catalog from CSV.

    Returns:
        DataFrame with columns: bridge_id, name, location, state_code,
        lat, lng, clearance_ft, road
    """
    return pl.read_csv(
        path or BRIDGES_FILE,
        schema_overrides=BRIDGE_SCHEMA,  # Keep ids as strings
    )


def bridges_frame(rows: Iterable[dict]) -> pl.DataFrame:
    """Bridge catalog DataFrame from row dicts (for synthetic catalogs)."""
    return pl.DataFrame(list(rows), schema=BRIDGE_SCHEMA)


# =============================================================================
# PROCESS-WIDE SNAPSHOT
# =============================================================================

_tables: ReferenceTables | None = None
_lock = threading.Lock()


def get_reference_tables() -> ReferenceTables:
    """Return the current snapshot, building the default one on first use."""
    global _tables

    tables = _tables
    if tables is not None:
        return tables

    with _lock:
        if _tables is None:
            _tables = build_reference_tables()
            logger.info(
                "Loaded reference tables: %d seasonal rules, %d permit schedules, %d bridges",
                len(_tables.seasonal), len(_tables.permits), _tables.bridges.height,
            )
        return _tables


def swap_reference_tables(tables: ReferenceTables) -> ReferenceTables | None:
    """
    Validate a snapshot and atomically make it the process-wide one.

    Returns:
        The previous snapshot (None if none was loaded yet)

    Raises:
        ReferenceDataError: if the snapshot fails any integrity check
    """
    global _tables

    if not isinstance(tables, ReferenceTables):
        raise TypeError(f"expected ReferenceTables, got {type(tables).__name__}")

    errors = validate_reference_tables(tables)
    if errors:
        raise ReferenceDataError(errors)

    with _lock:
        previous = _tables
        _tables = tables

    logger.info(
        "Swapped reference tables: %d seasonal rules, %d permit schedules, %d bridges",
        len(tables.seasonal), len(tables.permits), tables.bridges.height,
    )
    return previous


def resolve_tables(tables: ReferenceTables | None) -> ReferenceTables:
    """Injected snapshot if given, otherwise the process-wide one."""
    return tables if tables is not None else get_reference_tables()


# =============================================================================
# VALIDATION
# =============================================================================

def validate_seasonal_rules(rules: tuple[SeasonalRestrictionRule, ...]) -> list[str]:
    errors = _duplicate_codes(rules, "seasonal")

    for r in rules:
        for label, (month, day) in (("start", r.start), ("end", r.end)):
            if not _valid_month_day(month, day):
                errors.append(f"seasonal {r.state_code}: invalid {label} date ({month}, {day})")

        if not 0 <= r.weight_reduction_percent < 100:
            errors.append(
                f"seasonal {r.state_code}: weight_reduction_percent must be in [0, 100), "
                f"got {r.weight_reduction_percent}"
            )

        if r.max_gross_weight is not None and r.max_gross_weight <= 0:
            errors.append(f"seasonal {r.state_code}: max_gross_weight must be positive")

        if r.permit_fee is not None and not r.permit_available:
            errors.append(f"seasonal {r.state_code}: permit_fee set but permit_available is False")

    return errors


def validate_permit_rules(rules: tuple[PermitFeeRule, ...]) -> list[str]:
    errors = _duplicate_codes(rules, "permit")

    for r in rules:
        legal = r.legal
        if min(legal.width_ft, legal.height_ft, legal.length_ft, legal.gross_weight_lbs) <= 0:
            errors.append(f"permit {r.state_code}: legal limits must be positive")

        if r.oversize.base_fee < 0 or r.overweight.base_fee < 0:
            errors.append(f"permit {r.state_code}: base fees must be non-negative")

        for s in r.oversize.surcharges:
            if s.dimension not in ("width", "height", "length"):
                errors.append(f"permit {r.state_code}: unknown surcharge dimension '{s.dimension}'")

        brackets = [b.up_to_lbs for b in r.overweight.brackets]
        if brackets != sorted(brackets):
            errors.append(f"permit {r.state_code}: weight brackets must be sorted by up_to_lbs")

        for t in r.escort_triggers:
            if t.dimension not in DIMENSIONS:
                errors.append(f"permit {r.state_code}: unknown escort trigger dimension '{t.dimension}'")
            if t.escorts < 1:
                errors.append(f"permit {r.state_code}: escort trigger must require at least 1 escort")

        if r.escort_rate is not None:
            if r.escort_rate.basis not in ESCORT_BASES:
                errors.append(f"permit {r.state_code}: unknown escort rate basis '{r.escort_rate.basis}'")
            if r.escort_rate.amount < 0:
                errors.append(f"permit {r.state_code}: escort rate must be non-negative")

    return errors


def validate_bridges(bridges: pl.DataFrame) -> list[str]:
    missing = [c for c in BRIDGE_SCHEMA if c not in bridges.columns]
    if missing:
        return [f"bridges: missing columns {missing}"]

    errors = []

    dupes = bridges.filter(pl.col("bridge_id").is_duplicated())["bridge_id"].unique().sort().to_list()
    if dupes:
        errors.append(f"bridges: duplicate bridge_id {dupes}")

    nulls = bridges.filter(
        pl.any_horizontal(pl.col("bridge_id", "lat", "lng", "clearance_ft").is_null())
    )
    if nulls.height:
        errors.append(f"bridges: {nulls.height} row(s) with null id, coordinates or clearance")

    bad = bridges.filter(
        (pl.col("clearance_ft") <= 0)
        | ~pl.col("lat").is_between(-90, 90)
        | ~pl.col("lng").is_between(-180, 180)
    )
    if bad.height:
        errors.append(f"bridges: out-of-range values for {bad['bridge_id'].to_list()}")

    return errors


def validate_reference_tables(tables: ReferenceTables) -> list[str]:
    """Integrity problems in an assembled snapshot, including keys that do not match their rule."""
    errors = []
    for kind, mapping in (("seasonal", tables.seasonal), ("permit", tables.permits)):
        for key, rule in mapping.items():
            if key != rule.state_code:
                errors.append(f"{kind} {rule.state_code}: keyed as {key!r}")

    return (
        errors
        + validate_seasonal_rules(tuple(tables.seasonal.values()))
        + validate_permit_rules(tuple(tables.permits.values()))
        + validate_bridges(tables.bridges)
    )


def _duplicate_codes(rules, kind: str) -> list[str]:
    seen, errors = set(), []
    for r in rules:
        if r.state_code != r.state_code.upper() or len(r.state_code) != 2:
            errors.append(f"{kind} {r.state_code}: state_code must be a 2-letter upper-case code")
        if r.state_code in seen:
            errors.append(f"{kind} {r.state_code}: duplicate state_code")
        seen.add(r.state_code)
    return errors


def _valid_month_day(month: int, day: int) -> bool:
    if not 1 <= month <= 12:
        return False
    return 1 <= day <= calendar.monthrange(2024, month)[1]  # Leap year allows Feb 29


__all__ = [
    "ReferenceTables",
    "build_reference_tables",
    "load_bridges",
    "bridges_frame",
    "get_reference_tables",
    "swap_reference_tables",
    "resolve_tables",
    "validate_seasonal_rules",
    "validate_permit_rules",
    "validate_bridges",
    "validate_reference_tables",
    "REFERENCE_DIR",
    "BRIDGES_FILE",
    "BRIDGE_SCHEMA",
]
