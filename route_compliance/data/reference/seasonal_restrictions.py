"""
Seasonal Weight Restrictions (Frost Laws)

Spring-thaw restrictions in northern states. While ground thaws, roads are
posted with reduced legal weights, typically late February through late May,
cutting allowed gross weight by 20-35%.

Windows are the TYPICAL annual dates. Actual posting dates move with the
weather each year, so analyses surface these as advisories to verify with the
state DOT, never as a go/no-go decision.

Windows are year-agnostic (month, day) pairs and may wrap the year boundary
(e.g. (11, 1) to (2, 1)).

Last updated: 2025-01-15
"""

from typing import NamedTuple


class AxleReductions(NamedTuple):
    single: int | None = None
    tandem: int | None = None
    tridem: int | None = None


class SeasonalRestrictionRule(NamedTuple):
    """One state's recurring restriction window."""
    state_code: str
    state_name: str
    restriction_name: str
    description: str
    start: tuple[int, int]           # (month, day), inclusive
    end: tuple[int, int]             # (month, day), inclusive
    weight_reduction_percent: float
    max_gross_weight: int | None = None   # Absolute cap, takes precedence over percentage
    axle_reductions: AxleReductions | None = None
    affected_roads: tuple[str, ...] = ()
    exempt_roads: tuple[str, ...] = ()
    permit_available: bool = False
    permit_fee: float | None = None
    website: str | None = None
    phone: str | None = None
    notes: tuple[str, ...] = ()


# =============================================================================
# RULES
# =============================================================================

RULES = (
    SeasonalRestrictionRule(
        state_code="MN",
        state_name="Minnesota",
        restriction_name="Spring Load Restrictions",
        description="Road weight limits reduced during spring thaw to protect road infrastructure",
        start=(3, 1),
        end=(5, 15),
        weight_reduction_percent=35,
        max_gross_weight=52000,
        axle_reductions=AxleReductions(single=13000, tandem=22000),
        affected_roads=(
            "All state highways (posted roads)",
            "County roads (varies by county)",
            "Township roads",
        ),
        exempt_roads=("Interstate highways", "10-ton designated routes"),
        permit_available=True,
        permit_fee=120,
        website="https://www.dot.state.mn.us/loadlimits/",
        phone="651-296-3000",
        notes=(
            "Restrictions announced annually based on weather conditions",
            "Frost-free dates vary by region (southern MN lifts earlier)",
        ),
    ),
    SeasonalRestrictionRule(
        state_code="WI",
        state_name="Wisconsin",
        restriction_name="Seasonal Weight Limits",
        description="Posted weight limits on county and town roads during spring thaw",
        start=(3, 1),
        end=(5, 31),
        weight_reduction_percent=25,
        affected_roads=(
            "Town roads",
            "County trunk highways (when posted)",
            "Some state highways (when posted)",
        ),
        exempt_roads=("Interstate highways", "US highways (unless posted)"),
        permit_available=True,
        permit_fee=100,
        website="https://wisconsindot.gov/Pages/doing-bus/businesses/weight-posting.aspx",
        phone="608-266-1113",
        notes=("Road postings vary by county - check local road conditions",),
    ),
    SeasonalRestrictionRule(
        state_code="MI",
        state_name="Michigan",
        restriction_name="Seasonal Weight Restrictions (Frost Law)",
        description="Reduced axle weights on state trunklines during spring thaw",
        start=(3, 1),
        end=(5, 15),
        weight_reduction_percent=35,
        axle_reductions=AxleReductions(single=13230, tandem=22050),
        affected_roads=(
            "All state trunklines (M-routes)",
            "US routes through Michigan",
            "County primary roads",
        ),
        exempt_roads=("Interstate highways", 'Designated "all-season" routes'),
        permit_available=True,
        permit_fee=150,
        website="https://www.michigan.gov/mdot/travel/truck-services/oversize-overweight/seasonal-load-restrictions",
        phone="517-241-2600",
        notes=(
            "Restrictions typically announced in February",
            "Lifted in stages based on road conditions",
        ),
    ),
    SeasonalRestrictionRule(
        state_code="ND",
        state_name="North Dakota",
        restriction_name="Spring Road Restrictions",
        description="Weight restrictions on county and township roads during spring thaw",
        start=(3, 1),
        end=(5, 31),
        weight_reduction_percent=30,
        max_gross_weight=56000,
        affected_roads=("County roads", "Township roads", "Some state highways"),
        exempt_roads=("Interstate highways", "US highways", "Most numbered state highways"),
        permit_available=True,
        permit_fee=75,
        website="https://www.dot.nd.gov/divisions/maintenance/springloadrestrictions.htm",
        phone="701-328-4444",
        notes=("Counties set their own restriction dates",),
    ),
    SeasonalRestrictionRule(
        state_code="SD",
        state_name="South Dakota",
        restriction_name="Frost Law Restrictions",
        description="Spring weight restrictions to protect thawing roads",
        start=(3, 15),
        end=(5, 15),
        weight_reduction_percent=30,
        affected_roads=("County roads", "Township roads", "Secondary state highways"),
        exempt_roads=("Interstate highways", "Primary state highways"),
        permit_available=True,
        permit_fee=50,
        website="https://dot.sd.gov/transportation/trucking/permitting",
        phone="605-773-3265",
        notes=("Eastern SD typically has longer restriction periods",),
    ),
    SeasonalRestrictionRule(
        state_code="MT",
        state_name="Montana",
        restriction_name="Spring Thaw Restrictions",
        description="Weight restrictions on secondary highways and local roads",
        start=(3, 1),
        end=(5, 31),
        weight_reduction_percent=25,
        affected_roads=("Secondary highways", "County roads", "Local roads"),
        exempt_roads=("Interstate highways", "Primary state highways"),
        permit_available=True,
        permit_fee=100,
        website="https://www.mdt.mt.gov/travinfo/truckers.aspx",
        phone="406-444-6200",
        notes=("Mountain passes may have additional restrictions",),
    ),
    SeasonalRestrictionRule(
        state_code="WY",
        state_name="Wyoming",
        restriction_name="Seasonal Load Restrictions",
        description="Weight restrictions during spring breakup",
        start=(3, 1),
        end=(5, 15),
        weight_reduction_percent=20,
        affected_roads=("County roads", "Some state highways"),
        exempt_roads=("Interstate highways", "US highways"),
        permit_available=True,
        permit_fee=50,
        website="http://www.dot.state.wy.us/home/trucking_commercial_vehicles.html",
        phone="307-777-4437",
        notes=("Wind restrictions may also apply to oversize loads",),
    ),
    SeasonalRestrictionRule(
        state_code="ME",
        state_name="Maine",
        restriction_name="Spring Weight Limits",
        description="Posted weight limits during spring thaw",
        start=(3, 1),
        end=(5, 31),
        weight_reduction_percent=30,
        affected_roads=("Town roads", "State aid roads", "Some state highways"),
        exempt_roads=("Interstate highways", "Major numbered routes"),
        permit_available=True,
        permit_fee=75,
        website="https://www.maine.gov/mdot/traffic/trucking/",
        phone="207-624-3600",
        notes=("Town roads typically have strictest limits",),
    ),
    SeasonalRestrictionRule(
        state_code="VT",
        state_name="Vermont",
        restriction_name="Seasonal Road Posting",
        description="Weight restrictions on town highways during mud season",
        start=(3, 1),
        end=(5, 15),
        weight_reduction_percent=30,
        affected_roads=("Town highways", "Class 2 town highways", "Class 3 town highways"),
        exempt_roads=("State highways", "US routes", "Interstate highways"),
        permit_available=False,
        website="https://vtrans.vermont.gov/operations/trucking",
        phone="802-828-2657",
        notes=("Towns post restrictions individually - check town clerk",),
    ),
    SeasonalRestrictionRule(
        state_code="NH",
        state_name="New Hampshire",
        restriction_name="Spring Weight Restrictions",
        description="Posted weight limits on town and some state roads",
        start=(3, 1),
        end=(5, 15),
        weight_reduction_percent=25,
        affected_roads=("Town roads", "Some state routes"),
        exempt_roads=("Interstate highways", "Major state routes"),
        permit_available=True,
        permit_fee=50,
        website="https://www.nh.gov/dot/org/operations/highway/",
        phone="603-271-3734",
        notes=("Northern NH typically has longer restriction periods",),
    ),
    SeasonalRestrictionRule(
        state_code="IA",
        state_name="Iowa",
        restriction_name="Spring Weight Embargoes",
        description="Reduced weight limits during spring thaw",
        start=(2, 15),
        end=(5, 15),
        weight_reduction_percent=25,
        affected_roads=("Primary roads (when posted)", "Secondary roads", "Farm-to-market roads"),
        exempt_roads=("Interstate highways", "Most primary highways"),
        permit_available=True,
        permit_fee=60,
        website="https://iowadot.gov/mvd/motorcarriers/embargoes",
        phone="515-237-3264",
        notes=("Agricultural exemptions may apply",),
    ),
    SeasonalRestrictionRule(
        state_code="ID",
        state_name="Idaho",
        restriction_name="Seasonal Load Limits",
        description="Spring weight restrictions on state highways",
        start=(3, 1),
        end=(5, 15),
        weight_reduction_percent=20,
        affected_roads=("State highways (when posted)", "County roads"),
        exempt_roads=("Interstate highways", "Most US routes"),
        permit_available=True,
        permit_fee=75,
        website="https://itd.idaho.gov/highways/ops/loadlimits/",
        phone="208-334-8420",
        notes=("Northern Idaho has more restrictive periods",),
    ),
)


# =============================================================================
# ADVISORY TEXT
# =============================================================================

# Per affected state
WARNING_TEMPLATE = (
    "{state_name}: {restriction_name} in effect - weight reduced by {weight_reduction_percent:g}%"
)

# Once per route with at least one affected state
RECOMMENDATIONS = (
    "Consider using interstate highways where possible (typically exempt)",
    "Verify current road postings with state DOT before departure",
    "Consider delaying shipment if weight reduction is problematic",
)

# Added when any affected state offers a seasonal permit
PERMIT_RECOMMENDATION = "Special permits may be available for essential loads"


ALL_STATE_CODES = (
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
    "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
    "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY", "DC",
)
