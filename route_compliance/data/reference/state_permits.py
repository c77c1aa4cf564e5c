"""
State Permit Fee Schedules

Per-state legal limits, single-trip oversize/overweight permit fees, escort
triggers and travel restrictions for oversize/overweight (OS/OW) loads.

HOW FEES WORK
-------------
Oversize (any of width/height/length over the legal limit):
    base_fee + every dimension surcharge whose threshold the load meets

Overweight (gross weight over the legal limit):
    base_fee
    + per_mile_fee * miles in state
    + ton_mile_fee * tons * miles in state
    raised to base_fee + bracket fee when a weight bracket prices higher
    + extra_legal_per_trip

A load that is both oversize and overweight pays both.

HOW ESCORTS WORK
----------------
Each EscortTrigger fires independently when the load meets its threshold.
The state's escort count is the MAXIMUM of the fired triggers, because one
pilot car satisfies several requirements at once. A trigger with stacks=True
adds its escorts on top instead (e.g. a dedicated rear escort for length).

Escort rates default to escort_rates.py when a state has none on file.

Travel restrictions are advisory strings copied into reports verbatim.

Sources: state DOT OS/OW permit manuals.
Last updated: 2025-01-15
"""

from typing import NamedTuple


# =============================================================================
# RULE TYPES
# =============================================================================

class LegalLimits(NamedTuple):
    width_ft: float = 8.5
    height_ft: float = 13.5
    length_ft: float = 65.0          # Combination length
    gross_weight_lbs: float = 80000


class DimensionSurcharge(NamedTuple):
    dimension: str                   # "width" | "height" | "length"
    at_least: float
    fee: float


class WeightBracket(NamedTuple):
    up_to_lbs: float
    fee: float


class OversizeFees(NamedTuple):
    base_fee: float
    surcharges: tuple[DimensionSurcharge, ...] = ()


class OverweightFees(NamedTuple):
    base_fee: float
    per_mile_fee: float | None = None
    ton_mile_fee: float | None = None
    brackets: tuple[WeightBracket, ...] = ()
    extra_legal_per_trip: float | None = None


class EscortTrigger(NamedTuple):
    dimension: str                   # "width" | "height" | "length" | "weight"
    at_least: float
    escorts: int
    stacks: bool = False


class EscortRate(NamedTuple):
    basis: str                       # "per_day" | "per_mile" | "flat"
    amount: float


class PoliceEscort(NamedTuple):
    width_ft: float | None = None
    height_ft: float | None = None


class SuperloadThresholds(NamedTuple):
    width_ft: float | None = None
    height_ft: float | None = None
    length_ft: float | None = None
    weight_lbs: float | None = None


class PermitFeeRule(NamedTuple):
    state_code: str
    state_name: str
    legal: LegalLimits
    oversize: OversizeFees
    overweight: OverweightFees
    escort_triggers: tuple[EscortTrigger, ...] = ()
    escort_rate: EscortRate | None = None
    pole_car_height_ft: float | None = None
    police: PoliceEscort | None = None
    superload: SuperloadThresholds | None = None
    travel_restrictions: tuple[str, ...] = ()
    agency: str = ""
    phone: str = ""
    website: str = ""


DIMENSIONS = ("width", "height", "length", "weight")
ESCORT_BASES = ("per_day", "per_mile", "flat")

NO_NIGHT = "No night travel (30 minutes after sunset to 30 minutes before sunrise)"
NO_HOLIDAY = "No holiday travel"


# =============================================================================
# RULES
# =============================================================================

RULES = (
    PermitFeeRule(
        state_code="MN",
        state_name="Minnesota",
        legal=LegalLimits(width_ft=8.5, height_ft=13.5, length_ft=75, gross_weight_lbs=80000),
        oversize=OversizeFees(base_fee=36),
        overweight=OverweightFees(
            base_fee=60,
            brackets=(WeightBracket(up_to_lbs=100000, fee=30), WeightBracket(up_to_lbs=150000, fee=90)),
        ),
        escort_triggers=(
            EscortTrigger("width", 12.0, 1),
            EscortTrigger("width", 14.5, 2),
            EscortTrigger("length", 110.0, 1),
            EscortTrigger("height", 15.5, 1),
        ),
        pole_car_height_ft=15.5,
        police=PoliceEscort(width_ft=16.0),
        superload=SuperloadThresholds(width_ft=16.0, height_ft=16.5, length_ft=150.0, weight_lbs=250000),
        travel_restrictions=(
            NO_NIGHT,
            "No travel 6-9 AM and 3-6 PM in the Minneapolis-St. Paul metro area",
            NO_HOLIDAY,
        ),
        agency="MnDOT Office of Freight and Commercial Vehicle Operations",
        phone="651-296-6000",
        website="https://www.dot.state.mn.us/cvo/oversize/",
    ),
    PermitFeeRule(
        state_code="WI",
        state_name="Wisconsin",
        legal=LegalLimits(width_ft=8.5, height_ft=13.5, length_ft=75, gross_weight_lbs=80000),
        oversize=OversizeFees(
            base_fee=20,
            surcharges=(DimensionSurcharge("width", 16.0, 30),),
        ),
        overweight=OverweightFees(
            base_fee=60,
            brackets=(WeightBracket(up_to_lbs=110000, fee=25), WeightBracket(up_to_lbs=170000, fee=115)),
        ),
        escort_triggers=(
            EscortTrigger("width", 12.0, 1),
            EscortTrigger("width", 15.0, 2),
            EscortTrigger("weight", 150000, 1),
        ),
        pole_car_height_ft=15.0,
        superload=SuperloadThresholds(width_ft=16.0, height_ft=15.5, weight_lbs=250000),
        travel_restrictions=(
            NO_NIGHT,
            "No weekend travel for loads over 12 feet wide (noon Saturday to sunrise Monday)",
            NO_HOLIDAY,
        ),
        agency="WisDOT Oversize/Overweight Permit Unit",
        phone="608-266-7320",
        website="https://wisconsindot.gov/Pages/dmv/com-drv-vehs/mtr-car-trkr/osow-permits.aspx",
    ),
    PermitFeeRule(
        state_code="MI",
        state_name="Michigan",
        legal=LegalLimits(width_ft=8.5, height_ft=13.5, length_ft=65, gross_weight_lbs=80000),
        oversize=OversizeFees(base_fee=15),
        overweight=OverweightFees(base_fee=50, extra_legal_per_trip=15),
        escort_triggers=(
            EscortTrigger("width", 12.0, 1),
            EscortTrigger("width", 14.0, 2),
            EscortTrigger("length", 100.0, 1),
            EscortTrigger("length", 150.0, 1, stacks=True),
        ),
        pole_car_height_ft=15.0,
        police=PoliceEscort(width_ft=16.0, height_ft=15.5),
        superload=SuperloadThresholds(width_ft=16.0, height_ft=15.0, length_ft=150.0, weight_lbs=200000),
        travel_restrictions=(
            NO_NIGHT,
            "No weekend travel for loads over 12 feet wide",
            "Seasonal weight restrictions may apply in spring",
            NO_HOLIDAY,
        ),
        agency="MDOT Transport Permit Unit",
        phone="517-241-8999",
        website="https://www.michigan.gov/mdot/travel/truck-services/oversize-overweight",
    ),
    PermitFeeRule(
        state_code="IL",
        state_name="Illinois",
        legal=LegalLimits(width_ft=8.5, height_ft=13.5, length_ft=65, gross_weight_lbs=80000),
        oversize=OversizeFees(
            base_fee=15,
            surcharges=(
                DimensionSurcharge("width", 14.5, 15),
                DimensionSurcharge("height", 14.5, 15),
                DimensionSurcharge("length", 100.0, 15),
            ),
        ),
        overweight=OverweightFees(
            base_fee=25,
            brackets=(
                WeightBracket(up_to_lbs=90000, fee=25),
                WeightBracket(up_to_lbs=100000, fee=75),
                WeightBracket(up_to_lbs=120000, fee=170),
            ),
        ),
        escort_triggers=(
            EscortTrigger("width", 14.5, 1),
            EscortTrigger("width", 16.0, 2),
            EscortTrigger("length", 110.0, 1),
        ),
        pole_car_height_ft=14.5,
        superload=SuperloadThresholds(width_ft=18.0, height_ft=15.0, weight_lbs=120000),
        travel_restrictions=(
            NO_NIGHT,
            "No travel in the Chicago metro area during rush hours (6-9 AM, 3-6 PM)",
            NO_HOLIDAY,
        ),
        agency="IDOT Bureau of Operations - Permit Office",
        phone="217-785-1477",
        website="https://idot.illinois.gov/transportation-system/network-overview/oversize-overweight.html",
    ),
    PermitFeeRule(
        state_code="IN",
        state_name="Indiana",
        legal=LegalLimits(width_ft=8.5, height_ft=13.5, length_ft=65, gross_weight_lbs=80000),
        oversize=OversizeFees(base_fee=20),
        overweight=OverweightFees(base_fee=20, per_mile_fee=0.35),
        escort_triggers=(
            EscortTrigger("width", 12.333, 1),
            EscortTrigger("width", 14.333, 2),
            EscortTrigger("height", 14.5, 1),
        ),
        escort_rate=EscortRate("per_mile", 1.75),
        pole_car_height_ft=14.5,
        superload=SuperloadThresholds(width_ft=16.0, height_ft=15.0, length_ft=110.0, weight_lbs=120000),
        travel_restrictions=(NO_NIGHT, NO_HOLIDAY),
        agency="Indiana Department of Revenue - Motor Carrier Services",
        phone="317-615-7200",
        website="https://www.in.gov/dor/motor-carrier-services/",
    ),
    PermitFeeRule(
        state_code="OH",
        state_name="Ohio",
        legal=LegalLimits(width_ft=8.5, height_ft=13.5, length_ft=65, gross_weight_lbs=80000),
        oversize=OversizeFees(base_fee=65),
        overweight=OverweightFees(base_fee=65, ton_mile_fee=0.04),
        escort_triggers=(
            EscortTrigger("width", 13.0, 1),
            EscortTrigger("width", 14.5, 2),
            EscortTrigger("length", 90.0, 1),
        ),
        pole_car_height_ft=14.5,
        police=PoliceEscort(width_ft=16.0),
        superload=SuperloadThresholds(width_ft=14.5, height_ft=14.5, length_ft=120.0, weight_lbs=120000),
        travel_restrictions=(
            NO_NIGHT,
            "No travel 6-9 AM and 4-6 PM in Columbus, Cleveland and Cincinnati for loads over 12 feet wide",
            NO_HOLIDAY,
        ),
        agency="Ohio DOT Special Hauling Permits Section",
        phone="614-351-2300",
        website="https://www.transportation.ohio.gov/programs/special-hauling-permits",
    ),
    PermitFeeRule(
        state_code="PA",
        state_name="Pennsylvania",
        legal=LegalLimits(width_ft=8.5, height_ft=13.5, length_ft=65, gross_weight_lbs=80000),
        oversize=OversizeFees(
            base_fee=25,
            surcharges=(DimensionSurcharge("width", 13.0, 25), DimensionSurcharge("height", 14.5, 25)),
        ),
        overweight=OverweightFees(base_fee=50, ton_mile_fee=0.03),
        escort_triggers=(
            EscortTrigger("width", 13.0, 1),
            EscortTrigger("width", 16.0, 2),
            EscortTrigger("length", 90.0, 1),
            EscortTrigger("length", 160.0, 1, stacks=True),
        ),
        pole_car_height_ft=14.5,
        police=PoliceEscort(width_ft=16.0, height_ft=16.0),
        superload=SuperloadThresholds(width_ft=16.0, height_ft=14.5, length_ft=160.0, weight_lbs=201000),
        travel_restrictions=(
            NO_NIGHT,
            "No weekend travel for loads over 13 feet wide (3 PM Friday to sunrise Monday)",
            NO_HOLIDAY,
        ),
        agency="PennDOT Central Permit Office",
        phone="717-783-6473",
        website="https://www.penndot.pa.gov/Doing-Business/Permits/Pages/Special-Hauling-Permits.aspx",
    ),
    PermitFeeRule(
        state_code="NY",
        state_name="New York",
        legal=LegalLimits(width_ft=8.5, height_ft=13.5, length_ft=65, gross_weight_lbs=80000),
        oversize=OversizeFees(base_fee=40),
        overweight=OverweightFees(
            base_fee=40,
            brackets=(WeightBracket(up_to_lbs=120000, fee=40), WeightBracket(up_to_lbs=160000, fee=120)),
        ),
        escort_triggers=(
            EscortTrigger("width", 12.0, 1),
            EscortTrigger("width", 14.0, 2),
            EscortTrigger("length", 85.0, 1),
        ),
        pole_car_height_ft=14.0,
        police=PoliceEscort(width_ft=16.0),
        superload=SuperloadThresholds(width_ft=16.0, height_ft=14.5, length_ft=160.0, weight_lbs=200000),
        travel_restrictions=(
            NO_NIGHT,
            "No travel in New York City without NYCDOT approval",
            "No weekend travel on Long Island parkways",
            NO_HOLIDAY,
        ),
        agency="NYSDOT Central Permit Office",
        phone="518-485-2999",
        website="https://www.dot.ny.gov/nypermits",
    ),
    PermitFeeRule(
        state_code="TX",
        state_name="Texas",
        legal=LegalLimits(width_ft=8.5, height_ft=14.0, length_ft=65, gross_weight_lbs=80000),
        oversize=OversizeFees(
            base_fee=60,
            surcharges=(DimensionSurcharge("height", 16.0, 30), DimensionSurcharge("width", 16.0, 30)),
        ),
        overweight=OverweightFees(
            base_fee=90,
            brackets=(
                WeightBracket(up_to_lbs=120000, fee=60),
                WeightBracket(up_to_lbs=160000, fee=120),
                WeightBracket(up_to_lbs=200000, fee=180),
            ),
        ),
        escort_triggers=(
            EscortTrigger("width", 14.0, 1),
            EscortTrigger("width", 16.0, 2),
            EscortTrigger("height", 17.0, 1),
            EscortTrigger("length", 110.0, 1),
        ),
        pole_car_height_ft=17.0,
        police=PoliceEscort(width_ft=20.0, height_ft=18.0),
        superload=SuperloadThresholds(width_ft=20.0, height_ft=18.0, length_ft=125.0, weight_lbs=254300),
        travel_restrictions=(NO_NIGHT, NO_HOLIDAY),
        agency="TxDMV Motor Carrier Division",
        phone="800-299-1700",
        website="https://www.txdmv.gov/oversize-weight-permits",
    ),
    PermitFeeRule(
        state_code="CA",
        state_name="California",
        legal=LegalLimits(width_ft=8.5, height_ft=14.0, length_ft=65, gross_weight_lbs=80000),
        oversize=OversizeFees(base_fee=16),
        overweight=OverweightFees(base_fee=16, extra_legal_per_trip=75),
        escort_triggers=(
            EscortTrigger("width", 12.0, 1),
            EscortTrigger("width", 14.0, 2),
            EscortTrigger("length", 120.0, 1),
        ),
        escort_rate=EscortRate("per_day", 950),
        pole_car_height_ft=15.0,
        police=PoliceEscort(width_ft=17.0),
        superload=SuperloadThresholds(width_ft=15.0, height_ft=17.0, length_ft=135.0, weight_lbs=150000),
        travel_restrictions=(
            NO_NIGHT,
            "No travel in Los Angeles and Bay Area metros 6-9 AM and 4-7 PM weekdays",
            "No weekend travel for loads over 12 feet wide",
            NO_HOLIDAY,
        ),
        agency="Caltrans Transportation Permits",
        phone="916-322-1297",
        website="https://dot.ca.gov/programs/traffic-operations/transportation-permits",
    ),
    PermitFeeRule(
        state_code="FL",
        state_name="Florida",
        legal=LegalLimits(width_ft=8.5, height_ft=13.5, length_ft=75, gross_weight_lbs=80000),
        oversize=OversizeFees(base_fee=20),
        overweight=OverweightFees(base_fee=20, per_mile_fee=0.25),
        escort_triggers=(
            EscortTrigger("width", 12.0, 1),
            EscortTrigger("width", 14.0, 2),
            EscortTrigger("length", 95.0, 1),
        ),
        pole_car_height_ft=15.5,
        police=PoliceEscort(width_ft=15.0),
        superload=SuperloadThresholds(width_ft=16.0, height_ft=18.0, length_ft=150.0, weight_lbs=199000),
        travel_restrictions=(NO_NIGHT, NO_HOLIDAY),
        agency="FDOT Permits Office",
        phone="850-410-5777",
        website="https://www.fdot.gov/maintenance/permits.shtm",
    ),
    PermitFeeRule(
        state_code="IA",
        state_name="Iowa",
        legal=LegalLimits(width_ft=8.5, height_ft=13.5, length_ft=65, gross_weight_lbs=80000),
        oversize=OversizeFees(base_fee=10),
        overweight=OverweightFees(base_fee=25, ton_mile_fee=0.02),
        escort_triggers=(
            EscortTrigger("width", 14.5, 1),
            EscortTrigger("width", 16.0, 2),
            EscortTrigger("length", 100.0, 1),
        ),
        escort_rate=EscortRate("flat", 400),
        pole_car_height_ft=14.5,
        superload=SuperloadThresholds(width_ft=16.0, height_ft=15.0, weight_lbs=156000),
        travel_restrictions=(NO_NIGHT, NO_HOLIDAY),
        agency="Iowa DOT Motor Vehicle Division - OS/OW Permits",
        phone="515-237-3264",
        website="https://iowadot.gov/mvd/motorcarriers/oversize-overweight",
    ),
    PermitFeeRule(
        state_code="ND",
        state_name="North Dakota",
        legal=LegalLimits(width_ft=8.5, height_ft=14.0, length_ft=75, gross_weight_lbs=105500),
        oversize=OversizeFees(base_fee=20),
        overweight=OverweightFees(base_fee=20, per_mile_fee=0.05),
        escort_triggers=(
            EscortTrigger("width", 14.5, 1),
            EscortTrigger("width", 16.0, 2),
            EscortTrigger("length", 120.0, 1),
        ),
        pole_car_height_ft=16.0,
        superload=SuperloadThresholds(width_ft=18.0, height_ft=18.0, length_ft=150.0, weight_lbs=200000),
        travel_restrictions=(NO_NIGHT, NO_HOLIDAY),
        agency="North Dakota Highway Patrol - Motor Carrier Services",
        phone="701-328-2621",
        website="https://www.nd.gov/ndhp/motor-carrier",
    ),
    PermitFeeRule(
        state_code="GA",
        state_name="Georgia",
        legal=LegalLimits(width_ft=8.5, height_ft=13.5, length_ft=75, gross_weight_lbs=80000),
        oversize=OversizeFees(base_fee=30),
        overweight=OverweightFees(
            base_fee=30,
            brackets=(WeightBracket(up_to_lbs=100000, fee=10), WeightBracket(up_to_lbs=150000, fee=125)),
        ),
        escort_triggers=(
            EscortTrigger("width", 12.0, 1),
            EscortTrigger("width", 14.0, 2),
            EscortTrigger("length", 100.0, 1),
        ),
        pole_car_height_ft=15.5,
        police=PoliceEscort(width_ft=16.0),
        superload=SuperloadThresholds(width_ft=16.0, height_ft=16.0, length_ft=125.0, weight_lbs=150000),
        travel_restrictions=(
            NO_NIGHT,
            "No travel inside the I-285 perimeter 6:30-9:30 AM and 4-7 PM weekdays",
            NO_HOLIDAY,
        ),
        agency="GDOT Oversize Permit Unit",
        phone="404-635-8176",
        website="https://www.dot.ga.gov/PS/Permits",
    ),
)


# =============================================================================
# WARNING TEXT
# =============================================================================

SUPERLOAD_WARNING = "{state_name} requires superload permit - additional routing and timing restrictions apply"
HIGH_COST_WARNING = "High permit costs expected (${total:,.2f})"
TWO_ESCORT_WARNING = "Two escorts required - coordinate timing carefully"
POLICE_WARNING = "Police escort required - schedule in advance"
MISSING_RULE_NOTICE = "{state_code}: no permit data on file - verify requirements with the state DOT"
