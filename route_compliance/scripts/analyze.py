"""
Analyze Route Compliance
========================

Runs a compliance analysis for a Route Provider result saved as JSON and
prints the report.

Usage:
    python -m route_compliance.scripts.analyze --route route.json --length 95 --width 14 --height 16 --weight 95000
    python -m route_compliance.scripts.analyze --route route.json ... --ship-date 2025-04-01
    python -m route_compliance.scripts.analyze --route route.json ... --json
    python -m route_compliance.scripts.analyze --route route.json ... --verbose
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from route_compliance import analyze_route, CargoSpecs, RouteResult, RouteComplianceError
from route_compliance.analyze_route import RouteAnalysis
from route_compliance.permits import format_permit_summary


# =============================================================================
# REPORT
# =============================================================================

def print_report(analysis: RouteAnalysis) -> None:
    route = analysis.route
    cargo = analysis.cargo

    print("=" * 60)
    print(f"ROUTE COMPLIANCE - {analysis.status.upper()}")
    print("=" * 60)
    print(f"Route: {' -> '.join(route.states_traversed)}")
    print(f"Distance: {route.total_distance_miles:,.1f} mi ({route.estimated_drive_time or 'n/a'})")
    print(f"Ship date: {analysis.ship_date.isoformat()}")
    print(
        f"Cargo: {cargo.length_ft:g}' L x {cargo.width_ft:g}' W x {cargo.total_height_ft:g}' H, "
        f"{cargo.weight_lbs:,.0f} lbs"
    )

    print("\nPERMITS")
    print("-" * 60)
    for state in analysis.permits.states:
        if not state.has_rule:
            print(f"  {state.state_code}: not on file")
            continue
        flag = "permit" if state.requires_permit else "legal"
        print(
            f"  {state.state_code}: {flag:<6}  fee ${state.permit_fee:>9,.2f}  "
            f"escorts {state.escorts_required}"
            f"{'  pole car' if state.pole_car_required else ''}"
            f"{'  police' if state.police_escort_required else ''}"
        )
    print()
    print(format_permit_summary(analysis.permits))

    print("\nSEASONAL RESTRICTIONS")
    print("-" * 60)
    limit = analysis.weight_limit
    if analysis.seasonal.has_restrictions:
        for line in analysis.seasonal.warnings:
            print(f"  ! {line}")
        print(f"  Gross weight cap: {limit.adjusted_max_weight:,} lbs ({limit.most_restrictive_state})")
        if analysis.seasonal.clear_from:
            print(f"  Route clear of restrictions from: {analysis.seasonal.clear_from.isoformat()}")
    else:
        print("  None active")

    print("\nBRIDGES")
    print("-" * 60)
    print(f"  Checked: {analysis.bridges.bridges_checked}")
    if analysis.bridges.has_issues:
        for line in analysis.bridges.warnings:
            print(f"  ! {line}")
    else:
        print("  No clearance issues")

    if analysis.all_recommendations:
        print("\nRECOMMENDATIONS")
        print("-" * 60)
        for line in analysis.all_recommendations:
            print(f"  - {line}")

    if analysis.notices:
        print("\nNOTICES")
        print("-" * 60)
        for line in analysis.notices:
            print(f"  * {line}")

    print("\n" + "=" * 60)
    print(f"Total estimated cost: ${analysis.permits.total_cost:,.2f}")
    print(f"Engine version: {analysis.version}")
    print("=" * 60)


# =============================================================================
# MAIN
# =============================================================================

def main():
    parser = argparse.ArgumentParser(
        description="Analyze an oversize/overweight route for permits, seasonal restrictions and bridges",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m route_compliance.scripts.analyze --route route.json --length 95 --width 14 --height 16 --weight 95000
  python -m route_compliance.scripts.analyze --route route.json --length 70 --width 12 --height 10 \\
      --deck-height 3.5 --weight 120000 --ship-date 2025-04-01 --json
        """
    )

    parser.add_argument("--route", type=Path, required=True, help="Route Provider result (JSON file)")
    parser.add_argument("--length", type=float, required=True, help="Overall length in feet")
    parser.add_argument("--width", type=float, required=True, help="Overall width in feet")
    parser.add_argument("--height", type=float, required=True, help="Cargo height in feet")
    parser.add_argument("--weight", type=float, required=True, help="Gross weight in pounds")
    parser.add_argument(
        "--deck-height",
        type=float,
        default=None,
        help="Trailer deck height in feet, added to --height for loaded height"
    )
    parser.add_argument("--axles", type=str, default=None, help="Axle configuration (informational)")
    parser.add_argument(
        "--ship-date",
        type=str,
        default=None,
        help="Ship date YYYY-MM-DD (default: today)"
    )
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("--verbose", action="store_true", help="Log engine details to stderr")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        route = RouteResult.from_dict(json.loads(args.route.read_text()))
        cargo = CargoSpecs(
            length_ft=args.length,
            width_ft=args.width,
            height_ft=args.height,
            weight_lbs=args.weight,
            deck_height_ft=args.deck_height,
            axle_configuration=args.axles,
        )
        analysis = analyze_route(route, cargo, ship_date=args.ship_date)
    except RouteComplianceError as e:
        print(f"\nError: {e}")
        sys.exit(2)

    if args.json:
        print(analysis.to_json())
    else:
        print_report(analysis)


if __name__ == "__main__":
    main()
