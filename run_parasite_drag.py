#!/usr/bin/env python3
"""
Parasite Drag Build-Up Launcher
===============================

Command line front end for the parasite drag build-up.

Reads a vehicle geometry file (components plus degenerate geometry
snapshot), optionally applies a settings file (reference area, friction
laws, flow condition, excrescences), runs the build-up and prints the
drag table.

Usage:
------
    python run_parasite_drag.py aircraft.json
    python run_parasite_drag.py aircraft.json --settings cruise.json \\
        --sort percent_cd --csv buildup.csv --plot buildup.png --trace

Requirements:
------------
    - Python 3.8+
    - numpy
    - scipy
    - pandas
    - matplotlib
    - ambiance
"""

import argparse
import importlib.util
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

REQUIRED_PACKAGES = ("numpy", "scipy", "pandas", "matplotlib", "ambiance")


def check_dependencies():
    """Check that all required packages are installed."""
    missing = [pkg for pkg in REQUIRED_PACKAGES if importlib.util.find_spec(pkg) is None]
    if missing:
        print("Missing required packages:")
        for pkg in missing:
            print(f"  - {pkg}")
        print("\nInstall with: pip install -e .")
        sys.exit(1)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Parasite drag build-up")
    parser.add_argument("geometry", type=Path, help="Vehicle geometry JSON file")
    parser.add_argument("--settings", type=Path, help="Build-up settings JSON file")
    parser.add_argument(
        "--sort",
        choices=["none", "wetted_area", "percent_cd"],
        help="Table order (overrides the settings file)",
    )
    parser.add_argument("--csv", type=Path, help="Export the build-up to this CSV file")
    parser.add_argument("--plot", type=Path, help="Save the CD breakdown chart to this image")
    parser.add_argument("--trace", action="store_true", help="Print the step-by-step trace")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    """Run the build-up from the command line."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    check_dependencies()

    from src.parasite_drag import (
        ParasiteDragManager,
        SortOrder,
        load_geometry,
        load_settings,
        trace_calculation,
    )

    print("=" * 60)
    print("  Parasite Drag Build-Up")
    print("=" * 60)
    print()

    vehicle, snapshot = load_geometry(args.geometry)
    manager = ParasiteDragManager(vehicle)
    if args.settings:
        load_settings(manager, args.settings)
    if args.sort:
        manager.sort_order = SortOrder(args.sort)

    if args.trace:
        debugger = trace_calculation(manager, snapshot)
        report = manager.calculate_all()
        print(debugger.get_report())
        print()
    else:
        report = manager.calculate_all(snapshot)

    print(report.summary())

    if args.csv:
        report.export_csv(args.csv)
        print(f"\nBuild-up written to {args.csv}")

    if args.plot:
        import matplotlib
        matplotlib.use("Agg")
        from src.parasite_drag.plotting import DragBreakdownPlotter

        fig = DragBreakdownPlotter().plot_cd_breakdown(report)
        fig.tight_layout()
        fig.savefig(args.plot, dpi=150)
        print(f"Chart saved to {args.plot}")


if __name__ == "__main__":
    main()
