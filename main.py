#!/usr/bin/env python3
# greencart-simulation/main.py
"""
Command-Line Interface for the GreenCart Delivery Simulation.

Runs a simulation without the dashboard, and gives access to the saved
simulation history.

Usage:
    python main.py                                  # Run with defaults
    python main.py --drivers 8 --max-hours 6        # Custom run
    python main.py --save --user alice              # Persist the run
    python main.py --history --user alice           # Show saved runs
    python main.py --json                           # Print the raw response

Exit Codes:
    0: Success
    1: Data loading or input error
    2: Simulation error
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict

# Ensure the greencart package is importable when run from a checkout
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from greencart import config, utils
from greencart.exceptions import InvalidSimulationInput, SimulationError
from greencart.models import SimulationResult
from greencart.simulation import Simulation
from greencart.store import ResultsStore
from greencart.validation import validate_simulation_inputs


def print_header() -> None:
    """Print the CLI header."""
    print("\n" + "=" * 60)
    print("  GREENCART LOGISTICS - Delivery Simulation")
    print("  Driver Assignment & Profitability KPIs")
    print("=" * 60 + "\n")


def print_results(result: SimulationResult, start_time: str) -> None:
    """
    Print KPIs and the per-driver plan.

    Args:
        result: Completed simulation
        start_time: Shift start, used to show each driver's finish time
    """
    breakdown = result.fuel_cost_breakdown

    print("=" * 60)
    print("  KPIs")
    print("=" * 60)
    print(f"  Total Profit:        Rs {result.total_profit:,}")
    print(f"  Efficiency Score:    {result.efficiency_score}%")
    print(f"  Deliveries:          {result.total_deliveries} "
          f"({result.on_time_deliveries} on time, {result.late_deliveries} late)")
    print(f"  Total Fuel Cost:     Rs {result.total_fuel_cost:,}")
    print(f"    Low traffic:       Rs {breakdown.low_traffic:,}")
    print(f"    Medium traffic:    Rs {breakdown.medium_traffic:,}")
    print(f"    High traffic:      Rs {breakdown.high_traffic:,}")

    print("\n" + "=" * 60)
    print("  ASSIGNMENTS")
    print("=" * 60 + "\n")

    header = f"| {'Driver':<12} | {'Orders':^6} | {'Hours':^9} | {'Ends':^5} | {'Late':^4} |"
    print(header)
    print("|" + "-" * 14 + "|" + "-" * 8 + "|" + "-" * 11 + "|" + "-" * 7 + "|" + "-" * 6 + "|")

    for assignment in result.assignments:
        late = sum(1 for a in assignment.assigned_orders if a.is_late)
        name = assignment.driver.name + ("*" if assignment.is_fatigued else "")
        print(f"| {name:<12} | {len(assignment.assigned_orders):^6} | "
              f"{utils.format_hours(assignment.total_hours):^9} | "
              f"{assignment.estimated_end_time(start_time):^5} | {late:^4} |")

    print("\n  * fatigued (worked more than "
          f"{config.FATIGUE_HOURS_THRESHOLD:g}h on the most recent day)")
    print("=" * 60 + "\n")


def print_history(results_store: ResultsStore, user_id: str) -> None:
    """Print saved runs and summary statistics for a user."""
    history = results_store.history(user_id)
    stats = results_store.stats(user_id)

    print(f"Simulation history for '{user_id}' "
          f"({stats['totalSimulations']} runs)")
    print("-" * 60)
    for sim in history["simulations"]:
        inputs = sim["inputs"]
        print(f"  {sim['createdAt'][:19]}  {sim['id'][:8]}  "
              f"drivers={inputs['numberOfDrivers']:<3} start={inputs['startTime']:<5} "
              f"max={inputs['maxHoursPerDriver']:<5g} "
              f"profit=Rs {sim['totalProfit']:,}  eff={sim['efficiencyScore']}%")
    print("-" * 60)
    print(f"  Average profit:     Rs {stats['averageProfit']:,}")
    print(f"  Best / worst:       Rs {stats['maxProfit']:,} / Rs {stats['minProfit']:,}")
    print(f"  Average efficiency: {stats['averageEfficiency']}%\n")


def main() -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="GreenCart Delivery Simulation CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                                  # Default run
  python main.py --drivers 3 --start-time 08:30   # Three drivers from 08:30
  python main.py --save --user ops                # Save the run for 'ops'
  python main.py --history --user ops             # List saved runs
        """
    )

    parser.add_argument(
        "--drivers", "-n",
        type=int,
        default=config.DEFAULT_NUMBER_OF_DRIVERS,
        help=f"Number of drivers (default: {config.DEFAULT_NUMBER_OF_DRIVERS})"
    )

    parser.add_argument(
        "--start-time", "-t",
        type=str,
        default=config.DEFAULT_START_TIME,
        help=f"Shift start time HH:MM (default: {config.DEFAULT_START_TIME})"
    )

    parser.add_argument(
        "--max-hours", "-m",
        type=float,
        default=config.DEFAULT_MAX_HOURS_PER_DRIVER,
        help=f"Max hours per driver (default: {config.DEFAULT_MAX_HOURS_PER_DRIVER:g})"
    )

    parser.add_argument(
        "--data-dir", "-d",
        type=str,
        default=config.DATA_DIR,
        help=f"Directory with drivers.csv, routes.csv, orders.csv (default: {config.DATA_DIR})"
    )

    parser.add_argument(
        "--results-dir",
        type=str,
        default=config.RESULTS_DIR,
        help=f"Directory for saved runs (default: {config.RESULTS_DIR})"
    )

    parser.add_argument(
        "--user", "-u",
        type=str,
        default="local",
        help="User the run is saved under (default: local)"
    )

    parser.add_argument(
        "--save",
        action="store_true",
        help="Persist the run to the results directory"
    )

    parser.add_argument(
        "--history",
        action="store_true",
        help="Show saved runs for the user and exit"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the raw JSON response instead of tables"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show detailed progress"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    results_store = ResultsStore(args.results_dir)

    if args.history:
        print_history(results_store, args.user)
        return 0

    request: Dict[str, Any] = {
        "numberOfDrivers": args.drivers,
        "startTime": args.start_time,
        "maxHoursPerDriver": args.max_hours,
    }

    try:
        inputs = validate_simulation_inputs(request)
    except InvalidSimulationInput as e:
        for error in e.errors:
            print(f"ERROR: {error}")
        return 1

    try:
        sim = Simulation.from_csv(args.data_dir)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: Failed to load data: {e}")
        return 1

    try:
        result = sim.run(inputs)
    except SimulationError as e:
        print(f"ERROR: Simulation failed: {e}")
        return 2

    record = results_store.save(args.user, inputs, result) if args.save else None

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    print_header()
    if record is not None:
        print(f"Saved simulation {record.id} for user '{args.user}'\n")
    print_results(result, inputs.start_time)

    return 0


if __name__ == "__main__":
    sys.exit(main())
