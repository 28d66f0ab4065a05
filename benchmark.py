# greencart-simulation/benchmark.py
"""
Scenario sweep for the GreenCart Delivery Simulation.

Runs the simulation over a grid of driver counts and per-driver hour caps
against one dataset and writes CSV and markdown summaries, so managers can
see how staffing decisions move profit and on-time performance.
"""

import argparse
import csv
import json
import os
from datetime import datetime
from typing import Any, Dict, List, Optional

from greencart import config
from greencart.exceptions import InsufficientDriversError
from greencart.models import SimulationInputs
from greencart.simulation import Simulation

DRIVER_COUNTS = [2, 4, 6, 8, 10]
MAX_HOURS_OPTIONS = [4.0, 6.0, 8.0, 10.0]

# KPIs written to the CSV, in column order
CSV_KPIS = [
    "totalProfit",
    "efficiencyScore",
    "onTimeDeliveries",
    "lateDeliveries",
    "totalDeliveries",
    "totalFuelCost",
]


def run_scenario(sim: Simulation, drivers: int, max_hours: float, start_time: str) -> Optional[Dict[str, Any]]:
    """Run one grid point. Returns None when there are not enough drivers."""
    inputs = SimulationInputs(
        number_of_drivers=drivers,
        start_time=start_time,
        max_hours_per_driver=max_hours,
    )
    try:
        result = sim.run(inputs).to_dict()
    except InsufficientDriversError as e:
        print(f"  SKIP drivers={drivers} max_hours={max_hours:g}: {e}")
        return None

    busiest = max((a["totalHours"] for a in result["assignments"]), default=0)
    row = {
        "drivers": drivers,
        "max_hours": max_hours,
        "busiest_driver_hours": busiest,
        "fuel_low": result["fuelCostBreakdown"]["lowTraffic"],
        "fuel_medium": result["fuelCostBreakdown"]["mediumTraffic"],
        "fuel_high": result["fuelCostBreakdown"]["highTraffic"],
    }
    for kpi in CSV_KPIS:
        row[kpi] = result[kpi]

    print(f"  ✓ drivers={drivers:<3} max_hours={max_hours:<5g} "
          f"profit=Rs {result['totalProfit']:,} eff={result['efficiencyScore']}% "
          f"delivered={result['totalDeliveries']}")
    return row


def save_csv(rows: List[Dict[str, Any]], output_dir: str, timestamp: str) -> str:
    """Write every grid point as one CSV row."""
    filename = f"{output_dir}/SWEEP_{timestamp}.csv"
    fieldnames = ["drivers", "max_hours"] + CSV_KPIS + [
        "busiest_driver_hours", "fuel_low", "fuel_medium", "fuel_high"
    ]
    with open(filename, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)
    print(f"✓ Saved sweep: {filename}")
    return filename


def generate_markdown_report(rows: List[Dict[str, Any]], output_dir: str, timestamp: str,
                             pending_orders: int) -> str:
    """Profit matrix (drivers x hour cap) plus the best configuration."""
    filename = f"{output_dir}/SWEEP_REPORT_{timestamp}.md"

    by_key = {(r["drivers"], r["max_hours"]): r for r in rows}
    driver_counts = sorted({r["drivers"] for r in rows})
    hour_caps = sorted({r["max_hours"] for r in rows})

    with open(filename, 'w', encoding='utf-8') as f:
        f.write("# GreenCart Staffing Sweep\n\n")
        f.write(f"**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n")
        f.write(f"- **Pending orders**: {pending_orders}\n\n")

        f.write("## Total Profit (Rs)\n\n")
        f.write("| Drivers |" + "".join(f" {h:g}h |" for h in hour_caps) + "\n")
        f.write("|:-------:|" + ":-----:|" * len(hour_caps) + "\n")
        for d in driver_counts:
            cells = []
            for h in hour_caps:
                row = by_key.get((d, h))
                cells.append(f" {row['totalProfit']:,} ({row['efficiencyScore']}%) |" if row else " N/A |")
            f.write(f"| {d} |" + "".join(cells) + "\n")
        f.write("\n")

        if rows:
            best = max(rows, key=lambda r: (r["totalProfit"], -r["drivers"]))
            f.write(f"**Best:** {best['drivers']} drivers at {best['max_hours']:g}h "
                    f"-> Rs {best['totalProfit']:,}, {best['efficiencyScore']}% on time, "
                    f"{best['totalDeliveries']}/{pending_orders} delivered\n\n")

        f.write("---\n")
        f.write("*Report generated by benchmark.py*\n")

    print(f"✓ Saved report: {filename}")
    return filename


def main():
    """Run the staffing sweep."""
    parser = argparse.ArgumentParser(description="GreenCart staffing sweep")
    parser.add_argument("--data-dir", default=config.DATA_DIR)
    parser.add_argument("--output-dir", default="benchmarks")
    parser.add_argument("--start-time", default=config.DEFAULT_START_TIME)
    args = parser.parse_args()

    print("=" * 60)
    print("GREENCART STAFFING SWEEP")
    print("=" * 60)

    sim = Simulation.from_csv(args.data_dir)
    pending = len(sim.store.get_pending_orders())
    print(f"  Loaded {len(sim.store.drivers)} drivers, {pending} pending orders")

    os.makedirs(args.output_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    rows: List[Dict[str, Any]] = []
    for drivers in DRIVER_COUNTS:
        for max_hours in MAX_HOURS_OPTIONS:
            row = run_scenario(sim, drivers, max_hours, args.start_time)
            if row:
                rows.append(row)

    save_csv(rows, args.output_dir, timestamp)
    generate_markdown_report(rows, args.output_dir, timestamp, pending)

    json_file = f"{args.output_dir}/sweep_{timestamp}.json"
    with open(json_file, 'w') as f:
        json.dump(rows, f, indent=2)
    print(f"✓ Saved JSON: {json_file}")

    print(f"\n{'='*60}")
    print("SWEEP COMPLETE")
    print(f"{'='*60}")


if __name__ == "__main__":
    main()
