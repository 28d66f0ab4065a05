# greencart-simulation/greencart/store.py
"""
Data sources and sinks around the simulation engine.

- EntityStore: an in-memory snapshot of drivers, routes and orders, seeded
  from CSV files
- ResultsStore: persists simulation runs as JSON files, one per run, and
  serves history and summary statistics per user
"""

from __future__ import annotations

import csv
import json
import logging
import os
import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from . import config, utils
from .models import Driver, Order, OrderStatus, Route, SimulationInputs, SimulationResult, TrafficLevel

logger = logging.getLogger(__name__)

DRIVERS_FILE = "drivers.csv"
ROUTES_FILE = "routes.csv"
ORDERS_FILE = "orders.csv"

RUN_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


class EntityStore:
    """
    Snapshot of the fleet, routes and orders a simulation reads from.

    Attributes:
        drivers: All drivers, available or not
        routes: All routes
        orders: All orders, any status
    """

    def __init__(self, drivers: Iterable[Driver], routes: Iterable[Route], orders: Iterable[Order]) -> None:
        self.drivers: List[Driver] = list(drivers)
        self.routes: List[Route] = list(routes)
        self.orders: List[Order] = list(orders)

    @classmethod
    def from_csv(cls, data_dir: str = config.DATA_DIR) -> "EntityStore":
        """
        Load drivers.csv, routes.csv and orders.csv from ``data_dir``.

        Raises:
            FileNotFoundError: If any file is missing
            ValueError: If a row is malformed
        """
        drivers = load_drivers(os.path.join(data_dir, DRIVERS_FILE))
        routes = load_routes(os.path.join(data_dir, ROUTES_FILE))
        orders = load_orders(os.path.join(data_dir, ORDERS_FILE))
        logger.info("Loaded %d drivers, %d routes, %d orders from %s",
                    len(drivers), len(routes), len(orders), data_dir)
        return cls(drivers, routes, orders)

    def get_available_drivers(self, limit: Optional[int] = None) -> List[Driver]:
        """
        Available drivers, least fatigued first, then fewest hours worked today.

        Args:
            limit: Maximum number of drivers to return
        """
        available = [d for d in self.drivers if d.is_available]
        available.sort(key=lambda d: (d.fatigue_level, d.current_day_hours))
        if limit is not None:
            available = available[:limit]
        return available

    def get_pending_orders(self) -> List[Order]:
        return [o for o in self.orders if o.status is OrderStatus.PENDING]

    def get_route_map(self) -> Dict[int, Route]:
        """Routes keyed by route id."""
        return {r.route_id: r for r in self.routes}


def _open_rows(path: str) -> List[Dict[str, str]]:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Data file not found: {path}")
    with open(path, "r", newline="") as f:
        return [row for row in csv.DictReader(f) if any((v or "").strip() for v in row.values())]


def load_drivers(path: str) -> List[Driver]:
    """
    Load drivers from CSV.

    Columns: driver_id, name, shift_hours, past_week_hours. The week history
    is pipe-separated, oldest day first (``6|8|7|7|7|6|10``).
    Optional columns: is_available, current_day_hours, fatigue_level.
    """
    drivers: List[Driver] = []
    for row in _open_rows(path):
        try:
            hours = [float(h) for h in row["past_week_hours"].split("|") if h.strip()]
            drivers.append(Driver(
                driver_id=row["driver_id"].strip(),
                name=row["name"].strip(),
                shift_hours=float(row["shift_hours"]),
                past_week_hours=tuple(hours),
                is_available=(row.get("is_available") or "true").strip().lower() in ("true", "1", "yes"),
                current_day_hours=float(row.get("current_day_hours") or 0),
                fatigue_level=int(row["fatigue_level"]) if (row.get("fatigue_level") or "").strip() else None,
            ))
        except (KeyError, ValueError) as e:
            raise ValueError(f"Invalid driver data in {path}: {e}")
    return drivers


def load_routes(path: str) -> List[Route]:
    """Load routes from CSV. Columns: route_id, distance_km, traffic_level, base_time_min."""
    routes: List[Route] = []
    for row in _open_rows(path):
        try:
            route = Route(
                route_id=int(row["route_id"]),
                distance_km=float(row["distance_km"]),
                traffic_level=TrafficLevel.parse(row["traffic_level"]),
                base_time_min=float(row["base_time_min"]),
            )
        except (KeyError, ValueError) as e:
            raise ValueError(f"Invalid route data in {path}: {e}")
        if route.route_id < 1 or route.distance_km < 0 or route.base_time_min < 0:
            raise ValueError(f"Invalid route data in {path}: out of range values for route {route.route_id}")
        routes.append(route)
    return routes


def load_orders(path: str) -> List[Order]:
    """Load orders from CSV. Columns: order_id, value_rs, route_id, delivery_time (HH:MM)."""
    orders: List[Order] = []
    for row in _open_rows(path):
        try:
            delivery_time = row["delivery_time"].strip()
            utils.time_to_minutes(delivery_time)
            order = Order(
                order_id=int(row["order_id"]),
                value_rs=float(row["value_rs"]),
                route_id=int(row["route_id"]),
                delivery_time=delivery_time,
            )
        except (KeyError, ValueError) as e:
            raise ValueError(f"Invalid order data in {path}: {e}")
        if order.order_id < 1 or order.value_rs < 0:
            raise ValueError(f"Invalid order data in {path}: out of range values for order {order.order_id}")
        orders.append(order)
    return orders


@dataclass
class SimulationRecord:
    """A persisted simulation run."""
    id: str
    user_id: str
    inputs: Dict[str, Any]
    results: Dict[str, Any]
    created_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "inputs": self.inputs,
            "results": self.results,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationRecord":
        return cls(
            id=data["id"],
            user_id=data["userId"],
            inputs=data["inputs"],
            results=data["results"],
            created_at=data["createdAt"],
        )


class ResultsStore:
    """
    Stores simulation runs as JSON files under ``results_dir``.

    Every lookup is scoped to the user that created the run.
    """

    def __init__(self, results_dir: str = config.RESULTS_DIR) -> None:
        self.results_dir = results_dir

    def _path(self, run_id: str) -> Optional[str]:
        """File for ``run_id``, or None if the id is not one ``save`` could have issued."""
        if not RUN_ID_PATTERN.match(run_id or ""):
            return None
        return os.path.join(self.results_dir, f"{run_id}.json")

    def _load_all(self, user_id: str) -> List[SimulationRecord]:
        if not os.path.isdir(self.results_dir):
            return []
        records: List[SimulationRecord] = []
        for name in os.listdir(self.results_dir):
            if not name.endswith(".json"):
                continue
            with open(os.path.join(self.results_dir, name), "r") as f:
                record = SimulationRecord.from_dict(json.load(f))
            if record.user_id == user_id:
                records.append(record)
        records.sort(key=lambda r: r.created_at, reverse=True)
        return records

    def save(self, user_id: str, inputs: SimulationInputs, result: SimulationResult) -> SimulationRecord:
        """Persist a completed run and return its record."""
        os.makedirs(self.results_dir, exist_ok=True)
        record = SimulationRecord(
            id=uuid.uuid4().hex,
            user_id=user_id,
            inputs=inputs.to_dict(),
            results=result.to_dict(),
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        with open(self._path(record.id), "w") as f:
            json.dump(record.to_dict(), f, indent=2)
        logger.info("Saved simulation %s for user %s", record.id, user_id)
        return record

    def get(self, run_id: str, user_id: str) -> Optional[SimulationRecord]:
        path = self._path(run_id)
        if path is None or not os.path.exists(path):
            return None
        with open(path, "r") as f:
            record = SimulationRecord.from_dict(json.load(f))
        return record if record.user_id == user_id else None

    def delete(self, run_id: str, user_id: str) -> bool:
        """Delete a run. Returns False if it does not exist or belongs to someone else."""
        if self.get(run_id, user_id) is None:
            return False
        os.remove(self._path(run_id))
        return True

    def history(self, user_id: str, page: int = 1, limit: int = config.HISTORY_PAGE_SIZE) -> Dict[str, Any]:
        """
        Newest-first page of a user's runs with pagination info.

        Each entry carries the inputs and headline KPIs only.
        Page numbers below 1 fall back to the first page, page sizes below 1
        to the default page size.
        """
        page = max(page, 1)
        if limit < 1:
            limit = config.HISTORY_PAGE_SIZE
        records = self._load_all(user_id)
        total = len(records)
        total_pages = (total + limit - 1) // limit
        start = (page - 1) * limit

        return {
            "simulations": [
                {
                    "id": r.id,
                    "inputs": r.inputs,
                    "totalProfit": r.results["totalProfit"],
                    "efficiencyScore": r.results["efficiencyScore"],
                    "createdAt": r.created_at,
                }
                for r in records[start:start + limit]
            ],
            "pagination": {
                "currentPage": page,
                "totalPages": total_pages,
                "totalSimulations": total,
                "hasNext": page < total_pages,
                "hasPrev": page > 1,
            },
        }

    def stats(self, user_id: str) -> Dict[str, Any]:
        """Count, average/max/min profit and average efficiency across a user's runs."""
        records = self._load_all(user_id)
        if not records:
            return {
                "totalSimulations": 0,
                "averageProfit": 0,
                "maxProfit": 0,
                "minProfit": 0,
                "averageEfficiency": 0,
            }

        profits = [r.results["totalProfit"] for r in records]
        efficiencies = [r.results["efficiencyScore"] for r in records]
        return {
            "totalSimulations": len(records),
            "averageProfit": utils.round_half_up(sum(profits) / len(profits)),
            "maxProfit": max(profits),
            "minProfit": min(profits),
            "averageEfficiency": utils.round_half_up(sum(efficiencies) / len(efficiencies), 2),
        }
