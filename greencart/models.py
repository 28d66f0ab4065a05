# greencart-simulation/greencart/models.py
"""
Core domain models for the GreenCart Delivery Simulation.

This module defines the data structures used throughout the simulation:
- Driver: A member of the fleet with a week of working-hours history
- Route: A delivery route with distance, traffic tier and base travel time
- Order: A pending delivery tied to a route
- Assignment: The orders committed to one driver during a single run
- SimulationResult: The KPIs and assignments produced by a run

Drivers, routes and orders are read-only snapshots; only Assignment is
mutated, and only while a run is planning.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from . import config, utils


class TrafficLevel(Enum):
    """Traffic tier of a route. Drives both travel time and fuel surcharge."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def parse(cls, value: str) -> "TrafficLevel":
        """Parse 'Low' / 'medium' / 'HIGH' into a TrafficLevel."""
        for level in cls:
            if level.value.lower() == str(value).strip().lower():
                return level
        raise ValueError(f"Unknown traffic level: {value!r}")

    @property
    def breakdown_key(self) -> str:
        """Key used in the fuel cost breakdown, e.g. 'lowTraffic'."""
        return f"{self.value.lower()}Traffic"


class OrderStatus(Enum):
    """Lifecycle states for an order."""
    PENDING = "pending"
    ASSIGNED = "assigned"
    IN_TRANSIT = "in-transit"
    DELIVERED = "delivered"
    FAILED = "failed"


@dataclass(frozen=True)
class Driver:
    """
    Represents a driver in the delivery fleet.

    Attributes:
        driver_id: Unique identifier
        name: Display name
        shift_hours: Contracted shift length (0-24)
        past_week_hours: Hours worked on each of the last 7 days, oldest first
        is_available: Whether the driver can take part in a run
        current_day_hours: Hours already worked today
        fatigue_level: 0-100 ranking used to order drivers before a run
    """
    driver_id: str
    name: str
    shift_hours: float
    past_week_hours: Tuple[float, ...]
    is_available: bool = True
    current_day_hours: float = 0.0
    fatigue_level: Optional[int] = None

    def __post_init__(self) -> None:
        hours = tuple(float(h) for h in self.past_week_hours)
        if len(hours) != config.PAST_WEEK_DAYS:
            raise ValueError(
                f"Driver {self.driver_id}: past week hours must have "
                f"{config.PAST_WEEK_DAYS} entries, got {len(hours)}"
            )
        if any(h < 0 or h > 24 for h in hours):
            raise ValueError(f"Driver {self.driver_id}: past week hours must be between 0 and 24")
        if not 0 <= self.shift_hours <= 24:
            raise ValueError(f"Driver {self.driver_id}: shift hours must be between 0 and 24")
        if self.current_day_hours < 0:
            raise ValueError(f"Driver {self.driver_id}: current day hours cannot be negative")
        if self.fatigue_level is not None and not 0 <= self.fatigue_level <= 100:
            raise ValueError(f"Driver {self.driver_id}: fatigue level must be between 0 and 100")
        object.__setattr__(self, "past_week_hours", hours)
        if self.fatigue_level is None:
            level = config.FATIGUE_LEVEL_WHEN_TIRED if self.is_fatigued else 0
            object.__setattr__(self, "fatigue_level", level)

    @property
    def is_fatigued(self) -> bool:
        """Worked more than the fatigue threshold on the most recent day."""
        return self.past_week_hours[-1] > config.FATIGUE_HOURS_THRESHOLD

    @property
    def weekly_average(self) -> float:
        """Average hours worked per day over the past week."""
        return sum(self.past_week_hours) / len(self.past_week_hours)

    def __repr__(self) -> str:
        return f"Driver({self.driver_id}, {self.name}, fatigued={self.is_fatigued})"


@dataclass(frozen=True)
class Route:
    """
    Represents a delivery route.

    Attributes:
        route_id: Unique positive identifier
        distance_km: Route length
        traffic_level: Traffic tier
        base_time_min: Travel time in free-flowing traffic
    """
    route_id: int
    distance_km: float
    traffic_level: TrafficLevel
    base_time_min: float

    @property
    def traffic_multiplier(self) -> float:
        return config.TRAFFIC_MULTIPLIERS[self.traffic_level.value]

    @property
    def expected_time(self) -> int:
        """Travel time in minutes with traffic applied, rounded up."""
        return math.ceil(self.base_time_min * self.traffic_multiplier)

    @property
    def fuel_cost(self) -> float:
        """Fuel cost in Rs, including the High traffic surcharge."""
        cost = self.distance_km * config.BASE_FUEL_COST_PER_KM
        if self.traffic_level is TrafficLevel.HIGH:
            cost += self.distance_km * config.HIGH_TRAFFIC_SURCHARGE_PER_KM
        return cost

    def __repr__(self) -> str:
        return f"Route({self.route_id}, {self.distance_km}km, {self.traffic_level.value})"


@dataclass(frozen=True)
class Order:
    """
    Represents a delivery order.

    Attributes:
        order_id: Unique positive identifier
        value_rs: Order value in Rs
        route_id: Route the order travels on
        delivery_time: Declared delivery time "HH:MM". Only used to break
            ties when sorting orders; lateness never depends on it.
        status: Lifecycle state
    """
    order_id: int
    value_rs: float
    route_id: int
    delivery_time: str
    status: OrderStatus = OrderStatus.PENDING

    @property
    def delivery_minutes(self) -> int:
        """Declared delivery time as minutes since midnight."""
        return utils.time_to_minutes(self.delivery_time)

    @property
    def is_high_value(self) -> bool:
        return self.value_rs > config.HIGH_VALUE_THRESHOLD_RS

    def __repr__(self) -> str:
        return f"Order({self.order_id}, Rs{self.value_rs}, route={self.route_id})"


@dataclass(frozen=True)
class AssignedOrder:
    """An order committed to a driver, with its computed timing."""
    order: Order
    estimated_time: int
    is_late: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "orderId": self.order.order_id,
            "valueRs": self.order.value_rs,
            "routeId": self.order.route_id,
            "deliveryTime": self.order.delivery_time,
            "estimatedTime": self.estimated_time,
            "isLate": self.is_late,
        }


@dataclass
class Assignment:
    """
    The orders committed to one driver during a single simulation run.

    ``is_fatigued`` is captured once when planning starts and is never
    recomputed as hours accrue during the run.
    """
    driver: Driver
    is_fatigued: bool
    assigned_orders: List[AssignedOrder] = field(default_factory=list)
    total_hours: float = 0.0

    @classmethod
    def for_driver(cls, driver: Driver) -> "Assignment":
        return cls(driver=driver, is_fatigued=driver.is_fatigued)

    @property
    def driver_id(self) -> str:
        return self.driver.driver_id

    @property
    def total_minutes(self) -> int:
        return sum(a.estimated_time for a in self.assigned_orders)

    def add(self, order: Order, estimated_time: int, is_late: bool) -> None:
        """Commit an order to this driver."""
        self.assigned_orders.append(AssignedOrder(order, estimated_time, is_late))
        self.total_hours += estimated_time / 60

    def estimated_end_time(self, shift_start: str) -> str:
        """Wall-clock time the driver finishes if orders run back to back from ``shift_start``."""
        return utils.minutes_to_time(utils.time_to_minutes(shift_start) + self.total_minutes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "driverId": self.driver.driver_id,
            "driverName": self.driver.name,
            "totalHours": utils.round_half_up(self.total_hours, 2),
            "assignedOrdersCount": len(self.assigned_orders),
            "assignedOrders": [a.to_dict() for a in self.assigned_orders],
        }

    def __repr__(self) -> str:
        return (f"Assignment({self.driver.driver_id}, orders={len(self.assigned_orders)}, "
                f"hours={self.total_hours:.2f})")


@dataclass
class FuelCostBreakdown:
    """Fuel cost split by traffic tier. All three tiers are always present."""
    low_traffic: float = 0.0
    medium_traffic: float = 0.0
    high_traffic: float = 0.0

    def add(self, level: TrafficLevel, cost: float) -> None:
        if level is TrafficLevel.LOW:
            self.low_traffic += cost
        elif level is TrafficLevel.MEDIUM:
            self.medium_traffic += cost
        else:
            self.high_traffic += cost

    @property
    def total(self) -> float:
        return self.low_traffic + self.medium_traffic + self.high_traffic

    def rounded(self) -> "FuelCostBreakdown":
        return FuelCostBreakdown(
            low_traffic=utils.round_half_up(self.low_traffic),
            medium_traffic=utils.round_half_up(self.medium_traffic),
            high_traffic=utils.round_half_up(self.high_traffic),
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "lowTraffic": self.low_traffic,
            "mediumTraffic": self.medium_traffic,
            "highTraffic": self.high_traffic,
        }


@dataclass(frozen=True)
class SimulationInputs:
    """Parameters of a single simulation request."""
    number_of_drivers: int
    start_time: str
    max_hours_per_driver: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationInputs":
        return cls(
            number_of_drivers=data["numberOfDrivers"],
            start_time=data["startTime"],
            max_hours_per_driver=data["maxHoursPerDriver"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "numberOfDrivers": self.number_of_drivers,
            "startTime": self.start_time,
            "maxHoursPerDriver": self.max_hours_per_driver,
        }


@dataclass
class SimulationResult:
    """
    Container for simulation KPIs and the plan they were derived from.

    Profit and fuel figures are already rounded for reporting.
    """
    total_profit: int
    efficiency_score: float
    on_time_deliveries: int
    late_deliveries: int
    total_deliveries: int
    total_fuel_cost: int
    fuel_cost_breakdown: FuelCostBreakdown
    assignments: List[Assignment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Render the response payload."""
        return {
            "totalProfit": self.total_profit,
            "efficiencyScore": self.efficiency_score,
            "onTimeDeliveries": self.on_time_deliveries,
            "lateDeliveries": self.late_deliveries,
            "totalDeliveries": self.total_deliveries,
            "totalFuelCost": self.total_fuel_cost,
            "fuelCostBreakdown": self.fuel_cost_breakdown.to_dict(),
            "assignments": [a.to_dict() for a in self.assignments],
        }
