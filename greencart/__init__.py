# greencart-simulation/greencart/__init__.py

from .models import (
    Driver,
    Route,
    Order,
    OrderStatus,
    TrafficLevel,
    Assignment,
    AssignedOrder,
    FuelCostBreakdown,
    SimulationInputs,
    SimulationResult,
)
from .exceptions import SimulationError, InsufficientDriversError, InvalidSimulationInput
from .simulation import Simulation
from .dispatch import DispatchEngine, sort_orders
from .scoring import calculate_assignment_score, get_traffic_penalty
from .timing import calculate_order_time, is_order_late
from .kpis import calculate_kpis, calculate_fuel_cost
from .store import EntityStore, ResultsStore
from .validation import validate_simulation_inputs

__version__ = "1.0.0"

__all__ = [
    # Models
    "Driver",
    "Route",
    "Order",
    "OrderStatus",
    "TrafficLevel",
    "Assignment",
    "AssignedOrder",
    "FuelCostBreakdown",
    "SimulationInputs",
    "SimulationResult",
    # Errors
    "SimulationError",
    "InsufficientDriversError",
    "InvalidSimulationInput",
    # Core
    "Simulation",
    "DispatchEngine",
    "EntityStore",
    "ResultsStore",
    # Functions
    "sort_orders",
    "calculate_assignment_score",
    "get_traffic_penalty",
    "calculate_order_time",
    "is_order_late",
    "calculate_kpis",
    "calculate_fuel_cost",
    "validate_simulation_inputs",
]
