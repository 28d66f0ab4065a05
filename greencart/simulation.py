# greencart-simulation/greencart/simulation.py
"""
Simulation runner for the GreenCart Delivery Simulation.

A run takes one snapshot of the entity store and:
1. Picks the requested number of available drivers (least fatigued first)
2. Assigns pending orders to them with the dispatch engine
3. Calculates profit, efficiency and fuel KPIs from the plan
4. Optionally persists the result

Runs are exploratory "what-if" computations: nothing in the snapshot is
modified and no state is kept between runs.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from . import config
from .dispatch import DispatchEngine
from .kpis import calculate_kpis
from .models import SimulationInputs, SimulationResult
from .store import EntityStore, ResultsStore, SimulationRecord
from .validation import validate_simulation_inputs

logger = logging.getLogger(__name__)


class Simulation:
    """
    Runs delivery simulations against an entity store.

    Attributes:
        store: Source of drivers, routes and orders
        results_store: Where completed runs are saved (optional)
        dispatch_engine: Planner used to build assignments
    """

    def __init__(self, store: EntityStore, results_store: Optional[ResultsStore] = None) -> None:
        self.store = store
        self.results_store = results_store
        self.dispatch_engine = DispatchEngine()

    @classmethod
    def from_csv(cls, data_dir: str = config.DATA_DIR, results_dir: Optional[str] = None) -> "Simulation":
        """Build a simulation over CSV data, saving results under ``results_dir`` if given."""
        results_store = ResultsStore(results_dir) if results_dir else None
        return cls(EntityStore.from_csv(data_dir), results_store)

    def run(self, inputs: SimulationInputs) -> SimulationResult:
        """
        Run one simulation.

        Args:
            inputs: Validated simulation parameters

        Returns:
            SimulationResult with KPIs and per-driver assignments

        Raises:
            InsufficientDriversError: If fewer drivers are available than requested
        """
        drivers = self.store.get_available_drivers(limit=inputs.number_of_drivers)
        orders = self.store.get_pending_orders()
        route_map = self.store.get_route_map()

        logger.info(
            "Starting simulation: %d drivers requested, %d available, %d pending orders",
            inputs.number_of_drivers, len(drivers), len(orders),
        )

        assignments = self.dispatch_engine.assign_orders(
            drivers,
            orders,
            route_map,
            inputs.start_time,
            inputs.max_hours_per_driver,
            requested_drivers=inputs.number_of_drivers,
        )

        return calculate_kpis(assignments, route_map)

    def run_and_save(self, user_id: str, inputs: SimulationInputs) -> SimulationRecord:
        """
        Run a simulation and persist it for ``user_id``.

        Nothing is saved if the run fails.
        """
        if self.results_store is None:
            raise RuntimeError("No results store configured")
        result = self.run(inputs)
        return self.results_store.save(user_id, inputs, result)

    def run_request(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Validate a raw request, run it and return the response payload."""
        inputs = validate_simulation_inputs(request)
        return self.run(inputs).to_dict()
