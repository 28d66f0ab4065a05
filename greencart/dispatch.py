# greencart-simulation/greencart/dispatch.py
"""
Dispatch Engine for the GreenCart Delivery Simulation.

Greedy order-to-driver assignment:

1. Orders are ranked by value (highest first), then by declared delivery
   time (earliest first).
2. Each order is offered to every driver who still has room under the
   per-driver hour cap.
3. The driver with the highest assignment score wins. Drivers are scanned in
   their input order and the first one to reach the best score keeps it, so
   equal scores always resolve the same way.

Orders whose route is unknown, and orders no driver has room for, are left
unassigned without raising.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from . import scoring, timing, utils
from .exceptions import InsufficientDriversError
from .models import Assignment, Driver, Order, Route

logger = logging.getLogger(__name__)


def sort_orders(orders: Sequence[Order]) -> List[Order]:
    """Highest value first; equal values by earliest delivery time. Stable."""
    return sorted(orders, key=lambda o: (-o.value_rs, o.delivery_minutes))


class DispatchEngine:
    """
    Plans which driver delivers which order for a single simulation run.

    The engine holds no state between calls; every call to
    ``assign_orders`` builds fresh Assignment objects.
    """

    def assign_orders(
        self,
        drivers: Sequence[Driver],
        orders: Sequence[Order],
        route_map: Dict[int, Route],
        start_time: str,
        max_hours_per_driver: float,
        requested_drivers: Optional[int] = None,
    ) -> List[Assignment]:
        """
        Greedily assign orders to drivers.

        Args:
            drivers: Eligible drivers, already sorted by fatigue level then
                current-day hours
            orders: Pending orders
            route_map: Routes keyed by route id
            start_time: Shift start "HH:MM"
            max_hours_per_driver: Hour cap per driver for this run
            requested_drivers: Number of drivers the run asked for
                (defaults to ``len(drivers)``)

        Returns:
            One Assignment per driver, in input order, including drivers
            that received no orders

        Raises:
            InsufficientDriversError: If fewer drivers than requested are given
        """
        if requested_drivers is None:
            requested_drivers = len(drivers)
        if len(drivers) < requested_drivers:
            raise InsufficientDriversError(available=len(drivers), requested=requested_drivers)

        assignments = [Assignment.for_driver(d) for d in drivers[:requested_drivers]]
        shift_start_min = utils.time_to_minutes(start_time)

        logger.debug(
            "Planning %d orders across %d drivers from %s (cap %.2fh)",
            len(orders), len(assignments), utils.minutes_to_time(shift_start_min),
            max_hours_per_driver,
        )

        for order in sort_orders(orders):
            route = route_map.get(order.route_id)
            if route is None:
                logger.debug("Skipping order %s: unknown route %s", order.order_id, order.route_id)
                continue

            best = self._select_driver(assignments, order, route, max_hours_per_driver)
            if best is None:
                logger.debug("Dropping order %s: no driver has capacity", order.order_id)
                continue

            order_time = timing.calculate_order_time(route, best.is_fatigued)
            best.add(order, order_time, timing.is_order_late(route, best.is_fatigued))

        return assignments

    def _select_driver(
        self,
        assignments: List[Assignment],
        order: Order,
        route: Route,
        max_hours_per_driver: float,
    ) -> Optional[Assignment]:
        """
        Highest scoring assignment with room for the order.

        A single pass in input order; a later driver only wins with a
        strictly greater score.
        """
        best_assignment: Optional[Assignment] = None
        best_score: Optional[float] = None

        for assignment in assignments:
            order_time = timing.calculate_order_time(route, assignment.is_fatigued)
            if assignment.total_hours + order_time / 60 > max_hours_per_driver:
                continue

            score = scoring.calculate_assignment_score(assignment, order, route)
            if best_score is None or score > best_score:
                best_score = score
                best_assignment = assignment

        return best_assignment
