# greencart-simulation/greencart/kpis.py
"""
KPI calculation for a completed assignment plan.

Per delivered order:
- Profit starts at the order value
- Late deliveries pay a flat penalty
- High-value orders delivered on time earn a bonus
- The route's fuel cost is subtracted and booked against its traffic tier
- Negative order profit is floored at zero

Totals are rounded once at the end, never per order.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from . import config, utils
from .models import Assignment, FuelCostBreakdown, Route, SimulationResult

logger = logging.getLogger(__name__)


def calculate_fuel_cost(route: Route) -> float:
    """Fuel cost for one delivery on ``route`` (Rs5/km, +Rs2/km in High traffic)."""
    return route.fuel_cost


def calculate_efficiency_score(on_time: int, total: int) -> float:
    """Percentage of deliveries on time, 2 decimals. Zero when nothing was delivered."""
    if total == 0:
        return 0
    return utils.round_half_up(on_time / total * 100, 2)


def calculate_kpis(assignments: List[Assignment], route_map: Dict[int, Route]) -> SimulationResult:
    """
    Derive profit, efficiency and fuel metrics from a plan.

    Args:
        assignments: Output of the dispatch engine
        route_map: Routes keyed by route id

    Returns:
        SimulationResult with rounded KPIs and the assignments attached
    """
    total_profit: float = 0.0
    total_fuel_cost: float = 0.0
    on_time_deliveries = 0
    late_deliveries = 0
    total_deliveries = 0
    fuel_cost_breakdown = FuelCostBreakdown()

    for assignment in assignments:
        for assigned in assignment.assigned_orders:
            order = assigned.order
            route = route_map.get(order.route_id)
            if route is None:
                continue

            total_deliveries += 1
            order_profit = order.value_rs

            if assigned.is_late:
                order_profit -= config.LATE_DELIVERY_PENALTY
                late_deliveries += 1
            else:
                on_time_deliveries += 1
                if order.is_high_value:
                    order_profit += order.value_rs * config.HIGH_VALUE_BONUS_RATE

            fuel_cost = calculate_fuel_cost(route)
            order_profit -= fuel_cost
            total_fuel_cost += fuel_cost
            fuel_cost_breakdown.add(route.traffic_level, fuel_cost)

            total_profit += max(0.0, order_profit)

    result = SimulationResult(
        total_profit=utils.round_half_up(total_profit),
        efficiency_score=calculate_efficiency_score(on_time_deliveries, total_deliveries),
        on_time_deliveries=on_time_deliveries,
        late_deliveries=late_deliveries,
        total_deliveries=total_deliveries,
        total_fuel_cost=utils.round_half_up(total_fuel_cost),
        fuel_cost_breakdown=fuel_cost_breakdown.rounded(),
        assignments=list(assignments),
    )

    logger.info(
        "KPIs: profit=%s efficiency=%s%% on_time=%d late=%d",
        result.total_profit, result.efficiency_score, on_time_deliveries, late_deliveries,
    )
    return result
