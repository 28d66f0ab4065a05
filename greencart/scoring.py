# greencart-simulation/greencart/scoring.py
"""
Scoring function for driver-order assignment.

Each feasible driver is scored for an order and the dispatcher awards the
order to the highest score. The score considers:
1. Fatigue: tired drivers are less desirable
2. Workload: hours already committed in this run
3. Order value: high-value orders get a boost
4. Traffic: congested routes are penalised

Ties are not broken here; the dispatcher keeps the first driver that reached
the maximum.
"""

from __future__ import annotations

from typing import Dict

from . import config
from .models import Assignment, Order, Route, TrafficLevel


def get_traffic_penalty(traffic_level: TrafficLevel) -> float:
    """
    Score penalty for a traffic tier.

    Args:
        traffic_level: Route traffic tier

    Returns:
        10 for High, 5 for Medium, 0 for Low
    """
    penalties: Dict[str, float] = config.TRAFFIC_SCORE_PENALTIES
    return penalties.get(traffic_level.value, 0.0)


def calculate_assignment_score(assignment: Assignment, order: Order, route: Route) -> float:
    """
    Desirability of giving ``order`` to the driver behind ``assignment``.

    Higher is better. Uses the fatigue flag frozen at the start of the run
    and the hours committed so far.

    Args:
        assignment: The driver's in-progress assignment
        order: The order being placed
        route: The order's route

    Returns:
        Real-valued score
    """
    score = config.BASE_SCORE

    if assignment.is_fatigued:
        score -= config.FATIGUE_SCORE_PENALTY

    score -= assignment.total_hours * config.WORKLOAD_PENALTY_PER_HOUR

    if order.is_high_value:
        score += config.HIGH_VALUE_SCORE_BONUS

    score -= get_traffic_penalty(route.traffic_level)

    return score
