# greencart-simulation/greencart/timing.py
"""
Timing model for order execution.

Execution time depends only on the route and on whether the driver is
fatigued. Lateness compares that time against the route's base time plus a
fixed buffer; the order's declared delivery time plays no part.
"""

from __future__ import annotations

import math

from . import config
from .models import Route


def get_fatigue_factor(fatigued: bool) -> float:
    """Multiplier applied to travel time for fatigued drivers (1.3) or rested ones (1.0)."""
    return 1.0 + config.FATIGUE_SPEED_REDUCTION if fatigued else 1.0


def calculate_order_time(route: Route, fatigued: bool) -> int:
    """
    Minutes a driver needs to complete a delivery on ``route``.

    ceil(base time x traffic multiplier x fatigue factor)

    Example:
        Medium route with a 60 minute base time, rested driver:
        ceil(60 x 1.2) = 72
    """
    return math.ceil(
        route.base_time_min * route.traffic_multiplier * get_fatigue_factor(fatigued)
    )


def is_order_late(route: Route, fatigued: bool) -> bool:
    """True when the execution time exceeds base time + LATE_BUFFER_MINS."""
    allowed_time = route.base_time_min + config.LATE_BUFFER_MINS
    return calculate_order_time(route, fatigued) > allowed_time
