# greencart-simulation/greencart/config.py
"""
Configuration parameters for the GreenCart Delivery Simulation.

This module centralizes all business rules and tunable parameters:
- Profit rules (penalties, bonuses, fuel rates)
- Timing rules (traffic multipliers, fatigue, lateness buffer)
- Scoring weights for the driver-order assignment

All parameters are documented with their purpose and typical value ranges.
"""

from typing import Dict, Final

# =============================================================================
# PROFIT RULES
# =============================================================================

LATE_DELIVERY_PENALTY: Final[float] = 50.0
"""Flat penalty (Rs) subtracted from an order's profit when it is delivered late."""

HIGH_VALUE_THRESHOLD_RS: Final[float] = 1000.0
"""Orders strictly above this value are treated as high-value."""

HIGH_VALUE_BONUS_RATE: Final[float] = 0.1
"""Bonus (fraction of order value) for high-value orders delivered on time."""

BASE_FUEL_COST_PER_KM: Final[float] = 5.0
"""Base fuel cost in Rs per km driven."""

HIGH_TRAFFIC_SURCHARGE_PER_KM: Final[float] = 2.0
"""Extra fuel cost in Rs per km on High traffic routes."""

# =============================================================================
# TIMING RULES
# =============================================================================

TRAFFIC_MULTIPLIERS: Final[Dict[str, float]] = {
    "Low": 1.0,
    "Medium": 1.2,
    "High": 1.5,
}
"""Travel time multiplier applied to a route's base time, per traffic tier."""

FATIGUE_SPEED_REDUCTION: Final[float] = 0.3
"""Fatigued drivers take 30% longer on every route."""

FATIGUE_HOURS_THRESHOLD: Final[float] = 8.0
"""A driver who worked more than this many hours on the most recent day is fatigued."""

FATIGUE_LEVEL_WHEN_TIRED: Final[int] = 30
"""Fatigue level (0-100) recorded for fatigued drivers when seeding data."""

LATE_BUFFER_MINS: Final[int] = 10
"""Grace period over a route's base time before a delivery counts as late."""

PAST_WEEK_DAYS: Final[int] = 7
"""Length of every driver's hours history."""

# =============================================================================
# SCORING WEIGHTS
# =============================================================================
# These weights determine how desirable a driver is for a given order.
# Higher score = better candidate.

BASE_SCORE: float = 100.0
"""Starting score for every candidate pairing."""

FATIGUE_SCORE_PENALTY: float = 30.0
"""Penalty for assigning work to a fatigued driver."""

WORKLOAD_PENALTY_PER_HOUR: float = 2.0
"""
Penalty per hour already committed to the driver in this run.
Spreads work across the fleet instead of loading the first driver.
"""

HIGH_VALUE_SCORE_BONUS: float = 20.0
"""Bonus for high-value orders."""

TRAFFIC_SCORE_PENALTIES: Dict[str, float] = {
    "Low": 0.0,
    "Medium": 5.0,
    "High": 10.0,
}
"""Penalty for congested routes, per traffic tier."""

# =============================================================================
# SIMULATION DEFAULTS
# =============================================================================

DEFAULT_NUMBER_OF_DRIVERS: int = 5
"""Drivers requested when the caller does not say otherwise."""

DEFAULT_START_TIME: str = "09:00"
"""Default shift start (HH:MM)."""

DEFAULT_MAX_HOURS_PER_DRIVER: float = 8.0
"""Default per-driver hour cap for a single run."""

MAX_HOURS_LIMIT: Final[float] = 24.0
"""Upper bound accepted for the per-driver hour cap."""

# =============================================================================
# STORAGE
# =============================================================================

DATA_DIR: str = "data"
"""Directory holding drivers.csv, routes.csv and orders.csv."""

RESULTS_DIR: str = "results"
"""Directory where simulation runs are persisted as JSON."""

HISTORY_PAGE_SIZE: int = 10
"""Default page size for the simulation history."""
