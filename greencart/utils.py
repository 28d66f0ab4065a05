# greencart-simulation/greencart/utils.py
"""
Utility functions for the GreenCart Delivery Simulation.

Provides wall-clock time conversions and the rounding rules used when
reporting KPIs.
"""

from __future__ import annotations

import math
import re
from typing import Union

TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])$")


def is_valid_time(value: str) -> bool:
    """Return True if ``value`` is an "HH:MM" wall-clock time (leading zero optional)."""
    return isinstance(value, str) and TIME_PATTERN.match(value) is not None


def time_to_minutes(value: str) -> int:
    """
    Convert an "HH:MM" string to minutes since midnight.

    Args:
        value: Time string such as "09:00" or "9:00"

    Returns:
        Total minutes since midnight

    Raises:
        ValueError: If the string is not a valid HH:MM time

    Example:
        >>> time_to_minutes("12:30")
        750
    """
    match = TIME_PATTERN.match(value) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"Invalid time (expected HH:MM): {value!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


def minutes_to_time(minutes: int) -> str:
    """
    Convert minutes since midnight to an "HH:MM" string.

    Minutes past midnight wrap around to the next day.

    Example:
        >>> minutes_to_time(750)
        '12:30'
    """
    hours = (minutes // 60) % 24
    mins = minutes % 60
    return f"{hours:02d}:{mins:02d}"


def round_half_up(value: float, ndigits: int = 0) -> Union[int, float]:
    """
    Round with halves going up, the way KPI reports expect.

    Python's built-in ``round`` rounds halves to even, which would turn a
    profit of 2.5 into 2. With ``ndigits == 0`` an int is returned.
    """
    factor = 10 ** ndigits
    rounded = math.floor(value * factor + 0.5)
    if ndigits == 0:
        return int(rounded)
    return rounded / factor


def format_hours(hours: float) -> str:
    """Format a duration in hours as "7h 12m"."""
    total_minutes = int(round(hours * 60))
    return f"{total_minutes // 60}h {total_minutes % 60:02d}m"
