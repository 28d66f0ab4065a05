# greencart-simulation/greencart/validation.py
"""Request validation, run before a simulation reaches the engine."""

from __future__ import annotations

from typing import Any, Dict, List

from . import config, utils
from .exceptions import InvalidSimulationInput
from .models import SimulationInputs


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_simulation_inputs(data: Dict[str, Any]) -> SimulationInputs:
    """
    Check a raw request and build SimulationInputs from it.

    Expected keys: numberOfDrivers (positive int), startTime ("HH:MM"),
    maxHoursPerDriver (number in (0, 24]).

    Raises:
        InvalidSimulationInput: Listing every problem found
    """
    errors: List[str] = []

    drivers = data.get("numberOfDrivers")
    if not isinstance(drivers, int) or isinstance(drivers, bool) or drivers < 1:
        errors.append("Number of drivers must be a positive integer")

    start_time = data.get("startTime")
    if not utils.is_valid_time(start_time):
        errors.append("Start time must be in HH:MM format")

    max_hours = data.get("maxHoursPerDriver")
    if not _is_number(max_hours) or not 0 < max_hours <= config.MAX_HOURS_LIMIT:
        errors.append(f"Max hours per driver must be greater than 0 and at most {config.MAX_HOURS_LIMIT:g}")

    if errors:
        raise InvalidSimulationInput(errors)

    return SimulationInputs(
        number_of_drivers=drivers,
        start_time=start_time,
        max_hours_per_driver=float(max_hours),
    )
