# greencart-simulation/greencart/exceptions.py
"""Errors raised by the GreenCart simulation."""

from __future__ import annotations

from typing import List


class SimulationError(Exception):
    """Base class for failures that abort a simulation run."""


class InsufficientDriversError(SimulationError):
    """Fewer available drivers than the run requested. No partial plan is produced."""

    def __init__(self, available: int, requested: int) -> None:
        self.available = available
        self.requested = requested
        super().__init__(
            f"Only {available} drivers available, but {requested} requested"
        )


class InvalidSimulationInput(ValueError):
    """Request failed shape validation before reaching the engine."""

    def __init__(self, errors: List[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))
