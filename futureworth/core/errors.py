"""Error types raised by the simulation core."""

from __future__ import annotations

from typing import List


class SimulationError(Exception):
    """Base class for simulation core errors."""


class InvalidInputError(SimulationError, ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors
