"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(slots=True)
class ImprovementResult:
    tour: List[int]
    length: float
    sweeps: int
    converged: bool


@dataclass(slots=True)
class RouteSolution:
    order: List[int]
    point_ids: List[str]
    length: float
    initial_length: float
    sweeps: int
    converged: bool

    @property
    def status(self) -> str:
        return "local_optimum" if self.converged else "budget_exceeded"
