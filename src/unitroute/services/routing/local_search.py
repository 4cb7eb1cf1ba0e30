"""2-opt local search over a fixed-start tour.

Moves reverse a contiguous segment ``tour[i..k]`` with ``1 <= i < k <= n - 2``, so the
start and the last visited position never move. Each sweep scans ``(i, k)`` pairs in
ascending order and stops at the first improving move; the move is applied and the next
sweep starts again from the beginning. The search ends when a sweep completes without an
improving move, when ``max_iterations`` sweeps have run, or when the optional time budget
is spent. Running out of budget is not an error: the best tour found is returned with
``converged=False``.
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Sequence

import numpy as np

from .models import ImprovementResult

IMPROVEMENT_TOLERANCE = 1e-9

logger = logging.getLogger(__name__)


def tour_length(tour: Sequence[int], matrix, return_to_start: bool = True) -> float:
    """Sum of consecutive edge costs, plus the closing edge back to ``tour[0]`` if requested."""

    if not tour:
        return 0.0
    total = 0.0
    for current, following in zip(tour, tour[1:]):
        total += matrix[current][following]
    if return_to_start:
        total += matrix[tour[-1]][tour[0]]
    return float(total)


def _first_improving_move(
    tour: list[int],
    cost: list[list[float]],
    current_length: float,
    deadline: Optional[float],
) -> tuple[Optional[tuple[int, int]], bool]:
    """Scan one sweep. Returns ``(move, completed)``; ``completed`` is False on timeout."""

    count = len(tour)
    for i in range(1, count - 2):
        if deadline is not None and time.monotonic() >= deadline:
            return None, False
        before = tour[i - 1]
        first = tour[i]
        edge_before = cost[before][first]
        for k in range(i + 1, count - 1):
            last = tour[k]
            after = tour[k + 1]
            # symmetric costs: only the two boundary edges change
            delta = cost[before][last] + cost[first][after] - edge_before - cost[last][after]
            if current_length + delta + IMPROVEMENT_TOLERANCE < current_length:
                return (i, k), True
    return None, True


def two_opt(
    tour: Sequence[int],
    matrix: np.ndarray,
    max_iterations: int = 500,
    return_to_start: bool = True,
    time_limit_seconds: Optional[float] = None,
) -> ImprovementResult:
    """Improve ``tour`` with first-improvement 2-opt. The input sequence is left untouched."""

    if len(matrix) == 0 or not tour:
        raise ValueError("Cannot improve an empty tour.")
    if len(tour) != len(matrix):
        raise ValueError(f"Tour size mismatch: tour={len(tour)}, matrix={len(matrix)}")
    if tour[0] != 0:
        raise ValueError("Tour must start at position 0.")

    cost = matrix.tolist() if isinstance(matrix, np.ndarray) else [list(row) for row in matrix]
    best = list(tour)
    best_length = tour_length(best, cost, return_to_start)
    deadline = time.monotonic() + time_limit_seconds if time_limit_seconds is not None else None

    sweeps = 0
    converged = False
    while sweeps < max_iterations:
        if deadline is not None and time.monotonic() >= deadline:
            break
        sweeps += 1
        move, completed = _first_improving_move(best, cost, best_length, deadline)
        if move is None:
            converged = completed
            break
        i, k = move
        best[i : k + 1] = best[i : k + 1][::-1]
        best_length = tour_length(best, cost, return_to_start)

    if not converged:
        logger.debug(f"2-opt stopped before convergence after {sweeps} sweeps (length={best_length:.6f})")
    return ImprovementResult(tour=best, length=best_length, sweeps=sweeps, converged=converged)
