"""Route solver: nearest-neighbour construction refined by 2-opt."""

from __future__ import annotations

import logging
import math
from typing import Sequence

from ...models.domain import Point, SolveConfig
from .construction import nearest_neighbor_tour
from .distance import build_distance_matrix
from .errors import ConfigurationError, InvalidInputError
from .local_search import tour_length, two_opt
from .models import RouteSolution

logger = logging.getLogger(__name__)


def validate_config(config: SolveConfig) -> None:
    if not math.isfinite(config.floor_penalty) or config.floor_penalty < 0:
        raise ConfigurationError(f"floor_penalty must be a finite non-negative number, got {config.floor_penalty}.")
    if config.max_iterations < 1:
        raise ConfigurationError(f"max_iterations must be a positive integer, got {config.max_iterations}.")
    if config.time_limit_seconds is not None and (
        not math.isfinite(config.time_limit_seconds) or config.time_limit_seconds <= 0
    ):
        raise ConfigurationError(
            f"time_limit_seconds must be a finite positive number when set, got {config.time_limit_seconds}."
        )


def solve_route(points: Sequence[Point], config: SolveConfig | None = None) -> RouteSolution:
    """Order ``points`` into a short visiting route starting at ``points[0]``.

    Args:
        points: Distinct points; the first one is the fixed start.
        config: Solver parameters (defaults to :class:`SolveConfig`).

    Returns:
        RouteSolution with the visiting order as positions into ``points``, the matching
        identifiers and the total length (including the closing edge when
        ``config.return_to_start``).
    """
    config = config or SolveConfig()
    validate_config(config)
    if not points:
        raise InvalidInputError("At least one point is required to build a route.")

    matrix = build_distance_matrix(points, config.floor_penalty)
    initial = nearest_neighbor_tour(matrix)
    initial_length = tour_length(initial, matrix, config.return_to_start)
    improved = two_opt(
        initial,
        matrix,
        max_iterations=config.max_iterations,
        return_to_start=config.return_to_start,
        time_limit_seconds=config.time_limit_seconds,
    )

    logger.info(
        f"Solved route over {len(points)} points: initial={initial_length:.6f}, "
        f"final={improved.length:.6f}, sweeps={improved.sweeps}"
    )
    if not improved.converged:
        logger.warning(
            f"Route improvement budget exhausted after {improved.sweeps} sweeps; "
            f"returning best tour found (length={improved.length:.6f}), not guaranteed 2-opt optimal."
        )

    return RouteSolution(
        order=improved.tour,
        point_ids=[points[index].id for index in improved.tour],
        length=improved.length,
        initial_length=initial_length,
        sweeps=improved.sweeps,
        converged=improved.converged,
    )
