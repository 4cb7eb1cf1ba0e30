"""Routing orchestration service."""

from __future__ import annotations

import logging
from typing import Sequence

from ...config import settings
from ...data.maps_repository import find_missing, load_map, units_by_label
from ...models.domain import MapRecord, Point, SolveConfig
from ...schemas.routing import (
    PathPointModel,
    RouteRequest,
    RouteResponse,
    SolveRequest,
    SolveResponse,
)
from .errors import InvalidInputError, MissingPointsError
from .models import RouteSolution
from .solver import solve_route


def _dedupe(labels: Sequence[str]) -> list[str]:
    return list(dict.fromkeys(label.strip() for label in labels if label and label.strip()))


def _resolve_start(record: MapRecord, requested: list[str], start_unit: str | None) -> str:
    if start_unit:
        start_unit = start_unit.strip()
        if start_unit in units_by_label(record):
            return start_unit
        logging.warning(
            f"Start unit '{start_unit}' not found on map '{record.map_id}', starting from '{requested[0]}'"
        )
    return requested[0]


def build_route_points(record: MapRecord, requested: Sequence[str], start_unit: str | None = None) -> list[Point]:
    """Resolve requested labels through the map's units, start first.

    Raises:
        InvalidInputError: nothing was requested.
        MissingPointsError: some labels are not on the map.
    """
    labels = _dedupe(requested)
    if not labels:
        raise InvalidInputError("At least one unit is required to build a route.")

    missing = find_missing(record, labels)
    if missing:
        raise MissingPointsError(missing)

    start = _resolve_start(record, labels, start_unit)
    ordered = [start] + [label for label in labels if label != start]
    known = units_by_label(record)
    return [
        Point(
            id=label,
            x=float(known[label]["x"]),
            y=float(known[label]["y"]),
            floor=int(known[label].get("floor") or 0),
        )
        for label in ordered
    ]


def _solution_metadata(solution: RouteSolution, config: SolveConfig) -> dict:
    return {
        "status": solution.status,
        "converged": solution.converged,
        "sweeps": solution.sweeps,
        "initial_length": solution.initial_length,
        "floor_penalty": config.floor_penalty,
        "return_to_start": config.return_to_start,
        "max_iterations": config.max_iterations,
    }


def plan_route(map_id: str, payload: RouteRequest) -> RouteResponse:
    record = load_map(map_id)
    points = build_route_points(record, payload.units, payload.start_unit)

    config = SolveConfig(
        floor_penalty=payload.floor_penalty if payload.floor_penalty is not None else settings.route_floor_penalty,
        return_to_start=payload.return_to_start,
        max_iterations=payload.max_iterations if payload.max_iterations is not None else settings.max_iterations,
        time_limit_seconds=settings.solver_time_limit_seconds,
    )
    logging.info(f"Planning route over {len(points)} units on map '{map_id}' starting at '{points[0].id}'")
    solution = solve_route(points, config)

    path = [
        PathPointModel(id=points[index].id, x=points[index].x, y=points[index].y, floor=points[index].floor)
        for index in solution.order
    ]
    return RouteResponse(
        map_id=record.map_id,
        route=solution.point_ids,
        length=solution.length,
        path=path,
        metadata=_solution_metadata(solution, config),
    )


def solve_points(payload: SolveRequest) -> SolveResponse:
    """Run the solver on caller-supplied points (no registry lookup)."""
    points = [Point(id=item.id, x=item.x, y=item.y, floor=item.floor) for item in payload.points]
    config = SolveConfig(
        floor_penalty=payload.floor_penalty if payload.floor_penalty is not None else settings.floor_penalty,
        return_to_start=payload.return_to_start if payload.return_to_start is not None else settings.return_to_start,
        max_iterations=payload.max_iterations if payload.max_iterations is not None else settings.max_iterations,
        time_limit_seconds=settings.solver_time_limit_seconds,
    )
    solution = solve_route(points, config)
    return SolveResponse(
        order=solution.order,
        route=solution.point_ids,
        length=solution.length,
        metadata=_solution_metadata(solution, config),
    )
