"""Planar distance model with a fixed cost for changing floors."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from ...models.domain import Point


def point_cost(a: Point, b: Point, floor_penalty: float) -> float:
    """Euclidean distance between two points plus ``floor_penalty`` when their floors differ."""

    distance = math.hypot(a.x - b.x, a.y - b.y)
    if a.floor != b.floor:
        distance += floor_penalty
    return distance


def build_distance_matrix(points: Sequence[Point], floor_penalty: float) -> np.ndarray:
    """Return the read-only n x n cost matrix for ``points`` indexed by position.

    The matrix is symmetric with a zero diagonal. Entries match :func:`point_cost`.
    """

    count = len(points)
    if count == 0:
        matrix = np.zeros((0, 0), dtype=float)
        matrix.setflags(write=False)
        return matrix

    xs = np.array([point.x for point in points], dtype=float)
    ys = np.array([point.y for point in points], dtype=float)
    floors = np.array([point.floor for point in points], dtype=np.int64)

    matrix = np.hypot(xs[:, None] - xs[None, :], ys[:, None] - ys[None, :])
    matrix += np.where(floors[:, None] != floors[None, :], float(floor_penalty), 0.0)
    np.fill_diagonal(matrix, 0.0)
    matrix.setflags(write=False)
    return matrix
