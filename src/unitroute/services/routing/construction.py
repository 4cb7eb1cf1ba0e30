"""Nearest-neighbour tour construction."""

from __future__ import annotations

import numpy as np


def nearest_neighbor_tour(matrix: np.ndarray) -> list[int]:
    """Greedy walk from position 0 to the closest unvisited position until all are visited.

    Ties on equal cost go to the lowest position index.
    """

    count = len(matrix)
    if count == 0:
        raise ValueError("Cannot build a tour from an empty distance matrix.")

    visited = np.zeros(count, dtype=bool)
    visited[0] = True
    tour = [0]
    for _ in range(1, count):
        row = np.where(visited, np.inf, matrix[tour[-1]])
        # argmin returns the first minimal entry
        nearest = int(np.argmin(row))
        tour.append(nearest)
        visited[nearest] = True
    return tour
