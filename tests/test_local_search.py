import math
from types import SimpleNamespace

import numpy as np
import pytest

from unitroute.models.domain import Point
from unitroute.services.routing import local_search
from unitroute.services.routing.distance import build_distance_matrix
from unitroute.services.routing.local_search import tour_length, two_opt


def _unit_square() -> np.ndarray:
    points = [
        Point("A", 0.0, 0.0),
        Point("B", 1.0, 0.0),
        Point("C", 1.0, 1.0),
        Point("D", 0.0, 1.0),
    ]
    return build_distance_matrix(points, floor_penalty=20.0)


def test_tour_length_open_and_closed():
    matrix = _unit_square()

    assert tour_length([0, 1, 2, 3], matrix, return_to_start=True) == pytest.approx(4.0)
    assert tour_length([0, 1, 2, 3], matrix, return_to_start=False) == pytest.approx(3.0)
    assert tour_length([0, 2, 1, 3], matrix, return_to_start=True) == pytest.approx(2.0 + 2.0 * math.sqrt(2.0))


def test_two_opt_removes_crossing():
    matrix = _unit_square()
    crossing = [0, 2, 1, 3]

    result = two_opt(crossing, matrix, max_iterations=500, return_to_start=True)

    assert result.tour == [0, 1, 2, 3]
    assert result.length == pytest.approx(4.0)
    assert result.converged is True
    assert result.sweeps == 2
    assert crossing == [0, 2, 1, 3], "input tour must not be mutated"


def test_two_opt_stops_at_iteration_cap():
    result = two_opt([0, 2, 1, 3], _unit_square(), max_iterations=1, return_to_start=True)

    assert result.sweeps == 1
    assert result.converged is False
    assert result.length == pytest.approx(4.0)


def test_two_opt_is_idempotent_on_its_output():
    rng = np.random.default_rng(11)
    points = [Point(f"P{i}", float(x), float(y)) for i, (x, y) in enumerate(rng.uniform(0, 100, (14, 2)))]
    matrix = build_distance_matrix(points, floor_penalty=20.0)

    first = two_opt(list(range(len(points))), matrix, max_iterations=10_000)
    second = two_opt(first.tour, matrix, max_iterations=10_000)

    assert first.converged
    assert second.tour == first.tour
    assert second.length == first.length
    assert second.sweeps == 1


def test_two_opt_never_moves_first_or_last_position():
    rng = np.random.default_rng(3)
    points = [Point(f"P{i}", float(x), float(y)) for i, (x, y) in enumerate(rng.uniform(0, 10, (9, 2)))]
    matrix = build_distance_matrix(points, floor_penalty=20.0)
    tour = [0, 8, 3, 6, 1, 7, 2, 5, 4]

    result = two_opt(tour, matrix, return_to_start=False)

    assert result.tour[0] == 0
    assert result.tour[-1] == 4
    assert sorted(result.tour) == list(range(9))
    assert result.length <= tour_length(tour, matrix, return_to_start=False)


def test_two_opt_has_no_moves_below_four_points():
    points = [Point("A", 0.0, 0.0), Point("B", 5.0, 0.0), Point("C", 1.0, 0.0)]
    matrix = build_distance_matrix(points, floor_penalty=20.0)

    result = two_opt([0, 1, 2], matrix, return_to_start=False)

    assert result.tour == [0, 1, 2]
    assert result.converged is True
    assert result.sweeps == 1


def test_two_opt_honours_time_budget(monkeypatch):
    ticks = iter([0.0, 5.0, 5.0, 5.0])
    monkeypatch.setattr(local_search, "time", SimpleNamespace(monotonic=lambda: next(ticks)))

    result = two_opt([0, 2, 1, 3], _unit_square(), time_limit_seconds=1.0)

    assert result.sweeps == 0
    assert result.converged is False
    assert result.tour == [0, 2, 1, 3]


def test_two_opt_rejects_empty_and_mismatched_input():
    with pytest.raises(ValueError):
        two_opt([], np.zeros((0, 0)))
    with pytest.raises(ValueError):
        two_opt([0, 1], _unit_square())
    with pytest.raises(ValueError):
        two_opt([1, 0, 2, 3], _unit_square())


def _uniform_matrix(size: int, weight: float = 10.0) -> np.ndarray:
    matrix = np.full((size, size), weight)
    np.fill_diagonal(matrix, 0.0)
    return matrix


def _two_gain_matrix() -> np.ndarray:
    # (1, 2) gains 1 and is scanned first; (2, 4) gains 5.
    matrix = _uniform_matrix(6)
    matrix[0, 2] = matrix[2, 0] = 9.0
    matrix[2, 5] = matrix[5, 2] = 5.0
    return matrix


def test_two_opt_applies_first_improving_move_not_best():
    result = two_opt([0, 1, 2, 3, 4, 5], _two_gain_matrix(), max_iterations=1, return_to_start=False)

    assert result.tour == [0, 2, 1, 3, 4, 5]
    assert result.length == pytest.approx(49.0)
    assert result.sweeps == 1
    assert result.converged is False


def test_two_opt_restarts_scan_after_each_move():
    result = two_opt([0, 1, 2, 3, 4, 5], _two_gain_matrix(), return_to_start=False)

    assert result.tour == [0, 4, 3, 1, 2, 5]
    assert result.length == pytest.approx(45.0)
    assert result.sweeps == 3
    assert result.converged is True


def test_two_opt_ignores_gains_within_tolerance():
    matrix = _uniform_matrix(4)
    matrix[0, 2] = matrix[2, 0] = 10.0 - 5e-10

    result = two_opt([0, 1, 2, 3], matrix, return_to_start=True)

    assert result.tour == [0, 1, 2, 3]
    assert result.sweeps == 1
    assert result.converged is True


def test_two_opt_accepts_gains_above_tolerance():
    matrix = _uniform_matrix(4)
    matrix[0, 2] = matrix[2, 0] = 10.0 - 1e-6

    result = two_opt([0, 1, 2, 3], matrix, return_to_start=True)

    assert result.tour == [0, 2, 1, 3]
    assert result.sweeps == 2
    assert result.converged is True
