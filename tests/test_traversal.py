import numpy as np
import pytest

from optics_clustering.clustering import (
    ReachabilityTraversal,
    build_neighborhoods,
    compute_ordering,
    is_defined,
)


def _run(points, eps, min_samples):
    points = np.asarray(points, dtype=float)
    neighborhoods = build_neighborhoods(points, eps)
    return compute_ordering(points, neighborhoods, min_samples)


@pytest.mark.parametrize("value, expected", [
    (0.5, True),
    (-0.5, True),
    (0.0, False),
    (float("nan"), False),
    (float("inf"), False),
    (1e-310, False),
])
def test_is_defined(value, expected):
    assert is_defined(value) is expected


def test_is_defined_uses_dtype_range():
    assert is_defined(1e-40, np.float64)
    assert not is_defined(np.float32(1e-40), np.float32)


def test_order_and_reachability_on_a_line():
    ordered, reachability = _run([[0.0], [2.0], [3.0], [4.0], [6.0], [8.0], [10.0]], 1.01, 1)

    assert ordered.tolist() == [0, 1, 2, 3, 4, 5, 6]
    assert np.isnan(reachability[[0, 1, 4, 5, 6]]).all()
    assert reachability[2] == pytest.approx(1.0)
    assert reachability[3] == pytest.approx(1.0)


def test_smaller_candidate_overwrites_reachability():
    ordered, reachability = _run([[0.0], [1.0], [1.9]], 2.0, 2)

    assert ordered.tolist() == [0, 1, 2]
    assert reachability[1] == pytest.approx(1.0)
    assert reachability[2] == pytest.approx(0.9)


def test_non_core_points_are_visited_but_not_expanded():
    ordered, reachability = _run([[0.0], [1.0], [2.0]], 1.1, 3)

    assert ordered.tolist() == [1, 2, 0]
    assert np.isnan(reachability[1])
    assert reachability[0] == pytest.approx(1.0)
    assert reachability[2] == pytest.approx(1.0)


def test_no_core_points_means_empty_order():
    ordered, reachability = _run([[0.0], [1.0], [5.0]], 1.2, 3)

    assert len(ordered) == 0
    assert np.isnan(reachability).all()


def test_each_point_visited_once():
    rng = np.random.default_rng(5)
    points = rng.uniform(size=(200, 2))
    ordered, _ = _run(points, 0.1, 3)

    assert len(ordered) == len(set(ordered.tolist()))


def test_reachability_bounded_by_core_distance():
    rng = np.random.default_rng(9)
    points = rng.uniform(size=(80, 2))
    neighborhoods = build_neighborhoods(points, 0.2)
    traversal = ReachabilityTraversal(points, neighborhoods, 3)
    ordered, reachability = traversal.run()

    core = np.array([n.core_distance for n in neighborhoods])
    defined = [idx for idx in ordered if is_defined(reachability[idx])]
    assert defined
    assert all(reachability[idx] >= core.min() for idx in defined)
    assert all(reachability[idx] <= 0.2 + 1e-12 for idx in defined)
    assert traversal.visited[ordered].all()
