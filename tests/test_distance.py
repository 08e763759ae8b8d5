import numpy as np
import pytest

from optics_clustering.clustering import (
    CallableMetric,
    Chebyshev,
    Euclidean,
    Manhattan,
    Minkowski,
    available_metrics,
    get_metric,
)

A = np.array([0.0, 0.0])
B = np.array([3.0, 4.0])
POINTS = np.array([[3.0, 4.0], [1.0, 0.0], [-2.0, 2.0]])


@pytest.mark.parametrize("metric, expected", [
    (Euclidean(), 5.0),
    (Manhattan(), 7.0),
    (Chebyshev(), 4.0),
    (Minkowski(p=1), 7.0),
    (Minkowski(p=2), 5.0),
])
def test_distance(metric, expected):
    assert metric.distance(A, B) == pytest.approx(expected)
    assert metric.distance(B, A) == pytest.approx(expected)


@pytest.mark.parametrize("metric", [Euclidean(), Manhattan(), Chebyshev(), Minkowski(p=3)])
def test_vectorized_distances_match_scalar(metric):
    expected = [metric.distance(A, p) for p in POINTS]
    assert metric.distances(A, POINTS) == pytest.approx(expected)


def test_callable_metric_default_distances():
    metric = CallableMetric(lambda a, b: float(np.abs(a - b).sum()), name="l1")
    assert metric.distances(A, POINTS) == pytest.approx([7.0, 1.0, 4.0])
    assert callable(metric.ball_tree_params()["metric"])


def test_get_metric_resolution():
    assert isinstance(get_metric(None), Euclidean)
    assert isinstance(get_metric("EUCLIDEAN"), Euclidean)
    assert isinstance(get_metric("cityblock"), Manhattan)

    instance = Chebyshev()
    assert get_metric(instance) is instance

    def hamming(a, b):
        return float(np.sum(a != b))

    wrapped = get_metric(hamming)
    assert isinstance(wrapped, CallableMetric)
    assert wrapped.name == "hamming"


def test_unknown_metric():
    with pytest.raises(ValueError):
        get_metric("cosine-ish")
    with pytest.raises(ValueError):
        get_metric(42)


def test_minkowski_rejects_small_p():
    with pytest.raises(ValueError):
        Minkowski(p=0.5)


def test_ball_tree_params():
    assert Euclidean().ball_tree_params() == {"metric": "euclidean"}
    assert Minkowski(p=3).ball_tree_params() == {"metric": "minkowski", "p": 3}
    assert "euclidean" in available_metrics()
