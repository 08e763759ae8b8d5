import numpy as np
import pytest

from optics_clustering import Optics
from optics_clustering.clustering import (
    Manhattan,
    Neighborhood,
    NeighborhoodBuilder,
    build_neighborhoods,
)


def test_neighbors_include_self_and_are_sorted():
    points = np.array([[3.0], [1.0], [0.0], [10.0]])
    neighborhoods = build_neighborhoods(points, eps=2.5)

    assert neighborhoods[0].neighbors.tolist() == [0, 1]
    assert neighborhoods[1].neighbors.tolist() == [0, 1, 2]
    assert neighborhoods[2].neighbors.tolist() == [1, 2]
    assert neighborhoods[3].neighbors.tolist() == [3]


def test_core_distance_is_second_nearest():
    points = np.array([[0.0], [1.0], [3.0]])
    neighborhoods = build_neighborhoods(points, eps=2.5)

    assert [n.core_distance for n in neighborhoods] == pytest.approx([1.0, 1.0, 2.0])


def test_lonely_point_has_zero_core_distance():
    points = np.array([[0.0], [0.5], [10.0]])
    neighborhoods = build_neighborhoods(points, eps=1.0)

    assert len(neighborhoods[2]) == 1
    assert neighborhoods[2].core_distance == 0.0


def test_core_distance_ignores_min_samples():
    points = np.array([[0.0], [1.0], [3.0], [3.5], [9.0]])
    distances = []
    for min_samples in (1, 2, 3, 4):
        model = Optics(eps=2.5, min_samples=min_samples)
        model.fit(points)
        distances.append(model.core_distances_.tolist())

    assert all(d == distances[0] for d in distances)
    assert distances[0] == pytest.approx([1.0, 1.0, 0.5, 0.5, 0.0])


def test_is_core():
    neighborhood = Neighborhood(neighbors=np.array([0, 1, 2]), core_distance=0.1)
    assert neighborhood.is_core(3)
    assert not neighborhood.is_core(4)


def test_metric_changes_radius_query():
    points = np.array([[0.0, 0.0], [1.0, 1.0]])

    euclidean = build_neighborhoods(points, eps=1.5)
    manhattan = build_neighborhoods(points, eps=1.5, metric=Manhattan())

    assert len(euclidean[0]) == 2
    assert euclidean[0].core_distance == pytest.approx(np.sqrt(2.0))
    assert len(manhattan[0]) == 1
    assert manhattan[0].core_distance == 0.0


def test_chunked_parallel_build_keeps_index_order():
    rng = np.random.default_rng(3)
    points = rng.normal(size=(101, 3))

    serial = NeighborhoodBuilder(0.9).build(points)
    parallel = NeighborhoodBuilder(0.9, n_jobs=3, chunk_size=7).build(points)

    assert len(serial) == len(parallel) == 101
    for left, right in zip(serial, parallel):
        np.testing.assert_array_equal(left.neighbors, right.neighbors)
        assert left.core_distance == right.core_distance


def test_neighbor_relation_is_symmetric():
    rng = np.random.default_rng(11)
    points = rng.uniform(size=(50, 2))
    neighborhoods = build_neighborhoods(points, eps=0.2)

    for idx, neighborhood in enumerate(neighborhoods):
        for other in neighborhood.neighbors:
            assert idx in neighborhoods[other].neighbors


def test_empty_build():
    assert NeighborhoodBuilder(0.5).build(np.empty((0, 2))) == []


def test_float32_core_distance():
    points = np.array([[0.0], [0.25]], dtype=np.float32)
    neighborhoods = build_neighborhoods(points, eps=0.5)
    assert neighborhoods[0].core_distance.dtype == np.float32
