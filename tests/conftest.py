import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from optics_clustering.config import reset_config


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def two_groups():
    return np.array([
        [1.0, 2.0],
        [1.1, 2.2],
        [0.9, 1.9],
        [1.0, 2.1],
        [-2.0, 3.0],
        [-2.2, 3.1],
    ])


@pytest.fixture
def line_points():
    return np.array([[0.0], [2.0], [3.0], [4.0], [6.0], [8.0], [10.0]])


@pytest.fixture
def blobs():
    rng = np.random.default_rng(7)
    centers = np.array([[0.0, 0.0], [5.0, 5.0], [0.0, 6.0]])
    groups = [center + rng.normal(scale=0.4, size=(60, 2)) for center in centers]
    noise = rng.uniform(-3.0, 9.0, size=(15, 2))
    return np.vstack(groups + [noise])
