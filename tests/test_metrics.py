import numpy as np
import pytest

from optics_clustering.utils import (
    EvaluationMetrics,
    calculate_ari,
    calculate_nmi,
    clusters_to_labels,
    labels_to_clusters,
    summarize_clustering,
)


def test_clusters_to_labels():
    labels = clusters_to_labels({0: [0, 1], 1: [3]}, [2], 5)
    assert labels.tolist() == [0, 0, -1, 1, -2]


def test_labels_to_clusters_ignores_noise():
    clusters = labels_to_clusters(np.array([1, -1, 0, 1, -2]))
    assert clusters == {1: [0, 3], 0: [2]}


def test_perfect_agreement():
    predictions = np.array([0, 0, 1, 1, -1])
    actuals = np.array([5, 5, 7, 7, 7])

    assert calculate_ari(predictions, actuals) == pytest.approx(1.0)
    assert calculate_nmi(predictions, actuals) == pytest.approx(1.0)


def test_too_few_valid_points():
    assert calculate_ari(np.array([-1, -1, 0]), np.array([0, 1, 0])) == 0.0
    assert calculate_nmi(np.array([-1, -1, 0]), np.array([0, 1, 0])) == 0.0


def test_summarize_clustering():
    summary = summarize_clustering({0: [0, 1, 2], 1: [4]}, [3], 6)

    assert summary["n_clusters"] == 2
    assert summary["cluster_sizes"] == [3, 1]
    assert summary["n_outliers"] == 1
    assert summary["n_unvisited"] == 1
    assert summary["largest_cluster"] == 3
    assert summary["outlier_ratio"] == pytest.approx(1 / 6)


def test_summarize_empty():
    summary = summarize_clustering({}, [], 0)
    assert summary["n_clusters"] == 0
    assert summary["outlier_ratio"] == 0.0


def test_evaluation_with_ground_truth(capsys):
    evaluator = EvaluationMetrics()
    results = evaluator.evaluate({0: [0, 1], 1: [2, 3]}, [], 4, ground_truth=np.array([1, 1, 2, 2]))

    assert results["ari"] == pytest.approx(1.0)
    assert results["nmi"] == pytest.approx(1.0)

    evaluator.print_results(results)
    assert "n_clusters: 2" in capsys.readouterr().out


def test_evaluation_without_ground_truth():
    results = EvaluationMetrics().evaluate({0: [0]}, [1], 2)
    assert "ari" not in results
    assert results["n_outliers"] == 1
