import json

import pandas as pd
import pytest

from optics_clustering.main import main, parse_arguments, run_clustering_task


@pytest.fixture
def points_csv(tmp_path, two_groups):
    path = tmp_path / "points.csv"
    frame = pd.DataFrame(two_groups, columns=["x", "y"])
    frame["label"] = [0, 0, 0, 0, 1, 1]
    frame.to_csv(path, index=False)
    return path


def test_parse_arguments_defaults():
    args = parse_arguments(["--data_path", "points.csv"])
    assert args.eps is None
    assert args.extract_eps == []
    assert not args.no_plot


def test_run_clustering_task(points_csv, tmp_path):
    results_dir = tmp_path / "results"
    results = run_clustering_task(
        data_path=str(points_csv),
        results_dir=str(results_dir),
        eps=0.5,
        min_samples=2,
        extract_eps=[0.15, 0.9],
        label_column="label",
        plot=False,
    )

    assert set(results) == {"eps_0.5", "eps_0.15"}
    assert results["eps_0.5"]["n_clusters"] == 2
    assert results["eps_0.5"]["ari"] == pytest.approx(1.0)
    assert results["eps_0.15"]["n_outliers"] == 2

    labels = pd.read_csv(results_dir / "labels_eps_0.5.csv")
    assert labels["label"].tolist() == [0, 0, 0, 0, 1, 1]


def test_main_with_config_and_plots(points_csv, tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"optics": {"eps": 0.5, "min_samples": 2}}), encoding="utf-8")
    results_dir = tmp_path / "out"

    main(["--data_path", str(points_csv), "--config", str(config_path),
          "--columns", "x", "y", "--results_dir", str(results_dir)])

    assert (results_dir / "reachability_eps_0.5.png").exists()
    assert (results_dir / "clusters_eps_0.5.png").exists()
    assert (results_dir / "evaluation_eps_0.5.txt").exists()


def test_main_reports_failure(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--data_path", str(tmp_path / "missing.csv"), "--no_plot"])

    assert excinfo.value.code == 1
    assert "执行出错" in capsys.readouterr().out
