import json

from optics_clustering import Optics
from optics_clustering.clustering import Manhattan
from optics_clustering.config import Config, get_default_config, reset_config


def test_singleton():
    assert Config() is get_default_config()


def test_reset_config():
    config = get_default_config()
    config.optics.eps = 3.0
    reset_config()

    assert get_default_config().optics.eps == 0.5


def test_update_from_dict():
    config = get_default_config()
    config.update_from_dict({
        "optics": {"eps": 0.8, "min_samples": 3, "unknown": 1},
        "plot": {"figure_size": [4, 3]},
    })

    assert config.optics.eps == 0.8
    assert config.optics.min_samples == 3
    assert config.plot.figure_size == (4, 3)
    assert not hasattr(config.optics, "unknown")


def test_save_and_load(tmp_path):
    path = tmp_path / "config.json"
    config = get_default_config()
    config.optics.eps = 1.25
    config.data.label_column = "label"
    config.save_config(str(path))

    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["optics"]["eps"] == 1.25

    reset_config()
    loaded = get_default_config()
    loaded.load_config(str(path))

    assert loaded.optics.eps == 1.25
    assert loaded.data.label_column == "label"
    assert loaded.plot.figure_size == (12, 6)


def test_metric_object_saved_by_name():
    config = get_default_config()
    config.optics.metric = Manhattan()
    assert config.to_dict()["optics"]["metric"] == "manhattan"


def test_model_copies_shared_config():
    config = get_default_config()
    model = Optics(config.optics)
    config.optics.min_samples = 42

    assert model.min_samples == 5
