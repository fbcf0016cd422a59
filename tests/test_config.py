import json

from fuzzycpt.fuzzy.config import InferenceConfig, load_config, safe_get


def test_defaults_when_file_missing(tmp_path):
    config = load_config(str(tmp_path / "missing.json"))
    assert config == InferenceConfig()
    assert config.null_belief_tolerance == 0.0
    assert load_config(None) == InferenceConfig()


def test_partial_file_keeps_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"null_belief_tolerance": 0.01, "curve_points": 11}))
    config = load_config(str(path))
    assert config.null_belief_tolerance == 0.01
    assert config.curve_points == 11
    assert config.cpt_log_path == InferenceConfig().cpt_log_path


def test_safe_get():
    assert safe_get({"a": 1}, "a", 2) == 1
    assert safe_get({}, "a", 2) == 2


def test_unknown_keys_are_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"truncate_digits": 3, "curve_points": 5}))
    config = load_config(str(path))
    assert config == InferenceConfig(curve_points=5)
    assert not hasattr(config, "truncate_digits")
