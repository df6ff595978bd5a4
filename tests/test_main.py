import pytest

from main import apply_overrides, load_config, parse_args


def test_load_config(tmp_path):
    path = tmp_path / "game.yaml"
    path.write_text("hand_size: 2\npolicy: random\n")
    assert load_config(path) == {"hand_size": 2, "policy": "random"}


def test_load_config_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_load_empty_config(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == {}


def test_cli_overrides_config():
    args = parse_args(["--mode", "simulate", "--episodes", "5", "--seed", "3"])
    config = apply_overrides({"episodes": 100, "policy": "greedy", "seed": None}, args)
    assert config == {"episodes": 5, "policy": "greedy", "seed": 3}


def test_shipped_config_loads():
    config = load_config("config/game.yaml")
    assert config["board_size"] == 6
    assert config["hand_size"] == 3
