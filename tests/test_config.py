from pathlab.app.config import (
    DEFAULT_ALGO,
    DEFAULT_LOG_LEVEL,
    DEFAULT_SCENARIO,
    DEFAULT_SPEED,
    resolve_config,
)
from pathlab.app.player import MAX_SPEED


def test_defaults():
    cfg = resolve_config(argv=[], environ={})
    assert cfg.algorithm == DEFAULT_ALGO
    assert cfg.scenario == DEFAULT_SCENARIO
    assert cfg.steps_per_sec == DEFAULT_SPEED
    assert cfg.log_level == DEFAULT_LOG_LEVEL


def test_environment():
    cfg = resolve_config(argv=[], environ={
        "PATHLAB_ALGO": "JPS",
        "PATHLAB_SCENARIO": "gap",
        "PATHLAB_SPEED": "20",
        "PATHLAB_LOG_LEVEL": "debug",
    })
    assert cfg.algorithm == "jps"
    assert cfg.scenario == "gap"
    assert cfg.steps_per_sec == 20
    assert cfg.log_level == "DEBUG"


def test_flags_override_environment():
    cfg = resolve_config(argv=["--algo=bfs", "--scenario=open", "ignored", "--speed"],
                         environ={"PATHLAB_ALGO": "dijkstra", "PATHLAB_SCENARIO": "gap"})
    assert cfg.algorithm == "bfs"
    assert cfg.scenario == "open"


def test_bad_values_fall_back():
    cfg = resolve_config(argv=["--algo=dfs", "--scenario=moon", "--speed=fast", "--log-level=LOUD"],
                         environ={})
    assert cfg.algorithm == DEFAULT_ALGO
    assert cfg.scenario == DEFAULT_SCENARIO
    assert cfg.steps_per_sec == DEFAULT_SPEED
    assert cfg.log_level == DEFAULT_LOG_LEVEL


def test_speed_is_clamped():
    assert resolve_config(argv=["--speed=500"], environ={}).steps_per_sec == MAX_SPEED
    assert resolve_config(argv=["--speed=0"], environ={}).steps_per_sec == 1
