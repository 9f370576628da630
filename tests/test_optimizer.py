import copy

import pytest

from backtestkit.optimizer import Optimizer, generate_param_combinations
from backtestkit.performance import Performance

GOOD_CURVE = [100.0, 110.0, 105.0, 120.0, 130.0]
BAD_CURVE = [100.0, 90.0, 95.0, 80.0, 70.0]


def make_config(enabled=True):
    return {
        "strategies": [
            {"name": "SMA", "params": {"window": 5}},
            {"name": "OTHER", "params": {"depth": 3}},
            {"name": "SMA", "params": {"window": 7}},
        ],
        "optimization": {
            "enabled": enabled,
            "strategy_to_optimize": "SMA",
            "param_ranges": {"window": [10, 20, 30]},
        },
    }


class RecordingRunner:
    def __init__(self):
        self.configs = []

    def __call__(self, config):
        self.configs.append(copy.deepcopy(config))
        window = config["strategies"][0]["params"].get("window")
        curve = GOOD_CURVE if window == 20 else BAD_CURVE
        return Performance(curve, 100.0)


def test_combinations_iterate_sorted_names():
    combos = generate_param_combinations({"b": [1, 2], "a": ["x", "y"]})
    assert combos == [
        {"a": "x", "b": 1},
        {"a": "x", "b": 2},
        {"a": "y", "b": 1},
        {"a": "y", "b": 2},
    ]


def test_combinations_of_no_ranges_is_one_empty_set():
    assert generate_param_combinations({}) == [{}]


def test_combinations_with_empty_range_is_empty():
    assert generate_param_combinations({"a": [1, 2], "b": []}) == []


def test_scalar_range_counts_as_single_value():
    assert generate_param_combinations({"a": 5, "b": [1, 2]}) == [
        {"a": 5, "b": 1},
        {"a": 5, "b": 2},
    ]


def test_disabled_optimization_returns_empty_and_runs_nothing():
    runner = RecordingRunner()
    result = Optimizer(make_config(enabled=False), runner).run()
    assert result == {}
    assert runner.configs == []


def test_missing_section_returns_empty():
    runner = RecordingRunner()
    assert Optimizer({"strategies": []}, runner).run() == {}
    assert runner.configs == []


def test_run_picks_highest_sharpe():
    runner = RecordingRunner()
    optimizer = Optimizer(make_config(), runner)
    best = optimizer.run()
    assert best == {"window": 20}
    assert optimizer.best_params == {"window": 20}
    assert optimizer.best_metric == pytest.approx(Performance(GOOD_CURVE, 100.0).sharpe_ratio())
    assert len(runner.configs) == 3


def test_only_first_matching_strategy_gets_params():
    runner = RecordingRunner()
    Optimizer(make_config(), runner).run()
    windows = [cfg["strategies"][0]["params"] for cfg in runner.configs]
    assert windows == [{"window": 10}, {"window": 20}, {"window": 30}]
    for cfg in runner.configs:
        assert cfg["strategies"][1]["params"] == {"depth": 3}
        assert cfg["strategies"][2]["params"] == {"window": 7}


def test_original_config_is_not_modified():
    config = make_config()
    Optimizer(config, RecordingRunner()).run()
    assert config == make_config()


def test_missing_strategy_name_raises():
    config = make_config()
    del config["optimization"]["strategy_to_optimize"]
    with pytest.raises(ValueError):
        Optimizer(config, RecordingRunner()).run()


def test_non_object_ranges_raise():
    config = make_config()
    config["optimization"]["param_ranges"] = [1, 2]
    with pytest.raises(ValueError):
        Optimizer(config, RecordingRunner()).run()


def test_best_metric_before_run_is_negative_infinity():
    optimizer = Optimizer(make_config(), RecordingRunner())
    assert optimizer.best_metric == float("-inf")
    assert optimizer.best_params == {}