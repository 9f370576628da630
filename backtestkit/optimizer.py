"""Grid-search optimisation of strategy parameters by Sharpe ratio."""

from __future__ import annotations

import copy
import itertools
import logging
import math
from typing import Any, Callable, Mapping

from .performance import Performance

logger = logging.getLogger(__name__)

Runner = Callable[[dict[str, Any]], Performance]


def _as_values(spec: Any) -> list[Any]:
    """The candidate values of one parameter range."""
    if spec is None:
        return []
    if isinstance(spec, (list, tuple)):
        return list(spec)
    if isinstance(spec, Mapping):
        return list(spec.values())
    return [spec]


def generate_param_combinations(param_ranges: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Every combination of parameter values, with parameter names in sorted order."""
    names = sorted(param_ranges)
    choices = [_as_values(param_ranges[name]) for name in names]
    return [dict(zip(names, combo)) for combo in itertools.product(*choices)]


def _apply_params(config: dict[str, Any], strategy_name: str, params: Any) -> None:
    """Give the first strategy called ``strategy_name`` the parameters ``params``."""
    for strategy in config.get("strategies") or []:
        if isinstance(strategy, dict) and strategy.get("name") == strategy_name:
            strategy["params"] = copy.deepcopy(params)
            return


class Optimizer:
    """Runs a backtest for every parameter combination and keeps the best Sharpe ratio.

    ``runner`` takes a full configuration and returns the performance of the run.
    """

    def __init__(self, config: Mapping[str, Any], runner: Runner) -> None:
        self.config: dict[str, Any] = copy.deepcopy(dict(config))
        section = self.config.get("optimization")
        self.optimization_params: dict[str, Any] | None = (
            section if isinstance(section, dict) else None
        )
        self._runner = runner
        self._best_params: dict[str, Any] = {}
        self._best_metric = -math.inf

    def run(self) -> dict[str, Any]:
        """Search the grid; returns the best parameters, or {} when disabled."""
        params = self.optimization_params
        if not isinstance(params, dict) or not params.get("enabled", False):
            logger.info("Optimization is disabled or not configured.")
            return {}

        ranges = params.get("param_ranges")
        if ranges is None:
            ranges = {}
        if not isinstance(ranges, Mapping):
            raise ValueError("optimization.param_ranges must be an object")
        strategy_name = params.get("strategy_to_optimize")
        if not isinstance(strategy_name, str):
            raise ValueError("optimization.strategy_to_optimize must be a string")

        combinations = generate_param_combinations(ranges)
        logger.info("Generated %d parameter combinations.", len(combinations))

        self._best_params = {}
        self._best_metric = -math.inf
        for combination in combinations:
            logger.info("Testing parameters: %s", combination)
            run_config = copy.deepcopy(self.config)
            _apply_params(run_config, strategy_name, combination)
            metric = self._runner(run_config).sharpe_ratio()
            logger.info("Resulting Sharpe Ratio: %s", metric)
            if metric > self._best_metric:
                self._best_metric = metric
                self._best_params = combination

        logger.info("Best parameters found: %s", self._best_params)
        logger.info("Best Sharpe Ratio: %s", self._best_metric)
        return copy.deepcopy(self._best_params)

    @property
    def best_params(self) -> dict[str, Any]:
        """The best parameters of the last run; {} before any run."""
        return copy.deepcopy(self._best_params)

    @property
    def best_metric(self) -> float:
        """The best Sharpe ratio of the last run; -inf before any run."""
        return self._best_metric