"""Monte Carlo robustness testing by randomising strategy parameters."""

from __future__ import annotations

import copy
import logging
import math
import random
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from .performance import Performance

logger = logging.getLogger(__name__)

Runner = Callable[[dict[str, Any]], Performance]


@dataclass(frozen=True)
class SimulationSummary:
    """Sharpe ratios of all simulations and their statistics."""

    results: list[float]
    mean: float
    std_dev: float
    minimum: float
    maximum: float

    def report(self) -> str:
        """Return a short human-readable summary."""
        return "\n".join(
            [
                "Sharpe Ratio Stats:",
                f"  Mean: {self.mean:g}",
                f"  Std Dev: {self.std_dev:g}",
                f"  Min: {self.minimum:g}",
                f"  Max: {self.maximum:g}",
            ]
        )


def _apply_params(config: dict[str, Any], strategy_name: str, params: Any) -> None:
    for strategy in config.get("strategies") or []:
        if isinstance(strategy, dict) and strategy.get("name") == strategy_name:
            strategy["params"] = copy.deepcopy(params)
            return


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class MonteCarloSimulator:
    """Runs a strategy many times with parameters drawn uniformly from configured ranges.

    ``runner`` takes a full configuration and returns the performance of the run.
    """

    def __init__(
        self,
        config: Mapping[str, Any],
        runner: Runner,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config: dict[str, Any] = copy.deepcopy(dict(config))
        section = self.config.get("monte_carlo")
        self.mc_params: dict[str, Any] | None = section if isinstance(section, dict) else None
        self._runner = runner
        self._rng = rng if rng is not None else random.Random()

    def _randomize(self, base: dict[str, Any], ranges: Mapping[str, Any]) -> dict[str, Any]:
        params = copy.deepcopy(base)
        for name in sorted(ranges):
            bounds = ranges[name]
            if not isinstance(bounds, (list, tuple)) or len(bounds) < 2:
                raise ValueError(f"randomization range for {name!r} needs two bounds")
            low, high = float(bounds[0]), float(bounds[1])
            value = self._rng.uniform(low, high)
            params[name] = int(value) if _is_integer(params.get(name)) else value
        return params

    def run(self, num_simulations: int) -> Optional[SimulationSummary]:
        """Run the simulations; None when Monte Carlo is disabled or not configured."""
        params = self.mc_params
        if not isinstance(params, dict) or not params.get("enabled", False):
            logger.info("Monte Carlo simulation is disabled or not configured.")
            return None
        if num_simulations < 1:
            raise ValueError("num_simulations must be at least 1")

        strategy_name = params.get("strategy_to_test")
        if not isinstance(strategy_name, str):
            raise ValueError("monte_carlo.strategy_to_test must be a string")
        base = params.get("base_params")
        if base is None:
            base = {}
        if not isinstance(base, dict):
            raise ValueError("monte_carlo.base_params must be an object")
        ranges = params.get("randomization_ranges")
        if ranges is None:
            ranges = {}
        if not isinstance(ranges, Mapping):
            raise ValueError("monte_carlo.randomization_ranges must be an object")

        logger.info("Number of simulations: %d", num_simulations)
        results: list[float] = []
        for index in range(num_simulations):
            randomized = self._randomize(base, ranges)
            logger.info("Running simulation %d with params: %s", index + 1, randomized)
            run_config = copy.deepcopy(self.config)
            _apply_params(run_config, strategy_name, randomized)
            result = self._runner(run_config).sharpe_ratio()
            results.append(result)
            logger.info("Resulting Sharpe Ratio: %s", result)

        count = len(results)
        mean = sum(results) / count
        mean_sq = sum(r * r for r in results) / count
        summary = SimulationSummary(
            results=results,
            mean=mean,
            std_dev=math.sqrt(max(mean_sq - mean * mean, 0.0)),
            minimum=min(results),
            maximum=max(results),
        )
        logger.info("%s", summary.report())
        return summary