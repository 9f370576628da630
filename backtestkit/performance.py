"""Performance metrics computed from an equity curve and a trade log."""

from __future__ import annotations

import math
import random
import statistics
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from .datatypes import Trade

_ANNUALIZATION_FACTOR = 252.0
_EPSILON = 1e-9


@dataclass(frozen=True)
class MonteCarloSummary:
    """Outcome of reshuffling the return series many times."""

    final_returns: list[float]
    mean_return: float
    p5: float
    p95: float

    def report(self) -> str:
        """Return a short human-readable summary."""
        return "\n".join(
            [
                f"--- Monte Carlo Simulation ({len(self.final_returns)} runs) ---",
                f"Average Simulated Return: {self.mean_return * 100.0:.2f}%",
                f"5th Percentile Return: {self.p5 * 100.0:.2f}%",
                f"95th Percentile Return: {self.p95 * 100.0:.2f}%",
            ]
        )


def _mean(values: Sequence[float]) -> float:
    return statistics.fmean(values) if values else 0.0


def _sample_stdev(values: Sequence[float], mean: float) -> float:
    if len(values) < 2:
        return 0.0
    return math.sqrt(sum((v - mean) ** 2 for v in values) / (len(values) - 1))


class Performance:
    """Return, drawdown, Sharpe, VaR and trade statistics for one run."""

    def __init__(
        self,
        equity_curve: Iterable[float],
        initial_capital: float,
        trade_log: Iterable[Trade] = (),
    ) -> None:
        self._equity = [float(v) for v in equity_curve]
        self._initial_capital = float(initial_capital)
        self._trades = list(trade_log)
        self._returns = [cur / prev - 1.0 for prev, cur in zip(self._equity, self._equity[1:])]

        closed = [t.pnl for t in self._trades if t.pnl != 0.0]
        wins = [p for p in closed if p > 0]
        losses = [p for p in closed if p < 0]
        self._total_trades = len(closed)
        self._winning_trades = len(wins)
        self._losing_trades = len(losses)
        self._gross_profit = sum(wins)
        self._gross_loss = sum(losses)

    @property
    def total_return(self) -> float:
        """Final equity relative to initial capital, minus one."""
        if not self._equity:
            return 0.0
        return self._equity[-1] / self._initial_capital - 1.0

    @property
    def max_drawdown(self) -> float:
        """Largest peak-to-trough decline as a fraction of the peak."""
        if not self._equity:
            return 0.0
        peak = self._equity[0]
        worst = 0.0
        for value in self._equity:
            peak = max(peak, value)
            worst = max(worst, (peak - value) / peak)
        return worst

    def sharpe_ratio(self, risk_free_rate: float = 0.0) -> float:
        """Annualised Sharpe ratio of the periodic returns (252 periods a year)."""
        if len(self._returns) < 2:
            return 0.0
        mean = _mean(self._returns)
        std = _sample_stdev(self._returns, mean)
        if std < _EPSILON:
            return 0.0
        return (mean - risk_free_rate) / std * math.sqrt(_ANNUALIZATION_FACTOR)

    @property
    def win_rate(self) -> float:
        """Percentage of closed trades that were profitable."""
        if self._total_trades == 0:
            return 0.0
        return self._winning_trades / self._total_trades * 100.0

    @property
    def profit_factor(self) -> float:
        """Gross profit divided by gross loss, or 0 when there were no losses."""
        if abs(self._gross_loss) <= _EPSILON:
            return 0.0
        return abs(self._gross_profit / self._gross_loss)

    @property
    def total_trades(self) -> int:
        """Number of closed trades (those with a non-zero PnL)."""
        return self._total_trades

    @property
    def winning_trades(self) -> int:
        """Number of closed trades with positive PnL."""
        return self._winning_trades

    @property
    def losing_trades(self) -> int:
        """Number of closed trades with negative PnL."""
        return self._losing_trades

    def calculate_var(self, confidence_level: float = 0.95) -> float:
        """Historical value at risk of one period's return, as a positive loss."""
        if not self._returns:
            return 0.0
        ordered = sorted(self._returns)
        index = int(len(ordered) * (1.0 - confidence_level))
        index = max(0, min(index, len(ordered) - 1))
        return -ordered[index]

    def run_monte_carlo_simulation(
        self, num_simulations: int, rng: Optional[random.Random] = None
    ) -> Optional[MonteCarloSummary]:
        """Shuffle the returns repeatedly; None if there are fewer than two returns."""
        if num_simulations < 1:
            raise ValueError("num_simulations must be at least 1")
        if len(self._returns) < 2:
            return None
        rng = rng if rng is not None else random.Random()
        returns = list(self._returns)
        finals = []
        for _ in range(num_simulations):
            rng.shuffle(returns)
            equity = self._initial_capital
            for r in returns:
                equity *= 1.0 + r
            finals.append(equity / self._initial_capital - 1.0)
        finals.sort()
        return MonteCarloSummary(
            final_returns=finals,
            mean_return=_mean(finals),
            p5=finals[int(num_simulations * 0.05)],
            p95=finals[int(num_simulations * 0.95)],
        )