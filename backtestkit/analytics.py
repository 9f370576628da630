"""Portfolio analytics: correlations, regime breakdowns, deployments, resources and anomalies."""

from __future__ import annotations

import logging
import math
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

import psutil

from .datahandler import DataHandler
from .datatypes import Trade
from .performance import Performance
from .portfolio import Portfolio

logger = logging.getLogger(__name__)

_EPSILON = 1e-9
_MEGABYTE = 1024 * 1024


def calculate_mean(values: Sequence[float]) -> float:
    """Arithmetic mean; zero for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def calculate_stddev(values: Sequence[float], mean: float) -> float:
    """Sample standard deviation around ``mean``; zero for fewer than two values."""
    if len(values) < 2:
        return 0.0
    return math.sqrt(sum((v - mean) ** 2 for v in values) / (len(values) - 1))


def calculate_correlation(first: Sequence[float], second: Sequence[float]) -> float:
    """Pearson correlation; zero for mismatched lengths, too few points or no variance."""
    if len(first) != len(second) or len(first) < 2:
        return 0.0
    mean1 = calculate_mean(first)
    mean2 = calculate_mean(second)
    std1 = calculate_stddev(first, mean1)
    std2 = calculate_stddev(second, mean2)
    if std1 < _EPSILON or std2 < _EPSILON:
        return 0.0
    covariance = sum((a - mean1) * (b - mean2) for a, b in zip(first, second))
    covariance /= len(first) - 1
    return covariance / (std1 * std2)


@dataclass(frozen=True)
class Anomaly:
    """A price whose z-score against its recent history exceeded the threshold."""

    symbol: str
    price: float
    z_score: float


class Analytics:
    """Builds analytical reports over portfolios and watches prices for anomalies."""

    def __init__(self, config: Optional[Mapping[str, Any]] = None) -> None:
        self.config: dict[str, Any] = dict(config or {})
        sharpe = self.config.get("sharpe_ratio")
        self.risk_free_rate = (
            float(sharpe.get("risk_free_rate", 0.02)) if isinstance(sharpe, Mapping) else 0.02
        )
        self.enable_cross_correlation = bool(self.config.get("enable_cross_correlation", False))
        self.anomaly_lookback = int(self.config.get("anomaly_lookback", 50))
        self.anomaly_z_score_threshold = float(self.config.get("anomaly_z_score_threshold", 3.0))
        self.successful_deployments = 0
        self.failed_deployments = 0
        self._price_history: dict[str, deque[float]] = {}
        self.memory_usage: list[int] = []
        self.cpu_usage: list[float] = []
        self._process = psutil.Process()

    # --- Strategy correlations -------------------------------------------------

    def generate_report(self, portfolio: Portfolio) -> str:
        """Return the advanced analytics report, with correlations if enabled."""
        lines = ["", "--- Advanced Analytics Report ---"]
        if self.enable_cross_correlation:
            lines.extend(self._cross_correlation_lines(portfolio))
        lines.append("---------------------------------")
        return "\n".join(lines) + "\n"

    def _cross_correlation_lines(self, portfolio: Portfolio) -> list[str]:
        lines = ["", "--- Cross-Strategy Correlation Analysis ---"]
        by_strategy = portfolio.strategy_trade_log
        if len(by_strategy) < 2:
            lines.append("Not enough strategies with trades to calculate correlations.")
            return lines

        pnl_series = {name: [t.pnl for t in trades] for name, trades in sorted(by_strategy.items())}
        longest = max(len(pnl) for pnl in pnl_series.values())
        for pnl in pnl_series.values():
            pnl.extend([0.0] * (longest - len(pnl)))

        names = list(pnl_series)
        lines.append(f"{'Strategy':<25}" + "".join(f"{n[:14]:<15}" for n in names))
        for row in names:
            cells = "".join(
                f"{calculate_correlation(pnl_series[row], pnl_series[col]):<15.3f}"
                for col in names
            )
            lines.append(f"{row[:24]:<25}" + cells)
        lines.append("------------------------------------------------")
        return lines

    # --- Live vs backtest ------------------------------------------------------

    def compare_performance(
        self, live_portfolio: Optional[Portfolio], backtest_portfolio: Optional[Portfolio]
    ) -> str:
        """Return a side-by-side comparison of two portfolios' key metrics."""
        if live_portfolio is None or backtest_portfolio is None:
            raise ValueError("Cannot compare performance: one or both portfolios are null.")

        live = Performance(
            (p.equity for p in live_portfolio.equity_curve), live_portfolio.initial_capital
        )
        back = Performance(
            (p.equity for p in backtest_portfolio.equity_curve), backtest_portfolio.initial_capital
        )
        lines = [
            "",
            "--- Live vs. Backtest Performance Comparison ---",
            f"{'Metric':<20} | {'Live':<15} | {'Backtest':<15}",
            f"{'Total Return (%)':<20} | {live.total_return * 100:<15.2f} | "
            f"{back.total_return * 100:<15.2f}",
            f"{'Max Drawdown (%)':<20} | {live.max_drawdown * 100:<15.2f} | "
            f"{back.max_drawdown * 100:<15.2f}",
            f"{'Sharpe Ratio':<20} | {live.sharpe_ratio():<15.3f} | {back.sharpe_ratio():<15.3f}",
            f"{'VaR (95%)':<20} | {live.calculate_var(0.95):<15.2f} | "
            f"{back.calculate_var(0.95):<15.2f}",
            "--------------------------------------------------",
        ]
        return "\n".join(lines) + "\n"

    # --- Market conditions -----------------------------------------------------

    def generate_market_condition_report(self, portfolio: Portfolio) -> str:
        """Return trade counts broken down by volatility and trend at entry."""
        by_vol: dict[Any, list[Trade]] = defaultdict(list)
        by_trend: dict[Any, list[Trade]] = defaultdict(list)
        for trade in portfolio.trade_log:
            by_vol[trade.market_state_at_entry.volatility].append(trade)
            by_trend[trade.market_state_at_entry.trend].append(trade)

        lines = ["", "--- Market Condition Performance Breakdown ---", "", "--- Performance by Volatility ---"]
        for vol in sorted(by_vol):
            lines.append(f"Volatility: {vol.name}, Trades: {len(by_vol[vol])}")
        lines += ["", "--- Performance by Trend ---"]
        for trend in sorted(by_trend):
            lines.append(f"Trend: {trend.name}, Trades: {len(by_trend[trend])}")
        lines.append("--------------------------------------------")
        return "\n".join(lines) + "\n"

    def generate_factor_analysis_report(self, portfolio: Portfolio) -> str:
        """Return the correlation of returns with the volatility and trend factors."""
        lines = ["", "--- Factor Exposure Analysis ---"]
        curve = portfolio.equity_curve
        if len(curve) < 2:
            lines.append("Not enough data for factor analysis.")
            return "\n".join(lines) + "\n"

        returns = [
            (cur.equity - prev.equity) / prev.equity if prev.equity > _EPSILON else 0.0
            for prev, cur in zip(curve, curve[1:])
        ]
        vol_factor = [p.market_state.volatility_value for p in curve[1:]]
        trend_factor = [float(int(p.market_state.trend)) for p in curve[1:]]

        vol_exposure = calculate_correlation(returns, vol_factor)
        trend_exposure = calculate_correlation(returns, trend_factor)
        lines += [
            f"Exposure to Volatility Factor: {vol_exposure:.4f}",
            f"Exposure to Trend Factor:    {trend_exposure:.4f}",
            "",
            "Interpretation:",
            " - Positive Volatility Exposure suggests the strategy performs better in "
            "high-volatility environments.",
            " - Positive Trend Exposure suggests the strategy is trend-following.",
            " - Negative Trend Exposure suggests the strategy is mean-reverting.",
            "----------------------------------------------------------",
        ]
        return "\n".join(lines) + "\n"

    # --- Deployments -----------------------------------------------------------

    def log_deployment(self, success: bool) -> None:
        """Count one strategy deployment attempt."""
        if success:
            self.successful_deployments += 1
        else:
            self.failed_deployments += 1

    def generate_deployment_report(self) -> str:
        """Return deployment attempt counts and the success rate."""
        lines = ["", "--- Strategy Deployment Report ---"]
        total = self.successful_deployments + self.failed_deployments
        if total == 0:
            lines.append("No strategy deployments were attempted.")
        else:
            rate = self.successful_deployments / total * 100.0
            lines += [
                f"Total Deployment Attempts: {total}",
                f"Successful Deployments: {self.successful_deployments}",
                f"Failed Deployments: {self.failed_deployments}",
                f"Success Rate: {rate:.2f}%",
            ]
        lines.append("----------------------------------")
        return "\n".join(lines) + "\n"

    # --- System resources ------------------------------------------------------

    def snapshot_system_resources(self) -> None:
        """Record the process's memory use and CPU share since the last snapshot."""
        self.memory_usage.append(self._process.memory_info().rss)
        cpus = psutil.cpu_count() or 1
        self.cpu_usage.append(self._process.cpu_percent(interval=None) / cpus)

    def generate_resource_usage_report(self) -> str:
        """Return average and peak memory and CPU usage over all snapshots."""
        lines = ["", "--- System Resource Usage Report ---"]
        if not self.memory_usage or not self.cpu_usage:
            lines.append("No resource usage data collected.")
        else:
            avg_mem = sum(self.memory_usage) / len(self.memory_usage)
            peak_mem = max(self.memory_usage)
            avg_cpu = sum(self.cpu_usage) / len(self.cpu_usage)
            peak_cpu = max(self.cpu_usage)
            lines += [
                f"Average Memory Usage: {avg_mem / _MEGABYTE:g} MB",
                f"Peak Memory Usage: {peak_mem / _MEGABYTE:g} MB",
                f"Average CPU Usage: {avg_cpu:.2f}%",
                f"Peak CPU Usage: {peak_cpu:.2f}%",
            ]
        lines.append("------------------------------------")
        return "\n".join(lines) + "\n"

    # --- Anomalies -------------------------------------------------------------

    def detect_anomalies(self, data_handler: DataHandler) -> list[Anomaly]:
        """Check each symbol's latest price against its recent history."""
        found: list[Anomaly] = []
        if self.anomaly_z_score_threshold <= 0:
            return found

        for symbol in data_handler.symbols:
            price = data_handler.get_latest_bar_value(symbol, "price")
            if price <= 0:
                continue
            history = self._price_history.setdefault(
                symbol, deque(maxlen=self.anomaly_lookback)
            )
            history.append(price)
            if len(history) < self.anomaly_lookback:
                continue

            mean = sum(history) / self.anomaly_lookback
            mean_sq = sum(v * v for v in history) / self.anomaly_lookback
            std_dev = math.sqrt(max(mean_sq - mean * mean, 0.0))
            if std_dev > _EPSILON:
                z_score = (price - mean) / std_dev
                if abs(z_score) > self.anomaly_z_score_threshold:
                    logger.warning(
                        "!!! MARKET ANOMALY DETECTED !!! Symbol: %s, Price: %s, Z-Score: %s",
                        symbol,
                        price,
                        z_score,
                    )
                    found.append(Anomaly(symbol, price, z_score))
        return found