import pytest

from backtestkit.forecaster import PerformanceForecaster
from backtestkit.portfolio import Portfolio


@pytest.fixture
def forecaster():
    return PerformanceForecaster("model.bin")


def test_keeps_model_path(forecaster):
    assert forecaster.model_path == "model.bin"


def test_empty_history_gives_empty_forecast(forecaster):
    assert forecaster.forecast_equity([], 5) == []


def test_single_point_is_flat(forecaster):
    assert forecaster.forecast_equity([100.0], 3) == [100.0, 100.0, 100.0]


def test_zero_periods(forecaster):
    assert forecaster.forecast_equity([1.0, 2.0], 0) == []


def test_linear_extrapolation_invariants(forecaster):
    history = [90.0, 100.0, 110.0]
    forecast = forecaster.forecast_equity(history, 4)
    trend = history[-1] - history[-2]
    assert len(forecast) == 4
    assert forecast[0] == pytest.approx(history[-1] + trend)
    steps = [b - a for a, b in zip(forecast, forecast[1:])]
    assert all(step == pytest.approx(trend) for step in steps)


def test_forecast_performance(forecaster):
    portfolio = Portfolio(None, 1000.0, None)
    portfolio.update_time_index()
    portfolio.update_time_index()
    result = forecaster.forecast_performance(portfolio, 10)
    assert result.predicted_sharpe == 1.5
    assert result.predicted_max_drawdown == 0.1
    assert result.equity_forecast == [1000.0] * 10


def test_forecast_performance_empty_portfolio(forecaster):
    result = forecaster.forecast_performance(Portfolio(None, 1000.0, None), 10)
    assert result.equity_forecast == []