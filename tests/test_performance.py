import random

import pytest

from backtestkit.datatypes import Trade
from backtestkit.performance import Performance


def test_empty_curve_metrics_are_zero():
    perf = Performance([], 100.0)
    assert perf.total_return == 0.0
    assert perf.max_drawdown == 0.0
    assert perf.sharpe_ratio() == 0.0
    assert perf.calculate_var() == 0.0


def test_total_return_flat_curve():
    assert Performance([100.0, 100.0], 100.0).total_return == 0.0


def test_total_return_sign_follows_final_equity():
    assert Performance([100.0, 130.0], 100.0).total_return > 0
    assert Performance([100.0, 70.0], 100.0).total_return < 0


def test_monotonic_curve_has_no_drawdown():
    assert Performance([100.0, 101.0, 105.0, 110.0], 100.0).max_drawdown == 0.0


def test_max_drawdown_halving():
    assert Performance([100.0, 200.0, 100.0, 150.0], 100.0).max_drawdown == pytest.approx(0.5)


def test_max_drawdown_within_unit_interval():
    curve = [100.0, 120.0, 90.0, 130.0, 60.0, 80.0]
    dd = Performance(curve, 100.0).max_drawdown
    assert 0.0 < dd < 1.0


def test_constant_returns_give_zero_sharpe():
    assert Performance([100.0, 110.0, 121.0, 133.1], 100.0).sharpe_ratio() == 0.0


def test_too_few_returns_give_zero_sharpe():
    assert Performance([100.0, 150.0], 100.0).sharpe_ratio() == 0.0


def test_sharpe_sign():
    rising = Performance([100.0, 102.0, 103.0, 106.0, 107.0], 100.0)
    falling = Performance([100.0, 98.0, 97.0, 94.0, 93.0], 100.0)
    assert rising.sharpe_ratio() > 0
    assert falling.sharpe_ratio() < 0


def test_risk_free_rate_lowers_sharpe():
    perf = Performance([100.0, 102.0, 101.0, 105.0, 107.0], 100.0)
    assert perf.sharpe_ratio(0.01) < perf.sharpe_ratio()


def test_trade_statistics():
    trades = [Trade(symbol="A", pnl=p) for p in (10.0, -5.0, 0.0, 20.0)]
    perf = Performance([100.0], 100.0, trades)
    assert perf.total_trades == 3
    assert perf.winning_trades == 2
    assert perf.losing_trades == 1
    assert perf.total_trades == perf.winning_trades + perf.losing_trades
    assert perf.profit_factor == pytest.approx(6.0)
    assert 0.0 < perf.win_rate < 100.0


def test_no_trades_statistics():
    perf = Performance([100.0, 101.0], 100.0)
    assert perf.total_trades == 0
    assert perf.win_rate == 0.0
    assert perf.profit_factor == 0.0


def test_only_winning_trades_profit_factor_zero():
    perf = Performance([], 100.0, [Trade(pnl=5.0), Trade(pnl=3.0)])
    assert perf.win_rate == 100.0
    assert perf.profit_factor == 0.0


def test_var_uses_worst_return():
    perf = Performance([100.0, 90.0, 99.0, 108.9], 100.0)
    assert perf.calculate_var(0.95) == pytest.approx(0.1)


def test_var_at_zero_confidence_is_clamped_to_best_return():
    perf = Performance([100.0, 90.0, 99.0, 108.9], 100.0)
    assert perf.calculate_var(0.0) == pytest.approx(-0.1)
    assert perf.calculate_var(0.0) <= perf.calculate_var(0.95)


def test_monte_carlo_not_enough_data():
    assert Performance([100.0, 110.0], 100.0).run_monte_carlo_simulation(10) is None


def test_monte_carlo_invalid_count():
    with pytest.raises(ValueError):
        Performance([100.0, 110.0, 120.0], 100.0).run_monte_carlo_simulation(0)


def test_monte_carlo_final_returns_match_total_return():
    perf = Performance([100.0, 110.0, 95.0, 120.0, 118.0], 100.0)
    summary = perf.run_monte_carlo_simulation(40, rng=random.Random(7))
    assert len(summary.final_returns) == 40
    assert summary.final_returns == sorted(summary.final_returns)
    for value in summary.final_returns:
        assert value == pytest.approx(perf.total_return)
    assert summary.mean_return == pytest.approx(perf.total_return)
    assert summary.p5 <= summary.p95


def test_monte_carlo_report_mentions_runs():
    perf = Performance([100.0, 105.0, 103.0], 100.0)
    summary = perf.run_monte_carlo_simulation(5, rng=random.Random(1))
    assert "(5 runs)" in summary.report()
    assert "Average Simulated Return" in summary.report()