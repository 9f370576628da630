# backtestkit

Building blocks for event-driven backtests of trading strategies: market data
types and events, event queues, a portfolio that accounts for fills and keeps
an equity curve, performance metrics, analytics reports, and drivers for
grid-search optimisation and Monte Carlo parameter sampling.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Modules

| Module | What it holds |
| --- | --- |
| `backtestkit.datatypes` | `Bar`, `Trade`, `OrderBook`, `OrderBookLevel`, `Order`, `MarketState` and the enums `OrderDirection`, `OrderSide`, `OrderType`, `VolatilityLevel`, `TrendDirection` |
| `backtestkit.events` | `MarketEvent`, `TradeEvent`, `SignalEvent`, `NewsEvent`, `OrderEvent`, `FillEvent`, `OrderBookEvent`, `DataSourceStatusEvent`, `MarketRegimeChangedEvent`, `OrderFailureEvent` |
| `backtestkit.queues` | `EventQueue` (blocking `wait_and_pop`) and `ThreadSafeQueue` (`try_pop` returns `None` when empty) |
| `backtestkit.commission` | `Commission` and `FixedCommission` |
| `backtestkit.datahandler` | the abstract `DataHandler` interface for market data sources |
| `backtestkit.strategy` | the abstract `Strategy` base class |
| `backtestkit.config` | `AppConfig` with JSON loading and saving, `RunMode` |
| `backtestkit.performance` | `Performance`: total return, max drawdown, Sharpe ratio, VaR, trade statistics, return reshuffling |
| `backtestkit.portfolio` | `Portfolio`: cash, positions, equity curve, trade log, CSV export |
| `backtestkit.forecaster` | `PerformanceForecaster`: linear extrapolation of the equity curve |
| `backtestkit.incremental` | `IncrementalMean` |
| `backtestkit.regime` | `RegimeDetector`: bull/bear/neutral from two moving averages |
| `backtestkit.analytics` | `Analytics` reports, `calculate_correlation` and friends, price anomaly detection |
| `backtestkit.factors` | `FactorExposure` by least squares (pseudo-inverse) |
| `backtestkit.optimizer` | `Optimizer` and `generate_param_combinations` |
| `backtestkit.montecarlo` | `MonteCarloSimulator` and `SimulationSummary` |

## Examples

Performance metrics from an equity curve. `total_return`, `max_drawdown`,
`win_rate` and the trade counts are properties; `sharpe_ratio()` and
`calculate_var()` are methods:

```python
from backtestkit.performance import Performance

perf = Performance([100_000.0, 101_000.0, 100_500.0, 102_000.0], 100_000.0)
print(perf.total_return)      # 0.02
print(perf.max_drawdown)
print(perf.sharpe_ratio())    # annualised over 252 periods
print(perf.calculate_var(0.95))
```

A portfolio fed with fills. Without a data handler, holdings are valued at
their average cost:

```python
from backtestkit.datatypes import OrderDirection
from backtestkit.events import FillEvent
from backtestkit.portfolio import Portfolio

portfolio = Portfolio(None, 100_000.0, None)
portfolio.on_fill(FillEvent(1, "BTC/USDT", "demo", OrderDirection.BUY, 10.0, 100.0, 0.0))
portfolio.on_fill(FillEvent(2, "BTC/USDT", "demo", OrderDirection.SELL, 10.0, 110.0, 0.0))
print(portfolio.cash)               # 100100.0
print(portfolio.trade_log[0].pnl)   # 100.0
print(portfolio.generate_report())
portfolio.write_results_to_csv("equity.csv")
```

Loading and saving configuration. A missing or invalid file gives the
defaults; fields of the wrong type are ignored:

```python
from backtestkit.config import AppConfig, RunMode

config = AppConfig.load_from_file("config.json")
config.run_mode = RunMode.BACKTEST
config.save_to_file("config.out.json")
```

A running mean and the market regime:

```python
from backtestkit.incremental import IncrementalMean
from backtestkit.regime import RegimeDetector

mean = IncrementalMean()
for value in (1.0, 2.0, 3.0):
    mean.update(value)
print(mean.mean)   # 2.0

detector = RegimeDetector(short_window=5, long_window=20)
regime = detector.detect(bars)  # a list of Bar objects; NEUTRAL until enough bars
```

Grid search. `Optimizer` and `MonteCarloSimulator` take a *runner*: a
callable that receives a full configuration dictionary (with the chosen
parameters written into the matching entry of `"strategies"`) and returns a
`Performance`. Runs are ranked by Sharpe ratio:

```python
from backtestkit.optimizer import Optimizer, generate_param_combinations

print(generate_param_combinations({"window": [20, 50], "z_score_threshold": [1.5, 2.0]}))

config = {
    "strategies": [{"name": "PAIRS_TRADING", "params": {}}],
    "optimization": {
        "enabled": True,
        "strategy_to_optimize": "PAIRS_TRADING",
        "param_ranges": {"window": [20, 50], "z_score_threshold": [1.5, 2.0]},
    },
}
optimizer = Optimizer(config, runner=my_backtest)
best = optimizer.run()
print(best, optimizer.best_metric)
```

`MonteCarloSimulator(config, runner).run(n)` reads a `"monte_carlo"` section
with `enabled`, `strategy_to_test`, `base_params` and `randomization_ranges`
(name to `[low, high]`), draws each parameter uniformly, and returns a
`SimulationSummary` with the mean, standard deviation, minimum and maximum
Sharpe ratio, or `None` when disabled.

`Analytics` report methods return their text rather than printing it;
`detect_anomalies(data_handler)` returns the `Anomaly` records found and
logs a warning for each.

## What the package does not do

- It has no engine loop that drives data, strategies, risk checks and
  execution together; the runner passed to `Optimizer` and
  `MonteCarloSimulator` must be supplied by the caller.
- It ships no concrete `DataHandler` (no CSV, database or live feed reader)
  and no concrete trading strategies; these are written by subclassing
  `DataHandler` and `Strategy`.
- It has no order execution or risk management component.
- It has no walk-forward analysis driver and no multi-series correlation
  matrix; `calculate_correlation` in `backtestkit.analytics` works on two
  series.
- It has no command-line program.