"""Portfolio: cash, positions, equity curve and trade log."""

from __future__ import annotations

import csv
import time
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Optional, Union

from .datahandler import DataHandler
from .datatypes import Bar, MarketState, OrderDirection, Trade
from .events import Event, FillEvent, MarketEvent, MarketRegimeChangedEvent, SignalEvent
from .performance import Performance
from .queues import ThreadSafeQueue

PathLike = Union[str, Path]

_EPSILON = 1e-9


@dataclass
class Position:
    """Holding in a single asset."""

    symbol: str = ""
    quantity: float = 0.0
    average_cost: float = 0.0
    market_value: float = 0.0
    direction: OrderDirection = OrderDirection.NONE


@dataclass(frozen=True)
class EquityPoint:
    """One sample of the equity curve."""

    timestamp: int
    equity: float
    market_state: MarketState


def _fmt(value: float) -> str:
    """Format a float the way a default output stream does (six significant digits)."""
    return f"{value:g}"


def _close_last_open_trade(trades: Iterable[Trade], fill: FillEvent, pnl: float) -> None:
    """Record the exit on the most recent trade in ``symbol`` that has no PnL yet."""
    for trade in reversed(list(trades)):
        if trade.symbol == fill.symbol and trade.pnl == 0.0:
            trade.pnl = pnl
            trade.exit_price = fill.fill_price
            trade.exit_timestamp = fill.timestamp
            return


class Portfolio:
    """Tracks cash and positions, marks them to market and logs trades."""

    def __init__(
        self,
        event_queue: Optional[ThreadSafeQueue[Event]],
        initial_capital: float,
        data_handler: Optional[DataHandler],
    ) -> None:
        self.event_queue = event_queue
        self.data_handler = data_handler
        self.initial_capital = float(initial_capital)
        self._cash = self.initial_capital
        self._total_equity = self.initial_capital
        self._peak_equity = self.initial_capital
        self._tracked_drawdown = 0.0
        self._holdings: dict[str, Position] = {}
        self._equity_curve: list[EquityPoint] = []
        self._trade_log: list[Trade] = []
        self._strategy_trade_log: dict[str, list[Trade]] = {}
        self._market_state = MarketState()
        self._last_signals: dict[str, SignalEvent] = {}

    # --- State -----------------------------------------------------------

    @property
    def cash(self) -> float:
        """Cash currently held."""
        return self._cash

    @property
    def total_equity(self) -> float:
        """Cash plus the marked value of all holdings at the last update."""
        return self._total_equity

    @property
    def equity_curve(self) -> list[EquityPoint]:
        """All recorded equity samples, oldest first."""
        return list(self._equity_curve)

    @property
    def trade_log(self) -> list[Trade]:
        """Every fill recorded as a trade, in order."""
        return self._trade_log

    @property
    def strategy_trade_log(self) -> dict[str, list[Trade]]:
        """Trades grouped by the name of the strategy that placed them."""
        return self._strategy_trade_log

    @property
    def real_time_pnl(self) -> float:
        """Current equity minus initial capital."""
        return self._total_equity - self.initial_capital

    @property
    def max_drawdown(self) -> float:
        """Largest peak-to-trough decline of the equity curve, as a fraction."""
        if not self._equity_curve:
            return 0.0
        worst = 0.0
        peak = self._equity_curve[0].equity
        for point in self._equity_curve:
            if point.equity > peak:
                peak = point.equity
            else:
                worst = max(worst, (peak - point.equity) / peak)
        return worst

    @property
    def last_signals(self) -> dict[str, SignalEvent]:
        """The most recent signal seen for each symbol."""
        return dict(self._last_signals)

    def current_positions(self) -> dict[str, Position]:
        """A copy of every position held, keyed by symbol."""
        return {symbol: replace(pos) for symbol, pos in self._holdings.items()}

    def position(self, symbol: str) -> float:
        """Quantity held in ``symbol``; zero if never traded."""
        held = self._holdings.get(symbol)
        return held.quantity if held is not None else 0.0

    def position_direction(self, symbol: str) -> str:
        """"LONG", "SHORT" or "NONE" for ``symbol``."""
        held = self._holdings.get(symbol)
        if held is not None:
            if held.direction is OrderDirection.BUY:
                return "LONG"
            if held.direction is OrderDirection.SELL:
                return "SHORT"
        return "NONE"

    def last_price(self, symbol: str) -> float:
        """Latest market price of ``symbol``; zero without a data handler."""
        if self.data_handler is None:
            return 0.0
        return self.data_handler.get_latest_bar_value(symbol, "price")

    def latest_bars(self, symbol: str, lookback: int) -> list[Bar]:
        """The ``lookback`` most recent bars of ``symbol`` from the data handler."""
        if self.data_handler is None:
            return []
        return self.data_handler.get_latest_bars(symbol, lookback)

    def real_time_performance(self) -> Performance:
        """Performance metrics over the equity curve and trade log so far."""
        return Performance(
            (p.equity for p in self._equity_curve), self.initial_capital, self._trade_log
        )

    # --- Event handlers ---------------------------------------------------

    def on_signal(self, signal: SignalEvent) -> None:
        """Remember the signal; sizing and orders are left to the risk manager."""
        self._last_signals[signal.symbol] = signal

    def on_market(self, market: MarketEvent) -> None:
        """Re-mark the portfolio on a new market price."""
        self.update_time_index()

    def on_market_regime_changed(self, event: MarketRegimeChangedEvent) -> None:
        """Remember the regime for equity samples and new trades."""
        self._market_state = replace(event.new_state)

    def on_fill(self, fill: FillEvent) -> None:
        """Apply a fill to cash and positions, close trades and log the new one."""
        cost = fill.fill_price * fill.quantity
        buying = fill.direction is OrderDirection.BUY
        self._cash += -cost if buying else cost

        position = self._holdings.setdefault(fill.symbol, Position(symbol=fill.symbol))
        old_quantity = position.quantity
        if buying:
            position.quantity += fill.quantity
            position.direction = OrderDirection.BUY
            if abs(position.quantity) >= _EPSILON:
                old_total_cost = position.average_cost * old_quantity
                position.average_cost = (old_total_cost + cost) / position.quantity
        else:
            position.quantity -= fill.quantity

        if abs(position.quantity) < _EPSILON:
            if buying:
                pnl = (position.average_cost - fill.fill_price) * fill.quantity
            else:
                pnl = (fill.fill_price - position.average_cost) * fill.quantity
            _close_last_open_trade(self._trade_log, fill, pnl)
            for trades in self._strategy_trade_log.values():
                _close_last_open_trade(trades, fill, pnl)
            position.direction = OrderDirection.NONE
            position.average_cost = 0.0

        trade = Trade(
            symbol=fill.symbol,
            direction=fill.direction,
            quantity=fill.quantity,
            entry_price=fill.fill_price,
            entry_timestamp=fill.timestamp,
            market_state_at_entry=replace(self._market_state),
        )
        self._trade_log.append(trade)
        if fill.strategy_name:
            self._strategy_trade_log.setdefault(fill.strategy_name, []).append(replace(trade))

        self.update_time_index()

    def update_time_index(self) -> None:
        """Mark holdings to market and append a sample to the equity curve."""
        holdings_value = 0.0
        for symbol, position in self._holdings.items():
            price = self.last_price(symbol)
            if price > 0:
                position.market_value = position.quantity * price
                holdings_value += position.market_value
            else:
                holdings_value += position.quantity * position.average_cost

        self._total_equity = self._cash + holdings_value
        self._equity_curve.append(
            EquityPoint(time.time_ns(), self._total_equity, replace(self._market_state))
        )

        self._peak_equity = max(self._peak_equity, self._total_equity)
        if self._peak_equity:
            drawdown = (self._peak_equity - self._total_equity) / self._peak_equity
            self._tracked_drawdown = max(self._tracked_drawdown, drawdown)

    # --- Reporting ----------------------------------------------------------

    def generate_report(self) -> str:
        """Return a text summary of performance and trades."""
        lines = [
            "",
            "--- Portfolio Performance Summary ---",
            f"Initial Capital: ${self.initial_capital:.2f}",
            f"Final Equity:    ${self._total_equity:.2f}",
        ]
        if len(self._equity_curve) < 2:
            lines.append("Not enough data for detailed performance metrics.")
            return "\n".join(lines) + "\n"

        perf = Performance(
            (p.equity for p in self._equity_curve), self.initial_capital, self._trade_log
        )
        lines += [
            f"Total Return: {perf.total_return * 100.0:.2f}%",
            f"Max Drawdown: {perf.max_drawdown * 100.0:.2f}%",
            f"Sharpe Ratio: {perf.sharpe_ratio():.2f}",
            "",
            "--- Trade Log ---",
        ]
        if self._trade_log:
            lines.append(f"Total Trades: {len(self._trade_log)}")
        else:
            lines.append("No trades were made.")
        lines.append("-------------------------------------")
        return "\n".join(lines) + "\n"

    def write_results_to_csv(self, filename: PathLike = "portfolio_performance.csv") -> None:
        """Write the equity curve with its regime columns to a CSV file."""
        with open(filename, "w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle, lineterminator="\n")
            writer.writerow(["timestamp", "equity", "vol_regime", "trend_regime"])
            for point in self._equity_curve:
                writer.writerow(
                    [
                        point.timestamp,
                        _fmt(point.equity),
                        int(point.market_state.volatility),
                        int(point.market_state.trend),
                    ]
                )

    def write_trade_log_to_csv(self, filename: PathLike = "trades_log.csv") -> None:
        """Write the per-strategy trade log to a CSV file."""
        with open(filename, "w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle, lineterminator="\n")
            writer.writerow(
                [
                    "strategy",
                    "symbol",
                    "direction",
                    "quantity",
                    "entry_price",
                    "entry_timestamp",
                    "volatility",
                    "trend",
                ]
            )
            for strategy_name, trades in self._strategy_trade_log.items():
                for trade in trades:
                    writer.writerow(
                        [
                            strategy_name,
                            trade.symbol,
                            "BUY" if trade.direction is OrderDirection.BUY else "SELL",
                            _fmt(trade.quantity),
                            _fmt(trade.entry_price),
                            trade.entry_timestamp,
                            int(trade.market_state_at_entry.volatility),
                            int(trade.market_state_at_entry.trend),
                        ]
                    )