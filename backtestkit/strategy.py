"""Base class for trading strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from .datahandler import DataHandler
from .datatypes import MarketState
from .events import (
    Event,
    FillEvent,
    MarketEvent,
    MarketRegimeChangedEvent,
    OrderBookEvent,
    TradeEvent,
)
from .queues import ThreadSafeQueue


class Strategy(ABC):
    """A trading strategy reacting to market events and emitting signals."""

    def __init__(
        self,
        event_queue: ThreadSafeQueue[Event],
        data_handler: Optional[DataHandler],
        name: str,
        symbol: str,
    ) -> None:
        self.event_queue = event_queue
        self.data_handler = data_handler
        self.name = name
        self.symbol = symbol
        self.market_state = MarketState()
        self._paused = False

    @abstractmethod
    def on_market(self, event: MarketEvent) -> None:
        """Handle a new market price."""

    @abstractmethod
    def on_trade(self, event: TradeEvent) -> None:
        """Handle an exchange trade."""

    @abstractmethod
    def on_order_book(self, event: OrderBookEvent) -> None:
        """Handle an order book update."""

    @abstractmethod
    def on_fill(self, event: FillEvent) -> None:
        """Handle a fill of one of this strategy's orders."""

    def on_market_regime_changed(self, event: MarketRegimeChangedEvent) -> None:
        """Record the new market regime."""
        self.market_state = event.new_state

    @property
    def is_paused(self) -> bool:
        """True while the strategy is paused."""
        return self._paused

    def pause(self) -> None:
        """Stop the strategy from trading."""
        self._paused = True

    def resume(self) -> None:
        """Let the strategy trade again."""
        self._paused = False