"""Interface for components that supply market data."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

from .datatypes import Bar, OrderBook


class DataHandler(ABC):
    """Provides market data and feeds market events in chronological order."""

    _on_new_data: Optional[Callable[[], None]] = None

    @abstractmethod
    def update_bars(self) -> None:
        """Advance the feed, pushing new market events."""

    @abstractmethod
    def is_finished(self) -> bool:
        """Return True when all data has been processed."""

    @abstractmethod
    def get_latest_bar(self, symbol: str) -> Optional[Bar]:
        """Return the most recent bar for ``symbol``, if any."""

    @abstractmethod
    def get_latest_bar_value(self, symbol: str, val_type: str) -> float:
        """Return one field of the latest bar for ``symbol``."""

    @abstractmethod
    def get_latest_bars(self, symbol: str, n: int = 1) -> list[Bar]:
        """Return the ``n`` most recent bars for ``symbol``."""

    @abstractmethod
    def get_latest_order_book(self, symbol: str) -> Optional[OrderBook]:
        """Return the latest order book for ``symbol``, if any."""

    @property
    @abstractmethod
    def symbols(self) -> list[str]:
        """The symbols this handler manages."""

    def notify_on_new_data(self, callback: Callable[[], None]) -> None:
        """Register a callback invoked whenever new data arrives."""
        self._on_new_data = callback

    def _signal_new_data(self) -> None:
        if self._on_new_data is not None:
            self._on_new_data()