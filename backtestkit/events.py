"""Events passed between the components of the trading system."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar

from .datatypes import MarketState, OrderBook, OrderBookLevel, OrderDirection, OrderType


class EventType(Enum):
    """Kinds of events flowing through the event queue."""

    MARKET = auto()
    SIGNAL = auto()
    ORDER = auto()
    FILL = auto()
    TRADE = auto()
    ORDER_BOOK = auto()
    MARKET_REGIME_CHANGED = auto()
    DATA_SOURCE_STATUS = auto()
    NEWS = auto()
    UNKNOWN = auto()


@dataclass
class Event:
    """Base class for all events."""

    type: ClassVar[EventType] = EventType.UNKNOWN
    timestamp_received: int = field(default=0, kw_only=True)


@dataclass
class MarketEvent(Event):
    """A new market price for a symbol."""

    type: ClassVar[EventType] = EventType.MARKET
    symbol: str
    timestamp: int
    price: float


@dataclass
class TradeEvent(Event):
    """An executed trade observed on the exchange."""

    type: ClassVar[EventType] = EventType.TRADE
    symbol: str
    timestamp: int
    price: float
    quantity: float
    aggressor_side: str


@dataclass
class SignalEvent(Event):
    """A trading signal emitted by a strategy."""

    type: ClassVar[EventType] = EventType.SIGNAL
    strategy_name: str
    symbol: str
    timestamp: int
    direction: OrderDirection
    stop_loss: float
    strength: float = 1.0


@dataclass
class NewsEvent(Event):
    """A news headline with a sentiment score."""

    type: ClassVar[EventType] = EventType.NEWS
    symbol: str
    timestamp: str
    headline: str
    sentiment_score: float


_order_ids = itertools.count(1)


def _next_order_id() -> int:
    return next(_order_ids)


@dataclass
class OrderEvent(Event):
    """An order sent to the execution handler; ids are assigned sequentially."""

    type: ClassVar[EventType] = EventType.ORDER
    symbol: str
    timestamp: int
    direction: OrderDirection
    quantity: float
    order_type: OrderType
    strategy_name: str
    order_id: int = field(init=False, default_factory=_next_order_id)


@dataclass
class FillEvent(Event):
    """A filled order reported back to the portfolio."""

    type: ClassVar[EventType] = EventType.FILL
    timestamp: int
    symbol: str
    strategy_name: str
    direction: OrderDirection
    quantity: float
    fill_price: float
    commission: float


class DataSourceStatus(Enum):
    """Connection state of a market data source."""

    CONNECTED = auto()
    DISCONNECTED = auto()
    RECONNECTING = auto()
    FALLBACK_ACTIVE = auto()


@dataclass
class DataSourceStatusEvent(Event):
    """A change in the state of a data source."""

    type: ClassVar[EventType] = EventType.DATA_SOURCE_STATUS
    status: DataSourceStatus
    message: str


@dataclass
class MarketRegimeChangedEvent(Event):
    """Announces a new market regime."""

    type: ClassVar[EventType] = EventType.MARKET_REGIME_CHANGED
    new_state: MarketState


@dataclass
class OrderFailureEvent(Event):
    """A rejected or failed order."""

    type: ClassVar[EventType] = EventType.ORDER
    timestamp: int
    symbol: str
    order_id: int
    reason: str


@dataclass
class OrderBookEvent(Event):
    """An order book update made of bid and ask levels."""

    type: ClassVar[EventType] = EventType.ORDER_BOOK
    symbol: str
    timestamp: int
    bid_levels: list[OrderBookLevel] = field(default_factory=list)
    ask_levels: list[OrderBookLevel] = field(default_factory=list)

    def add_bid_level(self, price: float, quantity: float) -> None:
        """Append a bid level."""
        self.bid_levels.append(OrderBookLevel(price, quantity))

    def add_ask_level(self, price: float, quantity: float) -> None:
        """Append an ask level."""
        self.ask_levels.append(OrderBookLevel(price, quantity))

    @classmethod
    def from_order_book(cls, book: OrderBook) -> OrderBookEvent:
        """Build an event from an order book snapshot."""
        return cls(
            symbol=book.symbol,
            timestamp=book.timestamp,
            bid_levels=[OrderBookLevel(p, q) for p, q in book.bids],
            ask_levels=[OrderBookLevel(p, q) for p, q in book.asks],
        )