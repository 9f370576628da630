"""Core market data types shared across the backtesting engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum


class OrderDirection(Enum):
    """Direction of an order or trade."""

    BUY = "BUY"
    SELL = "SELL"
    NONE = "NONE"


class VolatilityLevel(IntEnum):
    """Coarse classification of market volatility."""

    LOW = 0
    NORMAL = 1
    HIGH = 2


class TrendDirection(IntEnum):
    """Coarse classification of the prevailing trend."""

    SIDEWAYS = 0
    TRENDING_UP = 1
    TRENDING_DOWN = 2


@dataclass
class MarketState:
    """Snapshot of the current market regime."""

    volatility: VolatilityLevel = VolatilityLevel.NORMAL
    trend: TrendDirection = TrendDirection.SIDEWAYS
    volatility_value: float = 0.0


@dataclass
class Bar:
    """One OHLCV bar for a symbol."""

    symbol: str = ""
    timestamp: str = ""
    open: float = 0.0
    high: float = 0.0
    low: float = 0.0
    close: float = 0.0
    volume: int = 0


@dataclass
class Trade:
    """An executed trade, with entry/exit bookkeeping for analysis."""

    symbol: str = ""
    timestamp: int = 0
    price: float = 0.0
    quantity: float = 0.0
    aggressor_side: str = ""
    direction: OrderDirection = OrderDirection.NONE
    entry_price: float = 0.0
    exit_price: float = 0.0
    entry_timestamp: int = 0
    exit_timestamp: int = 0
    pnl: float = 0.0
    market_state_at_entry: MarketState = field(default_factory=MarketState)


@dataclass(frozen=True)
class OrderBookLevel:
    """A single price level of an order book."""

    price: float
    quantity: float


@dataclass
class OrderBook:
    """A full order book snapshot; levels are (price, quantity) pairs."""

    symbol: str = ""
    timestamp: int = 0
    bids: list[tuple[float, float]] = field(default_factory=list)
    asks: list[tuple[float, float]] = field(default_factory=list)


class OrderSide(Enum):
    """Side of an exchange order."""

    BUY = "BUY"
    SELL = "SELL"


class OrderType(Enum):
    """Type of an exchange order."""

    MARKET = "MARKET"
    LIMIT = "LIMIT"


@dataclass
class Order:
    """A single order to be placed on an exchange."""

    order_id: int = 0
    symbol: str = ""
    side: OrderSide = OrderSide.BUY
    type: OrderType = OrderType.LIMIT
    price: float = 0.0
    quantity: float = 0.0