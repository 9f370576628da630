from backtestkit.datatypes import (
    Bar,
    MarketState,
    Order,
    OrderBook,
    OrderBookLevel,
    OrderDirection,
    OrderSide,
    OrderType,
    Trade,
    TrendDirection,
    VolatilityLevel,
)


def test_market_state_defaults():
    state = MarketState()
    assert state.volatility is VolatilityLevel.NORMAL
    assert state.trend is TrendDirection.SIDEWAYS
    assert state.volatility_value == 0.0


def test_regime_enums_order_as_integers():
    assert [int(v) for v in VolatilityLevel] == [0, 1, 2]
    assert [int(t) for t in TrendDirection] == [0, 1, 2]
    assert VolatilityLevel(0) is VolatilityLevel.LOW
    assert VolatilityLevel(2) is VolatilityLevel.HIGH
    assert TrendDirection(1) is TrendDirection.TRENDING_UP
    assert TrendDirection(2) is TrendDirection.TRENDING_DOWN
    assert VolatilityLevel.LOW < VolatilityLevel.HIGH
    state = MarketState(volatility=VolatilityLevel(2), trend=TrendDirection(1))
    assert int(state.volatility) == 2
    assert int(state.trend) == 1


def test_bar_defaults_and_fields():
    bar = Bar()
    assert bar.symbol == "" and bar.timestamp == ""
    assert bar.volume == 0
    custom = Bar(symbol="BTC/USDT", close=10.5, volume=7)
    assert custom.close == 10.5
    assert custom.volume == 7


def test_trade_market_state_is_independent_per_instance():
    first = Trade()
    second = Trade()
    first.market_state_at_entry.volatility = VolatilityLevel.HIGH
    assert second.market_state_at_entry.volatility is VolatilityLevel.NORMAL
    assert first.direction is OrderDirection.NONE
    assert first.pnl == 0.0


def test_order_book_lists_are_independent():
    a = OrderBook(symbol="X")
    b = OrderBook(symbol="Y")
    a.bids.append((1.0, 2.0))
    assert b.bids == []
    assert a.bids == [(1.0, 2.0)]


def test_order_book_level_holds_values():
    level = OrderBookLevel(101.5, 3.0)
    assert level.price == 101.5
    assert level.quantity == 3.0
    assert level == OrderBookLevel(price=101.5, quantity=3.0)


def test_order_defaults():
    order = Order()
    assert order.side is OrderSide.BUY
    assert order.type is OrderType.LIMIT
    assert order.order_id == 0