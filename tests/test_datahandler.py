import pytest

from backtestkit.datahandler import DataHandler
from backtestkit.datatypes import Bar, OrderBook


class ListDataHandler(DataHandler):
    def __init__(self, bars):
        self._pending = list(bars)
        self._seen = []

    def update_bars(self):
        if self._pending:
            self._seen.append(self._pending.pop(0))
            self._signal_new_data()

    def is_finished(self):
        return not self._pending

    def get_latest_bar(self, symbol):
        matches = [b for b in self._seen if b.symbol == symbol]
        return matches[-1] if matches else None

    def get_latest_bar_value(self, symbol, val_type):
        bar = self.get_latest_bar(symbol)
        return getattr(bar, val_type) if bar else 0.0

    def get_latest_bars(self, symbol, n=1):
        return [b for b in self._seen if b.symbol == symbol][-n:]

    def get_latest_order_book(self, symbol):
        return OrderBook(symbol=symbol)

    @property
    def symbols(self):
        return sorted({b.symbol for b in self._seen + self._pending})


def test_data_handler_is_abstract():
    with pytest.raises(TypeError):
        DataHandler()


def test_notify_on_new_data_invokes_callback():
    handler = ListDataHandler([Bar(symbol="A", close=1.0), Bar(symbol="A", close=2.0)])
    calls = []
    handler.notify_on_new_data(lambda: calls.append(handler.get_latest_bar_value("A", "close")))
    handler.update_bars()
    handler.update_bars()
    assert calls == [1.0, 2.0]
    assert handler.is_finished()


def test_update_without_callback_still_advances():
    handler = ListDataHandler([Bar(symbol="A", close=3.0)])
    handler.update_bars()
    assert handler.get_latest_bar("A").close == 3.0


def test_latest_bars_default_to_one():
    handler = ListDataHandler([Bar(symbol="A", close=c) for c in (1.0, 2.0, 3.0)])
    for _ in range(3):
        handler.update_bars()
    assert [b.close for b in handler.get_latest_bars("A")] == [3.0]
    assert [b.close for b in handler.get_latest_bars("A", 2)] == [2.0, 3.0]
    assert handler.symbols == ["A"]