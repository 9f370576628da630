"""Bull/bear/neutral regime detection from moving-average comparison."""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from .datatypes import Bar


class MarketRegime(Enum):
    """Broad market regime."""

    BULL = "BULL"
    BEAR = "BEAR"
    NEUTRAL = "NEUTRAL"


class RegimeDetector:
    """Compares a short and a long simple moving average of closing prices."""

    def __init__(self, short_window: int, long_window: int) -> None:
        if short_window < 1 or long_window < 1:
            raise ValueError("moving-average windows must be positive")
        self.short_window = short_window
        self.long_window = long_window

    def detect(self, data: Sequence[Bar]) -> MarketRegime:
        """Classify the regime; NEUTRAL until enough bars are available."""
        if len(data) < max(self.short_window, self.long_window):
            return MarketRegime.NEUTRAL
        short_sma = sum(bar.close for bar in data[-self.short_window:]) / self.short_window
        long_sma = sum(bar.close for bar in data[-self.long_window:]) / self.long_window
        if short_sma > long_sma * 1.01:
            return MarketRegime.BULL
        if short_sma < long_sma * 0.99:
            return MarketRegime.BEAR
        return MarketRegime.NEUTRAL