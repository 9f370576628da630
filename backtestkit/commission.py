"""Commission models for simulated execution."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Commission(ABC):
    """Interface for computing the cost of a transaction."""

    @abstractmethod
    def calculate(self, quantity: float, price: float) -> float:
        """Return the commission for trading ``quantity`` units at ``price``."""


class FixedCommission(Commission):
    """The same fee for every trade, regardless of size or value."""

    def __init__(self, fee: float = 0.0) -> None:
        self.fee_per_trade = fee

    def calculate(self, quantity: float, price: float) -> float:
        """Return the fixed fee."""
        return self.fee_per_trade