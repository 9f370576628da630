"""Running statistics updated one value at a time."""

from __future__ import annotations


class IncrementalMean:
    """Arithmetic mean maintained incrementally."""

    def __init__(self) -> None:
        self._mean = 0.0
        self._count = 0

    def update(self, new_value: float) -> None:
        """Fold a new value into the mean."""
        self._count += 1
        self._mean += (new_value - self._mean) / self._count

    @property
    def mean(self) -> float:
        """The mean of all values seen; zero before any update."""
        return self._mean

    @property
    def count(self) -> int:
        """Number of values seen."""
        return self._count