"""Factor exposure by least-squares regression of asset returns on factor returns."""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

ArrayLike = Union[np.ndarray, Sequence[Sequence[float]]]


class FactorExposure:
    """Solves asset_returns = factor_returns @ exposure with the pseudo-inverse."""

    def __init__(self, factor_returns: ArrayLike, asset_returns: ArrayLike) -> None:
        self.factor_returns = np.atleast_2d(np.asarray(factor_returns, dtype=float))
        self.asset_returns = np.atleast_2d(np.asarray(asset_returns, dtype=float))
        if self.factor_returns.shape[0] != self.asset_returns.shape[0]:
            raise ValueError("factor and asset returns must have the same number of periods")
        self._exposure = np.empty((0, 0))

    def calculate_exposure(self) -> np.ndarray:
        """Compute and store the exposure matrix (factors by assets)."""
        self._exposure = np.linalg.pinv(self.factor_returns) @ self.asset_returns
        return self._exposure

    @property
    def exposure(self) -> np.ndarray:
        """The last computed exposure; 0x0 before ``calculate_exposure``."""
        return self._exposure