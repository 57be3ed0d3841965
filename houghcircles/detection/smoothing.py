"""Accumulator blurring before peak extraction."""

from abc import ABC, abstractmethod

import numpy as np
from scipy import ndimage


class AccumulatorSmoother(ABC):
    """Blurs an accumulator into a new grid of the same shape."""

    @abstractmethod
    def smooth(self, accumulator: np.ndarray, variance: float) -> np.ndarray:
        """Return a smoothed, non-negative copy of accumulator."""


class GaussianAccumulatorSmoother(AccumulatorSmoother):
    """Discrete Gaussian blur with zero-flux boundaries."""

    def __init__(self, truncate: float = 4.0):
        self.truncate = truncate

    def smooth(self, accumulator: np.ndarray, variance: float) -> np.ndarray:
        data = np.asarray(accumulator, dtype=np.float64)
        if variance <= 0:
            return data.copy()

        smoothed = ndimage.gaussian_filter(data, sigma=np.sqrt(variance),
                                           mode='nearest', truncate=self.truncate)
        # Rounding can leave tiny negatives next to empty regions
        np.clip(smoothed, 0.0, None, out=smoothed)
        return smoothed
