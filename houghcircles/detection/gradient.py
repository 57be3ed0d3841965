"""Gradient direction estimation at candidate pixels."""

import threading
from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np
from scipy import ndimage

from houghcircles.image import ScalarImage


class GradientOracle(ABC):
    """Estimates the intensity gradient at a pixel."""

    @abstractmethod
    def gradient_at(self, image: ScalarImage, index: Tuple[int, int],
                    sigma: float) -> Tuple[float, float]:
        """
        Estimate the gradient at index.

        Args:
            image: Input image
            index: Pixel as (row, col)
            sigma: Smoothing scale in pixels

        Returns:
            (d_row, d_col) in intensity per pixel; (0, 0) when flat
        """

    def clear(self):
        """Forget anything cached from earlier images."""


class GaussianDerivativeGradient(GradientOracle):
    """Derivative-of-Gaussian gradient, computed once per image and scale."""

    def __init__(self, mode: str = 'nearest'):
        self.mode = mode
        self._lock = threading.Lock()
        self._source = None
        self._d_row = None
        self._d_col = None

    def derivatives(self, image: ScalarImage, sigma: float) -> Tuple[np.ndarray, np.ndarray]:
        """Return the row and column derivative images for image at sigma."""
        with self._lock:
            if self._source is None or self._source[0] is not image.array or self._source[1] != sigma:
                self._compute(image.array, sigma)
            return self._d_row, self._d_col

    def _compute(self, data: np.ndarray, sigma: float):
        if sigma > 0:
            self._d_row = ndimage.gaussian_filter(data, sigma, order=(1, 0), mode=self.mode)
            self._d_col = ndimage.gaussian_filter(data, sigma, order=(0, 1), mode=self.mode)
        else:
            self._d_row, self._d_col = np.gradient(data)
        self._source = (data, sigma)

    def gradient_at(self, image: ScalarImage, index: Tuple[int, int],
                    sigma: float) -> Tuple[float, float]:
        d_row, d_col = self.derivatives(image, sigma)
        return float(d_row[index]), float(d_col[index])

    def clear(self):
        """Drop cached derivative images."""
        with self._lock:
            self._source = None
            self._d_row = None
            self._d_col = None
