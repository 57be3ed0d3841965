"""Scalar 2D image with physical spacing."""

import numpy as np
from typing import Tuple, Sequence


class ScalarImage:
    """2D intensity grid indexed [row, col] with per-axis spacing."""

    def __init__(self, array: np.ndarray, spacing: Sequence[float] = (1.0, 1.0),
                 origin: Sequence[float] = (0.0, 0.0)):
        """
        Initialize scalar image.

        Args:
            array: 2D array of intensities
            spacing: Physical size of a pixel as (row_spacing, col_spacing)
            origin: Physical position of index (0, 0) as (y, x)
        """
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValueError(f"Expected a 2D image, got shape {array.shape}")
        if len(spacing) != 2 or min(spacing) <= 0:
            raise ValueError(f"Spacing must be two positive values, got {spacing}")

        self.array = np.array(array, dtype=np.float64)
        self.spacing = (float(spacing[0]), float(spacing[1]))
        self.origin = (float(origin[0]), float(origin[1]))

    @property
    def shape(self) -> Tuple[int, int]:
        return self.array.shape

    def is_inside(self, index: Tuple[int, int]) -> bool:
        """Check if index lies within the image."""
        row, col = index
        return 0 <= row < self.shape[0] and 0 <= col < self.shape[1]

    def index_to_physical(self, index: Tuple[float, float]) -> Tuple[float, float]:
        """Convert (row, col) index to physical (y, x)."""
        return (self.origin[0] + index[0] * self.spacing[0],
                self.origin[1] + index[1] * self.spacing[1])

    def physical_to_index(self, point: Tuple[float, float]) -> Tuple[int, int]:
        """Convert physical (y, x) to the nearest (row, col) index, rounding half up."""
        row = np.floor((point[0] - self.origin[0]) / self.spacing[0] + 0.5)
        col = np.floor((point[1] - self.origin[1]) / self.spacing[1] + 0.5)
        return int(row), int(col)

    def __repr__(self):
        return f"ScalarImage(shape={self.shape}, spacing={self.spacing}, origin={self.origin})"
