"""Selection of pixels allowed to vote."""

import numpy as np
from typing import Iterator, Tuple

from houghcircles.image import ScalarImage


class CandidatePixels:
    """Pixels whose intensity is strictly above a threshold.

    Iterating yields (row, col) tuples in row-major order. Each call to
    iter() starts a fresh scan, so the sequence can be consumed repeatedly.
    """

    def __init__(self, image: ScalarImage, threshold: float):
        self.image = image
        self.threshold = threshold

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        for row, values in enumerate(self.image.array):
            for col in np.flatnonzero(values > self.threshold):
                yield row, int(col)

    def __len__(self) -> int:
        return int(np.count_nonzero(self.image.array > self.threshold))


def select_candidates(image: ScalarImage, threshold: float) -> CandidatePixels:
    """Convenience function for candidate selection."""
    return CandidatePixels(image, threshold)
