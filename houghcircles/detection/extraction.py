"""Iterative extraction of circles from a smoothed accumulator."""

import logging
from enum import Enum
from typing import Callable, Iterator, Optional, Sequence, Tuple

import numpy as np

from houghcircles.detection.circle import Circle, CircleList

log = logging.getLogger(__name__)


class ExtractorState(Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    SUPPRESSING = "suppressing"
    DONE = "done"


class PeakExtractor:
    """Repeatedly takes the strongest accumulator cell and suppresses a disc around it."""

    def __init__(self, number_of_circles: int = 1, disc_radius_ratio: float = 1.0):
        """
        Initialize peak extractor.

        Args:
            number_of_circles: Maximum number of circles to extract
            disc_radius_ratio: Multiplier on a found radius giving the suppression disc
        """
        self.number_of_circles = number_of_circles
        self.disc_radius_ratio = disc_radius_ratio
        self.state = ExtractorState.IDLE
        self.exhausted = False

    def iter_circles(self, accumulator: np.ndarray, radius_image: np.ndarray,
                     spacing: Sequence[float] = (1.0, 1.0),
                     origin: Sequence[float] = (0.0, 0.0),
                     should_stop: Optional[Callable[[], bool]] = None) -> Iterator[Circle]:
        """
        Yield circles strongest first, mutating accumulator in place.

        Each circle is yielded after its disc has been zeroed. should_stop is
        checked only between iterations, never between a peak and its
        suppression.
        """
        self.state = ExtractorState.IDLE
        self.exhausted = False
        found = 0

        while found < self.number_of_circles:
            if should_stop is not None and should_stop():
                break

            self.state = ExtractorState.SCANNING
            # argmax returns the first maximum in row-major order
            flat = int(np.argmax(accumulator))
            peak = np.unravel_index(flat, accumulator.shape)
            value = float(accumulator[peak])
            if value <= 0:
                self.exhausted = True
                log.debug("Accumulator exhausted after %d circles", found)
                break

            index = (int(peak[0]), int(peak[1]))
            radius = float(radius_image[index])
            circle = Circle(
                index=index,
                center=(origin[0] + index[0] * spacing[0], origin[1] + index[1] * spacing[1]),
                radius=radius,
                votes=value,
                id=found
            )

            self.state = ExtractorState.SUPPRESSING
            suppress_disc(accumulator, index, self.disc_radius_ratio * radius, spacing)
            found += 1
            log.debug("Circle %d at %s, radius %.2f, votes %.2f", circle.id, index, radius, value)
            yield circle

        self.state = ExtractorState.DONE

    def extract(self, accumulator: np.ndarray, radius_image: np.ndarray,
                spacing: Sequence[float] = (1.0, 1.0),
                origin: Sequence[float] = (0.0, 0.0),
                should_stop: Optional[Callable[[], bool]] = None) -> CircleList:
        """Extract up to number_of_circles circles as a list."""
        return list(self.iter_circles(accumulator, radius_image, spacing, origin, should_stop))


def suppress_disc(accumulator: np.ndarray, index: Tuple[int, int], radius: float,
                  spacing: Sequence[float] = (1.0, 1.0)):
    """Zero every cell within physical distance radius of index, index included."""
    row, col = index
    reach_rows = int(np.floor(radius / spacing[0]))
    reach_cols = int(np.floor(radius / spacing[1]))
    top, bottom = max(row - reach_rows, 0), min(row + reach_rows + 1, accumulator.shape[0])
    left, right = max(col - reach_cols, 0), min(col + reach_cols + 1, accumulator.shape[1])

    d_y = (np.arange(top, bottom) - row)[:, None] * spacing[0]
    d_x = (np.arange(left, right) - col)[None, :] * spacing[1]
    inside = d_y ** 2 + d_x ** 2 <= radius ** 2

    accumulator[top:bottom, left:right][inside] = 0
