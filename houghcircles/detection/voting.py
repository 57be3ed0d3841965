"""Gradient-directed Hough voting for circle centers."""

import logging
import queue
import threading
from itertools import islice
from typing import Iterable, List, Optional, Tuple

import numpy as np

from houghcircles.detection.gradient import GradientOracle, GaussianDerivativeGradient
from houghcircles.image import ScalarImage

log = logging.getLogger(__name__)


class VoteCaster:
    """Casts center votes from candidate pixels along their gradient direction.

    Every usable pixel votes for cells at distance r (minimum_radius to
    maximum_radius) on both sides of its edge, within +/- sweep_angle / 2 of
    the gradient direction. Votes carry unit weight; the radius image holds
    the mean radius voted at each cell.
    """

    def __init__(self, minimum_radius: float, maximum_radius: float,
                 sweep_angle: float = 0.0, sigma_gradient: float = 1.0,
                 gradient_oracle: Optional[GradientOracle] = None,
                 min_gradient_magnitude: float = 1e-3, workers: int = 1,
                 chunk_size: int = 4096):
        self.minimum_radius = minimum_radius
        self.maximum_radius = maximum_radius
        self.sweep_angle = sweep_angle
        self.sigma_gradient = sigma_gradient
        self.gradient_oracle = gradient_oracle or GaussianDerivativeGradient()
        self.min_gradient_magnitude = min_gradient_magnitude
        self.workers = workers
        self.chunk_size = chunk_size

    def sample_offsets(self, spacing: Tuple[float, float]) -> Tuple[np.ndarray, np.ndarray]:
        """
        Radius and angular offset samples shared by every voting pixel.

        Radii step by one pixel of the finest axis. For each radius the
        offsets are spaced so neighbouring samples lie one pixel apart on
        the arc, always including offset 0.

        Returns:
            (radii, offsets) as flat arrays of equal length
        """
        step = min(spacing)
        count = int(np.floor((self.maximum_radius - self.minimum_radius) / step + 1e-9)) + 1
        radii, offsets = [], []
        for radius in self.minimum_radius + step * np.arange(max(count, 0)):
            pixel_radius = radius / step
            n = int(np.floor(0.5 * self.sweep_angle * pixel_radius + 1e-9))
            if pixel_radius > 0:
                k = np.arange(-n, n + 1)
                offsets.append(k / pixel_radius)
            else:
                offsets.append(np.zeros(1))
            radii.append(np.full(len(offsets[-1]), radius))
        if not radii:
            return np.zeros(0), np.zeros(0)
        return np.concatenate(radii), np.concatenate(offsets)

    def vote_count(self, spacing: Tuple[float, float] = (1.0, 1.0)) -> int:
        """Upper bound of votes cast by a single pixel with a usable gradient."""
        radii, _ = self.sample_offsets(spacing)
        return 2 * len(radii)

    def cast(self, image: ScalarImage,
             candidates: Iterable[Tuple[int, int]]) -> Tuple[np.ndarray, np.ndarray]:
        """
        Build the accumulator and radius images.

        Args:
            image: Input image
            candidates: (row, col) pixels allowed to vote

        Returns:
            (accumulator, radius_image), both float64 with the image's shape
        """
        votes = np.zeros(image.shape, dtype=np.float64)
        radius_sum = np.zeros(image.shape, dtype=np.float64)
        samples = self.sample_offsets(image.spacing)

        if self.workers > 1:
            self._cast_parallel(image, candidates, samples, votes, radius_sum)
        else:
            for chunk in self._chunks(candidates):
                self._cast_chunk(image, chunk, samples, votes, radius_sum)

        radius_image = np.zeros_like(radius_sum)
        np.divide(radius_sum, votes, out=radius_image, where=votes > 0)

        log.debug("Cast %d votes into %d cells", int(votes.sum()), int(np.count_nonzero(votes)))
        return votes, radius_image

    def _chunks(self, candidates: Iterable[Tuple[int, int]]):
        iterator = iter(candidates)
        while True:
            chunk = list(islice(iterator, self.chunk_size))
            if not chunk:
                return
            yield chunk

    def _cast_parallel(self, image, candidates, samples, votes, radius_sum):
        """Each worker fills private grids; partial sums are merged after join."""
        tasks = queue.Queue(maxsize=2 * self.workers)
        partials = [(np.zeros_like(votes), np.zeros_like(radius_sum))
                    for _ in range(self.workers)]
        errors = []

        def work(partial_votes, partial_radius):
            while True:
                chunk = tasks.get()
                if chunk is None:
                    return
                try:
                    self._cast_chunk(image, chunk, samples, partial_votes, partial_radius)
                except Exception as e:
                    errors.append(e)

        threads = [threading.Thread(target=work, args=partial, daemon=True)
                   for partial in partials]
        for thread in threads:
            thread.start()
        try:
            for chunk in self._chunks(candidates):
                tasks.put(chunk)
        finally:
            for _ in threads:
                tasks.put(None)
            for thread in threads:
                thread.join()

        if errors:
            raise errors[0]

        # Radius sums merge by addition, which weights each partial mean by its vote count
        for partial_votes, partial_radius in partials:
            votes += partial_votes
            radius_sum += partial_radius

    def _usable_directions(self, image: ScalarImage, pixels: List[Tuple[int, int]]):
        """Unit gradient directions in physical space for pixels with a usable gradient."""
        gradients = np.array([self.gradient_oracle.gradient_at(image, p, self.sigma_gradient)
                              for p in pixels], dtype=np.float64).reshape(-1, 2)
        row_spacing, col_spacing = image.spacing
        g_y = gradients[:, 0] / row_spacing
        g_x = gradients[:, 1] / col_spacing
        magnitude = np.hypot(g_y, g_x)
        usable = magnitude > self.min_gradient_magnitude

        index = np.array(pixels, dtype=np.int64).reshape(-1, 2)[usable]
        return (index[:, 0], index[:, 1],
                g_y[usable] / magnitude[usable], g_x[usable] / magnitude[usable])

    def _cast_chunk(self, image, pixels, samples, votes, radius_sum):
        radii, offsets = samples
        rows, cols, u_y, u_x = self._usable_directions(image, pixels)
        if len(rows) == 0 or len(radii) == 0:
            return

        log.debug("Voting with %d of %d candidate pixels", len(rows), len(pixels))
        cos_o, sin_o = np.cos(offsets), np.sin(offsets)
        # Gradient rotated by each offset, shape (pixels, samples)
        d_x = u_x[:, None] * cos_o - u_y[:, None] * sin_o
        d_y = u_x[:, None] * sin_o + u_y[:, None] * cos_o
        row_spacing, col_spacing = image.spacing
        height, width = image.shape

        # The center may lie on either side of the edge
        for sign in (1.0, -1.0):
            center_rows = np.floor(rows[:, None] + sign * radii * d_y / row_spacing + 0.5).astype(np.int64)
            center_cols = np.floor(cols[:, None] + sign * radii * d_x / col_spacing + 0.5).astype(np.int64)
            inside = ((center_rows >= 0) & (center_rows < height) &
                      (center_cols >= 0) & (center_cols < width))

            cells = (center_rows[inside], center_cols[inside])
            np.add.at(votes, cells, 1.0)
            np.add.at(radius_sum, cells, np.broadcast_to(radii, inside.shape)[inside])
