"""Visualization utilities for debugging and display."""

import cv2
import numpy as np
from typing import Sequence, Tuple

from houghcircles.detection.circle import Circle


def to_bgr(image: np.ndarray) -> np.ndarray:
    """Scale a scalar image to uint8 BGR for drawing."""
    if image.ndim == 3:
        return image.copy()
    scaled = cv2.normalize(image.astype(np.float32), None, 0, 255, cv2.NORM_MINMAX)
    return cv2.cvtColor(scaled.astype(np.uint8), cv2.COLOR_GRAY2BGR)


def draw_circles(image: np.ndarray, circles: Sequence[Circle], 
                spacing: Sequence[float] = (1.0, 1.0),
                color: Tuple[int, int, int] = (255, 0, 0), 
                thickness: int = 2) -> np.ndarray:
    """Draw detected circles on image."""
    output = to_bgr(image)
    for circle in circles:
        x, y, r = circle.as_xyr(spacing)
        cv2.circle(output, (x, y), r, color, thickness)
        cv2.circle(output, (x, y), 2, (0, 0, 255), 3)
        cv2.putText(output, str(circle.id), (x + 4, y - 4),
                   cv2.FONT_HERSHEY_SIMPLEX, 0.4, (0, 255, 255), 1)
    return output


def render_accumulator(accumulator: np.ndarray, 
                      colormap: int = cv2.COLORMAP_INFERNO) -> np.ndarray:
    """Render vote counts as a color-mapped image."""
    scaled = cv2.normalize(accumulator.astype(np.float32), None, 0, 255, cv2.NORM_MINMAX)
    return cv2.applyColorMap(scaled.astype(np.uint8), colormap)


def render_radius_image(radius_image: np.ndarray, minimum_radius: float, 
                       maximum_radius: float) -> np.ndarray:
    """Render radius estimates over [minimum_radius, maximum_radius]; unvoted cells stay black."""
    span = max(maximum_radius - minimum_radius, 1e-9)
    scaled = np.clip((radius_image - minimum_radius) / span, 0, 1) * 255
    rendered = cv2.applyColorMap(scaled.astype(np.uint8), cv2.COLORMAP_JET)
    rendered[radius_image == 0] = 0
    return rendered
