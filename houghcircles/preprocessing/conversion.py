"""Conversion of frames into scalar images."""

import cv2
import numpy as np
from typing import Sequence

from houghcircles.image import ScalarImage


def to_gray(frame: np.ndarray) -> np.ndarray:
    """Convert a BGR or BGRA frame to a single channel; 2D input passes through."""
    if frame.ndim == 2:
        return frame
    if frame.ndim == 3 and frame.shape[2] == 1:
        return frame[:, :, 0]
    if frame.ndim == 3 and frame.dtype not in (np.uint8, np.uint16, np.float32):
        # cvtColor only takes 8-bit, 16-bit and float32 color frames
        frame = frame.astype(np.float32)
    if frame.ndim == 3 and frame.shape[2] == 3:
        return cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
    if frame.ndim == 3 and frame.shape[2] == 4:
        return cv2.cvtColor(frame, cv2.COLOR_BGRA2GRAY)
    raise ValueError(f"Unsupported frame shape {frame.shape}")


def to_scalar_image(frame, spacing: Sequence[float] = (1.0, 1.0)) -> ScalarImage:
    """
    Wrap a frame as a ScalarImage.

    Args:
        frame: ScalarImage, 2D array or BGR(A) frame
        spacing: Pixel spacing as (row_spacing, col_spacing), ignored for ScalarImage input

    Returns:
        ScalarImage with float64 intensities
    """
    if isinstance(frame, ScalarImage):
        return frame
    return ScalarImage(to_gray(np.asarray(frame)), spacing=spacing)
