"""
houghcircles - circle detection with a gradient-directed Hough transform.
"""

__version__ = '1.0.0'

from .image import ScalarImage
from .detection.circle import Circle
from .detection.circle_detector import CircleDetector
from .core import CircleProcessor

__all__ = ['ScalarImage', 'Circle', 'CircleDetector', 'CircleProcessor']
