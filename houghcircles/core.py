"""
Circle Processor
Main entry point for circle detection on frames and image files
"""

from typing import Dict, Any, Optional, Union
from datetime import datetime
from pathlib import Path
import logging
import time

import numpy as np

from houghcircles import __version__
from houghcircles.config import DEFAULT_CONFIG, merge_config, validate_config
from houghcircles.detection.circle_detector import CircleDetector
from houghcircles.preprocessing.conversion import to_scalar_image
from houghcircles.utils.io_handler import load_image
from houghcircles.utils.metrics import PerformanceMetrics

log = logging.getLogger(__name__)


class CircleProcessor:
    """Runs circle detection and packages the results"""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize circle processor

        Args:
            config: Configuration dictionary merged over DEFAULT_CONFIG (optional)

        Raises:
            HoughConfigurationError: If the configuration is invalid
        """
        self.config = validate_config(merge_config(DEFAULT_CONFIG, config or {}))
        self.version = __version__
        self.spacing = tuple(self.config["io"]["spacing"])
        self.detector = CircleDetector.from_config(self.config)
        self.metrics = PerformanceMetrics()

    def process_frame(self, frame_input: Union[str, Path, np.ndarray]) -> Dict[str, Any]:
        """
        Detect circles in a single frame

        Args:
            frame_input: Path to image file, ScalarImage or numpy array

        Returns:
            Dictionary containing detection results
        """
        start_time = time.time()

        if isinstance(frame_input, (str, Path)):
            frame_id = Path(frame_input).stem
        else:
            frame_id = f"frame_{int(time.time())}"

        try:
            # Step 1: Load and convert
            if isinstance(frame_input, (str, Path)):
                image = load_image(frame_input, spacing=self.spacing)
            else:
                image = to_scalar_image(frame_input, spacing=self.spacing)

            # Step 2: Vote
            self.metrics.start_timer("voting")
            self.detector.set_input(image)
            self.detector.update()
            self.metrics.stop_timer("voting")

            # Step 3: Extract
            self.metrics.start_timer("extraction")
            circles = self.detector.get_circles()
            self.metrics.stop_timer("extraction")

            candidates = int(np.count_nonzero(image.array > self.detector.threshold))
            warnings = []
            if candidates == 0:
                warnings.append("No pixel above threshold")
            if len(circles) < self.detector.number_of_circles:
                warnings.append(f"Found {len(circles)} of {self.detector.number_of_circles} requested circles")

            processing_time = (time.time() - start_time) * 1000

            return {
                "system": "houghcircles",
                "version": self.version,
                "timestamp": datetime.now().isoformat(),
                "frame_id": frame_id,
                "status": "success" if circles else "no_circles",

                "detection": {
                    "circles": [circle.to_dict() for circle in circles],
                    "circles_detected": len(circles),
                    "candidates": candidates,
                    "accumulator_max": round(float(self.detector.accumulator.max(initial=0.0)), 2),
                },

                "processing_metadata": {
                    "processing_time_ms": round(processing_time, 2),
                    "timings_ms": {k: round(v, 2) for k, v in self.metrics.get_summary().items()},
                    "image_size": {
                        "width": image.shape[1],
                        "height": image.shape[0]
                    },
                    "spacing": list(image.spacing),
                    "warnings": warnings,
                    "errors": []
                }
            }

        except Exception as e:
            log.exception("Circle detection failed for %s", frame_id)
            return {
                "system": "houghcircles",
                "version": self.version,
                "timestamp": datetime.now().isoformat(),
                "frame_id": frame_id,
                "status": "failed",
                "detection": {
                    "circles": [],
                    "circles_detected": 0,
                },
                "processing_metadata": {
                    "processing_time_ms": (time.time() - start_time) * 1000,
                    "errors": [str(e)]
                }
            }
