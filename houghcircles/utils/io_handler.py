"""I/O handling for images and JSON output."""

import cv2
import json
import numpy as np
from pathlib import Path
from typing import Dict, Sequence

from houghcircles.image import ScalarImage


class JSONWriter:
    """Write detection results to JSON."""
    
    @staticmethod
    def save_results(output_dict: Dict, output_path: str, indent: int = 2):
        """Save results to JSON file."""
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            json.dump(output_dict, f, indent=indent)
    
    @staticmethod
    def load_results(input_path: str) -> Dict:
        """Load results from JSON file."""
        with open(input_path, 'r') as f:
            return json.load(f)


def save_image(image: np.ndarray, output_path: str):
    """Save image to file."""
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(output_path, image)


def load_image(image_path: str, spacing: Sequence[float] = (1.0, 1.0)) -> ScalarImage:
    """Load image from file as a grayscale ScalarImage."""
    data = cv2.imread(str(image_path), cv2.IMREAD_GRAYSCALE)
    if data is None:
        raise ValueError(f"Failed to load image from {image_path}")
    return ScalarImage(data, spacing=spacing)
