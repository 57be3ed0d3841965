"""
Configuration management for houghcircles
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from houghcircles.errors import HoughConfigurationError

DEFAULT_CONFIG = {
    "hough": {
        "minimum_radius": 0.0,
        "maximum_radius": 10.0,
        "threshold": 0.0,
        "sigma_gradient": 1.0,
        "sweep_angle": 0.0,
        "variance": 10.0,
        "number_of_circles": 1,
        "disc_radius_ratio": 1.0,
        "min_gradient_magnitude": 1e-3,
        "workers": 1
    },
    "io": {
        "spacing": [1.0, 1.0],
        "output_dir": "output"
    },
    "logging": {
        "level": "INFO",
        "log_file": None
    }
}


def merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge overrides into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Check the hough section for values the detector cannot run with."""
    hough = config.get("hough", {})
    unknown = set(hough) - set(DEFAULT_CONFIG["hough"])
    if unknown:
        raise HoughConfigurationError(f"Unknown hough options: {sorted(unknown)}")

    if hough.get("minimum_radius", 0) > hough.get("maximum_radius", 0):
        raise HoughConfigurationError(
            f"minimum_radius ({hough['minimum_radius']}) is greater than "
            f"maximum_radius ({hough['maximum_radius']})")

    for key in ("minimum_radius", "sigma_gradient", "sweep_angle", "variance",
                "disc_radius_ratio", "min_gradient_magnitude"):
        if key in hough and hough[key] < 0:
            raise HoughConfigurationError(f"{key} must be non-negative, got {hough[key]}")

    if hough.get("number_of_circles", 0) < 0:
        raise HoughConfigurationError("number_of_circles must be non-negative")
    if hough.get("workers", 1) < 1:
        raise HoughConfigurationError("workers must be at least 1")

    return config


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file merged over the defaults.

    Args:
        config_path: Path to YAML file (optional)

    Returns:
        Validated configuration dictionary
    """
    if config_path is None:
        return validate_config(copy.deepcopy(DEFAULT_CONFIG))

    with open(config_path, 'r') as f:
        overrides = yaml.safe_load(f) or {}

    if not isinstance(overrides, dict):
        raise HoughConfigurationError(f"Config file {config_path} must contain a mapping")

    return validate_config(merge_config(DEFAULT_CONFIG, overrides))
