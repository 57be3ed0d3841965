"""Circle detection using a gradient-directed Hough transform."""

import logging
import threading
from typing import Any, Dict, Optional, Union

import numpy as np

from houghcircles.detection.circle import CircleList
from houghcircles.detection.extraction import PeakExtractor
from houghcircles.detection.gradient import GradientOracle, GaussianDerivativeGradient
from houghcircles.detection.smoothing import AccumulatorSmoother, GaussianAccumulatorSmoother
from houghcircles.detection.voting import VoteCaster
from houghcircles.errors import DetectionCancelled, HoughConfigurationError, MissingInputError
from houghcircles.image import ScalarImage
from houghcircles.preprocessing.candidates import CandidatePixels

log = logging.getLogger(__name__)

VOTING_OPTIONS = ('minimum_radius', 'maximum_radius', 'threshold', 'sigma_gradient',
                  'sweep_angle', 'min_gradient_magnitude', 'workers')
EXTRACTION_OPTIONS = ('number_of_circles', 'disc_radius_ratio', 'variance')


def _option(name: str, doc: str):
    """Property whose setter marks voting or extraction results as stale."""
    attr = '_' + name

    def getter(self):
        return getattr(self, attr)

    def setter(self, value):
        setattr(self, attr, value)
        if name in VOTING_OPTIONS:
            self._voting_stale = True

    return property(getter, setter, doc=doc)


class CircleDetector:
    """Detects circles (rings or discs) in a 2D scalar image.

    Pixels brighter than threshold vote for candidate centers along their
    gradient direction. The accumulator is blurred and its peaks are taken
    one at a time, each removing a disc of disc_radius_ratio * radius so the
    next peak belongs to a different circle.

    The circle list is cached: get_circles() only extracts again when the
    accumulator has been rebuilt or an extraction option changed.
    """

    minimum_radius = _option('minimum_radius', "Smallest radius searched, in length units.")
    maximum_radius = _option('maximum_radius', "Largest radius searched, in length units.")
    threshold = _option('threshold', "Pixels must be strictly above this intensity to vote.")
    sigma_gradient = _option('sigma_gradient', "Scale of the derivative-of-Gaussian gradient.")
    sweep_angle = _option('sweep_angle', "Angular tolerance around the gradient, in radians.")
    min_gradient_magnitude = _option('min_gradient_magnitude', "Gradients at or below this are flat.")
    workers = _option('workers', "Number of voting threads.")
    number_of_circles = _option('number_of_circles', "Maximum number of circles to extract.")
    disc_radius_ratio = _option('disc_radius_ratio', "Suppression disc radius over circle radius.")
    variance = _option('variance', "Variance of the accumulator blur.")

    def __init__(self, minimum_radius: float = 0.0, maximum_radius: float = 10.0,
                 threshold: float = 0.0, sigma_gradient: float = 1.0,
                 sweep_angle: float = 0.0, variance: float = 10.0,
                 number_of_circles: int = 1, disc_radius_ratio: float = 1.0,
                 min_gradient_magnitude: float = 1e-3, workers: int = 1,
                 gradient_oracle: Optional[GradientOracle] = None,
                 smoother: Optional[AccumulatorSmoother] = None):
        self.minimum_radius = minimum_radius
        self.maximum_radius = maximum_radius
        self.threshold = threshold
        self.sigma_gradient = sigma_gradient
        self.sweep_angle = sweep_angle
        self.variance = variance
        self.number_of_circles = number_of_circles
        self.disc_radius_ratio = disc_radius_ratio
        self.min_gradient_magnitude = min_gradient_magnitude
        self.workers = workers
        self.gradient_oracle = gradient_oracle or GaussianDerivativeGradient()
        self.smoother = smoother or GaussianAccumulatorSmoother()

        self._input = None
        self._accumulator = None
        self._radius_image = None
        self._accumulator_version = 0
        self._voting_stale = True
        self._circles = []
        self._extraction_marker = None
        self._cancel = threading.Event()

        self.verify_parameters()

    @classmethod
    def from_config(cls, config: Dict[str, Any], **kwargs) -> 'CircleDetector':
        """Build a detector from a full config or its 'hough' section."""
        hough = config.get('hough', config)
        return cls(**{**hough, **kwargs})

    def set_radius(self, radius: float):
        """Search a single radius."""
        self.minimum_radius = radius
        self.maximum_radius = radius

    def set_input(self, image: Union[ScalarImage, np.ndarray]):
        """Set the image to search; plain arrays get unit spacing."""
        if not isinstance(image, ScalarImage):
            image = ScalarImage(image)
        self._input = image
        self._voting_stale = True

    @property
    def input(self) -> Optional[ScalarImage]:
        return self._input

    @property
    def accumulator(self) -> Optional[np.ndarray]:
        """Raw vote counts from the last update()."""
        return self._accumulator

    @property
    def radius_image(self) -> Optional[np.ndarray]:
        """Mean voted radius per accumulator cell from the last update()."""
        return self._radius_image

    @property
    def accumulator_version(self) -> int:
        """Incremented once each time the accumulator is rebuilt."""
        return self._accumulator_version

    def verify_parameters(self):
        """Raise HoughConfigurationError for parameters the detector cannot run with."""
        if self.minimum_radius > self.maximum_radius:
            raise HoughConfigurationError(
                f"Minimum radius ({self.minimum_radius}) is greater than "
                f"maximum radius ({self.maximum_radius})")
        for name in ('minimum_radius', 'sigma_gradient', 'sweep_angle', 'variance',
                     'disc_radius_ratio', 'min_gradient_magnitude'):
            if getattr(self, name) < 0:
                raise HoughConfigurationError(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.number_of_circles < 0:
            raise HoughConfigurationError("number_of_circles must be non-negative")
        if self.workers < 1:
            raise HoughConfigurationError("workers must be at least 1")

    def verify_preconditions(self):
        """Check input and parameters before any voting."""
        if self._input is None:
            raise MissingInputError("No input image set")
        self.verify_parameters()

    def cancel(self):
        """Request the current or next run to stop at the next phase boundary."""
        self._cancel.set()

    def _check_cancelled(self, phase: str):
        if self._cancel.is_set():
            self._cancel.clear()
            raise DetectionCancelled(f"Detection cancelled before {phase}")

    def update(self):
        """Rebuild the accumulator and radius image from the input."""
        self.verify_preconditions()
        self._check_cancelled("voting")

        # The input pixels may have changed in place since the last run
        self.gradient_oracle.clear()
        candidates = CandidatePixels(self._input, self.threshold)
        caster = VoteCaster(
            minimum_radius=self.minimum_radius,
            maximum_radius=self.maximum_radius,
            sweep_angle=self.sweep_angle,
            sigma_gradient=self.sigma_gradient,
            gradient_oracle=self.gradient_oracle,
            min_gradient_magnitude=self.min_gradient_magnitude,
            workers=self.workers
        )
        self._accumulator, self._radius_image = caster.cast(self._input, candidates)
        self._accumulator_version += 1
        self._voting_stale = False

        log.info("Accumulator built from %s: max %.1f votes",
                 self._input, float(self._accumulator.max(initial=0.0)))

    def _extraction_key(self):
        return (self._accumulator_version,) + tuple(getattr(self, name) for name in EXTRACTION_OPTIONS)

    def get_circles(self) -> CircleList:
        """
        Return circles strongest first.

        Votes again if the input or a voting option changed; extracts again
        only if the accumulator or an extraction option changed. Otherwise the
        previous list object is returned unchanged.
        """
        if self._voting_stale or self._accumulator is None:
            self.update()

        key = self._extraction_key()
        if key == self._extraction_marker:
            return self._circles

        self._check_cancelled("extraction")
        circles = []
        if self.number_of_circles > 0:
            smoothed = self.smoother.smooth(self._accumulator, self.variance)
            extractor = PeakExtractor(self.number_of_circles, self.disc_radius_ratio)
            circles = extractor.extract(smoothed, self._radius_image,
                                        spacing=self._input.spacing,
                                        origin=self._input.origin,
                                        should_stop=self._cancel.is_set)
            self._check_cancelled("completing extraction")

        self._circles = circles
        self._extraction_marker = key
        log.info("Extracted %d of %d requested circles", len(circles), self.number_of_circles)
        return self._circles

    def detect(self, image: Union[ScalarImage, np.ndarray]) -> CircleList:
        """Set input and return its circles."""
        self.set_input(image)
        return self.get_circles()

    def __repr__(self):
        params = ', '.join(f"{name}={getattr(self, name)!r}"
                           for name in VOTING_OPTIONS + EXTRACTION_OPTIONS)
        return f"{type(self).__name__}({params})"
