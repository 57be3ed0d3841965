"""Integration tests for complete detection runs."""

import pytest
import numpy as np
import cv2
from houghcircles.image import ScalarImage
from houghcircles.detection.circle_detector import CircleDetector
from houghcircles.core import CircleProcessor
from houghcircles.errors import HoughConfigurationError
from houghcircles.utils.metrics import AccuracyMetrics


def draw_rings(size, rings, thickness=3, background=20, intensity=200):
    """Rings given as (x, y, radius) on a uniform background."""
    image = np.full((size, size), background, dtype=np.uint8)
    for x, y, r in rings:
        cv2.circle(image, (x, y), r, intensity, thickness)
    return image


class TestIntegration:
    """Test complete detection on synthetic images."""

    def test_single_ring(self):
        """Test one ring of radius 20 centered at (50, 50)."""
        image = draw_rings(101, [(50, 50, 20)])
        detector = CircleDetector(minimum_radius=15, maximum_radius=25, threshold=100,
                                  number_of_circles=1)
        circles = detector.detect(image)

        assert len(circles) == 1
        circle = circles[0]
        assert abs(circle.center[0] - 50) <= 2
        assert abs(circle.center[1] - 50) <= 2
        assert abs(circle.radius - 20) <= 2

    def test_threshold_above_ring(self):
        """Test no candidates means no circles and an empty accumulator."""
        image = draw_rings(101, [(50, 50, 20)])
        detector = CircleDetector(minimum_radius=15, maximum_radius=25, threshold=250,
                                  number_of_circles=1)
        circles = detector.detect(image)

        assert circles == []
        assert detector.accumulator.sum() == 0

    def test_two_rings(self):
        """Test two separated rings are both found with their radii."""
        image = draw_rings(160, [(40, 50, 10), (115, 100, 15)])
        detector = CircleDetector(minimum_radius=6, maximum_radius=19, threshold=100,
                                  variance=2.0, number_of_circles=2)
        circles = detector.detect(image)

        assert len(circles) == 2
        truth = [(50, 40, 10), (100, 115, 15)]
        matches, scores = AccuracyMetrics.match_circles(circles, truth, 2.0, 2.0)
        assert len(matches) == 2
        assert scores['recall'] == 1.0
        assert circles[0].votes >= circles[1].votes

    def test_fewer_rings_than_requested(self):
        """Test extraction stops when the evidence runs out."""
        image = draw_rings(200, [(50, 50, 12), (145, 145, 12)])
        detector = CircleDetector(minimum_radius=10, maximum_radius=14, threshold=100,
                                  variance=1.0, disc_radius_ratio=4.0, number_of_circles=5)
        circles = detector.detect(image)

        assert len(circles) == 2
        centers = sorted(c.index for c in circles)
        assert abs(centers[0][0] - 50) <= 2 and abs(centers[0][1] - 50) <= 2
        assert abs(centers[1][0] - 145) <= 2 and abs(centers[1][1] - 145) <= 2

    def test_bright_disc(self):
        """Test a filled disc brighter than its surroundings is found."""
        image = np.zeros((90, 90), dtype=np.uint8)
        cv2.circle(image, (45, 40), 15, 200, -1)
        detector = CircleDetector(minimum_radius=10, maximum_radius=20, threshold=100,
                                  min_gradient_magnitude=10.0)
        circles = detector.detect(image)

        assert len(circles) == 1
        assert abs(circles[0].index[0] - 40) <= 2
        assert abs(circles[0].index[1] - 45) <= 2
        assert 10 <= circles[0].radius <= 20

    def test_anisotropic_ring(self):
        """Test radii are reported in physical units."""
        # Rows are twice as far apart: a circle of radius 20 spans 10 rows
        image = np.full((60, 100), 20, dtype=np.uint8)
        cv2.ellipse(image, (50, 30), (20, 10), 0, 0, 360, 200, 3)
        detector = CircleDetector(minimum_radius=15, maximum_radius=25, threshold=100,
                                  variance=2.0)
        circles = detector.detect(ScalarImage(image, spacing=(2.0, 1.0)))

        assert len(circles) == 1
        assert abs(circles[0].center[0] - 60) <= 4
        assert abs(circles[0].center[1] - 50) <= 2
        assert abs(circles[0].radius - 20) <= 3

    def test_idempotent_extraction(self):
        """Test repeated extraction returns identical circles."""
        image = draw_rings(160, [(40, 50, 10), (115, 100, 15)])
        detector = CircleDetector(minimum_radius=6, maximum_radius=19, threshold=100,
                                  variance=2.0, number_of_circles=2)
        detector.set_input(image)
        first = list(detector.get_circles())
        second = detector.get_circles()
        assert first == second


class TestProcessor:
    """Test the result-packaging processor."""

    def test_process_frame(self):
        """Test a successful run produces a complete result."""
        config = {"hough": {"minimum_radius": 15, "maximum_radius": 25, "threshold": 100}}
        processor = CircleProcessor(config)
        result = processor.process_frame(draw_rings(101, [(50, 50, 20)]))

        assert result["status"] == "success"
        assert result["detection"]["circles_detected"] == 1
        assert result["detection"]["candidates"] > 0
        assert result["processing_metadata"]["image_size"] == {"width": 101, "height": 101}
        assert result["processing_metadata"]["errors"] == []
        circle = result["detection"]["circles"][0]
        assert abs(circle["radius"] - 20) <= 2

    def test_process_color_frame(self):
        """Test BGR frames are converted to intensity."""
        frame = cv2.cvtColor(draw_rings(101, [(50, 50, 20)]), cv2.COLOR_GRAY2BGR)
        processor = CircleProcessor({"hough": {"minimum_radius": 15, "maximum_radius": 25,
                                               "threshold": 100}})
        result = processor.process_frame(frame)
        assert result["detection"]["circles_detected"] == 1

    def test_no_circles_status(self):
        """Test an empty frame is reported, not failed."""
        processor = CircleProcessor({"hough": {"threshold": 100}})
        result = processor.process_frame(np.zeros((50, 50), dtype=np.uint8))
        assert result["status"] == "no_circles"
        assert result["processing_metadata"]["warnings"]

    def test_missing_file(self, tmp_path):
        """Test unreadable input is reported as failed."""
        processor = CircleProcessor()
        result = processor.process_frame(str(tmp_path / "missing.png"))
        assert result["status"] == "failed"
        assert result["frame_id"] == "missing"
        assert len(result["processing_metadata"]["errors"]) == 1

    def test_invalid_config(self):
        """Test configuration errors surface at construction."""
        with pytest.raises(HoughConfigurationError):
            CircleProcessor({"hough": {"minimum_radius": 30, "maximum_radius": 10}})
