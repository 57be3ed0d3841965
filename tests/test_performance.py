"""Performance tests."""

import pytest
import numpy as np
import cv2
import time
from houghcircles.detection.circle_detector import CircleDetector
from houghcircles.utils.metrics import PerformanceMetrics


class TestPerformance:
    """Test performance benchmarks."""
    
    def test_detection_speed(self):
        """Test detection on a 256x256 image."""
        image = np.zeros((256, 256), dtype=np.uint8)
        cv2.circle(image, (128, 128), 60, 255, 3)
        cv2.circle(image, (50, 50), 30, 255, 3)
        detector = CircleDetector(minimum_radius=20, maximum_radius=70, threshold=100,
                                  sweep_angle=0.2, number_of_circles=2)
        
        start = time.time()
        circles = detector.detect(image)
        duration = (time.time() - start) * 1000
        
        assert len(circles) == 2
        assert duration < 10000  # Should complete in under 10 seconds
    
    def test_cached_extraction_speed(self):
        """Test cached circle lists are returned without recomputation."""
        image = np.zeros((128, 128), dtype=np.uint8)
        cv2.circle(image, (64, 64), 30, 255, 3)
        detector = CircleDetector(minimum_radius=20, maximum_radius=40, threshold=100)
        detector.detect(image)
        
        start = time.time()
        for _ in range(100):
            detector.get_circles()
        duration = (time.time() - start) * 1000
        
        assert duration < 100
    
    def test_performance_metrics(self):
        """Test performance metrics tracking."""
        metrics = PerformanceMetrics()
        
        metrics.start_timer('test_operation')
        time.sleep(0.1)
        duration = metrics.stop_timer('test_operation')
        
        assert 90 < duration < 150  # Should be around 100ms
        
        summary = metrics.get_summary()
        assert 'test_operation' in summary
    
    def test_stop_unknown_timer(self):
        """Test stopping a timer that never started."""
        assert PerformanceMetrics().stop_timer('missing') == 0.0
