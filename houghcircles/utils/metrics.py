"""Performance metrics and evaluation."""

import numpy as np
from typing import Dict, List, Sequence, Tuple
from time import time

from houghcircles.detection.circle import Circle


class PerformanceMetrics:
    """Track performance metrics."""
    
    def __init__(self):
        self.start_times = {}
        self.durations = {}
    
    def start_timer(self, name: str):
        """Start timing an operation."""
        self.start_times[name] = time()
    
    def stop_timer(self, name: str) -> float:
        """Stop timing and return duration in milliseconds."""
        if name not in self.start_times:
            return 0.0
        duration = (time() - self.start_times[name]) * 1000
        self.durations[name] = duration
        return duration
    
    def get_summary(self) -> Dict[str, float]:
        """Get summary of all timings."""
        return self.durations.copy()


class AccuracyMetrics:
    """Compare detected circles with ground truth."""
    
    @staticmethod
    def calculate_precision_recall(true_positives: int, false_positives: int, 
                                   false_negatives: int) -> Dict[str, float]:
        """Calculate precision, recall, and F1 score."""
        precision = true_positives / (true_positives + false_positives) if (true_positives + false_positives) > 0 else 0
        recall = true_positives / (true_positives + false_negatives) if (true_positives + false_negatives) > 0 else 0
        f1 = 2 * (precision * recall) / (precision + recall) if (precision + recall) > 0 else 0
        
        return {
            'precision': precision,
            'recall': recall,
            'f1_score': f1
        }
    
    @staticmethod
    def match_circles(found: Sequence[Circle], truth: Sequence[Tuple[float, float, float]],
                      center_tolerance: float = 2.0, 
                      radius_tolerance: float = 2.0) -> Tuple[List[Tuple[int, int]], Dict[str, float]]:
        """
        Greedily match detections to ground truth circles.
        
        Args:
            found: Detected circles
            truth: Ground truth as (y, x, radius) in physical units
            center_tolerance: Maximum center distance for a match
            radius_tolerance: Maximum radius difference for a match
            
        Returns:
            (matched (found_idx, truth_idx) pairs, precision/recall dict)
        """
        matches = []
        used = set()
        for i, circle in enumerate(found):
            best, best_dist = None, np.inf
            for j, (y, x, r) in enumerate(truth):
                if j in used:
                    continue
                dist = np.hypot(circle.center[0] - y, circle.center[1] - x)
                if dist <= center_tolerance and abs(circle.radius - r) <= radius_tolerance and dist < best_dist:
                    best, best_dist = j, dist
            if best is not None:
                used.add(best)
                matches.append((i, best))
        
        scores = AccuracyMetrics.calculate_precision_recall(
            len(matches), len(found) - len(matches), len(truth) - len(matches))
        return matches, scores
