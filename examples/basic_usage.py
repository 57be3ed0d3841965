"""Basic usage example for houghcircles."""

import cv2
import numpy as np
from houghcircles.detection.circle_detector import CircleDetector
from houghcircles.utils.visualization import draw_circles, render_accumulator
from houghcircles.utils.io_handler import save_image


def main():
    """Run circle detection on a synthetic image."""
    # Two rings on a dark background
    image = np.full((200, 200), 20, dtype=np.uint8)
    cv2.circle(image, (60, 70), 25, 200, 3)
    cv2.circle(image, (140, 130), 40, 200, 3)
    
    print("Casting votes...")
    detector = CircleDetector(minimum_radius=20, maximum_radius=45, threshold=100,
                              sweep_angle=0.2, number_of_circles=2)
    detector.set_input(image)
    detector.update()
    
    print("Extracting circles...")
    circles = detector.get_circles()
    for circle in circles:
        print(f"  Circle {circle.id}: center {circle.center}, radius {circle.radius:.1f}")
    
    # Save outputs
    save_image(draw_circles(image, circles), "output/basic_detection.jpg")
    save_image(render_accumulator(detector.accumulator), "output/basic_accumulator.jpg")
    print("Results saved to output/")


if __name__ == "__main__":
    main()
