"""
Headless image detection - no GUI windows, just saves results
Perfect for batch processing or remote servers
"""

import sys
from pathlib import Path

from houghcircles.config import load_config
from houghcircles.core import CircleProcessor
from houghcircles.utils.io_handler import JSONWriter, load_image, save_image
from houghcircles.utils.visualization import draw_circles, render_accumulator, render_radius_image


def main():
    """Detect circles in a single image - no GUI."""
    
    if len(sys.argv) < 2:
        print("Usage: python detect_image_headless.py <path_to_image> [config.yaml]")
        print("\nExample:")
        print("  python detect_image_headless.py test_data/images/coins.png config.yaml")
        sys.exit(1)
    
    image_path = sys.argv[1]
    config = load_config(sys.argv[2] if len(sys.argv) > 2 else None)
    
    if not Path(image_path).exists():
        print(f"[X] Error: Image not found at '{image_path}'")
        sys.exit(1)
    
    print("=" * 60)
    print("houghcircles - Headless Image Detection")
    print("=" * 60)
    print(f"Input: {image_path}")
    
    image = load_image(image_path, spacing=config['io']['spacing'])
    print(f"Image size: {image.shape[1]} x {image.shape[0]} pixels")
    print("\nProcessing...")
    
    processor = CircleProcessor(config)
    result = processor.process_frame(image)
    result['frame_id'] = Path(image_path).stem
    
    print("\n" + "=" * 60)
    print("RESULTS")
    print("=" * 60)
    print(f"Status:           {result['status'].upper()}")
    if result['status'] == 'failed':
        print(f"Errors:           {result['processing_metadata']['errors']}")
        sys.exit(1)
    
    print(f"Candidates:       {result['detection']['candidates']}")
    print(f"Circles Detected: {result['detection']['circles_detected']}")
    for circle in result['detection']['circles']:
        print(f"  #{circle['id']}: center {circle['center']}, radius {circle['radius']:.2f}, "
              f"votes {circle['votes']:.1f}")
    print(f"Processing Time:  {result['processing_metadata']['processing_time_ms']:.0f}ms")
    print("=" * 60)
    
    output_dir = Path(config['io']['output_dir'])
    detector = processor.detector
    circles = detector.get_circles()
    
    save_image(draw_circles(image.array, circles, spacing=image.spacing),
               str(output_dir / "circles.jpg"))
    save_image(render_accumulator(detector.accumulator), str(output_dir / "accumulator.jpg"))
    save_image(render_radius_image(detector.radius_image, detector.minimum_radius,
                                   detector.maximum_radius),
               str(output_dir / "radius.jpg"))
    JSONWriter.save_results(result, str(output_dir / "analysis.json"))
    
    print(f"\nAll outputs saved to '{output_dir}/':")
    print("  - circles.jpg       : Detected circles")
    print("  - accumulator.jpg   : Vote accumulator")
    print("  - radius.jpg        : Radius estimates")
    print("  - analysis.json     : Complete analysis data")


if __name__ == "__main__":
    main()
