"""Batch processing example for multiple images."""

import sys
from pathlib import Path
from houghcircles.config import load_config
from houghcircles.core import CircleProcessor
from houghcircles.utils.io_handler import JSONWriter
from houghcircles.utils.logger import setup_from_config


def main():
    """Process multiple images in batch."""
    config = load_config(sys.argv[1] if len(sys.argv) > 1 else None)
    logger = setup_from_config(config, session_dir='logs')
    
    processor = CircleProcessor(config)
    
    # Get all images
    images_dir = Path("test_data/images")
    image_files = sorted(images_dir.glob("*.png")) + sorted(images_dir.glob("*.jpg"))
    
    logger.info(f"Processing {len(image_files)} images...")
    
    results = []
    for i, image_path in enumerate(image_files):
        logger.info(f"Processing image {i+1}/{len(image_files)}: {image_path.name}")
        
        result = processor.process_frame(str(image_path))
        if result['status'] == 'failed':
            logger.warning(f"Could not process {image_path}: {result['processing_metadata']['errors']}")
        results.append(result)
    
    # Save results
    output_dir = Path(config['io']['output_dir'])
    JSONWriter.save_results(results, str(output_dir / "batch_results.json"))
    logger.info("Batch processing complete!")


if __name__ == "__main__":
    main()
