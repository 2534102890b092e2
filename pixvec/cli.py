"""Command line interface for pixvec."""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import numpy as np

from pixvec.types import ConversionConfig, VectorizationError
from pixvec.config import MIN_PIXEL_SIZE, MAX_PIXEL_SIZE
from pixvec.pipeline import PixelArtPipeline
from pixvec.raster_ingest import ingest
from pixvec.rasterize import rasterize_document
from pixvec.stats import format_stats
from pixvec.batch import convert_folder


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog='pixvec',
        description='Convert pixel art to SVG, one rect per horizontal color run',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pixvec sprite.png
  pixvec sprite.png -o sprite.svg --pixel-size 8
  pixvec sprite.png --skip-transparent --verify

  # Whole folder
  pixvec --batch sprites/ -o svg/ --workers 4
        """,
    )

    parser.add_argument(
        'input',
        help='Input image path (or folder with --batch)'
    )

    parser.add_argument(
        '-o', '--output',
        default=None,
        help='Output SVG path (default: input name with .svg extension)'
    )

    parser.add_argument(
        '-s', '--pixel-size',
        default='1',
        help=f'Output size of one source pixel, {MIN_PIXEL_SIZE}-{MAX_PIXEL_SIZE} (default: 1)'
    )

    parser.add_argument(
        '--skip-transparent',
        action='store_true',
        help='Leave fully transparent pixels out of the SVG'
    )

    parser.add_argument(
        '--strict',
        action='store_true',
        help='Reject an out-of-range pixel size instead of clamping it'
    )

    parser.add_argument(
        '--verify',
        action='store_true',
        help='Render the result back and compare it with the input pixels'
    )

    parser.add_argument(
        '--batch',
        action='store_true',
        help='Treat input as a folder and convert every image in it'
    )

    parser.add_argument(
        '--workers',
        type=int,
        default=None,
        help='Worker processes for --batch (default: CPU count)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    return parser


def verify_output(pipeline: PixelArtPipeline, input_path: Path, config: ConversionConfig) -> bool:
    """
    Check that the last document reproduces the input image exactly.

    Args:
        pipeline: Pipeline that just processed input_path
        input_path: Source image
        config: Configuration used

    Returns:
        True if every pixel matches
    """
    expected = ingest(input_path).as_array()
    if not config.include_transparent:
        expected = expected.copy()
        expected[expected[..., 3] == 0] = 0

    size = pipeline.last_stats.pixel_size
    rendered = rasterize_document(pipeline.last_document, scale=size)

    return rendered.shape == expected.shape and np.array_equal(rendered, expected)


def run_batch(parsed, config: ConversionConfig) -> int:
    """Run folder conversion."""
    input_folder = Path(parsed.input)
    output_folder = Path(parsed.output) if parsed.output else input_folder / 'svg'

    print(f"Batch: {input_folder} -> {output_folder}")
    results = convert_folder(input_folder, output_folder, config, workers=parsed.workers)

    failed = 0
    for input_path, output_path, success, message in results:
        mark = '✓' if success else '✗'
        print(f"  {mark} {input_path.name}: {message}")
        failed += not success

    print(f"Done: {len(results) - failed}/{len(results)} converted")
    return 1 if failed else 0


def main(args: Optional[list] = None) -> int:
    """
    Main entry point for CLI.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    config = ConversionConfig(
        pixel_size=parsed.pixel_size,
        include_transparent=not parsed.skip_transparent,
        clamp=not parsed.strict,
    )

    try:
        if parsed.batch:
            return run_batch(parsed, config)

        input_path = Path(parsed.input)
        if parsed.output:
            output_path = Path(parsed.output)
        else:
            output_path = input_path.with_suffix('.svg')

        output_path.parent.mkdir(parents=True, exist_ok=True)

        print(f"Processing: {input_path}")
        pipeline = PixelArtPipeline(config)
        pipeline.process(input_path, output_path)

        label = input_path.suffix.lstrip('.').upper() or "IMAGE"
        print(f"  {format_stats(pipeline.last_stats, label)}")
        print(f"  Output saved: {output_path}")

        if parsed.verify:
            if verify_output(pipeline, input_path, config):
                print("  Verify: PASS")
            else:
                print("  Verify: FAIL", file=sys.stderr)
                return 1

        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except VectorizationError as e:
        print(f"Error processing image: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
