"""Main pipeline orchestrator for pixvec."""
import logging
import time
from pathlib import Path
from typing import Optional, Tuple, Union

from pixvec.types import (
    ConversionConfig,
    ConversionStats,
    PixelBuffer,
    VectorDocument,
    VectorizationError,
)
from pixvec.config import validate_buffer, validate_config
from pixvec.palette import PaletteRegistry
from pixvec.raster_ingest import ingest
from pixvec.run_scanner import scan_runs
from pixvec.svg_export import build_document, document_to_svg, save_svg
from pixvec.stats import build_stats, format_stats

logger = logging.getLogger(__name__)


def convert(
    buffer: PixelBuffer,
    config: Optional[ConversionConfig] = None
) -> Tuple[VectorDocument, ConversionStats]:
    """
    Convert a pixel buffer into a vector document.

    Stateless and deterministic: the same buffer and configuration always
    give the same document.

    Args:
        buffer: Decoded RGBA pixels
        config: Conversion configuration (uses defaults if None)

    Returns:
        Tuple of (document, stats)

    Raises:
        InvalidBufferError: If the buffer does not match its dimensions
        InvalidConfigurationError: If clamping is disabled and
            pixel_size is out of range
    """
    config = validate_config(config)
    pixels = validate_buffer(buffer)

    start = time.perf_counter()

    palette = PaletteRegistry()
    runs = scan_runs(pixels, config.include_transparent, palette)
    document = build_document(
        runs, palette, buffer.width, buffer.height, config.pixel_size
    )

    elapsed = time.perf_counter() - start

    stats = build_stats(buffer, document, config.pixel_size, elapsed)
    logger.debug(
        f"Scanned {buffer.width}x{buffer.height}: {len(runs)} runs, "
        f"{len(palette)} colors"
    )
    return document, stats


class PixelArtPipeline:
    """File-to-SVG pipeline around convert()."""

    def __init__(self, config: Optional[ConversionConfig] = None):
        """
        Initialize pipeline with configuration.

        Args:
            config: Conversion configuration. Uses defaults if None.
        """
        self.config = config or ConversionConfig()
        self.last_document: Optional[VectorDocument] = None
        self.last_stats: Optional[ConversionStats] = None

    def process(
        self,
        input_path: Union[str, Path],
        output_path: Optional[Union[str, Path]] = None
    ) -> str:
        """
        Process an image file into SVG.

        Args:
            input_path: Path to input image
            output_path: Optional path to save SVG output

        Returns:
            SVG string

        Raises:
            FileNotFoundError: If input file doesn't exist
            VectorizationError: If decoding or conversion fails
        """
        input_path = Path(input_path)

        try:
            buffer = ingest(input_path)
            document, stats = convert(buffer, self.config)
            svg = document_to_svg(document)

            if output_path:
                save_svg(svg, output_path)
                logger.debug(f"Saved SVG to {output_path}")

        except (FileNotFoundError, VectorizationError):
            raise
        except Exception as e:
            raise VectorizationError(f"Pipeline processing failed: {e}") from e

        self.last_document = document
        self.last_stats = stats

        label = input_path.suffix.lstrip('.').upper() or "IMAGE"
        logger.info(format_stats(stats, label))
        return svg


def process_image(
    image_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    config: Optional[ConversionConfig] = None,
) -> str:
    """
    Process an image through the pipeline.

    Convenience function for one-off processing.

    Args:
        image_path: Path to input image
        output_path: Optional path to save SVG output
        config: Optional configuration object

    Returns:
        SVG string

    Example:
        >>> svg = process_image("sprite.png", "sprite.svg")
        >>> svg = process_image("sprite.png", config=ConversionConfig(pixel_size=8))
    """
    pipeline = PixelArtPipeline(config)
    return pipeline.process(image_path, output_path)
