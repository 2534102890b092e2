"""pixvec: pixel art to SVG via horizontal run merging and a shared CSS palette."""
from pixvec.types import (
    ColorKey,
    PixelBuffer,
    Run,
    StyleRule,
    RectPrimitive,
    VectorDocument,
    ConversionStats,
    ConversionConfig,
    VectorizationError,
    InvalidBufferError,
    InvalidConfigurationError,
    DecodeError,
)
from pixvec.pipeline import convert, process_image, PixelArtPipeline

__version__ = "0.1.0"

__all__ = [
    "ColorKey",
    "PixelBuffer",
    "Run",
    "StyleRule",
    "RectPrimitive",
    "VectorDocument",
    "ConversionStats",
    "ConversionConfig",
    "VectorizationError",
    "InvalidBufferError",
    "InvalidConfigurationError",
    "DecodeError",
    "convert",
    "process_image",
    "PixelArtPipeline",
]
