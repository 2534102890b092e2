"""Core types for the pixel-art vectorization pipeline."""
from dataclasses import dataclass, field
from typing import List, NamedTuple, Union
import numpy as np


class ColorKey(NamedTuple):
    """Exact RGBA byte tuple identifying a pixel color."""
    r: int
    g: int
    b: int
    a: int


@dataclass(frozen=True)
class PixelBuffer:
    """Decoded raster input: row-major RGBA bytes."""
    width: int
    height: int
    pixels: np.ndarray  # uint8, flat (w*h*4) or shaped (h, w, 4)

    @classmethod
    def from_bytes(cls, width: int, height: int, data: Union[bytes, bytearray]) -> "PixelBuffer":
        """Wrap a raw RGBA byte string without copying."""
        return cls(width, height, np.frombuffer(bytes(data), dtype=np.uint8))

    def as_array(self) -> np.ndarray:
        """Return the pixels as an (height, width, 4) view."""
        pixels = self.pixels
        if isinstance(pixels, (bytes, bytearray, memoryview)):
            pixels = np.frombuffer(pixels, dtype=np.uint8)
        return np.asarray(pixels).reshape(self.height, self.width, 4)


@dataclass(frozen=True)
class Run:
    """Maximal horizontal stretch of identically colored pixels in one row."""
    row: int
    start_x: int
    length: int
    color: ColorKey


@dataclass(frozen=True)
class StyleRule:
    """One palette entry rendered as a CSS fill expression."""
    class_id: int
    css: str


@dataclass(frozen=True)
class RectPrimitive:
    """Scaled rectangle referencing a palette class."""
    x: int
    y: int
    width: int
    height: int
    class_id: int


@dataclass
class VectorDocument:
    """Canvas envelope, style table and primitive list."""
    canvas_width: int
    canvas_height: int
    style_rules: List[StyleRule] = field(default_factory=list)
    primitives: List[RectPrimitive] = field(default_factory=list)


@dataclass(frozen=True)
class ConversionStats:
    """Summary of one conversion."""
    width: int
    height: int
    pixel_size: int
    palette_size: int
    primitive_count: int
    elapsed_ms: float

    def to_dict(self) -> dict:
        return {
            'width': self.width,
            'height': self.height,
            'pixel_size': self.pixel_size,
            'palette_size': self.palette_size,
            'primitive_count': self.primitive_count,
            'elapsed_ms': self.elapsed_ms,
        }


@dataclass
class ConversionConfig:
    """Configuration for a conversion."""
    # Output scale: every source pixel becomes a pixel_size x pixel_size square
    pixel_size: int = 1

    # Keep fully transparent (alpha 0) pixels as rects
    include_transparent: bool = True

    # Clamp pixel_size into range instead of rejecting it
    clamp: bool = True


class VectorizationError(Exception):
    """Base exception for vectorization errors."""
    pass


class InvalidBufferError(VectorizationError):
    """Pixel buffer does not match its declared dimensions."""
    pass


class InvalidConfigurationError(VectorizationError):
    """Configuration rejected (only raised when clamping is disabled)."""
    pass


class DecodeError(VectorizationError):
    """Image file could not be decoded into a pixel buffer."""
    pass
