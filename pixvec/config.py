"""Configuration and input validation."""
import logging
import math
import re
from dataclasses import replace
from typing import Optional

import numpy as np

from pixvec.types import (
    ConversionConfig,
    PixelBuffer,
    InvalidBufferError,
    InvalidConfigurationError,
)

logger = logging.getLogger(__name__)

MIN_PIXEL_SIZE = 1
MAX_PIXEL_SIZE = 256

# Per-axis limit on buffer dimensions
MAX_DIMENSION = 65535

_INT_PREFIX = re.compile(r'\s*([+-]?\d+)')


def parse_int(value) -> Optional[int]:
    """
    Parse the leading integer of a value's string form.

    "12px" -> 12, "2.7" -> 2, 2.7 -> 2, "abc" -> None.
    """
    if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
        return int(value)
    if isinstance(value, (float, np.floating)):
        # Whole-number form, so 1e16 parses as 10000000000000000
        return int(value) if math.isfinite(value) else None
    match = _INT_PREFIX.match(str(value))
    if match is None:
        return None
    return int(match.group(1))


def clamp_int(value, minimum: int, maximum: int) -> int:
    """
    Parse and clamp an integer into [minimum, maximum].

    Unparsable input falls back to minimum.
    """
    parsed = parse_int(value)
    if parsed is None:
        return minimum
    return max(minimum, min(maximum, parsed))


def validate_config(config: Optional[ConversionConfig] = None) -> ConversionConfig:
    """
    Normalize a configuration before scanning.

    Args:
        config: Configuration (uses defaults if None)

    Returns:
        New ConversionConfig with an integer pixel_size in range

    Raises:
        InvalidConfigurationError: If clamping is disabled and pixel_size
            is unparsable or out of range
    """
    config = config or ConversionConfig()
    raw = config.pixel_size

    if config.clamp:
        pixel_size = clamp_int(raw, MIN_PIXEL_SIZE, MAX_PIXEL_SIZE)
        if parse_int(raw) != pixel_size:
            logger.warning(f"pixel_size {raw!r} clamped to {pixel_size}")
    else:
        pixel_size = parse_int(raw)
        if pixel_size is None or not MIN_PIXEL_SIZE <= pixel_size <= MAX_PIXEL_SIZE:
            raise InvalidConfigurationError(
                f"pixel_size must be an integer in [{MIN_PIXEL_SIZE}, {MAX_PIXEL_SIZE}], got {raw!r}"
            )

    return replace(
        config,
        pixel_size=pixel_size,
        include_transparent=bool(config.include_transparent),
    )


def validate_buffer(buffer: PixelBuffer) -> np.ndarray:
    """
    Check a pixel buffer against its declared dimensions.

    Args:
        buffer: Pixel buffer to check

    Returns:
        The pixels as an (height, width, 4) uint8 array

    Raises:
        InvalidBufferError: If dimensions are out of range or the byte
            length does not equal width * height * 4
    """
    width, height = buffer.width, buffer.height

    for name, value in (('width', width), ('height', height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidBufferError(f"{name} must be an integer, got {value!r}")
        if value < 0:
            raise InvalidBufferError(f"{name} must be >= 0, got {value}")
        if value > MAX_DIMENSION:
            raise InvalidBufferError(f"{name} {value} exceeds maximum {MAX_DIMENSION}")

    pixels = as_pixel_array(buffer.pixels)

    expected = int(width) * int(height) * 4
    if pixels.size != expected:
        raise InvalidBufferError(
            f"Buffer holds {pixels.size} bytes, expected {expected} for {width}x{height} RGBA"
        )

    return pixels.reshape(int(height), int(width), 4)


def as_pixel_array(pixels) -> np.ndarray:
    """
    Coerce a pixel payload to a flat-or-shaped uint8 array.

    Accepts uint8 arrays, bytes-like objects and integer sequences with
    every value in [0, 255].

    Raises:
        InvalidBufferError: If the payload is not byte-valued
    """
    if isinstance(pixels, (bytes, bytearray, memoryview)):
        return np.frombuffer(pixels, dtype=np.uint8)

    array = np.asarray(pixels)
    if array.dtype == np.uint8:
        return array
    if array.size == 0:
        return np.zeros(array.shape, dtype=np.uint8)
    if not np.issubdtype(array.dtype, np.integer):
        raise InvalidBufferError(f"Expected uint8 pixels, got {array.dtype}")
    if array.min() < 0 or array.max() > 255:
        raise InvalidBufferError("Pixel values must be in [0, 255]")
    return array.astype(np.uint8)
