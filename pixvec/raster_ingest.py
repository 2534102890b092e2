"""Raster image ingestion into RGBA pixel buffers."""
import logging
from pathlib import Path
from typing import Union
import numpy as np
from PIL import Image
from PIL import ImageOps

from pixvec.types import PixelBuffer, DecodeError, InvalidBufferError

logger = logging.getLogger(__name__)


def ingest(path: Union[str, Path]) -> PixelBuffer:
    """
    Ingest a raster image file.

    Loads the image and converts it to straight (non-premultiplied) RGBA.
    Alpha is kept as is; nothing is composited onto a background.

    Args:
        path: Path to image file

    Returns:
        PixelBuffer with the decoded pixels

    Raises:
        FileNotFoundError: If file doesn't exist
        DecodeError: If file cannot be decoded
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    if not path.is_file():
        raise DecodeError(f"Path is not a file: {path}")

    try:
        with Image.open(path) as img:
            # Apply EXIF orientation transformation to handle rotation
            img = ImageOps.exif_transpose(img)

            if img.mode != 'RGBA':
                logger.debug(f"Converting {path.name} from {img.mode} to RGBA")
                img = img.convert('RGBA')

            width, height = img.size
            pixels = np.array(img, dtype=np.uint8)

    except (IOError, OSError) as e:
        raise DecodeError(f"Failed to load image {path}: {e}") from e
    except Exception as e:
        raise DecodeError(f"Unexpected error loading image {path}: {e}") from e

    logger.debug(f"Ingested {path.name}: {width}x{height}")
    return PixelBuffer(width, height, pixels)


def ingest_from_array(image: np.ndarray) -> PixelBuffer:
    """
    Create PixelBuffer from numpy array.

    Args:
        image: Image array (H, W), (H, W, 3) or (H, W, 4). Float arrays
            are taken to be in [0, 1].

    Returns:
        PixelBuffer
    """
    image = np.asarray(image)

    if np.issubdtype(image.dtype, np.floating):
        image = np.round(np.clip(image, 0.0, 1.0) * 255)
    elif image.size and (image.min() < 0 or image.max() > 255):
        raise InvalidBufferError("Integer pixel values must be in [0, 255]")
    image = image.astype(np.uint8)

    if image.ndim == 2:
        # Grayscale - convert to RGB
        image = np.stack([image] * 3, axis=-1)

    if image.ndim != 3:
        raise InvalidBufferError(f"Expected 2D or 3D array, got {image.ndim}D")

    if image.shape[2] == 3:
        # Opaque - add alpha channel
        alpha = np.full(image.shape[:2] + (1,), 255, dtype=np.uint8)
        image = np.concatenate([image, alpha], axis=-1)
    elif image.shape[2] != 4:
        raise InvalidBufferError(f"Expected 3 or 4 channels, got {image.shape[2]}")

    height, width = image.shape[:2]
    return PixelBuffer(width, height, np.ascontiguousarray(image))
