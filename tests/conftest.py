"""Pytest configuration and fixtures."""
from typing import List, Sequence, Tuple

import numpy as np
import pytest
from PIL import Image

from pixvec.types import PixelBuffer

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
CLEAR = (0, 0, 0, 0)


def make_buffer(rows: Sequence[Sequence[Tuple[int, int, int, int]]]) -> PixelBuffer:
    """Build a PixelBuffer from nested lists of RGBA tuples."""
    height = len(rows)
    width = len(rows[0]) if height else 0
    pixels = np.array(rows, dtype=np.uint8).reshape(height, width, 4)
    return PixelBuffer(width, height, pixels)


def random_sprite(seed: int, width: int = 24, height: int = 16, n_colors: int = 4) -> PixelBuffer:
    """Random buffer drawn from a small palette, including transparent pixels."""
    rng = np.random.default_rng(seed)
    palette = np.array([CLEAR, RED, GREEN, (10, 20, 30, 128), BLUE, (9, 9, 9, 0)][:n_colors], dtype=np.uint8)
    # Long stretches of the same index so that runs actually merge
    indices = np.repeat(rng.integers(0, n_colors, size=(height, width // 4)), 4, axis=1)
    indices[:, ::7] = rng.integers(0, n_colors, size=indices[:, ::7].shape)
    return PixelBuffer(width, height, palette[indices])


@pytest.fixture
def sprite():
    """4x3 sprite with opaque, translucent and transparent pixels."""
    half = (10, 20, 30, 128)
    return make_buffer([
        [CLEAR, RED, RED, CLEAR],
        [RED, half, half, RED],
        [BLUE, BLUE, BLUE, BLUE],
    ])


@pytest.fixture
def sprite_png(tmp_path, sprite):
    """The sprite fixture saved as an RGBA PNG."""
    path = tmp_path / "sprite.png"
    Image.fromarray(sprite.as_array()).save(path)
    return path
