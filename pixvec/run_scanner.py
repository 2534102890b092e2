"""Horizontal run detection over RGBA rows."""
from typing import Iterator, List, Optional, Tuple

import numpy as np

from pixvec.types import ColorKey, Run
from pixvec.palette import PaletteRegistry


def scan_row(
    row: np.ndarray,
    include_transparent: bool = True
) -> Iterator[Tuple[int, int, ColorKey]]:
    """
    Find maximal runs of identical color in one row.

    Fully transparent runs are dropped when include_transparent is False.
    A transparent pixel never shares a key with an opaque one, so dropping
    whole runs skips exactly the alpha-0 pixels.

    Args:
        row: (width, 4) uint8 array
        include_transparent: Keep alpha-0 pixels

    Yields:
        (start_x, length, color) tuples, left to right
    """
    width = row.shape[0]
    if width == 0:
        return

    # Run boundaries: positions where any channel differs from its left neighbor
    changed = np.any(row[1:] != row[:-1], axis=1)
    starts = np.concatenate(([0], np.flatnonzero(changed) + 1))
    ends = np.append(starts[1:], width)

    for start, end in zip(starts.tolist(), ends.tolist()):
        color = ColorKey(*row[start].tolist())
        if not include_transparent and color.a == 0:
            continue
        yield start, end - start, color


def scan_runs(
    pixels: np.ndarray,
    include_transparent: bool = True,
    palette: Optional[PaletteRegistry] = None
) -> List[Run]:
    """
    Scan RGBA pixels into runs, row-major and left to right.

    When a palette is given, each run's color is interned as soon as the
    run is found, so class ids follow first-appearance order.

    Args:
        pixels: Validated (height, width, 4) uint8 array
        include_transparent: Keep alpha-0 pixels
        palette: Optional registry to intern colors into

    Returns:
        List of Run
    """
    runs = []

    for y in range(pixels.shape[0]):
        for start_x, length, color in scan_row(pixels[y], include_transparent):
            if palette is not None:
                palette.intern(color)
            runs.append(Run(y, start_x, length, color))

    return runs
