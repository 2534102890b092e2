"""Paint a vector document back into RGBA pixels for verification."""
import re
from typing import Dict

import numpy as np

from pixvec.types import ColorKey, VectorDocument, VectorizationError

_RGB = re.compile(r'^rgb\((\d+) (\d+) (\d+)\)$')
_RGBA = re.compile(r'^rgba\((\d+) (\d+) (\d+) / ([0-9.]+)\)$')


def parse_css_color(css: str) -> ColorKey:
    """
    Parse an expression produced by rgba_to_css back to a ColorKey.

    Fractional alpha is mapped back to a byte with round(alpha * 255);
    three decimals are enough to recover every byte exactly.
    """
    match = _RGB.match(css)
    if match:
        r, g, b = (int(v) for v in match.groups())
        return ColorKey(r, g, b, 255)

    match = _RGBA.match(css)
    if match:
        r, g, b = (int(v) for v in match.groups()[:3])
        a = int(round(float(match.group(4)) * 255))
        return ColorKey(r, g, b, a)

    raise VectorizationError(f"Unrecognized color expression: {css!r}")


def rasterize_document(document: VectorDocument, scale: int = 1) -> np.ndarray:
    """
    Render a document's rects into an RGBA uint8 array.

    Unpainted pixels stay (0, 0, 0, 0). Rects are painted in order and
    overwrite rather than blend.

    Args:
        document: Vector document
        scale: Canvas units per output pixel; pass the conversion's
            pixel size to render at source resolution

    Returns:
        (H // scale, W // scale, 4) RGBA array

    Raises:
        VectorizationError: If a rect references an unknown class or does
            not sit on the scale grid
    """
    if scale < 1:
        raise VectorizationError(f"scale must be >= 1, got {scale}")
    if document.canvas_width % scale or document.canvas_height % scale:
        raise VectorizationError(
            f"Canvas {document.canvas_width}x{document.canvas_height} is not a multiple of scale {scale}"
        )

    canvas = np.zeros(
        (document.canvas_height // scale, document.canvas_width // scale, 4), dtype=np.uint8
    )

    colors: Dict[int, ColorKey] = {
        rule.class_id: parse_css_color(rule.css) for rule in document.style_rules
    }

    for rect in document.primitives:
        if rect.class_id not in colors:
            raise VectorizationError(f"Rect references unknown class {rect.class_id}")
        if any(v % scale for v in (rect.x, rect.y, rect.width, rect.height)):
            raise VectorizationError(f"Rect {rect} is not aligned to scale {scale}")
        x, y = rect.x // scale, rect.y // scale
        canvas[y:y + rect.height // scale, x:x + rect.width // scale] = colors[rect.class_id]

    return canvas
