"""Tests for conversion statistics."""
import numpy as np

from pixvec.types import ConversionStats, PixelBuffer, VectorDocument, StyleRule
from pixvec.stats import build_stats, format_stats


class TestStats:
    """Test stats derivation and formatting."""

    def test_build_stats(self):
        buffer = PixelBuffer(2, 1, np.zeros(8, dtype=np.uint8))
        document = VectorDocument(4, 2, [StyleRule(0, "rgb(0 0 0)")], [])

        stats = build_stats(buffer, document, pixel_size=2, elapsed_seconds=0.0012)

        assert stats == ConversionStats(
            width=2, height=1, pixel_size=2, palette_size=1, primitive_count=0, elapsed_ms=1.2
        )

    def test_format_stats(self):
        stats = ConversionStats(16, 8, 4, 3, 20, 0.41)

        assert format_stats(stats) == "PNG 16×8 | pixelSize=4 | palette=3 | rects=20 | 0.41ms"
        assert format_stats(stats, "GIF").startswith("GIF 16×8")
