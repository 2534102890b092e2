"""Integration tests for convert() and the file pipeline."""
from xml.etree import ElementTree as ET

import numpy as np
import pytest

from pixvec.types import (
    ConversionConfig,
    PixelBuffer,
    RectPrimitive,
    VectorizationError,
    InvalidBufferError,
    InvalidConfigurationError,
)
from pixvec.pipeline import convert, PixelArtPipeline, process_image
from pixvec.svg_export import document_to_svg

from conftest import make_buffer, random_sprite, RED, CLEAR


class TestConvert:
    """Test the core conversion."""

    def test_two_red_pixels(self):
        document, stats = convert(make_buffer([[RED, RED]]), ConversionConfig(pixel_size=1))

        assert len(document.style_rules) == 1
        assert document.primitives == [RectPrimitive(0, 0, 2, 1, 0)]
        assert stats.palette_size == 1
        assert stats.primitive_count == 1

    def test_transparent_only(self):
        buffer = make_buffer([[CLEAR, CLEAR]])

        document, stats = convert(buffer, ConversionConfig(include_transparent=False))

        assert document.primitives == []
        assert stats.palette_size == 0
        assert (document.canvas_width, document.canvas_height) == (2, 1)

    def test_reused_class(self):
        a, b = (1, 1, 1, 255), (2, 2, 2, 255)

        document, stats = convert(make_buffer([[a, b, a]]))

        assert [p.class_id for p in document.primitives] == [0, 1, 0]
        assert stats.palette_size == 2

    def test_fractional_alpha(self):
        document, _ = convert(make_buffer([[(10, 20, 30, 128)]]))
        assert document.style_rules[0].css == "rgba(10 20 30 / 0.502)"

    @pytest.mark.parametrize("width,height", [(0, 0), (0, 4), (4, 0)])
    def test_zero_area(self, width, height):
        buffer = PixelBuffer(width, height, np.zeros(0, dtype=np.uint8))

        document, stats = convert(buffer, ConversionConfig(pixel_size=3))

        assert document.primitives == []
        assert document.style_rules == []
        assert (document.canvas_width, document.canvas_height) == (width * 3, height * 3)
        assert stats.primitive_count == 0

    def test_deterministic(self):
        """Same input, same bytes."""
        buffer = random_sprite(11, n_colors=6)
        config = ConversionConfig(pixel_size=4)

        first, _ = convert(buffer, config)
        second, _ = convert(buffer, config)

        assert document_to_svg(first) == document_to_svg(second)
        assert first.style_rules == second.style_rules

    def test_pixel_size_clamped(self):
        document, stats = convert(make_buffer([[RED]]), ConversionConfig(pixel_size=10_000))

        assert stats.pixel_size == 256
        assert document.canvas_width == 256

    def test_strict_pixel_size(self):
        with pytest.raises(InvalidConfigurationError):
            convert(make_buffer([[RED]]), ConversionConfig(pixel_size=0, clamp=False))

    def test_malformed_buffer(self):
        with pytest.raises(InvalidBufferError):
            convert(PixelBuffer(2, 2, np.zeros(15, dtype=np.uint8)))

    def test_bytes_pixels(self):
        """A raw RGBA byte string converts like the equivalent array."""
        raw = bytes([255, 0, 0, 255, 255, 0, 0, 255])

        from_bytes, _ = convert(PixelBuffer(2, 1, raw))
        from_array, _ = convert(make_buffer([[RED, RED]]))

        assert document_to_svg(from_bytes) == document_to_svg(from_array)

    def test_list_pixels(self):
        document, stats = convert(PixelBuffer(1, 1, [1, 2, 3, 255]))

        assert document.style_rules[0].css == "rgb(1 2 3)"
        assert stats.primitive_count == 1

    def test_stats(self):
        buffer = random_sprite(2)

        document, stats = convert(buffer, ConversionConfig(pixel_size=2))

        assert (stats.width, stats.height, stats.pixel_size) == (24, 16, 2)
        assert stats.palette_size == len(document.style_rules)
        assert stats.primitive_count == len(document.primitives)
        assert stats.elapsed_ms >= 0
        assert set(stats.to_dict()) == {
            'width', 'height', 'pixel_size', 'palette_size', 'primitive_count', 'elapsed_ms'
        }

    def test_fewer_rects_than_pixels(self):
        """Merging beats one rect per pixel on run-heavy input."""
        buffer = random_sprite(5)
        document, _ = convert(buffer)
        assert len(document.primitives) < buffer.width * buffer.height


class TestPixelArtPipeline:
    """Test file processing."""

    def test_process(self, sprite_png, tmp_path):
        output = tmp_path / "sprite.svg"
        pipeline = PixelArtPipeline(ConversionConfig(pixel_size=4))

        svg = pipeline.process(sprite_png, output)

        assert output.read_text(encoding="utf-8") == svg
        root = ET.fromstring(svg)
        assert root.get("width") == "16"
        assert root.get("height") == "12"
        assert pipeline.last_stats.primitive_count == len(pipeline.last_document.primitives)

    def test_skip_transparent(self, sprite_png):
        pipeline = PixelArtPipeline(ConversionConfig(include_transparent=False))

        pipeline.process(sprite_png)

        # Row 0 drops both clear pixels
        assert pipeline.last_stats.primitive_count == 1 + 3 + 1
        assert all("/ 0)" not in rule.css for rule in pipeline.last_document.style_rules)

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            PixelArtPipeline().process("nonexistent.png")

    def test_decode_failure(self, tmp_path):
        path = tmp_path / "bad.png"
        path.write_bytes(b"\x89PNG garbage")

        with pytest.raises(VectorizationError):
            PixelArtPipeline().process(path)

    def test_process_image(self, sprite_png):
        svg = process_image(sprite_png, config=ConversionConfig(pixel_size=2))
        assert svg.startswith("<svg")
        assert svg.endswith("</svg>")
