"""Conversion statistics."""
from pixvec.types import ConversionStats, PixelBuffer, VectorDocument


def build_stats(
    buffer: PixelBuffer,
    document: VectorDocument,
    pixel_size: int,
    elapsed_seconds: float
) -> ConversionStats:
    """Summarize a finished conversion. elapsed_ms is rounded to 2 decimals."""
    return ConversionStats(
        width=buffer.width,
        height=buffer.height,
        pixel_size=pixel_size,
        palette_size=len(document.style_rules),
        primitive_count=len(document.primitives),
        elapsed_ms=round(elapsed_seconds * 1000, 2),
    )


def format_stats(stats: ConversionStats, source_format: str = "PNG") -> str:
    """One-line status summary, e.g. 'PNG 16×16 | pixelSize=4 | palette=3 | rects=20 | 0.41ms'."""
    return (
        f"{source_format} {stats.width}×{stats.height} | pixelSize={stats.pixel_size} | "
        f"palette={stats.palette_size} | rects={stats.primitive_count} | {stats.elapsed_ms}ms"
    )
