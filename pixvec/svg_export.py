"""Rect emission and SVG export for pixel-art vectorization."""
from pathlib import Path
from typing import List, Union

from pixvec.types import Run, RectPrimitive, VectorDocument
from pixvec.palette import PaletteRegistry, class_name

SVG_NS = "http://www.w3.org/2000/svg"


def emit_primitives(
    runs: List[Run],
    palette: PaletteRegistry,
    pixel_size: int
) -> List[RectPrimitive]:
    """
    Scale runs into rect primitives.

    Args:
        runs: Runs in scan order
        palette: Registry every run color was interned into
        pixel_size: Output pixels per source pixel

    Returns:
        One RectPrimitive per run, same order
    """
    return [
        RectPrimitive(
            x=run.start_x * pixel_size,
            y=run.row * pixel_size,
            width=run.length * pixel_size,
            height=pixel_size,
            class_id=palette.class_id(run.color),
        )
        for run in runs
    ]


def build_document(
    runs: List[Run],
    palette: PaletteRegistry,
    width: int,
    height: int,
    pixel_size: int
) -> VectorDocument:
    """
    Assemble the vector document for a scanned buffer.

    Args:
        runs: Runs in scan order
        palette: Finalized palette
        width: Source width in pixels
        height: Source height in pixels
        pixel_size: Output pixels per source pixel

    Returns:
        VectorDocument with a width*pixel_size x height*pixel_size canvas
    """
    return VectorDocument(
        canvas_width=width * pixel_size,
        canvas_height=height * pixel_size,
        style_rules=palette.style_rules,
        primitives=emit_primitives(runs, palette, pixel_size),
    )


def rect_to_svg(rect: RectPrimitive) -> str:
    """Convert a rect primitive to an SVG rect element."""
    return (
        f'<rect x="{rect.x}" y="{rect.y}" width="{rect.width}" '
        f'height="{rect.height}" class="{class_name(rect.class_id)}"/>'
    )


def document_to_svg(document: VectorDocument) -> str:
    """
    Serialize a vector document as SVG markup.

    Output is byte-stable: one style block in class order, one rect
    element per line in primitive order, no trailing newline.
    """
    w, h = document.canvas_width, document.canvas_height

    css = ''.join(
        f".{class_name(rule.class_id)}{{fill:{rule.css};}}"
        for rule in document.style_rules
    )
    rects = '\n'.join(rect_to_svg(rect) for rect in document.primitives)

    return '\n'.join([
        f'<svg xmlns="{SVG_NS}" width="{w}" height="{h}" '
        f'viewBox="0 0 {w} {h}" shape-rendering="crispEdges">',
        f'<style>{css}</style>',
        rects,
        '</svg>',
    ])


def save_svg(
    svg_string: str,
    output_path: Union[str, Path]
) -> None:
    """
    Save SVG string to file.

    Args:
        svg_string: SVG content
        output_path: Output file path
    """
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(svg_string)
