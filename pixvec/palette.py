"""Palette registry: dense class ids for distinct colors, in first-seen order."""
import math
from typing import Dict, List

from pixvec.types import ColorKey, StyleRule


def format_alpha(a: int) -> str:
    """
    Format an alpha byte as a fraction rounded to three decimals.

    Rounds half up, so 128 -> "0.502" and whole values print without
    a decimal point ("0").
    """
    value = math.floor((a / 255) * 1000 + 0.5) / 1000
    if value == int(value):
        return str(int(value))
    return repr(value)


def rgba_to_css(color: ColorKey) -> str:
    """
    Render a color as a CSS color expression.

    Opaque colors use rgb(); anything else carries a fractional alpha.
    """
    r, g, b, a = color
    if a == 255:
        return f"rgb({r} {g} {b})"
    return f"rgba({r} {g} {b} / {format_alpha(a)})"


def class_name(class_id: int) -> str:
    """CSS class name for a palette entry."""
    return f"c{class_id}"


class PaletteRegistry:
    """Maps each distinct ColorKey to a dense class id."""

    def __init__(self):
        self._ids: Dict[ColorKey, int] = {}
        self._colors: List[ColorKey] = []
        self._rules: List[StyleRule] = []

    def intern(self, color: ColorKey) -> int:
        """
        Return the class id for a color, allocating the next id on first sight.

        Must be called in scan order for ids to be reproducible.
        """
        class_id = self._ids.get(color)
        if class_id is None:
            class_id = len(self._ids)
            self._ids[color] = class_id
            self._colors.append(color)
            self._rules.append(StyleRule(class_id, rgba_to_css(color)))
        return class_id

    def class_id(self, color: ColorKey) -> int:
        """Look up an already interned color. Raises KeyError if unseen."""
        return self._ids[color]

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, color) -> bool:
        return color in self._ids

    @property
    def colors(self) -> List[ColorKey]:
        """Colors in class id order."""
        return list(self._colors)

    @property
    def style_rules(self) -> List[StyleRule]:
        """Finalized style table in class id order."""
        return list(self._rules)
