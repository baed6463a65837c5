"""Named colors and default widget colors."""

from __future__ import annotations

from typing import Tuple, Union

Color4 = Tuple[float, float, float, float]

NAMED_COLORS = {
    "black": (0.0, 0.0, 0.0),
    "white": (1.0, 1.0, 1.0),
    "red": (1.0, 0.0, 0.0),
    "green": (0.0, 0.5, 0.0),
    "lime": (0.0, 1.0, 0.0),
    "blue": (0.0, 0.0, 1.0),
    "cyan": (0.0, 1.0, 1.0),
    "magenta": (1.0, 0.0, 1.0),
    "yellow": (1.0, 1.0, 0.0),
    "gray": (0.5, 0.5, 0.5),
    "darkgray": (0.66, 0.66, 0.66),
    "lightgray": (0.83, 0.83, 0.83),
}

PANEL_BG = (0.86, 0.86, 0.86, 1.0)
BORDER_COLOR = (0.0, 0.0, 0.0, 1.0)
SCROLLER_BG = (0.78, 0.78, 0.78, 0.0)
TEXT_COLOR = (0.0, 0.0, 0.0, 1.0)
SELECTED_BG = (0.55, 0.70, 0.90, 1.0)
SLIDER_FG = (0.35, 0.55, 0.80, 1.0)
CHECK_MARK = (0.1, 0.1, 0.1, 1.0)


def color4(color: Union[str, tuple], alpha: float = 1.0) -> Color4:
    """Accept a color name, an RGB tuple or an RGBA tuple."""
    if isinstance(color, str):
        try:
            r, g, b = NAMED_COLORS[color.lower()]
        except KeyError:
            raise ValueError(f"unknown color name {color!r}") from None
        return (r, g, b, alpha)
    if len(color) == 3:
        return (float(color[0]), float(color[1]), float(color[2]), alpha)
    if len(color) == 4:
        return tuple(float(c) for c in color)
    raise ValueError(f"invalid color {color!r}")
