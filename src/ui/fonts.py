"""Font cache and text measurement.

Measurement uses pygame.font once it is initialized (the text renderer does
that when the GL window opens). Before that, layouts get a fixed-advance
estimate so panels can be built and laid out without a display.
"""

from __future__ import annotations

from typing import Dict, Tuple

import pygame

_fonts: Dict[int, "pygame.font.Font"] = {}

# Average glyph advance relative to the point size for the default font
_ADVANCE = 0.5


def get_font(size: int) -> "pygame.font.Font":
    font = _fonts.get(size)
    if font is None:
        if not pygame.font.get_init():
            pygame.font.init()
        font = pygame.font.Font(None, size)
        _fonts[size] = font
    return font


def measure_text(text: str, size: int) -> Tuple[int, int]:
    if pygame.font.get_init():
        return get_font(size).size(text)
    return int(round(len(text) * size * _ADVANCE)), int(size)
