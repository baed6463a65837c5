"""Simple text rendering for OpenGL with pygame fonts.

Draws 2D text in screen space on top of the 3D scene and rasterises text
into textures for world-space label sprites. Uses a lightweight texture cache
and supports dynamic labels (e.g., FPS) through keyed slots.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Set, Tuple

import pygame
from OpenGL.GL import (
    glGenTextures,
    glDeleteTextures,
    glBindTexture,
    glTexImage2D,
    glTexParameteri,
    glBegin,
    glEnd,
    glTexCoord2f,
    glVertex2f,
    glColor4f,
    glEnable,
    glDisable,
    GL_TEXTURE_2D,
    GL_TEXTURE_MIN_FILTER,
    GL_TEXTURE_MAG_FILTER,
    GL_LINEAR,
    GL_RGBA,
    GL_UNSIGNED_BYTE,
    GL_QUADS,
)

from ui.fonts import get_font

RGBA = Tuple[float, float, float, float]


@dataclass
class _TexSlot:
    id: int
    size: Tuple[int, int]
    last_text: Optional[str] = None


def _to_255(color: RGBA) -> Tuple[int, int, int, int]:
    return tuple(int(max(0.0, min(1.0, c)) * 255) for c in color)


class TextRenderer:
    """2D text renderer for OpenGL using pygame.font.

    - draw_text() can take a `key` to reuse a texture slot for dynamic text.
      Keys are the drawn objects themselves; slots whose key was not drawn
      between begin_frame() and end_frame() are freed.
    - Without a key, content is cached by (text, size, color) and reused.
    - Must be called inside an orthographic overlay set up by the caller.
    """

    def __init__(self) -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        self._cache: Dict[Tuple[str, int, Tuple[int, int, int, int]], _TexSlot] = {}
        self._slots: Dict[object, _TexSlot] = {}
        self._used: Set[object] = set()

    def texture_count(self) -> int:
        return len(self._cache) + len(self._slots)

    # --------------------------- textures -------------------------------
    def _upload_surface(self, slot: _TexSlot, surf: pygame.Surface) -> None:
        data = pygame.image.tostring(surf, "RGBA", True)
        w, h = surf.get_width(), surf.get_height()
        glBindTexture(GL_TEXTURE_2D, slot.id)
        glTexImage2D(GL_TEXTURE_2D, 0, GL_RGBA, w, h, 0, GL_RGBA, GL_UNSIGNED_BYTE, data)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_LINEAR)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_LINEAR)
        slot.size = (w, h)

    def text_texture(self, text: str, size: int, color: RGBA, key: Optional[object] = None) -> _TexSlot:
        """Return a slot whose texture holds `text`; re-rendered only on change."""
        c255 = _to_255(color)
        if key is not None:
            self._used.add(key)
            slot = self._slots.get(key)
            if slot is None:
                slot = _TexSlot(id=glGenTextures(1), size=(0, 0))
                self._slots[key] = slot
            if slot.last_text != text:
                surf = get_font(size).render(text or " ", True, c255)
                self._upload_surface(slot, surf)
                slot.last_text = text
            return slot
        cache_key = (text, size, c255)
        slot = self._cache.get(cache_key)
        if slot is None:
            slot = _TexSlot(id=glGenTextures(1), size=(0, 0), last_text=text)
            surf = get_font(size).render(text or " ", True, c255)
            self._upload_surface(slot, surf)
            self._cache[cache_key] = slot
        return slot

    def release(self, key: object) -> None:
        slot = self._slots.pop(key, None)
        if slot is not None:
            glDeleteTextures([slot.id])

    def begin_frame(self) -> None:
        self._used = set()

    def end_frame(self) -> int:
        """Free keyed slots not drawn since begin_frame(); returns how many."""
        stale = [key for key in self._slots if key not in self._used]
        for key in stale:
            self.release(key)
        return len(stale)

    # --------------------------- drawing --------------------------------
    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        size: int,
        color: RGBA = (1.0, 1.0, 1.0, 1.0),
        *,
        key: Optional[object] = None,
    ) -> Tuple[int, int]:
        """Draw a single line of text with its top-left corner at (x, y)."""
        slot = self.text_texture(text, size, color, key)
        w, h = slot.size
        glEnable(GL_TEXTURE_2D)
        glBindTexture(GL_TEXTURE_2D, slot.id)
        glColor4f(1.0, 1.0, 1.0, 1.0)
        glBegin(GL_QUADS)
        # pygame.image.tostring with flipped=True puts the origin at the bottom
        glTexCoord2f(0.0, 1.0)
        glVertex2f(x, y)
        glTexCoord2f(1.0, 1.0)
        glVertex2f(x + w, y)
        glTexCoord2f(1.0, 0.0)
        glVertex2f(x + w, y + h)
        glTexCoord2f(0.0, 0.0)
        glVertex2f(x, y + h)
        glEnd()
        glDisable(GL_TEXTURE_2D)
        return w, h
