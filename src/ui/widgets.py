"""Basic widgets: Label, Image, Button, CheckBox, Slider."""

from __future__ import annotations

import os
from typing import Optional

import pygame

from core.events import CHANGE, CLICK, MOUSE_DOWN, MOUSE_UP, CURSOR
from ui.fonts import measure_text
from ui.panel import Panel
from ui.style import TEXT_COLOR, color4

DEFAULT_FONT_SIZE = 14


class Label(Panel):
    def __init__(self, text: str = "", font_size: int = DEFAULT_FONT_SIZE) -> None:
        super().__init__(0, 0)
        self.text = ""
        self.font_size = font_size
        self.text_color = TEXT_COLOR
        self.color = (0.0, 0.0, 0.0, 0.0)
        self.set_text(text)

    def set_text(self, text: str) -> None:
        self.text = str(text)
        self._fit()

    def set_font_size(self, size: int) -> None:
        self.font_size = int(size)
        self._fit()

    def set_color(self, color) -> None:
        # For labels the color is the text color, like the toolkit it mimics
        self.text_color = color4(color)

    def set_color4(self, color) -> None:
        self.text_color = color4(color)

    def set_bg_color(self, color) -> None:
        self.color = color4(color)

    def _fit(self) -> None:
        w, h = measure_text(self.text, self.font_size)
        self.set_content_size(w, h)

    def wants_events(self) -> bool:
        return False


class Image(Panel):
    """Panel showing an image file scaled to its size."""

    def __init__(self, path: str) -> None:
        if not os.path.isfile(path):
            raise FileNotFoundError(path)
        surf = pygame.image.load(path)
        w, h = surf.get_size()
        super().__init__(w, h)
        self.path = path
        self.surface = surf
        self.image_size = (w, h)
        self.color = (1.0, 1.0, 1.0, 1.0)

    def set_content_aspect_width(self, width: float) -> None:
        w, h = self.image_size
        self.set_content_size(width, width * h / w if w else width)

    def wants_events(self) -> bool:
        return False


class Button(Panel):
    def __init__(self, text: str) -> None:
        super().__init__(0, 0)
        self.label = Label(text)
        self.set_paddings(2, 6, 2, 6)
        self.set_borders(1, 1, 1, 1)
        self.add(self.label)
        self.set_content_size(self.label.width, self.label.height)

    def on_mouse(self, evname: str, ev) -> None:
        super().on_mouse(evname, ev)
        if evname == MOUSE_DOWN and ev.button == 1 and self.enabled:
            self.dispatch(CLICK, ev)


class CheckBox(Panel):
    BOX = 12

    def __init__(self, text: str, value: bool = False) -> None:
        super().__init__(0, 0)
        self.value = bool(value)
        self.label = Label(text)
        self.color = (0.0, 0.0, 0.0, 0.0)
        self.label.set_position(self.BOX + 4, 0)
        self.add(self.label)
        self.set_size(self.BOX + 4 + self.label.width, max(self.BOX, self.label.height))

    def set_value(self, value: bool) -> "CheckBox":
        value = bool(value)
        if value != self.value:
            self.value = value
            self.dispatch(CHANGE, None)
        return self

    def toggle(self) -> None:
        self.set_value(not self.value)

    def on_mouse(self, evname: str, ev) -> None:
        super().on_mouse(evname, ev)
        if evname == MOUSE_DOWN and ev.button == 1 and self.enabled:
            self.toggle()


class Slider(Panel):
    """Horizontal slider with a caption; value runs from 0 to scale_factor."""

    TRACK_WIDTH = 120
    TRACK_HEIGHT = 12

    def __init__(self, text: str, scale_factor: float = 1.0, value: float = 0.0) -> None:
        super().__init__(0, 0)
        self.scale_factor = float(scale_factor) if scale_factor > 0 else 1.0
        self.value = 0.0
        self.color = (0.0, 0.0, 0.0, 0.0)
        self.label = Label(text)
        self.add(self.label)
        self.track = Panel(self.TRACK_WIDTH, self.TRACK_HEIGHT)
        self.track.set_borders(1, 1, 1, 1)
        # Transparent so the fill drawn by the slider shows through
        self.track.set_color4((1.0, 1.0, 1.0, 0.0))
        self.track.set_position(0, self.label.height + 2)
        self.add(self.track)
        self.set_size(max(self.TRACK_WIDTH, self.label.width), self.label.height + 2 + self.TRACK_HEIGHT)
        self._dragging = False
        self.value = self._clamp(value)

    def _clamp(self, value: float) -> float:
        return max(0.0, min(self.scale_factor, float(value)))

    def set_value(self, value: float) -> "Slider":
        value = self._clamp(value)
        if value != self.value:
            self.value = value
            self.dispatch(CHANGE, None)
        return self

    def hit(self, px: float, py: float) -> Optional[Panel]:
        # The track is part of the slider, not a separate target
        if self.visible and self.contains(px, py):
            return self
        return None

    def fraction(self) -> float:
        return self.value / self.scale_factor

    def _value_from_x(self, px: float) -> float:
        tx, _ = self.track.absolute_position()
        frac = (px - tx) / self.track.width if self.track.width else 0.0
        return max(0.0, min(1.0, frac)) * self.scale_factor

    def on_mouse(self, evname: str, ev) -> None:
        super().on_mouse(evname, ev)
        if not self.enabled:
            return
        if evname == MOUSE_DOWN and ev.button == 1:
            self._dragging = True
            self.set_value(self._value_from_x(ev.x))
        elif evname == MOUSE_UP:
            self._dragging = False

    def on_cursor(self, evname: str, ev) -> None:
        super().on_cursor(evname, ev)
        if self._dragging and evname == CURSOR:
            self.set_value(self._value_from_x(ev.x))


class Spacer(Panel):
    """Invisible filler used with layout expand factors."""

    def __init__(self) -> None:
        super().__init__(0, 0)
        self.renderable = False


__all__ = ["Label", "Image", "Button", "CheckBox", "Slider", "Spacer"]
