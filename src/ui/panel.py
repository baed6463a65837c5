"""Base GUI panel.

A panel is a rectangle with optional borders and paddings, a background
color, children laid out by an optional layout object, and its own event
dispatcher. Child positions are relative to the parent's content area
(inside borders and paddings).
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from core.events import Dispatcher
from ui.style import PANEL_BG, BORDER_COLOR, color4


class Panel(Dispatcher):
    def __init__(self, width: float = 0, height: float = 0) -> None:
        super().__init__()
        self.x = 0.0
        self.y = 0.0
        self.width = float(width)
        self.height = float(height)
        self.color = PANEL_BG
        self.border_color = BORDER_COLOR
        self.borders = (0.0, 0.0, 0.0, 0.0)  # top, right, bottom, left
        self.paddings = (0.0, 0.0, 0.0, 0.0)
        self.renderable = True
        self.visible = True
        self.enabled = True
        self.layout = None
        self.layout_params = None
        self.parent: Optional[Panel] = None
        self.children: List[Panel] = []
        self.user_data = None
        self.disposed = False

    # --------------------------- geometry -------------------------------
    def set_position(self, x: float, y: float) -> None:
        self.x, self.y = float(x), float(y)

    def set_size(self, width: float, height: float) -> None:
        changed = (width, height) != (self.width, self.height)
        self.width, self.height = float(max(width, 0)), float(max(height, 0))
        if changed:
            self.recalc()

    def set_width(self, width: float) -> None:
        self.set_size(width, self.height)

    def set_height(self, height: float) -> None:
        self.set_size(self.width, height)

    def set_borders(self, top: float, right: float, bottom: float, left: float) -> None:
        self.borders = (float(top), float(right), float(bottom), float(left))
        self.recalc()

    def set_paddings(self, top: float, right: float, bottom: float, left: float) -> None:
        self.paddings = (float(top), float(right), float(bottom), float(left))
        self.recalc()

    def content_offset(self) -> Tuple[float, float]:
        return (self.borders[3] + self.paddings[3], self.borders[0] + self.paddings[0])

    def content_width(self) -> float:
        return max(0.0, self.width - self.borders[1] - self.borders[3] - self.paddings[1] - self.paddings[3])

    def content_height(self) -> float:
        return max(0.0, self.height - self.borders[0] - self.borders[2] - self.paddings[0] - self.paddings[2])

    def set_content_size(self, width: float, height: float) -> None:
        ox = self.borders[1] + self.borders[3] + self.paddings[1] + self.paddings[3]
        oy = self.borders[0] + self.borders[2] + self.paddings[0] + self.paddings[2]
        self.set_size(width + ox, height + oy)

    def absolute_position(self) -> Tuple[float, float]:
        x, y = self.x, self.y
        p = self.parent
        while p is not None:
            ox, oy = p.content_offset()
            x += p.x + ox
            y += p.y + oy
            p = p.parent
        return x, y

    def contains(self, px: float, py: float) -> bool:
        ax, ay = self.absolute_position()
        return ax <= px < ax + self.width and ay <= py < ay + self.height

    # --------------------------- appearance -----------------------------
    def set_color(self, color) -> None:
        self.color = color4(color)

    def set_color4(self, color) -> None:
        self.color = color4(color)

    def set_border_color(self, color) -> None:
        self.border_color = color4(color)

    def set_renderable(self, renderable: bool) -> None:
        self.renderable = renderable

    def set_visible(self, visible: bool) -> None:
        self.visible = visible

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    # --------------------------- layout ---------------------------------
    def set_layout(self, layout) -> None:
        self.layout = layout
        self.recalc()

    def set_layout_params(self, params) -> None:
        self.layout_params = params
        if self.parent is not None:
            self.parent.recalc()

    def recalc(self) -> None:
        if self.layout is not None:
            self.layout.recalc(self)

    # --------------------------- children -------------------------------
    def add(self, child: "Panel") -> "Panel":
        if child.parent is not None:
            child.parent.remove(child)
        child.parent = self
        self.children.append(child)
        self.recalc()
        return child

    def remove(self, child: "Panel") -> bool:
        try:
            self.children.remove(child)
        except ValueError:
            return False
        child.parent = None
        self.recalc()
        return True

    def dispose(self) -> None:
        self.clear_subscriptions()
        self.disposed = True

    def dispose_children(self, recursive: bool = True) -> None:
        for child in self.children:
            if recursive:
                child.dispose_children(True)
            child.dispose()
            child.parent = None
        self.children = []
        self.recalc()

    def traverse(self) -> Iterator["Panel"]:
        yield self
        for child in self.children:
            yield from child.traverse()

    # --------------------------- events ---------------------------------
    def wants_events(self) -> bool:
        """Whether a mouse event over this panel stops at it."""
        return self.renderable

    def hit(self, px: float, py: float) -> Optional["Panel"]:
        """Deepest visible panel under the point that wants events.

        Children are tested even outside the parent rectangle: an open control
        folder hangs below the header that holds it.
        """
        if not self.visible:
            return None
        for child in reversed(self.children):
            found = child.hit(px, py)
            if found is not None:
                return found
        if self.wants_events() and self.contains(px, py):
            return self
        return None

    def on_mouse(self, evname: str, ev) -> None:
        """Called by the GUI root for mouse events over this panel."""
        self.dispatch(evname, ev)

    def on_cursor(self, evname: str, ev) -> None:
        self.dispatch(evname, ev)

    def on_scroll(self, evname: str, ev) -> None:
        self.dispatch(evname, ev)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.x:g},{self.y:g} {self.width:g}x{self.height:g})"
