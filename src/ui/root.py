"""GUI root panel.

The root covers the whole window and routes window mouse events to the panel
under the cursor. When a panel takes an event its delivery stops there, so
subscribers registered after the root (the orbit control) do not react to
clicks on the GUI.
"""

from __future__ import annotations

from typing import Iterator, Optional

from core.events import MOUSE_DOWN, MOUSE_UP, CURSOR, SCROLL
from core.logger import get_logger
from ui.panel import Panel

log = get_logger("gui")


class GuiRoot(Panel):
    def __init__(self, window) -> None:
        super().__init__(*window.size())
        self.window = window
        self.renderable = False
        self.color = (0.0, 0.0, 0.0, 0.0)
        self._pressed: Optional[Panel] = None

    def subscribe_win(self) -> None:
        """(Re)subscribe to the window events this root needs."""
        # A press whose release was dropped with the old subscriptions
        self._pressed = None
        self.window.unsubscribe_all_id(self)
        self.window.subscribe_id(MOUSE_DOWN, self, self._on_mouse_down)
        self.window.subscribe_id(MOUSE_UP, self, self._on_mouse_up)
        self.window.subscribe_id(CURSOR, self, self._on_cursor)
        self.window.subscribe_id(SCROLL, self, self._on_scroll)
        log.debug("GUI root subscribed to window events")

    def renderable_panels(self) -> Iterator[Panel]:
        """Visible panels in draw order (parents before children)."""

        def _walk(panel: Panel):
            if not panel.visible:
                return
            if panel.renderable:
                yield panel
            for child in panel.children:
                yield from _walk(child)

        for child in self.children:
            yield from _walk(child)

    def dispose_children(self, recursive: bool = True) -> None:
        self._pressed = None
        super().dispose_children(recursive)

    # --------------------------- routing --------------------------------
    def _on_mouse_down(self, evname, ev) -> None:
        target = self.hit(ev.x, ev.y)
        if target is None:
            return
        self._pressed = target
        self.window.stop_event()
        target.on_mouse(evname, ev)

    def _on_mouse_up(self, evname, ev) -> None:
        target = self._pressed or self.hit(ev.x, ev.y)
        self._pressed = None
        if target is None:
            return
        self.window.stop_event()
        target.on_mouse(evname, ev)

    def _on_cursor(self, evname, ev) -> None:
        if self._pressed is not None:
            self.window.stop_event()
            self._pressed.on_cursor(evname, ev)

    def _on_scroll(self, evname, ev) -> None:
        target = self.hit(ev.x, ev.y)
        if target is None:
            return
        self.window.stop_event()
        target.on_scroll(evname, ev)
