"""Collapsible folder of controls shown in the shell header.

The folder itself is only as tall as its button; when opened, the content
panel hangs below it over the 3D area.
"""

from __future__ import annotations

from typing import Optional

from core.events import CLICK
from ui.layout import VBoxLayout
from ui.panel import Panel
from ui.style import color4
from ui.widgets import Button, CheckBox, Label, Slider

_SPACING = 4


def _fit_column(panel: Panel) -> None:
    """Resize a VBox panel around its children."""
    children = [c for c in panel.children if c.visible]
    width = max([c.width for c in children] + [getattr(panel, "min_width", 0.0)])
    height = sum(c.height for c in children) + _SPACING * max(0, len(children) - 1)
    panel.set_content_size(width, height)
    panel.recalc()


class ControlFolderGroup(Panel):
    def __init__(self, text: str) -> None:
        super().__init__(0, 0)
        self.color = (0.0, 0.0, 0.0, 0.0)
        self.set_paddings(2, 0, 2, 8)
        self.set_layout(VBoxLayout(_SPACING))
        self.title = Label(text)
        self.add(self.title)
        _fit_column(self)

    def add_check_box(self, text: str) -> CheckBox:
        cb = CheckBox(text)
        self.add_panel(cb)
        return cb

    def add_slider(self, text: str, scale_factor: float, value: float) -> Slider:
        s = Slider(text, scale_factor, value)
        self.add_panel(s)
        return s

    def add_panel(self, panel: Panel) -> Panel:
        self.add(panel)
        _fit_column(self)
        if isinstance(self.parent, Panel):
            _fit_column(self.parent)
        return panel


class ControlFolder(Panel):
    def __init__(self, text: str, width: float) -> None:
        super().__init__(width, 0)
        self.color = (0.0, 0.0, 0.0, 0.0)
        self.button = Button(text)
        self.add(self.button)
        self.content = Panel(width, 0)
        self.content.set_borders(1, 1, 1, 1)
        self.content.set_paddings(4, 4, 4, 4)
        self.content.set_layout(VBoxLayout(_SPACING))
        self.content.set_position(0, self.button.height)
        self.content.set_visible(False)
        self.add(self.content)
        self.content.min_width = float(width)
        self.set_size(max(width, self.button.width), self.button.height)
        self.button.subscribe(CLICK, lambda evname, ev: self.toggle())

    def set_styles(self, bg, fg) -> None:
        self.button.set_color4(bg)
        self.button.label.set_color4(fg)
        self.content.set_color4(color4(bg))

    # --------------------------- open/close -----------------------------
    def is_open(self) -> bool:
        return self.content.visible

    def open(self) -> None:
        self.content.set_visible(True)

    def close(self) -> None:
        self.content.set_visible(False)

    def toggle(self) -> None:
        self.content.set_visible(not self.content.visible)

    # --------------------------- controls -------------------------------
    def add_check_box(self, text: str) -> CheckBox:
        cb = CheckBox(text)
        self.add_panel(cb)
        return cb

    def add_slider(self, text: str, scale_factor: float, value: float) -> Slider:
        s = Slider(text, scale_factor, value)
        self.add_panel(s)
        return s

    def add_group(self, text: str) -> ControlFolderGroup:
        group = ControlFolderGroup(text)
        self.add_panel(group)
        return group

    def add_panel(self, panel: Panel) -> Panel:
        self.content.add(panel)
        _fit_column(self.content)
        return panel

    def controls(self):
        return list(self.content.children)

    def clear(self) -> None:
        self.content.dispose_children(True)
        _fit_column(self.content)

    # --------------------------- events ---------------------------------
    def hit(self, px: float, py: float) -> Optional[Panel]:
        if not self.visible:
            return None
        if self.content.visible:
            found = self.content.hit(px, py)
            if found is not None:
                return found
        return self.button.hit(px, py)
