"""Dock layout: panels stacked against each edge around a center panel."""

from __future__ import annotations

from ui.layout import (
    DOCK_BOTTOM,
    DOCK_CENTER,
    DOCK_LEFT,
    DOCK_RIGHT,
    DOCK_TOP,
    DockLayout,
    DockLayoutParams,
)
from ui.panel import Panel

NAME = "gui.layout_dock"

# (edge, width, height, color); order matters, the first panel of an edge is
# the outermost one
_PANELS = (
    (DOCK_TOP, 0, 50, "green"),
    (DOCK_TOP, 0, 50, "blue"),
    (DOCK_BOTTOM, 0, 32, "red"),
    (DOCK_BOTTOM, 0, 32, "green"),
    (DOCK_LEFT, 40, 0, "black"),
    (DOCK_LEFT, 40, 0, "red"),
    (DOCK_RIGHT, 40, 0, "black"),
    (DOCK_RIGHT, 40, 0, "green"),
)


class GuiLayoutDock:
    def __init__(self) -> None:
        self.panels = []
        self.center = None

    def initialize(self, app) -> None:
        parent = app.gui_panel
        parent.set_layout(DockLayout())
        self.panels = []
        for edge, width, height, color in _PANELS:
            panel = Panel(width, height)
            panel.set_borders(1, 1, 1, 1)
            if edge == DOCK_TOP:
                panel.set_paddings(4, 4, 4, 4)
            panel.set_color(color)
            panel.set_layout_params(DockLayoutParams(edge))
            parent.add(panel)
            self.panels.append(panel)

        self.center = Panel(0, 0)
        self.center.set_layout_params(DockLayoutParams(DOCK_CENTER))
        parent.add(self.center)

    def render(self, app) -> None:
        pass


def register(registry) -> None:
    registry.register(NAME, GuiLayoutDock())
