"""Layouts that position and size the children of a panel.

DockLayout: children with DockLayoutParams stick to an edge. Top and bottom
children are placed first and take the full width; left and right children
then take the height left between them; the first center child fills
whatever remains.

HBoxLayout / VBoxLayout: children in a row (column) separated by `spacing`.
Children with an `expand` factor share the remaining space proportionally.
"""

from __future__ import annotations

from dataclasses import dataclass

DOCK_TOP = "top"
DOCK_BOTTOM = "bottom"
DOCK_LEFT = "left"
DOCK_RIGHT = "right"
DOCK_CENTER = "center"

ALIGN_TOP = "top"
ALIGN_CENTER = "center"
ALIGN_BOTTOM = "bottom"
ALIGN_LEFT = "left"
ALIGN_RIGHT = "right"


@dataclass
class DockLayoutParams:
    edge: str


@dataclass
class HBoxLayoutParams:
    expand: float = 0.0
    align_v: str = ALIGN_TOP


@dataclass
class VBoxLayoutParams:
    expand: float = 0.0
    align_h: str = ALIGN_LEFT


class DockLayout:
    def recalc(self, panel) -> None:
        width = panel.content_width()
        top_y = 0.0
        bottom_y = panel.content_height()
        left_x = 0.0
        right_x = width

        for child in panel.children:
            params = child.layout_params
            if not isinstance(params, DockLayoutParams):
                continue
            if params.edge == DOCK_TOP:
                child.set_position(0, top_y)
                top_y += child.height
                child.set_width(width)
            elif params.edge == DOCK_BOTTOM:
                child.set_position(0, bottom_y - child.height)
                bottom_y -= child.height
                child.set_width(width)

        for child in panel.children:
            params = child.layout_params
            if not isinstance(params, DockLayoutParams):
                continue
            if params.edge == DOCK_LEFT:
                child.set_position(left_x, top_y)
                left_x += child.width
                child.set_height(bottom_y - top_y)
            elif params.edge == DOCK_RIGHT:
                child.set_position(right_x - child.width, top_y)
                right_x -= child.width
                child.set_height(bottom_y - top_y)

        for child in panel.children:
            params = child.layout_params
            if isinstance(params, DockLayoutParams) and params.edge == DOCK_CENTER:
                child.set_position(left_x, top_y)
                child.set_size(right_x - left_x, bottom_y - top_y)
                break


class HBoxLayout:
    def __init__(self, spacing: float = 0.0) -> None:
        self.spacing = float(spacing)

    def recalc(self, panel) -> None:
        children = [c for c in panel.children if c.visible]
        if not children:
            return
        height = panel.content_height()
        fixed = sum(c.width for c in children if _expand(c) <= 0)
        total_expand = sum(_expand(c) for c in children)
        free = panel.content_width() - fixed - self.spacing * (len(children) - 1)
        x = 0.0
        for child in children:
            exp = _expand(child)
            if exp > 0:
                child.set_width(max(0.0, free) * exp / total_expand)
            align = getattr(child.layout_params, "align_v", ALIGN_TOP)
            if align == ALIGN_CENTER:
                y = (height - child.height) / 2.0
            elif align == ALIGN_BOTTOM:
                y = height - child.height
            else:
                y = 0.0
            child.set_position(x, y)
            x += child.width + self.spacing


class VBoxLayout:
    def __init__(self, spacing: float = 0.0) -> None:
        self.spacing = float(spacing)

    def recalc(self, panel) -> None:
        children = [c for c in panel.children if c.visible]
        if not children:
            return
        width = panel.content_width()
        y = 0.0
        for child in children:
            align = getattr(child.layout_params, "align_h", ALIGN_LEFT)
            if align == ALIGN_CENTER:
                x = (width - child.width) / 2.0
            elif align == ALIGN_RIGHT:
                x = width - child.width
            else:
                x = 0.0
            child.set_position(x, y)
            y += child.height + self.spacing


def _expand(child) -> float:
    return float(getattr(child.layout_params, "expand", 0.0) or 0.0)
