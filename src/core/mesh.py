"""Drawable scene nodes.

These hold geometry parameters and material colors only; the GL code that
draws them lives in `core.gl_draw` and dispatches on the node type.
"""

from __future__ import annotations

from typing import Tuple

from core.node import Node

Color = Tuple[float, float, float]


class Mesh(Node):
    drawable = True

    def __init__(
        self,
        name: str = "",
        color: Color = (1.0, 1.0, 1.0),
        *,
        use_lights: bool = True,
        transparent: bool = False,
    ) -> None:
        super().__init__(name)
        self.color = tuple(color)
        self.use_lights = use_lights
        self.transparent = transparent


class Sphere(Mesh):
    def __init__(
        self,
        radius: float,
        color: Color,
        *,
        slices: int = 32,
        stacks: int = 32,
        emissive: bool = False,
    ) -> None:
        # Emissive spheres ignore scene lights, like an unlit material
        super().__init__("Sphere", color, use_lights=not emissive)
        self.radius = float(radius)
        self.slices = slices
        self.stacks = stacks
        self.emissive = emissive


class AxisHelper(Mesh):
    """Three colored lines along +X (red), +Y (green) and +Z (blue)."""

    def __init__(self, size: float = 1.0) -> None:
        super().__init__("AxisHelper", use_lights=False)
        self.size = float(size)

    def segments(self):
        s = self.size
        return [
            ((0, 0, 0), (s, 0, 0), (1.0, 0.0, 0.0)),
            ((0, 0, 0), (0, s, 0), (0.0, 1.0, 0.0)),
            ((0, 0, 0), (0, 0, s), (0.0, 0.0, 1.0)),
        ]


class GridHelper(Mesh):
    """Square grid on the XZ plane centered at the node position."""

    def __init__(self, size: float, step: float, color: Color) -> None:
        super().__init__("GridHelper", color, use_lights=False)
        self.size = float(size)
        self.step = float(step)

    def lines(self):
        half = self.size / 2.0
        count = int(self.size / self.step)
        out = []
        for i in range(count + 1):
            p = -half + i * self.step
            out.append(((-half, 0.0, p), (half, 0.0, p)))
            out.append(((p, 0.0, -half), (p, 0.0, half)))
        return out


class Sprite(Mesh):
    """Camera facing quad showing a line of text."""

    def __init__(
        self,
        text: str,
        height: float = 0.5,
        color: Color = (0.0, 0.0, 0.0),
        *,
        font_size: int = 32,
        aspect: float = 0.0,
    ) -> None:
        super().__init__("Sprite", color, use_lights=False, transparent=True)
        self.text = text
        self.font_size = font_size
        self.height = float(height)
        # Width follows the text aspect unless given; about half an em per glyph
        if aspect <= 0:
            aspect = max(1.0, len(text) * 0.5)
        self.width = self.height * aspect
