from __future__ import annotations

from typing import Tuple

from core.node import Node


class AmbientLight(Node):
    """Uniform light applied to every lit material in the scene."""

    def __init__(self, color: Tuple[float, float, float] = (1.0, 1.0, 1.0), intensity: float = 1.0) -> None:
        super().__init__("AmbientLight")
        self.color = tuple(color)
        self.intensity = float(intensity)

    def set_intensity(self, intensity: float) -> None:
        self.intensity = max(0.0, float(intensity))

    def effective_color(self) -> Tuple[float, float, float]:
        r, g, b = self.color
        return (r * self.intensity, g * self.intensity, b * self.intensity)
