from __future__ import annotations

import math

import numpy as np
from pygame.math import Vector3

from core.node import Node


class Camera(Node):
    """Base camera: a node that looks at a target.

    Keeps the world -> camera rotation as a numpy matrix, rebuilt whenever the
    position or target changes, like the old first-person camera did for its
    yaw/pitch pair.
    """

    def __init__(self, name: str, aspect: float = 1.0, near: float = 0.01, far: float = 1000.0) -> None:
        super().__init__(name)
        self.aspect = float(aspect)
        self.near = float(near)
        self.far = float(far)
        self.target = Vector3(0, 0, 0)
        self.up = Vector3(0, 1, 0)
        self._R = np.eye(3, dtype=np.float64)
        self._update_axes()

    # ------------------------------------------------------------------
    def set_position(self, x: float, y: float, z: float) -> None:
        super().set_position(x, y, z)
        self._update_axes()

    def look_at(self, target) -> None:
        self.target = Vector3(target)
        self._update_axes()

    def set_aspect(self, aspect: float) -> None:
        self.aspect = float(aspect)

    def distance(self) -> float:
        return (self.world_position() - self.target).length()

    def _update_axes(self) -> None:
        forward = self.target - self.world_position()
        if forward.length_squared() < 1e-12:
            forward = Vector3(0, 0, -1)
        forward = forward.normalize()
        up = self.up
        if abs(forward.dot(up)) > 0.9999:
            # Looking straight along up: pick any perpendicular
            up = Vector3(0, 0, -1) if forward.y > 0 else Vector3(0, 0, 1)
        right = forward.cross(up).normalize()
        true_up = right.cross(forward)
        self._forward = forward
        self._right = right
        self._up = true_up
        self._R = np.array(
            [
                [right.x, right.y, right.z],
                [true_up.x, true_up.y, true_up.z],
                [-forward.x, -forward.y, -forward.z],
            ],
            dtype=np.float64,
        )

    @property
    def forward(self) -> Vector3:
        return Vector3(self._forward)

    @property
    def right(self) -> Vector3:
        return Vector3(self._right)

    @property
    def up_axis(self) -> Vector3:
        return Vector3(self._up)

    def view_matrix(self) -> np.ndarray:
        """4x4 world -> camera matrix (row major)."""
        pos = self.world_position()
        view = np.eye(4, dtype=np.float64)
        view[:3, :3] = self._R
        view[:3, 3] = -self._R @ np.array([pos.x, pos.y, pos.z], dtype=np.float64)
        return view

    def projection_matrix(self) -> np.ndarray:
        raise NotImplementedError


class PerspectiveCamera(Camera):
    def __init__(self, fov: float = 65.0, aspect: float = 1.0, near: float = 0.01, far: float = 1000.0) -> None:
        self.fov = float(fov)
        super().__init__("PerspectiveCamera", aspect, near, far)

    def projection_matrix(self) -> np.ndarray:
        f = 1.0 / math.tan(math.radians(self.fov) / 2.0)
        n, fa = self.near, self.far
        proj = np.zeros((4, 4), dtype=np.float64)
        proj[0, 0] = f / self.aspect
        proj[1, 1] = f
        proj[2, 2] = (fa + n) / (n - fa)
        proj[2, 3] = (2 * fa * n) / (n - fa)
        proj[3, 2] = -1.0
        return proj


class OrthographicCamera(Camera):
    def __init__(self, zoom: float = 1.0, aspect: float = 1.0, near: float = 0.01, far: float = 1000.0) -> None:
        self.zoom = float(zoom)
        super().__init__("OrthographicCamera", aspect, near, far)

    def set_zoom(self, zoom: float) -> None:
        if zoom <= 0:
            raise ValueError("zoom must be positive")
        self.zoom = float(zoom)

    def half_extents(self):
        # Visible height scales with distance so orbit zooming still works
        half_h = max(self.distance(), 1e-6) * 0.5 / self.zoom
        return half_h * self.aspect, half_h

    def projection_matrix(self) -> np.ndarray:
        hw, hh = self.half_extents()
        n, fa = self.near, self.far
        proj = np.eye(4, dtype=np.float64)
        proj[0, 0] = 1.0 / hw
        proj[1, 1] = 1.0 / hh
        proj[2, 2] = -2.0 / (fa - n)
        proj[2, 3] = -(fa + n) / (fa - n)
        return proj
