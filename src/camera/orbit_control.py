"""OrbitControl: mouse driven camera orbiting around a target point.

Left drag rotates around the target, right drag pans the target, the wheel
zooms. The control subscribes to window events with itself as the owner id so
dispose() removes exactly its own subscriptions. It is recreated on every demo
switch after the GUI root subscribes, so events the GUI consumes never reach
it.
"""

from __future__ import annotations

import math

from pygame.math import Vector3

from config import (
    ORBIT_ROTATE_SPEED,
    ORBIT_ZOOM_SPEED,
    ORBIT_MIN_DISTANCE,
    ORBIT_MAX_DISTANCE,
)
from core.events import MOUSE_DOWN, MOUSE_UP, CURSOR, SCROLL
from core.logger import get_logger

log = get_logger("camera")

_NONE, _ROTATE, _PAN = 0, 1, 2
_EPS = 0.001


class OrbitControl:
    def __init__(self, camera, window) -> None:
        self.camera = camera
        self.window = window
        self.enabled = True
        self.rotate_speed = ORBIT_ROTATE_SPEED
        self.zoom_speed = ORBIT_ZOOM_SPEED
        self.min_distance = ORBIT_MIN_DISTANCE
        self.max_distance = ORBIT_MAX_DISTANCE
        self._state = _NONE
        self._last = (0.0, 0.0)
        self._disposed = False

        window.subscribe_id(MOUSE_DOWN, self, self._on_mouse_down)
        window.subscribe_id(MOUSE_UP, self, self._on_mouse_up)
        window.subscribe_id(CURSOR, self, self._on_cursor)
        window.subscribe_id(SCROLL, self, self._on_scroll)

    def dispose(self) -> None:
        if self._disposed:
            return
        self.window.unsubscribe_all_id(self)
        self._disposed = True
        log.debug("Orbit control disposed")

    # --------------------------- spherical ------------------------------
    def _spherical(self):
        offset = self.camera.world_position() - self.camera.target
        radius = max(offset.length(), _EPS)
        theta = math.atan2(offset.x, offset.z)
        phi = math.acos(max(-1.0, min(1.0, offset.y / radius)))
        return radius, theta, phi

    def _apply(self, radius: float, theta: float, phi: float) -> None:
        phi = max(_EPS, min(math.pi - _EPS, phi))
        radius = max(self.min_distance, min(self.max_distance, radius))
        sin_phi = math.sin(phi)
        offset = Vector3(
            radius * sin_phi * math.sin(theta),
            radius * math.cos(phi),
            radius * sin_phi * math.cos(theta),
        )
        pos = self.camera.target + offset
        if self.camera.parent is not None:
            pos -= self.camera.parent.world_position()
        self.camera.set_position(pos.x, pos.y, pos.z)

    def rotate(self, dtheta: float, dphi: float) -> None:
        radius, theta, phi = self._spherical()
        self._apply(radius, theta + dtheta, phi + dphi)

    def zoom(self, delta: float) -> None:
        radius, theta, phi = self._spherical()
        self._apply(radius * (1.0 - delta * self.zoom_speed), theta, phi)

    def pan(self, dx: float, dy: float) -> None:
        radius, _, _ = self._spherical()
        scale = radius * self.rotate_speed
        shift = self.camera.right * (-dx * scale) + self.camera.up_axis * (dy * scale)
        self.camera.target = self.camera.target + shift
        pos = self.camera.position + shift
        self.camera.set_position(pos.x, pos.y, pos.z)

    # --------------------------- events ---------------------------------
    def _on_mouse_down(self, evname, ev) -> None:
        if not self.enabled:
            return
        if ev.button == 1:
            self._state = _ROTATE
        elif ev.button == 3:
            self._state = _PAN
        self._last = (ev.x, ev.y)

    def _on_mouse_up(self, evname, ev) -> None:
        self._state = _NONE

    def _on_cursor(self, evname, ev) -> None:
        if not self.enabled or self._state == _NONE:
            return
        dx = ev.x - self._last[0]
        dy = ev.y - self._last[1]
        self._last = (ev.x, ev.y)
        if self._state == _ROTATE:
            self.rotate(-dx * self.rotate_speed, -dy * self.rotate_speed)
        else:
            self.pan(dx, dy)

    def _on_scroll(self, evname, ev) -> None:
        if not self.enabled:
            return
        self.zoom(ev.yoffset)


__all__ = ["OrbitControl"]
