"""Renderer state and per-frame draw list preparation.

The renderer keeps the settings the shell resets between demos (clear color,
object sorting) and the per-frame statistics. prepare() is pure Python so it
runs without a display; render() hands the prepared lists to `core.gl_draw`,
which is imported on first use so PyOpenGL only loads once a GL context
exists.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from core.light import AmbientLight
from core.logger import get_logger
from core.mesh import Mesh
from core.node import Node
from core.stats import RenderStats

log = get_logger("renderer")


@dataclass
class DrawList:
    opaque: List[Node] = field(default_factory=list)
    transparent: List[Node] = field(default_factory=list)
    lights: List[AmbientLight] = field(default_factory=list)
    panels: List[object] = field(default_factory=list)


class Renderer:
    def __init__(self) -> None:
        self.clear_color: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)
        self.object_sorting = True
        self.stats = RenderStats()
        self.textures = 0
        self._gl = None

    def set_clear_color(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        self.clear_color = (r, g, b, a)

    def set_object_sorting(self, enabled: bool) -> None:
        self.object_sorting = enabled

    # ------------------------------------------------------------------
    def prepare(self, scene, camera, gui_root=None) -> DrawList:
        self.stats.reset()
        out = DrawList()
        for node in scene.traverse():
            self.stats.nodes += 1
            if isinstance(node, Mesh):
                self.stats.meshes += 1
            elif isinstance(node, AmbientLight):
                self.stats.lights += 1
                out.lights.append(node)
        cam_pos = camera.world_position() if camera is not None else None
        if cam_pos is not None:
            out.opaque, out.transparent = scene.collect(cam_pos, self.object_sorting)
        if gui_root is not None:
            out.panels = list(gui_root.renderable_panels())
            self.stats.panels = len(out.panels)
        return out

    def render(self, scene, camera, gui_root=None) -> DrawList:  # pragma: no cover - visual
        draw_list = self.prepare(scene, camera, gui_root)
        if self._gl is None:
            from core import gl_draw

            self._gl = gl_draw.GLDrawer()
            log.debug("GL drawer created")
        self._gl.draw_frame(self, camera, draw_list, gui_root)
        self.textures = self._gl.texture_count()
        return draw_list
