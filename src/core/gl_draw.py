"""Fixed-function OpenGL drawing of the scene and the GUI.

Only imported by Renderer.render() once a GL context exists. Node types are
drawn by isinstance dispatch, the way the old scene sorted its meshes into
draw buckets.
"""

from __future__ import annotations

from typing import Dict, Set

import numpy as np
import pygame
from OpenGL.GL import (
    glClearColor,
    glClear,
    glViewport,
    glMatrixMode,
    glLoadIdentity,
    glLoadMatrixd,
    glPushMatrix,
    glPopMatrix,
    glTranslatef,
    glOrtho,
    glEnable,
    glDisable,
    glDepthMask,
    glDepthFunc,
    glBlendFunc,
    glLightModelfv,
    glColorMaterial,
    glColor3f,
    glColor4f,
    glBegin,
    glEnd,
    glVertex2f,
    glVertex3f,
    glTexCoord2f,
    glLineWidth,
    glBindTexture,
    glGenTextures,
    glDeleteTextures,
    glTexImage2D,
    glTexParameteri,
    GL_COLOR_BUFFER_BIT,
    GL_DEPTH_BUFFER_BIT,
    GL_PROJECTION,
    GL_MODELVIEW,
    GL_DEPTH_TEST,
    GL_LEQUAL,
    GL_BLEND,
    GL_SRC_ALPHA,
    GL_ONE_MINUS_SRC_ALPHA,
    GL_LIGHTING,
    GL_LIGHT_MODEL_AMBIENT,
    GL_COLOR_MATERIAL,
    GL_FRONT_AND_BACK,
    GL_AMBIENT_AND_DIFFUSE,
    GL_LINES,
    GL_QUADS,
    GL_LINE_LOOP,
    GL_TEXTURE_2D,
    GL_RGBA,
    GL_UNSIGNED_BYTE,
    GL_TEXTURE_MIN_FILTER,
    GL_TEXTURE_MAG_FILTER,
    GL_LINEAR,
    GL_FALSE,
    GL_TRUE,
)
from OpenGL.GLU import gluNewQuadric, gluSphere

from core.mesh import Sphere, AxisHelper, GridHelper, Sprite
from ui.text_renderer import TextRenderer
from ui.style import CHECK_MARK, SLIDER_FG
from ui.widgets import Label, Image, CheckBox, Slider


class GLDrawer:  # pragma: no cover - visual
    def __init__(self) -> None:
        self._quadric = gluNewQuadric()
        self.text = TextRenderer()
        # Image panel -> GL texture; entries not drawn in a frame are freed
        self._images: Dict[object, int] = {}
        self._images_used: Set[object] = set()
        self.draw_calls = 0

    def texture_count(self) -> int:
        return self.text.texture_count() + len(self._images)

    # ------------------------------------------------------------------
    def draw_frame(self, renderer, camera, draw_list, gui_root) -> None:
        width, height = (gui_root.width, gui_root.height) if gui_root is not None else (1, 1)
        self.draw_calls = 0
        self.text.begin_frame()
        self._images_used = set()
        glViewport(0, 0, int(width), int(height))
        glClearColor(*renderer.clear_color)
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

        if camera is not None:
            self._draw_scene(camera, draw_list)
        if gui_root is not None:
            self._draw_gui(draw_list.panels, width, height)
        self.text.end_frame()
        self._free_images()
        renderer.stats.draw_calls = self.draw_calls

    def _draw_scene(self, camera, draw_list) -> None:
        glMatrixMode(GL_PROJECTION)
        # numpy matrices are row major, GL expects column major
        glLoadMatrixd(np.ascontiguousarray(camera.projection_matrix().T))
        glMatrixMode(GL_MODELVIEW)
        glLoadMatrixd(np.ascontiguousarray(camera.view_matrix().T))

        glEnable(GL_DEPTH_TEST)
        glDepthFunc(GL_LEQUAL)
        ambient = [0.0, 0.0, 0.0]
        for light in draw_list.lights:
            for i, c in enumerate(light.effective_color()):
                ambient[i] += c
        glLightModelfv(GL_LIGHT_MODEL_AMBIENT, (*ambient, 1.0))
        glColorMaterial(GL_FRONT_AND_BACK, GL_AMBIENT_AND_DIFFUSE)
        glEnable(GL_COLOR_MATERIAL)

        for node in draw_list.opaque:
            self._draw_node(node, camera)

        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        glDepthMask(GL_FALSE)
        for node in draw_list.transparent:
            self._draw_node(node, camera)
        glDepthMask(GL_TRUE)
        glDisable(GL_BLEND)
        glDisable(GL_LIGHTING)

    def _draw_node(self, node, camera) -> None:
        if node.use_lights:
            glEnable(GL_LIGHTING)
        else:
            glDisable(GL_LIGHTING)
        pos = node.world_position()
        glPushMatrix()
        glTranslatef(pos.x, pos.y, pos.z)
        if isinstance(node, Sphere):
            glColor3f(*node.color)
            gluSphere(self._quadric, node.radius, node.slices, node.stacks)
        elif isinstance(node, AxisHelper):
            glLineWidth(2.0)
            glBegin(GL_LINES)
            for start, end, color in node.segments():
                glColor3f(*color)
                glVertex3f(*start)
                glVertex3f(*end)
            glEnd()
        elif isinstance(node, GridHelper):
            glLineWidth(1.0)
            glColor3f(*node.color)
            glBegin(GL_LINES)
            for start, end in node.lines():
                glVertex3f(*start)
                glVertex3f(*end)
            glEnd()
        elif isinstance(node, Sprite):
            self._draw_sprite(node, camera)
        glPopMatrix()
        self.draw_calls += 1

    def _draw_sprite(self, sprite, camera) -> None:
        slot = self.text.text_texture(sprite.text, sprite.font_size, (*sprite.color, 1.0), key=sprite)
        w, h = slot.size
        if h:
            sprite.width = sprite.height * w / h
        right = camera.right * (sprite.width / 2.0)
        up = camera.up_axis * (sprite.height / 2.0)
        glEnable(GL_TEXTURE_2D)
        glBindTexture(GL_TEXTURE_2D, slot.id)
        glColor4f(1.0, 1.0, 1.0, 1.0)
        glBegin(GL_QUADS)
        for (u, v), (sr, su) in (((0, 0), (-1, -1)), ((1, 0), (1, -1)), ((1, 1), (1, 1)), ((0, 1), (-1, 1))):
            corner = right * sr + up * su
            glTexCoord2f(u, v)
            glVertex3f(corner.x, corner.y, corner.z)
        glEnd()
        glDisable(GL_TEXTURE_2D)

    # --------------------------- gui ------------------------------------
    def _draw_gui(self, panels, width: float, height: float) -> None:
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        glOrtho(0, width, height, 0, -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()
        glDisable(GL_DEPTH_TEST)
        glDisable(GL_LIGHTING)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        for panel in panels:
            self._draw_panel(panel)
        glDisable(GL_BLEND)
        glEnable(GL_DEPTH_TEST)

    def _draw_panel(self, panel) -> None:
        x, y = panel.absolute_position()
        w, h = panel.width, panel.height
        if panel.color[3] > 0:
            glColor4f(*panel.color)
            _quad(x, y, w, h)
        top, right, bottom, left = panel.borders
        if top or right or bottom or left:
            glColor4f(*panel.border_color)
            glLineWidth(max(panel.borders))
            _frame(x, y, w, h)
        if isinstance(panel, Label) and panel.text:
            ox, oy = panel.content_offset()
            self.text.draw_text(panel.text, x + ox, y + oy, panel.font_size, panel.text_color, key=panel)
        elif isinstance(panel, Image):
            self._draw_image(panel, x, y, w, h)
        elif isinstance(panel, CheckBox):
            glColor4f(*CHECK_MARK)
            _frame(x, y, panel.BOX, panel.BOX)
            if panel.value:
                _quad(x + 3, y + 3, panel.BOX - 6, panel.BOX - 6)
        elif isinstance(panel, Slider):
            tx, ty = panel.track.absolute_position()
            glColor4f(*SLIDER_FG)
            _quad(tx + 1, ty + 1, max(0.0, (panel.track.width - 2) * panel.fraction()), panel.track.height - 2)
        self.draw_calls += 1

    def _draw_image(self, image, x, y, w, h) -> None:
        self._images_used.add(image)
        tex = self._images.get(image)
        if tex is None:
            data = pygame.image.tostring(image.surface, "RGBA", True)
            iw, ih = image.image_size
            tex = glGenTextures(1)
            glBindTexture(GL_TEXTURE_2D, tex)
            glTexImage2D(GL_TEXTURE_2D, 0, GL_RGBA, iw, ih, 0, GL_RGBA, GL_UNSIGNED_BYTE, data)
            glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_LINEAR)
            glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_LINEAR)
            self._images[image] = tex
        glEnable(GL_TEXTURE_2D)
        glBindTexture(GL_TEXTURE_2D, tex)
        glColor4f(1.0, 1.0, 1.0, 1.0)
        glBegin(GL_QUADS)
        glTexCoord2f(0.0, 1.0)
        glVertex2f(x, y)
        glTexCoord2f(1.0, 1.0)
        glVertex2f(x + w, y)
        glTexCoord2f(1.0, 0.0)
        glVertex2f(x + w, y + h)
        glTexCoord2f(0.0, 0.0)
        glVertex2f(x, y + h)
        glEnd()
        glDisable(GL_TEXTURE_2D)

    def _free_images(self) -> None:
        stale = [image for image in self._images if image not in self._images_used]
        for image in stale:
            glDeleteTextures([self._images.pop(image)])


def _quad(x: float, y: float, w: float, h: float) -> None:  # pragma: no cover - visual
    glBegin(GL_QUADS)
    glVertex2f(x, y)
    glVertex2f(x + w, y)
    glVertex2f(x + w, y + h)
    glVertex2f(x, y + h)
    glEnd()


def _frame(x: float, y: float, w: float, h: float) -> None:  # pragma: no cover - visual
    glBegin(GL_LINE_LOOP)
    glVertex2f(x + 0.5, y + 0.5)
    glVertex2f(x + w - 0.5, y + 0.5)
    glVertex2f(x + w - 0.5, y + h - 0.5)
    glVertex2f(x + 0.5, y + h - 0.5)
    glEnd()
