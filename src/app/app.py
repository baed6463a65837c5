"""The demo application shell.

App owns the engine (window, scene, GUI, cameras, audio) and the currently
selected demo. Every demo switch goes through setup_scene(), which tears the
previous demo down and restores the default scene before the next demo's
initialize() runs. Demos only talk to the engine through the accessors below.
"""

from __future__ import annotations

import os
from typing import Callable, List, Optional, Union

import pygame
from pygame.math import Vector3

from app.datadir import find_data_dir
from app.options import Options, usage
from camera import OrbitControl
from config import (
    AMBIENT_COLOR,
    AMBIENT_INTENSITY,
    BACKGROUND_COLOR,
    DATA_DIR_NAME,
    HEADER_COLOR,
    HEADER_FONT_SIZE,
    HEADER_HEIGHT,
    LIGHT_TEXT_COLOR,
    LOGO_IMAGE,
    ORTHO_POSITION,
    ORTHO_ZOOM,
    PERSP_POSITION,
    PROG_NAME,
    STATS_INTERVAL,
    TREE_WIDTH,
    VMAJOR,
    VMINOR,
)
from core.engine import Engine
from core.events import AFTER_RENDER, BEFORE_RENDER, CHANGE, KEY_DOWN, MOD_ALT, MOD_CONTROL, WINDOW_SIZE
from core.light import AmbientLight
from core.logger import apply_log_levels, fatal, init_logger
from core.stats import Stats
from core.window import ARROW_CURSOR, KEY_ESCAPE, KEY_F11, KEY_S
from demos.registry import Demo, DemoRegistry
from sound.audio import AudioError
from ui.control_folder import ControlFolder
from ui.layout import (
    ALIGN_BOTTOM,
    ALIGN_CENTER,
    DOCK_CENTER,
    DOCK_LEFT,
    DOCK_TOP,
    DockLayout,
    DockLayoutParams,
    HBoxLayout,
    HBoxLayoutParams,
)
from ui.panel import Panel
from ui.stats_table import StatsTable
from ui.style import SCROLLER_BG
from ui.tree import Tree
from ui.widgets import Image, Label, Spacer

_STATS_FORMAT = """
        Textures: %d
           Nodes: %d
          Meshes: %d
          Panels: %d
Draw calls/frame: %d
          Frames: %d
"""


class App:
    def __init__(self, engine: Engine, registry: DemoRegistry, options: Options, log) -> None:
        self.engine = engine
        self.registry = registry
        self.options = options
        self._log = log
        self.current_demo: Optional[Demo] = None
        self.stats = Stats(clock=engine.clock)
        self.stats_table: Optional[StatsTable] = None
        self.label_fps: Optional[Label] = None
        self.tree_demos: Optional[Tree] = None
        self._control: Optional[ControlFolder] = None
        self._panel_3d: Optional[Panel] = None
        self._amb_light: Optional[AmbientLight] = None
        self._dir_data = ""
        self._finalizers: List[Callable[[], None]] = []

    # ------------------------------------------------------------------
    @classmethod
    def create(cls, registry: DemoRegistry, options: Options, engine: Optional[Engine] = None) -> "App":
        log = init_logger()
        if engine is None:
            engine = Engine()
        app = cls(engine, registry, options, log)
        log.info("%s v%d.%d starting", PROG_NAME, VMAJOR, VMINOR)

        # Per package log levels
        apply_log_levels(options.logs, log)

        # Data directory is required
        dir_data = find_data_dir(DATA_DIR_NAME)
        if dir_data is None:
            fatal(log, "Data directory NOT FOUND")
        app._dir_data = dir_data
        log.info("Using data directory:%s", dir_data)

        # Sound is optional
        try:
            engine.audio.open()
        except AudioError as exc:
            log.error("%s", exc)

        if not options.nogui:
            app.build_gui()

        app.setup_scene()

        if options.demo is not None:
            demo = registry.lookup(options.demo)
            if demo is None:
                log.error("Invalid demo name")
                usage()
            demo.initialize(app)
            app.current_demo = demo

        engine.events.subscribe(BEFORE_RENDER, app._on_before_render)
        engine.events.subscribe(AFTER_RENDER, app._on_after_render)
        return app

    def run(self) -> None:  # pragma: no cover - visual
        self.engine.run()

    # --------------------------- window ---------------------------------
    @property
    def window(self):
        return self.engine.window

    # --------------------------- scene ----------------------------------
    @property
    def scene(self):
        return self.engine.scene

    # --------------------------- cameras --------------------------------
    @property
    def camera(self):
        return self.engine.camera

    @property
    def camera_persp(self):
        return self.engine.camera_persp

    @property
    def camera_ortho(self):
        return self.engine.camera_ortho

    def set_camera(self, camera) -> None:
        self.engine.set_camera(camera)

    def on_window_resize(self, evname=None, ev=None) -> None:
        self.engine.on_window_resize(evname, ev)

    # --------------------------- orbit ----------------------------------
    @property
    def orbit(self) -> Optional[OrbitControl]:
        return self.engine.orbit

    def set_orbit(self, orbit: OrbitControl) -> None:
        self.engine.set_orbit(orbit)

    # --------------------------- renderer -------------------------------
    @property
    def renderer(self):
        return self.engine.renderer

    @property
    def frame_rater(self):
        return self.engine.frame_rater

    # --------------------------- gui ------------------------------------
    @property
    def gui(self):
        """The GUI root panel covering the whole window."""
        return self.engine.gui_root

    @property
    def panel_3d(self) -> Panel:
        """Panel over the 3D area; the GUI root itself without a GUI."""
        return self._panel_3d if self._panel_3d is not None else self.engine.gui_root

    @property
    def gui_panel(self) -> Panel:
        """Panel demos add their GUI elements to."""
        return self.panel_3d

    @property
    def control_folder(self) -> Optional[ControlFolder]:
        return self._control

    # --------------------------- audio ----------------------------------
    @property
    def audio(self):
        return self.engine.audio

    # --------------------------- lights ---------------------------------
    @property
    def amb_light(self) -> Optional[AmbientLight]:
        return self._amb_light

    # --------------------------- data -----------------------------------
    @property
    def dir_data(self) -> str:
        return self._dir_data

    def data_path(self, *parts: str) -> str:
        return os.path.join(self._dir_data, *parts)

    # --------------------------- logging --------------------------------
    @property
    def log(self):
        return self._log

    # --------------------------- lifecycle ------------------------------
    def add_finalizer(self, func: Callable[[], None]) -> None:
        """Register a function called before the next demo starts."""
        self._finalizers.append(func)

    def finalizer_count(self) -> int:
        return len(self._finalizers)

    def elapsed(self) -> float:
        return self.engine.elapsed()

    def quit(self) -> None:
        self.engine.quit()

    # ------------------------------------------------------------------
    def select_demo(self, demo: Union[str, Demo]) -> Demo:
        """Reset the scene and make `demo` (or the demo registered under it) current."""
        if isinstance(demo, str):
            found = self.registry.lookup(demo)
            if found is None:
                raise KeyError(f"unknown demo {demo!r}")
            demo = found
        self.setup_scene()
        demo.initialize(self)
        self.current_demo = demo
        return demo

    def setup_scene(self) -> None:
        """Tear down the current demo and restore the default scene."""
        # Demo finalizers, in registration order
        finalizers, self._finalizers = self._finalizers, []
        for func in finalizers:
            func()

        window = self.window
        window.cancel_dispatch()
        window.clear_subscriptions()
        self.gui_panel.clear_subscriptions()

        window.dispose_all_cursors()
        window.set_standard_cursor(ARROW_CURSOR)

        self.scene.dispose_children(True)
        self.panel_3d.dispose_children(True)

        self.renderer.set_clear_color(*BACKGROUND_COLOR)
        self.renderer.set_object_sorting(True)

        self._amb_light = AmbientLight(AMBIENT_COLOR, AMBIENT_INTENSITY)
        self.scene.add(self._amb_light)

        width, height = window.size()
        aspect = width / height if height else 1.0
        origin = Vector3(0, 0, 0)
        persp = self.camera_persp
        persp.set_position(*PERSP_POSITION)
        persp.look_at(origin)
        persp.set_aspect(aspect)
        ortho = self.camera_ortho
        ortho.set_position(*ORTHO_POSITION)
        ortho.look_at(origin)
        ortho.set_zoom(ORTHO_ZOOM)
        ortho.set_aspect(aspect)

        self.set_camera(persp)
        # Listeners attached to the camera need it in the scene
        self.scene.add(self.camera)

        window.subscribe(KEY_DOWN, self._on_key_down)
        window.subscribe(WINDOW_SIZE, self.on_window_resize)

        # Window subscriptions were cleared, so the GUI must subscribe again.
        # Done before the orbit control so GUI events never reach it.
        self.gui.subscribe_win()
        self.set_orbit(OrbitControl(self.camera, window))

        self.audio.reset_listener()

        if self._control is None:
            return
        self._control.clear()

        cb = self._control.add_check_box("Perspective camera").set_value(True)

        def on_camera_change(evname, ev):
            if cb.value:
                self.set_camera(self.camera_persp)
            else:
                self.set_camera(self.camera_ortho)
            self.on_window_resize()
            self.orbit.dispose()
            self.set_orbit(OrbitControl(self.camera, self.window))

        cb.subscribe(CHANGE, on_camera_change)

        slider = self._control.add_slider("Ambient light:", 2.0, self._amb_light.intensity)
        slider.subscribe(CHANGE, lambda evname, ev: self._amb_light.set_intensity(slider.value))

    # ------------------------------------------------------------------
    def build_gui(self) -> None:
        root = self.gui
        root.set_layout(DockLayout())

        # Transparent center panel holding demo GUIs
        center = Panel(0, 0)
        center.set_renderable(False)
        center.set_color4(SCROLLER_BG)
        center.set_layout_params(DockLayoutParams(DOCK_CENTER))
        root.add(center)
        self._panel_3d = center

        # Header goes after the center panel so an open control folder is
        # drawn over the demo panels
        header = Panel(600, HEADER_HEIGHT)
        header.set_borders(0, 0, 1, 0)
        header.set_paddings(4, 4, 4, 4)
        header.set_color4(HEADER_COLOR)
        header.set_layout_params(DockLayoutParams(DOCK_TOP))
        header.set_layout(HBoxLayout())
        root.add(header)

        logo_path = self.data_path(LOGO_IMAGE)
        try:
            logo = Image(logo_path)
        except (FileNotFoundError, pygame.error):
            logo = None
        if logo is not None:
            logo.set_content_aspect_width(32)
            header.add(logo)

        title = Label(" ", HEADER_FONT_SIZE)
        title.set_layout_params(HBoxLayoutParams(align_v=ALIGN_CENTER))
        title.set_text(f"{PROG_NAME} v{VMAJOR}.{VMINOR}")
        title.set_color4(LIGHT_TEXT_COLOR)
        header.add(title)

        if not self.options.hidefps:
            caption = Label("  FPS: ", HEADER_FONT_SIZE)
            caption.set_layout_params(HBoxLayoutParams(align_v=ALIGN_CENTER))
            caption.set_color4(LIGHT_TEXT_COLOR)
            header.add(caption)
            self.label_fps = Label(" ", HEADER_FONT_SIZE)
            self.label_fps.set_layout_params(HBoxLayoutParams(align_v=ALIGN_CENTER))
            self.label_fps.set_color4(LIGHT_TEXT_COLOR)
            header.add(self.label_fps)

        if self.options.stats:
            spacer = Spacer()
            spacer.set_layout_params(HBoxLayoutParams(expand=1.2, align_v=ALIGN_BOTTOM))
            header.add(spacer)
            stats_folder = ControlFolder("Stats", 100)
            stats_folder.set_layout_params(HBoxLayoutParams(align_v=ALIGN_BOTTOM))
            stats_folder.set_styles(HEADER_COLOR, LIGHT_TEXT_COLOR)
            header.add(stats_folder)
            self.stats_table = StatsTable(220, 200, self.stats)
            stats_folder.add_panel(self.stats_table)

        # Right justifies the control folder
        spacer = Spacer()
        spacer.set_layout_params(HBoxLayoutParams(expand=1.0, align_v=ALIGN_BOTTOM))
        header.add(spacer)

        self._control = ControlFolder("Controls", 100)
        self._control.set_layout_params(HBoxLayoutParams(align_v=ALIGN_BOTTOM))
        self._control.set_styles(HEADER_COLOR, LIGHT_TEXT_COLOR)
        header.add(self._control)

        # Demo list, grouped by the text before the first dot
        self.tree_demos = Tree(TREE_WIDTH, 0)
        self.tree_demos.set_layout_params(DockLayoutParams(DOCK_LEFT))
        nodes = {}
        for name in self.registry.names():
            category, dot, rest = name.partition(".")
            item = Label(rest if dot else name)
            item.user_data = self.registry.lookup(name)
            if dot:
                node = nodes.get(category)
                if node is None:
                    node = self.tree_demos.add_node(category)
                    nodes[category] = node
                node.add(item)
            else:
                self.tree_demos.add(item)
        self.tree_demos.subscribe(CHANGE, self._on_tree_change)
        root.add(self.tree_demos)

    def _on_tree_change(self, evname, ev) -> None:
        sel = self.tree_demos.selected()
        if sel is None or sel.user_data is None:
            return
        self.select_demo(sel.user_data)

    # ------------------------------------------------------------------
    def update_fps(self) -> None:
        """Show FPS / potential FPS in the header label or the window title."""
        if self.options.hidefps:
            return
        fps, pfps, ok = self.frame_rater.fps(self.options.updatefps / 1000.0)
        if not ok:
            return
        msg = "%3.1f / %3.1f" % (fps, pfps)
        if self.options.nogui:
            self.window.set_title(msg)
        elif self.label_fps is not None:
            self.label_fps.set_text(msg)

    def log_stats(self) -> None:
        s = self.stats
        self._log.info(_STATS_FORMAT, s.textures, s.nodes, s.meshes, s.panels, s.draw_calls, s.frames)

    # --------------------------- callbacks ------------------------------
    def _on_key_down(self, evname, ev) -> None:
        if ev.keycode == KEY_ESCAPE:
            self.quit()
            return
        if ev.keycode == KEY_F11 and ev.mods == MOD_ALT:
            self.window.set_fullscreen(not self.window.fullscreen)
            return
        if ev.keycode == KEY_S and ev.mods == MOD_CONTROL | MOD_ALT:
            self.log_stats()

    def _on_before_render(self, evname, ev) -> None:
        if self.current_demo is not None:
            self.current_demo.render(self)

    def _on_after_render(self, evname, ev) -> None:
        if self.stats.update(STATS_INTERVAL, self.renderer.stats, self.renderer.textures):
            if self.stats_table is not None:
                self.stats_table.update(self.stats)
        if self.options.renderstats:
            rstats = self.renderer.stats
            if rstats.panels > 0:
                self._log.debug("render stats:%s", rstats)
        self.update_fps()
