"""Core engine loop & orchestration.

Separates concerns:
- Engine: owns the window, scene, GUI root, cameras, renderer, audio device
  and frame rater, and runs the main loop.
- The application shell subscribes to BEFORE_RENDER / AFTER_RENDER on
  `engine.events` to drive demos and statistics.

A window flagged `headless` (tests) gets everything except the GL calls:
frames still process events, run the render callbacks and update audio.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

import pygame

from camera.camera import Camera, OrthographicCamera, PerspectiveCamera
from config import FAR, FOV, FULLSCREEN, HEIGHT, NEAR, ORTHO_ZOOM, PROG_NAME, TARGET_FPS, VSYNC, WIDTH
from core.events import AFTER_RENDER, BEFORE_RENDER, Dispatcher
from core.logger import get_logger
from core.renderer import Renderer
from core.scene import Scene
from core.stats import FrameRater
from core.window import PygameWindow, Window
from sound.audio import AudioDevice
from ui.root import GuiRoot

log = get_logger("core")


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
class Engine:
    def __init__(
        self,
        width: int = WIDTH,
        height: int = HEIGHT,
        title: str = PROG_NAME,
        *,
        window: Optional[Window] = None,
        audio: Optional[AudioDevice] = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        if window is None:
            window = PygameWindow(width, height, title, fullscreen=FULLSCREEN, vsync=VSYNC)
        self.window = window
        self.clock = clock
        self.scene = Scene()
        self.gui_root = GuiRoot(window)

        aspect = self._aspect()
        self.camera_persp = PerspectiveCamera(FOV, aspect, NEAR, FAR)
        self.camera_ortho = OrthographicCamera(ORTHO_ZOOM, aspect, NEAR, FAR)
        self.camera: Camera = self.camera_persp
        self.orbit = None

        self.renderer = Renderer()
        self.audio = audio if audio is not None else AudioDevice()
        self.frame_rater = FrameRater(clock)
        # Application level events, kept apart from the window subscriptions
        # that are cleared on every demo switch
        self.events = Dispatcher()

        self.frame_count = 0
        self._start = clock()
        self._running = False

    def _aspect(self) -> float:
        width, height = self.window.size()
        return width / height if height else 1.0

    # ------------------------------------------------------------------
    def elapsed(self) -> float:
        """Seconds since the engine was created."""
        return self.clock() - self._start

    def set_camera(self, camera: Camera) -> None:
        self.camera = camera

    def set_orbit(self, orbit) -> None:
        self.orbit = orbit

    def on_window_resize(self, evname=None, ev=None) -> None:
        width, height = self.window.size()
        self.gui_root.set_size(width, height)
        aspect = self._aspect()
        self.camera_persp.set_aspect(aspect)
        self.camera_ortho.set_aspect(aspect)

    # ------------------------------------------------------------------
    def frame(self) -> None:
        """Run one iteration of the main loop."""
        self.frame_rater.start()
        self.window.process_events()
        self.events.dispatch(BEFORE_RENDER, None)
        self.audio.update(self.scene)
        if self.window.headless:
            self.renderer.prepare(self.scene, self.camera, self.gui_root)
        else:
            self.renderer.render(self.scene, self.camera, self.gui_root)
        self.events.dispatch(AFTER_RENDER, None)
        self.window.swap_buffers()
        self.frame_rater.end()
        self.frame_count += 1

    def quit(self) -> None:
        self._running = False
        self.window.should_close = True

    def running(self) -> bool:
        return self._running and not self.window.should_close

    def run(self) -> None:  # pragma: no cover - visual
        clock = pygame.time.Clock()
        self._running = True
        self.on_window_resize()
        log.info("Entering main loop")
        while self.running():
            self.frame()
            # With vsync the swap already paces the loop; keep the cap as a
            # safety net for drivers that don't honor it
            clock.tick(TARGET_FPS)
        self.audio.close()
        self.window.close()
        log.info("Main loop finished after %d frames", self.frame_count)
