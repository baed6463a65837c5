"""Frame rate measurement and per-interval rendering statistics."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Tuple

Clock = Callable[[], float]


class FrameRater:
    """Measures real and potential FPS.

    start()/end() bracket the work done for one frame. fps(interval) reports
    (fps, potential_fps, ok); ok is False until `interval` seconds have passed
    since the previous report, so the caller refreshes at most once per
    interval. Potential FPS is the rate the loop could reach if it never
    waited for the frame cap.
    """

    def __init__(self, clock: Clock = time.perf_counter) -> None:
        self._clock = clock
        self._last_update = clock()
        self._frame_start = 0.0
        self._frame_count = 0
        self._busy = 0.0

    def start(self) -> None:
        self._frame_start = self._clock()

    def end(self) -> None:
        self._busy += self._clock() - self._frame_start
        self._frame_count += 1

    def fps(self, interval: float) -> Tuple[float, float, bool]:
        now = self._clock()
        elapsed = now - self._last_update
        if elapsed < interval or self._frame_count == 0 or elapsed <= 0:
            return 0.0, 0.0, False
        fps = self._frame_count / elapsed
        pfps = self._frame_count / self._busy if self._busy > 0 else fps
        self._frame_count = 0
        self._busy = 0.0
        self._last_update = now
        return fps, pfps, True


@dataclass
class RenderStats:
    """Counters for a single rendered frame."""

    nodes: int = 0
    meshes: int = 0
    lights: int = 0
    panels: int = 0
    draw_calls: int = 0

    def reset(self) -> None:
        self.nodes = self.meshes = self.lights = self.panels = self.draw_calls = 0


@dataclass
class Stats:
    """Averages of RenderStats over a sampling interval."""

    textures: int = 0
    nodes: int = 0
    meshes: int = 0
    panels: int = 0
    draw_calls: int = 0
    frames: int = 0
    clock: Clock = field(default=time.perf_counter, repr=False)
    _acc: RenderStats = field(default_factory=RenderStats, repr=False)
    _count: int = field(default=0, repr=False)
    _last: float = field(default=-1.0, repr=False)

    def update(self, interval: float, frame: RenderStats, textures: int = 0) -> bool:
        """Accumulate one frame; return True when a new sample was produced."""
        now = self.clock()
        if self._last < 0:
            self._last = now
        self._acc.nodes += frame.nodes
        self._acc.meshes += frame.meshes
        self._acc.panels += frame.panels
        self._acc.draw_calls += frame.draw_calls
        self._count += 1
        if now - self._last < interval:
            return False
        n = self._count
        self.nodes = self._acc.nodes // n
        self.meshes = self._acc.meshes // n
        self.panels = self._acc.panels // n
        self.draw_calls = self._acc.draw_calls // n
        self.textures = textures
        self.frames = n
        self._acc.reset()
        self._count = 0
        self._last = now
        return True

    def rows(self):
        return [
            ("Textures", self.textures),
            ("Nodes", self.nodes),
            ("Meshes", self.meshes),
            ("Panels", self.panels),
            ("Draw calls/frame", self.draw_calls),
            ("Frames", self.frames),
        ]
