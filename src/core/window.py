"""Window abstraction.

`Window` holds everything the shell needs that is not tied to a real display:
the event queue, subscriptions, cursor bookkeeping, title and fullscreen flag.
`PygameWindow` backs it with a pygame OpenGL display and translates pygame
events into the payloads from `core.events`.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Dict, Tuple

import pygame

from core.events import (
    Dispatcher,
    KeyEvent,
    MouseEvent,
    CursorEvent,
    ScrollEvent,
    SizeEvent,
    KEY_DOWN,
    KEY_UP,
    MOUSE_DOWN,
    MOUSE_UP,
    CURSOR,
    SCROLL,
    WINDOW_SIZE,
    MOD_SHIFT,
    MOD_CONTROL,
    MOD_ALT,
)
from core.logger import get_logger

log = get_logger("window")

ARROW_CURSOR = "arrow"
HAND_CURSOR = "hand"
CROSSHAIR_CURSOR = "crosshair"
IBEAM_CURSOR = "ibeam"

_SYSTEM_CURSORS = {
    ARROW_CURSOR: pygame.SYSTEM_CURSOR_ARROW,
    HAND_CURSOR: pygame.SYSTEM_CURSOR_HAND,
    CROSSHAIR_CURSOR: pygame.SYSTEM_CURSOR_CROSSHAIR,
    IBEAM_CURSOR: pygame.SYSTEM_CURSOR_IBEAM,
}

# Key codes used by the shell
KEY_ESCAPE = pygame.K_ESCAPE
KEY_F11 = pygame.K_F11
KEY_S = pygame.K_s


class Window(Dispatcher):
    headless = False

    def __init__(self, width: int, height: int, title: str = "") -> None:
        super().__init__()
        self.width = width
        self.height = height
        self.title = title
        self.fullscreen = False
        self.cursor = ARROW_CURSOR
        self.should_close = False
        self._queue: Deque[Tuple[str, Any]] = deque()
        self._cursors: Dict[int, Any] = {}
        self._next_cursor = 1

    # ------------------------------------------------------------------
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def set_title(self, title: str) -> None:
        self.title = title

    def set_fullscreen(self, fullscreen: bool) -> None:
        self.fullscreen = fullscreen

    def swap_buffers(self) -> None:
        pass

    def close(self) -> None:
        pass

    # --------------------------- events ---------------------------------
    def post(self, evname: str, ev: Any) -> None:
        """Queue an event to be dispatched on the next process_events()."""
        self._queue.append((evname, ev))

    def pending(self) -> int:
        return len(self._queue)

    def poll(self) -> None:
        """Fill the queue from the platform; nothing to do without a display."""

    def process_events(self) -> int:
        self.poll()
        count = 0
        while self._queue:
            evname, ev = self._queue.popleft()
            if evname == WINDOW_SIZE:
                self.width, self.height = ev.width, ev.height
            self.dispatch(evname, ev)
            count += 1
        return count

    def cancel_dispatch(self) -> None:
        super().cancel_dispatch()
        self._queue.clear()

    def stop_event(self) -> None:
        """Stop delivering the current event; events still queued are kept."""
        super().cancel_dispatch()

    # --------------------------- cursors --------------------------------
    def create_cursor(self, image: Any, hot_x: int = 0, hot_y: int = 0) -> int:
        cid = self._next_cursor
        self._next_cursor += 1
        self._cursors[cid] = self._make_cursor(image, hot_x, hot_y)
        return cid

    def _make_cursor(self, image: Any, hot_x: int, hot_y: int) -> Any:
        return image

    def custom_cursor_count(self) -> int:
        return len(self._cursors)

    def set_custom_cursor(self, cid: int) -> None:
        if cid not in self._cursors:
            raise KeyError(f"unknown cursor id {cid}")
        self.cursor = cid

    def dispose_all_cursors(self) -> None:
        self._cursors.clear()
        if not isinstance(self.cursor, str):
            self.cursor = ARROW_CURSOR

    def set_standard_cursor(self, kind: str) -> None:
        if kind not in _SYSTEM_CURSORS:
            raise ValueError(f"unknown standard cursor {kind!r}")
        self.cursor = kind


def _mods_from_pygame(mod: int) -> int:
    mods = 0
    if mod & pygame.KMOD_SHIFT:
        mods |= MOD_SHIFT
    if mod & pygame.KMOD_CTRL:
        mods |= MOD_CONTROL
    if mod & pygame.KMOD_ALT:
        mods |= MOD_ALT
    return mods


class PygameWindow(Window):  # pragma: no cover - needs a display
    def __init__(
        self,
        width: int,
        height: int,
        title: str,
        *,
        fullscreen: bool = False,
        vsync: bool = False,
    ) -> None:
        super().__init__(width, height, title)
        pygame.init()
        pygame.display.gl_set_attribute(pygame.GL_DEPTH_SIZE, 24)
        pygame.display.gl_set_attribute(pygame.GL_MULTISAMPLEBUFFERS, 1)
        pygame.display.gl_set_attribute(pygame.GL_MULTISAMPLESAMPLES, 4)
        pygame.display.set_caption(title)
        self._vsync = vsync
        self._windowed_size = (width, height)
        self._open(width, height, fullscreen)

    def _open(self, width: int, height: int, fullscreen: bool) -> None:
        flags = pygame.DOUBLEBUF | pygame.OPENGL | pygame.RESIZABLE
        if fullscreen:
            flags |= pygame.FULLSCREEN
            width, height = 0, 0
        try:
            surf = pygame.display.set_mode(
                (width, height), flags, vsync=(1 if self._vsync else 0)
            )
        except pygame.error:
            # vsync requested but unavailable on this driver
            surf = pygame.display.set_mode((width, height), flags)
        self.width, self.height = surf.get_size()
        self.fullscreen = fullscreen
        log.info("Display mode %dx%d fullscreen=%s", self.width, self.height, fullscreen)

    def set_title(self, title: str) -> None:
        super().set_title(title)
        pygame.display.set_caption(title)

    def set_fullscreen(self, fullscreen: bool) -> None:
        if fullscreen == self.fullscreen:
            return
        if fullscreen:
            self._windowed_size = (self.width, self.height)
            self._open(0, 0, True)
        else:
            self._open(*self._windowed_size, False)
        self.post(WINDOW_SIZE, SizeEvent(self.width, self.height))

    def swap_buffers(self) -> None:
        pygame.display.flip()

    def close(self) -> None:
        pygame.quit()

    def _make_cursor(self, image: Any, hot_x: int, hot_y: int) -> Any:
        surf = pygame.image.load(image) if isinstance(image, str) else image
        return pygame.cursors.Cursor((hot_x, hot_y), surf)

    def set_custom_cursor(self, cid: int) -> None:
        super().set_custom_cursor(cid)
        pygame.mouse.set_cursor(self._cursors[cid])

    def dispose_all_cursors(self) -> None:
        super().dispose_all_cursors()
        pygame.mouse.set_cursor(_SYSTEM_CURSORS[ARROW_CURSOR])

    def set_standard_cursor(self, kind: str) -> None:
        super().set_standard_cursor(kind)
        pygame.mouse.set_cursor(_SYSTEM_CURSORS[kind])

    def poll(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.should_close = True
            elif event.type == pygame.KEYDOWN:
                self.post(KEY_DOWN, KeyEvent(event.key, _mods_from_pygame(event.mod)))
            elif event.type == pygame.KEYUP:
                self.post(KEY_UP, KeyEvent(event.key, _mods_from_pygame(event.mod)))
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button in (1, 2, 3):
                mods = _mods_from_pygame(pygame.key.get_mods())
                x, y = event.pos
                self.post(MOUSE_DOWN, MouseEvent(x, y, event.button, mods))
            elif event.type == pygame.MOUSEBUTTONUP and event.button in (1, 2, 3):
                mods = _mods_from_pygame(pygame.key.get_mods())
                x, y = event.pos
                self.post(MOUSE_UP, MouseEvent(x, y, event.button, mods))
            elif event.type == pygame.MOUSEMOTION:
                x, y = event.pos
                self.post(CURSOR, CursorEvent(x, y))
            elif event.type == pygame.MOUSEWHEEL:
                x, y = pygame.mouse.get_pos()
                self.post(SCROLL, ScrollEvent(x, y, event.x, event.y))
            elif event.type == pygame.VIDEORESIZE:
                self.post(WINDOW_SIZE, SizeEvent(event.w, event.h))
