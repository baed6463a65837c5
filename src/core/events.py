"""Event names, payloads and the Dispatcher used by windows, panels and the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

Callback = Callable[[str, Any], None]

# Window events
KEY_DOWN = "w.OnKeyDown"
KEY_UP = "w.OnKeyUp"
MOUSE_DOWN = "w.OnMouseDown"
MOUSE_UP = "w.OnMouseUp"
CURSOR = "w.OnCursor"
SCROLL = "w.OnScroll"
WINDOW_SIZE = "w.OnWindowSize"

# Gui events
CHANGE = "gui.OnChange"
CLICK = "gui.OnClick"

# Engine events
BEFORE_RENDER = "util.application.OnBeforeRender"
AFTER_RENDER = "util.application.OnAfterRender"

# Modifier bits
MOD_SHIFT = 1
MOD_CONTROL = 2
MOD_ALT = 4


@dataclass
class KeyEvent:
    keycode: int
    mods: int = 0


@dataclass
class MouseEvent:
    x: float
    y: float
    button: int = 1
    mods: int = 0


@dataclass
class CursorEvent:
    x: float
    y: float


@dataclass
class ScrollEvent:
    x: float
    y: float
    xoffset: float = 0.0
    yoffset: float = 0.0


@dataclass
class SizeEvent:
    width: int
    height: int


@dataclass
class _Subscription:
    id: Optional[object]
    cb: Callback


class Dispatcher:
    """Maps event names to ordered lists of callbacks."""

    def __init__(self) -> None:
        self._evmap: Dict[str, List[_Subscription]] = {}
        self._cancel = False

    def subscribe(self, evname: str, cb: Callback) -> None:
        self._evmap.setdefault(evname, []).append(_Subscription(None, cb))

    def subscribe_id(self, evname: str, id: object, cb: Callback) -> None:
        """Subscribe with an owner id so the callback can be removed later."""
        self._evmap.setdefault(evname, []).append(_Subscription(id, cb))

    def unsubscribe_id(self, evname: str, id: object) -> int:
        subs = self._evmap.get(evname, [])
        kept = [s for s in subs if s.id != id]
        self._evmap[evname] = kept
        return len(subs) - len(kept)

    def unsubscribe_all_id(self, id: object) -> int:
        return sum(self.unsubscribe_id(evname, id) for evname in list(self._evmap))

    def subscription_count(self, evname: Optional[str] = None) -> int:
        if evname is not None:
            return len(self._evmap.get(evname, []))
        return sum(len(subs) for subs in self._evmap.values())

    def clear_subscriptions(self) -> None:
        self._evmap = {}

    def cancel_dispatch(self) -> None:
        """Stop delivering the event being dispatched to the remaining subscribers."""
        self._cancel = True

    def dispatch(self, evname: str, ev: Any = None) -> int:
        subs = self._evmap.get(evname)
        if not subs:
            return 0
        self._cancel = False
        count = 0
        # Iterate over a copy: callbacks may subscribe or clear subscriptions
        for sub in list(subs):
            sub.cb(evname, ev)
            count += 1
            if self._cancel:
                break
        self._cancel = False
        return count
