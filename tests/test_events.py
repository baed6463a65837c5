from core.events import (
    CURSOR,
    KEY_DOWN,
    MOUSE_DOWN,
    WINDOW_SIZE,
    CursorEvent,
    Dispatcher,
    KeyEvent,
    SizeEvent,
)
from core.window import ARROW_CURSOR, HAND_CURSOR, Window

import pytest


def test_dispatch_in_subscription_order():
    d = Dispatcher()
    calls = []
    d.subscribe("ev", lambda evname, ev: calls.append(("a", ev)))
    d.subscribe("ev", lambda evname, ev: calls.append(("b", ev)))
    assert d.dispatch("ev", 1) == 2
    assert calls == [("a", 1), ("b", 1)]
    assert d.dispatch("other", 1) == 0


def test_cancel_dispatch_stops_remaining_subscribers():
    d = Dispatcher()
    calls = []

    def first(evname, ev):
        calls.append("first")
        d.cancel_dispatch()

    d.subscribe("ev", first)
    d.subscribe("ev", lambda evname, ev: calls.append("second"))
    assert d.dispatch("ev") == 1
    assert calls == ["first"]
    # The cancel only applies to the event being dispatched
    calls.clear()
    d.dispatch("ev")
    assert calls == ["first"]


def test_unsubscribe_by_id():
    d = Dispatcher()
    owner = object()
    d.subscribe_id("a", owner, lambda evname, ev: None)
    d.subscribe_id("b", owner, lambda evname, ev: None)
    d.subscribe("a", lambda evname, ev: None)
    assert d.unsubscribe_id("a", owner) == 1
    assert d.subscription_count() == 2
    assert d.unsubscribe_all_id(owner) == 1
    assert d.subscription_count() == 1
    d.clear_subscriptions()
    assert d.subscription_count() == 0


def test_callback_may_clear_subscriptions_while_dispatching():
    d = Dispatcher()
    calls = []

    def clearer(evname, ev):
        calls.append("clear")
        d.clear_subscriptions()

    d.subscribe("ev", clearer)
    d.subscribe("ev", lambda evname, ev: calls.append("later"))
    d.dispatch("ev")
    assert calls == ["clear", "later"]
    assert d.subscription_count("ev") == 0


def test_window_processes_queue_in_order():
    win = Window(800, 600)
    seen = []
    win.subscribe(KEY_DOWN, lambda evname, ev: seen.append(ev.keycode))
    win.post(KEY_DOWN, KeyEvent(1, 0))
    win.post(KEY_DOWN, KeyEvent(2, 0))
    assert win.pending() == 2
    assert win.process_events() == 2
    assert seen == [1, 2]
    assert win.pending() == 0


def test_window_cancel_dispatch_drops_queued_events():
    win = Window(800, 600)
    seen = []

    def on_key(evname, ev):
        seen.append(ev.keycode)
        win.cancel_dispatch()

    win.subscribe(KEY_DOWN, on_key)
    win.subscribe(KEY_DOWN, lambda evname, ev: seen.append("late"))
    win.post(KEY_DOWN, KeyEvent(1, 0))
    win.post(KEY_DOWN, KeyEvent(2, 0))
    win.post(CURSOR, CursorEvent(3, 3))
    win.process_events()
    assert seen == [1]
    assert win.pending() == 0


def test_window_size_event_updates_size():
    win = Window(800, 600)
    win.post(WINDOW_SIZE, SizeEvent(1024, 768))
    win.process_events()
    assert win.size() == (1024, 768)


def test_window_cursors():
    win = Window(800, 600)
    cid = win.create_cursor("cursor.png", 2, 2)
    win.set_custom_cursor(cid)
    assert win.custom_cursor_count() == 1
    win.dispose_all_cursors()
    assert win.custom_cursor_count() == 0
    assert win.cursor == ARROW_CURSOR
    win.set_standard_cursor(HAND_CURSOR)
    assert win.cursor == HAND_CURSOR
    with pytest.raises(KeyError):
        win.set_custom_cursor(cid)
    with pytest.raises(ValueError):
        win.set_standard_cursor("spinning")
    assert win.subscription_count(MOUSE_DOWN) == 0
