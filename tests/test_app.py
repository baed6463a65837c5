import logging
import re

import pytest

from core.events import KEY_DOWN, KEY_UP, MOD_ALT, MOD_CONTROL, MOUSE_DOWN, MOUSE_UP, CURSOR, WINDOW_SIZE
from core.events import CursorEvent, KeyEvent, MouseEvent, SizeEvent
from core.light import AmbientLight
from core.node import Node
from core.window import KEY_ESCAPE, KEY_F11, KEY_S
from demos.registry import DemoRegistry
from ui.widgets import CheckBox, Slider

FPS_TEXT = re.compile(r"^\d+\.\d / \d+\.\d$")


class RecordingDemo:
    def __init__(self, name, journal):
        self.name = name
        self.journal = journal
        self.renders = 0
        self.node = None
        self.key_events = []

    def initialize(self, app):
        self.journal.append(("init", self.name))
        self.node = app.scene.add(Node(self.name))
        app.window.subscribe(KEY_UP, lambda evname, ev: self.key_events.append(ev))
        app.add_finalizer(lambda: self.journal.append(("fin", self.name)))

    def render(self, app):
        self.renders += 1


@pytest.fixture
def journal():
    return []


@pytest.fixture
def registry(journal):
    reg = DemoRegistry()
    for name in ("test.a", "test.b", "other"):
        reg.register(name, RecordingDemo(name, journal))
    return reg


def test_default_scene(make_app, window):
    app = make_app(["-nogui"])
    assert app.current_demo is None
    assert [type(n) for n in app.scene.children] == [AmbientLight, type(app.camera_persp)]
    assert app.amb_light.intensity == 0.5
    assert app.renderer.clear_color == (0.6, 0.6, 0.6, 1.0)
    assert app.renderer.object_sorting
    assert app.camera is app.camera_persp
    assert tuple(app.camera_persp.position) == (0.0, 0.0, 5.0)
    assert tuple(app.camera_ortho.position) == (0.0, 0.0, 3.0)
    assert app.camera_persp.aspect == pytest.approx(1000 / 600)
    assert app.orbit is not None
    assert app.audio.open_calls == 1
    assert app.dir_data.endswith("data")
    assert app.control_folder is None
    assert app.gui_panel is app.gui


def test_positional_demo_is_current_and_rendered(make_app, registry, journal):
    app = make_app(["-nogui", "test.a"], registry)
    demo = registry.lookup("test.a")
    assert app.current_demo is demo
    assert journal == [("init", "test.a")]
    for _ in range(3):
        app.engine.frame()
    assert demo.renders == 3


def test_finalizers_run_before_next_initialize(make_app, registry, journal):
    app = make_app(["-nogui"], registry)
    app.select_demo("test.a")
    app.select_demo("test.b")
    app.select_demo(registry.lookup("other"))
    assert journal == [
        ("init", "test.a"),
        ("fin", "test.a"),
        ("init", "test.b"),
        ("fin", "test.b"),
        ("init", "other"),
    ]
    assert app.current_demo is registry.lookup("other")
    assert app.finalizer_count() == 1


def test_switch_leaves_nothing_of_previous_demo(make_app, registry, window):
    app = make_app(["-nogui"], registry)
    a, b = registry.lookup("test.a"), registry.lookup("test.b")
    app.select_demo(a)
    app.select_demo(b)

    nodes = list(app.scene.traverse())
    assert a.node not in nodes and a.node.disposed
    assert b.node in nodes

    window.post(KEY_UP, KeyEvent(1, 0))
    app.engine.frame()
    assert a.key_events == []
    assert len(b.key_events) == 1
    assert a.renders == 0


def test_select_unknown_name_raises(make_app, registry):
    app = make_app(["-nogui"], registry)
    with pytest.raises(KeyError):
        app.select_demo("missing")


def test_unknown_demo_on_command_line_exits_2(make_app, registry, journal, capsys):
    with pytest.raises(SystemExit) as exc:
        make_app(["-nogui", "test.nope"], registry)
    assert exc.value.code == 2
    assert journal == []
    assert "usage:" in capsys.readouterr().err


def test_missing_data_dir_is_fatal(tmp_path, monkeypatch, make_engine):
    from app.app import App
    from app.options import parse_options

    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("app.app.find_data_dir", lambda name: None)
    with pytest.raises(SystemExit) as exc:
        App.create(DemoRegistry(), parse_options(["-nogui"]), engine=make_engine())
    assert exc.value.code == 1


def test_hidefps_never_updates(make_app, window, clock):
    app = make_app(["-nogui", "-hidefps"])
    for _ in range(40):
        clock.advance(0.125)
        app.engine.frame()
    assert window.titles == []


def test_updatefps_interval_in_title(make_app, window, clock):
    app = make_app(["-nogui", "-updatefps", "500"])
    times = []
    for _ in range(48):
        clock.advance(0.125)
        before = len(window.titles)
        app.engine.frame()
        if len(window.titles) > before:
            times.append(clock.now)
    assert len(times) >= 5
    assert all(t2 - t1 >= 0.5 for t1, t2 in zip(times, times[1:]))
    assert all(FPS_TEXT.match(title) for title in window.titles)


def test_fps_label_with_gui(make_app, window, clock):
    app = make_app(["-updatefps", "250"])
    for _ in range(8):
        clock.advance(0.125)
        app.engine.frame()
    assert FPS_TEXT.match(app.label_fps.text)
    assert window.titles == []


def test_hidefps_with_gui_has_no_label(make_app):
    app = make_app(["-hidefps"])
    assert app.label_fps is None
    app.update_fps()


def test_escape_quits(make_app, window):
    app = make_app(["-nogui"])
    window.post(KEY_DOWN, KeyEvent(KEY_ESCAPE, 0))
    app.engine.frame()
    assert window.should_close
    assert not app.engine.running()


def test_alt_f11_toggles_fullscreen(make_app, window):
    app = make_app(["-nogui"])
    window.post(KEY_DOWN, KeyEvent(KEY_F11, 0))
    app.engine.frame()
    assert not window.fullscreen
    window.post(KEY_DOWN, KeyEvent(KEY_F11, MOD_ALT))
    app.engine.frame()
    assert window.fullscreen


def test_ctrl_alt_s_logs_stats(make_app, window, caplog):
    app = make_app(["-nogui"])
    with caplog.at_level(logging.INFO, logger="DEMO"):
        window.post(KEY_DOWN, KeyEvent(KEY_S, MOD_CONTROL | MOD_ALT))
        app.engine.frame()
    assert "Draw calls/frame" in caplog.text


def test_resize_updates_gui_and_cameras(make_app, window):
    app = make_app([])
    window.post(WINDOW_SIZE, SizeEvent(800, 400))
    app.engine.frame()
    assert (app.gui.width, app.gui.height) == (800, 400)
    assert app.camera_persp.aspect == pytest.approx(2.0)
    assert app.camera_ortho.aspect == pytest.approx(2.0)
    assert app.panel_3d.width == 800 - 175


def test_gui_tree_lists_demos_by_category(make_app):
    app = make_app([])
    nodes = app.tree_demos.entries()
    assert [n.caption for n in nodes] == ["audio", "gui"]
    assert [i.text for i in nodes[0].items] == ["position"]
    assert [i.text for i in nodes[1].items] == ["layout_dock"]
    assert nodes[1].items[0].user_data is app.registry.lookup("gui.layout_dock")
    assert app.panel_3d is not app.gui
    assert not app.panel_3d.renderable


def test_uncategorised_demo_is_a_top_level_item(make_app, registry):
    app = make_app([], registry)
    top = [e for e in app.tree_demos.entries() if not hasattr(e, "items")]
    assert [e.text for e in top] == ["other"]


def test_clicking_the_tree_selects_a_demo(make_app, window):
    app = make_app([])
    node = app.tree_demos.entries()[1]
    x, y = node.absolute_position()
    window.post(MOUSE_DOWN, MouseEvent(x + 2, y + 2, 1, 0))
    window.post(MOUSE_UP, MouseEvent(x + 2, y + 2, 1, 0))
    app.engine.frame()
    assert node.expanded

    item = node.items[0]
    x, y = item.absolute_position()
    window.post(MOUSE_DOWN, MouseEvent(x + 2, y + 2, 1, 0))
    app.engine.frame()
    assert app.current_demo is app.registry.lookup("gui.layout_dock")


def test_gui_clicks_do_not_reach_orbit_control(make_app, window):
    app = make_app([])
    start = app.camera.world_position()
    # Drag over the header
    window.post(MOUSE_DOWN, MouseEvent(500, 20, 1, 0))
    window.post(CURSOR, CursorEvent(560, 20))
    window.post(MOUSE_UP, MouseEvent(560, 20, 1, 0))
    app.engine.frame()
    assert app.camera.world_position() == start

    # Same drag over the 3D area
    window.post(MOUSE_DOWN, MouseEvent(500, 300, 1, 0))
    window.post(CURSOR, CursorEvent(560, 300))
    window.post(MOUSE_UP, MouseEvent(560, 300, 1, 0))
    app.engine.frame()
    assert app.camera.world_position() != start


def test_default_controls(make_app, window):
    app = make_app([])
    cb, slider = app.control_folder.controls()
    assert isinstance(cb, CheckBox) and cb.value
    assert isinstance(slider, Slider) and slider.value == 0.5

    cb.set_value(False)
    assert app.camera is app.camera_ortho
    assert app.orbit.camera is app.camera_ortho
    # Only one orbit control listens to the window
    assert window.subscription_count(CURSOR) == 2

    slider.set_value(1.5)
    assert app.amb_light.intensity == 1.5

    # A demo switch restores the defaults
    app.select_demo("gui.layout_dock")
    assert app.camera is app.camera_persp
    cb, slider = app.control_folder.controls()
    assert cb.value and slider.value == 0.5


def test_stats_table_refresh(make_app, clock):
    app = make_app(["-stats"])
    app.engine.frame()
    clock.advance(1.0)
    app.engine.frame()
    assert app.stats_table.text_of("Nodes") == "Nodes: 3"


def test_renderstats_logged(make_app, caplog):
    app = make_app(["-renderstats"])
    with caplog.at_level(logging.DEBUG, logger="DEMO"):
        app.engine.frame()
    assert "render stats:" in caplog.text


def test_log_levels_option(make_app):
    from core.logger import find_logger

    make_app(["-nogui", "-logs", "gui:error"])
    gui_log = find_logger("DEMO/GUI")
    try:
        assert gui_log.level == logging.ERROR
    finally:
        gui_log.setLevel(logging.NOTSET)


def test_orbit_works_after_same_frame_tree_click(make_app, window):
    app = make_app([])
    node = app.tree_demos.entries()[0]
    node.set_expanded(True)
    item = node.items[0]
    x, y = item.absolute_position()
    # Press and release in one frame; the release is dropped by the switch
    window.post(MOUSE_DOWN, MouseEvent(x + 2, y + 2, 1, 0))
    window.post(MOUSE_UP, MouseEvent(x + 2, y + 2, 1, 0))
    app.engine.frame()
    assert app.current_demo is app.registry.lookup("audio.position")

    start = app.camera.world_position()
    window.post(MOUSE_DOWN, MouseEvent(500, 300, 1, 0))
    window.post(CURSOR, CursorEvent(560, 300))
    window.post(MOUSE_UP, MouseEvent(560, 300, 1, 0))
    app.engine.frame()
    assert app.camera.world_position() != start
