import pytest

from core.events import CHANGE, CLICK, CURSOR, MOUSE_DOWN, MOUSE_UP, CursorEvent, MouseEvent
from core.window import Window
from ui.control_folder import ControlFolder
from ui.layout import (
    ALIGN_BOTTOM,
    DOCK_BOTTOM,
    DOCK_CENTER,
    DOCK_LEFT,
    DOCK_RIGHT,
    DOCK_TOP,
    DockLayout,
    DockLayoutParams,
    HBoxLayout,
    HBoxLayoutParams,
)
from ui.panel import Panel
from ui.root import GuiRoot
from ui.stats_table import StatsTable
from ui.style import color4
from ui.tree import Tree, TreeNode
from ui.widgets import Button, CheckBox, Image, Label, Slider
from core.stats import Stats


def _docked(edge, width=0, height=0):
    p = Panel(width, height)
    p.set_layout_params(DockLayoutParams(edge))
    return p


def test_dock_layout_edges_and_center():
    root = Panel(200, 100)
    root.set_layout(DockLayout())
    top = root.add(_docked(DOCK_TOP, height=10))
    bottom = root.add(_docked(DOCK_BOTTOM, height=20))
    left = root.add(_docked(DOCK_LEFT, width=30))
    right = root.add(_docked(DOCK_RIGHT, width=40))
    center = root.add(_docked(DOCK_CENTER))

    assert (top.x, top.y, top.width, top.height) == (0, 0, 200, 10)
    assert (bottom.x, bottom.y, bottom.width) == (0, 80, 200)
    assert (left.x, left.y, left.height) == (0, 10, 70)
    assert (right.x, right.y, right.height) == (160, 10, 70)
    assert (center.x, center.y, center.width, center.height) == (30, 10, 130, 70)

    # Resizing the parent lays the children out again
    root.set_size(300, 200)
    assert top.width == 300
    assert (center.width, center.height) == (230, 170)


def test_dock_layout_stacks_same_edge_outside_in():
    root = Panel(100, 100)
    root.set_layout(DockLayout())
    first = root.add(_docked(DOCK_TOP, height=10))
    second = root.add(_docked(DOCK_TOP, height=15))
    assert first.y == 0
    assert second.y == 10


def test_hbox_expand_shares_free_space():
    box = Panel(100, 20)
    box.set_layout(HBoxLayout())
    fixed = box.add(Panel(40, 10))
    grow1 = Panel(0, 10)
    grow1.set_layout_params(HBoxLayoutParams(expand=1.0))
    box.add(grow1)
    grow2 = Panel(0, 10)
    grow2.set_layout_params(HBoxLayoutParams(expand=2.0, align_v=ALIGN_BOTTOM))
    box.add(grow2)

    assert fixed.x == 0
    assert grow1.x == 40 and grow1.width == pytest.approx(20)
    assert grow2.x == pytest.approx(60) and grow2.width == pytest.approx(40)
    assert grow2.y == 10


def test_color_names():
    assert color4("red") == (1.0, 0.0, 0.0, 1.0)
    assert color4((0.1, 0.2, 0.3), 0.5) == (0.1, 0.2, 0.3, 0.5)
    with pytest.raises(ValueError):
        color4("no-such-color")


def test_checkbox_set_value_chains_and_dispatches_on_change():
    changes = []
    cb = CheckBox("Option")
    cb.subscribe(CHANGE, lambda evname, ev: changes.append(cb.value))
    assert cb.set_value(True) is cb
    cb.set_value(True)
    assert changes == [True]
    cb.on_mouse(MOUSE_DOWN, MouseEvent(0, 0, 1, 0))
    assert changes == [True, False]


def test_slider_clamps_and_follows_drag():
    s = Slider("Level:", 2.0, 0.5)
    assert s.value == 0.5
    s.set_value(5)
    assert s.value == 2.0
    tx, ty = s.track.absolute_position()
    s.on_mouse(MOUSE_DOWN, MouseEvent(tx, ty, 1, 0))
    assert s.value == 0.0
    s.on_cursor(CURSOR, CursorEvent(tx + s.track.width / 2, ty))
    assert s.value == pytest.approx(1.0)
    s.on_mouse(MOUSE_UP, MouseEvent(tx, ty, 1, 0))
    s.on_cursor(CURSOR, CursorEvent(tx, ty))
    assert s.value == pytest.approx(1.0)


def test_button_click():
    clicks = []
    b = Button("Go")
    b.subscribe(CLICK, lambda evname, ev: clicks.append(ev.button))
    b.on_mouse(MOUSE_DOWN, MouseEvent(0, 0, 3, 0))
    b.on_mouse(MOUSE_DOWN, MouseEvent(0, 0, 1, 0))
    assert clicks == [1]


def test_image_missing_file():
    with pytest.raises(FileNotFoundError):
        Image("/no/such/logo.png")


def test_label_is_sized_to_text():
    label = Label("abcd", 20)
    w1 = label.width
    label.set_text("abcdefgh")
    assert label.width > w1
    assert not label.wants_events()


def test_control_folder_toggle_and_clear():
    folder = ControlFolder("Controls", 100)
    assert not folder.is_open()
    folder.button.on_mouse(MOUSE_DOWN, MouseEvent(0, 0, 1, 0))
    assert folder.is_open()

    cb = folder.add_check_box("Perspective camera")
    s = folder.add_slider("Ambient light:", 2.0, 0.5)
    group = folder.add_group("Play sources")
    group.add_check_box("one")
    assert folder.controls() == [cb, s, group]
    assert folder.content.height > 0

    folder.clear()
    assert folder.controls() == []
    assert cb.disposed


def test_tree_groups_and_selects():
    tree = Tree(175, 300)
    node = tree.add_node("audio")
    item = node.add(Label("position"))
    top = tree.add(Label("standalone"))
    assert isinstance(node, TreeNode)
    # Collapsed nodes hide their items
    assert tree.rows() == [node, top]
    node.set_expanded(True)
    assert tree.rows() == [node, item, top]
    assert item.x > node.x

    changes = []
    tree.subscribe(CHANGE, lambda evname, ev: changes.append(tree.selected()))
    tree.select(item)
    tree.select(item)
    assert changes == [item]
    assert tree.find_item("position") is item
    assert tree.find_item("standalone") is top


def test_tree_click_expands_then_selects():
    tree = Tree(175, 300)
    node = tree.add_node("gui")
    item = node.add(Label("layout_dock"))
    nx, ny = node.absolute_position()
    tree.on_mouse(MOUSE_DOWN, MouseEvent(nx + 1, ny + 1, 1, 0))
    assert node.expanded
    ix, iy = item.absolute_position()
    tree.on_mouse(MOUSE_DOWN, MouseEvent(ix + 1, iy + 1, 1, 0))
    assert tree.selected() is item


def test_stats_table_shows_stats():
    stats = Stats()
    table = StatsTable(220, 200, stats)
    stats.nodes = 7
    table.update(stats)
    assert table.text_of("Nodes") == "Nodes: 7"


class TestGuiRoot:
    def setup_method(self):
        self.window = Window(400, 300)
        self.root = GuiRoot(self.window)
        self.root.subscribe_win()
        self.later = []
        # Subscribed after the root, like the orbit control
        self.window.subscribe(MOUSE_DOWN, lambda evname, ev: self.later.append(evname))

    def test_event_over_panel_is_consumed(self):
        cb = CheckBox("x")
        cb.set_position(10, 10)
        self.root.add(cb)
        self.window.post(MOUSE_DOWN, MouseEvent(12, 12, 1, 0))
        self.window.process_events()
        assert cb.value is True
        assert self.later == []

    def test_event_outside_panels_passes_through(self):
        self.window.post(MOUSE_DOWN, MouseEvent(200, 200, 1, 0))
        self.window.process_events()
        assert self.later == [MOUSE_DOWN]

    def test_non_renderable_panel_lets_events_through(self):
        center = Panel(400, 300)
        center.set_renderable(False)
        self.root.add(center)
        self.window.post(MOUSE_DOWN, MouseEvent(200, 200, 1, 0))
        self.window.process_events()
        assert self.later == [MOUSE_DOWN]

    def test_subscribe_win_does_not_duplicate(self):
        count = self.window.subscription_count()
        self.root.subscribe_win()
        assert self.window.subscription_count() == count

    def test_renderable_panels_skips_hidden(self):
        shown = self.root.add(Panel(10, 10))
        hidden = self.root.add(Panel(10, 10))
        hidden.add(Panel(5, 5))
        hidden.set_visible(False)
        assert list(self.root.renderable_panels()) == [shown]

    def test_consumed_click_keeps_queued_events(self):
        cb = CheckBox("x")
        self.root.add(cb)
        ups = []
        cb.subscribe(MOUSE_UP, lambda evname, ev: ups.append(ev))
        self.window.post(MOUSE_DOWN, MouseEvent(2, 2, 1, 0))
        self.window.post(MOUSE_UP, MouseEvent(2, 2, 1, 0))
        self.window.process_events()
        assert cb.value is True
        assert len(ups) == 1
