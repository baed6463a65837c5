import pytest

from pygame.math import Vector3

from core.light import AmbientLight
from core.mesh import Sphere, Sprite, AxisHelper, GridHelper
from core.node import Node
from core.renderer import Renderer
from core.scene import Scene
from camera import PerspectiveCamera


def test_world_position_adds_parents():
    root = Node("root", (1, 0, 0))
    child = root.add(Node("child", (0, 2, 0)))
    grandchild = child.add(Node("gc", (0, 0, 3)))
    assert grandchild.world_position() == Vector3(1, 2, 3)


def test_add_reparents():
    a, b, c = Node("a"), Node("b"), Node("c")
    a.add(c)
    b.add(c)
    assert c.parent is b
    assert c not in a.children


def test_dispose_children_recursive():
    scene = Scene()
    parent = scene.add(Node("parent"))
    child = parent.add(Node("child"))
    scene.dispose_children(True)
    assert scene.children == []
    assert parent.disposed and child.disposed
    assert parent.parent is None
    assert list(scene.traverse()) == [scene]


def test_find_and_traverse():
    scene = Scene()
    scene.add(AmbientLight((1, 1, 1), 0.5))
    sphere = scene.add(Sphere(0.2, (1, 0, 0)))
    sphere.add(Sprite("label"))
    names = [n.name for n in scene.traverse()]
    assert names == ["Scene", "AmbientLight", "Sphere", "Sprite"]
    assert scene.find("Sprite") is sphere.children[0]
    assert scene.lights()[0].effective_color() == (0.5, 0.5, 0.5)


def test_collect_hides_invisible_subtrees_and_sorts_transparent():
    scene = Scene()
    near = scene.add(Sprite("near"))
    near.set_position(0, 0, 4)
    far = scene.add(Sprite("far"))
    far.set_position(0, 0, -10)
    hidden = scene.add(Sphere(1.0, (0, 0, 1)))
    hidden.add(Sphere(0.5, (0, 1, 0)))
    hidden.set_visible(False)
    scene.add(AxisHelper(1.0))

    opaque, transparent = scene.collect(Vector3(0, 0, 5), sort_objects=True)
    assert [type(n) for n in opaque] == [AxisHelper]
    assert transparent == [far, near]


def test_grid_helper_lines():
    grid = GridHelper(4, 1, (0.4, 0.4, 0.4))
    # 5 lines in each direction
    assert len(grid.lines()) == 10


def test_renderer_prepare_counts():
    scene = Scene()
    scene.add(AmbientLight())
    scene.add(Sphere(0.2, (1, 0, 0)))
    cam = PerspectiveCamera()
    cam.set_position(0, 0, 5)
    scene.add(cam)

    renderer = Renderer()
    draw_list = renderer.prepare(scene, cam)
    assert renderer.stats.nodes == 4
    assert renderer.stats.meshes == 1
    assert renderer.stats.lights == 1
    assert len(draw_list.opaque) == 1
    assert len(draw_list.lights) == 1


def test_sprite_keeps_no_texture_handle():
    # Label textures belong to the GL drawer, keyed by the sprite itself
    sprite = Sprite("Bach1.ogg", 0.5, aspect=4.0)
    assert sprite.width == pytest.approx(2.0)
    assert not hasattr(sprite, "texture")
