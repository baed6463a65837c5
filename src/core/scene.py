"""Scene root and the draw-list collection used by the renderer."""

from __future__ import annotations

from typing import List, Tuple

from pygame.math import Vector3

from core.light import AmbientLight
from core.node import Node


class Scene(Node):
    def __init__(self) -> None:
        super().__init__("Scene")

    def lights(self) -> List[AmbientLight]:
        return [n for n in self.traverse() if isinstance(n, AmbientLight)]

    def collect(
        self, camera_pos: Vector3, sort_objects: bool = True
    ) -> Tuple[List[Node], List[Node]]:
        """Split visible drawable nodes into (opaque, transparent).

        Invisible nodes hide their whole subtree. With sort_objects the
        transparent list is ordered back to front from camera_pos.
        """
        opaque: List[Node] = []
        transparent: List[Node] = []

        def _walk(node: Node) -> None:
            if not node.visible:
                return
            if getattr(node, "drawable", False):
                if getattr(node, "transparent", False):
                    transparent.append(node)
                else:
                    opaque.append(node)
            for child in node.children:
                _walk(child)

        _walk(self)
        if sort_objects:
            transparent.sort(
                key=lambda n: (n.world_position() - camera_pos).length_squared(),
                reverse=True,
            )
        return opaque, transparent
