from __future__ import annotations

from typing import Any, Iterator, List, Optional

from pygame.math import Vector3


class Node:
    """Scene graph node: a position, a visibility flag and children.

    Positions are relative to the parent; world_position() walks up the
    chain. Subclasses that hold external resources override dispose().
    """

    def __init__(self, name: str = "", position=None) -> None:
        self.name = name or type(self).__name__
        self.position = Vector3(position) if position is not None else Vector3(0, 0, 0)
        self.visible = True
        self.parent: Optional[Node] = None
        self.children: List[Node] = []
        self.user_data: Any = None
        self.disposed = False

    # ------------------------------------------------------------------
    def set_position(self, x: float, y: float, z: float) -> None:
        self.position = Vector3(x, y, z)

    def set_visible(self, visible: bool) -> None:
        self.visible = visible

    def world_position(self) -> Vector3:
        pos = Vector3(self.position)
        node = self.parent
        while node is not None:
            pos += node.position
            node = node.parent
        return pos

    # ------------------------------------------------------------------
    def add(self, child: "Node") -> "Node":
        if child is self:
            raise ValueError("node cannot be added to itself")
        if child.parent is not None:
            child.parent.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def remove(self, child: "Node") -> bool:
        try:
            self.children.remove(child)
        except ValueError:
            return False
        child.parent = None
        return True

    def remove_all(self) -> None:
        for child in self.children:
            child.parent = None
        self.children = []

    def dispose(self) -> None:
        self.disposed = True

    def dispose_children(self, recursive: bool = True) -> None:
        for child in self.children:
            if recursive:
                child.dispose_children(True)
            child.dispose()
            child.parent = None
        self.children = []

    # ------------------------------------------------------------------
    def traverse(self) -> Iterator["Node"]:
        """Depth-first pre-order walk including this node."""
        yield self
        for child in self.children:
            yield from child.traverse()

    def find(self, name: str) -> Optional["Node"]:
        for node in self.traverse():
            if node.name == name:
                return node
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, children={len(self.children)})"
