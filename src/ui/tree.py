"""Tree list used by the shell to pick a demo.

Top level entries are either items (labels) or nodes (categories) that
expand to show their items. Selecting an item dispatches CHANGE on the tree.
"""

from __future__ import annotations

from typing import List, Optional

from core.events import CHANGE, MOUSE_DOWN
from ui.panel import Panel
from ui.style import SELECTED_BG
from ui.widgets import Label

_INDENT = 16
_ROW_SPACING = 2


class TreeNode(Label):
    def __init__(self, text: str, tree: "Tree") -> None:
        super().__init__(text)
        self.tree = tree
        self.caption = text
        self.items: List[Label] = []
        self.expanded = False
        self._update_caption()

    def _update_caption(self) -> None:
        self.set_text(("- " if self.expanded else "+ ") + self.caption)

    def add(self, item: Label) -> Label:
        # Items are rows of the tree, not children of this label
        self.items.append(item)
        self.tree.rebuild()
        return item

    def set_expanded(self, expanded: bool) -> None:
        self.expanded = expanded
        self._update_caption()
        self.tree.rebuild()

    def toggle(self) -> None:
        self.set_expanded(not self.expanded)


class Tree(Panel):
    def __init__(self, width: float, height: float) -> None:
        super().__init__(width, height)
        self.set_borders(1, 1, 1, 1)
        self.set_paddings(2, 2, 2, 2)
        self._entries: List[Label] = []
        self._selected: Optional[Label] = None

    # --------------------------- building -------------------------------
    def add_node(self, text: str) -> TreeNode:
        node = TreeNode(text, self)
        self._entries.append(node)
        self.rebuild()
        return node

    def add(self, item: Panel) -> Panel:
        self._entries.append(item)
        self.rebuild()
        return item

    def entries(self) -> List[Label]:
        return list(self._entries)

    def rows(self) -> List[Label]:
        """Labels currently shown, in display order."""
        out: List[Label] = []
        for entry in self._entries:
            out.append(entry)
            if isinstance(entry, TreeNode) and entry.expanded:
                out.extend(entry.items)
        return out

    def rebuild(self) -> None:
        for child in self.children:
            child.parent = None
        self.children = []
        for row in self.rows():
            row.parent = self
            self.children.append(row)
        self.recalc()

    def recalc(self) -> None:
        y = 0.0
        for row in self.children:
            depth = 1 if self._is_item_of_node(row) else 0
            row.set_position(depth * _INDENT, y)
            y += row.height + _ROW_SPACING

    def _is_item_of_node(self, row: Label) -> bool:
        return any(isinstance(e, TreeNode) and row in e.items for e in self._entries)

    # --------------------------- selection ------------------------------
    def selected(self) -> Optional[Label]:
        return self._selected

    def select(self, item: Optional[Label]) -> None:
        if item is self._selected:
            return
        if self._selected is not None:
            self._selected.set_bg_color((0.0, 0.0, 0.0, 0.0))
        self._selected = item
        if item is not None:
            item.set_bg_color(SELECTED_BG)
        self.dispatch(CHANGE, None)

    def find_item(self, text: str) -> Optional[Label]:
        for entry in self._entries:
            if isinstance(entry, TreeNode):
                for item in entry.items:
                    if item.text == text:
                        return item
            elif getattr(entry, "text", None) == text:
                return entry
        return None

    def on_mouse(self, evname: str, ev) -> None:
        super().on_mouse(evname, ev)
        if evname != MOUSE_DOWN or ev.button != 1:
            return
        for row in self.children:
            ax, ay = row.absolute_position()
            if ay <= ev.y < ay + row.height:
                if isinstance(row, TreeNode):
                    row.toggle()
                else:
                    self.select(row)
                return

    def dispose_children(self, recursive: bool = True) -> None:
        self._entries = []
        self._selected = None
        super().dispose_children(recursive)
