from __future__ import annotations

from ui.layout import VBoxLayout
from ui.panel import Panel
from ui.widgets import Label


class StatsTable(Panel):
    """Two column table showing the latest Stats sample."""

    def __init__(self, width: float, height: float, stats) -> None:
        super().__init__(width, height)
        self.set_borders(1, 1, 1, 1)
        self.set_paddings(2, 4, 2, 4)
        self.set_layout(VBoxLayout(2))
        self._rows = {}
        for name, _ in stats.rows():
            label = Label(f"{name}: 0")
            self._rows[name] = label
            self.add(label)

    def update(self, stats) -> None:
        for name, value in stats.rows():
            label = self._rows.get(name)
            if label is not None:
                label.set_text(f"{name}: {value}")

    def text_of(self, name: str) -> str:
        return self._rows[name].text
