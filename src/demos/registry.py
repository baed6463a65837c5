"""Name -> demo mapping filled once at startup.

Demo names are dotted, the text before the first dot being the category
shown in the demo tree ("gui.layout_dock", "audio.position").
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Protocol, Tuple


class Demo(Protocol):
    def initialize(self, app) -> None:
        """Build the demo scene, GUI controls and resources."""

    def render(self, app) -> None:
        """Called once per frame while the demo is current."""


class DemoRegistry:
    def __init__(self) -> None:
        self._demos: Dict[str, Demo] = {}

    def register(self, name: str, demo: Demo) -> None:
        # Last registration under a name wins
        self._demos[name] = demo

    def lookup(self, name: str) -> Optional[Demo]:
        return self._demos.get(name)

    def names(self) -> List[str]:
        return sorted(self._demos)

    def items(self) -> Iterator[Tuple[str, Demo]]:
        for name in self.names():
            yield name, self._demos[name]

    def __contains__(self, name: object) -> bool:
        return name in self._demos

    def __len__(self) -> int:
        return len(self._demos)
