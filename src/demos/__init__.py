"""Demo modules and the startup routine that registers them.

Each demo module exposes ``register(registry)``; build_registry() calls them
explicitly so the set of demos never depends on import order.
"""

from demos.registry import Demo, DemoRegistry
from demos.audio import position as audio_position
from demos.gui import layout_dock as gui_layout_dock

_MODULES = (
    audio_position,
    gui_layout_dock,
)


def build_registry() -> DemoRegistry:
    registry = DemoRegistry()
    for module in _MODULES:
        module.register(registry)
    return registry


__all__ = ["Demo", "DemoRegistry", "build_registry"]
