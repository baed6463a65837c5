"""Positional audio: six looping sources orbiting the listener.

Each source is a small emissive sphere carrying an AudioPlayer and a label
with its file name. The listener rides on the camera, so orbiting the camera
moves what you hear as well as what you see.
"""

from __future__ import annotations

import math
import os
from typing import List

from core.events import CHANGE
from core.logger import fatal, get_logger
from core.mesh import AxisHelper, GridHelper, Sphere, Sprite
from sound.audio import AudioError, Listener
from ui.fonts import measure_text

NAME = "audio.position"

log = get_logger("demos")

LABEL_FONT_SIZE = 32
ORBIT_RADIUS = 8.0

# file, color, height, speed
_SOURCES = (
    ("Vivaldi1.wav", (1.0, 0.0, 0.0), 0.0, 1.00),
    ("Bach1.ogg", (0.0, 1.0, 0.0), 1.0, 0.90),
    ("bomb1.wav", (0.0, 0.0, 1.0), 2.0, 0.80),
    ("bomb2.ogg", (0.0, 1.0, 1.0), 3.0, 0.70),
    ("tone_440hz.wav", (1.0, 1.0, 0.0), 4.0, 0.60),
    ("tone_1khz.wav", (1.0, 0.0, 1.0), 5.0, 0.50),
)


class PlayerSphere(Sphere):
    """Sphere with a looping sound source and a file name label."""

    def __init__(self, app, filename: str, color) -> None:
        super().__init__(0.2, color, emissive=True)
        path = os.path.join(app.dir_data, "audio", filename)
        try:
            self.player = app.audio.new_player(path)
        except (FileNotFoundError, AudioError) as exc:
            fatal(app.log, "error:%s", exc)
        self.name = filename

        width, height = measure_text(filename, LABEL_FONT_SIZE)
        aspect = width / height if height else 1.0
        self.label = Sprite(filename, 0.5, (0.0, 0.0, 0.0), font_size=LABEL_FONT_SIZE, aspect=aspect)
        self.label.set_position(0, 0.4, 0)
        self.add(self.label)

        self.player.set_looping(True)
        self.player.play()
        self.start = app.elapsed()
        self.speed = 1.0
        self.add(self.player)

    def toggle(self) -> None:
        if self.visible:
            self.player.pause()
            self.set_visible(False)
        else:
            self.player.play()
            self.set_visible(True)

    def update(self, app) -> None:
        delta = app.elapsed() - self.start
        x = ORBIT_RADIUS * math.cos(delta * self.speed)
        z = ORBIT_RADIUS * math.sin(delta * self.speed)
        self.set_position(x, self.position.y, z)


class AudioPosition:
    def __init__(self) -> None:
        self.spheres: List[PlayerSphere] = []

    def initialize(self, app) -> None:
        app.scene.add(AxisHelper(1.0))
        app.scene.add(GridHelper(100, 1, (0.4, 0.4, 0.4)))

        camera = app.camera
        camera.set_position(0, 4, 12)
        camera.look_at((0, 0, 0))
        camera.add(Listener(app.audio))

        self.spheres = []
        for i, (filename, color, height, speed) in enumerate(_SOURCES):
            ps = PlayerSphere(app, filename, color)
            ps.set_position(0, height, 0)
            ps.speed = speed
            if i == 0:
                ps.player.set_rolloff_factor(1)
            app.scene.add(ps)
            self.spheres.append(ps)
        log.debug("Created %d player spheres", len(self.spheres))

        spheres = list(self.spheres)

        def stop_players():
            for ps in spheres:
                ps.player.stop()

        app.add_finalizer(stop_players)

        folder = app.control_folder
        if folder is None:
            return
        group = folder.add_group("Play sources")
        for ps in self.spheres:
            caption = os.path.splitext(ps.name)[0]
            cb = group.add_check_box(caption).set_value(True)
            cb.subscribe(CHANGE, lambda evname, ev, ps=ps: ps.toggle())

    def render(self, app) -> None:
        for ps in self.spheres:
            ps.update(app)


def register(registry) -> None:
    registry.register(NAME, AudioPosition())
