"""Positional audio on top of pygame.mixer.

pygame.mixer has no 3D audio, so each AudioPlayer owns a reserved mixer
channel and the device recomputes the channel's left/right volumes every
frame from the listener pose and the player's world position:

    gain = ref / (ref + rolloff * (distance - ref))   (distance clamped to >= ref)
    pan  = dot(listener_right, direction_to_source)    (-1 left .. +1 right)

Usage:

    device = AudioDevice()
    device.open()
    player = device.new_player("data/audio/tone_440hz.wav")
    player.set_looping(True)
    player.play()
    scene.add(player)
    ...
    device.update(scene)  # once per frame
"""

from __future__ import annotations

import math
import os
from typing import List, Optional, Tuple

import pygame
from pygame.math import Vector3

from core.logger import get_logger
from core.node import Node

log = get_logger("audio")

Vec3 = Tuple[float, float, float]


class AudioError(Exception):
    pass


def distance_gain(distance: float, reference: float = 1.0, rolloff: float = 1.0) -> float:
    """Inverse distance clamped attenuation (OpenAL default model)."""
    if reference <= 0:
        return 1.0
    d = max(distance, reference)
    denom = reference + rolloff * (d - reference)
    if denom <= 0:
        return 1.0
    return min(1.0, reference / denom)


def stereo_gains(
    listener_pos: Vector3,
    listener_forward: Vector3,
    listener_up: Vector3,
    source_pos: Vector3,
    *,
    reference: float = 1.0,
    rolloff: float = 1.0,
    gain: float = 1.0,
) -> Tuple[float, float]:
    """Return (left, right) channel volumes for a source heard by the listener."""
    to_src = source_pos - listener_pos
    dist = to_src.length()
    att = distance_gain(dist, reference, rolloff) * gain
    if dist < 1e-6:
        return att, att
    right = listener_forward.cross(listener_up)
    if right.length_squared() < 1e-12:
        return att, att
    pan = max(-1.0, min(1.0, right.normalize().dot(to_src / dist)))
    # Constant power panning
    angle = (pan + 1.0) * math.pi / 4.0
    return att * math.cos(angle), att * math.sin(angle)


class AudioPlayer(Node):
    """A looping or one-shot sound source placed in the scene."""

    def __init__(self, device: "AudioDevice", path: str, sound=None) -> None:
        super().__init__(os.path.basename(path))
        self.device = device
        self.path = path
        self.sound = sound
        self.channel = None
        self.looping = False
        self.gain = 1.0
        self.rolloff_factor = 1.0
        self.reference_distance = 1.0
        self.playing = False
        self.paused = False
        self.volumes = (0.0, 0.0)

    def set_looping(self, looping: bool) -> None:
        self.looping = looping

    def set_gain(self, gain: float) -> None:
        self.gain = max(0.0, float(gain))

    def set_rolloff_factor(self, rolloff: float) -> None:
        self.rolloff_factor = max(0.0, float(rolloff))

    def set_reference_distance(self, distance: float) -> None:
        self.reference_distance = max(0.0, float(distance))

    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.paused and self.channel is not None:
            self.channel.unpause()
        elif self.sound is not None:
            if self.channel is None:
                self.channel = self.device.reserve_channel()
            if self.channel is not None:
                self.channel.play(self.sound, loops=-1 if self.looping else 0)
        self.playing = True
        self.paused = False

    def pause(self) -> None:
        if not self.playing:
            return
        if self.channel is not None:
            self.channel.pause()
        self.playing = False
        self.paused = True

    def stop(self) -> None:
        if self.channel is not None:
            self.channel.stop()
        self.playing = False
        self.paused = False

    def set_volumes(self, left: float, right: float) -> None:
        self.volumes = (left, right)
        if self.channel is not None:
            self.channel.set_volume(left, right)

    def dispose(self) -> None:
        self.stop()
        if self.channel is not None:
            self.device.release_channel(self.channel)
            self.channel = None
        super().dispose()


class Listener(Node):
    """Attach to the current camera; pushes its pose to the device each frame."""

    def __init__(self, device: "AudioDevice") -> None:
        super().__init__("Listener")
        self.device = device

    def update(self, camera=None) -> None:
        cam = camera if camera is not None else self.parent
        pos = self.world_position()
        forward = getattr(cam, "forward", Vector3(0, 0, -1))
        up = getattr(cam, "up_axis", Vector3(0, 1, 0))
        self.device.set_listener(
            position=(pos.x, pos.y, pos.z),
            orientation=(forward.x, forward.y, forward.z, up.x, up.y, up.z),
        )


class AudioDevice:
    """Mixer wrapper holding the global listener state."""

    def __init__(self) -> None:
        self.opened = False
        self.listener_position: Vec3 = (0.0, 0.0, 0.0)
        self.listener_velocity: Vec3 = (0.0, 0.0, 0.0)
        self.listener_orientation: Tuple[float, ...] = (0.0, 0.0, -1.0, 0.0, 1.0, 0.0)
        self._free: List[int] = []
        self._reserved = 0

    def open(
        self,
        *,
        frequency: int = 44100,
        size: int = -16,
        channels: int = 2,
        buffer: int = 512,
    ) -> None:
        """Open the default output device. Raises AudioError on failure."""
        if self.opened:
            return
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(
                    frequency=frequency, size=size, channels=channels, buffer=buffer
                )
        except pygame.error as exc:
            raise AudioError(f"Error opening default audio device: {exc}") from exc
        self.opened = pygame.mixer.get_init() is not None
        if not self.opened:
            raise AudioError("Error opening default audio device")
        log.info("Audio device opened: %s", pygame.mixer.get_init())

    # --------------------------- listener -------------------------------
    def set_listener(
        self,
        position: Optional[Vec3] = None,
        velocity: Optional[Vec3] = None,
        orientation: Optional[Tuple[float, ...]] = None,
    ) -> None:
        if position is not None:
            self.listener_position = tuple(position)
        if velocity is not None:
            self.listener_velocity = tuple(velocity)
        if orientation is not None:
            if len(orientation) != 6:
                raise ValueError("orientation needs forward and up vectors (6 floats)")
            self.listener_orientation = tuple(orientation)

    def reset_listener(self) -> None:
        self.set_listener((0.0, 0.0, 0.0), (0.0, 0.0, 0.0), (0.0, 0.0, -1.0, 0.0, 1.0, 0.0))

    # --------------------------- players --------------------------------
    def new_player(self, path: str) -> AudioPlayer:
        """Load a sound file into a new player.

        Raises FileNotFoundError if the path doesn't exist.
        """
        if not os.path.exists(path):
            raise FileNotFoundError(path)
        sound = None
        if self.opened:
            try:
                sound = pygame.mixer.Sound(path)
            except pygame.error as exc:
                raise AudioError(f"Failed to load {path}: {exc}") from exc
        return AudioPlayer(self, path, sound)

    def reserve_channel(self):
        if not self.opened:
            return None
        if self._free:
            return pygame.mixer.Channel(self._free.pop())
        idx = self._reserved
        if idx >= pygame.mixer.get_num_channels():
            pygame.mixer.set_num_channels(idx + 8)
        self._reserved += 1
        pygame.mixer.set_reserved(self._reserved)
        return pygame.mixer.Channel(idx)

    def release_channel(self, channel) -> None:
        if not self.opened:
            return
        for idx in range(self._reserved):
            if pygame.mixer.Channel(idx) == channel:
                self._free.append(idx)
                return

    def update(self, scene: Node) -> None:
        """Recompute channel volumes of every playing player in the scene."""
        lp = Vector3(self.listener_position)
        o = self.listener_orientation
        forward = Vector3(o[0], o[1], o[2])
        up = Vector3(o[3], o[4], o[5])
        for node in scene.traverse():
            if isinstance(node, Listener):
                node.update()
                lp = Vector3(self.listener_position)
                o = self.listener_orientation
                forward = Vector3(o[0], o[1], o[2])
                up = Vector3(o[3], o[4], o[5])
        for node in scene.traverse():
            if isinstance(node, AudioPlayer) and node.playing:
                left, right = stereo_gains(
                    lp,
                    forward,
                    up,
                    node.world_position(),
                    reference=node.reference_distance,
                    rolloff=node.rolloff_factor,
                    gain=node.gain,
                )
                node.set_volumes(left, right)

    def close(self) -> None:
        if self.opened:
            pygame.mixer.quit()
            self.opened = False
