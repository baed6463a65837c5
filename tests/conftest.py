"""Headless fixtures shared by the test-suite.

No display and no sound card are needed: FakeWindow is a `Window` flagged
headless (the engine skips GL rendering for it) and FakeAudioDevice never
opens the mixer, so players are created without loading any sound data.
"""

import os

# Must be set before pygame initialises anything
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from app.app import App
from app.options import parse_options
from core.engine import Engine
from core.window import Window
from demos import build_registry
from sound.audio import AudioDevice

AUDIO_FILES = (
    "Vivaldi1.wav",
    "Bach1.ogg",
    "bomb1.wav",
    "bomb2.ogg",
    "tone_440hz.wav",
    "tone_1khz.wav",
)


class FakeWindow(Window):
    headless = True

    def __init__(self, width: int = 1000, height: int = 600) -> None:
        super().__init__(width, height, "Py3D Demo")
        self.titles = []
        self.swaps = 0

    def set_title(self, title: str) -> None:
        super().set_title(title)
        self.titles.append(title)

    def swap_buffers(self) -> None:
        self.swaps += 1


class FakeAudioDevice(AudioDevice):
    def __init__(self) -> None:
        super().__init__()
        self.open_calls = 0

    def open(self, **kwargs) -> None:
        # Stays closed: players keep no sound and no mixer channel
        self.open_calls += 1


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def window() -> FakeWindow:
    return FakeWindow()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """A data directory with (empty) audio files, found through the cwd."""
    data = tmp_path / "data"
    audio = data / "audio"
    audio.mkdir(parents=True)
    for name in AUDIO_FILES:
        (audio / name).write_bytes(b"")
    monkeypatch.chdir(tmp_path)
    return data


@pytest.fixture
def make_engine(window, clock):
    def _make() -> Engine:
        return Engine(window=window, audio=FakeAudioDevice(), clock=clock)

    return _make


@pytest.fixture
def make_app(data_dir, make_engine):
    """Create an App from command line arguments, with the default demos."""

    def _make(argv=(), registry=None) -> App:
        options = parse_options(list(argv))
        if registry is None:
            registry = build_registry()
        return App.create(registry, options, engine=make_engine())

    return _make
