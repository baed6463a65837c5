from .audio import (
    AudioDevice,
    AudioError,
    AudioPlayer,
    Listener,
    distance_gain,
    stereo_gains,
)

__all__ = [
    "AudioDevice",
    "AudioError",
    "AudioPlayer",
    "Listener",
    "distance_gain",
    "stereo_gains",
]
