from .camera import Camera, PerspectiveCamera, OrthographicCamera
from .orbit_control import OrbitControl

__all__ = [
    "Camera",
    "PerspectiveCamera",
    "OrthographicCamera",
    "OrbitControl",
]
