"""Camera pose and viewport size bookkeeping.

The pointer position swings the camera around the origin: horizontal
pointer travel sweeps a quarter turn, vertical travel an eighth. The
camera stays `zoom` meters from the y axis and always looks at the origin.

Renderer resizes are reconciled lazily: window resizes only record the
desired size, and `ViewportSync.sync()` (once per frame) pushes a
mismatch out to the registered resize listeners.
"""

import math
from dataclasses import dataclass

import numpy as np
from loguru import logger


@dataclass(frozen=True)
class CameraPose:
    """Camera position in meters; the look-at target is always the origin."""

    x: float
    y: float
    z: float

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])

    @property
    def target(self) -> np.ndarray:
        return np.zeros(3)


def project(zoom: float, pointer_x: float, pointer_y: float) -> CameraPose:
    """Map a zoom distance and normalized pointer position to a camera pose."""
    yaw = 0.5 * math.pi * (pointer_x - 0.5)
    pitch = 0.25 * math.pi * (pointer_y - 0.5)
    return CameraPose(
        x=math.sin(yaw) * zoom,
        y=math.sin(pitch) * zoom,
        z=math.cos(yaw) * zoom,
    )


def _unit(value: float) -> float:
    return max(0.0, min(1.0, value))


class ViewportSync:
    """Tracks pointer position and reconciles the renderer size with the window."""

    def __init__(self, width: int = 1, height: int = 1):
        self._pointer = (0.5, 0.5)
        self._desired_size = (width, height)
        self._renderer_size = (width, height)
        self._listeners: list = []

    @property
    def pointer(self) -> tuple[float, float]:
        return self._pointer

    def set_pointer(self, x: float, y: float):
        """Set the normalized pointer position, clamped to [0, 1]."""
        self._pointer = (_unit(x), _unit(y))

    def set_pointer_pixels(self, x: float, y: float, width: int, height: int):
        self.set_pointer(x / max(width, 1), y / max(height, 1))

    @property
    def renderer_size(self) -> tuple[int, int]:
        return self._renderer_size

    @property
    def aspect(self) -> float:
        width, height = self._renderer_size
        return width / max(height, 1)

    def request_size(self, width: int, height: int):
        """Record the window size; applied on the next `sync()`."""
        self._desired_size = (width, height)

    def add_resize_listener(self, callback):
        """Register callback(width, height), called when the renderer must resize."""
        self._listeners.append(callback)

    def sync(self) -> bool:
        """Propagate a pending resize. Returns True if the renderer size changed."""
        if self._renderer_size == self._desired_size:
            return False
        self._renderer_size = self._desired_size
        width, height = self._renderer_size
        logger.debug(f"Viewport resized to {width}x{height}")
        for listener in self._listeners:
            listener(width, height)
        return True

    def pose(self, zoom: float) -> CameraPose:
        return project(zoom, *self._pointer)
