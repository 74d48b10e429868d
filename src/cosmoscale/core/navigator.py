"""Logarithmic zoom navigation across the whole catalog.

The camera distance is kept as its natural logarithm, so one unit of
velocity always means the same perceptual step whether the camera sits
next to a strand of DNA or outside the observable universe. Input sets
the velocity; every frame the position integrates it and damping bleeds
it off until it settles at the current velocity floor. Velocity is never
forced to zero, which leaves a slow resting drift.
"""

import math
from dataclasses import dataclass

from cosmoscale.config.manager import ConfigManager
from cosmoscale.core.catalog import ScaleCatalog


@dataclass(frozen=True)
class NavigatorSettings:
    """Tuning constants for `ScaleNavigator`."""

    initial_log_position: float = -100.0
    resting_velocity_floor: float = 0.015
    active_velocity_floor: float = 0.001
    wheel_step: float = 0.1
    pinch_gain: float = 0.001
    damping: float = 0.95
    edge_damping: float = 0.85
    min_zoom_factor: float = 0.5
    max_zoom_factor: float = 50.0

    @classmethod
    def from_config(cls, config: ConfigManager) -> "NavigatorSettings":
        """Read settings from the `navigator` config group, keeping defaults for missing keys."""
        group = config.get_group("navigator")
        known = cls.__dataclass_fields__
        return cls(**{k: float(v) for k, v in group.items() if k in known})


@dataclass
class NavigatorState:
    """Continuous zoom state carried from frame to frame."""

    log_position: float
    velocity: float
    min_velocity_floor: float

    @classmethod
    def initial(cls, settings: NavigatorSettings) -> "NavigatorState":
        return cls(
            log_position=settings.initial_log_position,
            velocity=settings.resting_velocity_floor,
            min_velocity_floor=settings.resting_velocity_floor,
        )


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class ScaleNavigator:
    """Damped one-dimensional zoom integrator bounded by the catalog extremes."""

    def __init__(self, catalog: ScaleCatalog, settings: NavigatorSettings | None = None):
        self._catalog = catalog
        self._settings = settings or NavigatorSettings()
        self.state = NavigatorState.initial(self._settings)

    @property
    def settings(self) -> NavigatorSettings:
        return self._settings

    @property
    def bounds(self) -> tuple[float, float]:
        """(min_zoom, max_zoom) in meters."""
        return (
            self._catalog.min_size_m * self._settings.min_zoom_factor,
            self._catalog.max_size_m * self._settings.max_zoom_factor,
        )

    @property
    def zoom(self) -> float:
        """Current camera distance, clamped into bounds."""
        return self._bounded_zoom(*self.bounds)

    def _bounded_zoom(self, min_zoom: float, max_zoom: float) -> float:
        # Clamp in log space first; exp() of an unbounded position can overflow
        log_position = _clamp(self.state.log_position, math.log(min_zoom), math.log(max_zoom))
        return _clamp(math.exp(log_position), min_zoom, max_zoom)

    def reset(self):
        self.state = NavigatorState.initial(self._settings)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def impulse(self, velocity: float):
        """Set the zoom velocity directly; positive moves the camera away."""
        self.state.velocity = velocity
        self.state.min_velocity_floor = self._settings.active_velocity_floor

    def wheel(self, delta: float):
        """Apply one wheel tick. Only the sign of `delta` matters; zero is ignored."""
        if delta == 0:
            return
        self.impulse(math.copysign(self._settings.wheel_step, delta))

    def pinch(self, delta: float):
        """Apply a pinch distance change in pixels; positive means fingers closed."""
        self.impulse(delta * self._settings.pinch_gain)

    # ------------------------------------------------------------------
    # Frame update
    # ------------------------------------------------------------------

    def tick(self) -> float:
        """Advance one frame and return the camera distance in meters."""
        state = self.state
        min_zoom, max_zoom = self.bounds

        damping = self._settings.damping if abs(state.velocity) > state.min_velocity_floor else 1.0

        zoom = self._bounded_zoom(min_zoom, max_zoom)
        state.log_position = math.log(zoom)

        if (zoom <= min_zoom and state.velocity < 0) or (zoom >= max_zoom and state.velocity > 0):
            damping = self._settings.edge_damping

        state.log_position += state.velocity
        state.velocity *= damping

        return self._bounded_zoom(min_zoom, max_zoom)


class PinchTracker:
    """Reduces two-finger touch positions to pinch distance deltas.

    Only gestures with exactly two contacts count. When `begin` saw two
    contacts, the first move already yields a delta; after a reset, or a
    begin with fewer than two contacts, the first move only records the
    finger spread.
    """

    def __init__(self):
        self._last_distance = 0.0

    @property
    def active(self) -> bool:
        return self._last_distance > 0

    @staticmethod
    def _spread(points) -> float | None:
        if len(points) != 2:
            return None
        (x1, y1), (x2, y2) = points
        return math.hypot(x2 - x1, y2 - y1)

    def begin(self, points):
        """Record the starting spread of a two-finger touch."""
        spread = self._spread(points)
        if spread is not None:
            self._last_distance = spread

    def move(self, points) -> float | None:
        """Return how much the fingers closed since the last move, or None.

        Dropping below two contacts ends the gesture.
        """
        if len(points) < 2:
            self.end()
            return None
        spread = self._spread(points)
        if spread is None:
            return None
        delta = self._last_distance - spread if self._last_distance > 0 else None
        self._last_distance = spread
        return delta

    def end(self):
        self._last_distance = 0.0
