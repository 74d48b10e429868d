"""Frame-loop driver for a scale journey.

`ScaleJourney` owns the catalog, navigator and viewport state that the
UI used to share through globals. The host scheduler (a QTimer in the
app) calls `advance()` once per frame and hands the resulting `Frame`
to the renderer; input handlers call the forwarding methods between
frames.
"""

from dataclasses import dataclass

from loguru import logger

from cosmoscale.config.manager import ConfigManager
from cosmoscale.core.catalog import LabelEntry, ScaleCatalog, build_catalog, default_catalog, load_raw_entries
from cosmoscale.core.formatter import format_distance
from cosmoscale.core.navigator import NavigatorSettings, PinchTracker, ScaleNavigator
from cosmoscale.core.units import LIGHT_YEAR_THRESHOLD_M
from cosmoscale.core.viewport import CameraPose, ViewportSync


@dataclass(frozen=True)
class Frame:
    """Everything the renderer needs for one frame."""

    index: int
    zoom: float
    pose: CameraPose
    resized: bool
    distance_label: str


class ScaleJourney:
    """Owns per-process journey state and advances it one frame at a time."""

    def __init__(
        self,
        catalog: ScaleCatalog,
        settings: NavigatorSettings | None = None,
        light_year_threshold: float = LIGHT_YEAR_THRESHOLD_M,
    ):
        self.catalog = catalog
        self.navigator = ScaleNavigator(catalog, settings)
        self.viewport = ViewportSync()
        self.pinch = PinchTracker()
        self._light_year_threshold = light_year_threshold
        self._frame_index = 0

    @classmethod
    def from_config(cls, config: ConfigManager) -> "ScaleJourney":
        """Build a journey from the `catalog` and `navigator` config groups."""
        threshold = config.get("catalog", "light_year_threshold_m", LIGHT_YEAR_THRESHOLD_M)
        catalog_path = config.get("catalog", "catalog_path", "")
        if catalog_path:
            catalog = build_catalog(load_raw_entries(catalog_path), threshold)
        else:
            catalog = default_catalog(threshold)
        logger.info(f"Journey spans {len(catalog)} objects")
        return cls(catalog, NavigatorSettings.from_config(config), threshold)

    def advance(self) -> Frame:
        resized = self.viewport.sync()
        zoom = self.navigator.tick()
        frame = Frame(
            index=self._frame_index,
            zoom=zoom,
            pose=self.viewport.pose(zoom),
            resized=resized,
            distance_label=format_distance(zoom, self._light_year_threshold),
        )
        self._frame_index += 1
        return frame

    def nearest_object(self, zoom: float) -> LabelEntry:
        return self.catalog.nearest(zoom)

    def reset(self):
        logger.info("Journey reset")
        self.navigator.reset()

    # ------------------------------------------------------------------
    # Input forwarding
    # ------------------------------------------------------------------

    def wheel(self, delta: float):
        self.navigator.wheel(delta)

    def pointer_moved(self, x: float, y: float, width: int, height: int):
        self.viewport.set_pointer_pixels(x, y, width, height)

    def pinch_begin(self, points):
        self.pinch.begin(points)

    def pinch_move(self, points) -> bool:
        """Feed touch points; returns True if they formed a two-finger gesture."""
        delta = self.pinch.move(points)
        if delta is not None:
            self.navigator.pinch(delta)
        return len(points) == 2

    def pinch_end(self):
        self.pinch.end()
