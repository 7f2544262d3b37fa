# --- tmap_lib/rendering/renderer.py ---
import logging
from dataclasses import dataclass

import numpy as np

from tmap_lib.schema import ClassifiedGrid, DistanceField, RenderConfig, TileGrid
from .classifier import TileClassifier
from .compositor import Compositor
from .flood import flood_both
from .interpolator import fill_corner_angles

log = logging.getLogger("tmap.render")


@dataclass
class RenderResult:
    """The raster plus the intermediate layers it was built from."""

    raster: np.ndarray
    classified: ClassifiedGrid
    from_wall: DistanceField
    from_floor: DistanceField


class MapRenderer:
    """Orchestrates classification, corner filling, flooding and compositing."""

    def __init__(self, config: RenderConfig):
        config.validate()
        self.config = config
        self.classifier = TileClassifier(config.tile_size)
        self.compositor = Compositor(config)

    def render(self, grid: TileGrid) -> RenderResult:
        t = self.config.tile_size
        rows = len(grid)
        cols = len(grid[0]) if rows else 0

        classified = self.classifier.classify(grid)
        fill_corner_angles(classified.angle, rows, cols, t)
        classified.angle.flags.writeable = False

        log.info("Flooding distance fields over %d x %d px...", classified.width, classified.height)
        from_wall, from_floor = flood_both(classified.solid, classified.angle)

        log.info("Compositing raster...")
        raster = self.compositor.composite(classified.solid, from_wall, from_floor)
        return RenderResult(raster, classified, from_wall, from_floor)


def render_map(grid: TileGrid, config: RenderConfig) -> np.ndarray:
    """Renders a normalized tile grid to an RGBA raster of shape (h, w, 4)."""
    return MapRenderer(config).render(grid).raster
