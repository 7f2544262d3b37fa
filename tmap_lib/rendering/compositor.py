# --- tmap_lib/rendering/compositor.py ---
import logging

import numpy as np

from tmap_lib.schema import DistanceField, RenderConfig
from .constants import OPAQUE

log = logging.getLogger("tmap.render")


def _to_byte(values: np.ndarray) -> np.ndarray:
    return np.clip(values, 0, 255).astype(np.uint8)


class Compositor:
    """Turns the solid mask and both distance fields into an RGBA raster."""

    def __init__(self, config: RenderConfig):
        self.config = config

    def light_boost(self, carried_angle: np.ndarray) -> np.ndarray:
        """Greyscale added by the directional light for each carried angle."""
        delta = (self.config.light_angle + 360 - carried_angle.astype(np.int64)) % 360
        return np.trunc(self.config.light * np.cos(np.radians(delta))).astype(np.int64)

    def composite(
        self, solid: np.ndarray, from_wall: DistanceField, from_floor: DistanceField
    ) -> np.ndarray:
        """
        Shades every pixel.

        Wall pixels within half a wall width of the floor form a lit
        gradient; deeper wall pixels become translucent black shadow that
        fades with depth. Floor pixels next to a wall get the matching
        highlight; all floor is opaque. Byte results saturate at 0 and 255.
        """
        cfg = self.config
        h, w = solid.shape
        raster = np.zeros((h, w, 4), dtype=np.uint8)
        span = cfg.wall_top - cfg.wall_bottom

        # Distances are measured from the boundary pixel, which is one step out.
        wall_d = np.maximum(from_wall.dist.astype(np.int64) - 1, 0)
        floor_d = np.maximum(from_floor.dist.astype(np.int64) - 1, 0)

        face = solid & (wall_d < cfg.wall_size // 2)
        scale = (cfg.wall_size / 2 - wall_d[face]) / (cfg.wall_size + 1)
        grey = cfg.wall_bottom + np.trunc(span * scale) + self.light_boost(from_wall.angle[face])
        raster[face, :3] = _to_byte(grey)[:, None]
        raster[face, 3] = OPAQUE

        shadow = solid & ~face
        depth = wall_d[shadow] - cfg.wall_size // 2
        falloff = depth / (cfg.tile_size * cfg.shadow_width) + 1
        raster[shadow, 3] = _to_byte(cfg.shadow + np.trunc(cfg.shadow_depth / falloff))

        edge = ~solid & (floor_d < (cfg.wall_size + 1) // 2)
        scale = ((cfg.wall_size + 1) / 2 - floor_d[edge]) / (cfg.wall_size + 1)
        grey = cfg.wall_top - np.trunc(span * scale) + self.light_boost(from_floor.angle[edge])
        raster[edge, :3] = _to_byte(grey)[:, None]
        raster[~solid, 3] = OPAQUE

        log.debug(
            "Shaded %d wall face, %d shadow and %d highlight pixel(s).",
            int(face.sum()),
            int(shadow.sum()),
            int(edge.sum()),
        )
        return raster
