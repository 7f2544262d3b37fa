# --- tmap_lib/debug.py ---
import logging
import os
from typing import List

import cv2
import numpy as np

from .rendering.constants import UNREACHED
from .rendering.renderer import RenderResult
from .schema import TileGrid

log = logging.getLogger("tmap.render")


def grid_to_ascii(grid: TileGrid) -> str:
    """Frames a tile grid so blank borders stay visible in logs."""
    if not grid:
        return "(empty map)"
    bar = "+" + "-" * len(grid[0]) + "+"
    return "\n".join([bar] + [f"|{row}|" for row in grid] + [bar])


def _angle_image(angle: np.ndarray) -> np.ndarray:
    """Hue encodes the angle; unset pixels are black."""
    hsv = np.zeros(angle.shape + (3,), dtype=np.uint8)
    hsv[..., 0] = (angle.astype(np.int64) % 360) // 2  # OpenCV hue is 0..179
    hsv[..., 1] = 255
    hsv[..., 2] = np.where(angle != 0, 255, 0)
    return cv2.cvtColor(hsv, cv2.COLOR_HSV2BGR)


def _distance_image(dist: np.ndarray) -> np.ndarray:
    """Colormapped distance; unreached pixels are black."""
    reached = dist != UNREACHED
    scaled = np.zeros(dist.shape, dtype=np.uint8)
    if reached.any():
        peak = max(int(dist[reached].max()), 1)
        scaled[reached] = (dist[reached].astype(np.float64) * 255 / peak).astype(np.uint8)
    img = cv2.applyColorMap(scaled, cv2.COLORMAP_JET)
    img[~reached] = 0
    return img


def save_intermediate_images(result: RenderResult, save_path: str, base_name: str) -> List[str]:
    """Saves the solid mask, angle field and both distance fields as PNGs."""
    images = {
        "mask": np.where(result.classified.solid, 255, 0).astype(np.uint8),
        "angle": _angle_image(result.classified.angle),
        "from_wall": _distance_image(result.from_wall.dist),
        "from_floor": _distance_image(result.from_floor.dist),
    }
    written = []
    for suffix, img in images.items():
        if img.size == 0:
            log.warning("Skipping empty intermediate image '%s'.", suffix)
            continue
        filename = os.path.join(save_path, f"{base_name}_{suffix}.png")
        if not cv2.imwrite(filename, img):
            log.error("Could not write intermediate image %s", filename)
            continue
        written.append(filename)
        log.info("Saved intermediate image to %s", filename)
    return written
