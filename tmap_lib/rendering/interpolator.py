# --- tmap_lib/rendering/interpolator.py ---
import logging

import numpy as np

from .constants import NO_ANGLE

log = logging.getLogger("tmap.classify")


def fill_corner_angles(angle: np.ndarray, rows: int, cols: int, tile_size: int) -> int:
    """
    Fills unset angles around interior tile corners.

    Each interior corner is straddled by a 2x2 pixel cluster. When at least
    one pixel of the cluster has an angle, the unset ones receive the integer
    mean of the known angles (read modulo 360). Averaging across the 0/360
    seam is not corrected.

    Returns:
        The number of pixels that were filled.
    """
    filled = 0
    for y in range(1, rows):
        for x in range(1, cols):
            py, px = y * tile_size, x * tile_size
            cluster = angle[py - 1 : py + 1, px - 1 : px + 1]
            known = cluster[cluster != NO_ANGLE].astype(np.int64) % 360
            if known.size == 0:
                continue
            unset = cluster == NO_ANGLE
            if unset.any():
                cluster[unset] = int(known.sum()) // known.size
                filled += int(unset.sum())
    log.debug("Filled %d corner pixel(s).", filled)
    return filled
