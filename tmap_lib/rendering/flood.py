# --- tmap_lib/rendering/flood.py ---
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Tuple

import numpy as np

from tmap_lib.errors import FloodBoundsError
from tmap_lib.schema import DistanceField
from .constants import GUARD, MAX_DIST, SOURCE_DIST, UNREACHED

log = logging.getLogger("tmap.flood")

# Relaxation order: left, up, down, right. The first direction to reach a
# pixel within a step decides which angle it inherits.
NEIGHBOR_STEPS = ((0, -1), (-1, 0), (1, 0), (0, 1))


def seed_field(sources: np.ndarray, angle: np.ndarray) -> DistanceField:
    """Creates a distance field with the given pixels as sources."""
    dist = np.where(sources, SOURCE_DIST, UNREACHED).astype(np.uint8)
    return DistanceField(dist=dist, angle=angle.astype(np.int16, copy=True))


def _propagates(ys: np.ndarray, xs: np.ndarray, shape: Tuple[int, int]) -> np.ndarray:
    """True for pixels far enough from every edge to pass their distance on."""
    h, w = shape
    return (ys >= GUARD) & (ys < h - GUARD) & (xs >= GUARD) & (xs < w - GUARD)


def flood(field: DistanceField, name: str = "flood") -> DistanceField:
    """
    Runs a multi-source breadth-first relaxation over a seeded field, in place.

    Every pixel ends up with its 4-connected distance to the nearest source
    (saturating at MAX_DIST) and the angle carried from that source. Pixels
    inside the guard band are reached but never propagate further; pixels
    that cannot be reached keep UNREACHED and their own angle.
    """
    dist, angle = field.dist, field.angle
    h, w = dist.shape
    ys, xs = np.nonzero(dist == SOURCE_DIST)
    keep = _propagates(ys, xs, dist.shape)
    ys, xs = ys[keep], xs[keep]
    log.debug("%s: %d source pixel(s) on a %d x %d grid.", name, ys.size, w, h)

    step = SOURCE_DIST
    while ys.size and step < MAX_DIST:
        nxt = step + 1
        reached_y, reached_x = [], []
        for dy, dx in NEIGHBOR_STEPS:
            ny, nx = ys + dy, xs + dx
            if ny.size and (ny.min() < 0 or nx.min() < 0 or ny.max() >= h or nx.max() >= w):
                raise FloodBoundsError(f"{name}: relaxation left the {w} x {h} grid")
            closer = dist[ny, nx] > nxt
            ny, nx = ny[closer], nx[closer]
            dist[ny, nx] = nxt
            angle[ny, nx] = angle[ys[closer], xs[closer]]
            reached_y.append(ny)
            reached_x.append(nx)

        ys = np.concatenate(reached_y)
        xs = np.concatenate(reached_x)
        keep = _propagates(ys, xs, dist.shape)
        ys, xs = ys[keep], xs[keep]
        step = nxt

    log.debug("%s: settled after %d step(s).", name, step)
    return field


def flood_both(solid: np.ndarray, angle: np.ndarray) -> Tuple[DistanceField, DistanceField]:
    """
    Computes the two distance fields in parallel.

    `from_wall` is seeded at floor pixels and measures how deep a wall pixel
    sits behind its face; `from_floor` is seeded at wall pixels and measures
    how far a floor pixel is from the nearest wall. Each worker owns its
    field; both are joined before returning, and any worker error is raised.
    """
    from_wall = seed_field(~solid, angle)
    from_floor = seed_field(solid, angle)
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="tmap-flood") as pool:
        wall_job = pool.submit(flood, from_wall, "from_wall")
        floor_job = pool.submit(flood, from_floor, "from_floor")
        return wall_job.result(), floor_job.result()
