# --- tmap_lib/grid.py ---
import logging
from typing import List

from .schema import TileGrid

log = logging.getLogger("tmap.grid")

FLOOR = " "


def normalize_lines(lines: List[str]) -> TileGrid:
    """
    Squares up raw map lines into a bordered, rectangular tile grid.

    Blank lines are dropped from both ends, trailing whitespace and the
    common indentation are removed, short lines are padded with floor, and
    a one-tile ring of floor is added around the result so that wall edges
    have somewhere to bleed into.

    Args:
        lines: Raw map lines as read from the map file.

    Returns:
        The normalized grid, or an empty list when there is nothing to draw.
    """
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    if start == end:
        log.warning("Map contains no tiles.")
        return []

    rows = [line.rstrip() for line in lines[start:end]]
    indents = [len(row) - len(row.lstrip()) for row in rows if row]
    indent = min(indents)
    if indent:
        rows = [row[indent:] for row in rows]

    width = max(len(row) for row in rows)
    rows = [row.ljust(width, FLOOR) for row in rows]

    blank = FLOOR * (width + 2)
    grid = [blank] + [FLOOR + row + FLOOR for row in rows] + [blank]
    log.debug("Normalized map to %d x %d tiles (with border).", width + 2, len(grid))
    return grid
