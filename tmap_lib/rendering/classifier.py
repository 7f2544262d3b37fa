# --- tmap_lib/rendering/classifier.py ---
import logging
from typing import Callable, List, NamedTuple, Tuple

import numpy as np

from tmap_lib.errors import TileGridError
from tmap_lib.schema import ClassifiedGrid, TileGrid
from .constants import (
    FACING_DOWN,
    FACING_LEFT,
    FACING_RIGHT,
    FACING_UP,
    FLOOR,
    KNOWN_SYMBOLS,
    NO_ANGLE,
    SOLID,
)

log = logging.getLogger("tmap.classify")

# (dx, dy, tile_size) -> bool or int array over one tile
PixelRule = Callable[[np.ndarray, np.ndarray, int], np.ndarray]

EDGE_ANGLES = {
    "left": FACING_LEFT,
    "right": FACING_RIGHT,
    "above": FACING_UP,
    "below": FACING_DOWN,
}


class _Neighbors(NamedTuple):
    left: str
    right: str
    above: str
    below: str

    def is_open(self, side: str) -> bool:
        return getattr(self, side) == FLOOR


class _Edge(NamedTuple):
    """An outward-facing edge of a tile's solid part."""

    side: str
    keep_inner: bool  # Only fill unset pixels on the line inside the tile
    keep_outer: bool  # Only fill unset pixels on the line in the neighbor


class _Facing(NamedTuple):
    angle: int
    edges: Tuple[_Edge, ...]


class _Diagonal(NamedTuple):
    """
    A diagonal wall. `offset` is <= 0 on the nominal solid side and its
    magnitude is the pixel distance from the diagonal line.
    """

    offset: PixelRule
    strong: Tuple[str, ...]  # A wall on any of these sides flips the tile
    guards: Tuple[str, ...]  # A wall on any of these sides prevents a weak flip
    nominal: _Facing
    flipped: _Facing


class _Wedge(NamedTuple):
    solid: PixelRule
    split: PixelRule
    first: int
    second: int
    trigger: str  # A wall on this side swaps the halves


ALL_EDGES = tuple(_Edge(side, False, False) for side in ("left", "right", "above", "below"))

DIAGONAL_RULES = {
    "\\": _Diagonal(
        offset=lambda dx, dy, t: dx - dy,
        strong=("right", "above"),
        guards=("left", "below"),
        nominal=_Facing(225, (_Edge("left", False, False), _Edge("below", True, False))),
        flipped=_Facing(45, (_Edge("right", True, False), _Edge("above", True, False))),
    ),
    "/": _Diagonal(
        offset=lambda dx, dy, t: t - dx - 1 - dy,
        strong=("left", "above"),
        guards=("right", "below"),
        nominal=_Facing(135, (_Edge("right", True, False), _Edge("below", True, False))),
        flipped=_Facing(315, (_Edge("left", True, True), _Edge("above", True, False))),
    ),
}

WEDGE_RULES = {
    ">": _Wedge(
        solid=lambda dx, dy, t: (dx <= dy) & (t - dx - 1 > dy),
        split=lambda dx, dy, t: dy * 2 > t,
        first=315,
        second=225,
        trigger="right",
    ),
    "<": _Wedge(
        solid=lambda dx, dy, t: (dx > dy) & (t - dx - 1 <= dy),
        split=lambda dx, dy, t: dy * 2 > t,
        first=45,
        second=135,
        trigger="left",
    ),
    "v": _Wedge(
        solid=lambda dx, dy, t: (dx > dy) & (t - dx - 1 > dy),
        split=lambda dx, dy, t: dx * 2 > t,
        first=45,
        second=315,
        trigger="below",
    ),
    "^": _Wedge(
        solid=lambda dx, dy, t: (dx <= dy) & (t - dx - 1 <= dy),
        split=lambda dx, dy, t: dx * 2 > t,
        first=225,
        second=135,
        trigger="above",
    ),
}


def rotate_half_turn(angle: int) -> int:
    """Rotates an angle by 180 degrees, keeping it within (0, 360]."""
    return (angle + 180 - 1) % 360 + 1


def _fill(line: np.ndarray, value: int, keep_existing: bool) -> None:
    if keep_existing:
        line[line == NO_ANGLE] = value
    else:
        line[...] = value


class TileClassifier:
    """Expands a tile grid into a full-resolution solid mask and angle field."""

    def __init__(self, tile_size: int):
        self.tile_size = tile_size
        self.dy, self.dx = np.mgrid[0:tile_size, 0:tile_size]

    def classify(self, grid: TileGrid) -> ClassifiedGrid:
        """
        Classifies every tile of a bordered grid.

        Tiles are visited row by row; a tile may write edge angles one pixel
        into its neighbors, and later tiles overwrite what earlier ones left
        in their own block.
        """
        grid = self._sanitize(grid)
        t = self.tile_size
        rows = len(grid)
        cols = len(grid[0]) if rows else 0
        solid = np.zeros((rows * t, cols * t), dtype=bool)
        angle = np.zeros((rows * t, cols * t), dtype=np.int16)
        log.info("Classifying %d x %d tiles at %d px...", cols, rows, t)

        for y in range(1, rows - 1):
            for x in range(1, cols - 1):
                symbol = grid[y][x]
                if symbol == FLOOR:
                    continue
                neighbors = _Neighbors(
                    left=grid[y][x - 1],
                    right=grid[y][x + 1],
                    above=grid[y - 1][x],
                    below=grid[y + 1][x],
                )
                oy, ox = y * t, x * t
                block = (slice(oy, oy + t), slice(ox, ox + t))
                if symbol == SOLID:
                    solid[block] = True
                    for edge in ALL_EDGES:
                        self._paint_edge(angle, oy, ox, edge, neighbors)
                elif symbol in DIAGONAL_RULES:
                    self._classify_diagonal(
                        solid, angle, oy, ox, DIAGONAL_RULES[symbol], neighbors
                    )
                else:
                    self._classify_wedge(solid, angle, oy, ox, WEDGE_RULES[symbol], neighbors)

        solid.flags.writeable = False
        return ClassifiedGrid(solid=solid, angle=angle)

    def _sanitize(self, grid: TileGrid) -> List[str]:
        """Replaces unknown symbols with floor and checks the grid's shape."""
        if not grid:
            return []
        cols = len(grid[0])
        clean = []
        for y, line in enumerate(grid):
            if len(line) != cols:
                raise TileGridError(f"Row {y} has {len(line)} tiles, expected {cols}")
            chars = list(line)
            for x, symbol in enumerate(chars):
                if symbol not in KNOWN_SYMBOLS:
                    log.warning("Unrecognized tile %r at (%d, %d), using floor", symbol, x, y)
                    chars[x] = FLOOR
            clean.append("".join(chars))

        border = clean[0] + clean[-1] + "".join(line[0] + line[-1] for line in clean)
        if border.strip(FLOOR):
            raise TileGridError("Tile grid must be surrounded by a ring of floor tiles")
        return clean

    def _classify_diagonal(self, solid, angle, oy, ox, rule: _Diagonal, neighbors: _Neighbors):
        t = self.tile_size
        flipped = any(getattr(neighbors, side) == SOLID for side in rule.strong)
        if not flipped:
            # Weak rule: something non-floor on a trigger side, no wall behind us.
            flipped = any(not neighbors.is_open(side) for side in rule.strong) and not any(
                getattr(neighbors, side) == SOLID for side in rule.guards
            )
        facing = rule.flipped if flipped else rule.nominal
        log.debug("Diagonal at (%d, %d) px: flipped=%s angle=%d", ox, oy, flipped, facing.angle)

        offset = rule.offset(self.dx, self.dy, t)
        block = (slice(oy, oy + t), slice(ox, ox + t))
        solid[block] = offset > 0 if flipped else offset <= 0
        tile_angle = angle[block]
        tile_angle[np.abs(offset) <= 1] = facing.angle
        for edge in facing.edges:
            self._paint_edge(angle, oy, ox, edge, neighbors)

    def _classify_wedge(self, solid, angle, oy, ox, rule: _Wedge, neighbors: _Neighbors):
        t = self.tile_size
        region = rule.solid(self.dx, self.dy, t)
        first, second = rule.first, rule.second
        if getattr(neighbors, rule.trigger) == SOLID:
            region = ~region
            first, second = rotate_half_turn(second), rotate_half_turn(first)

        block = (slice(oy, oy + t), slice(ox, ox + t))
        solid[block] = region
        angle[block] = np.where(rule.split(self.dx, self.dy, t), second, first)

    def _paint_edge(self, angle, oy, ox, edge: _Edge, neighbors: _Neighbors):
        """Marks the two pixel lines straddling an open edge with its angle."""
        if not neighbors.is_open(edge.side):
            return
        t = self.tile_size
        value = EDGE_ANGLES[edge.side]

        if edge.side in ("left", "right"):
            inner_x, outer_x = (ox, ox - 1) if edge.side == "left" else (ox + t - 1, ox + t)
            rows = slice(oy, oy + t)
            _fill(angle[rows, inner_x], value, edge.keep_inner)
            _fill(angle[rows, outer_x], value, edge.keep_outer)
            return

        inner_y, outer_y = (oy, oy - 1) if edge.side == "above" else (oy + t - 1, oy + t)
        cols = slice(ox, ox + t)
        _fill(angle[inner_y, cols], value, edge.keep_inner)
        _fill(angle[outer_y, cols], value, edge.keep_outer)
        # Corners against a closed side belong to this edge.
        if not neighbors.is_open("right"):
            angle[inner_y, ox + t - 1] = value
        if not neighbors.is_open("left"):
            angle[inner_y, ox] = value
