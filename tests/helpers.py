import numpy as np

SINGLE_WALL = ["   ", " # ", "   "]


def tile_block(array, row, col, tile_size=4):
    """Returns the pixels of one tile."""
    return array[row * tile_size : (row + 1) * tile_size, col * tile_size : (col + 1) * tile_size]


def tile_offsets(tile_size=4):
    """Returns (dx, dy) pixel offsets within one tile."""
    dy, dx = np.mgrid[0:tile_size, 0:tile_size]
    return dx, dy
