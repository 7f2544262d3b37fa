# --- tmap_lib/schema.py ---
from dataclasses import dataclass
from typing import List

import numpy as np

from .errors import ConfigError

# A normalized, rectangular tile grid bordered by one ring of floor tiles.
TileGrid = List[str]


@dataclass(frozen=True)
class RenderConfig:
    """Shading parameters for a single render."""

    tile_size: int = 50
    wall_size: int = 6
    wall_top: int = 160  # Greyscale at the top of a wall face
    wall_bottom: int = 135  # Greyscale at the foot of a wall face
    shadow: int = 50  # Weakest shadow alpha
    shadow_depth: int = 65  # Added to shadow at the wall face, fading inwards
    shadow_width: float = 0.2  # Falloff in tiles (half shadow at this distance)
    light: int = 15  # Maximum light boost
    light_angle: int = 10  # Degrees
    output: str = ""

    def validate(self) -> None:
        """Raises ConfigError for values the renderer cannot work with."""
        if self.tile_size <= 0:
            raise ConfigError(f"TileSize must be positive, got {self.tile_size}")
        if self.wall_size < 0:
            raise ConfigError(f"WallSize must not be negative, got {self.wall_size}")
        if self.shadow_width <= 0:
            raise ConfigError(f"ShadowWidth must be positive, got {self.shadow_width}")
        for name in ("wall_top", "wall_bottom", "shadow", "shadow_depth", "light"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ConfigError(f"{name} must be a byte value, got {value}")


@dataclass
class DistanceField:
    """Per-pixel flood distance paired with the angle it was carried from."""

    dist: np.ndarray  # uint8, 255 = unreached
    angle: np.ndarray  # int16

    @property
    def shape(self):
        return self.dist.shape


@dataclass
class ClassifiedGrid:
    """Full-resolution output of the tile classifier."""

    solid: np.ndarray  # bool, True = wall
    angle: np.ndarray  # int16, 0 = no angle assigned

    @property
    def height(self) -> int:
        return self.solid.shape[0]

    @property
    def width(self) -> int:
        return self.solid.shape[1]
