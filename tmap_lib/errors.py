# --- tmap_lib/errors.py ---


class TmapError(Exception):
    """Base class for all errors raised by tmap."""


class ConfigError(TmapError):
    """A RenderConfig value makes rendering impossible."""


class TileGridError(TmapError):
    """The tile grid does not have the shape the renderer requires."""


class FloodBoundsError(TmapError):
    """A distance flood tried to touch a pixel outside the grid."""


class OutputError(TmapError):
    """The raster could not be written to the requested output."""
