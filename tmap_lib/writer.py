# --- tmap_lib/writer.py ---
import logging

import numpy as np
from PIL import Image

from .errors import OutputError

log = logging.getLogger("tmap.main")


def write_png(raster: np.ndarray, output_path: str) -> None:
    """
    Encodes an RGBA raster as a PNG file.

    Args:
        raster: uint8 array of shape (height, width, 4).
        output_path: Destination file; must end in '.png'.
    """
    if not output_path.endswith(".png"):
        raise OutputError(f"Only png output is supported, got '{output_path}'")
    if raster.size == 0:
        raise OutputError("Cannot write an empty map")

    try:
        Image.fromarray(raster).save(output_path, "PNG")
    except OSError as e:
        raise OutputError(f"Could not write '{output_path}': {e}") from e
    log.info("Successfully saved %d x %d map to '%s'", raster.shape[1], raster.shape[0], output_path)
