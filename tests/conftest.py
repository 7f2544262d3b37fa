import logging

import pytest

from tmap_lib.log_utils import PROJECT_TOPICS
from tmap_lib.rendering.classifier import TileClassifier
from tmap_lib.schema import RenderConfig


@pytest.fixture
def small_config():
    return RenderConfig(tile_size=4)


@pytest.fixture
def classify():
    """Classifies a grid at the given tile size (4 px by default)."""

    def _classify(grid, tile_size=4):
        return TileClassifier(tile_size).classify(grid)

    return _classify


@pytest.fixture(autouse=True)
def reset_tmap_logging():
    """Drops handlers and levels that setup_logging installs."""
    yield
    root = logging.getLogger("tmap")
    for h in root.handlers[:]:
        root.removeHandler(h)
        h.close()
    root.setLevel(logging.NOTSET)
    for topic in PROJECT_TOPICS["tmap"]:
        logging.getLogger(f"tmap.{topic}").setLevel(logging.NOTSET)
