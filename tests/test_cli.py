import logging
import os

import pytest
from PIL import Image

import tmap
from tmap_lib.errors import OutputError


@pytest.fixture
def map_file(tmp_path):
    """Writes a map file and returns (path, output path)."""

    def _write(body, output="map.png"):
        out = tmp_path / output if output else None
        header = f"TileSize: 4\nOutput: {out}\n" if out else "TileSize: 4\n"
        path = tmp_path / "dungeon.map"
        path.write_text(header + body, encoding="utf-8")
        return str(path), out

    return _write


def test_renders_map_to_png(map_file):
    path, out = map_file("\n #\n\n")

    assert tmap.main([path]) == tmap.EXIT_OK
    with Image.open(out) as img:
        assert img.mode == "RGBA"
        assert img.size == (12, 12)


def test_output_option_overrides_map_file(map_file, tmp_path):
    path, out = map_file(" #/\n")
    override = tmp_path / "other.png"

    assert tmap.main([path, "-o", str(override)]) == tmap.EXIT_OK
    assert override.exists()
    assert not out.exists()


def test_missing_map_file(tmp_path):
    assert tmap.main([str(tmp_path / "missing.map")]) == tmap.EXIT_FAILURE


def test_map_file_that_is_not_utf8(tmp_path, caplog):
    path = tmp_path / "dungeon.map"
    path.write_bytes(b"TileSize: 4\n #\xff\n")

    assert tmap.main([str(path)]) == tmap.EXIT_FAILURE
    assert "not valid UTF-8" in caplog.text


def test_missing_output_is_an_error(map_file):
    path, _ = map_file(" #\n", output=None)
    assert tmap.main([path]) == tmap.EXIT_FAILURE


def test_usage_error_exits_with_one():
    with pytest.raises(SystemExit) as excinfo:
        tmap.main([])
    assert excinfo.value.code == tmap.EXIT_USAGE


def test_write_failure_is_reported(map_file, mocker):
    path, _ = map_file(" #\n")
    mock_write = mocker.patch("tmap.write_png", side_effect=OutputError("disk full"))

    assert tmap.main([path]) == tmap.EXIT_FAILURE
    mock_write.assert_called_once()
    raster, output_path = mock_write.call_args.args
    assert raster.shape == (12, 12, 4)
    assert output_path.endswith("map.png")


def test_save_intermediate_images(map_file, tmp_path):
    path, _ = map_file(" #\\\n")
    debug_dir = tmp_path / "debug"

    assert tmap.main([path, "--save-intermediate", str(debug_dir)]) == tmap.EXIT_OK
    assert sorted(os.listdir(debug_dir)) == [
        "dungeon_angle.png",
        "dungeon_from_floor.png",
        "dungeon_from_wall.png",
        "dungeon_mask.png",
    ]


def test_ascii_debug_logs_grid(map_file, caplog):
    path, _ = map_file(" #\n")
    caplog.set_level(logging.INFO, logger="tmap")

    assert tmap.main(["-v", "--ascii-debug", path]) == tmap.EXIT_OK
    assert "| # |" in caplog.text
