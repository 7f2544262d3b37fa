# --- tmap_lib/config.py ---
import dataclasses
import logging
from typing import Callable, Dict, List, NamedTuple, Tuple

from .schema import RenderConfig

log = logging.getLogger("tmap.config")


def _parse_int(low: int, high: int) -> Callable[[str], int]:
    def parse(value: str) -> int:
        number = int(value, 10)
        if not low <= number <= high:
            raise ValueError(f"value {number} out of range [{low}, {high}]")
        return number

    return parse


def _parse_positive_float(value: str) -> float:
    number = float(value)
    if not number > 0:
        raise ValueError(f"value {number} must be positive")
    return number


_parse_byte = _parse_int(0, 255)


class _Option(NamedTuple):
    field: str
    parse: Callable[[str], object]


# Map file key -> RenderConfig field and its parser.
OPTIONS: Dict[str, _Option] = {
    "TileSize": _Option("tile_size", _parse_int(1, 2**31 - 1)),
    "WallSize": _Option("wall_size", _parse_int(0, 2**31 - 1)),
    "WallTop": _Option("wall_top", _parse_byte),
    "WallBottom": _Option("wall_bottom", _parse_byte),
    "Shadow": _Option("shadow", _parse_byte),
    "ShadowDepth": _Option("shadow_depth", _parse_byte),
    "ShadowWidth": _Option("shadow_width", _parse_positive_float),
    "Light": _Option("light", _parse_byte),
    "LightAngle": _Option("light_angle", _parse_int(-(2**15), 2**15 - 1)),
    "Output": _Option("output", str),
}


def parse_map_text(text: str) -> Tuple[RenderConfig, List[str]]:
    """
    Splits a map file into render options and raw map lines.

    Any line containing a colon is read as 'Key: value'. Unknown keys and
    values that fail to parse are logged and skipped, so the option keeps
    its default (or the last valid value seen). Every other line, blank
    ones included, is returned untouched as part of the map.
    """
    values = {}
    lines = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if ":" not in line:
            lines.append(line)
            continue

        key, raw = line.split(":", 1)
        option = OPTIONS.get(key)
        if option is None:
            log.warning("Line %d: '%s' is not a valid option", lineno, key)
            continue
        raw = raw.strip()
        try:
            values[option.field] = option.parse(raw)
        except ValueError as e:
            log.warning("Line %d: bad value %r for %s: %s", lineno, raw, key, e)
            continue
        log.debug("%s = %r", key, values[option.field])

    config = dataclasses.replace(RenderConfig(), **values)
    log.info("Read %d option(s) and %d map line(s).", len(values), len(lines))
    return config, lines


def read_map_file(path: str) -> Tuple[RenderConfig, List[str]]:
    """Reads a map file from disk. OSError propagates to the caller."""
    log.info("Reading map file '%s'...", path)
    with open(path, "r", encoding="utf-8") as f:
        return parse_map_text(f.read())
