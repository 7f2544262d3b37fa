# --- tmap.py ---
import argparse
import dataclasses
import logging
import os
import sys

from tmap_lib import config as map_config
from tmap_lib.debug import grid_to_ascii, save_intermediate_images
from tmap_lib.errors import TmapError
from tmap_lib.grid import normalize_lines
from tmap_lib.log_utils import setup_logging
from tmap_lib.rendering.renderer import MapRenderer
from tmap_lib.writer import write_png

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_FAILURE = 2


class _ArgumentParser(argparse.ArgumentParser):
    """Reports usage errors with exit code 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def get_cli_args(argv=None):
    """Configures and parses command-line arguments."""
    p = _ArgumentParser(
        description="Renders an ASCII tile map to a shaded PNG overlay."
    )
    p.add_argument("config", help="Path to the map file (options and tiles).")
    p.add_argument(
        "-o", "--output", help="Output PNG path (overrides the map file's Output)."
    )
    # Logging arguments
    g_log = p.add_argument_group("Logging & Output")
    g_log.add_argument(
        "-v", "--verbose", action="store_true", help="Enable INFO logging."
    )
    g_log.add_argument(
        "--color-logs", action="store_true", help="Enable colored logging."
    )
    g_log.add_argument(
        "--log-file", metavar="FILE", help="Redirect log output to a file."
    )
    g_log.add_argument(
        "--ascii-debug",
        action="store_true",
        help="Log the normalized tile grid for debugging.",
    )
    g_log.add_argument(
        "--save-intermediate",
        metavar="DIR",
        help="Save mask, angle and distance images to a directory.",
    )
    g_log.add_argument(
        "-d",
        "--debug",
        nargs="?",
        const="all",
        dest="debug_topics",
        metavar="TOPICS",
        help="Enable DEBUG logging (all,main,config,grid,classify,flood,render).",
    )
    return p.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point for the tmap CLI."""
    args = get_cli_args(argv)
    log_level = logging.INFO if args.verbose else logging.WARNING
    if args.debug_topics:
        log_level = logging.DEBUG

    setup_logging(log_level, args.color_logs, args.debug_topics, args.log_file)
    log = logging.getLogger("tmap.main")

    log.info("--- TMAP CLI Initialized ---")
    log.debug("Arguments received: %s", vars(args))

    try:
        render_config, lines = map_config.read_map_file(args.config)
    except OSError as e:
        log.critical("Could not read map file: %s", e)
        return EXIT_FAILURE
    except UnicodeDecodeError as e:
        log.critical("Map file '%s' is not valid UTF-8: %s", args.config, e)
        return EXIT_FAILURE
    if args.output:
        render_config = dataclasses.replace(render_config, output=args.output)

    grid = normalize_lines(lines)
    if args.ascii_debug:
        log.info("--- ASCII Debug Output ---")
        log.info("\n%s", grid_to_ascii(grid), extra={"raw": True})
        log.info("--- End ASCII Debug Output ---")

    try:
        result = MapRenderer(render_config).render(grid)
        if args.save_intermediate:
            os.makedirs(args.save_intermediate, exist_ok=True)
            base_name = os.path.splitext(os.path.basename(args.config))[0]
            save_intermediate_images(result, args.save_intermediate, base_name)
        write_png(result.raster, render_config.output)
    except TmapError as e:
        log.critical("%s", e)
        return EXIT_FAILURE
    except OSError as e:
        log.critical("Could not create intermediate image directory: %s", e)
        return EXIT_FAILURE

    log.info("--- Processing complete. ---")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
