# --- tmap_lib/rendering/constants.py ---
# Shared constants for the rendering package to avoid circular imports.

FLOOR = " "
SOLID = "#"
DIAGONALS = "\\/"
WEDGES = "><v^"
KNOWN_SYMBOLS = FLOOR + SOLID + DIAGONALS + WEDGES

# Surface angles in degrees. North is 360, not 0, because 0 means "unset".
NO_ANGLE = 0
FACING_LEFT = 90
FACING_UP = 180
FACING_RIGHT = 270
FACING_DOWN = 360

# Distance flood
SOURCE_DIST = 0
MAX_DIST = 254
UNREACHED = 255
GUARD = 3  # Pixels within this distance of an edge do not propagate

OPAQUE = 255
