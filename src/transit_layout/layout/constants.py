"""Default values and heuristics for the label/marker layout engine."""

import math

# Layout configuration defaults
LINE_WIDTH = 10
CURVE_RADIUS = 50
MARKER_RADIUS = 6
MARKER_STROKE_WIDTH = 3
LABEL_FONT_SIZE = 30
LABEL_FONT_WEIGHT = 600
LABEL_FONT_WEIGHT_MIN = 100
LABEL_FONT_WEIGHT_MAX = 900

# Unitless line height (multiple of the font size) when none is configured
LINE_HEIGHT_EM = 1.2

# Character-width text estimate, in multiples of the font size
CHAR_WIDTH_EM = 0.6
ASCENT_EM = 0.8
DESCENT_EM = 0.2

# A square marker turned 45 degrees keeps this fraction of its size
DIAGONAL_SHRINK = math.sqrt(0.5)

DEFAULT_FONT_FAMILY = "sans-serif"
