"""Colours and sizes for debug drawings."""

# Space around the drawing and between lines drawn side by side
DEBUG_MARGIN = 40
DEBUG_LINE_GAP = 80

BACKGROUND_COLOR = "#ffffff"
DEFAULT_LINE_COLOR = "#0070c0"
MARKER_FILL = "#ffffff"
LABEL_COLOR = "#222222"
LABEL_BOX_COLOR = "#d81b60"
SAFE_AREA_COLOR = "#999999"
SAFE_AREA_DASH = "4,3"
DEBUG_STROKE_WIDTH = 1
