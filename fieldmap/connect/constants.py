"""
Shared constants for the connection editor.

These values are used by both Python (controller, proximity, projector)
and JavaScript (overlay). Keep them in sync!
Config and environment may override the tolerances, see fieldmap.config.
"""

# Distance in pixels from a free dot's centre that shows the "drag to connect" hint
HINT_RADIUS = 40

# Distance in pixels from a target dot's centre that counts as hovering it while dragging
HOVER_RADIUS = 24

# Extra pixels around each target dot's box for the tolerant drop pass
DROP_HIT_MARGIN = 12

# A release closer than this to the press point is a click, not a drag
CLICK_SLOP = 4

# Dot size in pixels (w-4 / h-4)
DOT_SIZE = 16

# Edge styling
EDGE_COLOR = '#3b82f6'
EDGE_WIDTH = 2
EDGE_DASH = '5,5'

# Invisible stroke added around each curve to make it easier to hover
EDGE_HIT_PADDING = 16
