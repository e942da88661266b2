from __future__ import annotations

"""Hard limits that keep layouts from running away.

They are enforced on settings load/validation and inside the row planner.
"""

MAX_ROWS = 400
MIN_ROWS = 1
MAX_LAYERS = 16

# Below this the region is treated as empty (px).
MIN_SPAN_PX = 5.0
# Rows closer than this cannot carry a readable glyph (px).
MIN_ROW_PITCH_PX = 0.05

MIN_OCTAVES = 1
MAX_OCTAVES = 6

# Contrast exponent floor; |v| ** c needs c > 0 at v == 0.
MIN_CONTRAST = 0.05

MAX_MOTIF_LEN = 64
# Per-row glyph cap (repetitions * motif length).
MAX_GLYPHS_PER_ROW = 20_000

MIN_DPI = 24
MAX_DPI = 1200

MIN_FPS = 1
MAX_FPS = 60
