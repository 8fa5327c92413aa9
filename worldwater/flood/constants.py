"""
Flood surface compositing constants.
"""

# Height band (meters) over which the flood edge fades from full to none;
# hides contour stepping from terrain level-of-detail quantization.
EDGE_SOFTNESS = 0.35

# Minimum mask value reported as flooded
FLOOD_EPSILON = 0.001

# Fade animation: distance from target at which alpha snaps and stops
ALPHA_SNAP_THRESHOLD = 0.005

# Comparison band
COMPARISON_OPACITY = 0.5

# Wet-mask values above this are pre-existing open water
WATER_MASK_THRESHOLD = 0.5

# Color intent for the renderer (RGB, 0-1). Amber stays visible against
# blue ocean; the comparison band is a deeper red-orange.
FLOOD_COLOR: tuple[float, float, float] = (1.0, 0.65, 0.0)
COMPARISON_COLOR: tuple[float, float, float] = (1.0, 0.3, 0.1)

# EGM96 15-minute grid (WW15MGH.DAC)
GEOID_ROWS = 721
GEOID_COLS = 1440
GEOID_MIN = -107.0
GEOID_MAX = 86.0
GEOID_RANGE = GEOID_MAX - GEOID_MIN
