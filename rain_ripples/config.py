"""
Tuning constants for the rain ripple field.
"""

# --- Wave Table Domain ---
X_MIN = -6.3
X_MAX = 6.3
Y_MIN = -6.3
Y_MAX = 6.3
T_MAX = 5.0  # Drops older than this read the last time bucket
RESOLUTION = 400  # Buckets per axis (400^3 float32 samples, ~256 MB)

# --- Wave Shape ---
WAVE_NUMBER = 15.0  # Spatial angular frequency (ring spacing)
WAVE_SPEED = 3.5  # Radial units per second
RING_FACTOR = 1.2  # Ring width = RING_FACTOR * WAVE_SPEED
WAVE_GAIN = 1.0

# --- Drops ---
DROP_TTL = 4.0  # Seconds a drop stays active
DROP_CADENCE = 0.35  # Minimum seconds between spawns

# --- Colour ---
DESATURATION = 0.5
TINT = 0.25
TINT_COLOR = (80, 160, 80)  # Green anchor blended in by TINT

# Component ramps: (zero amplitude, full amplitude)
CREST_RAMP = ((0, 180), (120, 240), (200, 255))  # Bright cyan-blue
TROUGH_RAMP = ((0, 0), (120, 30), (200, 80))  # Dark teal

# --- Sine Lookup ---
SINE_TABLE_SIZE = 3600  # 0.1 degree resolution

# --- Animation ---
FPS = 30
PIXEL_CHAR = "▀"  # Upper half block: fg = top row, bg = bottom row
