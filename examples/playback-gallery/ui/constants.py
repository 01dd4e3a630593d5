"""Layout constants and color definitions."""

# Timing
FPS = 60
UPDATE_HZ = 30
DURATION = 1.5  # seconds per cycle

# Layout dimensions
LANE_COUNT = 5
LANE_H = 90
LABEL_W = 190
TRACK_W = 520
STATUS_H = 56

SCREEN_W = LABEL_W + TRACK_W
SCREEN_H = LANE_H * LANE_COUNT + STATUS_H

TRACK_PAD = 30

# Colors
BG_COLOR = (20, 20, 30)
LANE_BG = (30, 30, 45)
LANE_BORDER = (50, 50, 70)
TRACK_RAIL = (60, 60, 80)
STATUS_BG = (35, 35, 50)
TEXT_COLOR = (200, 200, 210)
TEXT_DIM = (120, 120, 140)
IDLE_COLOR = (90, 90, 110)

MODE_COLORS: dict[str, tuple[int, int, int]] = {
    "FORWARD": (0, 220, 220),
    "REVERSE": (255, 160, 40),
    "FORWARD_REVERSE": (60, 220, 80),
    "LOOP_FORWARD": (220, 80, 220),
    "LOOP_FORWARD_REVERSE": (240, 220, 90),
}
