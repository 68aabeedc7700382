from __future__ import annotations

"""Game configuration constants for Flappy Bird."""

import os
from pathlib import Path

from .utils import scale_color

# Window
WINDOW_WIDTH = 480
WINDOW_HEIGHT = 640
MIN_WINDOW_WIDTH = 320
MIN_WINDOW_HEIGHT = 360
FPS = 60
STEP_SECONDS = 1.0 / FPS  # one simulation tick
MAX_STEPS_PER_FRAME = 5

# Bird physics (per tick)
BIRD_X = 50
BIRD_START_Y = 150
BIRD_RADIUS = 15
GRAVITY = 0.25  # px/tick^2
FLAP_IMPULSE = -4.5  # px/tick

# Idle bobbing on the start screen
BOB_PERIOD_MS = 300.0
BOB_AMPLITUDE = 10.0

# Obstacles
PIPE_WIDTH = 50
PIPE_GAP = 150  # vertical gap between top and bottom segment
PIPE_FREQUENCY = 120  # ticks between new obstacles
MIN_PIPE_HEIGHT = 50
PIPE_CAP_HEIGHT = 20
PIPE_CAP_OVERHANG = 2

# World speed
INITIAL_SPEED = 3.0  # px/tick
SPEED_INCREMENT = 0.2
SPEED_STEP_SCORE = 5  # every Nth point speeds the world up

# Clouds
CLOUD_FREQUENCY = 100  # ticks between new clouds
CLOUD_SPAWN_JITTER = 200.0
CLOUD_CULL_X = -100.0

# Palette
COL_SKY_TOP = (78, 192, 202)
COL_SKY_BOTTOM = (178, 230, 236)
BIRD_COLOR = (255, 235, 59)
BIRD_WING = (251, 192, 45)
BIRD_OUTLINE = (0, 0, 0)
EYE_COLOR = (255, 255, 255)
PUPIL_COLOR = (0, 0, 0)
PIPE_COLOR = (76, 175, 80)
PIPE_BORDER = scale_color(PIPE_COLOR, 0.65)
CLOUD_COLOR = (255, 255, 255, 153)
TEXT_COLOR = (255, 255, 255)
TEXT_SHADOW = (40, 40, 40)
PANEL_COLOR = (0, 0, 0, 140)
BUTTON_COLOR = (255, 152, 0)
BUTTON_HOVER = scale_color(BUTTON_COLOR, 1.25)

# High score persistence
HIGH_SCORE_KEY = "flappyHighScore"
HIGH_SCORE_FILE = Path(
    os.environ.get("FLAPPY_BIRD_HIGHSCORE_FILE", Path.home() / ".flappy_bird_highscore.json")
)

# Logging
LOG_LEVEL = os.environ.get("FLAPPY_BIRD_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
