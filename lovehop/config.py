"""Tunables shared by the simulation core and its pygame front end."""

# ----------------------------- Config -----------------------------

TILE = 32
GRID_W = 15
GRID_H = 20
WINDOW_W, WINDOW_H = GRID_W * TILE, GRID_H * TILE  # 480 x 640
FPS = 60

# Frame delta cap (ms) so a stalled frame doesn't teleport hazards
MAX_DT_MS = 40

# Player movement cooldown (ms), shared by every scene with directional input
HOP_COOLDOWN_MS = 120

# Hazards advance by speed * TIME_SCALE grid units every frame
TIME_SCALE = 0.02

# Lane kinds
LANE_GRASS = "grass"
LANE_ROAD = "road"
LANE_WATER = "water"

# 7-row repeating section: 2-3 roads, grass, water up to the last row, grass
SECTION_ROWS = 7

# Death causes
CAUSE_CAR = "car"
CAUSE_WATER = "water"

# Difficulty
BASE_GAME_SPEED = 2.0
MAX_GAME_SPEED = 8.0
SPEED_STEP = 0.1
RAMP_START_ROW = -10
RAMP_EVERY_ROWS = 20

# Spawning (frame counted)
SPAWN_BASE_PERIOD = 60
SPAWN_SPEED_FACTOR = 5
MIN_SPAWN_PERIOD = 20
SPAWN_ROWS_ABOVE = 2
SPAWN_ROWS_BELOW = 4

VEHICLE_CHANCE = 0.2
LOG_CHANCE = 0.2
THREE_LANE_VEHICLE_FACTOR = 0.7
CHALLENGE_VEHICLE_CHANCE = 0.1
CHALLENGE_LOG_CHANCE = 0.25

VEHICLE_SPEED_RANGE = (1.0, 2.2)
FINAL_VEHICLE_SPEED_RANGE = (0.8, 1.8)
LOG_SPEED_RANGE = (0.8, 2.0)
FINAL_LOG_SPEED_RANGE = (0.6, 1.6)
LOG_LENGTH_RANGE = (2, 4)
FINAL_LOG_LENGTH_RANGE = (3, 4)

# Culling margins (grid columns past the screen edge)
VEHICLE_CULL_MARGIN = 3
LOG_CULL_MARGIN = 4

# Player hitbox is a bit smaller than a tile; logs get a forgiving buffer
PLAYER_WIDTH_TILES = 0.8
LOG_RIDE_LEFT_BUFFER = 0.3
LOG_RIDE_RIGHT_REACH = 0.8

# Camera
CAMERA_START_Y = -WINDOW_H * 0.3
CAMERA_LEAD = 0.7  # keep the player in the bottom third
CAMERA_LERP = 0.1

# Ingredients
PLACEMENT_ATTEMPTS = 100
RESPAWN_PERIOD_FRAMES = 120
RESPAWN_MIN_AHEAD = 10
RESPAWN_MAX_AHEAD = 35
STALE_SLOT_ROWS = 15
INITIAL_SPACING = 3
RESPAWN_SPACING = 2

# Goal zone
HOUSE_WIDTH = 5
HOUSE_AHEAD_ROWS = 12
WORLD_CAP_ROWS = 5

# Home interior (px, ms)
HOME_FADE_MIN_MS = 500
HOME_WALK_START_X = 50
HOME_WALK_SPEED = 0.1
HOME_APPROACH_SPEED = 0.05
HOME_HUG_GAP = 30
HOME_HEARTS_MS = 1000
HEART_SPAWN_MS = 500
SOUP_BUTTON_W, SOUP_BUTTON_H = 250, 80

# Tofu soup
STEAM_SPAWN_MS = 200
STEAM_PER_SPAWN = 3
SOUP_SHOW_MS = 10000

# Bonus mini-game
BONUS_SECONDS = 30
RING_SPAWN_MS = 2000
RING_THICKNESS = 15
RING_GROWTH = 0.2

# Toasts
TOAST_MS = 1600

# Colors
CAR_COLORS = [
    (255, 138, 138),
    (140, 255, 179),
    (138, 179, 255),
    (255, 255, 138),
    (255, 179, 138),
]
LOG_COLOR = (139, 69, 19)
