# Mosaic Style and Defaults

# Cell Colors (0-255 RGB)
COLOR_DEFAULT = (0, 0, 0)       # Unset cells
COLOR_GROUTING = (128, 128, 128)  # 1-pixel outline between cells

# Grid
DEFAULT_ROWS = 42
DEFAULT_COLUMNS = 42
DEFAULT_BLOCK_SIZE = 16
MIN_BLOCK_SIZE = 5

# 3D bevel
BEVEL_MIN_BRIGHTNESS = 0.2
BEVEL_MAX_BRIGHTNESS = 0.8
BEVEL_SHADE_STEP = 0.2

# Timing (seconds)
DRAW_THROTTLE = 0.001
OPEN_POLL_INTERVAL = 0.1
FRAME_RATE = 60

# Application
WINDOW_TITLE = "Mosaic"
