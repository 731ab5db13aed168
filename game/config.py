"""Play-field dimensions, pipeline constants, and control presets.

All sizes are in pixels of the live frame. Hue follows OpenCV's 8-bit
convention (0-180); saturation and value are 0-255.
"""

# Play field (the live frame surface)
FIELD_WIDTH = 640
FIELD_HEIGHT = 480

# Ball starts near the top-left corner, moving down-right
BALL_START_X = 100
BALL_START_Y = 100
BALL_START_DX = 5
BALL_START_DY = 5
BALL_RADIUS = 15

# Color segmentation
BLUR_SIZE = 7  # box blur applied before the HSV conversion
HUE_MAX = 180
CHANNEL_MAX = 255

# Morphological cleanup
# Erode with a small element, dilate with a large one, so a fragmented
# object comes back as one region.
ERODE_KERNEL = 12
DILATE_KERNEL = 24
MORPH_ITERATIONS = 2

# Tick driver
TICK_PERIOD = 0.033  # ~30 frames/sec
STOP_TIMEOUT = 0.033  # bounded wait for the in-flight tick on stop
DEFAULT_DEVICE = 0
MIRROR_FRAME = True  # flip horizontally so the player moves like a mirror

# Drawing colors (BGR)
OUTLINE_COLOR = (250, 0, 0)
CROSSHAIR_COLOR = (0, 255, 0)
LABEL_COLOR = (255, 0, 0)
BALL_COLOR = (255, 0, 255)

# Crosshair geometry
CROSSHAIR_RADIUS = 20
CROSSHAIR_ARM = 25
LINE_THICKNESS = 2

# Preview surfaces
PREVIEW_WIDTH = 205
PREVIEW_HEIGHT = 154

# Slider presets, defaults tuned for a yellow/orange object under room light
SLIDER_PRESETS = {
    "hue_start": {"label": "Hue min", "min": 0, "max": HUE_MAX, "default": 20},
    "hue_stop": {"label": "Hue max", "min": 0, "max": HUE_MAX, "default": 50},
    "saturation_start": {"label": "Sat min", "min": 0, "max": CHANNEL_MAX, "default": 60},
    "saturation_stop": {"label": "Sat max", "min": 0, "max": CHANNEL_MAX, "default": 200},
    "value_start": {"label": "Val min", "min": 0, "max": CHANNEL_MAX, "default": 50},
    "value_stop": {"label": "Val max", "min": 0, "max": CHANNEL_MAX, "default": 255},
}

SPEED_PRESET = {"label": "Speed", "min": 1, "max": 50, "default": 5}
