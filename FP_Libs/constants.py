"""
Constants and configuration values for Fairplay.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the library.
"""

# Pixel layout
CHANNEL_COUNT = 4
RGB_CHANNELS = 3
ALPHA_INDEX = 3
MAX_CHANNEL_VALUE = 255

# Histogram
HISTOGRAM_BUCKETS = 32
HISTOGRAM_BUCKET_WIDTH = 256 // HISTOGRAM_BUCKETS

# Modifier parameter ranges
U8_MIN = 0
U8_MAX = 255
CHANNEL_WEIGHT_MIN = 0
CHANNEL_WEIGHT_MAX = 200
WINDOW_SIZE_MIN = 3
WINDOW_SIZE_MAX = 25
WINDOW_SIZE_STEP = 2

# Modifier defaults
DEFAULT_GRAYSCALE_WEIGHTS = (72, 149, 34)
DEFAULT_THRESHOLD = 128
DEFAULT_CHANNEL_WEIGHT = 100
DEFAULT_LIGHTNESS_EXPONENT = 127
DEFAULT_WINDOW_SIZE = 3

# Kernel tuning
LIGHTNESS_EXPONENT_SCALE = 127.5
CHANNEL_WEIGHT_SCALE = 100.0
GAUSSIAN_SIGMA_DIVISOR = 6.0

# Image files
DEFAULT_SAVE_FILENAME = "edited.png"
DEFAULT_OUTPUT_FORMAT = "PNG"
SUPPORTED_OPEN_EXTENSIONS = {".png", ".jpg"}

# Recomputation
RECOMPUTE_MAX_WORKERS = 2
RECOMPUTE_THREAD_PREFIX = "fairplay-recompute"
