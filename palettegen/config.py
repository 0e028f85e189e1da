from pathlib import Path

# Project roots
ROOT = Path(__file__).resolve().parents[1]
EXAMPLES_DIR = ROOT / "app" / "examples"
OUTPUTS_DIR = ROOT / "data" / "outputs"

# Working buffer
# Longer side of the image the engine actually scans, in pixels.
MAX_DIMENSION = 800

# Color cubes (initial palette)
# Bands per channel: 16 -> 16^3 = 4096 cubes, each 16 levels wide.
CUBE_BANDS = 16
CUBE_COUNT_THRESHOLD = 10  # cubes with fewer pixels are ignored

# Palette defaults
DEFAULT_K = 5
DEFAULT_BASE_COLOR = (0, 0, 0)
DEFAULT_BASE_POSITION = (0, 0)

# Refinement
DEFAULT_SAMPLING_RATE = 0.125  # Bernoulli keep-probability per pixel per iteration
MAX_ITERATIONS = 20

# Rendering
MARKER_RADIUS = 10

# JPEG/PNG default save params
DEFAULT_JPEG_QUALITY = 92

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
