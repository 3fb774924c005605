"""
Application constants and configuration.

The paper, aspect-ratio and easel catalogs are plain data lists; ``models``
and ``easels`` turn them into closed enumerations and lookup tables at
import time.  All remaining constants control the border engine, the
optimal-border search and preview rendering.

All dimensions are in inches.  Paper and ratio entries are stored portrait
(width <= height), easel slots landscape; orientation is applied by the
engine.
"""

# =============================================================================
# APP IDENTITY
# =============================================================================
APP_NAME = "easel-border-tool"

# =============================================================================
# CATALOGS
# =============================================================================
PAPER_SIZES = [
    {"key": "4x5", "label": "4x5", "width": 4, "height": 5},
    {"key": "4x6", "label": "4x6 (postcard)", "width": 4, "height": 6},
    {"key": "5x7", "label": "5x7", "width": 5, "height": 7},
    {"key": "8x10", "label": "8x10", "width": 8, "height": 10},
    {"key": "11x14", "label": "11x14", "width": 11, "height": 14},
    {"key": "16x20", "label": "16x20", "width": 16, "height": 20},
    {"key": "20x24", "label": "20x24", "width": 20, "height": 24},
]

ASPECT_RATIOS = [
    {"key": "3/2", "label": "3:2 (35mm standard frame, 6x9)", "width": 3, "height": 2},
    {"key": "65/24", "label": "65:24 (XPan Pano)", "width": 65, "height": 24},
    {"key": "6/4.5", "label": "6:4.5", "width": 6, "height": 4.5},
    {"key": "1/1", "label": "1:1 (Square/6x6)", "width": 1, "height": 1},
    {"key": "7/6", "label": "7:6 (6x7)", "width": 7, "height": 6},
    {"key": "8/6", "label": "8:6 (6x8)", "width": 8, "height": 6},
    {"key": "5/4", "label": "5:4 (4x5)", "width": 5, "height": 4},
    {"key": "7/5", "label": "7:5 (5x7)", "width": 7, "height": 5},
    {"key": "4/3", "label": "4:3", "width": 4, "height": 3},
]

# Standard easel slots, stored landscape (width >= height).  Order here is
# irrelevant; ``easels`` sorts by area.
EASEL_SIZES = [
    {"label": "5x7", "width": 7, "height": 5},
    {"label": "8x10", "width": 10, "height": 8},
    {"label": "11x14", "width": 14, "height": 11},
    {"label": "16x20", "width": 20, "height": 16},
    {"label": "20x24", "width": 24, "height": 20},
]

# Key used by selectors and share codes for the free-form variant
CUSTOM_KEY = "custom"

# =============================================================================
# DEFAULTS
# =============================================================================
DEFAULT_PAPER_KEY = "8x10"
DEFAULT_RATIO_KEY = "3/2"
DEFAULT_MIN_BORDER = 0.5
DEFAULT_CUSTOM_PAPER_WIDTH = 13.0
DEFAULT_CUSTOM_PAPER_HEIGHT = 10.0
DEFAULT_CUSTOM_RATIO_WIDTH = 2.0
DEFAULT_CUSTOM_RATIO_HEIGHT = 3.0

# =============================================================================
# ENGINE CONSTANTS
# =============================================================================
# Blade bar thickness in preview pixels for a 20x24 sheet
BLADE_THICKNESS = 24
BASE_PAPER_AREA = 20 * 24
MAX_BLADE_SCALE = 2

# Most easel blade rulers have no markings below this reading
BLADE_MARKING_MIN = 3.0

# Optimal-border search
SNAP_INCREMENT = 0.25
SEARCH_SPAN = 0.5
SEARCH_STEP = 0.01

EPSILON = 1e-9

# =============================================================================
# PREVIEW RENDERING
# =============================================================================
PREVIEW_MAX_PX = 400
PREVIEW_PADDING_PX = 16
PREVIEW_BACKGROUND = (30, 30, 30)
PREVIEW_PAPER_COLOR = (245, 245, 240)
PREVIEW_PAPER_OUTLINE = (120, 120, 120)
PREVIEW_PRINT_COLOR = (58, 110, 165)
PREVIEW_BLADE_COLOR = (20, 20, 20, 200)

# Output formats for preview export
PREVIEW_EXPORT_FORMATS = ["PNG", "JPEG"]
JPEG_QUALITY_DEFAULT = 95
