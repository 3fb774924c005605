"""
Data models and border-geometry primitives.

The dataclasses here are the value types shared by the solver, the
optimizer, the session layer and the UI.  Every ``BorderCalculation`` is
built fresh by ``solver.compute_borders``; nothing in this module keeps
state between calculations.

Paper and aspect-ratio selections are either a member of the closed
``PaperSize`` / ``AspectRatio`` enumerations or a custom ``Dimensions``.
"""

from dataclasses import dataclass, field
from enum import Enum

from easel_border_tool.config import (
    ASPECT_RATIOS, BASE_PAPER_AREA, BLADE_THICKNESS, DEFAULT_MIN_BORDER,
    EPSILON, MAX_BLADE_SCALE, PAPER_SIZES,
)


# =============================================================================
# Dimensions & orientation
# =============================================================================
@dataclass(frozen=True)
class Dimensions:
    """Orientation-free physical size in inches."""
    width: float = 0.0
    height: float = 0.0

    def swapped(self) -> "Dimensions":
        return Dimensions(self.height, self.width)

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class OrientationState:
    """Landscape swaps the paper; ratio flip swaps the aspect ratio."""
    is_landscape: bool = True
    is_ratio_flipped: bool = False


def default_orientation(is_custom: bool) -> OrientationState:
    """Orientation applied whenever the paper-size selection changes.

    Custom sizes start portrait, catalog sizes start landscape.
    """
    return OrientationState(is_landscape=not is_custom, is_ratio_flipped=False)


# =============================================================================
# Catalog enumerations
# =============================================================================
_PAPER_TABLE = {p["key"]: p for p in PAPER_SIZES}
_RATIO_TABLE = {r["key"]: r for r in ASPECT_RATIOS}


class PaperSize(Enum):
    """Standard paper sizes.  Values are the keys of ``config.PAPER_SIZES``."""
    SIZE_4X5 = "4x5"
    SIZE_4X6 = "4x6"
    SIZE_5X7 = "5x7"
    SIZE_8X10 = "8x10"
    SIZE_11X14 = "11x14"
    SIZE_16X20 = "16x20"
    SIZE_20X24 = "20x24"

    @property
    def label(self) -> str:
        return _PAPER_TABLE[self.value]["label"]

    @property
    def dimensions(self) -> Dimensions:
        entry = _PAPER_TABLE[self.value]
        return Dimensions(float(entry["width"]), float(entry["height"]))


class AspectRatio(Enum):
    """Common negative aspect ratios.  Values are the keys of ``config.ASPECT_RATIOS``."""
    RATIO_3_2 = "3/2"
    RATIO_65_24 = "65/24"
    RATIO_6_45 = "6/4.5"
    RATIO_1_1 = "1/1"
    RATIO_7_6 = "7/6"
    RATIO_8_6 = "8/6"
    RATIO_5_4 = "5/4"
    RATIO_7_5 = "7/5"
    RATIO_4_3 = "4/3"

    @property
    def label(self) -> str:
        return _RATIO_TABLE[self.value]["label"]

    @property
    def dimensions(self) -> Dimensions:
        entry = _RATIO_TABLE[self.value]
        return Dimensions(float(entry["width"]), float(entry["height"]))


PaperSelection = PaperSize | Dimensions
RatioSelection = AspectRatio | Dimensions


# =============================================================================
# Engine input / output
# =============================================================================
@dataclass(frozen=True)
class BorderInputs:
    """Everything the border solver needs for one calculation."""
    paper: PaperSelection = PaperSize.SIZE_8X10
    ratio: RatioSelection = AspectRatio.RATIO_3_2
    min_border: float = DEFAULT_MIN_BORDER
    offset_enabled: bool = False
    ignore_min_border: bool = False
    horizontal_offset: float = 0.0
    vertical_offset: float = 0.0
    orientation: OrientationState = field(default_factory=OrientationState)


@dataclass(frozen=True)
class BorderWarnings:
    """Advisory messages; ``None`` means the condition is clear."""
    offset: str | None = None
    blade: str | None = None
    min_border: str | None = None
    paper_size: str | None = None

    def messages(self) -> list[str]:
        return [m for m in (self.min_border, self.offset, self.blade, self.paper_size) if m]

    @property
    def has_any(self) -> bool:
        return bool(self.messages())


@dataclass(frozen=True)
class BorderCalculation:
    """
    Result of one border calculation.

    Paper dimensions are the *oriented* sheet, so
    ``print_width + left_border + right_border == paper_width`` and the
    same holds vertically.  Blade readings are what the user dials onto
    the easel scales; they only equal the print size when nothing shifts
    the print off-centre.
    """
    print_width: float
    print_height: float
    left_border: float
    right_border: float
    top_border: float
    bottom_border: float
    left_blade_reading: float
    right_blade_reading: float
    top_blade_reading: float
    bottom_blade_reading: float
    is_non_standard_paper_size: bool
    easel_size: Dimensions
    blade_thickness_px: int
    warnings: BorderWarnings
    paper_width: float = 0.0
    paper_height: float = 0.0
    easel_label: str = ""
    clamped_horizontal_offset: float = 0.0
    clamped_vertical_offset: float = 0.0
    min_border_used: float = 0.0

    # --- Preview layout helpers (percent of the oriented paper) ---

    def _pct(self, value: float, total: float) -> float:
        return (value / total) * 100 if total else 0.0

    @property
    def print_width_percent(self) -> float:
        return self._pct(self.print_width, self.paper_width)

    @property
    def print_height_percent(self) -> float:
        return self._pct(self.print_height, self.paper_height)

    @property
    def left_border_percent(self) -> float:
        return self._pct(self.left_border, self.paper_width)

    @property
    def right_border_percent(self) -> float:
        return self._pct(self.right_border, self.paper_width)

    @property
    def top_border_percent(self) -> float:
        return self._pct(self.top_border, self.paper_height)

    @property
    def bottom_border_percent(self) -> float:
        return self._pct(self.bottom_border, self.paper_height)

    @property
    def blade_readings(self) -> tuple[float, float, float, float]:
        """(left, right, top, bottom)"""
        return (
            self.left_blade_reading, self.right_blade_reading,
            self.top_blade_reading, self.bottom_blade_reading,
        )


# =============================================================================
# Geometry primitives
# =============================================================================
def orient(width: float, height: float, landscape: bool) -> Dimensions:
    """Return (width, height), swapped when *landscape* is set."""
    return Dimensions(height, width) if landscape else Dimensions(width, height)


def fit_rectangle(
    available_width: float,
    available_height: float,
    ratio_width: float,
    ratio_height: float,
) -> tuple[float, float]:
    """
    Largest rectangle of the given aspect ratio inside the available area.

    When the area is wider than the ratio the fit is height-limited,
    otherwise (ties included) it is width-limited.  Degenerate input
    (no area, or a non-positive ratio) yields ``(0.0, 0.0)``.
    """
    if available_width <= 0 or available_height <= 0 or ratio_width <= 0 or ratio_height <= 0:
        return 0.0, 0.0

    print_ratio = ratio_width / ratio_height
    if available_width / available_height > print_ratio:
        return available_height * print_ratio, available_height
    return available_width, available_width / print_ratio


def calculate_blade_thickness(paper_width: float, paper_height: float) -> int:
    """Preview blade thickness in pixels, thicker for smaller sheets (capped at 2x)."""
    if paper_width <= 0 or paper_height <= 0:
        return BLADE_THICKNESS
    area = paper_width * paper_height
    scale = min(BASE_PAPER_AREA / max(area, EPSILON), MAX_BLADE_SCALE)
    return int(round(BLADE_THICKNESS * scale))
