"""
Border solver: one full easel-border calculation.

``compute_borders`` turns a ``BorderInputs`` into a ``BorderCalculation``.
It never raises for bad numbers.  Out-of-range input is replaced by a safe
value and reported through ``BorderCalculation.warnings``, so a UI can
recompute on every keystroke.

The only value carried between calculations is the last valid minimum
border.  It is passed in and handed back explicitly; this module holds no
state of its own.

Sign conventions (shared with the blade-reading maths):

* A positive horizontal offset moves the image right: the left border
  shrinks and the right border grows.
* The top border is ``gap + vertical_offset`` and the bottom border is
  ``gap - vertical_offset``.
* Blade readings are ``print - 2 * shift`` on the near (left/top) blade and
  ``print + 2 * shift`` on the far (right/bottom) blade, where ``shift`` is
  the paper-centring shift plus the clamped offset.
"""

import logging
import math
from dataclasses import dataclass

from easel_border_tool.config import BLADE_MARKING_MIN
from easel_border_tool.easels import paper_size_warning, resolve_easel
from easel_border_tool.models import (
    AspectRatio, BorderCalculation, BorderInputs, BorderWarnings, Dimensions,
    PaperSize, calculate_blade_thickness, fit_rectangle, orient,
)

logger = logging.getLogger(__name__)

OFFSET_WARNING_PAPER_EDGES = "Offset values have been adjusted to keep print within paper edges"
OFFSET_WARNING_MIN_BORDER = (
    "Offset values have been adjusted to maintain minimum borders and stay within paper bounds"
)
BLADE_WARNING_NEGATIVE = "Negative blade reading: set the absolute value using the opposite blade."
BLADE_WARNING_SMALL = f"Most easels lack markings below {BLADE_MARKING_MIN:g} inches."


# =============================================================================
# Input resolution
# =============================================================================
def _finite(value, default: float = 0.0) -> float:
    """Coerce *value* to a finite float, else *default*."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def _custom_dimensions(dims: Dimensions) -> Dimensions:
    """Custom sizes: anything missing, non-finite or negative becomes 0."""
    return Dimensions(max(_finite(dims.width), 0.0), max(_finite(dims.height), 0.0))


def resolve_paper(selection) -> tuple[Dimensions, bool]:
    """Return ``(paper, is_custom)`` for a paper selection."""
    if isinstance(selection, PaperSize):
        return selection.dimensions, False
    if isinstance(selection, Dimensions):
        return _custom_dimensions(selection), True
    logger.warning("Unknown paper selection %r, using zero size", selection)
    return Dimensions(), True


def resolve_ratio(selection) -> Dimensions:
    """Return the ratio pair for an aspect-ratio selection."""
    if isinstance(selection, AspectRatio):
        return selection.dimensions
    if isinstance(selection, Dimensions):
        return _custom_dimensions(selection)
    logger.warning("Unknown aspect ratio selection %r, using zero ratio", selection)
    return Dimensions()


# =============================================================================
# Calculation steps
# =============================================================================
def validate_min_border(
    min_border: float,
    paper: Dimensions,
    last_valid: float,
) -> tuple[float, float, str | None]:
    """
    Check a requested minimum border against the oriented paper.

    Returns ``(border_to_use, new_last_valid, warning)``.  A border of half
    the short side or more (on paper that has an area) or a negative border
    is rejected in favour of *last_valid*.
    """
    max_border = min(paper.width, paper.height) / 2
    if not math.isfinite(min_border) or (max_border > 0 and min_border >= max_border):
        return last_valid, last_valid, f"Minimum border too large. Using last valid: {last_valid:g}"
    if min_border < 0:
        return last_valid, last_valid, f"Minimum border cannot be negative. Using last valid: {last_valid:g}"
    return min_border, min_border, None


@dataclass(frozen=True)
class OffsetClamp:
    """Offsets after clamping, plus the centred half-gaps they shift."""
    horizontal: float
    vertical: float
    half_width: float
    half_height: float
    warning: str | None = None


def clamp_offsets(
    paper: Dimensions,
    print_width: float,
    print_height: float,
    min_border: float,
    horizontal: float,
    vertical: float,
    ignore_min_border: bool,
) -> OffsetClamp:
    """Clamp offsets so the print stays on paper (and, unless ignored, inside the minimum border)."""
    half_w = (paper.width - print_width) / 2
    half_h = (paper.height - print_height) / 2
    if ignore_min_border:
        max_h, max_v = half_w, half_h
    else:
        max_h = min(half_w - min_border, half_w)
        max_v = min(half_h - min_border, half_h)
    # A fallback border wider than the sheet leaves no room to move at all
    max_h = max(max_h, 0.0)
    max_v = max(max_v, 0.0)

    h = max(-max_h, min(max_h, horizontal))
    v = max(-max_v, min(max_v, vertical))

    warning = None
    if h != horizontal or v != vertical:
        warning = OFFSET_WARNING_PAPER_EDGES if ignore_min_border else OFFSET_WARNING_MIN_BORDER
    return OffsetClamp(h, v, half_w, half_h, warning)


def borders_from_gaps(
    half_width: float,
    half_height: float,
    horizontal: float,
    vertical: float,
) -> tuple[float, float, float, float]:
    """Return ``(left, right, top, bottom)`` borders."""
    return (
        half_width - horizontal,
        half_width + horizontal,
        half_height + vertical,
        half_height - vertical,
    )


def blade_readings(
    print_width: float,
    print_height: float,
    shift_x: float,
    shift_y: float,
) -> tuple[float, float, float, float]:
    """Return ``(left, right, top, bottom)`` blade scale readings."""
    return (
        print_width - 2 * shift_x,
        print_width + 2 * shift_x,
        print_height - 2 * shift_y,
        print_height + 2 * shift_y,
    )


def blade_warning(readings) -> str | None:
    """Advice for readings a typical easel scale cannot show directly."""
    messages = []
    if any(r < 0 for r in readings):
        messages.append(BLADE_WARNING_NEGATIVE)
    if any(abs(r) < BLADE_MARKING_MIN for r in readings):
        messages.append(BLADE_WARNING_SMALL)
    return "\n".join(messages) if messages else None


# =============================================================================
# Entry point
# =============================================================================
def compute_borders(
    inputs: BorderInputs,
    last_valid_min_border: float,
) -> tuple[BorderCalculation, float]:
    """
    Compute print size, borders and blade readings for *inputs*.

    Returns the calculation and the minimum border to carry into the next
    call (the requested one if it was accepted, otherwise
    *last_valid_min_border* unchanged).
    """
    paper, is_custom = resolve_paper(inputs.paper)
    ratio = resolve_ratio(inputs.ratio)
    orientation = inputs.orientation

    oriented_paper = orient(paper.width, paper.height, orientation.is_landscape)
    oriented_ratio = ratio.swapped() if orientation.is_ratio_flipped else ratio

    min_border, last_valid, min_border_warning = validate_min_border(
        _finite(inputs.min_border, math.inf), oriented_paper, last_valid_min_border,
    )

    print_w, print_h = fit_rectangle(
        oriented_paper.width - 2 * min_border,
        oriented_paper.height - 2 * min_border,
        oriented_ratio.width,
        oriented_ratio.height,
    )

    raw_h = _finite(inputs.horizontal_offset) if inputs.offset_enabled else 0.0
    raw_v = _finite(inputs.vertical_offset) if inputs.offset_enabled else 0.0
    offsets = clamp_offsets(
        oriented_paper, print_w, print_h, min_border,
        raw_h, raw_v, inputs.ignore_min_border,
    )
    left, right, top, bottom = borders_from_gaps(
        offsets.half_width, offsets.half_height, offsets.horizontal, offsets.vertical,
    )

    # The sheet sits centred in its slot, so a non-standard sheet shifts the blades
    fit = resolve_easel(paper.width, paper.height, orientation.is_landscape)
    if fit.is_non_standard_paper_size:
        paper_shift_x = (oriented_paper.width - fit.easel_size.width) / 2
        paper_shift_y = (oriented_paper.height - fit.easel_size.height) / 2
    else:
        paper_shift_x = paper_shift_y = 0.0

    readings = blade_readings(
        print_w, print_h,
        paper_shift_x + offsets.horizontal,
        paper_shift_y + offsets.vertical,
    )

    warnings = BorderWarnings(
        offset=offsets.warning,
        blade=blade_warning(readings),
        min_border=min_border_warning,
        paper_size=paper_size_warning(paper.width, paper.height, is_custom),
    )

    calculation = BorderCalculation(
        print_width=print_w,
        print_height=print_h,
        left_border=left,
        right_border=right,
        top_border=top,
        bottom_border=bottom,
        left_blade_reading=readings[0],
        right_blade_reading=readings[1],
        top_blade_reading=readings[2],
        bottom_blade_reading=readings[3],
        # Oversized custom paper is reported through its warning instead
        is_non_standard_paper_size=fit.is_non_standard_paper_size and warnings.paper_size is None,
        easel_size=fit.easel_size,
        blade_thickness_px=calculate_blade_thickness(oriented_paper.width, oriented_paper.height),
        warnings=warnings,
        paper_width=oriented_paper.width,
        paper_height=oriented_paper.height,
        easel_label=fit.label,
        clamped_horizontal_offset=offsets.horizontal,
        clamped_vertical_offset=offsets.vertical,
        min_border_used=min_border,
    )

    logger.debug(
        "Borders for %gx%g paper, ratio %g:%g, border %g: print %.3fx%.3f, blades %s",
        oriented_paper.width, oriented_paper.height,
        oriented_ratio.width, oriented_ratio.height, min_border,
        print_w, print_h, ", ".join(f"{r:.2f}" for r in readings),
    )
    return calculation, last_valid
