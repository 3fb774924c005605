"""
Easel registry: the fixed catalog of standard easel slots.

Slots are loaded once from ``config.EASEL_SIZES`` and kept sorted by area,
so the first slot that contains a sheet is also the smallest one.  This
module is Qt-free.
"""

import logging
from dataclasses import dataclass

from easel_border_tool.config import EASEL_SIZES, EPSILON
from easel_border_tool.models import Dimensions, orient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EaselSlot:
    """One standard easel opening (landscape, inches)."""
    label: str
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class EaselFit:
    """Outcome of ``resolve_easel``.

    ``easel_size`` is oriented to match the paper on the easel.
    """
    easel_size: Dimensions
    is_non_standard_paper_size: bool
    label: str


EASEL_SLOTS: tuple[EaselSlot, ...] = tuple(sorted(
    (EaselSlot(e["label"], float(e["width"]), float(e["height"])) for e in EASEL_SIZES),
    key=lambda slot: slot.area,
))

_LARGEST_SLOT = max(EASEL_SLOTS, key=lambda slot: slot.area)
MAX_EASEL_DIMENSION = max(max(slot.width, slot.height) for slot in EASEL_SLOTS)


# =============================================================================
# Matching helpers
# =============================================================================
def _close(a: float, b: float) -> bool:
    return abs(a - b) < EPSILON


def _matches(slot_w: float, slot_h: float, width: float, height: float) -> bool:
    """True if the slot equals the size in either axis order."""
    return (
        (_close(slot_w, width) and _close(slot_h, height))
        or (_close(slot_w, height) and _close(slot_h, width))
    )


def is_standard_paper(width: float, height: float) -> bool:
    """True if the (un-oriented) sheet exactly matches a catalog slot."""
    return any(_matches(s.width, s.height, width, height) for s in EASEL_SLOTS)


def easel_label(size: Dimensions) -> str:
    """Catalog label for a slot size in either orientation, else ``"WxH"``."""
    for slot in EASEL_SLOTS:
        if _matches(slot.width, slot.height, size.width, size.height):
            return slot.label
    return f"{size.width:g}x{size.height:g}"


# =============================================================================
# Resolution
# =============================================================================
def resolve_easel(paper_width: float, paper_height: float, is_landscape: bool) -> EaselFit:
    """
    Find the smallest standard easel slot that holds the sheet.

    Slots are tried in their stored landscape layout first, then rotated,
    so the returned size is the slot as the sheet sits in it.  An exact
    match collapses to the paper's own oriented size.  Sheets no slot can
    hold (or sheets without area) use their own size as the nominal slot
    and are flagged non-standard, which yields a zero centring shift.
    """
    paper = orient(paper_width, paper_height, is_landscape)
    non_standard = not is_standard_paper(paper_width, paper_height)

    if paper.width <= 0 or paper.height <= 0:
        return EaselFit(paper, True, easel_label(paper))

    for slot in EASEL_SLOTS:
        if slot.width >= paper.width and slot.height >= paper.height:
            size = Dimensions(slot.width, slot.height)
        elif slot.height >= paper.width and slot.width >= paper.height:
            size = Dimensions(slot.height, slot.width)
        else:
            continue

        if _close(size.width, paper.width) and _close(size.height, paper.height):
            size = paper
        return EaselFit(size, non_standard, slot.label)

    logger.debug("No standard easel holds %gx%g paper", paper.width, paper.height)
    return EaselFit(paper, True, easel_label(paper))


def paper_size_warning(width: float, height: float, is_custom: bool) -> str | None:
    """Warn when a custom sheet has a side longer than any easel side."""
    if not is_custom:
        return None
    if width > MAX_EASEL_DIMENSION or height > MAX_EASEL_DIMENSION:
        return (
            f"Custom paper ({width:g}x{height:g}) exceeds largest standard easel "
            f"({_LARGEST_SLOT.label})."
        )
    return None
