"""
Optimal minimum-border search.

Blade scales are easiest to set on quarter-inch marks.  The search nudges
the minimum border by up to half an inch either way, in 0.01" steps, and
keeps the border whose centred blade positions land closest to the grid.
Offsets and easel shift are not considered.

This module is Qt-free.
"""

import logging

from easel_border_tool.config import EPSILON, SEARCH_SPAN, SEARCH_STEP, SNAP_INCREMENT
from easel_border_tool.models import fit_rectangle

logger = logging.getLogger(__name__)

_STEPS = int(round(SEARCH_SPAN / SEARCH_STEP))


def snap_score(value: float) -> float:
    """Distance from *value* to the nearest multiple of the snap increment."""
    r = value % SNAP_INCREMENT
    return min(r, SNAP_INCREMENT - r)


def score_border(
    paper_width: float,
    paper_height: float,
    ratio_width: float,
    ratio_height: float,
    border: float,
) -> float | None:
    """
    Total snap distance of the four centred blade positions for *border*.

    Returns ``None`` when the border leaves no printable area.
    """
    available_w = paper_width - 2 * border
    available_h = paper_height - 2 * border
    if available_w <= 0 or available_h <= 0:
        return None

    print_w, print_h = fit_rectangle(available_w, available_h, ratio_width, ratio_height)
    gap_w = (paper_width - print_w) / 2
    gap_h = (paper_height - print_h) / 2
    positions = (print_w - gap_w, print_w + gap_w, print_h - gap_h, print_h + gap_h)
    return sum(snap_score(p) for p in positions)


def _deltas():
    """Search offsets ordered by distance from zero: 0, -0.01, +0.01, -0.02, ..."""
    yield 0
    for step in range(1, _STEPS + 1):
        yield -step
        yield step


def find_optimal_min_border(
    paper_width: float,
    paper_height: float,
    ratio_width: float,
    ratio_height: float,
    current_min_border: float,
) -> float:
    """
    Best minimum border within ``current_min_border +/- 0.5``.

    Paper and ratio must already be oriented.  Ties keep the candidate
    closest to the current border.  The result is rounded to 2 decimals.
    """
    if ratio_height <= 0 or ratio_width <= 0:
        return current_min_border

    best = current_min_border
    best_score = float("inf")
    for step in _deltas():
        border = current_min_border + step * SEARCH_STEP
        if border <= 0:
            continue
        score = score_border(paper_width, paper_height, ratio_width, ratio_height, border)
        if score is None:
            continue
        if score < best_score - EPSILON:
            best, best_score = border, score

    result = round(best, 2)
    logger.debug(
        "Optimal border for %gx%g paper, ratio %g:%g from %g: %g (score %.4f)",
        paper_width, paper_height, ratio_width, ratio_height,
        current_min_border, result, best_score,
    )
    return result
