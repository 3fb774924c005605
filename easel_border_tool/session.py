"""
Calculator session: the state behind one border-calculator form.

``CalculatorSession`` holds the user's selections, turns typed text into
numbers, and carries the last valid minimum border from one calculation
to the next.  Each window owns its own session, so independent
calculators never share state.  This module is Qt-free.
"""

import logging
import math
import re

from easel_border_tool.config import (
    CUSTOM_KEY, DEFAULT_CUSTOM_PAPER_HEIGHT, DEFAULT_CUSTOM_PAPER_WIDTH,
    DEFAULT_CUSTOM_RATIO_HEIGHT, DEFAULT_CUSTOM_RATIO_WIDTH, DEFAULT_MIN_BORDER,
    DEFAULT_PAPER_KEY, DEFAULT_RATIO_KEY,
)
from easel_border_tool.models import (
    AspectRatio, BorderCalculation, BorderInputs, Dimensions, OrientationState,
    PaperSize, default_orientation, orient,
)
from easel_border_tool.optimizer import find_optimal_min_border
from easel_border_tool.presets import PAPER_KEYS, RATIO_KEYS, PresetSettings
from easel_border_tool.solver import compute_borders, resolve_paper, resolve_ratio

logger = logging.getLogger(__name__)

# Digits on both sides of an optional decimal point, e.g. "0.5" but not "0."
_COMPLETE_NUMBER = re.compile(r"^-?\d+(?:\.\d+)?$")


def try_number(value) -> float | None:
    """
    Parse a complete numeric literal.

    In-progress input such as ``""``, ``"-"`` or ``"0."`` returns ``None``
    so the caller can keep the previous value while the user types.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not _COMPLETE_NUMBER.match(text):
        return None
    number = float(text)
    return number if math.isfinite(number) else None


class CalculatorSession:
    """Mutable form state for one calculator; every result is recomputed from scratch."""

    def __init__(self):
        self.reset()

    def reset(self):
        """Restore every input to its default."""
        self.paper_key = DEFAULT_PAPER_KEY
        self.ratio_key = DEFAULT_RATIO_KEY
        self.custom_paper = Dimensions(DEFAULT_CUSTOM_PAPER_WIDTH, DEFAULT_CUSTOM_PAPER_HEIGHT)
        self.custom_ratio = Dimensions(DEFAULT_CUSTOM_RATIO_WIDTH, DEFAULT_CUSTOM_RATIO_HEIGHT)
        self.min_border = DEFAULT_MIN_BORDER
        self.last_valid_min_border = DEFAULT_MIN_BORDER
        self.offset_enabled = False
        self.ignore_min_border = False
        self.horizontal_offset = 0.0
        self.vertical_offset = 0.0
        self.show_blades = False
        self.orientation = default_orientation(is_custom=False)
        self.calculation: BorderCalculation | None = None

    # --- Selections ---

    def set_paper_size(self, key: str):
        """Select a paper size; orientation resets to the size's default."""
        if key not in PAPER_KEYS:
            raise ValueError(f"Unknown paper size: {key!r}")
        self.paper_key = key
        self.orientation = default_orientation(is_custom=key == CUSTOM_KEY)

    def set_aspect_ratio(self, key: str):
        """Select an aspect ratio; the ratio flip resets."""
        if key not in RATIO_KEYS:
            raise ValueError(f"Unknown aspect ratio: {key!r}")
        self.ratio_key = key
        self.orientation = OrientationState(self.orientation.is_landscape, False)

    def set_custom_paper(self, width=None, height=None):
        """Update custom paper dimensions; only complete positive numbers are kept."""
        self.custom_paper = Dimensions(
            self._positive_or(width, self.custom_paper.width),
            self._positive_or(height, self.custom_paper.height),
        )

    def set_custom_ratio(self, width=None, height=None):
        """Update the custom ratio; only complete positive numbers are kept."""
        self.custom_ratio = Dimensions(
            self._positive_or(width, self.custom_ratio.width),
            self._positive_or(height, self.custom_ratio.height),
        )

    @staticmethod
    def _positive_or(value, current: float) -> float:
        number = try_number(value)
        return number if number is not None and number > 0 else current

    # --- Numeric fields ---

    def set_min_border(self, value) -> bool:
        """
        Set the requested minimum border.

        Returns False (and keeps the previous request) for incomplete input.
        Out-of-range values are accepted here and rejected by the solver.
        """
        number = try_number(value)
        if number is None:
            return False
        self.min_border = number
        return True

    def set_offsets(self, horizontal=None, vertical=None):
        """Update the requested offsets; incomplete input is ignored."""
        h = try_number(horizontal)
        v = try_number(vertical)
        if h is not None:
            self.horizontal_offset = h
        if v is not None:
            self.vertical_offset = v

    # --- Toggles ---

    def set_landscape(self, landscape: bool):
        self.orientation = OrientationState(bool(landscape), self.orientation.is_ratio_flipped)

    def set_ratio_flipped(self, flipped: bool):
        self.orientation = OrientationState(self.orientation.is_landscape, bool(flipped))

    def set_offset_enabled(self, enabled: bool):
        self.offset_enabled = bool(enabled)

    def set_ignore_min_border(self, ignore: bool):
        self.ignore_min_border = bool(ignore)

    def set_show_blades(self, show: bool):
        self.show_blades = bool(show)

    # --- Calculation ---

    def inputs(self) -> BorderInputs:
        """Snapshot the current selections as solver input."""
        paper = self.custom_paper if self.paper_key == CUSTOM_KEY else PaperSize(self.paper_key)
        ratio = self.custom_ratio if self.ratio_key == CUSTOM_KEY else AspectRatio(self.ratio_key)
        return BorderInputs(
            paper=paper,
            ratio=ratio,
            min_border=self.min_border,
            offset_enabled=self.offset_enabled,
            ignore_min_border=self.ignore_min_border,
            horizontal_offset=self.horizontal_offset,
            vertical_offset=self.vertical_offset,
            orientation=self.orientation,
        )

    def calculate(self) -> BorderCalculation:
        """Run the solver and carry its last valid border forward."""
        self.calculation, self.last_valid_min_border = compute_borders(
            self.inputs(), self.last_valid_min_border,
        )
        return self.calculation

    def apply_optimal_border(self) -> float:
        """
        Replace the minimum border with the nearest quarter-inch friendly one.

        The search starts from the border the solver actually used, so an
        invalid request starts from the last valid value.
        """
        inputs = self.inputs()
        paper, _ = resolve_paper(inputs.paper)
        ratio = resolve_ratio(inputs.ratio)
        oriented_paper = orient(paper.width, paper.height, self.orientation.is_landscape)
        oriented_ratio = ratio.swapped() if self.orientation.is_ratio_flipped else ratio

        start = self.calculate().min_border_used
        optimal = find_optimal_min_border(
            oriented_paper.width, oriented_paper.height,
            oriented_ratio.width, oriented_ratio.height,
            start,
        )
        logger.info("Minimum border optimised from %g to %g", start, optimal)
        self.min_border = optimal
        self.calculate()
        return optimal

    # --- Presets ---

    def to_settings(self) -> PresetSettings:
        return PresetSettings(
            aspect_ratio=self.ratio_key,
            paper_size=self.paper_key,
            custom_aspect_width=self.custom_ratio.width,
            custom_aspect_height=self.custom_ratio.height,
            custom_paper_width=self.custom_paper.width,
            custom_paper_height=self.custom_paper.height,
            min_border=self.min_border,
            enable_offset=self.offset_enabled,
            ignore_min_border=self.ignore_min_border,
            horizontal_offset=self.horizontal_offset,
            vertical_offset=self.vertical_offset,
            show_blades=self.show_blades,
            is_landscape=self.orientation.is_landscape,
            is_ratio_flipped=self.orientation.is_ratio_flipped,
        )

    def apply_settings(self, settings: PresetSettings):
        """Load *settings*, including their explicit orientation."""
        self.set_paper_size(settings.paper_size)
        self.set_aspect_ratio(settings.aspect_ratio)
        self.set_custom_paper(settings.custom_paper_width, settings.custom_paper_height)
        self.set_custom_ratio(settings.custom_aspect_width, settings.custom_aspect_height)
        self.min_border = settings.min_border
        self.offset_enabled = settings.enable_offset
        self.ignore_min_border = settings.ignore_min_border
        self.horizontal_offset = settings.horizontal_offset
        self.vertical_offset = settings.vertical_offset
        self.show_blades = settings.show_blades
        self.orientation = OrientationState(settings.is_landscape, settings.is_ratio_flipped)
