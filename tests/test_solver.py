from dataclasses import replace

import pytest

from easel_border_tool.models import (
    AspectRatio, BorderInputs, Dimensions, OrientationState, PaperSize,
)
from easel_border_tool.solver import (
    BLADE_WARNING_NEGATIVE, BLADE_WARNING_SMALL, OFFSET_WARNING_MIN_BORDER,
    OFFSET_WARNING_PAPER_EDGES, blade_warning, clamp_offsets, compute_borders,
    resolve_paper, validate_min_border,
)


def _calc(last_valid=0.5, **kwargs):
    return compute_borders(BorderInputs(**kwargs), last_valid)


class TestStandardCase:
    def test_8x10_landscape_3_2(self):
        calc, last_valid = _calc()
        assert (calc.paper_width, calc.paper_height) == (10, 8)
        assert calc.print_width == pytest.approx(9.0)
        assert calc.print_height == pytest.approx(6.0)
        assert calc.left_border == pytest.approx(0.5)
        assert calc.right_border == pytest.approx(0.5)
        assert calc.top_border == pytest.approx(1.0)
        assert calc.bottom_border == pytest.approx(1.0)
        assert calc.blade_readings == pytest.approx((9.0, 9.0, 6.0, 6.0))
        assert not calc.warnings.has_any
        assert calc.is_non_standard_paper_size is False
        assert calc.easel_size == Dimensions(10, 8)
        assert calc.easel_label == "8x10"
        assert last_valid == 0.5

    def test_ratio_flip(self):
        calc, _ = _calc(orientation=OrientationState(is_landscape=True, is_ratio_flipped=True))
        assert calc.print_width == pytest.approx(7 * 2 / 3)
        assert calc.print_height == pytest.approx(7.0)

    def test_portrait_swaps_axes(self):
        landscape, _ = _calc()
        portrait, _ = _calc(
            orientation=OrientationState(is_landscape=False, is_ratio_flipped=True),
        )
        assert portrait.print_width == pytest.approx(landscape.print_height)
        assert portrait.print_height == pytest.approx(landscape.print_width)
        assert portrait.left_border == pytest.approx(landscape.top_border)


class TestMinBorder:
    def test_too_large_falls_back(self):
        calc, last_valid = _calc(min_border="5.0")
        assert calc.min_border_used == 0.5
        assert calc.print_width == pytest.approx(9.0)
        assert calc.warnings.min_border == "Minimum border too large. Using last valid: 0.5"
        assert last_valid == 0.5

    def test_fallback_uses_supplied_last_valid(self):
        calc, last_valid = _calc(last_valid=0.75, min_border=4.0)
        assert calc.min_border_used == 0.75
        assert "0.75" in calc.warnings.min_border
        assert last_valid == 0.75

    def test_negative(self):
        calc, _ = _calc(min_border=-1)
        assert calc.warnings.min_border == "Minimum border cannot be negative. Using last valid: 0.5"

    def test_not_a_number(self):
        calc, _ = _calc(min_border=float("nan"))
        assert calc.warnings.min_border.startswith("Minimum border too large")

    def test_accepted_value_becomes_last_valid(self):
        calc, last_valid = _calc(min_border=1.0)
        assert calc.warnings.min_border is None
        assert last_valid == 1.0

    def test_paper_without_area_accepts_any_nonnegative(self):
        assert validate_min_border(3.0, Dimensions(0, 0), 0.5) == (3.0, 3.0, None)


class TestOffsets:
    def test_disabled_offsets_are_ignored(self):
        calc, _ = _calc(horizontal_offset=0.3, vertical_offset=0.3)
        assert calc.left_border == pytest.approx(calc.right_border)
        assert calc.warnings.offset is None

    def test_vertical_offset_moves_top_border(self):
        calc, _ = _calc(offset_enabled=True, vertical_offset=0.3)
        assert calc.top_border == pytest.approx(1.3)
        assert calc.bottom_border == pytest.approx(0.7)
        assert calc.top_blade_reading == pytest.approx(5.4)
        assert calc.bottom_blade_reading == pytest.approx(6.6)
        assert calc.warnings.offset is None

    def test_clamped_to_min_border(self):
        calc, _ = _calc(offset_enabled=True, horizontal_offset=2.0)
        assert calc.clamped_horizontal_offset == 0
        assert calc.warnings.offset == OFFSET_WARNING_MIN_BORDER

    def test_square_on_4x6_ignoring_min_border(self):
        calc, _ = _calc(
            paper=PaperSize.SIZE_4X6,
            ratio=AspectRatio.RATIO_1_1,
            min_border=0.1,
            offset_enabled=True,
            ignore_min_border=True,
            horizontal_offset=-1.5,
        )
        assert calc.print_width == pytest.approx(3.8)
        assert calc.print_height == pytest.approx(3.8)
        assert calc.clamped_horizontal_offset == pytest.approx(-1.1)
        assert calc.left_border == pytest.approx(2.2)
        assert calc.right_border == pytest.approx(0.0)
        # 6x4 sheet centred in the 7x5 slot shifts both axes by -0.5
        assert calc.is_non_standard_paper_size is True
        assert calc.easel_size == Dimensions(7, 5)
        assert calc.blade_readings == pytest.approx((7.0, 0.6, 4.8, 2.8))
        assert calc.warnings.offset == OFFSET_WARNING_PAPER_EDGES
        assert calc.warnings.blade == BLADE_WARNING_SMALL

    @pytest.mark.parametrize("ignore_min_border,limit", [(False, 1.5), (True, 2.0)])
    @pytest.mark.parametrize("axis", ["horizontal", "vertical"])
    def test_clamp_is_monotonic(self, ignore_min_border, limit, axis):
        requested = [step * 0.25 for step in range(-16, 17)]
        clamped = []
        for offset in requested:
            h, v = (offset, 0.0) if axis == "horizontal" else (0.0, offset)
            clamp = clamp_offsets(Dimensions(10, 8), 6.0, 4.0, 0.5, h, v, ignore_min_border)
            clamped.append(getattr(clamp, axis))

        assert clamped == sorted(clamped)
        for offset, value in zip(requested, clamped):
            if abs(offset) >= limit:
                assert value == pytest.approx(limit if offset > 0 else -limit)
            else:
                assert value == pytest.approx(offset)

    @pytest.mark.parametrize("offset", [-5.0, -0.7, -0.2, 0.0, 0.2, 0.7, 5.0])
    def test_clamp_stays_inside_limits(self, offset):
        clamp = clamp_offsets(Dimensions(10, 8), 6.0, 4.0, 0.5, offset, offset, False)
        assert abs(clamp.horizontal) <= 1.5 + 1e-9
        assert abs(clamp.vertical) <= 1.5 + 1e-9
        assert (clamp.warning is None) == (abs(offset) <= 1.5)

    def test_clamp_floor_when_border_exceeds_gap(self):
        clamp = clamp_offsets(Dimensions(10, 8), 9.0, 6.0, 0.75, 0.3, -0.3, False)
        assert clamp.horizontal == 0
        assert clamp.warning == OFFSET_WARNING_MIN_BORDER


class TestNonStandardPaper:
    def test_custom_paper_shifts_blades(self):
        calc, _ = _calc(
            paper=Dimensions(9, 12),
            ratio=AspectRatio.RATIO_1_1,
            min_border=3.5,
            offset_enabled=True,
            ignore_min_border=True,
            horizontal_offset=-1.0,
            orientation=OrientationState(is_landscape=False),
        )
        assert calc.is_non_standard_paper_size is True
        assert calc.easel_size == Dimensions(11, 14)
        assert calc.print_width == pytest.approx(2.0)
        assert calc.blade_readings == pytest.approx((6.0, -2.0, 4.0, 0.0))
        assert calc.warnings.blade == BLADE_WARNING_NEGATIVE + "\n" + BLADE_WARNING_SMALL
        assert calc.warnings.offset is None
        assert calc.warnings.paper_size is None

    def test_oversized_custom_paper(self):
        calc, _ = _calc(paper=Dimensions(30, 40))
        assert calc.warnings.paper_size == (
            "Custom paper (30x40) exceeds largest standard easel (20x24)."
        )
        # The warning replaces the non-standard flag
        assert calc.is_non_standard_paper_size is False
        assert calc.easel_size == Dimensions(40, 30)
        assert calc.blade_readings == pytest.approx(
            (calc.print_width, calc.print_width, calc.print_height, calc.print_height)
        )

    def test_custom_paper_beyond_slots_within_longest_side(self):
        calc, _ = _calc(paper=Dimensions(22, 22))
        assert calc.warnings.paper_size is None
        assert calc.is_non_standard_paper_size is True
        assert calc.easel_size == Dimensions(22, 22)

    def test_4x5_paper_in_7x5_slot(self):
        calc, _ = _calc(paper=PaperSize.SIZE_4X5)
        assert calc.easel_size == Dimensions(7, 5)
        assert calc.print_width == pytest.approx(4.0)
        assert calc.print_height == pytest.approx(8 / 3)
        assert calc.blade_readings == pytest.approx((6.0, 2.0, 8 / 3 + 1, 8 / 3 - 1))

    def test_zero_custom_paper(self):
        calc, _ = _calc(paper=Dimensions(0, 0))
        assert (calc.print_width, calc.print_height) == (0.0, 0.0)

    def test_bad_custom_values_become_zero(self):
        paper, is_custom = resolve_paper(Dimensions(-3, float("inf")))
        assert paper == Dimensions(0, 0)
        assert is_custom


@pytest.mark.parametrize("paper", list(PaperSize) + [Dimensions(9, 12), Dimensions(13, 10)])
@pytest.mark.parametrize("ratio", [AspectRatio.RATIO_3_2, AspectRatio.RATIO_65_24, AspectRatio.RATIO_1_1])
def test_borders_and_print_fill_the_paper(paper, ratio):
    calc, _ = _calc(
        paper=paper, ratio=ratio, min_border=0.25,
        offset_enabled=True, horizontal_offset=0.4, vertical_offset=-0.6,
    )
    assert calc.print_width + calc.left_border + calc.right_border == pytest.approx(calc.paper_width)
    assert calc.print_height + calc.top_border + calc.bottom_border == pytest.approx(calc.paper_height)
    assert min(calc.left_border, calc.right_border, calc.top_border, calc.bottom_border) >= 0.25 - 1e-9
    r = ratio.dimensions
    assert calc.print_width / calc.print_height == pytest.approx(r.width / r.height)


def test_blade_warning_none_for_large_readings():
    assert blade_warning((9, 9, 6, 6)) is None
    assert blade_warning((9, 9, 6, 2.5)) == BLADE_WARNING_SMALL


@pytest.mark.parametrize("flag", ["is_landscape", "is_ratio_flipped"])
@pytest.mark.parametrize("paper", [PaperSize.SIZE_8X10, PaperSize.SIZE_4X6, Dimensions(9, 12)])
def test_toggling_orientation_twice_restores_result(flag, paper):
    start = OrientationState(is_landscape=True, is_ratio_flipped=False)
    toggled = replace(start, **{flag: not getattr(start, flag)})
    restored = replace(toggled, **{flag: getattr(start, flag)})
    kwargs = dict(
        paper=paper, min_border=0.6,
        offset_enabled=True, horizontal_offset=0.3, vertical_offset=-0.2,
    )

    before, _ = _calc(orientation=start, **kwargs)
    flipped, _ = _calc(orientation=toggled, **kwargs)
    after, _ = _calc(orientation=restored, **kwargs)
    assert flipped != before
    assert after == before
