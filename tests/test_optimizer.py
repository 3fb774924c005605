import pytest

from easel_border_tool import optimizer
from easel_border_tool.optimizer import find_optimal_min_border, score_border, snap_score


@pytest.mark.parametrize("value,expected", [
    (9.0, 0.0),
    (9.25, 0.0),
    (9.1, 0.1),
    (9.2, 0.05),
    (-0.1, 0.1),
])
def test_snap_score(value, expected):
    assert snap_score(value) == pytest.approx(expected)


def test_score_border_on_grid():
    assert score_border(10, 8, 3, 2, 0.5) == pytest.approx(0.0)


def test_score_border_without_area():
    assert score_border(10, 8, 3, 2, 4.0) is None


def test_already_optimal_border_is_kept():
    assert find_optimal_min_border(10, 8, 3, 2, 0.5) == 0.5


def test_nearby_border_snaps_to_grid():
    assert find_optimal_min_border(10, 8, 3, 2, 0.45) == 0.5


def test_result_is_idempotent():
    first = find_optimal_min_border(10, 8, 3, 2, 0.45)
    assert find_optimal_min_border(10, 8, 3, 2, first) == first


def test_result_within_search_window():
    result = find_optimal_min_border(14, 11, 65, 24, 1.3)
    assert 0.8 - 1e-9 <= result <= 1.8 + 1e-9


def test_result_never_worse_than_start():
    start = 0.83
    result = find_optimal_min_border(14, 11, 7, 6, start)
    assert score_border(14, 11, 7, 6, result) <= score_border(14, 11, 7, 6, start) + 1e-6


def test_invalid_ratio_returns_current():
    assert find_optimal_min_border(10, 8, 0, 2, 0.7) == 0.7


def test_result_rounded_to_hundredths():
    result = find_optimal_min_border(16, 20, 6, 4.5, 0.37)
    assert result == round(result, 2)


@pytest.mark.parametrize("tied_steps,expected", [
    ((-3, 3), 0.97),
    ((-20, 20), 0.8),
    ((-50, 50), 0.5),
    ((0, -7, 7), 1.0),
    ((12, -30), 1.12),
])
def test_equal_scores_keep_candidate_closest_to_current(monkeypatch, tied_steps, expected):
    current = 1.0

    def fake_score(paper_width, paper_height, ratio_width, ratio_height, border):
        step = round((border - current) / 0.01)
        return 0.0 if step in tied_steps else 1.0

    monkeypatch.setattr(optimizer, "score_border", fake_score)
    assert find_optimal_min_border(10, 8, 3, 2, current) == expected
