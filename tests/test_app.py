import logging

import pytest

pytest.importorskip("PyQt6.QtWidgets")

from easel_border_tool.app import log_level_from_env  # noqa: E402


@pytest.mark.parametrize("value,expected", [
    ("DEBUG", logging.DEBUG),
    ("info", logging.INFO),
    (" warning ", logging.WARNING),
    ("WARN", logging.WARNING),
    ("error", logging.ERROR),
])
def test_known_level_names(value, expected):
    assert log_level_from_env(value) == expected


@pytest.mark.parametrize("value", ["verbose", "", "5", "Level 5"])
def test_unknown_level_names(value):
    assert log_level_from_env(value) is None
