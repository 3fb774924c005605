"""
Application entry point and dark-theme stylesheet.

Usage:
    python -m easel_border_tool.app
    easel-border-tool          (after pip install)

Set ``EASEL_BORDER_TOOL_LOG=DEBUG`` to see every calculation logged.
"""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from easel_border_tool.main_window import MainWindow

logger = logging.getLogger(__name__)

DARK_STYLESHEET = """
    QMainWindow { background: #2b2b2b; }
    QWidget { background: #2b2b2b; color: #ddd; font-size: 10pt; }
    QGroupBox { border: 1px solid #555; border-radius: 4px; margin-top: 8px; padding-top: 12px; font-weight: bold; }
    QGroupBox::title { subcontrol-origin: margin; left: 8px; padding: 0 4px; }
    QLineEdit, QComboBox { background: #1e1e1e; border: 1px solid #444; border-radius: 3px; padding: 3px; }
    QLineEdit:disabled { color: #666; }
    QPushButton { background: #3a3a3a; border: 1px solid #555; border-radius: 4px; padding: 6px 12px; }
    QPushButton:hover { background: #4a4a4a; }
    QPushButton:pressed { background: #2a2a2a; }
    QPushButton:disabled { color: #666; }
    QToolBar { background: #333; border-bottom: 1px solid #444; spacing: 4px; padding: 4px; }
    QStatusBar { background: #333; border-top: 1px solid #444; }
"""


def log_level_from_env(value: str) -> int | None:
    """Numeric level for a level name such as ``"debug"``, or None if unknown."""
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else None


def main():
    raw_level = os.environ.get("EASEL_BORDER_TOOL_LOG", "WARNING")
    level = log_level_from_env(raw_level)
    logging.basicConfig(
        level=logging.WARNING if level is None else level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if level is None:
        logger.warning("Unknown log level %r in EASEL_BORDER_TOOL_LOG, using WARNING", raw_level)

    app = QApplication(sys.argv)
    app.setStyleSheet(DARK_STYLESHEET)

    window = MainWindow()
    window.show()

    try:
        exit_code = app.exec()
    except KeyboardInterrupt:
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
