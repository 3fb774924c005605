"""
Main application window.

Collects paper, ratio, border and offset input, runs the session's
calculation on every change, and shows the blade readings, warnings and a
scaled easel preview.  Share codes and preview export live in the toolbar.
"""

import logging
from pathlib import Path

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QFormLayout,
    QPushButton, QLabel, QFileDialog, QSplitter, QGroupBox, QMessageBox,
    QStatusBar, QToolBar, QCheckBox, QComboBox, QLineEdit, QApplication,
    QScrollArea, QInputDialog, QFrame,
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction

from easel_border_tool.config import ASPECT_RATIOS, CUSTOM_KEY, PAPER_SIZES, PREVIEW_EXPORT_FORMATS
from easel_border_tool.models import BorderCalculation
from easel_border_tool.presets import decode_preset, encode_preset
from easel_border_tool.preview_widget import PreviewWidget
from easel_border_tool.render import save_preview
from easel_border_tool.session import CalculatorSession

logger = logging.getLogger(__name__)

_STYLE_WARNING = "color: #e0a030;"


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("Easel Border Calculator")
        self.setMinimumSize(800, 520)

        # Screen-aware startup size, clamped to 80% of screen
        preferred_w, preferred_h = 1100, 720
        screen = QApplication.primaryScreen()
        if screen is not None:
            avail = screen.availableGeometry()
            preferred_w = min(preferred_w, int(avail.width() * 0.8))
            preferred_h = min(preferred_h, int(avail.height() * 0.8))
        self.resize(preferred_w, preferred_h)

        self._session = CalculatorSession()
        self._syncing = False

        self._build_ui()
        self._sync_controls()
        self._recalculate()

    # =========================================================================
    # UI construction
    # =========================================================================

    def _build_ui(self):
        self._build_toolbar()

        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QHBoxLayout(central)
        main_layout.setContentsMargins(4, 4, 4, 4)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        main_layout.addWidget(splitter)

        splitter.addWidget(self._build_controls_panel())

        # Center panel: preview above results
        center_panel = QWidget()
        center_layout = QVBoxLayout(center_panel)
        center_layout.setContentsMargins(0, 0, 0, 0)
        self._preview = PreviewWidget()
        center_layout.addWidget(self._preview, stretch=1)
        center_layout.addWidget(self._build_results_group())
        splitter.addWidget(center_panel)
        splitter.setSizes([300, 800])

        self._status = QStatusBar()
        self.setStatusBar(self._status)

    def _build_toolbar(self):
        toolbar = QToolBar("Main")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        act_reset = QAction("↺ Reset", self)
        act_reset.triggered.connect(self._reset)
        toolbar.addAction(act_reset)

        toolbar.addSeparator()

        act_copy = QAction("🔗 Copy Share Code", self)
        act_copy.triggered.connect(self._copy_share_code)
        toolbar.addAction(act_copy)

        act_load = QAction("📥 Load Share Code…", self)
        act_load.triggered.connect(self._load_share_code)
        toolbar.addAction(act_load)

        toolbar.addSeparator()

        act_export = QAction("💾 Export Preview…", self)
        act_export.triggered.connect(self._export_preview)
        toolbar.addAction(act_export)

    def _build_controls_panel(self) -> QWidget:
        inner = QWidget()
        inner_layout = QVBoxLayout(inner)
        inner_layout.setContentsMargins(0, 0, 0, 0)

        inner_layout.addWidget(self._build_paper_group())
        inner_layout.addWidget(self._build_ratio_group())
        inner_layout.addWidget(self._build_border_group())
        inner_layout.addWidget(self._build_offset_group())

        self._chk_blades = QCheckBox("Show easel blades")
        self._chk_blades.toggled.connect(self._on_show_blades_toggled)
        inner_layout.addWidget(self._chk_blades)

        inner_layout.addStretch()

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(inner)
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        scroll.setFrameShape(QFrame.Shape.NoFrame)
        return scroll

    def _build_paper_group(self) -> QGroupBox:
        group = QGroupBox("Paper Size")
        layout = QFormLayout(group)

        self._paper_combo = QComboBox()
        for p in PAPER_SIZES:
            self._paper_combo.addItem(p["label"], p["key"])
        self._paper_combo.addItem("Custom", CUSTOM_KEY)
        self._paper_combo.currentIndexChanged.connect(self._on_paper_changed)
        layout.addRow("Paper:", self._paper_combo)

        self._paper_w = QLineEdit()
        self._paper_h = QLineEdit()
        self._paper_w.textEdited.connect(self._on_custom_paper_edited)
        self._paper_h.textEdited.connect(self._on_custom_paper_edited)
        self._custom_paper_row = QWidget()
        row = QHBoxLayout(self._custom_paper_row)
        row.setContentsMargins(0, 0, 0, 0)
        row.addWidget(self._paper_w)
        row.addWidget(QLabel("×"))
        row.addWidget(self._paper_h)
        layout.addRow("Custom (in):", self._custom_paper_row)

        self._chk_landscape = QCheckBox("Landscape")
        self._chk_landscape.toggled.connect(self._on_landscape_toggled)
        layout.addRow(self._chk_landscape)
        return group

    def _build_ratio_group(self) -> QGroupBox:
        group = QGroupBox("Aspect Ratio")
        layout = QFormLayout(group)

        self._ratio_combo = QComboBox()
        for r in ASPECT_RATIOS:
            self._ratio_combo.addItem(r["label"], r["key"])
        self._ratio_combo.addItem("Custom", CUSTOM_KEY)
        self._ratio_combo.currentIndexChanged.connect(self._on_ratio_changed)
        layout.addRow("Ratio:", self._ratio_combo)

        self._ratio_w = QLineEdit()
        self._ratio_h = QLineEdit()
        self._ratio_w.textEdited.connect(self._on_custom_ratio_edited)
        self._ratio_h.textEdited.connect(self._on_custom_ratio_edited)
        self._custom_ratio_row = QWidget()
        row = QHBoxLayout(self._custom_ratio_row)
        row.setContentsMargins(0, 0, 0, 0)
        row.addWidget(self._ratio_w)
        row.addWidget(QLabel(":"))
        row.addWidget(self._ratio_h)
        layout.addRow("Custom:", self._custom_ratio_row)

        self._chk_flip = QCheckBox("Flip ratio")
        self._chk_flip.toggled.connect(self._on_flip_toggled)
        layout.addRow(self._chk_flip)
        return group

    def _build_border_group(self) -> QGroupBox:
        group = QGroupBox("Minimum Border")
        layout = QHBoxLayout(group)

        self._min_border = QLineEdit()
        self._min_border.setToolTip("Smallest border on every side, in inches")
        self._min_border.textEdited.connect(self._on_min_border_edited)
        layout.addWidget(self._min_border, stretch=1)

        btn_optimal = QPushButton("🎯 Optimize")
        btn_optimal.setToolTip("Nudge the border so blade readings land on ¼\" marks")
        btn_optimal.clicked.connect(self._apply_optimal_border)
        layout.addWidget(btn_optimal)
        return group

    def _build_offset_group(self) -> QGroupBox:
        group = QGroupBox("Offsets")
        layout = QFormLayout(group)

        self._chk_offset = QCheckBox("Enable offsets")
        self._chk_offset.toggled.connect(self._on_offset_toggled)
        layout.addRow(self._chk_offset)

        self._chk_ignore = QCheckBox("Ignore minimum border")
        self._chk_ignore.setToolTip("Allow the image to move up to the paper edge")
        self._chk_ignore.toggled.connect(self._on_ignore_toggled)
        layout.addRow(self._chk_ignore)

        self._h_offset = QLineEdit()
        self._v_offset = QLineEdit()
        self._h_offset.textEdited.connect(self._on_offsets_edited)
        self._v_offset.textEdited.connect(self._on_offsets_edited)
        layout.addRow("Horizontal:", self._h_offset)
        layout.addRow("Vertical:", self._v_offset)
        return group

    def _build_results_group(self) -> QGroupBox:
        group = QGroupBox("Blade Readings")
        layout = QVBoxLayout(group)

        self._results_label = QLabel("—")
        self._results_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        layout.addWidget(self._results_label)

        self._warning_label = QLabel("")
        self._warning_label.setStyleSheet(_STYLE_WARNING)
        self._warning_label.setWordWrap(True)
        layout.addWidget(self._warning_label)
        return group

    # =========================================================================
    # Session ↔ controls
    # =========================================================================

    def _sync_controls(self):
        """Push session state into the controls without re-triggering handlers."""
        s = self._session
        self._syncing = True
        try:
            self._paper_combo.setCurrentIndex(self._paper_combo.findData(s.paper_key))
            self._ratio_combo.setCurrentIndex(self._ratio_combo.findData(s.ratio_key))
            self._paper_w.setText(f"{s.custom_paper.width:g}")
            self._paper_h.setText(f"{s.custom_paper.height:g}")
            self._ratio_w.setText(f"{s.custom_ratio.width:g}")
            self._ratio_h.setText(f"{s.custom_ratio.height:g}")
            self._chk_landscape.setChecked(s.orientation.is_landscape)
            self._chk_flip.setChecked(s.orientation.is_ratio_flipped)
            self._min_border.setText(f"{s.min_border:g}")
            self._chk_offset.setChecked(s.offset_enabled)
            self._chk_ignore.setChecked(s.ignore_min_border)
            self._h_offset.setText(f"{s.horizontal_offset:g}")
            self._v_offset.setText(f"{s.vertical_offset:g}")
            self._chk_blades.setChecked(s.show_blades)
        finally:
            self._syncing = False
        self._update_enabled_states()

    def _update_enabled_states(self):
        s = self._session
        self._custom_paper_row.setEnabled(s.paper_key == CUSTOM_KEY)
        self._custom_ratio_row.setEnabled(s.ratio_key == CUSTOM_KEY)
        self._chk_ignore.setEnabled(s.offset_enabled)
        self._h_offset.setEnabled(s.offset_enabled)
        self._v_offset.setEnabled(s.offset_enabled)

    def _recalculate(self):
        calc = self._session.calculate()
        self._preview.set_calculation(calc, show_blades=self._session.show_blades)
        self._update_results(calc)

    def _update_results(self, calc: BorderCalculation):
        easel = calc.easel_size
        lines = [
            f"Image: {calc.print_width:.2f} × {calc.print_height:.2f} in",
            f"Borders: L {calc.left_border:.2f}  R {calc.right_border:.2f}  "
            f"T {calc.top_border:.2f}  B {calc.bottom_border:.2f}",
            f"Blades: L {calc.left_blade_reading:.2f}  R {calc.right_blade_reading:.2f}  "
            f"T {calc.top_blade_reading:.2f}  B {calc.bottom_blade_reading:.2f}",
            f"Easel: {calc.easel_label} ({easel.width:g} × {easel.height:g})",
        ]
        if calc.is_non_standard_paper_size:
            lines.append("Non-standard paper: centre it in the easel slot")
        self._results_label.setText("\n".join(lines))
        self._warning_label.setText("\n".join(calc.warnings.messages()))

    # =========================================================================
    # Handlers
    # =========================================================================

    def _on_paper_changed(self, index: int):
        if self._syncing or index < 0:
            return
        self._session.set_paper_size(self._paper_combo.itemData(index))
        self._sync_controls()
        self._recalculate()

    def _on_ratio_changed(self, index: int):
        if self._syncing or index < 0:
            return
        self._session.set_aspect_ratio(self._ratio_combo.itemData(index))
        self._sync_controls()
        self._recalculate()

    def _on_custom_paper_edited(self, *args):
        self._session.set_custom_paper(self._paper_w.text(), self._paper_h.text())
        self._recalculate()

    def _on_custom_ratio_edited(self, *args):
        self._session.set_custom_ratio(self._ratio_w.text(), self._ratio_h.text())
        self._recalculate()

    def _on_landscape_toggled(self, checked: bool):
        if self._syncing:
            return
        self._session.set_landscape(checked)
        self._recalculate()

    def _on_flip_toggled(self, checked: bool):
        if self._syncing:
            return
        self._session.set_ratio_flipped(checked)
        self._recalculate()

    def _on_min_border_edited(self, text: str):
        if self._session.set_min_border(text):
            self._recalculate()

    def _on_offset_toggled(self, checked: bool):
        if self._syncing:
            return
        self._session.set_offset_enabled(checked)
        self._update_enabled_states()
        self._recalculate()

    def _on_ignore_toggled(self, checked: bool):
        if self._syncing:
            return
        self._session.set_ignore_min_border(checked)
        self._recalculate()

    def _on_offsets_edited(self, *args):
        self._session.set_offsets(self._h_offset.text(), self._v_offset.text())
        self._recalculate()

    def _on_show_blades_toggled(self, checked: bool):
        if self._syncing:
            return
        self._session.set_show_blades(checked)
        self._recalculate()

    def _apply_optimal_border(self):
        optimal = self._session.apply_optimal_border()
        self._sync_controls()
        self._recalculate()
        self._status.showMessage(f"Minimum border set to {optimal:g} in", 5000)

    def _reset(self):
        self._session.reset()
        self._sync_controls()
        self._recalculate()
        self._status.showMessage("Settings reset to defaults.", 5000)

    # =========================================================================
    # Share codes & export
    # =========================================================================

    def _copy_share_code(self):
        try:
            code = encode_preset(self._session.to_settings())
        except ValueError as exc:
            QMessageBox.warning(self, "Share Code", str(exc))
            return
        QApplication.clipboard().setText(code)
        self._status.showMessage(f"Share code copied: {code}", 8000)

    def _load_share_code(self):
        code, ok = QInputDialog.getText(self, "Load Share Code", "Share code:")
        if not ok or not code.strip():
            return
        settings = decode_preset(code)
        if settings is None:
            QMessageBox.warning(self, "Load Share Code", "That share code could not be read.")
            return
        self._session.apply_settings(settings)
        self._sync_controls()
        self._recalculate()
        self._status.showMessage("Share code loaded.", 5000)

    def _export_preview(self):
        img = self._preview.current_image()
        if img is None:
            return
        filters = ";;".join(f"{fmt} (*.{'jpg' if fmt == 'JPEG' else fmt.lower()})"
                            for fmt in PREVIEW_EXPORT_FORMATS)
        path, selected = QFileDialog.getSaveFileName(self, "Export Preview", "easel-preview.png", filters)
        if not path:
            return
        fmt = "JPEG" if selected.startswith("JPEG") else "PNG"
        try:
            saved = save_preview(img, Path(path), fmt)
        except OSError as exc:
            logger.error("Could not export preview to %s: %s", path, exc)
            QMessageBox.critical(self, "Export Preview", f"Could not save preview:\n{exc}")
            return
        self._status.showMessage(f"Preview saved to {saved}", 5000)
