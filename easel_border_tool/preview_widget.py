"""
Easel preview widget and Qt image helpers.

The preview itself is drawn by ``render.render_preview`` (Pillow); this
widget only converts it to a pixmap and letterboxes it into the available
space.
"""

from PIL import Image
from PyQt6.QtWidgets import QWidget, QSizePolicy
from PyQt6.QtCore import Qt, QRectF
from PyQt6.QtGui import QPainter, QPixmap, QColor, QImage, QPaintEvent, QResizeEvent

from easel_border_tool.config import PREVIEW_MAX_PX
from easel_border_tool.models import BorderCalculation
from easel_border_tool.render import render_preview


# =============================================================================
# Qt ↔ PIL helpers
# =============================================================================

def pil_to_qpixmap(pil_img: Image.Image) -> QPixmap:
    """Convert a PIL Image to QPixmap."""
    img_rgba = pil_img.convert("RGBA")
    data = img_rgba.tobytes("raw", "RGBA")
    qimg = QImage(data, img_rgba.width, img_rgba.height, QImage.Format.Format_RGBA8888)
    # QImage does not own *data*; copy before it goes out of scope
    return QPixmap.fromImage(qimg.copy())


# =============================================================================
# Preview Widget
# =============================================================================

class PreviewWidget(QWidget):
    """Scaled drawing of paper, image area and blades for the current calculation."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setMinimumSize(300, 240)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

        self._calc: BorderCalculation | None = None
        self._show_blades = False
        self._pixmap: QPixmap | None = None

    def set_calculation(self, calc: BorderCalculation | None, show_blades: bool = False):
        self._calc = calc
        self._show_blades = show_blades
        self._rebuild()

    def current_image(self) -> Image.Image | None:
        """Full-resolution render of the current calculation, for export."""
        if self._calc is None:
            return None
        return render_preview(self._calc, max_px=PREVIEW_MAX_PX * 2, show_blades=self._show_blades)

    def _rebuild(self):
        if self._calc is None:
            self._pixmap = None
        else:
            side = max(min(self.width(), self.height()), 1)
            # Render at widget resolution; blades scale with the render size
            pil_img = render_preview(self._calc, max_px=max(side, 64), show_blades=self._show_blades)
            self._pixmap = pil_to_qpixmap(pil_img)
        self.update()

    # --- Painting ---

    def paintEvent(self, event: QPaintEvent):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        painter.fillRect(self.rect(), QColor(30, 30, 30))

        if not self._pixmap or self._pixmap.isNull():
            painter.setPen(QColor(128, 128, 128))
            painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, "No preview")
            painter.end()
            return

        # Letterbox the pixmap into the widget
        pw, ph = self._pixmap.width(), self._pixmap.height()
        scale = min(self.width() / pw, self.height() / ph)
        dw, dh = pw * scale, ph * scale
        dest = QRectF((self.width() - dw) / 2, (self.height() - dh) / 2, dw, dh)
        painter.drawPixmap(dest.toRect(), self._pixmap)
        painter.end()

    def resizeEvent(self, event: QResizeEvent):
        super().resizeEvent(event)
        self._rebuild()
