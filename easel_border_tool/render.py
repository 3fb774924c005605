"""
Qt-free preview rendering.

Draws the oriented sheet, the image area and (optionally) the four easel
blades of a ``BorderCalculation`` with Pillow.  The GUI shows the result
through ``preview_widget``; ``save_preview`` writes it to disk.
"""

import logging
from pathlib import Path

from PIL import Image, ImageDraw

from easel_border_tool.config import (
    JPEG_QUALITY_DEFAULT, PREVIEW_BACKGROUND, PREVIEW_BLADE_COLOR, PREVIEW_MAX_PX,
    PREVIEW_PADDING_PX, PREVIEW_PAPER_COLOR, PREVIEW_PAPER_OUTLINE, PREVIEW_PRINT_COLOR,
)
from easel_border_tool.models import BorderCalculation

logger = logging.getLogger(__name__)


def preview_scale(paper_width: float, paper_height: float, max_px: int = PREVIEW_MAX_PX) -> float:
    """Pixels per inch so the longer paper side fills *max_px* minus padding."""
    longest = max(paper_width, paper_height)
    if longest <= 0:
        return 1.0
    return max(max_px - 2 * PREVIEW_PADDING_PX, 1) / longest


def render_preview(
    calc: BorderCalculation,
    max_px: int = PREVIEW_MAX_PX,
    show_blades: bool = False,
) -> Image.Image:
    """
    Render *calc* as an RGBA image no larger than *max_px* on its long side.

    Paper without area renders as an empty background.
    """
    pad = PREVIEW_PADDING_PX
    if calc.paper_width <= 0 or calc.paper_height <= 0:
        return Image.new("RGBA", (max_px, max_px), PREVIEW_BACKGROUND + (255,))

    scale = preview_scale(calc.paper_width, calc.paper_height, max_px)
    paper_w = calc.paper_width * scale
    paper_h = calc.paper_height * scale
    size = (int(round(paper_w + 2 * pad)), int(round(paper_h + 2 * pad)))

    img = Image.new("RGBA", size, PREVIEW_BACKGROUND + (255,))
    draw = ImageDraw.Draw(img)

    # Paper
    draw.rectangle(
        [pad, pad, pad + paper_w, pad + paper_h],
        fill=PREVIEW_PAPER_COLOR, outline=PREVIEW_PAPER_OUTLINE,
    )

    # Image area
    left = pad + calc.left_border * scale
    top = pad + calc.top_border * scale
    right = left + calc.print_width * scale
    bottom = top + calc.print_height * scale
    if calc.print_width > 0 and calc.print_height > 0:
        draw.rectangle([left, top, right, bottom], fill=PREVIEW_PRINT_COLOR)

    if show_blades:
        img = _draw_blades(img, calc, (left, top, right, bottom), max_px)

    return img


def _draw_blades(
    img: Image.Image,
    calc: BorderCalculation,
    print_box: tuple[float, float, float, float],
    max_px: int,
) -> Image.Image:
    """Overlay the four blades along the image-area edges."""
    thickness = max(1.0, calc.blade_thickness_px * max_px / PREVIEW_MAX_PX)
    left, top, right, bottom = print_box
    w, h = img.size

    overlay = Image.new("RGBA", img.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    draw.rectangle([max(left - thickness, 0), 0, left, h], fill=PREVIEW_BLADE_COLOR)
    draw.rectangle([right, 0, min(right + thickness, w), h], fill=PREVIEW_BLADE_COLOR)
    draw.rectangle([0, max(top - thickness, 0), w, top], fill=PREVIEW_BLADE_COLOR)
    draw.rectangle([0, bottom, w, min(bottom + thickness, h)], fill=PREVIEW_BLADE_COLOR)
    return Image.alpha_composite(img, overlay)


def save_preview(img: Image.Image, path: Path, fmt: str = "PNG") -> Path:
    """
    Save a rendered preview.

    JPEG output is flattened to RGB.  Raises OSError if the file cannot be
    written.
    """
    path = Path(path)
    if fmt == "JPEG":
        path = path.with_suffix(".jpg")
        img.convert("RGB").save(str(path), "JPEG", quality=JPEG_QUALITY_DEFAULT, optimize=True)
    else:
        path = path.with_suffix(".png")
        img.save(str(path), "PNG")
    logger.info("Saved preview to %s", path)
    return path
