import pytest
from PIL import Image

from easel_border_tool.config import PREVIEW_BACKGROUND, PREVIEW_PADDING_PX, PREVIEW_PRINT_COLOR
from easel_border_tool.models import BorderInputs, Dimensions
from easel_border_tool.render import preview_scale, render_preview, save_preview
from easel_border_tool.solver import compute_borders


@pytest.fixture
def calc():
    result, _ = compute_borders(BorderInputs(), 0.5)
    return result


def test_preview_scale():
    assert preview_scale(10, 8, 400) == pytest.approx((400 - 2 * PREVIEW_PADDING_PX) / 10)
    assert preview_scale(0, 0, 400) == 1.0


def test_render_size_follows_oriented_paper(calc):
    img = render_preview(calc, max_px=400)
    assert img.mode == "RGBA"
    # 10x8 sheet: the long side fills 400px, the short side 8 * 36.8 + padding
    assert img.size == (400, 326)


def test_print_area_is_drawn(calc):
    img = render_preview(calc, max_px=400)
    assert img.getpixel((img.width // 2, img.height // 2))[:3] == PREVIEW_PRINT_COLOR


def test_blades_darken_the_print_edge(calc):
    plain = render_preview(calc, max_px=400)
    bladed = render_preview(calc, max_px=400, show_blades=True)
    assert plain.size == bladed.size
    # Just outside the image area, on the left blade
    scale = preview_scale(calc.paper_width, calc.paper_height, 400)
    x = int(PREVIEW_PADDING_PX + calc.left_border * scale) - 2
    y = plain.height // 2
    assert sum(bladed.getpixel((x, y))[:3]) < sum(plain.getpixel((x, y))[:3])


def test_zero_paper_renders_background():
    calc, _ = compute_borders(BorderInputs(paper=Dimensions(0, 0)), 0.5)
    img = render_preview(calc, max_px=120)
    assert img.size == (120, 120)
    assert img.getpixel((60, 60))[:3] == PREVIEW_BACKGROUND


def test_save_preview_png_and_jpeg(calc, tmp_path):
    img = render_preview(calc, max_px=200)

    png = save_preview(img, tmp_path / "preview.anything")
    assert png.suffix == ".png"
    with Image.open(png) as loaded:
        assert loaded.size == img.size

    jpg = save_preview(img, tmp_path / "preview", "JPEG")
    assert jpg.suffix == ".jpg"
    with Image.open(jpg) as loaded:
        assert loaded.mode == "RGB"
