"""核心功能测试。

测试变换引擎和编码写入。
"""

from pathlib import Path

import pytest
from PIL import Image

from py_image_variants.core.transform import (
    anchor_point,
    crop_anchor,
    fill,
    fit,
    transform,
)
from py_image_variants.core.writer import build_output_path, prepare_for_jpeg, save
from py_image_variants.exceptions import UnknownModeError, WriteError
from py_image_variants.models import Anchor, Preset
from tests.conftest import QUADRANT_COLORS, assert_color_close, make_quadrant_image


class TestAnchorPoint:
    """锚点坐标计算测试"""

    @pytest.mark.parametrize(
        ("anchor", "expected"),
        [
            (Anchor.TOP_LEFT, (0, 0)),
            (Anchor.TOP, (50, 0)),
            (Anchor.TOP_RIGHT, (100, 0)),
            (Anchor.LEFT, (0, 25)),
            (Anchor.CENTER, (50, 25)),
            (Anchor.RIGHT, (100, 25)),
            (Anchor.BOTTOM_LEFT, (0, 50)),
            (Anchor.BOTTOM, (50, 50)),
            (Anchor.BOTTOM_RIGHT, (100, 50)),
        ],
    )
    def test_all_anchors(self, anchor, expected):
        assert anchor_point((200, 100), 100, 50, anchor) == expected


class TestCrop:
    """crop 模式测试"""

    def test_center_crop_scenario(self, quadrant_image):
        """200x200 居中裁剪为 100x100，四个象限各占四分之一"""
        preset = Preset(name="square", width=100, height=100, mode="crop", anchor="center")
        result = transform(quadrant_image, preset)

        assert result.size == (100, 100)
        assert result.getpixel((25, 25)) == QUADRANT_COLORS["top_left"]
        assert result.getpixel((75, 25)) == QUADRANT_COLORS["top_right"]
        assert result.getpixel((25, 75)) == QUADRANT_COLORS["bottom_left"]
        assert result.getpixel((75, 75)) == QUADRANT_COLORS["bottom_right"]

    def test_top_left_crop_keeps_top_left_region(self, quadrant_image):
        result = crop_anchor(quadrant_image, 100, 100, Anchor.TOP_LEFT)

        assert result.size == (100, 100)
        colors = {color for _, color in result.getcolors()}
        assert colors == {QUADRANT_COLORS["top_left"]}

    def test_bottom_right_crop(self, quadrant_image):
        result = crop_anchor(quadrant_image, 100, 100, Anchor.BOTTOM_RIGHT)
        colors = {color for _, color in result.getcolors()}
        assert colors == {QUADRANT_COLORS["bottom_right"]}

    def test_undersized_source_is_clamped(self):
        """源图小于目标时不放大也不报错"""
        source = make_quadrant_image(80, 300)
        result = crop_anchor(source, 100, 100, Anchor.TOP)

        assert result.size == (80, 100)
        assert result.getpixel((10, 10)) == QUADRANT_COLORS["top_left"]

    def test_crop_does_not_modify_source(self, quadrant_image):
        before = quadrant_image.tobytes()
        crop_anchor(quadrant_image, 50, 50, Anchor.CENTER)
        assert quadrant_image.tobytes() == before


class TestFill:
    """fill 模式测试"""

    def test_exact_size_output(self):
        source = make_quadrant_image(400, 200)
        result = fill(source, 120, 90, Anchor.CENTER)
        assert result.size == (120, 90)

    def test_upscales_small_source(self):
        source = make_quadrant_image(40, 20)
        result = fill(source, 100, 100, Anchor.CENTER)
        assert result.size == (100, 100)

    def test_same_size_returns_copy(self, quadrant_image):
        result = fill(quadrant_image, 200, 200, Anchor.CENTER)

        assert result is not quadrant_image
        assert result.tobytes() == quadrant_image.tobytes()

    def test_left_anchor_keeps_left_half(self):
        """400x200 填充 100x100 靠左：保留左半部分"""
        source = make_quadrant_image(400, 200)
        result = fill(source, 100, 100, Anchor.LEFT)

        assert_color_close(result.getpixel((40, 20)), QUADRANT_COLORS["top_left"])
        assert_color_close(result.getpixel((40, 80)), QUADRANT_COLORS["bottom_left"])

    def test_right_anchor_keeps_right_half(self):
        source = make_quadrant_image(400, 200)
        result = fill(source, 100, 100, Anchor.RIGHT)

        assert_color_close(result.getpixel((60, 20)), QUADRANT_COLORS["top_right"])
        assert_color_close(result.getpixel((60, 80)), QUADRANT_COLORS["bottom_right"])

    def test_tall_source_scales_to_width(self):
        source = make_quadrant_image(200, 400)
        result = fill(source, 100, 100, Anchor.TOP)

        assert result.size == (100, 100)
        assert_color_close(result.getpixel((20, 40)), QUADRANT_COLORS["top_left"])
        assert_color_close(result.getpixel((80, 40)), QUADRANT_COLORS["top_right"])


class TestFit:
    """fit 模式测试"""

    def test_thumb_scenario(self):
        """400x200 适配 100x100 得到 100x50"""
        preset = Preset(name="thumb", width=100, height=100, quality=80, mode="fit")
        result = transform(make_quadrant_image(400, 200), preset)
        assert result.size == (100, 50)

    @pytest.mark.parametrize(
        ("source_size", "box", "expected"),
        [
            ((400, 200), (100, 100), (100, 50)),
            ((200, 400), (100, 100), (50, 100)),
            ((1000, 300), (200, 150), (200, 60)),
            ((300, 1000), (200, 150), (45, 150)),
            ((640, 480), (320, 320), (320, 240)),
        ],
    )
    def test_fits_inside_box(self, source_size, box, expected):
        result = fit(Image.new("RGB", source_size), *box)

        assert result.size == expected
        assert result.width <= box[0]
        assert result.height <= box[1]

    def test_small_source_not_upscaled(self):
        source = Image.new("RGB", (50, 30))
        result = fit(source, 100, 100)

        assert result.size == (50, 30)
        assert result is not source

    def test_anchor_ignored(self):
        source = make_quadrant_image(400, 200)
        a = transform(source, Preset(name="a", width=100, height=100, mode="fit", anchor="top-left"))
        b = transform(source, Preset(name="b", width=100, height=100, mode="fit", anchor="bottom"))
        assert a.tobytes() == b.tobytes()


class TestTransform:
    """变换入口测试"""

    def test_unknown_mode_raises(self, quadrant_image):
        preset = Preset.model_construct(
            name="weird", width=10, height=10, quality=80, mode="stretch", anchor=Anchor.CENTER
        )
        with pytest.raises(UnknownModeError, match="weird"):
            transform(quadrant_image, preset)

    def test_string_anchor_uses_lenient_lookup(self, quadrant_image):
        """未经校验的锚点名称按零值 CENTER 处理"""
        preset = Preset.model_construct(
            name="raw", width=100, height=100, quality=80, mode="crop", anchor="unknown"
        )
        result = transform(quadrant_image, preset)
        assert result.getpixel((25, 25)) == QUADRANT_COLORS["top_left"]
        assert result.getpixel((75, 75)) == QUADRANT_COLORS["bottom_right"]


class TestWriter:
    """编码写入测试"""

    def test_output_path(self, temp_dir: Path):
        path = build_output_path(temp_dir, "thumb", "photo.jpg")
        assert path == temp_dir / "thumb_photo.jpg"

    def test_output_path_discards_directory(self, temp_dir: Path):
        path = build_output_path(temp_dir, "thumb", "nested/dir/photo.png")
        assert path == temp_dir / "thumb_photo.png"

    def test_save_jpeg(self, temp_dir: Path, quadrant_image):
        path = temp_dir / "out.jpg"
        size = save(quadrant_image, path, 80)

        assert size == path.stat().st_size > 0
        with Image.open(path) as img:
            assert img.format == "JPEG"
            assert img.size == (200, 200)

    def test_quality_affects_size(self, temp_dir: Path):
        source = make_quadrant_image(300, 300).rotate(17, expand=True)
        low = save(source, temp_dir / "low.jpg", 10)
        high = save(source, temp_dir / "high.jpg", 95)
        assert low < high

    def test_save_png_by_extension(self, temp_dir: Path):
        source = Image.new("RGBA", (20, 20), (10, 20, 30, 128))
        path = temp_dir / "out.png"
        save(source, path, 80)

        with Image.open(path) as img:
            assert img.format == "PNG"
            assert img.mode == "RGBA"

    def test_jpeg_flattens_alpha(self, temp_dir: Path):
        source = Image.new("RGBA", (20, 20), (0, 0, 0, 0))
        path = temp_dir / "alpha.jpg"
        save(source, path, 90)

        with Image.open(path) as img:
            assert img.mode == "RGB"
            assert_color_close(img.getpixel((10, 10)), (255, 255, 255), tolerance=5)

    def test_prepare_for_jpeg_palette(self):
        palette = Image.new("P", (10, 10))
        assert prepare_for_jpeg(palette).mode == "RGB"

    def test_overwrites_existing_file(self, temp_dir: Path):
        path = temp_dir / "out.jpg"
        path.write_bytes(b"old")
        save(Image.new("RGB", (10, 10)), path, 80)

        with Image.open(path) as img:
            assert img.size == (10, 10)

    def test_missing_directory_raises(self, temp_dir: Path):
        with pytest.raises(WriteError):
            save(Image.new("RGB", (10, 10)), temp_dir / "missing" / "out.jpg", 80)
