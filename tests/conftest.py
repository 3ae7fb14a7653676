"""测试配置文件。

提供测试所需的fixtures和合成测试图片。
"""

from pathlib import Path

import pytest
import yaml
from PIL import Image, ImageDraw

from py_image_variants.config import reset_config


QUADRANT_COLORS = {
    "top_left": (255, 0, 0),
    "top_right": (0, 255, 0),
    "bottom_left": (0, 0, 255),
    "bottom_right": (255, 255, 0),
}


def make_quadrant_image(width: int, height: int) -> Image.Image:
    """创建四个象限颜色不同的 RGB 图片"""
    img = Image.new("RGB", (width, height))
    draw = ImageDraw.Draw(img)
    half_w, half_h = width // 2, height // 2
    draw.rectangle([0, 0, half_w - 1, half_h - 1], fill=QUADRANT_COLORS["top_left"])
    draw.rectangle([half_w, 0, width - 1, half_h - 1], fill=QUADRANT_COLORS["top_right"])
    draw.rectangle([0, half_h, half_w - 1, height - 1], fill=QUADRANT_COLORS["bottom_left"])
    draw.rectangle(
        [half_w, half_h, width - 1, height - 1], fill=QUADRANT_COLORS["bottom_right"]
    )
    return img


def assert_color_close(
    actual: tuple[int, ...], expected: tuple[int, int, int], tolerance: int = 40
) -> None:
    """颜色近似比较（JPEG 和 Lanczos 会带来少量偏差）"""
    for a, e in zip(actual[:3], expected, strict=True):
        assert abs(a - e) <= tolerance, f"{actual} != {expected}"


def write_config(path: Path, presets: list[dict], **extra) -> Path:
    """写入 conf.yaml"""
    data = {"input_dir": "in", "output_dir": "out", "sizes": presets}
    data.update(extra)
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def clean_app_config(monkeypatch):
    """每个测试使用干净的环境变量配置"""
    for name in (
        "PIV_CONFIG_FILE",
        "PIV_MAX_WORKERS",
        "PIV_EXECUTOR",
        "PIV_LOG_LEVEL",
        "PIV_DEFAULT_QUALITY",
        "PIV_AUTO_ORIENT",
        "PIV_ENABLE_FILE_LOGGING",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """临时目录fixture"""
    return tmp_path


@pytest.fixture
def quadrant_image() -> Image.Image:
    """200x200 四象限图片"""
    return make_quadrant_image(200, 200)


@pytest.fixture
def workspace(temp_dir: Path) -> Path:
    """包含 in/ 目录和三张源图片的工作目录"""
    input_dir = temp_dir / "in"
    input_dir.mkdir()

    make_quadrant_image(400, 200).save(input_dir / "wide.jpg", "JPEG", quality=95)
    make_quadrant_image(200, 400).save(input_dir / "tall.png", "PNG")

    transparent = Image.new("RGBA", (300, 300), (0, 0, 0, 0))
    draw = ImageDraw.Draw(transparent)
    draw.ellipse([50, 50, 250, 250], fill=(200, 30, 30, 255))
    transparent.save(input_dir / "round.png", "PNG")

    return temp_dir


@pytest.fixture
def sample_presets() -> list[dict]:
    """两个预设"""
    return [
        {"name": "thumb", "width": 100, "height": 100, "quality": 80, "mode": "fit"},
        {
            "name": "square",
            "width": 100,
            "height": 100,
            "quality": 85,
            "mode": "crop",
            "anchor": "center",
        },
    ]
