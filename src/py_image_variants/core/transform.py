"""变换引擎模块。

根据预设的尺寸策略（crop / fill / fit）从源图生成目标图。
所有函数都是纯函数：不修改输入图像，不做任何 I/O。
"""

import math

from PIL import Image

from ..exceptions import UnknownModeError
from ..models.anchor import DEFAULT_ANCHORS, Anchor, AnchorTable
from ..models.preset import Preset, TransformMode
from ..utils.logging_helpers import get_logger


logger = get_logger()

RESAMPLE_FILTER = Image.Resampling.LANCZOS


def _round_half_up(value: float) -> int:
    """四舍五入并保证至少 1 像素"""
    return max(1, int(math.floor(value + 0.5)))


def anchor_point(
    src_size: tuple[int, int], width: int, height: int, anchor: Anchor
) -> tuple[int, int]:
    """计算 width x height 区域在源图中的左上角坐标

    Args:
        src_size: 源图尺寸 (宽, 高)
        width: 区域宽度
        height: 区域高度
        anchor: 锚点

    Returns:
        tuple: 区域左上角 (x, y)
    """
    src_width, src_height = src_size

    match anchor.horizontal:
        case "left":
            x = 0
        case "right":
            x = src_width - width
        case _:
            x = (src_width - width) // 2

    match anchor.vertical:
        case "top":
            y = 0
        case "bottom":
            y = src_height - height
        case _:
            y = (src_height - height) // 2

    return x, y


def crop_anchor(img: Image.Image, width: int, height: int, anchor: Anchor) -> Image.Image:
    """按锚点裁剪出 width x height 区域

    源图在某一维度小于目标时，该维度收缩为源图尺寸（不放大、不报错）。
    """
    src_width, src_height = img.size
    width = min(width, src_width)
    height = min(height, src_height)

    x, y = anchor_point(img.size, width, height, anchor)
    return img.crop((x, y, x + width, y + height))


def resize_to_width(img: Image.Image, width: int) -> Image.Image:
    """按宽度等比缩放"""
    src_width, src_height = img.size
    height = _round_half_up(width * src_height / src_width)
    return img.resize((width, height), RESAMPLE_FILTER)


def resize_to_height(img: Image.Image, height: int) -> Image.Image:
    """按高度等比缩放"""
    src_width, src_height = img.size
    width = _round_half_up(height * src_width / src_height)
    return img.resize((width, height), RESAMPLE_FILTER)


def fill(img: Image.Image, width: int, height: int, anchor: Anchor) -> Image.Image:
    """等比缩放直到完全覆盖 width x height，再按锚点裁掉多余部分"""
    if img.size == (width, height):
        return img.copy()

    src_width, src_height = img.size
    src_aspect = src_width / src_height
    dst_aspect = width / height

    # 源图更"瘦"时按宽度缩放，否则按高度缩放
    if src_aspect < dst_aspect:
        scaled = resize_to_width(img, width)
    else:
        scaled = resize_to_height(img, height)

    return crop_anchor(scaled, width, height, anchor)


def fit(img: Image.Image, width: int, height: int) -> Image.Image:
    """等比缩放到 width x height 边界框之内，不放大"""
    src_width, src_height = img.size
    if src_width <= width and src_height <= height:
        return img.copy()

    src_aspect = src_width / src_height
    box_aspect = width / height

    if src_aspect > box_aspect:
        new_size = (width, _round_half_up(width / src_aspect))
    else:
        new_size = (_round_half_up(height * src_aspect), height)

    return img.resize(new_size, RESAMPLE_FILTER)


def transform(
    source: Image.Image,
    preset: Preset,
    anchors: AnchorTable = DEFAULT_ANCHORS,
) -> Image.Image:
    """按预设变换源图

    Args:
        source: 源图
        preset: 预设
        anchors: 锚点表，preset.anchor 为字符串时用于宽松查找

    Returns:
        Image.Image: 目标图

    Raises:
        UnknownModeError: 预设的模式未知
    """
    anchor = preset.anchor
    if not isinstance(anchor, Anchor):
        anchor = anchors.lookup(str(anchor))

    match preset.mode:
        case TransformMode.CROP:
            result = crop_anchor(source, preset.width, preset.height, anchor)
        case TransformMode.FILL:
            result = fill(source, preset.width, preset.height, anchor)
        case TransformMode.FIT:
            result = fit(source, preset.width, preset.height)
        case _:
            raise UnknownModeError(preset.name, preset.mode)

    logger.debug(
        f"变换 {preset.name}: {source.size[0]}x{source.size[1]} → "
        f"{result.size[0]}x{result.size[1]}"
    )
    return result
