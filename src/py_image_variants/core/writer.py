"""编码写入模块。

按输出路径扩展名选择编码格式，以预设质量保存目标图。
"""

from pathlib import Path
from typing import Any

from PIL import Image

from ..config import get_config
from ..exceptions import WriteError, handle_image_errors
from ..models.constants import ImageFormats, ProcessingDefaults
from ..utils.logging_helpers import get_logger


logger = get_logger()


def build_output_path(output_dir: Path, preset_name: str, file_name: str) -> Path:
    """计算输出路径 <output_dir>/<preset>_<name>"""
    file_name = Path(file_name).name
    return Path(output_dir) / ProcessingDefaults.OUTPUT_PATTERN.format(
        preset=preset_name, name=file_name
    )


def prepare_for_jpeg(img: Image.Image) -> Image.Image:
    """为JPEG格式准备图片，透明通道合成到白色背景"""
    if img.mode == "P":
        # 调色板模式：有透明色时按 RGBA 处理
        if "transparency" in img.info:
            img = img.convert("RGBA")
        else:
            return img.convert("RGB")

    if img.mode in ("RGBA", "LA", "PA"):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, ProcessingDefaults.JPEG_BACKGROUND)
        background.paste(rgba, mask=rgba.split()[-1])
        return background

    if img.mode not in ("RGB", "L", "CMYK"):
        return img.convert("RGB")

    return img


def get_save_parameters(format_name: str, quality: int) -> dict[str, Any]:
    """获取保存参数

    Args:
        format_name: Pillow 格式名
        quality: 预设质量 1-100

    Returns:
        dict: 传给 Image.save 的参数
    """
    defaults = get_config().transform
    params: dict[str, Any] = {"format": format_name}

    match format_name:
        case "JPEG":
            params["quality"] = max(1, min(100, quality))
            params["optimize"] = defaults.JPEG_OPTIMIZE
        case "PNG":
            # PNG 为无损格式，质量参数不适用
            params["compress_level"] = defaults.PNG_COMPRESS_LEVEL

    return params


@handle_image_errors("保存图像", error_cls=WriteError)
def save(image: Image.Image, path: str | Path, quality: int) -> int:
    """编码并写入目标图，已存在的文件会被覆盖

    Args:
        image: 目标图
        path: 输出路径
        quality: 编码质量 1-100

    Returns:
        int: 写入的字节数

    Raises:
        WriteError: 输出目录不存在、权限不足或磁盘已满
    """
    path = Path(path)
    if not path.parent.is_dir():
        raise WriteError(f"输出目录不存在: {path.parent}", path)

    format_name = ImageFormats.format_for_suffix(path.suffix)
    if format_name == "JPEG":
        image = prepare_for_jpeg(image)

    save_params = get_save_parameters(format_name, quality)
    image.save(path, **save_params)

    size = path.stat().st_size
    logger.debug(f"已保存 {path} ({format_name}, {size} bytes)")
    return size
