"""变体生成流水线模块。

单个 (预设, 文件) 任务的处理单元：读取、解码、变换、编码写入。
适用于线程池和进程池环境，总是返回 VariantResult 而不抛出异常。
"""

from pathlib import Path

from PIL import Image, ImageOps
from pydantic import BaseModel, ConfigDict, Field

from ..config import get_config
from ..core.transform import transform
from ..core.writer import save
from ..exceptions import DecodeError, ErrorHandler, handle_image_errors
from ..models.preset import Preset
from ..models.variant_result import VariantResult
from ..utils.logging_helpers import get_logger


logger = get_logger()


class VariantTask(BaseModel):
    """一个 (预设, 文件) 工作单元"""

    model_config = ConfigDict(frozen=True)

    preset: Preset = Field(description="预设")
    source_path: Path = Field(description="源文件路径")
    output_path: Path = Field(description="输出文件路径")


@handle_image_errors("读取图像", error_cls=DecodeError)
def load_source(path: Path, auto_orient: bool = True) -> Image.Image:
    """读取并完整解码源图

    Raises:
        DecodeError: 文件不存在、无法读取或不是受支持的图像
    """
    with Image.open(path) as opened:
        opened.load()
        img = ImageOps.exif_transpose(opened) if auto_orient else opened.copy()
    return _normalize_mode(img)


def _normalize_mode(img: Image.Image) -> Image.Image:
    """转换为可用 Lanczos 重采样的色彩模式"""
    if img.mode in ("RGB", "RGBA", "L", "LA"):
        return img
    if img.mode == "P" and "transparency" in img.info:
        return img.convert("RGBA")
    if img.mode == "PA":
        return img.convert("RGBA")
    return img.convert("RGB")


def process_variant(task: VariantTask) -> VariantResult:
    """处理单个变体任务

    Args:
        task: 变体任务

    Returns:
        VariantResult: 任务结果，失败时 success=False
    """
    try:
        source = load_source(task.source_path, get_config().transform.AUTO_ORIENT)
        source_dimensions = source.size

        destination = transform(source, task.preset)
        output_size = save(destination, task.output_path, task.preset.quality)

        return VariantResult(
            preset_name=task.preset.name,
            input_path=task.source_path,
            output_path=task.output_path,
            success=True,
            source_dimensions=source_dimensions,
            final_dimensions=destination.size,
            output_size=output_size,
        )

    except Exception as e:
        # 单个任务失败不影响其他任务
        return ErrorHandler.handle_task_error(
            e, task.preset.name, task.source_path, task.output_path
        )
