"""Python 图像变体批量生成库。

基于 Pillow 的预设驱动缩略图、裁剪和填充生成工具。
"""

__version__ = "0.1.0"
__description__ = "按预设并发生成图像变体，基于 Pillow"

# 核心功能导出
from .generator import VariantGenerator, generate_variants, run
from .models import Anchor, BatchReport, Preset, RunConfig, TransformMode, VariantResult


__all__ = [
    "Anchor",
    "BatchReport",
    "Preset",
    "RunConfig",
    "TransformMode",
    "VariantGenerator",
    "VariantResult",
    "generate_variants",
    "get_version",
    "run",
]


def get_version() -> str:
    """获取版本号。"""
    return __version__
