"""数据模型包。

定义锚点、预设、运行配置和结果等数据结构。
"""

from .anchor import DEFAULT_ANCHORS, Anchor, AnchorTable, normalize_anchor_name
from .constants import (
    ExitCodes,
    ImageFormats,
    ProcessingDefaults,
    QualityDefaults,
)
from .preset import Preset, RunConfig, TransformMode
from .variant_result import BatchReport, VariantResult


__all__ = [
    "DEFAULT_ANCHORS",
    "Anchor",
    "AnchorTable",
    "BatchReport",
    "ExitCodes",
    "ImageFormats",
    "Preset",
    "ProcessingDefaults",
    "QualityDefaults",
    "RunConfig",
    "TransformMode",
    "VariantResult",
    "normalize_anchor_name",
]
