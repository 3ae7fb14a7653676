"""核心模块包。

变换引擎与编码写入。
"""

from .transform import anchor_point, crop_anchor, fill, fit, transform
from .writer import build_output_path, prepare_for_jpeg, save


__all__ = [
    "anchor_point",
    "build_output_path",
    "crop_anchor",
    "fill",
    "fit",
    "prepare_for_jpeg",
    "save",
    "transform",
]
