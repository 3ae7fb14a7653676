"""预设配置模型。

定义变体生成所需的预设（尺寸、质量、模式、锚点）以及整体运行配置。
"""

from enum import Enum
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..config import get_config
from .anchor import DEFAULT_ANCHORS, Anchor
from .constants import ProcessingDefaults, QualityDefaults


class TransformMode(str, Enum):
    """尺寸策略枚举"""

    CROP = "crop"  # 精确尺寸，按锚点裁剪
    FILL = "fill"  # 精确尺寸，先缩放覆盖再裁剪
    FIT = "fit"  # 不超出边界框，保持宽高比


class Preset(BaseModel):
    """命名的变体规格，加载后不可变"""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="预设名称，用作输出文件前缀")
    width: int = Field(gt=0, description="目标宽度")
    height: int = Field(gt=0, description="目标高度")
    quality: int = Field(
        default_factory=lambda: get_config().transform.JPEG_QUALITY,
        ge=QualityDefaults.MIN_QUALITY,
        le=QualityDefaults.MAX_QUALITY,
        description="编码质量",
    )
    mode: TransformMode = Field(description="尺寸策略")
    anchor: Anchor = Field(Anchor.CENTER, description="锚点，仅 crop/fill 使用")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if "/" in v or "\\" in v:
            raise ValueError(f"预设名称不能包含路径分隔符: {v}")
        return v

    @field_validator("mode", mode="before")
    @classmethod
    def normalize_mode(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("anchor", mode="before")
    @classmethod
    def resolve_anchor(cls, v: Any) -> Any:
        if v is None:
            return Anchor.CENTER
        if isinstance(v, str):
            return DEFAULT_ANCHORS.resolve(v)
        return v

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def describe(self) -> str:
        """简短描述，用于日志"""
        text = f"{self.name} {self.width}x{self.height} {self.mode.value} q={self.quality}"
        if self.mode != TransformMode.FIT:
            text += f" @{self.anchor.value}"
        return text


class RunConfig(BaseModel):
    """一次批量运行的配置"""

    model_config = ConfigDict(populate_by_name=True)

    input_dir: Path = Field(Path(ProcessingDefaults.INPUT_DIR), description="输入目录")
    output_dir: Path = Field(Path(ProcessingDefaults.OUTPUT_DIR), description="输出目录")
    presets: list[Preset] = Field(alias="sizes", min_length=1, description="预设列表")

    # 并发选项
    max_workers: int | None = Field(None, gt=0, description="最大并发数，None 为每任务一个")
    executor: Literal["thread", "process"] = Field("thread", description="执行器类型")
    fail_fast: bool = Field(False, description="首个任务失败时中止整个批次")

    @model_validator(mode="after")
    def validate_unique_names(self) -> "RunConfig":
        seen: set[str] = set()
        for preset in self.presets:
            if preset.name in seen:
                raise ValueError(f"预设名称重复: {preset.name}，输出文件会相互覆盖")
            seen.add(preset.name)
        return self

    def get_preset(self, name: str) -> Preset | None:
        return next((p for p in self.presets if p.name == name), None)
