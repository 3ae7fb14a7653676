"""变体生成结果模型。

定义单个 (预设, 文件) 任务和整个批次的结果数据结构。
"""

from pathlib import Path
from typing import Any

from humanize import naturalsize, precisedelta
from pydantic import BaseModel, Field


class BaseResult(BaseModel):
    """结果基类，包含通用字段和方法"""

    success: bool = Field(description="是否成功")
    error: str | None = Field(None, description="错误信息")

    @staticmethod
    def format_size(size_bytes: int) -> str:
        """格式化文件大小为人类可读格式"""
        return naturalsize(size_bytes, binary=True)


class VariantResult(BaseResult):
    """单个 (预设, 文件) 任务的结果"""

    preset_name: str = Field(description="预设名称")
    input_path: Path = Field(description="输入文件路径")
    output_path: Path = Field(description="输出文件路径")
    error_type: str | None = Field(None, description="错误类型名")

    source_dimensions: tuple[int, int] | None = Field(None, description="源图尺寸")
    final_dimensions: tuple[int, int] | None = Field(None, description="输出尺寸")
    output_size: int = Field(0, description="输出文件大小（字节）")

    @property
    def pair(self) -> tuple[str, str]:
        """(预设名, 文件名) 对"""
        return self.preset_name, self.input_path.name

    def get_summary(self) -> str:
        if not self.success:
            return f"失败 [{self.preset_name}] {self.input_path.name}: {self.error}"

        summary = f"[{self.preset_name}] {self.input_path.name} → {self.output_path.name}"
        if self.final_dimensions:
            width, height = self.final_dimensions
            summary += f" {width}x{height}"
        return f"{summary} ({self.format_size(self.output_size)})"


class BatchReport(BaseResult):
    """批量处理结果"""

    input_dir: Path = Field(description="输入目录")
    output_dir: Path | None = Field(None, description="输出目录")
    results: list[VariantResult] = Field(default_factory=list, description="所有任务结果")
    elapsed_seconds: float = Field(0.0, description="分发阶段耗时（秒）")

    def get_successful_items(self) -> list[VariantResult]:
        return [r for r in self.results if r.success]

    def get_failed_items(self) -> list[VariantResult]:
        return [r for r in self.results if not r.success]

    def get_total_count(self) -> int:
        return len(self.results)

    def get_success_count(self) -> int:
        return len(self.get_successful_items())

    def get_failure_count(self) -> int:
        return len(self.get_failed_items())

    def get_failed_pairs(self) -> list[tuple[str, str]]:
        """失败的 (预设名, 文件名) 列表，按预设、文件排序"""
        return sorted(r.pair for r in self.get_failed_items())

    def get_total_output_size(self) -> int:
        return sum(r.output_size for r in self.results if r.success)

    def get_summary(self) -> str:
        """批量处理摘要"""
        if not self.success and not self.results:
            return f"批量处理失败: {self.error}"

        total = self.get_total_count()
        successful = self.get_success_count()
        failed = self.get_failure_count()
        text = (
            f"生成 {successful}/{total} 个变体, 失败 {failed} 个, "
            f"输出共 {self.format_size(self.get_total_output_size())}, "
            f"耗时 {precisedelta(self.elapsed_seconds, format='%0.2f')}"
        )
        if failed:
            pairs = ", ".join(f"{p}/{f}" for p, f in self.get_failed_pairs())
            text += f"; 失败项: {pairs}"
        return text

    def to_dict(self) -> dict[str, Any]:
        """转换为可序列化的字典（MCP 响应）"""
        return {
            "success": self.success,
            "error": self.error,
            "input_dir": str(self.input_dir),
            "output_dir": str(self.output_dir) if self.output_dir else None,
            "total": self.get_total_count(),
            "succeeded": self.get_success_count(),
            "failed": self.get_failure_count(),
            "failed_pairs": [list(pair) for pair in self.get_failed_pairs()],
            "elapsed_seconds": self.elapsed_seconds,
            "summary": self.get_summary(),
            "results": [
                {
                    "preset": r.preset_name,
                    "input_path": str(r.input_path),
                    "output_path": str(r.output_path),
                    "success": r.success,
                    "final_dimensions": r.final_dimensions,
                    "output_size": r.output_size,
                    "error": r.error,
                }
                for r in self.results
            ],
        }
