"""图像变体生成 MCP 服务器。

把批量变体生成暴露为 MCP 工具。
"""

import logging
from pathlib import Path
from typing import Any

from fastmcp import FastMCP

from .engine.config_loader import load_run_config
from .exceptions import ConfigError
from .generator import generate_variants as run_generation
from .utils.logging_helpers import setup_logging
from .utils.message_formatter import MessageFormatter


MCPResponse = dict[str, Any]


class MCPResponseBuilder:
    """MCP 服务器响应构建器"""

    @staticmethod
    def error(
        message: str,
        error_type: str = "general",
        details: dict[str, Any] | None = None,
    ) -> MCPResponse:
        """构建错误结果。

        Args:
            message: 错误消息
            error_type: 错误类型
            details: 额外的错误详情

        Returns:
            dict: 标准化的错误响应
        """
        result: MCPResponse = {
            "success": False,
            "error": message,
            "error_type": error_type,
        }

        if details:
            result["details"] = details

        return result

    @staticmethod
    def config_error(message: str, config_path: str | None = None) -> MCPResponse:
        details = {"config_path": config_path} if config_path else None
        return MCPResponseBuilder.error(message, "config", details)


logger = logging.getLogger(__name__)

# 创建MCP应用
mcp: FastMCP[Any] = FastMCP("图像变体生成服务")


@mcp.tool()
def generate_variants(
    config_path: str = "conf.yaml",
    max_workers: int | None = None,
    fail_fast: bool | None = None,
) -> MCPResponse:
    """按配置文件中的预设批量生成图像变体（缩略图、裁剪、填充）

    Args:
        config_path: conf.yaml 路径
        max_workers: 最大并发数（可选，默认每个任务一个工作线程）
        fail_fast: 首个任务失败时是否中止整个批次

    Returns:
        dict: 批量结果，包含成功/失败数量、失败的 (预设, 文件) 对和耗时
    """
    try:
        report = run_generation(
            Path(config_path), max_workers=max_workers, fail_fast=fail_fast
        )
        return report.to_dict()
    except Exception as e:
        logger.error(MessageFormatter.operation_failed("生成变体", config_path, e))
        return MCPResponseBuilder.error(str(e), "processing")


@mcp.tool()
def list_presets(config_path: str = "conf.yaml") -> MCPResponse:
    """列出配置文件中的预设

    Args:
        config_path: conf.yaml 路径

    Returns:
        dict: 输入输出目录和预设列表
    """
    try:
        run_config = load_run_config(Path(config_path))
    except ConfigError as e:
        return MCPResponseBuilder.config_error(e.message, config_path)

    return {
        "success": True,
        "input_dir": str(run_config.input_dir),
        "output_dir": str(run_config.output_dir),
        "presets": [preset.model_dump(mode="json") for preset in run_config.presets],
    }


def main() -> None:
    """启动 MCP 服务器"""
    setup_logging()
    logger.info("启动图像变体生成 MCP 服务器")
    mcp.run()


if __name__ == "__main__":
    main()
