"""Entry point for python -m py_image_variants.

默认按 conf.yaml 运行一次批量变体生成；`serve` 子命令启动 MCP 服务器。
"""

import argparse
import sys


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="py-image-variants",
        description="按预设批量生成图像变体（缩略图、裁剪、填充）",
    )
    parser.add_argument(
        "config",
        nargs="?",
        default=None,
        help="配置文件路径（默认 conf.yaml，或环境变量 PIV_CONFIG_FILE）",
    )
    parser.add_argument("--workers", type=int, default=None, help="最大并发数")
    parser.add_argument(
        "--executor", choices=["thread", "process"], default=None, help="执行器类型"
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        default=None,
        help="首个任务失败时中止整个批次",
    )
    parser.add_argument("--log-level", default=None, help="日志级别")
    parser.add_argument("-v", "--version", action="store_true", help="显示版本号")
    return parser


def main(argv: list[str] | None = None) -> int:
    """主入口函数"""
    argv = sys.argv[1:] if argv is None else argv

    # 启动 MCP 服务器
    if argv and argv[0] == "serve":
        from .mcp_server import main as server_main

        server_main()
        return 0

    args = build_parser().parse_args(argv)

    if args.version:
        from . import __version__

        print(f"py-image-variants {__version__}")
        return 0

    from .generator import run
    from .utils.logging_helpers import setup_logging

    setup_logging(args.log_level)
    return run(
        args.config,
        max_workers=args.workers,
        executor=args.executor,
        fail_fast=args.fail_fast,
    )


if __name__ == "__main__":
    sys.exit(main())
