"""变体生成器接口。

串联配置加载、目录准备、文件扫描、并发分发和结果汇总，
提供阻塞式的 run(config_path) -> 退出码 入口。
"""

from pathlib import Path

from .config import get_config
from .engine.config_loader import load_run_config
from .engine.dispatcher import TaskDispatcher
from .engine.timing import TimingProbe
from .exceptions import (
    BatchAbortedError,
    ConfigError,
    DiscoveryError,
    ErrorHandler,
)
from .models import BatchReport, ExitCodes, RunConfig
from .utils.file_helpers import ensure_directories, find_image_files
from .utils.logging_helpers import get_logger


logger = get_logger()


class VariantGenerator:
    """变体生成器。

    对 RunConfig 中的每个预设和输入目录中的每个图片生成一个变体文件。
    """

    def __init__(self, run_config: RunConfig):
        self.run_config = run_config
        self.dispatcher = TaskDispatcher(
            max_workers=run_config.max_workers,
            executor_type=run_config.executor,
            fail_fast=run_config.fail_fast,
        )

    @classmethod
    def from_file(cls, config_path: str | Path, **overrides) -> "VariantGenerator":
        """从配置文件创建生成器

        Raises:
            ConfigError: 配置文件缺失或校验失败
        """
        return cls(load_run_config(config_path, **overrides))

    def discover(self) -> list[Path]:
        """准备目录并扫描输入文件

        Raises:
            DiscoveryError: 输入目录不存在（已创建）或遍历失败
        """
        input_dir = self.run_config.input_dir
        output_dir = self.run_config.output_dir

        ensure_directories(input_dir, output_dir)

        logger.info(f"读取 {input_dir} 目录中的文件...")
        files = find_image_files(input_dir, exclude_dirs=[output_dir])
        logger.info(f"找到 {len(files)} 个文件")
        return files

    def generate(self) -> BatchReport:
        """生成全部变体

        Returns:
            BatchReport: 批量结果

        Raises:
            DiscoveryError: 输入目录不存在或遍历失败
            BatchAbortedError: fail_fast 模式下有任务失败
        """
        files = self.discover()

        with TimingProbe("processing") as probe:
            results = self.dispatcher.dispatch(
                self.run_config.presets,
                files,
                self.run_config.input_dir,
                self.run_config.output_dir,
            )

        failed = sum(1 for r in results if not r.success)
        return BatchReport(
            input_dir=self.run_config.input_dir,
            output_dir=self.run_config.output_dir,
            results=results,
            success=failed == 0,
            error=f"{failed} 个任务失败" if failed else None,
            elapsed_seconds=probe.elapsed,
        )


def generate_variants(
    config_path: str | Path | None = None, **overrides
) -> BatchReport:
    """读取配置并生成变体，配置和扫描阶段的错误转换为失败的 BatchReport"""
    config_path = Path(config_path or get_config().processing.CONFIG_FILE)

    try:
        generator = VariantGenerator.from_file(config_path, **overrides)
    except ConfigError as e:
        logger.error(e.message)
        return ErrorHandler.create_error_batch_report(config_path.parent, None, e.message)

    try:
        return generator.generate()
    except (DiscoveryError, BatchAbortedError) as e:
        logger.error(e.message)
        return ErrorHandler.create_error_batch_report(
            generator.run_config.input_dir, generator.run_config.output_dir, e.message
        )


def run(config_path: str | Path | None = None, **overrides) -> int:
    """阻塞运行整个批次

    Args:
        config_path: 配置文件路径，默认 conf.yaml
        **overrides: 覆盖配置字段（max_workers / executor / fail_fast）

    Returns:
        int: 退出码。0 全部成功，1 有任务失败或批次中止，2 配置或扫描错误
    """
    config_path = Path(config_path or get_config().processing.CONFIG_FILE)

    try:
        generator = VariantGenerator.from_file(config_path, **overrides)
        report = generator.generate()
    except (ConfigError, DiscoveryError) as e:
        logger.error(e.message)
        return ExitCodes.SETUP_ERROR
    except BatchAbortedError as e:
        logger.error(e.message)
        return ExitCodes.TASK_FAILURES

    if report.success:
        logger.info(report.get_summary())
        return ExitCodes.OK

    logger.warning(report.get_summary())
    return ExitCodes.TASK_FAILURES
