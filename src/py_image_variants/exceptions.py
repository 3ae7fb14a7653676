"""变体生成异常处理模块。

定义统一的异常类和错误处理机制，包含异常转换装饰器。
"""

from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import TypeVar

from PIL.Image import DecompressionBombError, UnidentifiedImageError

from .models.variant_result import BatchReport, VariantResult
from .utils.logging_helpers import get_logger
from .utils.message_formatter import MessageFormatter


logger = get_logger()
T = TypeVar("T")


# 统一的异常类型
class VariantError(Exception):
    """变体生成相关错误基类"""

    def __init__(self, message: str, input_path: Path | None = None):
        super().__init__(message)
        self.message = message
        self.input_path = input_path


class ConfigError(VariantError):
    """配置文件缺失或校验失败"""

    pass


class DiscoveryError(VariantError):
    """输入目录缺失或遍历失败"""

    pass


class DecodeError(VariantError):
    """源文件不是有效或受支持的图像"""

    pass


class WriteError(VariantError):
    """输出编码或写入失败"""

    pass


class UnknownModeError(VariantError):
    """预设使用了未知的尺寸模式"""

    def __init__(self, preset_name: str, mode: object):
        super().__init__(f"预设 {preset_name} 使用了未知的模式: {mode}")
        self.preset_name = preset_name
        self.mode = mode


class BatchAbortedError(VariantError):
    """fail-fast 模式下首个任务失败，批次中止"""

    def __init__(self, result: VariantResult):
        super().__init__(
            f"批次已中止，任务失败: {result.preset_name}/{result.input_path.name} - {result.error}",
            result.input_path,
        )
        self.result = result


def handle_image_errors(
    operation_name: str = "图像处理",
    error_cls: type[VariantError] = DecodeError,
):
    """统一的图像异常转换装饰器

    Args:
        operation_name: 操作名称，用于日志记录
        error_cls: OSError 等 I/O 错误转换成的异常类型
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except VariantError:
                raise
            except UnidentifiedImageError as e:
                logger.debug(f"{operation_name} - 无法识别图像格式: {e}")
                raise DecodeError(f"不支持的图像格式: {e}") from e
            except DecompressionBombError as e:
                logger.debug(f"{operation_name} - 图像过大: {e}")
                raise DecodeError(f"图像文件过大，可能存在安全风险: {e}") from e
            except (OSError, ValueError, SyntaxError) as e:
                logger.debug(f"{operation_name} - 文件操作失败: {e}")
                raise error_cls(f"{operation_name}失败: {e}") from e

        return wrapper

    return decorator


class ErrorHandler:
    """统一错误处理器

    将单个任务的异常转换为失败的 VariantResult，不中断其他任务。
    """

    @staticmethod
    def _log_error(
        operation: str, path: Path, error: Exception, level: str = "error"
    ) -> None:
        """标准化的错误日志记录

        Args:
            operation: 操作名称
            path: 相关文件路径
            error: 异常对象
            level: 日志级别 ("error", "warning", "debug")
        """
        log_msg = MessageFormatter.format_error(operation, path, error)
        getattr(logger, level, logger.error)(log_msg)

    @staticmethod
    def create_error_result(
        preset_name: str,
        input_path: Path,
        output_path: Path,
        error: Exception,
        operation: str,
    ) -> VariantResult:
        """创建标准化的失败结果"""
        return VariantResult(
            preset_name=preset_name,
            input_path=input_path,
            output_path=output_path,
            success=False,
            error=f"{operation}: {error}",
            error_type=type(error).__name__,
        )

    @staticmethod
    def handle_task_error(
        error: Exception,
        preset_name: str,
        input_path: Path,
        output_path: Path,
        operation: str = "变体生成",
    ) -> VariantResult:
        """按错误类型选择日志级别并生成失败结果"""
        match error:
            case DecodeError():
                level, operation = "warning", f"{operation} - 解码错误"
            case WriteError():
                level, operation = "error", f"{operation} - 写入错误"
            case UnknownModeError():
                level, operation = "error", f"{operation} - 模式错误"
            case FileNotFoundError():
                level = "warning"
            case _:
                level = "error"

        ErrorHandler._log_error(operation, input_path, error, level)
        return ErrorHandler.create_error_result(
            preset_name, input_path, output_path, error, operation
        )

    @staticmethod
    def create_error_batch_report(
        input_dir: Path,
        output_dir: Path | None,
        error_message: str,
    ) -> BatchReport:
        """创建失败的批量结果（配置或扫描阶段失败）"""
        return BatchReport(
            input_dir=input_dir,
            output_dir=output_dir,
            results=[],
            success=False,
            error=error_message,
        )
