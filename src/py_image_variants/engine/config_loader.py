"""配置加载模块。

读取 conf.yaml 并校验为 RunConfig，所有问题统一转换为 ConfigError。
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from ..config import get_config
from ..exceptions import ConfigError
from ..models.preset import RunConfig
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter


logger = get_logger()


def load_run_config(path: str | Path, **overrides: Any) -> RunConfig:
    """读取并校验配置文件

    相对的 input_dir / output_dir 以配置文件所在目录为基准解析。

    Args:
        path: 配置文件路径
        **overrides: 覆盖配置文件中的字段（如命令行传入的 max_workers）

    Returns:
        RunConfig: 校验后的运行配置

    Raises:
        ConfigError: 文件缺失、YAML 语法错误或字段校验失败
    """
    path = Path(path)
    logger.info("读取配置文件...")

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigError(MessageFormatter.file_not_found(path), path) from e
    except OSError as e:
        raise ConfigError(MessageFormatter.operation_failed("读取配置文件", path, e), path) from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(MessageFormatter.operation_failed("解析配置文件", path, e), path) from e

    if not isinstance(data, dict):
        raise ConfigError(f"配置文件顶层必须是映射: {path}", path)

    # 环境变量默认值 < 配置文件 < 显式覆盖
    defaults = get_config().processing
    data.setdefault("max_workers", defaults.MAX_WORKERS)
    data.setdefault("executor", defaults.EXECUTOR)
    data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        run_config = RunConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"配置校验失败 [{path}]: {format_validation_error(e)}", path) from e

    base_dir = path.parent
    return run_config.model_copy(
        update={
            "input_dir": _resolve(base_dir, run_config.input_dir),
            "output_dir": _resolve(base_dir, run_config.output_dir),
        }
    )


def _resolve(base_dir: Path, directory: Path) -> Path:
    return directory if directory.is_absolute() else base_dir / directory


def format_validation_error(error: PydanticValidationError) -> str:
    """格式化验证错误"""
    messages = []
    for err in error.errors():
        field = ".".join(str(loc) for loc in err["loc"])
        msg = err["msg"]
        if field:
            messages.append(f"{field}: {msg}")
        else:
            messages.append(msg)
    return "; ".join(messages)
