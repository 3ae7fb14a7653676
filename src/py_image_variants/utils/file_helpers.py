"""文件工具模块。

提供输入目录扫描和输入/输出目录生命周期管理。
"""

import os
from pathlib import Path

from ..models.constants import ImageFormats
from .logging_helpers import get_logger
from .message_formatter import MessageFormatter


logger = get_logger()


def ensure_directories(input_dir: str | Path, output_dir: str | Path) -> None:
    """确保输入和输出目录存在

    输入目录不存在时会自动创建，但本次运行没有可处理的文件，抛出 DiscoveryError。

    Args:
        input_dir: 输入目录
        output_dir: 输出目录

    Raises:
        DiscoveryError: 输入目录不存在或不是目录
    """
    from ..exceptions import DiscoveryError  # 避免循环导入

    input_dir = Path(input_dir)
    output_dir = Path(output_dir)

    logger.info("检查输入目录是否存在...")
    if not input_dir.exists():
        input_dir.mkdir(parents=True, exist_ok=True)
        raise DiscoveryError(f"输入目录不存在，已自动创建: {input_dir}", input_dir)
    if not input_dir.is_dir():
        raise DiscoveryError(MessageFormatter.path_not_directory(input_dir), input_dir)

    logger.info("创建输出目录...")
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DiscoveryError(
            MessageFormatter.operation_failed("创建输出目录", output_dir, e), output_dir
        ) from e


def find_image_files(
    directory: str | Path,
    exclude_dirs: list[str | Path] | None = None,
) -> list[Path]:
    """递归查找目录中的图像文件。

    仅匹配 .jpg/.jpeg/.png（大小写不敏感）。输出文件名只使用文件的基础名称，
    因此基础名称与先前文件重复的文件会被跳过并记录警告。

    Args:
        directory: 搜索目录
        exclude_dirs: 要排除的目录（通常是位于输入目录内的输出目录）

    Returns:
        list[Path]: 相对于 directory 的文件路径，按路径排序

    Raises:
        DiscoveryError: 遍历目录失败
    """
    from ..exceptions import DiscoveryError  # 避免循环导入

    directory = Path(directory)
    if not directory.is_dir():
        raise DiscoveryError(MessageFormatter.directory_not_found(directory), directory)

    excluded = {Path(d).resolve() for d in exclude_dirs or []}

    def _on_error(error: OSError) -> None:
        raise DiscoveryError(
            MessageFormatter.operation_failed("搜索图像文件", directory, error),
            directory,
        ) from error

    candidates: list[Path] = []
    for root, dirs, files in os.walk(directory, onerror=_on_error):
        root_path = Path(root)
        dirs[:] = sorted(d for d in dirs if (root_path / d).resolve() not in excluded)
        candidates.extend(
            (root_path / name).relative_to(directory)
            for name in sorted(files)
            if ImageFormats.is_input_image(Path(name).suffix)
        )

    found: list[Path] = []
    seen: dict[str, Path] = {}
    for relative in sorted(candidates):
        if relative.name in seen:
            logger.warning(
                f"跳过同名文件 {relative}，与 {seen[relative.name]} 的输出文件名冲突"
            )
            continue
        seen[relative.name] = relative
        found.append(relative)

    return found
