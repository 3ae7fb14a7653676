"""统一配置管理模块。

提供应用程序的全局默认配置，支持环境变量覆盖。
conf.yaml 中的值优先于这里的默认值，命令行参数优先于两者。
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class TransformDefaults:
    """变换相关的默认配置"""

    # JPEG 默认质量（预设未指定 quality 时使用）
    JPEG_QUALITY: int = 95
    JPEG_OPTIMIZE: bool = False
    PNG_COMPRESS_LEVEL: int = 6

    # 是否根据 EXIF 方向自动旋转源图
    AUTO_ORIENT: bool = True


@dataclass(frozen=True)
class ProcessingDefaults:
    """处理相关的默认配置"""

    CONFIG_FILE: str = "conf.yaml"

    # 并发设置，None 表示每个 (预设, 文件) 一个工作线程
    MAX_WORKERS: int | None = None
    EXECUTOR: str = "thread"


@dataclass(frozen=True)
class LoggingDefaults:
    """日志相关的默认配置"""

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # 文件日志
    ENABLE_FILE_LOGGING: bool = False
    LOG_FILE_PATH: str = "py_image_variants.log"


class AppConfig:
    """应用程序配置管理器

    支持环境变量覆盖默认配置
    """

    def __init__(self):
        self.transform = TransformDefaults()
        self.processing = ProcessingDefaults()
        self.logging = LoggingDefaults()

        # 从环境变量加载配置
        self._load_from_env()

    def _load_from_env(self):
        """从环境变量加载配置"""
        if jpeg_quality := os.getenv("PIV_DEFAULT_QUALITY"):
            object.__setattr__(self.transform, "JPEG_QUALITY", int(jpeg_quality))

        if auto_orient := os.getenv("PIV_AUTO_ORIENT"):
            object.__setattr__(
                self.transform,
                "AUTO_ORIENT",
                auto_orient.lower() in ("true", "1", "yes"),
            )

        if config_file := os.getenv("PIV_CONFIG_FILE"):
            object.__setattr__(self.processing, "CONFIG_FILE", config_file)

        if max_workers := os.getenv("PIV_MAX_WORKERS"):
            object.__setattr__(self.processing, "MAX_WORKERS", int(max_workers))

        if executor := os.getenv("PIV_EXECUTOR"):
            object.__setattr__(self.processing, "EXECUTOR", executor.lower())

        # 日志配置
        if log_level := os.getenv("PIV_LOG_LEVEL"):
            object.__setattr__(self.logging, "LOG_LEVEL", log_level.upper())

        if enable_file_log := os.getenv("PIV_ENABLE_FILE_LOGGING"):
            object.__setattr__(
                self.logging,
                "ENABLE_FILE_LOGGING",
                enable_file_log.lower() in ("true", "1", "yes"),
            )


# 全局配置实例
config = AppConfig()


def get_config() -> AppConfig:
    """获取全局配置实例"""
    return config


def reset_config():
    """重置配置（主要用于测试）"""
    global config
    config = AppConfig()
