"""图像处理相关常量定义。"""

from typing import Final


class ImageFormats:
    """输入输出格式"""

    # 输入文件扩展名（小写比较）
    INPUT_EXTENSIONS: Final[frozenset[str]] = frozenset({".jpg", ".jpeg", ".png"})

    # 输出扩展名到 Pillow 格式名
    EXTENSION_FORMATS: Final[dict[str, str]] = {
        ".jpg": "JPEG",
        ".jpeg": "JPEG",
        ".png": "PNG",
    }

    DEFAULT_OUTPUT_FORMAT: Final[str] = "JPEG"

    @classmethod
    def is_input_image(cls, suffix: str) -> bool:
        """扩展名是否为可处理的输入图片（大小写不敏感）"""
        return suffix.lower() in cls.INPUT_EXTENSIONS

    @classmethod
    def format_for_suffix(cls, suffix: str) -> str:
        """根据输出扩展名确定编码格式"""
        return cls.EXTENSION_FORMATS.get(suffix.lower(), cls.DEFAULT_OUTPUT_FORMAT)


class QualityDefaults:
    """质量相关默认值"""

    MIN_QUALITY: Final[int] = 1
    MAX_QUALITY: Final[int] = 100


class ProcessingDefaults:
    """处理相关默认值"""

    INPUT_DIR: Final[str] = "in"
    OUTPUT_DIR: Final[str] = "out"

    # 输出文件名模式
    OUTPUT_PATTERN: Final[str] = "{preset}_{name}"

    # JPEG 透明通道合成背景色
    JPEG_BACKGROUND: Final[tuple[int, int, int]] = (255, 255, 255)


class ExitCodes:
    """进程退出码"""

    OK: Final[int] = 0
    TASK_FAILURES: Final[int] = 1
    SETUP_ERROR: Final[int] = 2
