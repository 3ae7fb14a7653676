"""锚点模型。

定义裁剪和填充时使用的参考点，以及锚点名称到锚点的只读查找表。
"""

from collections.abc import Iterator, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Final


class Anchor(str, Enum):
    """二维参考点枚举，CENTER 为零值"""

    CENTER = "center"
    TOP_LEFT = "top-left"
    TOP = "top"
    TOP_RIGHT = "top-right"
    LEFT = "left"
    RIGHT = "right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM = "bottom"
    BOTTOM_RIGHT = "bottom-right"

    @property
    def horizontal(self) -> str:
        """水平方向对齐: left / center / right"""
        if self in (Anchor.TOP_LEFT, Anchor.LEFT, Anchor.BOTTOM_LEFT):
            return "left"
        if self in (Anchor.TOP_RIGHT, Anchor.RIGHT, Anchor.BOTTOM_RIGHT):
            return "right"
        return "center"

    @property
    def vertical(self) -> str:
        """垂直方向对齐: top / center / bottom"""
        if self in (Anchor.TOP_LEFT, Anchor.TOP, Anchor.TOP_RIGHT):
            return "top"
        if self in (Anchor.BOTTOM_LEFT, Anchor.BOTTOM, Anchor.BOTTOM_RIGHT):
            return "bottom"
        return "center"


def normalize_anchor_name(name: str) -> str:
    """标准化锚点名称：忽略大小写、连字符、下划线和空格"""
    return "".join(ch for ch in name.lower() if ch not in "-_ ")


class AnchorTable(Mapping[str, Anchor]):
    """锚点查找表

    启动时构建一次，之后只读，可在并发任务间无锁共享。
    """

    def __init__(self, entries: Mapping[str, Anchor] | None = None):
        source = entries if entries is not None else {a.value: a for a in Anchor}
        self._entries: Mapping[str, Anchor] = MappingProxyType(
            {normalize_anchor_name(k): v for k, v in source.items()}
        )

    def __getitem__(self, name: str) -> Anchor:
        return self._entries[normalize_anchor_name(name)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_anchor_name(name) in self._entries

    def lookup(self, name: str) -> Anchor:
        """宽松查找，未知名称返回零值 CENTER"""
        return self._entries.get(normalize_anchor_name(name), Anchor.CENTER)

    def resolve(self, name: str) -> Anchor:
        """严格查找，未知名称抛出 ValueError（用于配置加载阶段）"""
        try:
            return self[name]
        except KeyError:
            available = ", ".join(a.value for a in Anchor)
            raise ValueError(f"未知的锚点: {name}，可用锚点: {available}") from None


# 进程级只读锚点表
DEFAULT_ANCHORS: Final[AnchorTable] = AnchorTable()
