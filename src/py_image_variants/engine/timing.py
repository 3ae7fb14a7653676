"""耗时统计模块。"""

import time
from types import TracebackType

from humanize import precisedelta

from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter


logger = get_logger()


class TimingProbe:
    """统计代码块的墙钟耗时，退出时记录一次日志

    Examples:
        >>> with TimingProbe("processing") as probe:
        ...     dispatcher.dispatch(...)
        >>> probe.elapsed
    """

    def __init__(self, label: str = "processing"):
        self.label = label
        self.elapsed = 0.0
        self._start: float | None = None

    def __enter__(self) -> "TimingProbe":
        self._start = time.perf_counter()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        # 无论是否异常都记录耗时
        del exc_type, exc_val, exc_tb
        if self._start is not None:
            self.elapsed = time.perf_counter() - self._start
        logger.info(MessageFormatter.elapsed(self.label, self.humanized()))

    def humanized(self) -> str:
        """人类可读的耗时"""
        return precisedelta(self.elapsed, format="%0.2f")
