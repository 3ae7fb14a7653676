"""变体生成处理引擎模块。

包含配置加载、任务分发、单任务流水线和耗时统计。
"""

from .config_loader import load_run_config
from .dispatcher import TaskDispatcher
from .pipeline import VariantTask, process_variant
from .timing import TimingProbe


__all__ = [
    "TaskDispatcher",
    "TimingProbe",
    "VariantTask",
    "load_run_config",
    "process_variant",
]
