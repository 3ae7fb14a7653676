"""任务分发模块。

为 预设 × 文件 的每一对启动一个并发任务，并在全部完成后返回。
"""

from collections.abc import Callable, Sequence
from concurrent.futures import (
    Executor,
    Future,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    as_completed,
)
from pathlib import Path

from ..core.writer import build_output_path
from ..exceptions import BatchAbortedError, ErrorHandler, VariantError
from ..models.preset import Preset
from ..models.variant_result import VariantResult
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter
from .pipeline import VariantTask, process_variant


logger = get_logger()

TaskFunction = Callable[[VariantTask], VariantResult]


class TaskDispatcher:
    """并发任务分发器

    默认每个任务一个工作线程（不做池化限制），可用 max_workers 限制并发数。
    """

    def __init__(
        self,
        max_workers: int | None = None,
        executor_type: str = "thread",
        fail_fast: bool = False,
        task_function: TaskFunction = process_variant,
    ):
        """初始化分发器

        Args:
            max_workers: 最大并发数，None 表示与任务数相同
            executor_type: 执行器类型 ('thread'/'process')
            fail_fast: 首个任务失败时取消剩余任务并抛出 BatchAbortedError
            task_function: 单任务处理函数
        """
        if max_workers is not None and max_workers <= 0:
            raise VariantError("max_workers 必须大于 0")
        if executor_type not in {"thread", "process"}:
            raise VariantError("executor_type 必须是 'thread' 或 'process'")

        self.max_workers = max_workers
        self.executor_type = executor_type
        self.fail_fast = fail_fast
        self.task_function = task_function

    def build_tasks(
        self,
        presets: Sequence[Preset],
        files: Sequence[str | Path],
        input_dir: str | Path,
        output_dir: str | Path,
    ) -> list[VariantTask]:
        """按 预设优先、文件其次 的顺序构建任务列表，并记录进度日志"""
        input_dir = Path(input_dir)
        output_dir = Path(output_dir)

        tasks: list[VariantTask] = []
        for index, preset in enumerate(presets):
            logger.info(MessageFormatter.preset_progress(index, preset.name))

            for file in files:
                source_path = input_dir / file
                logger.info(MessageFormatter.file_progress(source_path))
                tasks.append(
                    VariantTask(
                        preset=preset,
                        source_path=source_path,
                        output_path=build_output_path(
                            output_dir, preset.name, Path(file).name
                        ),
                    )
                )

        return tasks

    def dispatch(
        self,
        presets: Sequence[Preset],
        files: Sequence[str | Path],
        input_dir: str | Path,
        output_dir: str | Path,
    ) -> list[VariantResult]:
        """启动全部任务并等待完成

        Args:
            presets: 预设列表
            files: 相对于 input_dir 的文件列表
            input_dir: 输入目录
            output_dir: 输出目录

        Returns:
            list[VariantResult]: 全部任务结果（完成顺序）

        Raises:
            BatchAbortedError: fail_fast 模式下有任务失败
        """
        tasks = self.build_tasks(presets, files, input_dir, output_dir)
        return self.execute(tasks)

    def execute(self, tasks: Sequence[VariantTask]) -> list[VariantResult]:
        """并发执行任务，所有任务完成后返回"""
        if not tasks:
            return []

        workers = self.max_workers or len(tasks)
        executor_class = self._choose_executor()
        logger.debug(
            f"使用{executor_class.__name__}: 任务数={len(tasks)}, 并发数={workers}"
        )

        results: list[VariantResult] = []
        with executor_class(max_workers=workers) as executor:
            future_to_task = self._submit_tasks(executor, tasks, results)
            self._collect_results(executor, future_to_task, results)

        return results

    def _submit_tasks(
        self,
        executor: Executor,
        tasks: Sequence[VariantTask],
        results: list[VariantResult],
    ) -> dict[Future[VariantResult], VariantTask]:
        """提交任务到执行器"""
        future_to_task: dict[Future[VariantResult], VariantTask] = {}

        for task in tasks:
            try:
                future = executor.submit(self.task_function, task)
                future_to_task[future] = task
            except RuntimeError as e:
                results.append(self._error_result(task, e, "任务提交"))

        return future_to_task

    def _collect_results(
        self,
        executor: Executor,
        future_to_task: dict[Future[VariantResult], VariantTask],
        results: list[VariantResult],
    ) -> None:
        """收集任务执行结果"""
        for future in as_completed(future_to_task):
            task = future_to_task[future]

            try:
                result = future.result()
            except Exception as e:
                result = self._error_result(task, e, "并发任务处理")

            results.append(result)

            if result.success:
                logger.debug(f"处理成功: {result.get_summary()}")
                continue

            logger.warning(f"处理失败: {result.get_summary()}")
            if self.fail_fast:
                executor.shutdown(wait=True, cancel_futures=True)
                raise BatchAbortedError(result)

    def _choose_executor(self) -> type[Executor]:
        if self.executor_type == "process":
            return ProcessPoolExecutor
        return ThreadPoolExecutor

    @staticmethod
    def _error_result(
        task: VariantTask, error: Exception, operation: str
    ) -> VariantResult:
        return ErrorHandler.handle_task_error(
            error,
            task.preset.name,
            task.source_path,
            task.output_path,
            operation,
        )
