import time
import traceback
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from harness import sys_logger

from .execution_handle import ExecutionHandle


class Policy(str, Enum):
    """四种执行策略。"""
    SEQUENTIAL = "sequential"
    DETACHED = "detached"
    LOCKSTEP = "lockstep"
    BATCHED = "batched"

    @property
    def run_mode(self):
        # 只有 fire-and-forget 放弃“返回前全部等待完成”的约束
        return RunMode.DETACHED if self is Policy.DETACHED else RunMode.AWAITED


class RunMode(str, Enum):
    AWAITED = "awaited"
    DETACHED = "detached"


class RunState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    DRAINED = "drained"


@dataclass
class StrategyRun:
    """一次策略执行的记录：任务列表、所选策略以及它创建的全部执行句柄。"""

    policy: Policy
    tasks: tuple
    handles: List[ExecutionHandle] = field(default_factory=list)
    failures: List[Tuple[str, str]] = field(default_factory=list)
    state: RunState = RunState.IDLE
    started_at: Optional[float] = None
    finished_at: Optional[float] = None

    @property
    def run_mode(self):
        return self.policy.run_mode

    @property
    def pending(self):
        """尚未被等待的句柄。"""
        return [h for h in self.handles if not h.retired]

    @property
    def elapsed(self):
        """策略调用本身的耗时（秒），调用返回前为 None。"""
        if self.started_at is None or self.finished_at is None:
            return None
        return self.finished_at - self.started_at

    def mark_running(self):
        self.state = RunState.RUNNING
        self.started_at = time.perf_counter()

    def mark_returned(self):
        """策略调用返回。AWAITED 模式下此时必须已无未等待的句柄。"""
        self.finished_at = time.perf_counter()
        if self.run_mode is RunMode.DETACHED:
            return
        if self.pending:
            raise RuntimeError(
                f"{self.policy.value} run returned with {len(self.pending)} un-awaited handle(s)"
            )
        self.state = RunState.DRAINED

    def drain(self):
        """阻塞直到所有未等待的句柄完成。

        引擎从不对 DETACHED 运行调用此方法；需要显式观察其完成的调用方（测试、退出清理）自行调用。
        全部句柄等待完成后，再原样抛出第一个任务异常。
        """
        first_error = None
        for handle in self.pending:
            try:
                handle.await_completion()
            except Exception as e:
                if first_error is None:
                    first_error = e
        self.state = RunState.DRAINED
        if first_error is not None:
            raise first_error


class ExecutionStrategy:
    """执行策略基类，定义统一接口和通用属性。"""

    policy = None

    def __init__(self, logger=None, error_handling='log', thread_name_prefix='Harness-Worker'):
        """初始化执行策略基类。

        Args:
            logger (Logger, optional): 日志对象，默认使用全局 sys_logger。
            error_handling (str): 错误处理策略，'log'记录错误继续执行，'raise'遇错即停。
            thread_name_prefix (str): 工作线程名称前缀。
        """
        if error_handling not in ('log', 'raise'):
            raise ValueError(f"error_handling must be 'log' or 'raise', got {error_handling!r}")
        self.logger = logger
        self.error_handling = error_handling
        self.thread_name_prefix = thread_name_prefix

    def execute(self, tasks):
        """按策略执行任务的抽象方法。

        Args:
            tasks (Sequence[Task]): 有序任务列表。

        Returns:
            StrategyRun: 本次执行的记录。
        """
        raise NotImplementedError("Strategy must implement execute method.")

    def _new_run(self, tasks):
        run = StrategyRun(policy=self.policy, tasks=tuple(tasks))
        run.mark_running()
        self._log_info(f"Starting {self.policy.value} run with {len(run.tasks)} tasks")
        return run

    def _finish_run(self, run):
        run.mark_returned()
        self._log_info(
            f"{self.policy.value.capitalize()} run returned after {run.elapsed:.3f}s "
            f"({len(run.failures)} failed, state={run.state.value})"
        )
        return run

    def _spawn(self, task):
        """在独立线程上立即开始执行任务，返回其执行句柄。

        每个任务独占一个单线程池；提交后立即 shutdown(wait=False)，已提交的任务继续运行至结束。
        """
        executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix=f"{self.thread_name_prefix}-{task.id}",
        )
        try:
            future = executor.submit(task.execute)
        finally:
            executor.shutdown(wait=False)
        return ExecutionHandle(task.id, future)

    def _run_inline(self, run, task):
        """在调用线程上执行任务。"""
        try:
            task.execute()
        except Exception as e:
            run.failures.append((task.id, self._handle_error(e, f"Task {task.id}")[1]))

    def _await(self, run, handle):
        """等待单个句柄完成。"""
        try:
            handle.await_completion()
        except Exception as e:
            run.failures.append((handle.task_id, self._handle_error(e, f"Task {handle.task_id}")[1]))

    def _await_all(self, run, handles):
        """按顺序等待全部句柄。

        raise 模式下先等待完所有句柄，再抛出第一个异常，保证抛出时没有仍在运行的任务。
        """
        first_error = None
        for handle in handles:
            try:
                self._await(run, handle)
            except Exception as e:
                if first_error is None:
                    first_error = e
        if first_error is not None:
            run.mark_returned()
            raise first_error

    def _report_on_completion(self, run, handle):
        """任务结束时记录其异常，用于没有调用方等待的句柄。

        回调运行在工作线程上，此处只记录不抛出。
        """
        def on_done(future):
            error = future.exception()
            if error is not None:
                run.failures.append((handle.task_id, self._report_error(error, f"Task {handle.task_id}")))

        handle.add_done_callback(on_done)

    def _get_logger(self):
        return self.logger if self.logger is not None else sys_logger

    def _log_info(self, message):
        """统一的信息日志记录。"""
        self._get_logger().info(message)

    def _log_error(self, message):
        """统一的错误日志记录。"""
        self._get_logger().error(message)

    def _report_error(self, error, context="Task execution"):
        """记录错误信息与完整堆栈，返回错误描述。"""
        error_str = str(error).strip() or f"<{error.__class__.__name__}>"
        error_msg = f"{context} failed: {error_str}"
        self._log_error(error_msg)
        # 记录完整堆栈
        self._log_error("".join(traceback.format_exception(type(error), error, error.__traceback__)))
        return error_msg

    def _handle_error(self, error, context="Task execution"):
        """统一的错误处理。"""
        error_msg = self._report_error(error, context)

        if self.error_handling == 'raise':
            raise error

        return (False, error_msg)
