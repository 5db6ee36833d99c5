"""执行策略模块，提供顺序、并发分离、并发锁步、并发批量四种任务执行策略。

Usage:
    from harness.task import build_tasks
    from harness.utils.concurrency import StrategyEngine, Policy

    tasks = build_tasks([("A", 1000), ("B", 1100)])
    engine = StrategyEngine()

    # 启动全部任务后等待全部完成
    run = engine.run_batched(tasks)

    # fire-and-forget：立即返回，需要时显式 drain
    run = engine.run(Policy.DETACHED, tasks)
    run.drain()
"""

from .base_strategy import ExecutionStrategy, Policy, RunMode, RunState, StrategyRun
from .batched_strategy import BatchedStrategy
from .detached_strategy import DetachedStrategy
from .engine import StrategyEngine
from .execution_handle import ExecutionHandle, HandleRetiredError
from .lockstep_strategy import LockstepStrategy
from .sequential_strategy import SequentialStrategy

__all__ = [
    'ExecutionStrategy',
    'SequentialStrategy',
    'DetachedStrategy',
    'LockstepStrategy',
    'BatchedStrategy',
    'StrategyEngine',
    'StrategyRun',
    'ExecutionHandle',
    'HandleRetiredError',
    'Policy',
    'RunMode',
    'RunState',
]
