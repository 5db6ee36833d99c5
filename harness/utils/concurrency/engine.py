from harness.config import settings

from .base_strategy import Policy
from .batched_strategy import BatchedStrategy
from .detached_strategy import DetachedStrategy
from .lockstep_strategy import LockstepStrategy
from .sequential_strategy import SequentialStrategy

_STRATEGY_CLASSES = {
    Policy.SEQUENTIAL: SequentialStrategy,
    Policy.DETACHED: DetachedStrategy,
    Policy.LOCKSTEP: LockstepStrategy,
    Policy.BATCHED: BatchedStrategy,
}


class StrategyEngine:
    """策略引擎：对同一组任务按四种策略之一执行。"""

    def __init__(self, logger=None, error_handling=None, thread_name_prefix=None):
        """初始化策略引擎，为每种策略创建一个策略实例。

        Args:
            logger (Logger, optional): 日志对象，默认使用全局 sys_logger。
            error_handling (str, optional): 'log' 或 'raise'，默认取 settings.ERROR_HANDLING。
            thread_name_prefix (str, optional): 工作线程名称前缀，默认取 settings.THREAD_NAME_PREFIX。
        """
        strategy_kwargs = {
            'logger': logger,
            'error_handling': error_handling or settings.ERROR_HANDLING,
            'thread_name_prefix': thread_name_prefix or settings.THREAD_NAME_PREFIX,
        }
        self._strategies = {
            policy: strategy_cls(**strategy_kwargs)
            for policy, strategy_cls in _STRATEGY_CLASSES.items()
        }

    def get_strategy(self, policy):
        return self._strategies[Policy(policy)]

    def run(self, policy, tasks):
        """按指定策略执行任务。

        Args:
            policy (Policy | str): 策略或其字符串值。
            tasks (Sequence[Task]): 有序任务列表。

        Returns:
            StrategyRun: 本次执行的记录。

        Raises:
            ValueError: 未知策略。
        """
        return self.get_strategy(policy).execute(tasks)

    def run_sequential(self, tasks):
        return self.run(Policy.SEQUENTIAL, tasks)

    def run_detached(self, tasks):
        return self.run(Policy.DETACHED, tasks)

    def run_lockstep(self, tasks):
        return self.run(Policy.LOCKSTEP, tasks)

    def run_batched(self, tasks):
        return self.run(Policy.BATCHED, tasks)
