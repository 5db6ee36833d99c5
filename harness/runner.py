"""
Runner driving all four execution policies over one task batch.

Each policy gets its own id prefix so every output line can be attributed to
the policy that produced it, and a section banner is emitted before it runs.
"""

from typing import Dict, List, Optional, Sequence

from harness import emit, sys_logger
from harness.config import settings
from harness.constant import END_BANNER, POLICY_PREFIXES, POLICY_TITLES, SECTION_BANNER, START_BANNER
from harness.task import Task, build_tasks
from harness.utils.concurrency import Policy, StrategyEngine, StrategyRun

# 固定的执行顺序
POLICY_ORDER = (Policy.SEQUENTIAL, Policy.DETACHED, Policy.LOCKSTEP, Policy.BATCHED)


class Runner:
    """按固定顺序依次运行四种策略。"""

    def __init__(self, tasks: Sequence[Task], engine: Optional[StrategyEngine] = None,
                 prefixes: Optional[Dict[str, str]] = None):
        self.tasks = tuple(tasks)
        self.engine = engine or StrategyEngine()
        self.prefixes = {**POLICY_PREFIXES, **(prefixes or {})}

    def prefixed_tasks(self, policy: Policy) -> List[Task]:
        prefix = self.prefixes[Policy(policy).value]
        return [task.with_prefix(prefix) for task in self.tasks]

    def run(self) -> List[StrategyRun]:
        """运行全部策略。

        顺序、锁步、批量三种策略返回时任务均已完成；分离策略立即返回，
        其任务输出可能出现在后续横幅之后，这是预期行为。

        Returns:
            list[StrategyRun]: 按执行顺序排列的各策略执行记录。
        """
        emit(START_BANNER)
        runs = []
        for policy in POLICY_ORDER:
            emit(SECTION_BANNER.format(title=POLICY_TITLES[policy.value]))
            run = self.engine.run(policy, self.prefixed_tasks(policy))
            sys_logger.debug(f"{policy.value} call returned: {run!r}")
            runs.append(run)
        emit(END_BANNER)
        return runs


def main() -> int:
    """进程入口：不接受参数，总是返回 0。

    分离策略的工作线程在解释器退出前会被等待结束，因此其输出不会丢失。
    """
    tasks = build_tasks(settings.TASKS)
    Runner(tasks).run()
    return 0
