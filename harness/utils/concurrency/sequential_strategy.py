from .base_strategy import ExecutionStrategy, Policy


class SequentialStrategy(ExecutionStrategy):
    """顺序执行策略：在调用线程上逐个执行，前一个结束后才开始下一个。"""

    policy = Policy.SEQUENTIAL

    def execute(self, tasks):
        """在调用线程上按顺序执行任务。

        总耗时约为所有任务时长之和，任务 i 的 Finished 一定先于任务 i+1 的 Started。

        Args:
            tasks (Sequence[Task]): 有序任务列表。

        Returns:
            StrategyRun: 已处于 DRAINED 状态的执行记录（不创建执行句柄）。
        """
        run = self._new_run(tasks)
        for task in run.tasks:
            self._run_inline(run, task)
        return self._finish_run(run)
