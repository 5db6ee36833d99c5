from .base_strategy import ExecutionStrategy, Policy


class BatchedStrategy(ExecutionStrategy):
    """并发批量策略：先启动全部任务，再按创建顺序逐个等待。"""

    policy = Policy.BATCHED

    def execute(self, tasks):
        """启动全部任务后等待全部完成。

        总耗时约为最长任务的时长；任务之间的完成顺序不保证与创建顺序一致，
        但返回一定发生在最慢任务的 Finished 之后。

        Args:
            tasks (Sequence[Task]): 有序任务列表。

        Returns:
            StrategyRun: 已处于 DRAINED 状态的执行记录。
        """
        run = self._new_run(tasks)

        # 提交任务
        for task in run.tasks:
            try:
                run.handles.append(self._spawn(task))
            except Exception as e:
                run.failures.append((task.id, self._handle_error(e, f"Task {task.id} submission")[1]))

        # 等待全部完成
        self._await_all(run, run.handles)

        return self._finish_run(run)
