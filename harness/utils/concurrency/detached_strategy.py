from .base_strategy import ExecutionStrategy, Policy


class DetachedStrategy(ExecutionStrategy):
    """并发分离策略（fire-and-forget）：启动全部任务后立即返回，不等待任何任务。"""

    policy = Policy.DETACHED

    def execute(self, tasks):
        """为每个任务创建独立线程后立即返回。

        返回时不保证任何任务已开始或已结束，任务之间也没有顺序保证。
        返回的记录 run_mode 为 DETACHED、状态停留在 RUNNING；需要观察完成时由调用方调用 run.drain()。
        任务抛出的异常在其结束时记录日志并追加到 run.failures，无论 error_handling 为何值都不会抛出。

        Args:
            tasks (Sequence[Task]): 有序任务列表。

        Returns:
            StrategyRun: 持有全部未等待句柄的执行记录。
        """
        run = self._new_run(tasks)
        for task in run.tasks:
            try:
                handle = self._spawn(task)
            except Exception as e:
                run.failures.append((task.id, self._handle_error(e, f"Task {task.id} submission")[1]))
                continue
            # 没有调用方等待，任务异常在结束时直接记录到 run.failures
            self._report_on_completion(run, handle)
            run.handles.append(handle)
        return self._finish_run(run)
