from .base_strategy import ExecutionStrategy, Policy


class LockstepStrategy(ExecutionStrategy):
    """并发锁步策略：启动一个任务后立即等待它结束，再启动下一个。

    每个任务都付出一次创建线程的开销，却得不到任何并行，观察到的顺序与顺序执行完全一致。
    用来演示“启动后马上 join”这种写法的陷阱，不是对顺序执行的优化。
    """

    policy = Policy.LOCKSTEP

    def execute(self, tasks):
        run = self._new_run(tasks)
        for task in run.tasks:
            try:
                handle = self._spawn(task)
            except Exception as e:
                run.failures.append((task.id, self._handle_error(e, f"Task {task.id} submission")[1]))
                continue
            run.handles.append(handle)
            self._await(run, handle)
        return self._finish_run(run)
