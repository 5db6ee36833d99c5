from concurrent.futures import Future


class HandleRetiredError(RuntimeError):
    """对已等待完成（退役）的句柄再次等待时抛出。"""


class ExecutionHandle:
    """单个在途任务的不透明引用，仅支持一次阻塞等待。"""

    def __init__(self, task_id, future: Future):
        """初始化执行句柄。

        Args:
            task_id (str): 任务标识，用于日志与错误信息。
            future (Future): 承载任务执行的 Future，由独立工作线程完成。
        """
        self.task_id = task_id
        self._future = future
        self._retired = False

    @property
    def retired(self):
        """是否已被等待过。"""
        return self._retired

    def done(self):
        """任务是否已执行结束，不阻塞。"""
        return self._future.done()

    def add_done_callback(self, fn):
        """任务结束后以 Future 为参数调用 fn；若已结束则立即在当前线程调用。"""
        self._future.add_done_callback(fn)

    def await_completion(self):
        """阻塞直到任务的 execute 返回，随后句柄退役。

        Raises:
            HandleRetiredError: 句柄已被等待过。
            Exception: execute 内部抛出的异常原样传递给调用方。
        """
        if self._retired:
            raise HandleRetiredError(f"Handle for task {self.task_id} has already been awaited")
        try:
            self._future.result()
        finally:
            self._retired = True

    def __repr__(self):
        status = "retired" if self._retired else ("done" if self.done() else "running")
        return f"<ExecutionHandle task={self.task_id} {status}>"
