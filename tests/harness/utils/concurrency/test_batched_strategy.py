import pytest
import time
from unittest.mock import Mock

from harness.task import Task, build_tasks
from harness.utils.concurrency import BatchedStrategy, RunState


class FailingTask(Task):
    def execute(self):
        raise ValueError("Test error")


class TestBatchedStrategy:
    """BatchedStrategy 的测试套件。"""

    def setup_method(self):
        """每个测试方法前的设置。"""
        self.mock_logger = Mock()
        self.strategy = BatchedStrategy(logger=self.mock_logger)
        # 第一个任务最慢
        self.tasks = build_tasks([("A", 300), ("B", 100), ("C", 200), ("D", 150)])

    def test_returns_after_every_finish(self, emit_recorder):
        run = self.strategy.execute(self.tasks)

        finished = [l for l in emit_recorder.snapshot() if l.startswith("Finished")]
        assert len(finished) == 4
        assert run.state is RunState.DRAINED
        assert all(h.retired for h in run.handles)

    def test_timing_is_max_duration(self, emit_recorder):
        start_time = time.perf_counter()
        self.strategy.execute(self.tasks)
        elapsed_time = time.perf_counter() - start_time

        # 总时长约为最长任务 0.3s，而非总和 0.75s
        assert elapsed_time >= 0.3
        assert elapsed_time < 0.6

    def test_all_start_before_slowest_finishes(self, emit_recorder):
        self.strategy.execute(self.tasks)

        slowest_finish = emit_recorder.index("Finished A in 0.3 seconds")
        for task in self.tasks:
            assert emit_recorder.index(f"Started {task.id}") < slowest_finish

    def test_completion_order_follows_duration(self, emit_recorder):
        self.strategy.execute(self.tasks)

        # 较短任务先于较长任务完成，与创建顺序无关
        assert emit_recorder.index("Finished B in 0.1 seconds") < emit_recorder.index("Finished A in 0.3 seconds")

    def test_failure_log_mode(self, emit_recorder):
        tasks = self.tasks[1:2] + [FailingTask(id="X", duration=0)]
        run = self.strategy.execute(tasks)

        assert run.failures == [("X", "Task X failed: Test error")]
        assert "Finished B in 0.1 seconds" in emit_recorder.lines
        assert run.state is RunState.DRAINED
        assert self.mock_logger.error.call_count >= 2

    def test_failure_raise_mode_awaits_all_handles(self, emit_recorder):
        strategy = BatchedStrategy(logger=self.mock_logger, error_handling='raise')
        tasks = [FailingTask(id="X", duration=0), Task(id="Slow", duration=400)]

        with pytest.raises(ValueError, match="Test error"):
            strategy.execute(tasks)

        # 异常抛出前较慢的任务也已完成
        assert "Finished Slow in 0.4 seconds" in emit_recorder.snapshot()

    def test_failure_raise_mode_reports_first_error(self, emit_recorder):
        strategy = BatchedStrategy(logger=self.mock_logger, error_handling='raise')
        tasks = [Task(id="A", duration=100), FailingTask(id="X", duration=0), FailingTask(id="Y", duration=0)]

        with pytest.raises(ValueError, match="Test error"):
            strategy.execute(tasks)

        # 两个失败都被记录（信息 + 堆栈各一条）
        assert self.mock_logger.error.call_count == 4
        assert "Finished A in 0.1 seconds" in emit_recorder.snapshot()

    def test_empty_tasks(self, emit_recorder):
        run = self.strategy.execute([])
        assert run.handles == []
        assert run.state is RunState.DRAINED
