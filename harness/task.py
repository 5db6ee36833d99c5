"""
Task model for the execution harness.

A Task is an immutable unit of work: an identifier plus a declared duration in
milliseconds. Executing it blocks the running thread for that duration and
emits a Started / Finished line pair through the process-wide output sink.
"""

import time
from typing import Iterable, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from harness import emit, sys_logger
from harness.constant import FINISHED_MESSAGE, STARTED_MESSAGE


def _delay(seconds: float) -> None:
    """阻塞当前线程指定秒数，中断时直接结束等待。

    只接受 InterruptedError 这一种中断：PEP 475 之后 time.sleep 遇到 EINTR 会自动重试，
    只有信号处理函数主动抛出 InterruptedError 时才会走到这里。KeyboardInterrupt 不吞掉。
    """
    try:
        time.sleep(seconds)
    except InterruptedError as e:
        sys_logger.debug(f"Delay of {seconds}s interrupted: {e}")


class Task(BaseModel):
    """
    Immutable unit of work.

    Attributes:
        id: Task identifier, also used in every emitted line
        duration: Declared duration in milliseconds
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Task identifier")
    duration: int = Field(..., ge=0, description="Declared duration in milliseconds")

    @property
    def seconds(self) -> float:
        """Declared duration in seconds. Never the measured elapsed time."""
        return self.duration / 1000

    def with_prefix(self, prefix: str) -> "Task":
        """Return a copy whose id is ``prefix + id``."""
        return Task(id=f"{prefix}{self.id}", duration=self.duration)

    def execute(self) -> None:
        emit(STARTED_MESSAGE.format(task_id=self.id))
        _delay(self.seconds)
        emit(FINISHED_MESSAGE.format(task_id=self.id, seconds=self.seconds))


def build_tasks(pairs: Iterable[Tuple[str, int]]) -> List[Task]:
    """Build Tasks from ``(id, duration_ms)`` pairs, keeping their order."""
    return [Task(id=task_id, duration=duration) for task_id, duration in pairs]
