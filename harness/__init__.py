from harness.config import settings
from harness.utils.log_manager import LogManager

"""
global logging for the harness
"""
logger_mger = LogManager(config=settings.LOG_CONFIG, log_dir=settings.LOG_BASE_PATH)
sys_logger = logger_mger.get_logger("sys")
task_logger = logger_mger.get_logger("task")


def emit(line: str) -> None:
    """写出一行带 HH:MM:SS 时间戳的输出。

    loguru 在输出端内部加锁，多线程并发调用时整行写出，不会出现行内交错。
    """
    task_logger.info(line)
