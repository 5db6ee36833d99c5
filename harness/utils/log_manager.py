from loguru import logger
import os
import sys
from functools import partial

# 模块级函数，可以被 pickle
def _logger_name_filter(record, target_name):
    """过滤器函数：只接收指定 logger_name 的日志"""
    return record["extra"].get("logger_name") == target_name


def _stream_sink(stream_name, msg):
    """控制台输出：调用时再解析 sys.stdout / sys.stderr，便于测试捕获"""
    stream = getattr(sys, stream_name)
    stream.write(msg)
    stream.flush()


class LogManager:
    def __init__(self, config: dict, log_dir: str = "logs", enqueue: bool = False):
        """初始化日志管理器。

        根据配置初始化多个日志记录器。同名记录器可以配置多个输出端（例如控制台 + 文件），
        日志目录只在配置了文件输出时才会创建。

        Args:
            config (dict): 日志配置字典，包含各日志记录器的参数。
            log_dir (str, optional): 日志统一存放目录，默认 "logs"。
            enqueue (bool, optional): 是否启用异步队列，适用于多进程场景，默认 False。

        Raises:
            OSError: 当日志目录创建失败时抛出。

        Example:
            >>> log_config = {
            ...     "loggers": [
            ...         {"name": "task", "stream": "stdout", "format": "{time:HH:mm:ss} {message}"},
            ...         {"name": "sys", "file": "sys.log", "level": "DEBUG", "rotate": "5 MB"}
            ...     ]
            ... }
            >>> log_manager = LogManager(log_config, log_dir="my_logs")
            >>> task_logger = log_manager.get_logger("task")
            >>> task_logger.info("Started A")
        """
        self.loggers = {}
        self.log_dir = log_dir
        self.enqueue = enqueue
        self.load_config(config)

    def load_config(self, config: dict):
        """按配置添加输出端。

        注意：默认 remove_default=True 时会移除 loguru 的默认 stderr 输出端（handler 0），
        该操作对整个进程生效，harness 包被导入时即会发生。
        """
        # 默认的 stderr 输出会重复打印所有日志，由配置接管
        if config.get("remove_default", True):
            try:
                logger.remove(0)
            except ValueError:
                pass  # 已被移除

        loggers_config = config.get("loggers", [])
        for lg_conf in loggers_config:
            file_name = lg_conf.get("file")
            if file_name:
                # 拼接到指定目录
                file_path = os.path.join(self.log_dir, os.path.basename(file_name))
            else:
                file_path = None

            self.add_logger(
                name=lg_conf.get("name", "default"),
                file=file_path,
                level=lg_conf.get("level", "INFO"),
                rotate=lg_conf.get("rotate", None),
                fmt=lg_conf.get("format"),
                stream=lg_conf.get("stream", "stdout"),
            )

    def add_logger(self, name: str, file: str = None, level: str = "INFO", rotate=None,
                   fmt: str = None, stream: str = "stdout"):
        # 使用 functools.partial 创建可 pickle 的过滤器
        logger_filter = partial(_logger_name_filter, target_name=name)
        extra_kwargs = {"format": fmt} if fmt else {}

        if file:
            os.makedirs(os.path.dirname(file) or ".", exist_ok=True)
            handler_id = logger.add(
                file,
                level=level,
                rotation=rotate,
                enqueue=self.enqueue,
                backtrace=True,
                diagnose=True,
                filter=logger_filter,  # 添加过滤器
                **extra_kwargs
            )
        else:
            if stream not in ("stdout", "stderr"):
                raise ValueError(f"Unsupported stream '{stream}', expected 'stdout' or 'stderr'.")
            handler_id = logger.add(
                partial(_stream_sink, stream),
                level=level,
                filter=logger_filter,  # 添加过滤器
                **extra_kwargs
            )
        self.loggers.setdefault(name, []).append(handler_id)

    def get_logger(self, name: str):
        if name in self.loggers:
            return logger.bind(logger_name=name)
        else:
            raise ValueError(f"Logger '{name}' not found.")

    def close(self):
        """移除本管理器添加的全部输出端。"""
        for handler_ids in self.loggers.values():
            for handler_id in handler_ids:
                logger.remove(handler_id)
        self.loggers = {}
