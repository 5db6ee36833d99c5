# 默认任务批次：(任务标识, 持续时间毫秒)
DEFAULT_TASKS = [
    ("A", 1000),
    ("B", 1100),
    ("C", 1200),
    ("D", 1500),
]

# 各执行策略的任务标识前缀，便于区分日志输出
POLICY_PREFIXES = {
    "sequential": "Seq-",
    "detached": "Det-",
    "lockstep": "Lock-",
    "batched": "Batch-",
}

POLICY_TITLES = {
    "sequential": "Sequential",
    "detached": "Concurrent-detached (fire-and-forget)",
    "lockstep": "Concurrent-lockstep (start then wait)",
    "batched": "Concurrent-batched (start all then wait all)",
}

START_BANNER = "========== Execution harness started =========="
SECTION_BANNER = "---------- {title} ----------"
END_BANNER = "========== Execution harness finished =========="

STARTED_MESSAGE = "Started {task_id}"
FINISHED_MESSAGE = "Finished {task_id} in {seconds} seconds"

TASK_LOG_FORMAT = "{time:HH:mm:ss} {message}"
SYS_LOG_FORMAT = "{time:HH:mm:ss} | {level: <8} | {thread.name} | {message}"
