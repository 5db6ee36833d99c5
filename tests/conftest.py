# tests/conftest.py
import pytest
import sys
import os
import threading

# -------------------------
# 自动添加项目根目录到 Python 搜索路径
# -------------------------
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# -------------------------
# Pytest 插件声明（如果需要可扩展）
# -------------------------
pytest_plugins = []

# -------------------------
# 自定义 marker 注册
# -------------------------
def pytest_configure(config):
    """注册自定义 pytest marker"""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (skip with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests"
    )

# -------------------------
# 自动给测试打 marker
# -------------------------
def pytest_collection_modifyitems(config, items):
    """在测试收集后修改测试 item"""
    for item in items:
        # 名称包含 "timing" 自动打 slow
        if "timing" in item.name:
            item.add_marker(pytest.mark.slow)

        # 名称包含 "full_run" 打 integration
        if "full_run" in item.name:
            item.add_marker(pytest.mark.integration)


# -------------------------
# 输出记录器
# -------------------------
class EmitRecorder:
    """线程安全地记录 emit 的每一行（不含时间戳）。"""

    def __init__(self):
        self.lines = []
        self._lock = threading.Lock()

    def __call__(self, line):
        with self._lock:
            self.lines.append(line)

    def index(self, line):
        with self._lock:
            return self.lines.index(line)

    def snapshot(self):
        with self._lock:
            return list(self.lines)


@pytest.fixture
def emit_recorder(monkeypatch):
    """替换 Task 与 Runner 使用的输出端。"""
    recorder = EmitRecorder()
    monkeypatch.setattr("harness.task.emit", recorder)
    monkeypatch.setattr("harness.runner.emit", recorder)
    return recorder


@pytest.fixture
def thread_names(monkeypatch):
    """记录每次任务延迟发生在哪个线程上，同时保留真实的等待。"""
    import time
    names = {}
    lock = threading.Lock()

    def recording_delay(seconds):
        with lock:
            names.setdefault(threading.current_thread().name, 0)
            names[threading.current_thread().name] += 1
        time.sleep(seconds)

    monkeypatch.setattr("harness.task._delay", recording_delay)
    return names
