"""Configuration management using Pydantic Settings."""

from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from harness.constant import DEFAULT_TASKS, SYS_LOG_FORMAT, TASK_LOG_FORMAT


class Settings(BaseSettings):
    """Harness settings, overridable through ``HARNESS_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HARNESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    DEBUG: bool = False

    # Logging
    LOG_BASE_PATH: str = "logs"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    LOG_FILE: Optional[str] = None
    LOG_CONFIG: Dict[str, Any] = Field(default_factory=dict)

    # Execution
    TASKS: List[Tuple[str, int]] = Field(default_factory=lambda: list(DEFAULT_TASKS))
    THREAD_NAME_PREFIX: str = "Harness-Worker"
    ERROR_HANDLING: Literal["log", "raise"] = "log"

    @field_validator("TASKS")
    @classmethod
    def must_have_tasks(cls, v):
        """Ensure the task batch is not empty."""
        if not v:
            raise ValueError("TASKS must contain at least one (id, duration_ms) pair")
        return v

    def model_post_init(self, __context: Any) -> None:
        if not self.LOG_CONFIG:
            self.LOG_CONFIG = build_log_config(
                level="DEBUG" if self.DEBUG else self.LOG_LEVEL,
                log_file=self.LOG_FILE,
            )


def build_log_config(level: str = "WARNING", log_file: Optional[str] = None) -> dict:
    """Build the default ``LogManager`` config.

    ``task`` is the timestamped stdout sink every Started/Finished line goes
    through, ``sys`` carries engine diagnostics on stderr.
    """
    loggers = [
        {"name": "task", "level": "INFO", "stream": "stdout", "format": TASK_LOG_FORMAT},
        {"name": "sys", "level": level, "stream": "stderr", "format": SYS_LOG_FORMAT},
    ]
    if log_file:
        loggers.append(
            {"name": "task", "file": log_file, "level": "INFO", "rotate": "10 MB", "format": TASK_LOG_FORMAT}
        )
    return {"loggers": loggers}


settings = Settings()
