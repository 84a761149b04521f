"""
Configuration settings for the turn retry coordinator.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Patterns already covered by the host runtime's built-in retry
DEFAULT_DEFERRED_PATTERNS: list[str] = [
    r"overloaded",
    r"rate.?limit",
    r"too many requests",
    r"429",
    r"500",
    r"502",
    r"503",
    r"504",
    r"service.?unavailable",
    r"server error",
    r"internal error",
    r"connection.?error",
    r"connection.?refused",
    r"other side closed",
    r"fetch failed",
    r"upstream.?connect",
    r"reset before headers",
    r"terminated",
    r"retry delay",
]

# Abort-like transient conditions the host does not retry
DEFAULT_RETRYABLE_PATTERNS: list[str] = [r"\baborted\b"]

DEFAULT_USER_ABORT_PATTERN = r"operation aborted|request was aborted"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "turn-retry"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    DIAGNOSTIC_LOG_FILE: Optional[str] = None  # stderr when unset

    # === Auto-retry ===
    AUTO_RETRY_ENABLED: bool = True
    MAX_RETRIES: int = Field(default=3, ge=1)
    RETRY_BASE_DELAY_MS: int = Field(default=2000, ge=0)  # doubled per attempt

    # === Retry trigger ===
    RETRY_STATUS_KEY: str = "pi-retry"
    RETRY_CUSTOM_TYPE: str = "__retry_trigger"
    RETRY_TRIGGER_CONTENT: str = "Retrying."

    # === Manual retry ===
    CANCEL_AUTO_RETRY_ON_MANUAL: bool = True

    # === Classification ===
    DEFERRED_PATTERNS: list[str] = Field(default_factory=lambda: list(DEFAULT_DEFERRED_PATTERNS))
    RETRYABLE_PATTERNS: list[str] = Field(default_factory=lambda: list(DEFAULT_RETRYABLE_PATTERNS))
    USER_ABORT_PATTERN: str = DEFAULT_USER_ABORT_PATTERN

    # === Audit log ===
    RETRY_LOG_ENABLED: bool = True
    RETRY_LOG_DIR: str = "~/.pi/logs"
    RETRY_LOG_FILE: str = "pi-retry.jsonl"

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True

    @property
    def retry_log_path(self) -> Path:
        """Full path of the JSONL audit log."""
        return Path(self.RETRY_LOG_DIR).expanduser() / self.RETRY_LOG_FILE

    @property
    def diagnostic_log_path(self) -> Optional[Path]:
        """Diagnostic log file, or None to log to stderr."""
        if not self.DIAGNOSTIC_LOG_FILE:
            return None
        return Path(self.DIAGNOSTIC_LOG_FILE).expanduser()


# Global settings instance
settings = Settings()
