"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
from pathlib import Path
from typing import Any

import pytest

from turn_retry.config import Settings
from turn_retry.models.messages import AgentMessage, ModelInfo
from turn_retry.persistence.audit_log import RetryAuditLog


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    """Per-test directory for the JSONL audit log (created lazily by the logger)."""
    return tmp_path / "logs"


@pytest.fixture
def test_settings(log_dir: Path) -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.MAX_RETRIES = 5
    """
    return Settings(
        # === Application ===
        APP_NAME="turn-retry (Test)",
        ENVIRONMENT="development",
        LOG_LEVEL="DEBUG",

        # === Auto-retry ===
        AUTO_RETRY_ENABLED=True,
        MAX_RETRIES=3,
        RETRY_BASE_DELAY_MS=2000,

        # === Audit log ===
        RETRY_LOG_ENABLED=True,
        RETRY_LOG_DIR=str(log_dir),
        RETRY_LOG_FILE="pi-retry.jsonl",

        # === Monitoring ===
        PROMETHEUS_ENABLED=False,  # Keep the default registry untouched unless a test needs it
    )


@pytest.fixture
def audit_log(test_settings: Settings) -> RetryAuditLog:
    return RetryAuditLog.from_settings(test_settings)


@pytest.fixture
def read_log_records(test_settings: Settings):
    """Factory fixture returning the audit records written so far, as dicts.

    Usage:
        def test_something(read_log_records):
            records = read_log_records()
    """
    def _read() -> list[dict[str, Any]]:
        path = test_settings.retry_log_path
        if not path.exists():
            return []
        return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line]

    return _read


@pytest.fixture
def model_info() -> ModelInfo:
    """Active model identity used in audit records."""
    return ModelInfo(
        provider="anthropic",
        name="Claude Sonnet",
        id="claude-sonnet",
        api="anthropic-messages",
    )


@pytest.fixture
def create_assistant_message():
    """Factory fixture to create assistant messages with a given stop reason.

    Usage:
        def test_something(create_assistant_message):
            msg = create_assistant_message("aborted", "upstream aborted connection")
    """
    def _create(stop_reason: str = "stop", error_message: str | None = None) -> AgentMessage:
        return AgentMessage(
            role="assistant",
            content=[] if error_message else [{"type": "text", "text": "Done."}],
            stop_reason=stop_reason,
            error_message=error_message,
        )

    return _create
