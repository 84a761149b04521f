"""
Append-only JSONL audit log for retry decisions.

Storage Strategy:
- One RetryLogRecord per line, camelCase keys, unset fields omitted
- Directory created on first write
- Never read back by the coordinator

Writes are best-effort: any failure is swallowed so audit logging can never
break the retry flow.
"""

from pathlib import Path

import structlog

from turn_retry.config import Settings
from turn_retry.models.log_records import RetryLogRecord

logger = structlog.get_logger(__name__)


class RetryAuditLog:
    """
    Best-effort appender for retry audit records.

    Attributes:
        path: JSONL file path
        enabled: When False, append() is a no-op
    """

    def __init__(self, path: Path, enabled: bool = True):
        self.path = Path(path)
        self.enabled = enabled

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryAuditLog":
        return cls(settings.retry_log_path, enabled=settings.RETRY_LOG_ENABLED)

    def append(self, record: RetryLogRecord) -> bool:
        """
        Append one record.

        Returns:
            True if the record was written
        """
        if not self.enabled:
            return False
        try:
            line = record.to_json_line()
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except Exception as e:
            logger.debug(
                "Retry audit record not written",
                path=str(self.path),
                event_kind=record.event,
                error=str(e),
            )
            return False
        return True
