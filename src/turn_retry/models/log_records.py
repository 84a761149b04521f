"""
Audit log record model.

One RetryLogRecord is appended to the JSONL audit log per retry decision.
Records are serialized with camelCase keys and without unset fields, so the
log stays compatible with other tools reading pi-retry.jsonl.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from turn_retry.models.enums import RetryEventKind
from turn_retry.models.messages import ModelInfo


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class RetryLogRecord(BaseModel):
    """
    Immutable audit entry for a retry decision.

    Attributes:
        timestamp: ISO-8601 UTC time the decision was made
        event: Decision kind (retry, retry_exhausted, retry_succeeded, manual_retry)
        provider, model, model_id, api: Identity of the active model
        thinking_level: Host thinking level at decision time
        stop_reason: Stop reason of the failed turn (auto path only)
        error_message: Error text of the failed turn (auto path only)
        attempt: Attempt number the record refers to
        max_retries: Attempt ceiling in force
        delay_ms: Backoff delay before the retry (retry records only)
        cwd: Working directory of the session
        session_id: Host session identifier
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        protected_namespaces=(),
    )

    timestamp: str = Field(default_factory=_utc_now_iso)
    event: RetryEventKind
    provider: Optional[str] = None
    model: Optional[str] = None
    model_id: Optional[str] = None
    api: Optional[str] = None
    thinking_level: Optional[str] = None
    stop_reason: Optional[str] = None
    error_message: Optional[str] = None
    attempt: int = Field(..., ge=0)
    max_retries: int = Field(..., ge=0)
    delay_ms: Optional[int] = Field(default=None, ge=0)
    cwd: str = ""
    session_id: Optional[str] = None

    @classmethod
    def for_model(cls, model: ModelInfo | None, **fields) -> "RetryLogRecord":
        """Build a record, copying provider/name/id/api from the active model."""
        if model is not None:
            fields.setdefault("provider", model.provider)
            fields.setdefault("model", model.name)
            fields.setdefault("model_id", model.id)
            fields.setdefault("api", model.api)
        return cls(**fields)

    def to_json_line(self) -> str:
        """Serialize as one JSONL line (without the trailing newline)."""
        return self.model_dump_json(by_alias=True, exclude_none=True)
