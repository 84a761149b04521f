"""
Retry decision recording.

Builds one RetryLogRecord per decision from the event context (model
identity, cwd, session id, thinking level), appends it to the audit log and
counts it in Prometheus.
"""

import structlog

from turn_retry.host.protocol import ExtensionContext, HostAPI
from turn_retry.models.enums import RetryEventKind
from turn_retry.models.log_records import RetryLogRecord
from turn_retry.monitoring.metrics import retry_events_total
from turn_retry.persistence.audit_log import RetryAuditLog

logger = structlog.get_logger(__name__)


class RetryRecorder:
    """
    Records retry decisions.

    Attributes:
        host: Host extension API (for the thinking level)
        audit_log: JSONL appender
        metrics_enabled: Count records in Prometheus
    """

    def __init__(self, host: HostAPI, audit_log: RetryAuditLog, metrics_enabled: bool = True):
        self.host = host
        self.audit_log = audit_log
        self.metrics_enabled = metrics_enabled

    def record(
        self,
        kind: RetryEventKind,
        ctx: ExtensionContext,
        *,
        attempt: int,
        max_retries: int,
        stop_reason: str | None = None,
        error_message: str | None = None,
        delay_ms: int | None = None,
    ) -> RetryLogRecord:
        record = RetryLogRecord.for_model(
            ctx.model,
            event=kind,
            thinking_level=self.host.get_thinking_level(),
            stop_reason=stop_reason,
            error_message=error_message,
            attempt=attempt,
            max_retries=max_retries,
            delay_ms=delay_ms,
            cwd=ctx.cwd,
            session_id=ctx.session_id,
        )
        self.audit_log.append(record)
        if self.metrics_enabled:
            retry_events_total.labels(event=kind.value).inc()

        logger.info(
            "Retry decision recorded",
            event_kind=kind.value,
            attempt=attempt,
            max_retries=max_retries,
            delay_ms=delay_ms,
            session_id=ctx.session_id,
        )
        return record
