"""
Audit persistence layer.

- audit_log.py: Best-effort JSONL appender for retry decisions
"""

from turn_retry.persistence.audit_log import RetryAuditLog

__all__ = [
    "RetryAuditLog",
]
