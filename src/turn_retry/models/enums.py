"""
Enumerations for turn retry data models.

All enums are closed taxonomies, except StopReason: hosts may report stop
reasons outside this set, and those are treated as non-failures.
"""

from enum import Enum


class StopReason(str, Enum):
    """
    Why an assistant turn ended, as reported by the host.

    Only ERROR and ABORTED count as failures.
    """

    STOP = "stop"
    LENGTH = "length"
    TOOL_USE = "toolUse"
    ERROR = "error"
    ABORTED = "aborted"

    @classmethod
    def is_failure(cls, stop_reason: str | None) -> bool:
        """True for the error and aborted stop reasons."""
        return stop_reason in (cls.ERROR.value, cls.ABORTED.value)


class Verdict(str, Enum):
    """
    Classifier verdict for a finished turn.

    Precedence when several apply: IGNORE, DEFERRED, AUTO_RETRYABLE, TERMINAL.
    """

    IGNORE = "ignore"  # user-initiated cancellation
    DEFERRED = "deferred"  # host's built-in retry covers it
    AUTO_RETRYABLE = "auto_retryable"
    TERMINAL = "terminal"

    @property
    def should_auto_retry(self) -> bool:
        return self is Verdict.AUTO_RETRYABLE


class RetryEventKind(str, Enum):
    """Kinds of audit records written to the retry log."""

    RETRY = "retry"
    RETRY_EXHAUSTED = "retry_exhausted"
    RETRY_SUCCEEDED = "retry_succeeded"
    MANUAL_RETRY = "manual_retry"


class NotifyLevel(str, Enum):
    """Severity of a transient user notification."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class TrackerState(str, Enum):
    """
    Attempt tracker states.

    EXHAUSTED is transient: it is reported once and the tracker is already
    back to IDLE by the time the caller sees it.
    """

    IDLE = "idle"
    RETRYING = "retrying"
    EXHAUSTED = "exhausted"


class HostEvent(str, Enum):
    """Lifecycle events the coordinator subscribes to on the host."""

    TURN_END = "turn_end"
    AGENT_END = "agent_end"
    CONTEXT = "context"
    SESSION_START = "session_start"
