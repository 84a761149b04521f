"""
Pydantic data models for the turn retry coordinator.

Includes:
- Enums (StopReason, Verdict, RetryEventKind, NotifyLevel, TrackerState)
- Host message and event models (AgentMessage, TurnEndEvent, AgentEndEvent, ...)
- Audit log record (RetryLogRecord)
"""

from turn_retry.models.enums import (
    HostEvent,
    NotifyLevel,
    RetryEventKind,
    StopReason,
    TrackerState,
    Verdict,
)
from turn_retry.models.log_records import RetryLogRecord
from turn_retry.models.messages import (
    AgentEndEvent,
    AgentMessage,
    ContextEvent,
    ContextResult,
    InputResult,
    ModelInfo,
    RetryTriggerMessage,
    SessionStartEvent,
    TurnEndEvent,
)

__all__ = [
    "HostEvent",
    "NotifyLevel",
    "RetryEventKind",
    "StopReason",
    "TrackerState",
    "Verdict",
    "RetryLogRecord",
    "AgentEndEvent",
    "AgentMessage",
    "ContextEvent",
    "ContextResult",
    "InputResult",
    "ModelInfo",
    "RetryTriggerMessage",
    "SessionStartEvent",
    "TurnEndEvent",
]
