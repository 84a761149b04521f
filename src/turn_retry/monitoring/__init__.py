"""Monitoring and metrics instrumentation for the turn retry coordinator.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from turn_retry.monitoring.metrics import (
    retry_backoff_seconds,
    retry_episode_active,
    retry_events_total,
    retry_verdicts_total,
)

__all__ = [
    "retry_verdicts_total",
    "retry_events_total",
    "retry_backoff_seconds",
    "retry_episode_active",
]
