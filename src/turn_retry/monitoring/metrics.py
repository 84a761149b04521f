"""Custom Prometheus metrics for the turn retry coordinator.

The host process decides whether and where to expose them. Alert rules
worth configuring:
- retry_events_total{event="retry_exhausted"} (persistent upstream aborts)
- retry_verdicts_total{verdict="terminal"} (unrecognized failures, patterns may need tuning)
"""

from prometheus_client import Counter, Gauge, Histogram

# === Classification Metrics ===

retry_verdicts_total = Counter(
    "turn_retry_verdicts_total",
    "Total classified turn failures by verdict",
    ["verdict"],
)
"""
Classifier verdicts for failed turns.

Labels:
- verdict: ignore (user abort), deferred (host retry), auto_retryable, terminal

A rising terminal share means providers emit errors no rule recognizes.
"""

# === Retry Event Metrics ===

retry_events_total = Counter(
    "turn_retry_events_total",
    "Total retry decisions by audit event kind",
    ["event"],
)
"""
Retry decisions, one per audit record.

Labels:
- event: retry, retry_exhausted, retry_succeeded, manual_retry
"""

retry_backoff_seconds = Histogram(
    "turn_retry_backoff_seconds",
    "Backoff delay scheduled before an automatic retry",
    buckets=[1.0, 2.0, 4.0, 8.0, 16.0, 32.0],
)

retry_episode_active = Gauge(
    "turn_retry_episode_active",
    "1 while an automatic retry episode is in progress",
)
