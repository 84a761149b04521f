"""
Retry decision and injection engine.

This module decides, after each agent run, whether the final turn ended in
a transient failure the host does not retry itself, and re-drives it with
exponential backoff through a hidden marker message:

1. **Classify**: ignore / deferred / auto-retryable / terminal
2. **Track**: attempt count per failure episode, capped at MAX_RETRIES
3. **Back off**: 2s, 4s, 8s with a status countdown
4. **Trigger**: hidden custom message with trigger_turn=True
5. **Scrub**: marker removed from the next model context

Main Components:
    - RetryCoordinator: Subscribes to host events and wires everything
    - ErrorClassifier / PatternRules: Verdict for a failed turn
    - AttemptTracker / FailureEpisode: Episode state machine
    - BackoffScheduler: Delay computation and cancellable wait
    - RetryTrigger / ContextScrubber: Hidden marker lifecycle
    - ManualRetry: `retry` command and empty-Enter interceptor

Usage:
    >>> from turn_retry.retry import RetryCoordinator
    >>> coordinator = RetryCoordinator(host, settings).install()
"""

from turn_retry.retry.backoff import BackoffScheduler
from turn_retry.retry.classifier import ErrorClassifier, PatternRules
from turn_retry.retry.coordinator import RetryCoordinator
from turn_retry.retry.exceptions import PatternConfigError, RetryConfigError
from turn_retry.retry.manual import ManualRetry
from turn_retry.retry.recorder import RetryRecorder
from turn_retry.retry.scrubber import ContextScrubber
from turn_retry.retry.state import CoordinatorState
from turn_retry.retry.tracker import AttemptOutcome, AttemptTracker, FailureEpisode
from turn_retry.retry.trigger import RetryTrigger

__all__ = [
    "RetryCoordinator",
    "BackoffScheduler",
    "ErrorClassifier",
    "PatternRules",
    "PatternConfigError",
    "RetryConfigError",
    "ManualRetry",
    "RetryRecorder",
    "ContextScrubber",
    "CoordinatorState",
    "AttemptOutcome",
    "AttemptTracker",
    "FailureEpisode",
    "RetryTrigger",
]
