"""
Attempt tracking for failure episodes.

An episode is a run of consecutive auto-retryable turn failures. The tracker
is an in-memory state machine:

    idle -> retrying              first auto-retryable failure (attempt = 1)
    retrying -> retrying          another auto-retryable failure (attempt += 1)
    retrying -> exhausted -> idle attempt would exceed max_retries
    retrying -> idle              a later turn ends normally

Nothing is persisted: a restarted process has no episode to resume.
"""

from dataclasses import dataclass

import structlog

from turn_retry.models.enums import TrackerState

logger = structlog.get_logger(__name__)


@dataclass
class FailureEpisode:
    """
    Latest span of consecutive failed turns.

    Attributes:
        attempt: Current retry attempt (0 = no active episode)
        last_error_message: Error text of the latest failure
        last_stop_reason: Stop reason of the latest failure
    """

    attempt: int = 0
    last_error_message: str = ""
    last_stop_reason: str = ""

    def clear(self) -> None:
        self.attempt = 0
        self.last_error_message = ""
        self.last_stop_reason = ""


@dataclass(frozen=True)
class AttemptOutcome:
    """
    Result of recording an auto-retryable failure.

    Attributes:
        state: RETRYING (retry attempt `attempt`) or EXHAUSTED
        attempt: Attempt to run, or the final attempt made when exhausted
        error_message: Error text of the failure just recorded
        stop_reason: Stop reason of the failure just recorded
    """

    state: TrackerState
    attempt: int
    error_message: str
    stop_reason: str

    @property
    def exhausted(self) -> bool:
        return self.state is TrackerState.EXHAUSTED


class AttemptTracker:
    """
    Owns the FailureEpisode and enforces the attempt ceiling.

    Attributes:
        max_retries: Attempt ceiling (attempt stays in [0, max_retries] at rest)
        episode: Current FailureEpisode
    """

    def __init__(self, max_retries: int = 3):
        if max_retries < 1:
            raise ValueError("max_retries must be >= 1")
        self.max_retries = max_retries
        self.episode = FailureEpisode()

    @property
    def state(self) -> TrackerState:
        return TrackerState.RETRYING if self.episode.attempt > 0 else TrackerState.IDLE

    @property
    def is_active(self) -> bool:
        return self.episode.attempt > 0

    @property
    def attempt(self) -> int:
        return self.episode.attempt

    def record_failure(self, stop_reason: str, error_message: str) -> AttemptOutcome:
        """
        Record an auto-retryable failure.

        Returns:
            RETRYING outcome with the attempt to run, or EXHAUSTED when the
            ceiling is exceeded (the episode is already reset in that case)
        """
        self.episode.attempt += 1
        self.episode.last_error_message = error_message
        self.episode.last_stop_reason = stop_reason

        if self.episode.attempt > self.max_retries:
            logger.warning(
                "Retry episode exhausted",
                attempts=self.max_retries,
                stop_reason=stop_reason,
                error_message=error_message,
            )
            self.episode.clear()
            return AttemptOutcome(
                state=TrackerState.EXHAUSTED,
                attempt=self.max_retries,
                error_message=error_message,
                stop_reason=stop_reason,
            )

        logger.info(
            f"Retry episode at attempt {self.episode.attempt}/{self.max_retries}",
            attempt=self.episode.attempt,
            max_retries=self.max_retries,
        )
        return AttemptOutcome(
            state=TrackerState.RETRYING,
            attempt=self.episode.attempt,
            error_message=error_message,
            stop_reason=stop_reason,
        )

    def record_success(self) -> FailureEpisode | None:
        """
        Record a turn that ended normally.

        Returns:
            Snapshot of the episode that just recovered, or None when no
            episode was active
        """
        if not self.is_active:
            return None
        recovered = FailureEpisode(
            attempt=self.episode.attempt,
            last_error_message=self.episode.last_error_message,
            last_stop_reason=self.episode.last_stop_reason,
        )
        self.episode.clear()
        logger.info("Retry episode recovered", attempt=recovered.attempt)
        return recovered

    def reset(self) -> None:
        self.episode.clear()
