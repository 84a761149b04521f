"""
Error classification for finished turns.

Partitions a failed turn into one of four verdicts using case-insensitive
regex rules matched against the host's error text:

    1. IGNORE: aborted by the user (never auto-retried, manual retry allowed)
    2. DEFERRED: covered by the host's built-in retry (never double-retried)
    3. AUTO_RETRYABLE: abort-like transient failure the host does not retry
    4. TERMINAL: normal stop, or a failure no rule recognizes

IGNORE and DEFERRED are checked before AUTO_RETRYABLE: a message such as
"upstream connect error, request aborted" contains "aborted" but belongs to
the host's retry.
"""

import re
from dataclasses import dataclass, field

import structlog

from turn_retry.config import Settings
from turn_retry.models.enums import StopReason, Verdict
from turn_retry.retry.exceptions import PatternConfigError

logger = structlog.get_logger(__name__)


def _compile(rule_set: str, pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise PatternConfigError(rule_set, pattern, str(e)) from e


@dataclass(frozen=True)
class PatternRules:
    """
    Versionable rule sets used by the classifier.

    Attributes:
        deferred: Ordered patterns already retried by the host
        retryable: Ordered patterns this coordinator retries
        ignore: Single pattern for user-initiated cancellations
    """

    deferred: tuple[str, ...]
    retryable: tuple[str, ...]
    ignore: str
    _deferred_re: tuple[re.Pattern[str], ...] = field(init=False, repr=False, compare=False)
    _retryable_re: tuple[re.Pattern[str], ...] = field(init=False, repr=False, compare=False)
    _ignore_re: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Compile every rule; invalid patterns fail fast."""
        object.__setattr__(
            self, "_deferred_re", tuple(_compile("deferred", p) for p in self.deferred)
        )
        object.__setattr__(
            self, "_retryable_re", tuple(_compile("retryable", p) for p in self.retryable)
        )
        object.__setattr__(self, "_ignore_re", _compile("ignore", self.ignore))

    @classmethod
    def from_settings(cls, settings: Settings) -> "PatternRules":
        return cls(
            deferred=tuple(settings.DEFERRED_PATTERNS),
            retryable=tuple(settings.RETRYABLE_PATTERNS),
            ignore=settings.USER_ABORT_PATTERN,
        )

    def is_user_abort(self, message: str) -> bool:
        return bool(self._ignore_re.search(message))

    def is_deferred(self, message: str) -> bool:
        return any(rule.search(message) for rule in self._deferred_re)

    def is_retryable(self, message: str) -> bool:
        return any(rule.search(message) for rule in self._retryable_re)


class ErrorClassifier:
    """
    Pure classifier mapping (stop_reason, error_message) to a Verdict.

    Attributes:
        rules: PatternRules in force
    """

    def __init__(self, rules: PatternRules):
        self.rules = rules

    @classmethod
    def from_settings(cls, settings: Settings) -> "ErrorClassifier":
        return cls(PatternRules.from_settings(settings))

    def classify(self, stop_reason: str | None, error_message: str | None) -> Verdict:
        """
        Classify a finished turn.

        Args:
            stop_reason: Host stop reason ("stop", "error", "aborted", ...)
            error_message: Error text captured by the host (may be empty)

        Returns:
            Verdict for the turn
        """
        if not StopReason.is_failure(stop_reason):
            return Verdict.TERMINAL

        message = error_message or ""

        if stop_reason == StopReason.ABORTED.value and self.rules.is_user_abort(message):
            verdict = Verdict.IGNORE
        elif self.rules.is_deferred(message):
            verdict = Verdict.DEFERRED
        elif self.rules.is_retryable(message):
            verdict = Verdict.AUTO_RETRYABLE
        else:
            verdict = Verdict.TERMINAL

        logger.debug(
            "Turn failure classified",
            stop_reason=stop_reason,
            error_message=message,
            verdict=verdict.value,
        )
        return verdict
