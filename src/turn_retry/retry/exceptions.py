"""
Retry coordinator exceptions.

The coordinator never raises into the host at runtime; the only error it
raises is a configuration error, at construction time, when a pattern rule
does not compile.
"""


class RetryConfigError(Exception):
    """
    Base exception for coordinator configuration errors.

    Attributes:
        message: Human-readable description
        details: Structured context (setting name, offending value)
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class PatternConfigError(RetryConfigError):
    """
    Raised when a classification pattern is not a valid regular expression.

    Details include the rule set ("deferred", "retryable", "ignore"), the
    pattern and the regex compiler's error.
    """

    def __init__(self, rule_set: str, pattern: str, reason: str) -> None:
        super().__init__(
            f"Invalid {rule_set} pattern {pattern!r}: {reason}",
            {"rule_set": rule_set, "pattern": pattern, "reason": reason},
        )
        self.rule_set = rule_set
        self.pattern = pattern
