"""Context scrubbing of retry markers."""

from typing import Any

import structlog

from turn_retry.retry.state import CoordinatorState

logger = structlog.get_logger(__name__)


class ContextScrubber:
    """
    Removes the outstanding retry marker from the next assembled context.

    Matches by role and custom type, never by position: the marker is
    guaranteed outstanding but its place in history is not.
    """

    def __init__(self, state: CoordinatorState, custom_type: str = "__retry_trigger"):
        self.state = state
        self.custom_type = custom_type

    def is_marker(self, message: Any) -> bool:
        return (
            getattr(message, "role", None) == "custom"
            and getattr(message, "custom_type", None) == self.custom_type
        )

    def scrub(self, messages: list[Any]) -> list[Any] | None:
        """
        Filter markers out of `messages` if one is pending.

        Returns:
            Filtered list, or None (leave context untouched) when no marker
            is pending
        """
        if not self.state.pending_marker:
            return None
        self.state.pending_marker = False

        cleaned = [message for message in messages if not self.is_marker(message)]
        logger.debug(
            "Retry marker scrubbed from context",
            removed=len(messages) - len(cleaned),
            remaining=len(cleaned),
        )
        return cleaned
