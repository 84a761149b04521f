"""
Hidden retry trigger.

Re-drives a turn by sending a custom marker message with display disabled
and trigger_turn=True. The host's history transform already drops the failed
assistant message from model context, and the scrubber drops the marker, so
the model sees the conversation as if the failure never happened.
"""

import structlog

from turn_retry.config import Settings
from turn_retry.host.protocol import HostAPI
from turn_retry.models.messages import RetryTriggerMessage
from turn_retry.retry.state import CoordinatorState

logger = structlog.get_logger(__name__)


class RetryTrigger:
    """
    Sends the hidden marker that starts a new turn.

    Attributes:
        host: Host extension API
        state: Shared coordinator state (pending_marker is raised here)
        custom_type: Private marker type
        content: Fixed filler payload
    """

    def __init__(
        self,
        host: HostAPI,
        state: CoordinatorState,
        custom_type: str = "__retry_trigger",
        content: str = "Retrying.",
    ):
        self.host = host
        self.state = state
        self.custom_type = custom_type
        self.content = content

    @classmethod
    def from_settings(cls, host: HostAPI, state: CoordinatorState, settings: Settings) -> "RetryTrigger":
        return cls(
            host,
            state,
            custom_type=settings.RETRY_CUSTOM_TYPE,
            content=settings.RETRY_TRIGGER_CONTENT,
        )

    def build_message(self) -> RetryTriggerMessage:
        return RetryTriggerMessage(custom_type=self.custom_type, content=self.content, display=False)

    def fire(self) -> None:
        """Send the marker and start a new turn."""
        # Raised before sending: the marker shows up in the very next context pass
        self.state.pending_marker = True
        self.host.send_message(self.build_message(), trigger_turn=True)
        logger.info("Retry trigger sent", custom_type=self.custom_type)
