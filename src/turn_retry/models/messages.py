"""
Host-facing message and event models.

These mirror the shapes the host runtime hands to extensions. Hosts send
either camelCase mappings (stopReason, errorMessage, customType), snake_case
mappings, or attribute objects; all three validate. Host messages carry many
more fields than the coordinator needs, so extra fields are allowed and
preserved.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from turn_retry.models.enums import StopReason


class ModelInfo(BaseModel):
    """Identity of the model active for the session (for audit records only)."""

    model_config = ConfigDict(frozen=True)

    provider: Optional[str] = Field(default=None, description="Provider name (e.g., 'anthropic')")
    name: Optional[str] = Field(default=None, description="Human-readable model name")
    id: Optional[str] = Field(default=None, description="Provider model identifier")
    api: Optional[str] = Field(default=None, description="Wire API used to reach the model")


class AgentMessage(BaseModel):
    """
    One entry of the conversation history.

    Roles used by the coordinator: "assistant" (stop_reason/error_message are
    read) and "custom" (custom_type identifies extension messages).
    """

    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    role: str = Field(..., description="user, assistant, toolResult, custom, ...")
    content: Any = Field(default=None, description="Message payload")
    stop_reason: Optional[str] = Field(default=None, description="Assistant stop reason")
    error_message: Optional[str] = Field(default=None, description="Error text captured by the host")
    custom_type: Optional[str] = Field(default=None, description="Tag of custom extension messages")
    display: bool = Field(default=True, description="Whether the host renders the message")

    @property
    def is_failed_turn(self) -> bool:
        return self.role == "assistant" and StopReason.is_failure(self.stop_reason)


class RetryTriggerMessage(AgentMessage):
    """
    Hidden marker message that re-drives a turn.

    Sent as a custom message with display disabled, so it never shows in the
    terminal, and scrubbed from the next model context.
    """

    model_config = ConfigDict(frozen=True)

    role: str = "custom"
    custom_type: str
    content: str
    display: bool = False


class TurnEndEvent(BaseModel):
    """Emitted by the host once per finished turn."""

    model_config = ConfigDict(from_attributes=True)

    message: AgentMessage


class AgentEndEvent(BaseModel):
    """Emitted by the host when an agent run finishes; carries the run's messages in order."""

    model_config = ConfigDict(from_attributes=True)

    messages: list[AgentMessage] = Field(default_factory=list)

    def last_assistant(self) -> AgentMessage | None:
        """Most recent assistant message, scanning from the end."""
        for message in reversed(self.messages):
            if message.role == "assistant":
                return message
        return None


class ContextEvent(BaseModel):
    """Emitted right before the host serializes history for a model call."""

    model_config = ConfigDict(from_attributes=True)

    messages: list[AgentMessage] = Field(default_factory=list)


class ContextResult(BaseModel):
    """Replacement message list returned from a context handler."""

    messages: list[AgentMessage]


class SessionStartEvent(BaseModel):
    """Emitted once when a session starts."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    session_id: Optional[str] = None


class InputResult(BaseModel):
    """Returned from a terminal input interceptor to claim the keystroke."""

    model_config = ConfigDict(frozen=True)

    consume: bool = True
