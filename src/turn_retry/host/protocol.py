"""
Host runtime contracts.

The coordinator never imports the host runtime. It depends only on these
protocols, which describe the subset of the extension API it calls:
event subscription, command registration, message sending, status line,
notifications, editor text and raw terminal input.
"""

from typing import Any, Awaitable, Callable, Optional, Protocol

from turn_retry.models.enums import NotifyLevel
from turn_retry.models.messages import InputResult, ModelInfo, RetryTriggerMessage

EventHandler = Callable[[Any, "ExtensionContext"], Awaitable[Any]]
CommandHandler = Callable[[str, "ExtensionContext"], Awaitable[None]]
InputHandler = Callable[[str], Optional[InputResult]]


class HostUI(Protocol):
    """Terminal UI surface exposed to extensions."""

    def notify(self, text: str, level: NotifyLevel) -> None:
        """Show a transient notification."""
        ...

    def set_status(self, key: str, text: str | None) -> None:
        """Set the named status line, or clear it when text is None."""
        ...

    def get_editor_text(self) -> str:
        """Current contents of the input editor."""
        ...

    def on_terminal_input(self, handler: InputHandler) -> Any:
        """
        Register a raw terminal input interceptor.

        The handler receives the raw input sequence and may return
        InputResult(consume=True) to stop the host from handling it.
        """
        ...


class ExtensionContext(Protocol):
    """Per-event context handed to every extension callback."""

    ui: HostUI
    cwd: str
    model: ModelInfo | None
    session_id: str | None

    def is_idle(self) -> bool:
        """True when no turn is in flight."""
        ...


class HostAPI(Protocol):
    """Extension API of the host agent runtime."""

    def on(self, event: str, handler: EventHandler) -> None:
        """Subscribe to a lifecycle event (see HostEvent)."""
        ...

    def register_command(self, name: str, description: str, handler: CommandHandler) -> None:
        """Register a slash command."""
        ...

    def send_message(self, message: RetryTriggerMessage, *, trigger_turn: bool = False) -> None:
        """
        Append a custom message to the session.

        With trigger_turn=True the host starts a new turn as if the message
        were the newest user input.
        """
        ...

    def get_thinking_level(self) -> str | None:
        """Current thinking level setting."""
        ...
