"""Integration test fixtures (in-memory host runtime).

Provides a fake host that dispatches lifecycle events to registered
handlers, so the coordinator runs end to end without a real agent runtime.
"""

from typing import Any

import pytest

from turn_retry.config import Settings
from turn_retry.models.messages import AgentMessage, InputResult, ModelInfo, RetryTriggerMessage


class FakeUI:
    """Terminal UI double that records everything shown to the user."""

    def __init__(self):
        self.notifications: list[tuple[str, Any]] = []
        self.status_history: list[tuple[str, str | None]] = []
        self.statuses: dict[str, str] = {}
        self.editor_text = ""
        self.input_handlers: list = []

    def notify(self, message: str, level) -> None:
        self.notifications.append((message, level))

    def set_status(self, key: str, text: str | None) -> None:
        self.status_history.append((key, text))
        if text is None:
            self.statuses.pop(key, None)
        else:
            self.statuses[key] = text

    def get_editor_text(self) -> str:
        return self.editor_text

    def on_terminal_input(self, handler) -> None:
        self.input_handlers.append(handler)

    def press(self, data: str) -> InputResult | None:
        """Feed raw input through the interceptors; first claim wins."""
        for handler in self.input_handlers:
            result = handler(data)
            if result is not None and result.consume:
                return result
        return None


class FakeContext:
    def __init__(self, ui: FakeUI, model: ModelInfo):
        self.ui = ui
        self.cwd = "/work/project"
        self.model = model
        self.session_id = "session-it"
        self.idle = True

    def is_idle(self) -> bool:
        return self.idle


class FakeHost:
    """
    Host extension API double.

    Records subscriptions, registered commands and sent messages. Each sent
    message with trigger_turn counts as a new turn the host would start.
    """

    def __init__(self):
        self.handlers: dict[str, list] = {}
        self.commands: dict[str, tuple[str, Any]] = {}
        self.sent: list[tuple[Any, bool]] = []
        self.thinking_level = "high"

    def on(self, event: str, handler) -> None:
        self.handlers.setdefault(event, []).append(handler)

    def register_command(self, name: str, description: str, handler) -> None:
        self.commands[name] = (description, handler)

    def send_message(self, message, *, trigger_turn: bool = False) -> None:
        self.sent.append((message, trigger_turn))

    def get_thinking_level(self) -> str:
        return self.thinking_level

    @property
    def turns_started(self) -> int:
        return sum(1 for _, trigger_turn in self.sent if trigger_turn)

    async def emit(self, event: str, payload: Any, ctx: FakeContext) -> Any:
        """Dispatch an event; returns the last non-None handler result."""
        result = None
        for handler in self.handlers.get(event, []):
            value = await handler(payload, ctx)
            if value is not None:
                result = value
        return result

    async def run_command(self, name: str, args: str, ctx: FakeContext) -> None:
        _, handler = self.commands[name]
        await handler(args, ctx)


@pytest.fixture
def fake_host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def fake_ui() -> FakeUI:
    return FakeUI()


@pytest.fixture
def fake_ctx(fake_ui: FakeUI, model_info: ModelInfo) -> FakeContext:
    return FakeContext(fake_ui, model_info)


@pytest.fixture
def integration_settings(test_settings: Settings) -> Settings:
    """Settings for end-to-end flows (defaults except for the log location)."""
    return test_settings


@pytest.fixture
def run_messages():
    """Factory fixture building an agent_end payload as the host sends it (raw dicts).

    Usage:
        def test_something(run_messages):
            payload = run_messages("aborted", "upstream aborted connection")
    """
    def _build(stop_reason: str, error_message: str | None = None) -> dict[str, Any]:
        return {
            "messages": [
                {"role": "user", "content": "Refactor the parser"},
                {"role": "assistant", "stop_reason": stop_reason, "error_message": error_message},
            ]
        }

    return _build


@pytest.fixture
def marker_context():
    """Factory fixture for a context payload that contains the retry marker."""
    def _build(custom_type: str = "__retry_trigger") -> dict[str, Any]:
        return {
            "messages": [
                AgentMessage(role="user", content="Refactor the parser"),
                AgentMessage(role="assistant", stop_reason="aborted", error_message="aborted"),
                RetryTriggerMessage(custom_type=custom_type, content="Retrying."),
            ]
        }

    return _build
