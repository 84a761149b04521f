"""
Manual retry surfaces.

Two entry points share one gate and one action:

- the `retry` command, available whenever the gate passes
- Enter on an empty editor, intercepted from raw terminal input

Gate: agent idle and last turn failed (error or aborted, including user
cancellations the auto path ignores). Action: record a manual_retry entry,
cancel any pending automatic backoff, then fire the hidden trigger.
"""

import structlog

from turn_retry.host.keys import matches_enter
from turn_retry.host.protocol import ExtensionContext, InputHandler
from turn_retry.models.enums import NotifyLevel, RetryEventKind
from turn_retry.models.messages import InputResult
from turn_retry.retry.backoff import BackoffScheduler
from turn_retry.retry.recorder import RetryRecorder
from turn_retry.retry.state import CoordinatorState
from turn_retry.retry.trigger import RetryTrigger

logger = structlog.get_logger(__name__)

COMMAND_NAME = "retry"
COMMAND_DESCRIPTION = "Retry the last prompt (use after aborted or errored responses)"

BUSY_WARNING = "Agent is still running."
NOTHING_TO_RETRY_WARNING = "Nothing to retry, last response completed successfully."


class ManualRetry:
    """
    Gate and action shared by the command and the Enter interceptor.

    Attributes:
        state: Shared coordinator state
        trigger: Hidden retry trigger
        recorder: Audit recorder
        scheduler: Backoff scheduler whose pending wait is cancelled on manual retry
        cancel_pending_auto: Whether manual retry supersedes a pending auto-retry
    """

    def __init__(
        self,
        state: CoordinatorState,
        trigger: RetryTrigger,
        recorder: RetryRecorder,
        scheduler: BackoffScheduler | None = None,
        cancel_pending_auto: bool = True,
    ):
        self.state = state
        self.trigger = trigger
        self.recorder = recorder
        self.scheduler = scheduler
        self.cancel_pending_auto = cancel_pending_auto

    def gate(self, ctx: ExtensionContext) -> str | None:
        """
        Check whether a manual retry may run now.

        Returns:
            None when the gate passes, otherwise the warning to show
        """
        if not ctx.is_idle():
            return BUSY_WARNING
        if not self.state.last_turn_failed:
            return NOTHING_TO_RETRY_WARNING
        return None

    def retry(self, ctx: ExtensionContext, source: str) -> None:
        """Run the manual retry action (gate already passed)."""
        self.recorder.record(
            RetryEventKind.MANUAL_RETRY,
            ctx,
            attempt=1,
            max_retries=1,
        )
        if self.cancel_pending_auto and self.scheduler is not None and self.scheduler.cancel():
            logger.info("Pending automatic retry superseded by manual retry", source=source)
        logger.info("Manual retry", source=source, session_id=ctx.session_id)
        self.trigger.fire()

    async def handle_command(self, args: str, ctx: ExtensionContext) -> None:
        """Handler for the `retry` command; arguments are ignored."""
        warning = self.gate(ctx)
        if warning is not None:
            ctx.ui.notify(warning, NotifyLevel.WARNING)
            return
        self.retry(ctx, source="command")

    def make_input_handler(self, ctx: ExtensionContext) -> InputHandler:
        """
        Build the raw terminal input interceptor for a session.

        Checks run in a fixed order: wrong key, non-empty editor, gate. Any
        miss lets the key through untouched and silently.
        """

        def on_terminal_input(data: str) -> InputResult | None:
            if not matches_enter(data):
                return None
            if ctx.ui.get_editor_text().strip() != "":
                return None
            if self.gate(ctx) is not None:
                return None
            self.retry(ctx, source="enter")
            return InputResult(consume=True)

        return on_terminal_input
