"""
Retry coordinator.

Wires the classifier, attempt tracker, backoff scheduler, trigger, scrubber
and manual retry surfaces to the host's lifecycle events:

    turn_end       normal assistant turn -> clear failure flag, close episode
    agent_end      classify the run's last assistant message, maybe auto-retry
    context        scrub the pending retry marker
    session_start  install the empty-Enter interceptor

Only outcomes cross back into the host: a status line, a notification, a
hidden trigger message, or nothing. Host errors are never re-raised.

Usage:
    coordinator = RetryCoordinator(host, settings).install()
"""

from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from turn_retry.config import Settings
from turn_retry.config import settings as default_settings
from turn_retry.host.protocol import ExtensionContext, HostAPI
from turn_retry.logging_config import bind_session_context
from turn_retry.models.enums import HostEvent, NotifyLevel, RetryEventKind, Verdict
from turn_retry.models.messages import (
    AgentEndEvent,
    ContextEvent,
    ContextResult,
    SessionStartEvent,
    TurnEndEvent,
)
from turn_retry.monitoring.metrics import (
    retry_backoff_seconds,
    retry_episode_active,
    retry_verdicts_total,
)
from turn_retry.persistence.audit_log import RetryAuditLog
from turn_retry.retry.backoff import BackoffScheduler
from turn_retry.retry.classifier import ErrorClassifier
from turn_retry.retry.manual import COMMAND_DESCRIPTION, COMMAND_NAME, ManualRetry
from turn_retry.retry.recorder import RetryRecorder
from turn_retry.retry.scrubber import ContextScrubber
from turn_retry.retry.state import CoordinatorState
from turn_retry.retry.tracker import AttemptTracker
from turn_retry.retry.trigger import RetryTrigger

logger = structlog.get_logger(__name__)

EventT = TypeVar("EventT", bound=BaseModel)


def _coerce(model: type[EventT], event: Any) -> EventT | None:
    """
    Accept the event model, the host's raw mapping, or an attribute object.

    Returns None for a payload that does not validate; the handler then
    leaves the host untouched.
    """
    if isinstance(event, model):
        return event
    try:
        return model() if event is None else model.model_validate(event)
    except ValidationError as e:
        logger.debug("Host event not understood", event_model=model.__name__, errors=e.error_count())
        return None


class RetryCoordinator:
    """
    Retry coordinator installed into a host agent runtime.

    Owns all mutable retry state (CoordinatorState and the tracker's
    FailureEpisode); nothing is shared between coordinator instances.

    Attributes:
        host: Host extension API
        settings: Settings in force
        state: Shared flags (last_turn_failed, pending_marker)
        classifier: ErrorClassifier
        tracker: AttemptTracker
        scheduler: BackoffScheduler
        trigger: RetryTrigger
        scrubber: ContextScrubber
        recorder: RetryRecorder
        manual: ManualRetry
    """

    def __init__(
        self,
        host: HostAPI,
        settings: Settings | None = None,
        *,
        classifier: ErrorClassifier | None = None,
        audit_log: RetryAuditLog | None = None,
    ):
        self.host = host
        self.settings = settings or default_settings
        self.state = CoordinatorState()
        self.metrics_enabled = self.settings.PROMETHEUS_ENABLED

        self.classifier = classifier or ErrorClassifier.from_settings(self.settings)
        self.tracker = AttemptTracker(self.settings.MAX_RETRIES)
        self.scheduler = BackoffScheduler(
            base_delay_ms=self.settings.RETRY_BASE_DELAY_MS,
            max_retries=self.settings.MAX_RETRIES,
            status_key=self.settings.RETRY_STATUS_KEY,
        )
        self.trigger = RetryTrigger.from_settings(host, self.state, self.settings)
        self.scrubber = ContextScrubber(self.state, self.settings.RETRY_CUSTOM_TYPE)
        self.recorder = RetryRecorder(
            host,
            audit_log or RetryAuditLog.from_settings(self.settings),
            metrics_enabled=self.metrics_enabled,
        )
        self.manual = ManualRetry(
            self.state,
            self.trigger,
            self.recorder,
            scheduler=self.scheduler,
            cancel_pending_auto=self.settings.CANCEL_AUTO_RETRY_ON_MANUAL,
        )

    @property
    def max_retries(self) -> int:
        return self.tracker.max_retries

    @property
    def status_key(self) -> str:
        return self.settings.RETRY_STATUS_KEY

    def install(self) -> "RetryCoordinator":
        """Subscribe to host events and register the retry command."""
        self.host.on(HostEvent.TURN_END.value, self.on_turn_end)
        self.host.on(HostEvent.AGENT_END.value, self.on_agent_end)
        self.host.on(HostEvent.CONTEXT.value, self.on_context)
        self.host.on(HostEvent.SESSION_START.value, self.on_session_start)
        self.host.register_command(COMMAND_NAME, COMMAND_DESCRIPTION, self.manual.handle_command)

        logger.info(
            "Retry coordinator installed",
            auto_retry_enabled=self.settings.AUTO_RETRY_ENABLED,
            max_retries=self.max_retries,
            base_delay_ms=self.settings.RETRY_BASE_DELAY_MS,
            audit_log=str(self.recorder.audit_log.path),
        )
        return self

    # ------------------------------------------------------------------
    # Host event handlers
    # ------------------------------------------------------------------

    async def on_turn_end(self, event: Any, ctx: ExtensionContext) -> None:
        """Close the failure episode when a turn ends normally."""
        turn = _coerce(TurnEndEvent, event)
        if turn is None:
            return
        message = turn.message
        if message.role != "assistant" or message.is_failed_turn:
            return

        self.state.last_turn_failed = False

        recovered = self.tracker.record_success()
        if recovered is None:
            return

        self.recorder.record(
            RetryEventKind.RETRY_SUCCEEDED,
            ctx,
            attempt=recovered.attempt,
            max_retries=self.max_retries,
            stop_reason=recovered.last_stop_reason,
            error_message=recovered.last_error_message,
        )
        ctx.ui.notify(f"Retry succeeded on attempt {recovered.attempt}.", NotifyLevel.INFO)
        ctx.ui.set_status(self.status_key, None)
        if self.metrics_enabled:
            retry_episode_active.set(0)

    async def on_agent_end(self, event: Any, ctx: ExtensionContext) -> None:
        """Classify the run's final assistant message and auto-retry if eligible."""
        run = _coerce(AgentEndEvent, event)
        last = run.last_assistant() if run is not None else None
        if last is None:
            return

        stop_reason = last.stop_reason or ""
        error_message = last.error_message or ""
        failed = last.is_failed_turn

        if failed:
            self.state.last_turn_failed = True

        verdict = self.classifier.classify(stop_reason, error_message)
        if failed and self.metrics_enabled:
            retry_verdicts_total.labels(verdict=verdict.value).inc()

        if not verdict.should_auto_retry:
            if failed and verdict is Verdict.TERMINAL:
                ctx.ui.notify(
                    f"Response failed ({stop_reason}): {error_message or 'unknown error'}. "
                    f"Use /{COMMAND_NAME} or press Enter to retry.",
                    NotifyLevel.WARNING,
                )
            logger.debug("No automatic retry", verdict=verdict.value, stop_reason=stop_reason)
            return

        if not self.settings.AUTO_RETRY_ENABLED:
            logger.debug("Automatic retry disabled", error_message=error_message)
            return

        await self._auto_retry(ctx, stop_reason, error_message)

    async def on_context(self, event: Any, ctx: ExtensionContext) -> ContextResult | None:
        """Strip the pending retry marker from the context about to be sent."""
        context = _coerce(ContextEvent, event)
        if context is None:
            return None
        cleaned = self.scrubber.scrub(context.messages)
        if cleaned is None:
            return None
        return ContextResult(messages=cleaned)

    async def on_session_start(self, event: Any, ctx: ExtensionContext) -> None:
        """Install the empty-Enter retry interceptor for the session."""
        start = _coerce(SessionStartEvent, event)
        session_id = (start.session_id if start is not None else None) or ctx.session_id
        bind_session_context(session_id, ctx.cwd)
        logger.debug("Installing retry input interceptor")
        ctx.ui.on_terminal_input(self.manual.make_input_handler(ctx))

    # ------------------------------------------------------------------
    # Auto-retry
    # ------------------------------------------------------------------

    async def _auto_retry(self, ctx: ExtensionContext, stop_reason: str, error_message: str) -> None:
        outcome = self.tracker.record_failure(stop_reason, error_message)

        if outcome.exhausted:
            self.recorder.record(
                RetryEventKind.RETRY_EXHAUSTED,
                ctx,
                attempt=outcome.attempt,
                max_retries=self.max_retries,
                stop_reason=stop_reason,
                error_message=error_message,
            )
            ctx.ui.notify(
                f"Stream error persisted after {self.max_retries} retries: {error_message}",
                NotifyLevel.ERROR,
            )
            ctx.ui.set_status(self.status_key, None)
            if self.metrics_enabled:
                retry_episode_active.set(0)
            return

        delay_ms = self.scheduler.delay_ms(outcome.attempt)
        self.recorder.record(
            RetryEventKind.RETRY,
            ctx,
            attempt=outcome.attempt,
            max_retries=self.max_retries,
            stop_reason=stop_reason,
            error_message=error_message,
            delay_ms=delay_ms,
        )
        if self.metrics_enabled:
            retry_backoff_seconds.observe(delay_ms / 1000)
            retry_episode_active.set(1)

        completed = await self.scheduler.wait(ctx, outcome.attempt, error_message)
        if not completed:
            # A manual retry already fired the trigger
            return

        self.trigger.fire()
