"""
Backoff scheduling for automatic retries.

Delay for attempt N (1-indexed) is base_delay_ms * 2^(N-1), so the default
2000 ms base gives 2s, 4s and 8s. While waiting, a single named status line
counts down the remaining seconds; it is cleared however the wait ends.
"""

import asyncio
import math

import structlog

from turn_retry.host.protocol import ExtensionContext

logger = structlog.get_logger(__name__)

# Status countdown refresh interval
TICK_MS = 1000


class BackoffScheduler:
    """
    Computes backoff delays and performs the cancellable wait.

    Only one wait is pending at a time: the host serializes turns, and the
    auto-retry path is the only caller of wait().

    Attributes:
        base_delay_ms: Delay before the first retry
        max_retries: Attempt ceiling (shown in the status line)
        status_key: Name of the status line owned by the coordinator
    """

    def __init__(self, base_delay_ms: int = 2000, max_retries: int = 3, status_key: str = "pi-retry"):
        self.base_delay_ms = base_delay_ms
        self.max_retries = max_retries
        self.status_key = status_key
        self._cancel_event: asyncio.Event | None = None

    def delay_ms(self, attempt: int) -> int:
        """Backoff delay before retry attempt `attempt` (1-indexed)."""
        if attempt < 1:
            raise ValueError("attempt must be >= 1")
        return self.base_delay_ms * 2 ** (attempt - 1)

    @property
    def is_waiting(self) -> bool:
        return self._cancel_event is not None

    def format_status(self, error_message: str, attempt: int, remaining_ms: int) -> str:
        seconds = math.ceil(remaining_ms / 1000)
        return (
            f'Stream error "{error_message}", retrying ({attempt}/{self.max_retries}) '
            f"in {seconds}s…"
        )

    async def wait(self, ctx: ExtensionContext, attempt: int, error_message: str) -> bool:
        """
        Wait out the backoff delay for `attempt`, showing a countdown.

        Returns:
            True when the full delay elapsed, False when cancel() was called
        """
        delay_ms = self.delay_ms(attempt)
        self._cancel_event = asyncio.Event()
        remaining_ms = delay_ms

        logger.info(
            f"Applying exponential backoff: {delay_ms}ms",
            attempt=attempt,
            delay_ms=delay_ms,
        )

        try:
            while remaining_ms > 0:
                ctx.ui.set_status(self.status_key, self.format_status(error_message, attempt, remaining_ms))
                step_ms = min(TICK_MS, remaining_ms)
                if not await self._sleep(step_ms / 1000):
                    logger.info("Backoff wait cancelled", attempt=attempt, remaining_ms=remaining_ms)
                    return False
                remaining_ms -= step_ms
            return True
        finally:
            self._cancel_event = None
            ctx.ui.set_status(self.status_key, None)

    def cancel(self) -> bool:
        """
        Cancel the pending wait, if any.

        Returns:
            True if a wait was pending
        """
        if self._cancel_event is None:
            return False
        self._cancel_event.set()
        return True

    async def _sleep(self, seconds: float) -> bool:
        """Sleep up to `seconds`; False if cancelled meanwhile."""
        event = self._cancel_event
        if event is None:
            return False
        try:
            await asyncio.wait_for(event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return True
        return False
