"""
Unit tests for BackoffScheduler.

Tests delay computation, the status countdown, and cancellation.
"""

import asyncio
from unittest.mock import AsyncMock, call, patch

import pytest

from turn_retry.retry.backoff import BackoffScheduler


def test_delay_doubles_per_attempt():
    scheduler = BackoffScheduler(base_delay_ms=2000, max_retries=3)

    assert [scheduler.delay_ms(n) for n in (1, 2, 3)] == [2000, 4000, 8000]


def test_delay_uses_configured_base():
    scheduler = BackoffScheduler(base_delay_ms=500)

    assert scheduler.delay_ms(4) == 4000


def test_delay_rejects_attempt_zero():
    with pytest.raises(ValueError):
        BackoffScheduler().delay_ms(0)


def test_status_text_shows_error_attempt_and_seconds():
    scheduler = BackoffScheduler(max_retries=3)

    text = scheduler.format_status("upstream aborted connection", 2, 4000)

    assert text == 'Stream error "upstream aborted connection", retrying (2/3) in 4s…'


def test_status_rounds_partial_seconds_up():
    scheduler = BackoffScheduler(max_retries=3)

    assert scheduler.format_status("x", 1, 1500).endswith("in 2s…")


@pytest.mark.asyncio
async def test_wait_counts_down_and_clears_status(mock_ctx):
    scheduler = BackoffScheduler(base_delay_ms=2000, max_retries=3, status_key="pi-retry")

    with patch.object(scheduler, "_sleep", new=AsyncMock(return_value=True)) as mock_sleep:
        completed = await scheduler.wait(mock_ctx, 1, "aborted")

    assert completed is True
    assert mock_sleep.await_args_list == [call(1.0), call(1.0)]
    assert mock_ctx.ui.set_status.call_args_list == [
        call("pi-retry", 'Stream error "aborted", retrying (1/3) in 2s…'),
        call("pi-retry", 'Stream error "aborted", retrying (1/3) in 1s…'),
        call("pi-retry", None),
    ]
    assert not scheduler.is_waiting


@pytest.mark.asyncio
async def test_wait_total_sleep_matches_delay(mock_ctx):
    scheduler = BackoffScheduler(base_delay_ms=2000, max_retries=3)

    with patch.object(scheduler, "_sleep", new=AsyncMock(return_value=True)) as mock_sleep:
        await scheduler.wait(mock_ctx, 3, "aborted")

    total = sum(c.args[0] for c in mock_sleep.await_args_list)
    assert total == pytest.approx(8.0)


@pytest.mark.asyncio
async def test_cancel_ends_wait_early_and_clears_status(mock_ctx):
    scheduler = BackoffScheduler(base_delay_ms=60_000, max_retries=3, status_key="pi-retry")

    waiter = asyncio.create_task(scheduler.wait(mock_ctx, 1, "aborted"))
    await asyncio.sleep(0)
    assert scheduler.is_waiting

    assert scheduler.cancel() is True
    completed = await asyncio.wait_for(waiter, timeout=1.0)

    assert completed is False
    assert not scheduler.is_waiting
    assert mock_ctx.ui.set_status.call_args_list[-1] == call("pi-retry", None)


def test_cancel_without_pending_wait_is_noop():
    assert BackoffScheduler().cancel() is False


@pytest.mark.asyncio
async def test_zero_base_delay_completes_immediately(mock_ctx):
    scheduler = BackoffScheduler(base_delay_ms=0, status_key="pi-retry")

    completed = await scheduler.wait(mock_ctx, 1, "aborted")

    assert completed is True
    mock_ctx.ui.set_status.assert_called_once_with("pi-retry", None)
