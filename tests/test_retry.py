"""Retry/backoff tests."""

from unittest.mock import AsyncMock, patch

import pytest

from src.notify.retry import RetryConfig, with_retry

pytestmark = pytest.mark.asyncio


async def test_returns_first_success():
    fn = AsyncMock(return_value="ok")
    assert await with_retry(fn) == "ok"
    assert fn.await_count == 1


async def test_retries_until_success():
    fn = AsyncMock(side_effect=[ConnectionError("a"), ConnectionError("b"), "ok"])
    retries = []
    with patch("src.notify.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
        result = await with_retry(
            fn,
            RetryConfig(max_attempts=3, base_delay=1.0),
            on_retry=lambda attempt, exc, delay: retries.append((attempt, delay)),
        )
    assert result == "ok"
    assert retries == [(1, 1.0), (2, 2.0)]
    assert [c.args[0] for c in sleep.await_args_list] == [1.0, 2.0]


async def test_gives_up_and_reraises():
    fn = AsyncMock(side_effect=TimeoutError("slow"))
    with patch("src.notify.retry.asyncio.sleep", new_callable=AsyncMock):
        with pytest.raises(TimeoutError):
            await with_retry(fn, RetryConfig(max_attempts=2))
    assert fn.await_count == 2


async def test_delay_is_capped():
    fn = AsyncMock(side_effect=[OSError(), OSError(), OSError(), "ok"])
    with patch("src.notify.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
        await with_retry(fn, RetryConfig(max_attempts=4, base_delay=5.0, backoff_multiplier=3.0, max_delay=10.0))
    assert [c.args[0] for c in sleep.await_args_list] == [5.0, 10.0, 10.0]


async def test_non_matching_exception_is_not_retried():
    fn = AsyncMock(side_effect=ValueError("bad input"))
    with pytest.raises(ValueError):
        await with_retry(fn, retry_on=(ConnectionError,))
    assert fn.await_count == 1
