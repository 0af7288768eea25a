"""Retry with exponential backoff, for callers wrapping a send."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for exponential-backoff retry."""

    max_attempts: int = 3
    base_delay: float = 1.0
    backoff_multiplier: float = 2.0
    max_delay: float = 30.0


_DEFAULT_RETRY = RetryConfig()


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    config: RetryConfig = _DEFAULT_RETRY,
    on_retry: Callable[[int, Exception, float], None] | None = None,
    retry_on: tuple[type[Exception], ...] = (Exception,),
) -> T:
    """Await ``fn()`` until it succeeds or attempts run out.

    Only exceptions matching *retry_on* are retried; others propagate at
    once. The last exception is re-raised once ``config.max_attempts``
    calls have failed.
    """
    delay = config.base_delay
    attempt = 1
    while True:
        try:
            return await fn()
        except retry_on as exc:
            if attempt >= config.max_attempts:
                logger.warning("giving up after %d attempts", attempt, exc_info=True)
                raise
            logger.debug(
                "attempt %d/%d failed, retrying in %.1fs: %s",
                attempt, config.max_attempts, delay, exc,
            )
            if on_retry is not None:
                on_retry(attempt, exc, delay)
            await asyncio.sleep(delay)
            delay = min(delay * config.backoff_multiplier, config.max_delay)
            attempt += 1
