"""Background send runner and completion callback."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from urllib.parse import urlparse

import httpx

from src.api.schemas import DeliveryOutcome, NotifyReport
from src.cache.redis import ReportCache
from src.config import Settings
from src.notify import DispatchResult, Message, NotificationRouter
from src.notify.retry import RetryConfig, with_retry

logger = logging.getLogger(__name__)

_CALLBACK_RETRY = RetryConfig(max_attempts=4, base_delay=1.0, max_delay=30.0)

_VALID_SCHEMES = {"http", "https"}


def validate_callback_url(url: str, allowed_hosts: str) -> bool:
    """Check that *url*'s host is in the comma-separated allow-list.

    Also enforces an http(s) scheme, no embedded credentials and a
    non-empty hostname. Hosts compare case-insensitively.
    """
    if not allowed_hosts:
        return False

    parsed = urlparse(url)
    if parsed.scheme not in _VALID_SCHEMES:
        return False
    if parsed.username or parsed.password:
        return False
    hostname = parsed.hostname
    if not hostname:
        return False

    allowed = {h.strip().lower() for h in allowed_hosts.split(",") if h.strip()}
    return hostname.lower() in allowed


async def post_callback(
    url: str,
    payload: dict,
    retry_config: RetryConfig = _CALLBACK_RETRY,
) -> None:
    """POST a JSON payload to the callback URL.

    Network errors are retried with exponential backoff; HTTP error
    responses are not. Failures are logged, never raised.
    """

    async def _attempt() -> None:
        async with httpx.AsyncClient(timeout=10) as client:
            resp = await client.post(url, json=payload)
            resp.raise_for_status()

    try:
        await with_retry(_attempt, retry_config, retry_on=(httpx.TransportError,))
    except Exception:
        logger.warning("callback POST to %s failed", url, exc_info=True)


def build_report(task_id: str, results: list[DispatchResult]) -> NotifyReport:
    """Summarise dispatch results into a serialisable report."""
    outcomes = [
        DeliveryOutcome(
            success=result.success,
            provider_id=result.provider_id,
            error=str(result.error) if result.error else None,
            error_type=type(result.error).__name__ if result.error else None,
        )
        for result in results
    ]
    failed = sum(1 for outcome in outcomes if not outcome.success)
    if not outcomes:
        status = "empty"
    elif failed == 0:
        status = "completed"
    elif failed == len(outcomes):
        status = "failed"
    else:
        status = "partial"
    return NotifyReport(
        task_id=task_id,
        status=status,
        results=outcomes,
        delivered=len(outcomes) - failed,
        failed=failed,
        created_at=datetime.now(timezone.utc),
    )


async def run_background_send(
    router: NotificationRouter,
    cache: ReportCache,
    settings: Settings,
    message: Message,
    task_id: str,
    tags: list[str] | None = None,
    params: dict[str, str] | None = None,
    callback_url: str | None = None,
) -> None:
    """Send in the background, cache the report, and optionally POST a callback."""
    try:
        results = await router.send(message, tags=tags, params=params)
        report: NotifyReport = build_report(task_id, results)
        await cache.set(task_id, report, ttl=settings.result_ttl_seconds)

        if callback_url:
            await post_callback(
                callback_url,
                {
                    "task_id": task_id,
                    "status": report.status,
                    "delivered": report.delivered,
                    "failed": report.failed,
                    "result_url": f"/notify/{task_id}",
                },
            )
    except Exception:
        logger.exception("background send failed", extra={"task_id": task_id})
