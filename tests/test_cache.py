"""Redis cache tests."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
import redis.asyncio as redis

from src.api.schemas import DeliveryOutcome, NotifyReport
from src.cache.redis import KEY_PREFIX, ReportCache


pytestmark = pytest.mark.asyncio


def _make_report(task_id: str = "task-1", **overrides) -> NotifyReport:
    defaults = dict(
        task_id=task_id,
        status="partial",
        results=[
            DeliveryOutcome(success=True, provider_id="ntfy"),
            DeliveryOutcome(
                success=False,
                provider_id="nope",
                error="No provider found for scheme: nope",
                error_type="ProviderNotFoundError",
            ),
        ],
        delivered=1,
        failed=1,
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )
    defaults.update(overrides)
    return NotifyReport(**defaults)


async def test_set_and_get(report_cache: ReportCache):
    report = _make_report()
    assert await report_cache.set("task-1", report) is True
    cached = await report_cache.get("task-1")
    assert cached == report


async def test_get_missing_key(report_cache: ReportCache):
    assert await report_cache.get("nonexistent") is None


async def test_ttl_is_set(report_cache: ReportCache):
    await report_cache.set("task-ttl", _make_report("task-ttl"))
    ttl = await report_cache._client.ttl(f"{KEY_PREFIX}task-ttl")
    assert 0 < ttl <= 3600


async def test_custom_ttl(report_cache: ReportCache):
    await report_cache.set("task-custom", _make_report("task-custom"), ttl=120)
    ttl = await report_cache._client.ttl(f"{KEY_PREFIX}task-custom")
    assert 0 < ttl <= 120


async def test_key_prefix(report_cache: ReportCache):
    await report_cache.set("abc-123", _make_report("abc-123"))
    assert await report_cache._client.exists(f"{KEY_PREFIX}abc-123")
    assert not await report_cache._client.exists("abc-123")


async def test_failed_outcomes_round_trip(report_cache: ReportCache):
    await report_cache.set("task-errs", _make_report("task-errs"))
    cached = await report_cache.get("task-errs")
    assert cached.results[1].error_type == "ProviderNotFoundError"
    assert cached.results[1].error == "No provider found for scheme: nope"
    assert cached.delivered == 1
    assert cached.failed == 1


async def test_get_handles_connection_error(report_cache: ReportCache):
    report_cache._client.get = AsyncMock(
        side_effect=redis.ConnectionError("down")
    )
    assert await report_cache.get("task-err") is None


async def test_set_handles_connection_error(report_cache: ReportCache):
    report_cache._client.set = AsyncMock(
        side_effect=redis.ConnectionError("down")
    )
    assert await report_cache.set("task-err", _make_report()) is False
