"""Redis client — get/set dispatch reports with TTL."""

from __future__ import annotations

import logging

import redis.asyncio as redis
from redis.backoff import ExponentialBackoff
from redis.retry import Retry

from src.api.schemas import NotifyReport

logger = logging.getLogger(__name__)

KEY_PREFIX = "notify:"


class ReportCache:
    """Thin async wrapper around Redis for caching send reports."""

    def __init__(self, client: redis.Redis, default_ttl: int = 3600) -> None:
        self._client = client
        self._default_ttl = default_ttl

    async def get(self, task_id: str) -> NotifyReport | None:
        """Return the cached report, or ``None`` on miss / error."""
        try:
            raw = await self._client.get(f"{KEY_PREFIX}{task_id}")
        except redis.RedisError:
            logger.warning("cache get failed", extra={"task_id": task_id}, exc_info=True)
            return None
        if raw is None:
            logger.debug("cache miss", extra={"task_id": task_id})
            return None
        return NotifyReport.model_validate_json(raw)

    async def set(
        self, task_id: str, report: NotifyReport, ttl: int | None = None
    ) -> bool:
        """Store *report* with a TTL. Returns ``False`` on error."""
        effective_ttl = ttl if ttl is not None else self._default_ttl
        try:
            await self._client.set(
                f"{KEY_PREFIX}{task_id}",
                report.model_dump_json(),
                ex=effective_ttl,
            )
        except redis.RedisError:
            logger.warning("cache set failed", extra={"task_id": task_id}, exc_info=True)
            return False
        logger.debug("cache set", extra={"task_id": task_id, "ttl": effective_ttl})
        return True


async def create_redis_client(redis_url: str) -> redis.Redis:
    # Strip credentials for logging (everything before @ if present)
    safe_url = redis_url.split("@")[-1]
    logger.info("connecting to redis", extra={"redis_url": safe_url})
    return redis.from_url(
        redis_url,
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
        health_check_interval=30,
        retry=Retry(ExponentialBackoff(), retries=3),
        retry_on_error=[redis.ConnectionError, redis.TimeoutError],
    )
