"""Shared fixtures: in-memory Redis, no config files from the host."""

import pytest
import pytest_asyncio
from fakeredis.aioredis import FakeRedis

from src.cache.redis import ReportCache
from src.notify import config_loader


@pytest.fixture(autouse=True)
def _no_default_config_files(monkeypatch):
    """Keep config files on the test machine out of every router."""
    monkeypatch.setattr(config_loader, "DEFAULT_CONFIG_PATHS", ())
    for name in ("NOTIFY_URLS", "NOTIFY_CONFIG_PATH", "FALLBACK_TAGS"):
        monkeypatch.delenv(name, raising=False)


@pytest_asyncio.fixture
async def report_cache():
    """ReportCache backed by an in-memory FakeRedis instance."""
    client = FakeRedis(decode_responses=True)
    cache = ReportCache(client, default_ttl=3600)
    yield cache
    await client.aclose()
