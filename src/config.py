"""Pydantic Settings — loads configuration from environment variables."""

import re
from functools import lru_cache

from pydantic_settings import BaseSettings

_URL_SPLIT_RE = re.compile(r"[,\s]+")
_PATH_SPLIT_RE = re.compile(r"[:;\n\r]+")


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "extra": "ignore"}

    # Empty disables the HTTP API (every request is rejected).
    api_key: str = ""

    notify_urls: str = ""
    notify_config_path: str = ""
    fallback_tags: str = ""

    redis_url: str = "redis://localhost:6379"
    allowed_callback_hosts: str = ""
    result_ttl_seconds: int = 3600
    log_level: str = "INFO"

    def split_urls(self) -> list[str]:
        """URLs from NOTIFY_URLS, separated by commas or whitespace."""
        return [url for url in _URL_SPLIT_RE.split(self.notify_urls) if url]

    def split_config_paths(self) -> list[str]:
        """Paths from NOTIFY_CONFIG_PATH, separated by ``:``, ``;`` or newlines."""
        return [p.strip() for p in _PATH_SPLIT_RE.split(self.notify_config_path) if p.strip()]

    def split_fallback_tags(self) -> list[str]:
        return [tag for tag in _URL_SPLIT_RE.split(self.fallback_tags) if tag]


@lru_cache
def get_settings() -> Settings:
    return Settings()
