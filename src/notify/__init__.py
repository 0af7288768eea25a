"""Notification routing core with pluggable delivery providers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .errors import (
    ConfigError,
    MissingParamError,
    NotifyError,
    ParseError,
    ProviderError,
    ProviderNotFoundError,
    ValidationError,
)
from .fallback import FallbackConfig
from .models import (
    Attachment,
    DestinationEntry,
    DispatchResult,
    ErrorContext,
    Message,
    ParsedDestination,
    SendContext,
)
from .placeholders import substitute
from .providers import BaseProvider, Provider, create_default_providers
from .registry import ProviderRegistry
from .router import NotificationRouter
from .tags import filter_by_tags, parse_tags
from .urls import decompose, is_valid_url

if TYPE_CHECKING:
    from src.config import Settings

__all__ = [
    "Attachment",
    "BaseProvider",
    "ConfigError",
    "DestinationEntry",
    "DispatchResult",
    "ErrorContext",
    "FallbackConfig",
    "Message",
    "MissingParamError",
    "NotificationRouter",
    "NotifyError",
    "ParseError",
    "ParsedDestination",
    "Provider",
    "ProviderError",
    "ProviderNotFoundError",
    "ProviderRegistry",
    "SendContext",
    "ValidationError",
    "build_router",
    "create_default_providers",
    "decompose",
    "filter_by_tags",
    "is_valid_url",
    "parse_tags",
    "substitute",
]


def build_router(
    settings: Settings,
    urls: list[str] | None = None,
    config_paths: list[str] | None = None,
    logger: logging.Logger | None = None,
) -> NotificationRouter:
    """Build a router with the built-in providers and configured destinations.

    Destinations come from *urls*, then NOTIFY_URLS, then config files.
    FALLBACK_TAGS, when set, enables fallback notices for failed sends.
    """
    fallback_tags = settings.split_fallback_tags()
    router = NotificationRouter(
        urls=urls,
        config_paths=config_paths,
        logger=logger,
        on_error=FallbackConfig(fallback_tags=fallback_tags) if fallback_tags else None,
    )
    router.load_config(settings)
    return router
