"""Notification router — fans a message out to every selected destination."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING

from .config_loader import load_config_entries
from .errors import MissingParamError, ProviderError, ProviderNotFoundError, ValidationError
from .events import EventCallback, emit_result
from .fallback import FallbackConfig, FallbackHandler
from .models import DestinationEntry, DispatchResult, ErrorContext, Message, SendContext
from .placeholders import substitute
from .providers import create_default_providers
from .registry import ProviderRegistry
from .tags import filter_by_tags
from .urls import extract_scheme
from .validation import validate_message

if TYPE_CHECKING:
    from src.config import Settings

    from .providers.base import Provider

logger = logging.getLogger(__name__)

UNKNOWN_PROVIDER = "unknown"


class NotificationRouter:
    """Holds destinations and providers, and dispatches messages to them.

    Destinations are processed one at a time in the order they were added;
    every selected destination produces exactly one :class:`DispatchResult`
    and no failure aborts the batch. A router instance is meant to be used
    from a single task.
    """

    def __init__(
        self,
        urls: Iterable[str] | None = None,
        providers: Iterable[Provider] | None = None,
        logger: logging.Logger | None = None,
        config_paths: Iterable[str] | None = None,
        skip_default_providers: bool = False,
        on_error: FallbackConfig | None = None,
    ) -> None:
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._entries: list[DestinationEntry] = []
        self._registry = ProviderRegistry(self._logger)
        self._config_paths = list(config_paths or [])
        self._config_loaded = False
        self._fallback = (
            FallbackHandler(on_error, self._send_fallback, self._logger)
            if on_error is not None
            else None
        )

        if not skip_default_providers:
            for provider in create_default_providers():
                self.register_provider(provider)
        for provider in providers or []:
            self.register_provider(provider)

        if urls:
            self.add(list(urls))

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    def register_provider(self, provider: Provider) -> None:
        """Register *provider*, taking over any scheme it shares with earlier ones."""
        self._registry.register(provider)

    def get_provider(self, scheme: str) -> Provider | None:
        return self._registry.resolve(scheme)

    def add(self, url_or_urls: str | Iterable[str], tags: str | Sequence[str] = ()) -> None:
        """Add one or more destination URLs, all with the same *tags*.

        URLs are trimmed; blank ones are ignored. A single tag may be
        passed as a plain string.
        """
        urls = [url_or_urls] if isinstance(url_or_urls, str) else list(url_or_urls)
        entry_tags = (tags,) if isinstance(tags, str) else tuple(tags)
        for url in urls:
            if not url or not url.strip():
                continue
            self._entries.append(DestinationEntry(url=url.strip(), tags=entry_tags))
            self._logger.debug("destination added", extra={"scheme": extract_scheme(url.strip())})

    def add_entries(self, entries: Iterable[DestinationEntry]) -> None:
        for entry in entries:
            self.add(entry.url, entry.tags)

    def load_config(self, settings: Settings | None = None, include_defaults: bool = True) -> None:
        """Add destinations from the environment and from config files.

        Runs once per router; later calls do nothing. Raises
        :class:`~src.notify.errors.ConfigError` for a malformed file.
        """
        if self._config_loaded:
            return
        if settings is None:
            from src.config import get_settings

            settings = get_settings()

        env_urls = settings.split_urls()
        if env_urls:
            self._logger.debug("destinations found in environment", extra={"count": len(env_urls)})
            self.add(env_urls)

        paths = [*self._config_paths, *settings.split_config_paths()]
        entries = load_config_entries(paths, include_defaults=include_defaults)
        if entries:
            self._logger.debug("destinations loaded from config files", extra={"count": len(entries)})
            self.add_entries(entries)

        self._config_loaded = True

    def urls(self) -> list[str]:
        return [entry.url for entry in self._entries]

    def entries(self) -> list[DestinationEntry]:
        return list(self._entries)

    async def send(
        self,
        message: Message,
        tags: Sequence[str] | None = None,
        params: Mapping[str, str] | None = None,
        on_event: EventCallback | None = None,
    ) -> list[DispatchResult]:
        """Send *message* to every destination selected by *tags*.

        ``params`` fills ``{name}`` placeholders in the URLs. Returns one
        result per selected destination, in destination order. Failed
        destinations are reported to the fallback handler, if configured.
        """
        return await self._send(message, tags, params, on_event, handle_errors=True)

    async def _send_fallback(self, message: Message, tags: list[str]) -> list[DispatchResult]:
        return await self._send(message, tags, None, None, handle_errors=False)

    async def _send(
        self,
        message: Message,
        tags: Sequence[str] | None,
        params: Mapping[str, str] | None,
        on_event: EventCallback | None,
        handle_errors: bool,
    ) -> list[DispatchResult]:
        if isinstance(tags, str):
            tags = [tags]
        urls = filter_by_tags(self._entries, tags)
        if not urls:
            self._logger.warning("no destinations to send to", extra={"tags": list(tags or [])})
            return []

        try:
            validate_message(message)
        except ValidationError as exc:
            self._logger.error("message rejected", extra={"reason": str(exc)})
            results = [
                DispatchResult(success=False, provider_id=UNKNOWN_PROVIDER, error=exc)
                for _ in urls
            ]
            for index, result in enumerate(results):
                await emit_result(on_event, index, result)
            return results

        self._logger.info("sending notification", extra={"destinations": len(urls)})
        send_tags = list(tags) if tags else None
        results: list[DispatchResult] = []
        for index, raw_url in enumerate(urls):
            result, url = await self._dispatch_one(message, raw_url, send_tags, params)
            results.append(result)
            await emit_result(on_event, index, result)

            if not result.success and handle_errors and self._fallback is not None:
                error = result.error or ProviderError("Unknown error", result.provider_id)
                context = ErrorContext(
                    provider_id=result.provider_id,
                    url=url,
                    message=message,
                    tags=send_tags,
                )
                await self._fallback.handle(error, context)

        return results

    async def _dispatch_one(
        self,
        message: Message,
        raw_url: str,
        tags: list[str] | None,
        params: Mapping[str, str] | None,
    ) -> tuple[DispatchResult, str]:
        """Run one destination through substitute → resolve → decompose → send."""
        try:
            url = substitute(raw_url, params)
        except MissingParamError as exc:
            self._logger.error("url placeholder error", extra={"reason": str(exc)})
            return DispatchResult(success=False, provider_id=UNKNOWN_PROVIDER, error=exc), raw_url

        scheme = extract_scheme(url)
        provider = self._registry.resolve(scheme)
        if provider is None:
            self._logger.warning("no provider for scheme", extra={"scheme": scheme})
            return (
                DispatchResult(
                    success=False,
                    provider_id=scheme or UNKNOWN_PROVIDER,
                    error=ProviderNotFoundError(scheme),
                ),
                url,
            )

        try:
            parsed = provider.decompose(url)
            self._logger.debug("dispatching", extra={"provider": provider.id})
            outcome = provider.send(message, SendContext(url=url, parsed=parsed, tags=tags))
            if inspect.isawaitable(outcome):
                outcome = await outcome
        except Exception as exc:
            self._logger.error(
                "provider raised", extra={"provider": provider.id, "reason": str(exc)}, exc_info=True
            )
            return DispatchResult(success=False, provider_id=provider.id, error=exc), url

        if not isinstance(outcome, DispatchResult):
            self._logger.error(
                "provider returned no result",
                extra={"provider": provider.id, "returned": type(outcome).__name__},
            )
            return (
                DispatchResult(
                    success=False,
                    provider_id=provider.id,
                    error=ProviderError("Provider returned no result", provider.id),
                ),
                url,
            )

        if outcome.success:
            self._logger.info("delivered", extra={"provider": provider.id})
        else:
            self._logger.error(
                "delivery failed",
                extra={"provider": provider.id, "reason": str(outcome.error) if outcome.error else None},
            )
        return outcome, url
