"""Scheme to provider registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .providers.base import Provider


class ProviderRegistry:
    """Registry mapping lower-cased URL schemes to provider instances.

    A scheme has exactly one owner; registering a provider for a scheme
    that is already taken replaces the previous owner.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._providers: dict[str, Provider] = {}
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    def register(self, provider: Provider) -> None:
        """Register *provider* for every scheme it declares."""
        for scheme in provider.schemas:
            key = scheme.lower()
            previous = self._providers.get(key)
            self._providers[key] = provider
            self._logger.debug(
                "provider registered",
                extra={
                    "provider": provider.id,
                    "scheme": key,
                    "replaced": previous.id if previous is not None and previous is not provider else None,
                },
            )

    def resolve(self, scheme: str) -> Provider | None:
        """Return the provider owning *scheme*, or ``None``."""
        return self._providers.get(scheme.lower())

    def schemes(self) -> list[str]:
        return list(self._providers)

