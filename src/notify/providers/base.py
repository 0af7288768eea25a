"""Provider contract and shared helpers for the built-in HTTP providers."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Sequence
from dataclasses import replace
from typing import Any, Protocol

import httpx

from ..errors import ProviderError
from ..models import DispatchResult, Message, ParamValue, ParsedDestination, SendContext
from ..urls import decompose, extract_scheme, parse_query
from .http_errors import describe_http_error

logger = logging.getLogger(__name__)

USER_AGENT = "notify-router/0.1.0"


class Provider(Protocol):
    """Protocol every delivery provider satisfies.

    ``send`` may be a coroutine function or a plain function; the router
    awaits the result when it is awaitable and catches anything it raises.
    """

    id: str
    schemas: Sequence[str]

    def decompose(self, raw: str) -> ParsedDestination: ...

    def send(
        self, message: Message, ctx: SendContext
    ) -> DispatchResult | Awaitable[DispatchResult]: ...


def get_param(params: dict[str, ParamValue], key: str) -> str | None:
    """Return the first value for *key* when it was repeated."""
    value = params.get(key)
    if isinstance(value, list):
        return value[0] if value else None
    return value


def split_token_url(raw: str) -> ParsedDestination:
    """Decompose a URL whose authority is an opaque, case-sensitive token.

    The first path component becomes ``hostname`` verbatim and the rest
    become ``segments``; no credential or port handling is attempted.
    """
    parsed = decompose(raw)
    scheme = extract_scheme(parsed.raw)
    rest = parsed.raw[len(scheme) + 3:].partition("#")[0]
    location, _, query = rest.partition("?")
    parts = [part for part in location.split("/") if part]
    return ParsedDestination(
        scheme=parsed.scheme,
        raw=parsed.raw,
        hostname=parts[0] if parts else None,
        path="/".join(parts[1:]) or None,
        segments=parts[1:],
        params=parse_query(query),
    )


def split_host_port(parsed: ParsedDestination) -> ParsedDestination:
    """Move a trailing numeric ``:port`` off a token-split hostname."""
    host, colon, port = (parsed.hostname or "").rpartition(":")
    if not colon or not port.isdigit():
        return parsed
    return replace(parsed, hostname=host or None, port=int(port))


class BaseProvider:
    """Base class for HTTP webhook providers."""

    id: str = ""
    schemas: tuple[str, ...] = ()
    timeout: float = 30.0

    def decompose(self, raw: str) -> ParsedDestination:
        return decompose(raw)

    async def send(self, message: Message, ctx: SendContext) -> DispatchResult:
        raise NotImplementedError

    def success(self, raw: Any = None) -> DispatchResult:
        return DispatchResult(success=True, provider_id=self.id, raw=raw)

    def failure(self, error: Exception | str, raw: Any = None) -> DispatchResult:
        if isinstance(error, str):
            error = ProviderError(error, self.id)
        return DispatchResult(success=False, provider_id=self.id, raw=raw, error=error)

    def http_failure(self, label: str, response: httpx.Response) -> DispatchResult:
        """Failure result describing a non-2xx vendor response."""
        text = response.text
        details = text.strip() or response.reason_phrase
        return self.failure(
            f"{label}: {describe_http_error(response.status_code, details)}",
            {"status": response.status_code, "text": text},
        )

    async def post(self, label: str, url: str, **kwargs: Any) -> DispatchResult:
        return await self.request(label, "POST", url, **kwargs)

    async def request(self, label: str, method: str, url: str, **kwargs: Any) -> DispatchResult:
        """Send a request and turn the response into a :class:`DispatchResult`.

        Keyword arguments are passed through to ``httpx.AsyncClient.request``.
        Transport errors become failures rather than exceptions.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": USER_AGENT},
            ) as client:
                response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("provider request failed", extra={"provider": self.id}, exc_info=True)
            return self.failure(ProviderError(f"{label}: {exc}", self.id))

        if response.is_error:
            return self.http_failure(label, response)

        try:
            data: Any = response.json()
        except ValueError:
            data = response.text
        return self.success(data)
