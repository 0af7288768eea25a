"""Destination URL decomposition.

Destination URLs look like ``scheme://[user[:pass]@]host[:port]/path?query``
but the host part is often not a real host: webhook ids, bot tokens and
phone numbers all show up there. Parsing first tries the standard library
splitter (with the custom scheme swapped for ``https``) and falls back to
manual token splitting when the authority is something a strict parser
would reject.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import parse_qsl, unquote, urlsplit

from .errors import ParseError
from .models import ParamValue, ParsedDestination

logger = logging.getLogger(__name__)

_SCHEME_PREFIX_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*)://")
_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*):")
# Hostnames the strict path accepts; IPv6 literals arrive without brackets.
_HOST_RE = re.compile(r"^[A-Za-z0-9\-._~%:]+$")
_PORT_RE = re.compile(r"^[0-9]+$")
# Characters urlsplit removes before parsing.
_STRIPPED_CHARS = "\t\r\n"


def parse_query(query: str) -> dict[str, ParamValue]:
    """Parse a query string, collapsing repeated keys into an ordered list."""
    params: dict[str, ParamValue] = {}
    if not query:
        return params
    for key, value in parse_qsl(query, keep_blank_values=True):
        existing = params.get(key)
        if existing is None:
            params[key] = value
        elif isinstance(existing, list):
            existing.append(value)
        else:
            params[key] = [existing, value]
    return params


def extract_scheme(url: str) -> str:
    """Return the lower-cased scheme of *url*, or ``""`` if it has none."""
    match = _SCHEME_RE.match(url)
    return match.group(1).lower() if match else ""


def _decode(value: str | None) -> str | None:
    return unquote(value) if value else None


def _strict_parts(rest: str) -> tuple | None:
    """Split *rest* with ``urlsplit``; ``None`` when the authority is irregular.

    ``urlsplit`` silently drops tabs and newlines, so input holding them is
    left to the manual splitter.
    """
    if any(char in rest for char in _STRIPPED_CHARS):
        return None
    try:
        parts = urlsplit(f"https://{rest}")
        port = parts.port
    except ValueError:
        return None

    hostname = parts.hostname
    if hostname and not _HOST_RE.match(hostname):
        return None

    return (
        hostname or None,
        port,
        _decode(parts.username),
        _decode(parts.password),
        parts.path,
        parts.query,
    )


def _manual_parts(rest: str) -> tuple:
    """Token-split an authority that ``urlsplit`` cannot represent."""
    rest = rest.partition("#")[0]
    location, _, query = rest.partition("?")
    authority, _, path = location.partition("/")

    username = password = None
    credentials, at, host = authority.rpartition("@")
    if at:
        user, _, secret = credentials.partition(":")
        username = _decode(user)
        password = _decode(secret)

    port = None
    head, colon, tail = host.rpartition(":")
    if colon and _PORT_RE.match(tail):
        host = head
        port = int(tail)

    return host or None, port, username, password, path, query


def decompose(raw: str) -> ParsedDestination:
    """Decompose a destination URL into a :class:`ParsedDestination`.

    Raises :class:`ParseError` for empty or non-string input and for input
    without a ``scheme://`` prefix.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise ParseError("URL must be a non-empty string", raw)

    trimmed = raw.strip()
    match = _SCHEME_PREFIX_RE.match(trimmed)
    if match is None:
        raise ParseError("Invalid URL format: missing scheme", raw)

    scheme = match.group(1).lower()
    rest = trimmed[match.end():]

    parts = _strict_parts(rest)
    if parts is None:
        logger.debug("strict url parse rejected, splitting manually", extra={"scheme": scheme})
        parts = _manual_parts(rest)
    hostname, port, username, password, path, query = parts

    path = path.strip("/")
    return ParsedDestination(
        scheme=scheme,
        raw=trimmed,
        hostname=hostname,
        port=port,
        username=username,
        password=password,
        path=path or None,
        segments=[segment for segment in path.split("/") if segment],
        params=parse_query(query),
    )


def is_valid_url(url: object) -> bool:
    """Return whether *url* decomposes without error."""
    try:
        decompose(url)  # type: ignore[arg-type]
    except ParseError:
        return False
    return True
