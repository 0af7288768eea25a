"""Data models shared by the router, providers and fallback handler."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Query values collapse to a list when a key repeats.
ParamValue = str | list[str]


@dataclass(frozen=True)
class ParsedDestination:
    """A destination URL broken into provider-agnostic parts."""

    scheme: str
    raw: str
    hostname: str | None = None
    port: int | None = None
    username: str | None = None
    password: str | None = None
    path: str | None = None
    segments: list[str] = field(default_factory=list)
    params: dict[str, ParamValue] = field(default_factory=dict)


@dataclass(frozen=True)
class DestinationEntry:
    """A stored destination URL and the tags used to select it."""

    url: str
    tags: tuple[str, ...] = ()


@dataclass
class Attachment:
    """A file to send with a message, by URL or inline content."""

    url: str | None = None
    content: bytes | str | None = None  # str content is base64
    name: str | None = None
    content_type: str | None = None


@dataclass
class Message:
    body: str
    title: str | None = None
    attachments: list[Attachment] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)  # informational only
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class DispatchResult:
    """Outcome of one destination in a send batch."""

    success: bool
    provider_id: str
    raw: Any = None
    error: Exception | None = None


@dataclass(frozen=True)
class SendContext:
    """What a provider receives alongside the message."""

    url: str
    parsed: ParsedDestination
    tags: list[str] | None = None


@dataclass(frozen=True)
class ErrorContext:
    """Details of a failed destination, handed to the fallback handler."""

    provider_id: str
    url: str
    message: Message
    tags: list[str] | None = None
