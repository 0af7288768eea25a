"""Tag-based destination selection."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from .models import DestinationEntry

_TAG_SPLIT_RE = re.compile(r"[,\s]+")


def filter_by_tags(
    entries: Iterable[DestinationEntry],
    filter_tags: Sequence[str] | None = None,
) -> list[str]:
    """Return the URLs of *entries* selected by *filter_tags*, in order.

    With no filter every URL is returned. Otherwise an entry qualifies when
    any of its tags matches any filter tag, compared case-insensitively.
    Untagged entries never match a non-empty filter.
    """
    if not filter_tags:
        return [entry.url for entry in entries]

    wanted = {tag.lower() for tag in filter_tags}
    return [
        entry.url
        for entry in entries
        if any(tag.lower() in wanted for tag in entry.tags)
    ]


def parse_tags(text: str) -> list[str]:
    """Split a comma or whitespace separated tag string into lower-case tags."""
    return [tag.lower() for tag in _TAG_SPLIT_RE.split(text) if tag]
