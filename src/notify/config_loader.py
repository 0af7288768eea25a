"""YAML destination files.

Two layouts are understood, and may be combined in one file::

    urls:
      - ntfy://ntfy.sh/alerts
      - url: discord://id/token
        tags: [ops, urgent]

    services:
      ops: slack://T000/B000/XXXX
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError
from .models import DestinationEntry

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATHS: tuple[Path, ...] = (
    Path.home() / ".notify-router.yml",
    Path.home() / ".notify-router.yaml",
    Path.home() / ".config" / "notify-router" / "config.yml",
    Path("/etc/notify-router.yml"),
)


def _url_entries(items: Any, path: str) -> list[DestinationEntry]:
    if not isinstance(items, list):
        raise ConfigError("'urls' must be a list", path)

    entries: list[DestinationEntry] = []
    for item in items:
        if isinstance(item, str):
            entries.append(DestinationEntry(url=item))
        elif isinstance(item, dict) and isinstance(item.get("url"), str):
            tags = item.get("tags") or []
            if isinstance(tags, str):
                tags = [tags]
            entries.append(
                DestinationEntry(
                    url=item["url"],
                    tags=tuple(tag for tag in tags if isinstance(tag, str)),
                )
            )
        else:
            logger.warning("skipping malformed url entry", extra={"path": path})
    return entries


def _service_entries(services: Any, path: str) -> list[DestinationEntry]:
    if not isinstance(services, dict):
        raise ConfigError("'services' must be a mapping of tag to url", path)
    return [
        DestinationEntry(url=url, tags=(str(tag),))
        for tag, url in services.items()
        if isinstance(url, str)
    ]


def parse_config(content: str, path: str = "<string>") -> list[DestinationEntry]:
    """Parse YAML *content* into destination entries.

    Raises :class:`ConfigError` for invalid YAML or a wrongly shaped
    ``urls``/``services`` section.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse config file: {exc}", path) from exc

    if not isinstance(data, dict):
        return []

    entries: list[DestinationEntry] = []
    if "urls" in data and data["urls"] is not None:
        entries.extend(_url_entries(data["urls"], path))
    if "services" in data and data["services"] is not None:
        entries.extend(_service_entries(data["services"], path))
    return entries


def load_config_entries(
    paths: Iterable[str | Path] = (),
    include_defaults: bool = True,
) -> list[DestinationEntry]:
    """Read every existing file among *paths* (then the default locations).

    Missing or unreadable files are skipped; parse errors propagate.
    """
    candidates = [Path(p).expanduser() for p in paths]
    if include_defaults:
        candidates.extend(DEFAULT_CONFIG_PATHS)

    entries: list[DestinationEntry] = []
    for path in candidates:
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            continue
        except OSError:
            logger.warning("config file unreadable", extra={"path": str(path)}, exc_info=True)
            continue
        loaded = parse_config(content, str(path))
        logger.debug("config file loaded", extra={"path": str(path), "entries": len(loaded)})
        entries.extend(loaded)
    return entries


def write_config(path: str | Path, entries: Iterable[DestinationEntry]) -> None:
    """Write *entries* as a ``urls:`` config file, creating parent directories."""
    items: list[dict[str, Any]] = []
    for entry in entries:
        item: dict[str, Any] = {"url": entry.url}
        if entry.tags:
            item["tags"] = list(entry.tags)
        items.append(item)

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(yaml.safe_dump({"urls": items}, sort_keys=False), encoding="utf-8")
