"""``{name}`` placeholder substitution in destination URLs."""

from __future__ import annotations

import re
from collections.abc import Mapping
from urllib.parse import quote

from .errors import MissingParamError

_PLACEHOLDER_RE = re.compile(r"\{([^}]+)\}")

# Characters left unescaped, matching encodeURIComponent.
_SAFE = "-_.!~*'()"


def substitute(url: str, params: Mapping[str, str] | None = None) -> str:
    """Replace each ``{name}`` in *url* with the percent-encoded ``params[name]``.

    Substituted values are never re-scanned. Raises :class:`MissingParamError`
    for the first placeholder without a value.
    """
    values = params or {}

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in values:
            raise MissingParamError(key, url)
        return quote(str(values[key]), safe=_SAFE)

    return _PLACEHOLDER_RE.sub(_replace, url)
