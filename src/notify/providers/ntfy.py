"""ntfy push notifications.

URL format: ``ntfy://[user:pass@]host[:port]/topic`` (``ntfys://`` for HTTPS).
Query params map onto ntfy headers: ``priority``, ``tags``, ``click``,
``attach``, ``icon``, ``email``, ``delay``.
"""

from __future__ import annotations

from ..models import DispatchResult, Message, SendContext
from .base import BaseProvider, get_param

_HEADER_PARAMS = {
    "priority": "Priority",
    "tags": "Tags",
    "click": "Click",
    "attach": "Attach",
    "icon": "Icon",
    "email": "Email",
    "delay": "Delay",
}


class NtfyProvider(BaseProvider):
    id = "ntfy"
    schemas = ("ntfy", "ntfys")

    async def send(self, message: Message, ctx: SendContext) -> DispatchResult:
        parsed = ctx.parsed
        if not parsed.hostname:
            return self.failure("Invalid ntfy URL. Expected: ntfy://host/topic")

        topic = parsed.segments[0] if parsed.segments else None
        if not topic:
            return self.failure("Invalid ntfy URL. Topic is required: ntfy://host/topic")

        protocol = "https" if parsed.scheme == "ntfys" else "http"
        port = f":{parsed.port}" if parsed.port else ""
        url = f"{protocol}://{parsed.hostname}{port}/{topic}"

        headers: dict[str, str] = {}
        if message.title:
            headers["Title"] = message.title
        for param, header in _HEADER_PARAMS.items():
            value = get_param(parsed.params, param)
            if value:
                headers[header] = value

        auth = None
        if parsed.username and parsed.password:
            auth = (parsed.username, parsed.password)

        return await self.post(
            "ntfy",
            url,
            content=message.body.encode(),
            headers=headers,
            auth=auth,
        )
