"""Gotify provider.

URL format: ``gotify://host[:port][/base/path]/token`` (``gotifys://`` for HTTPS).
Query params: ``priority``.
"""

from __future__ import annotations

from ..models import DispatchResult, Message, SendContext
from .base import BaseProvider, get_param


class GotifyProvider(BaseProvider):
    id = "gotify"
    schemas = ("gotify", "gotifys")

    async def send(self, message: Message, ctx: SendContext) -> DispatchResult:
        parsed = ctx.parsed
        if not parsed.hostname:
            return self.failure("Invalid Gotify URL. Expected: gotify://host/token")
        if not parsed.segments:
            return self.failure("Invalid Gotify URL. Token is required: gotify://host/token")

        # The token is the last segment; anything before it is a base path.
        *base, token = parsed.segments
        protocol = "https" if parsed.scheme == "gotifys" else "http"
        port = f":{parsed.port}" if parsed.port else ""
        base_path = "/" + "/".join(base) if base else ""
        url = f"{protocol}://{parsed.hostname}{port}{base_path}/message"

        form = {"message": message.body}
        if message.title:
            form["title"] = message.title
        priority = get_param(parsed.params, "priority")
        if priority:
            form["priority"] = priority

        return await self.post("Gotify", url, params={"token": token}, data=form)
