"""Mattermost incoming-webhook provider.

URL format: ``mmost://host[:port]/hook_id`` (``mmosts://`` for HTTPS).
Query params: ``channel``, ``username``, ``icon_url``.
"""

from __future__ import annotations

from ..models import DispatchResult, Message, SendContext
from .base import BaseProvider, get_param


class MattermostProvider(BaseProvider):
    id = "mattermost"
    schemas = ("mmost", "mmosts")

    async def send(self, message: Message, ctx: SendContext) -> DispatchResult:
        parsed = ctx.parsed
        if not parsed.hostname:
            return self.failure("Invalid Mattermost URL. Expected: mmost://host/hook_id")
        hook_id = parsed.segments[0] if parsed.segments else None
        if not hook_id:
            return self.failure("Invalid Mattermost URL. Hook ID is required: mmost://host/hook_id")

        protocol = "https" if parsed.scheme == "mmosts" else "http"
        port = f":{parsed.port}" if parsed.port else ""
        text = f"**{message.title}**\n{message.body}" if message.title else message.body

        payload = {"text": text}
        for name in ("channel", "username", "icon_url"):
            value = get_param(parsed.params, name)
            if value:
                payload[name] = value

        return await self.post(
            "Mattermost",
            f"{protocol}://{parsed.hostname}{port}/hooks/{hook_id}",
            json=payload,
        )
