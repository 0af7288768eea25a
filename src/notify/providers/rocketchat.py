"""Rocket.Chat incoming-webhook provider.

URL format: ``rocketchat://host[:port]/webhook_token`` (also ``rocket://``).
Query params: ``channel``, ``alias``, ``avatar``, ``emoji``.
"""

from __future__ import annotations

from ..models import DispatchResult, Message, ParsedDestination, SendContext
from .base import BaseProvider, get_param, split_host_port, split_token_url


class RocketChatWebhookProvider(BaseProvider):
    id = "rocketchat"
    schemas = ("rocketchat", "rocket")

    def decompose(self, raw: str) -> ParsedDestination:
        return split_host_port(split_token_url(raw))

    async def send(self, message: Message, ctx: SendContext) -> DispatchResult:
        parsed = ctx.parsed
        if not parsed.hostname:
            return self.failure("Invalid Rocket.Chat URL. Expected: rocketchat://hostname/webhookToken")

        port = f":{parsed.port}" if parsed.port else ""
        text = f"*{message.title}*\n{message.body}" if message.title else message.body
        payload = {"text": text}
        for name in ("channel", "alias", "avatar", "emoji"):
            value = get_param(parsed.params, name)
            if value:
                payload[name] = value

        return await self.post(
            "Rocket.Chat",
            f"https://{parsed.hostname}{port}/hooks/{parsed.path or ''}",
            json=payload,
        )
