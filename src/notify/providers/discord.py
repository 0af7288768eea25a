"""Discord webhook provider.

URL format: ``discord://webhook_id/webhook_token``.
Query params: ``avatar_url``, ``username``, ``tts``.
"""

from __future__ import annotations

from ..models import DispatchResult, Message, ParsedDestination, SendContext
from .base import BaseProvider, get_param, split_token_url


class DiscordWebhookProvider(BaseProvider):
    id = "discord"
    schemas = ("discord",)

    def decompose(self, raw: str) -> ParsedDestination:
        # Webhook tokens are case-sensitive; keep them as written.
        return split_token_url(raw)

    async def send(self, message: Message, ctx: SendContext) -> DispatchResult:
        parsed = ctx.parsed
        webhook_id = parsed.hostname
        webhook_token = parsed.segments[0] if parsed.segments else None
        if not webhook_id or not webhook_token:
            return self.failure("Invalid Discord URL. Expected: discord://webhookId/webhookToken")

        content = f"**{message.title}**\n{message.body}" if message.title else message.body
        payload: dict[str, object] = {"content": content}

        avatar_url = get_param(parsed.params, "avatar_url")
        username = get_param(parsed.params, "username")
        if avatar_url:
            payload["avatar_url"] = avatar_url
        if username:
            payload["username"] = username
        if get_param(parsed.params, "tts") == "true":
            payload["tts"] = True

        return await self.post(
            "Discord",
            f"https://discord.com/api/webhooks/{webhook_id}/{webhook_token}",
            json=payload,
        )
