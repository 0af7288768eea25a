"""Google Chat webhook provider.

URL format: ``gchat://SPACE_ID/KEY/TOKEN`` or
``gchat://chat.googleapis.com/v1/spaces/SPACE_ID/messages?key=KEY&token=TOKEN``.
"""

from __future__ import annotations

from ..models import DispatchResult, Message, ParsedDestination, SendContext
from .base import BaseProvider, get_param, split_token_url

API_HOST = "chat.googleapis.com"


class GoogleChatProvider(BaseProvider):
    id = "gchat"
    schemas = ("gchat", "googlechat")

    def decompose(self, raw: str) -> ParsedDestination:
        return split_token_url(raw)

    async def send(self, message: Message, ctx: SendContext) -> DispatchResult:
        parsed = ctx.parsed
        if parsed.hostname == API_HOST:
            key = get_param(parsed.params, "key")
            token = get_param(parsed.params, "token")
            if not key or not token:
                return self.failure("Invalid Google Chat URL. key and token params are required.")
            webhook_url = f"https://{API_HOST}/{'/'.join(parsed.segments)}"
        else:
            space_id = parsed.hostname
            key, token = (parsed.segments + [None, None])[:2]
            if not space_id or not key or not token:
                return self.failure("Invalid Google Chat URL. Expected: gchat://SPACE_ID/KEY/TOKEN")
            webhook_url = f"https://{API_HOST}/v1/spaces/{space_id}/messages"

        text = f"*{message.title}*\n{message.body}" if message.title else message.body
        return await self.post(
            "Google Chat",
            webhook_url,
            params={"key": key, "token": token},
            json={"text": text},
        )
