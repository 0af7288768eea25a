"""Slack incoming-webhook provider.

URL format: ``slack://T000/B000/XXXX`` or ``slack://hooks.slack.com/services/...``.
Query params: ``channel``, ``username``, ``icon_emoji``, ``icon_url``.
"""

from __future__ import annotations

from ..models import DispatchResult, Message, ParsedDestination, SendContext
from .base import BaseProvider, get_param, split_token_url

_OPTIONAL_FIELDS = ("channel", "username", "icon_emoji", "icon_url")


class SlackWebhookProvider(BaseProvider):
    id = "slack"
    schemas = ("slack",)

    def decompose(self, raw: str) -> ParsedDestination:
        return split_token_url(raw)

    async def send(self, message: Message, ctx: SendContext) -> DispatchResult:
        parsed = ctx.parsed
        if parsed.hostname == "hooks.slack.com":
            webhook_url = f"https://hooks.slack.com/{parsed.path or ''}"
        else:
            hook_parts = [part for part in (parsed.hostname, *parsed.segments) if part]
            if len(hook_parts) < 3:
                return self.failure("Invalid Slack URL. Expected: slack://T.../B.../XXX")
            webhook_url = "https://hooks.slack.com/services/" + "/".join(hook_parts)

        text = f"*{message.title}*\n{message.body}" if message.title else message.body
        payload: dict[str, str] = {"text": text}
        for name in _OPTIONAL_FIELDS:
            value = get_param(parsed.params, name)
            if value:
                payload[name] = value

        return await self.post("Slack", webhook_url, json=payload)
