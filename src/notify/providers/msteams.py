"""Microsoft Teams incoming-webhook provider.

URL format: ``msteams://tenant.webhook.office.com/webhookb2/...``, i.e. the
webhook URL with ``https`` swapped for ``msteams``.
Query params: ``theme_color`` (hex, without ``#``).
"""

from __future__ import annotations

from ..models import DispatchResult, Message, ParsedDestination, SendContext
from .base import BaseProvider, get_param, split_host_port, split_token_url

DEFAULT_THEME_COLOR = "0076D7"


class MSTeamsProvider(BaseProvider):
    id = "msteams"
    schemas = ("msteams",)

    def decompose(self, raw: str) -> ParsedDestination:
        # Webhook paths hold case-sensitive GUIDs and an '@'.
        return split_host_port(split_token_url(raw))

    async def send(self, message: Message, ctx: SendContext) -> DispatchResult:
        parsed = ctx.parsed
        if not parsed.hostname:
            return self.failure("Invalid MS Teams URL. Expected: msteams://host/webhook-path")

        port = f":{parsed.port}" if parsed.port else ""
        path = f"/{parsed.path}" if parsed.path else ""
        payload = {
            "@type": "MessageCard",
            "@context": "http://schema.org/extensions",
            "themeColor": get_param(parsed.params, "theme_color") or DEFAULT_THEME_COLOR,
            "summary": message.title or message.body[:50],
            "sections": [
                {
                    "activityTitle": message.title or "notify-router",
                    "text": message.body,
                    "markdown": True,
                }
            ],
        }

        return await self.post("MS Teams", f"https://{parsed.hostname}{port}{path}", json=payload)
