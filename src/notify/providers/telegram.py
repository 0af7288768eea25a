"""Telegram bot provider.

URL format: ``tgram://bot_token/chat_id``.
Query params: ``parse_mode``, ``disable_web_page_preview``,
``disable_notification``.
"""

from __future__ import annotations

from ..models import DispatchResult, Message, ParsedDestination, SendContext
from .base import BaseProvider, get_param, split_token_url


class TelegramBotProvider(BaseProvider):
    id = "telegram"
    schemas = ("tgram", "telegram")

    def decompose(self, raw: str) -> ParsedDestination:
        # Bot tokens contain a colon that is not a port separator.
        return split_token_url(raw)

    async def send(self, message: Message, ctx: SendContext) -> DispatchResult:
        parsed = ctx.parsed
        bot_token = parsed.hostname
        chat_id = parsed.segments[0] if parsed.segments else None
        if not bot_token or not chat_id:
            return self.failure("Invalid Telegram URL. Expected: tgram://botToken/chatId")

        text = f"<b>{message.title}</b>\n{message.body}" if message.title else message.body
        payload: dict[str, object] = {"chat_id": chat_id, "text": text}

        parse_mode = get_param(parsed.params, "parse_mode")
        if parse_mode:
            payload["parse_mode"] = parse_mode
        elif message.title:
            payload["parse_mode"] = "HTML"
        for flag in ("disable_web_page_preview", "disable_notification"):
            if get_param(parsed.params, flag) == "true":
                payload[flag] = True

        result = await self.post(
            "Telegram",
            f"https://api.telegram.org/bot{bot_token}/sendMessage",
            json=payload,
        )
        # The Bot API can answer 200 with ok=false.
        if result.success and isinstance(result.raw, dict) and result.raw.get("ok") is False:
            return self.failure(
                f"Telegram: {result.raw.get('description', 'request rejected')}",
                result.raw,
            )
        return result
