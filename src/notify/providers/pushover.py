"""Pushover provider.

URL format: ``pover://user_key@api_token[/device1/device2]``.
Query params: ``priority``, ``sound``, ``url``, ``url_title``, ``html``,
``ttl``.
"""

from __future__ import annotations

from ..models import DispatchResult, Message, ParsedDestination, SendContext
from .base import BaseProvider, get_param, split_token_url

API_URL = "https://api.pushover.net/1/messages.json"


class PushoverProvider(BaseProvider):
    id = "pushover"
    schemas = ("pover", "pushover")

    def decompose(self, raw: str) -> ParsedDestination:
        parsed = split_token_url(raw)
        user_key, _, api_token = (parsed.hostname or "").partition("@")
        return ParsedDestination(
            scheme=parsed.scheme,
            raw=parsed.raw,
            hostname=user_key or None,
            password=api_token or None,
            path=parsed.path,
            segments=parsed.segments,
            params=parsed.params,
        )

    async def send(self, message: Message, ctx: SendContext) -> DispatchResult:
        parsed = ctx.parsed
        if not parsed.hostname or not parsed.password:
            return self.failure("Invalid Pushover URL. Expected: pover://user_key@api_token/")

        form = {
            "token": parsed.password,
            "user": parsed.hostname,
            "message": message.body,
        }
        if message.title:
            form["title"] = message.title
        if parsed.segments:
            form["device"] = ",".join(parsed.segments)

        for name in ("priority", "sound", "url", "url_title", "ttl"):
            value = get_param(parsed.params, name)
            if value:
                form[name] = value
        if get_param(parsed.params, "html") == "yes":
            form["html"] = "1"
        if form.get("priority") == "2":
            # Emergency priority requires a retry schedule.
            form.setdefault("retry", "30")
            form.setdefault("expire", "3600")

        return await self.post("Pushover", API_URL, data=form)
