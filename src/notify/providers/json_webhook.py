"""Generic JSON webhook provider.

URL format: ``json://host[:port]/path`` (``jsons://`` for HTTPS).
Query params: ``method`` (default ``POST``), ``content_type``.
"""

from __future__ import annotations

import json

from ..models import DispatchResult, Message, SendContext
from .base import BaseProvider, get_param


class JsonWebhookProvider(BaseProvider):
    id = "json"
    schemas = ("json", "jsons")

    async def send(self, message: Message, ctx: SendContext) -> DispatchResult:
        parsed = ctx.parsed
        if not parsed.hostname:
            return self.failure("Invalid JSON URL. Expected: json://host/path")

        protocol = "https" if parsed.scheme == "jsons" else "http"
        port = f":{parsed.port}" if parsed.port else ""
        path = f"/{parsed.path}" if parsed.path else ""
        url = f"{protocol}://{parsed.hostname}{port}{path}"

        method = (get_param(parsed.params, "method") or "POST").upper()
        content_type = get_param(parsed.params, "content_type") or "application/json"
        payload = {
            "title": message.title,
            "body": message.body,
            "tags": message.tags,
            "metadata": message.metadata,
        }

        return await self.request(
            "JSON",
            method,
            url,
            content=json.dumps(payload, default=str),
            headers={"Content-Type": content_type},
        )
