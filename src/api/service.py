"""Service layer — turns API requests into router sends."""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from typing import Any, AsyncGenerator

from src.api.schemas import NotifyReport, NotifyRequest, ProviderInfo
from src.api.tasks import build_report, run_background_send
from src.cache.redis import ReportCache
from src.config import Settings
from src.notify import Message, NotificationRouter

logger = logging.getLogger(__name__)

# Keeps background tasks referenced until they finish.
_background_tasks: set[asyncio.Task] = set()


def _generate_task_id() -> str:
    return uuid.uuid4().hex[:12]


def to_message(body: NotifyRequest) -> Message:
    return Message(body=body.body, title=body.title, metadata=dict(body.metadata))


def list_providers(router: NotificationRouter) -> list[ProviderInfo]:
    """Registered providers with the schemes they currently own."""
    grouped: dict[str, ProviderInfo] = {}
    for scheme in router.registry.schemes():
        provider = router.registry.resolve(scheme)
        info = grouped.setdefault(provider.id, ProviderInfo(id=provider.id, schemes=[]))
        info.schemes.append(scheme)
    return list(grouped.values())


async def send_now(
    router: NotificationRouter,
    cache: ReportCache,
    settings: Settings,
    body: NotifyRequest,
) -> NotifyReport:
    """Send synchronously and cache the report."""
    task_id = _generate_task_id()
    results = await router.send(to_message(body), tags=body.tags, params=body.params)
    report = build_report(task_id, results)
    await cache.set(task_id, report, ttl=settings.result_ttl_seconds)
    logger.info(
        "send completed",
        extra={"task_id": task_id, "delivered": report.delivered, "failed": report.failed},
    )
    return report


async def start_background_send(
    router: NotificationRouter,
    cache: ReportCache,
    settings: Settings,
    body: NotifyRequest,
) -> dict[str, str]:
    """Launch a background send and return the acceptance payload with task_id."""
    task_id = _generate_task_id()
    logger.info("background send started", extra={"task_id": task_id, "tags": body.tags})

    task = asyncio.create_task(
        run_background_send(
            router=router,
            cache=cache,
            settings=settings,
            message=to_message(body),
            task_id=task_id,
            tags=body.tags,
            params=body.params,
            callback_url=body.callback_url,
        )
    )
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)

    return {
        "status": "accepted",
        "task_id": task_id,
        "message": "Send started. Poll the result URL for the report.",
        "result_url": f"/notify/{task_id}",
    }


async def stream_send(
    router: NotificationRouter,
    cache: ReportCache,
    settings: Settings,
    body: NotifyRequest,
) -> AsyncGenerator[dict[str, str], None]:
    """Yield SSE-formatted events, one ``result`` per destination.

    If the client disconnects, the send continues in the background so the
    report still gets cached.
    """
    task_id = _generate_task_id()
    queue: asyncio.Queue[tuple[str, dict[str, Any]] | None] = asyncio.Queue()

    async def on_event(event: str, data: dict[str, Any]) -> None:
        await queue.put((event, data))

    async def run_and_signal_done() -> None:
        try:
            await queue.put(("started", {"task_id": task_id}))
            results = await router.send(
                to_message(body), tags=body.tags, params=body.params, on_event=on_event
            )
            report = build_report(task_id, results)
            await cache.set(task_id, report, ttl=settings.result_ttl_seconds)
            await queue.put(
                ("completed", {"task_id": task_id, "delivered": report.delivered, "failed": report.failed})
            )
        except Exception:
            logger.exception("streaming send failed", extra={"task_id": task_id})
            await queue.put(("error", {"message": "Send failed"}))
        finally:
            await queue.put(None)  # sentinel

    task = asyncio.create_task(run_and_signal_done())
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)

    while True:
        item = await queue.get()
        if item is None:
            break
        event, data = item
        yield {"event": event, "data": json.dumps(data)}


async def get_report(cache: ReportCache, task_id: str) -> NotifyReport | None:
    return await cache.get(task_id)
