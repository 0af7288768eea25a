"""POST /notify, GET /notify/{id}, GET /providers endpoint handlers."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from sse_starlette.sse import EventSourceResponse

from src.api.schemas import NotifyReport, NotifyRequest, ProviderInfo
from src.api.service import get_report, list_providers, send_now, start_background_send, stream_send
from src.api.tasks import validate_callback_url
from src.auth.dependencies import require_api_key
from src.cache.redis import ReportCache
from src.config import Settings
from src.notify import NotificationRouter

router = APIRouter(dependencies=[Depends(require_api_key)])


def _get_router(request: Request) -> NotificationRouter:
    return request.app.state.router


def _get_cache(request: Request) -> ReportCache:
    return request.app.state.cache


def _get_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.post("/notify")
async def create_notification(
    body: NotifyRequest,
    notifier: NotificationRouter = Depends(_get_router),
    cache: ReportCache = Depends(_get_cache),
    settings: Settings = Depends(_get_settings),
):
    if not body.body.strip():
        raise HTTPException(status_code=422, detail="body must not be empty")

    if body.callback_url:
        if body.mode != "background":
            raise HTTPException(
                status_code=422,
                detail="callback_url is only supported in background mode",
            )
        if not validate_callback_url(body.callback_url, settings.allowed_callback_hosts):
            raise HTTPException(
                status_code=422,
                detail="callback_url host not in ALLOWED_CALLBACK_HOSTS",
            )

    if body.mode == "background":
        return await start_background_send(notifier, cache, settings, body)
    if body.mode == "stream":
        return EventSourceResponse(stream_send(notifier, cache, settings, body))
    return await send_now(notifier, cache, settings, body)


@router.get("/notify/{task_id}", response_model=NotifyReport)
async def get_notification(
    task_id: str,
    cache: ReportCache = Depends(_get_cache),
):
    report = await get_report(cache, task_id)
    if report is None:
        raise HTTPException(status_code=404, detail="Report not found or expired")
    return report


@router.get("/providers", response_model=list[ProviderInfo])
async def get_providers(notifier: NotificationRouter = Depends(_get_router)):
    return list_providers(notifier)
