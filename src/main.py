"""FastAPI app entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.api.routes import router
from src.cache.redis import ReportCache, create_redis_client
from src.config import get_settings
from src.logging_config import setup_logging
from src.notify import build_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # Initialize logging FIRST so all subsequent operations produce JSON logs
    setup_logging(settings.log_level)
    logger.info("starting notify router")

    redis_client = await create_redis_client(settings.redis_url)
    cache = ReportCache(redis_client, default_ttl=settings.result_ttl_seconds)

    # Config errors abort startup rather than serving with a partial audience.
    notifier = build_router(settings)

    app.state.settings = settings
    app.state.cache = cache
    app.state.router = notifier

    logger.info(
        "notify router ready",
        extra={
            "destinations": len(notifier.urls()),
            "schemes": len(notifier.registry.schemes()),
            "fallback_tags": settings.split_fallback_tags(),
        },
    )

    yield

    logger.info("shutting down notify router")
    await redis_client.aclose()


app = FastAPI(title="Notify Router", lifespan=lifespan)
app.include_router(router)


@app.get("/health")
async def health():
    return {"status": "ok"}
