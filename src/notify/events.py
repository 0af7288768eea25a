"""Progress events for a send batch.

A batch reports one ``result`` event per destination, in destination
order, to an optional async callback. The API streams these as SSE.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Coroutine

from .models import DispatchResult

logger = logging.getLogger(__name__)

RESULT_EVENT = "result"

EventCallback = Callable[[str, dict[str, Any]], Coroutine[Any, Any, None]]


def result_event_data(index: int, result: DispatchResult) -> dict[str, Any]:
    """JSON-safe summary of the *index*-th destination's result."""
    return {
        "index": index,
        "provider_id": result.provider_id,
        "success": result.success,
        "error": str(result.error) if result.error else None,
    }


async def emit_result(on_event: EventCallback | None, index: int, result: DispatchResult) -> None:
    """Report one destination's result, if anyone is listening."""
    if on_event is None:
        return
    logger.debug(
        "result event",
        extra={"index": index, "provider": result.provider_id, "success": result.success},
    )
    await on_event(RESULT_EVENT, result_event_data(index, result))
