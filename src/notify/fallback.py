"""Failure callback and fallback notification for failed destinations."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any

from .models import DispatchResult, ErrorContext, Message

ErrorCallback = Callable[[Exception, ErrorContext], Any]
MessageFormatter = Callable[[Exception, ErrorContext], str]
# Internal send path used for fallback messages; must never re-enter the handler.
FallbackDispatch = Callable[[Message, list[str]], Awaitable[list[DispatchResult]]]

FALLBACK_TITLE = "Notification failed"


@dataclass
class FallbackConfig:
    """What to do when a destination fails.

    ``callback`` is called with the error and its context. ``fallback_tags``
    names the audience that receives a notice about the failure; ``message``
    formats that notice.
    """

    callback: ErrorCallback | None = None
    fallback_tags: Sequence[str] = ()
    message: MessageFormatter | None = None


def default_fallback_body(error: Exception, context: ErrorContext) -> str:
    return f"Notification failed: [{context.provider_id}] {error}"


def safe_fallback_tags(
    fallback_tags: Sequence[str], trigger_tags: Sequence[str] | None
) -> list[str]:
    """Fallback tags minus the tags of the send that failed (case-sensitive)."""
    excluded = set(trigger_tags or ())
    return [tag for tag in fallback_tags if tag not in excluded]


class FallbackHandler:
    """Runs the error callback and the one-level fallback send.

    Nothing raised here reaches the batch that triggered it: callback and
    fallback errors are logged and dropped. The fallback send goes through
    a dispatch path that does not call back into this handler, so fallback
    destinations are never themselves subject to fallback.
    """

    def __init__(
        self,
        config: FallbackConfig,
        dispatch: FallbackDispatch,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = config
        self._dispatch = dispatch
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    async def handle(self, error: Exception, context: ErrorContext) -> None:
        await self._run_callback(error, context)

        tags = safe_fallback_tags(self._config.fallback_tags, context.tags)
        if not tags:
            if self._config.fallback_tags:
                self._logger.debug(
                    "fallback skipped, all fallback tags triggered the failure",
                    extra={"provider": context.provider_id, "tags": list(context.tags or [])},
                )
            return

        try:
            formatter = self._config.message or default_fallback_body
            notice = Message(
                title=FALLBACK_TITLE,
                body=formatter(error, context),
                metadata={"failed_provider": context.provider_id},
            )
            self._logger.info(
                "sending fallback notification",
                extra={"provider": context.provider_id, "fallback_tags": tags},
            )
            results = await self._dispatch(notice, tags)
        except Exception:
            self._logger.error(
                "fallback notification failed",
                extra={"provider": context.provider_id},
                exc_info=True,
            )
            return

        failed = sum(1 for result in results if not result.success)
        if failed:
            self._logger.warning(
                "fallback notification partially failed",
                extra={"attempted": len(results), "failed": failed},
            )

    async def _run_callback(self, error: Exception, context: ErrorContext) -> None:
        if self._config.callback is None:
            return
        try:
            outcome = self._config.callback(error, context)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception:
            self._logger.error(
                "error callback raised",
                extra={"provider": context.provider_id},
                exc_info=True,
            )
