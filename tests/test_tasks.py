"""Background send runner, report building and callback tests."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from src.api.tasks import build_report, post_callback, run_background_send, validate_callback_url
from src.config import Settings
from src.notify import DispatchResult, Message, NotificationRouter, ProviderError
from src.notify.retry import RetryConfig
from tests.stubs import StubProvider


class TestValidateCallbackUrl:
    def test_allowed_host(self):
        assert validate_callback_url("https://hooks.example.com/done", "hooks.example.com")

    def test_host_comparison_ignores_case(self):
        assert validate_callback_url("https://HOOKS.example.com/done", " Hooks.Example.com , other")

    @pytest.mark.parametrize(
        "url",
        [
            "ftp://hooks.example.com/done",
            "https://user:pw@hooks.example.com/done",
            "https://other.example.com/done",
            "not a url",
        ],
    )
    def test_rejected(self, url):
        assert not validate_callback_url(url, "hooks.example.com")

    def test_empty_allow_list_rejects(self):
        assert not validate_callback_url("https://hooks.example.com/done", "")


class TestBuildReport:
    def test_statuses(self):
        ok = DispatchResult(success=True, provider_id="ntfy")
        bad = DispatchResult(success=False, provider_id="slack", error=ProviderError("nope", "slack"))
        assert build_report("t", []).status == "empty"
        assert build_report("t", [ok, ok]).status == "completed"
        assert build_report("t", [bad]).status == "failed"

        report = build_report("t", [ok, bad])
        assert report.status == "partial"
        assert report.delivered == 1
        assert report.failed == 1
        assert report.results[1].error == "nope"
        assert report.results[1].error_type == "ProviderError"


@pytest.mark.asyncio
class TestCallbacks:
    async def test_post_callback_retries_transport_errors(self):
        with patch("src.api.tasks.httpx.AsyncClient") as mock_cls, patch(
            "src.notify.retry.asyncio.sleep", new_callable=AsyncMock
        ):
            client = AsyncMock()
            client.post.side_effect = [
                httpx.ConnectError("refused"),
                httpx.Response(200, request=httpx.Request("POST", "https://hooks.example.com/done")),
            ]
            mock_cls.return_value.__aenter__ = AsyncMock(return_value=client)
            mock_cls.return_value.__aexit__ = AsyncMock(return_value=False)

            await post_callback("https://hooks.example.com/done", {"task_id": "t"}, RetryConfig(max_attempts=3))

        assert client.post.await_count == 2

    async def test_post_callback_swallows_http_errors(self):
        with patch("src.api.tasks.httpx.AsyncClient") as mock_cls:
            client = AsyncMock()
            client.post.return_value = httpx.Response(
                500, request=httpx.Request("POST", "https://hooks.example.com/done")
            )
            mock_cls.return_value.__aenter__ = AsyncMock(return_value=client)
            mock_cls.return_value.__aexit__ = AsyncMock(return_value=False)

            await post_callback("https://hooks.example.com/done", {"task_id": "t"})

        assert client.post.await_count == 1

    async def test_run_background_send_caches_and_calls_back(self, report_cache):
        notifier = NotificationRouter(providers=[StubProvider()], skip_default_providers=True)
        notifier.add("stub://host/1")

        with patch("src.api.tasks.post_callback", new_callable=AsyncMock) as callback:
            await run_background_send(
                router=notifier,
                cache=report_cache,
                settings=Settings(),
                message=Message(body="hi"),
                task_id="bg-1",
                callback_url="https://hooks.example.com/done",
            )

        report = await report_cache.get("bg-1")
        assert report.status == "completed"
        url, payload = callback.await_args.args
        assert url == "https://hooks.example.com/done"
        assert payload == {
            "task_id": "bg-1",
            "status": "completed",
            "delivered": 1,
            "failed": 0,
            "result_url": "/notify/bg-1",
        }
