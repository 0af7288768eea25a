"""API key checks on the notification routes."""

import pytest
from fastapi.testclient import TestClient

from src.config import Settings, get_settings
from src.main import app
from src.notify import NotificationRouter

API_KEY = "test-secret-key"


@pytest.fixture
def client():
    # No lifespan: state is set by hand so no Redis or config files are touched.
    app.state.router = NotificationRouter(skip_default_providers=True)
    app.state.settings = Settings(api_key=API_KEY)  # type: ignore[call-arg]
    app.dependency_overrides[get_settings] = lambda: app.state.settings
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestApiKeyAuth:
    def test_valid_key(self, client: TestClient) -> None:
        resp = client.get("/providers", headers={"X-API-Key": API_KEY})
        assert resp.status_code == 200
        assert resp.json() == []

    @pytest.mark.parametrize("headers", [{}, {"X-API-Key": ""}, {"X-API-Key": "wrong-key"}])
    def test_rejected(self, client: TestClient, headers) -> None:
        resp = client.get("/providers", headers=headers)
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Invalid API key"

    def test_notify_requires_key(self, client: TestClient) -> None:
        resp = client.post("/notify", json={"body": "hi"})
        assert resp.status_code == 401

    def test_unset_api_key_rejects_everything(self, client: TestClient) -> None:
        app.state.settings = Settings(api_key="")  # type: ignore[call-arg]
        assert client.get("/providers", headers={"X-API-Key": ""}).status_code == 401
        assert client.get("/providers", headers={"X-API-Key": "anything"}).status_code == 401

    def test_health_no_auth(self, client: TestClient) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}
