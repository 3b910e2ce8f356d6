"""Contract tests for the application shell: health, routing and headers."""

import logging

import pytest
import stripe
from fastapi.testclient import TestClient
from starlette.status import HTTP_200_OK


class TestHealthCheck:
    """Tests for the /api/health endpoint."""

    def test_health_returns_ok(self, client: TestClient):
        response = client.get("/api/health")

        assert response.status_code == HTTP_200_OK
        assert response.json() == {"status": "ok", "service": "planguardpro-stripe"}

    def test_health_needs_no_stripe(self, client: TestClient, mock_stripe_client):
        client.get("/api/health")

        assert mock_stripe_client.method_calls == []


class TestCorrelationId:
    """Every response carries a correlation ID."""

    def test_generates_correlation_id(self, client: TestClient):
        response = client.get("/api/health")

        assert response.headers["X-Correlation-ID"]

    def test_echoes_incoming_correlation_id(self, client: TestClient):
        response = client.get("/api/health", headers={"X-Correlation-ID": "req-abc-123"})

        assert response.headers["X-Correlation-ID"] == "req-abc-123"

    @pytest.mark.parametrize("incoming", ["bad id <script>", "x" * 200])
    def test_replaces_unusable_correlation_id(self, client: TestClient, incoming: str):
        response = client.get("/api/health", headers={"X-Correlation-ID": incoming})

        assert response.headers["X-Correlation-ID"] not in ("", incoming)

    def test_logs_request_outcome(
        self,
        client: TestClient,
        mock_stripe_client,
        caplog: pytest.LogCaptureFixture,
    ):
        mock_stripe_client.checkout.sessions.retrieve.side_effect = stripe.InvalidRequestError(
            "No such session",
            param="id",
        )
        caplog.set_level(logging.INFO, logger="planguard_api.middleware.correlation")

        response = client.get("/api/checkout-session/cs_missing", headers={"X-Correlation-ID": "req-log-1"})

        assert response.status_code == 404
        assert "GET /api/checkout-session/cs_missing -> 404" in caplog.text


class TestRoutesRegistered:
    """Tests that all expected routes are registered."""

    def test_routes(self, app):
        route_paths = set(app.openapi()["paths"])

        assert {
            "/api/health",
            "/api/create-checkout-session",
            "/api/checkout-session/{session_id}",
            "/webhook",
        } == route_paths

    def test_services_built_once_per_app(self, app):
        assert app.state.checkout_service is not None
        assert app.state.webhook_handler is not None
        assert app.state.settings.domain == "https://planguardpro.com"


class TestModuleApp:
    """The import-time app reads its settings from the environment."""

    def test_module_level_app_serves_health(self):
        from planguard_api.main import app, handler

        response = TestClient(app).get("/api/health")

        assert response.status_code == HTTP_200_OK
        assert app.state.settings.stripe_secret_key
        assert handler.app is app
