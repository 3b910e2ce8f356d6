"""Pytest configuration and fixtures for the checkout backend tests.

This module provides reusable fixtures for testing:
- Settings with test Stripe keys
- A mocked StripeClient (no network calls)
- FastAPI test clients wired to the mocked client
- Stripe webhook events and real signatures
"""

import hashlib
import hmac
import os
import time
from typing import Any, Callable, Generator
from unittest.mock import MagicMock, patch

import pytest

# === Environment Setup ===

# Set before planguard_api.main is imported; it builds a module-level app
os.environ.setdefault("AWS_DEFAULT_REGION", "us-west-2")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_env_placeholder")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_env_placeholder")

from fastapi.testclient import TestClient  # noqa: E402

from planguard.config import Settings  # noqa: E402
from planguard.services.stripe_service import StripeService  # noqa: E402

# === Test Configuration ===

TEST_SECRET_KEY = "sk_test_abc123xyz"
TEST_WEBHOOK_SECRET = "whsec_test_secret_for_testing"
TEST_DOMAIN = "https://planguardpro.com"
TEST_SESSION_ID = "cs_test_a1b2c3d4"
TEST_CHECKOUT_URL = "https://checkout.stripe.com/c/pay/cs_test_a1b2c3d4"


# === Helper Functions ===


def create_stripe_signature(payload: bytes, secret: str, timestamp: int | None = None) -> str:
    """Create a valid Stripe webhook signature.

    Stripe signatures use HMAC-SHA256 with format: t={timestamp},v1={signature}
    """
    ts = str(timestamp if timestamp is not None else int(time.time()))
    signed_payload = f"{ts}.{payload.decode('utf-8')}"
    signature = hmac.new(
        secret.encode("utf-8"),
        signed_payload.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    return f"t={ts},v1={signature}"


def make_event(event_type: str, obj: dict[str, Any], event_id: str = "evt_1ABC123DEF456") -> dict[str, Any]:
    """Wrap an object in a Stripe event envelope."""
    return {
        "id": event_id,
        "object": "event",
        "type": event_type,
        "created": int(time.time()),
        "data": {"object": obj},
    }


# === Settings & Stripe Fixtures ===


@pytest.fixture
def settings() -> Settings:
    """Settings with test keys and the production domain."""
    return Settings(
        stripe_secret_key=TEST_SECRET_KEY,
        stripe_webhook_secret=TEST_WEBHOOK_SECRET,
        domain=TEST_DOMAIN,
    )


@pytest.fixture
def mock_stripe_client() -> Generator[MagicMock, None, None]:
    """Mock StripeClient so no API call leaves the process."""
    with patch("planguard.services.stripe_service.StripeClient") as mock_client_class:
        mock_client = MagicMock()
        mock_client_class.return_value = mock_client

        mock_session = MagicMock()
        mock_session.id = TEST_SESSION_ID
        mock_session.url = TEST_CHECKOUT_URL
        mock_client.checkout.sessions.create.return_value = mock_session

        yield mock_client


@pytest.fixture
def stripe_service(settings: Settings, mock_stripe_client: MagicMock) -> StripeService:
    """StripeService backed by the mocked client."""
    return StripeService(settings)


@pytest.fixture
def recorder() -> MagicMock:
    """Order recorder spy."""
    return MagicMock()


# === App Fixtures ===


@pytest.fixture
def app(settings: Settings, stripe_service: StripeService, recorder: MagicMock):
    """FastAPI app wired to the mocked Stripe client and recorder spy."""
    from planguard_api.main import create_app

    return create_app(settings=settings, stripe_service=stripe_service, recorder=recorder)


@pytest.fixture
def client(app) -> TestClient:
    """Test client for the app."""
    return TestClient(app)


# === Webhook Fixtures ===


@pytest.fixture
def sign() -> Callable[[bytes], str]:
    """Sign a payload with the test webhook secret."""
    return lambda payload: create_stripe_signature(payload, TEST_WEBHOOK_SECRET)


@pytest.fixture
def checkout_completed_event() -> dict[str, Any]:
    """Sample checkout.session.completed event for a 31-sheet order with calc review."""
    return make_event(
        "checkout.session.completed",
        {
            "id": TEST_SESSION_ID,
            "object": "checkout.session",
            "payment_intent": "pi_3ABC123DEF456",
            "payment_status": "paid",
            "amount_total": 116900,
            "currency": "usd",
            "customer_details": {"email": "architect@example.com"},
            "metadata": {
                "sheet_count": "31",
                "includes_calc": "yes",
                "total_price": "1169",
                "facility_name": "Mercy General Hospital",
                "hcai_app_number": "HCAI-2026-0042",
            },
        },
    )


@pytest.fixture
def payment_succeeded_event() -> dict[str, Any]:
    """Sample payment_intent.succeeded event."""
    return make_event(
        "payment_intent.succeeded",
        {"id": "pi_3ABC123DEF456", "object": "payment_intent", "amount": 116900, "currency": "usd"},
        event_id="evt_2DEF456GHI789",
    )


@pytest.fixture
def unhandled_event() -> dict[str, Any]:
    """Event type the receiver does not act on."""
    return make_event(
        "customer.created",
        {"id": "cus_123", "object": "customer"},
        event_id="evt_3GHI789JKL012",
    )
