"""Unit tests for CheckoutService.

The Stripe gateway is a MagicMock; these tests cover what the service
sends to it and how it reports failures.
"""

from unittest.mock import MagicMock

import pytest

from planguard.config import Settings
from planguard.models.checkout import CheckoutRequest
from planguard.models.errors import CheckoutSessionError, ErrorCode, SessionNotFoundError
from planguard.services.checkout import CUSTOM_FIELDS, CheckoutService, build_metadata
from planguard.services.stripe_service import StripeServiceError


@pytest.fixture
def gateway() -> MagicMock:
    gateway = MagicMock()
    gateway.create_checkout_session.return_value = {
        "session_id": "cs_test_123",
        "checkout_url": "https://checkout.stripe.com/c/pay/cs_test_123",
    }
    return gateway


@pytest.fixture
def checkout(gateway: MagicMock) -> CheckoutService:
    return CheckoutService(Settings(domain="https://planguardpro.com"), gateway)


class TestCreateSession:
    """Test checkout session creation."""

    def test_returns_session_reference(self, checkout: CheckoutService):
        response = checkout.create_session(CheckoutRequest(sheets=12))

        assert response.session_id == "cs_test_123"
        assert response.url == "https://checkout.stripe.com/c/pay/cs_test_123"

    def test_sends_redirects_and_custom_fields(self, checkout: CheckoutService, gateway: MagicMock):
        checkout.create_session(CheckoutRequest(sheets=12))

        kwargs = gateway.create_checkout_session.call_args.kwargs
        assert kwargs["success_url"] == "https://planguardpro.com/thank-you?session_id={CHECKOUT_SESSION_ID}"
        assert kwargs["cancel_url"] == "https://planguardpro.com/#pricing"
        assert kwargs["custom_fields"] == CUSTOM_FIELDS

    def test_custom_fields_require_facility_name_only(self):
        optional = {field["key"]: field["optional"] for field in CUSTOM_FIELDS}

        assert optional == {"facility_name": False, "hcai_app_number": True}

    def test_sends_metadata(self, checkout: CheckoutService, gateway: MagicMock):
        request = CheckoutRequest(
            sheets=31,
            include_calc=True,
            facility_name="Mercy General Hospital",
            hcai_app_number="HCAI-2026-0042",
        )

        checkout.create_session(request)

        assert gateway.create_checkout_session.call_args.kwargs["metadata"] == {
            "sheet_count": "31",
            "includes_calc": "yes",
            "total_price": "1169",
            "facility_name": "Mercy General Hospital",
            "hcai_app_number": "HCAI-2026-0042",
        }

    def test_line_items_match_quote(self, checkout: CheckoutService, gateway: MagicMock):
        checkout.create_session(CheckoutRequest(sheets=31, include_calc=True))

        line_items = gateway.create_checkout_session.call_args.kwargs["line_items"]
        assert [item["price_data"]["unit_amount"] for item in line_items] == [101900, 15000]

    def test_clamped_sheet_count_is_priced(self, checkout: CheckoutService, gateway: MagicMock):
        checkout.create_session(CheckoutRequest.model_validate({"sheets": 500}))

        metadata = gateway.create_checkout_session.call_args.kwargs["metadata"]
        assert metadata["sheet_count"] == "100"
        assert metadata["total_price"] == str(249 + 750 + 20 * 70)
        assert metadata["includes_calc"] == "no"

    def test_stripe_failure_passes_message_through(self, checkout: CheckoutService, gateway: MagicMock):
        gateway.create_checkout_session.side_effect = StripeServiceError(
            "Invalid API Key provided: sk_test_***xyz",
            stripe_error_code="api_key_invalid",
        )

        with pytest.raises(CheckoutSessionError) as exc_info:
            checkout.create_session(CheckoutRequest())

        assert exc_info.value.code == ErrorCode.STRIPE_API_ERROR
        assert exc_info.value.message == "Invalid API Key provided: sk_test_***xyz"
        assert exc_info.value.stripe_error_code == "api_key_invalid"
        assert gateway.create_checkout_session.call_count == 1

    def test_quote_uses_configured_pricing(self, gateway: MagicMock):
        settings = Settings.model_validate({"pricing": {"base": 0, "per_sheet_tier1": 1}})
        service = CheckoutService(settings, gateway)

        assert service.quote(CheckoutRequest(sheets=3)).total == 3


class TestBuildMetadata:
    """Test session metadata values."""

    def test_values_are_strings(self, checkout: CheckoutService):
        request = CheckoutRequest(sheets=2)
        metadata = build_metadata(request, checkout.quote(request))

        assert all(isinstance(value, str) for value in metadata.values())
        assert metadata["facility_name"] == ""
        assert metadata["hcai_app_number"] == ""


class TestGetSessionSummary:
    """Test the thank-you page lookup."""

    def test_projects_session_fields(self, checkout: CheckoutService, gateway: MagicMock):
        gateway.retrieve_checkout_session.return_value = {
            "id": "cs_test_123",
            "payment_status": "paid",
            "customer_details": {"email": "architect@example.com", "name": "A. Architect"},
            "metadata": {
                "sheet_count": "31",
                "includes_calc": "yes",
                "total_price": "1169",
                "facility_name": "Mercy General Hospital",
                "hcai_app_number": "HCAI-2026-0042",
            },
        }

        summary = checkout.get_session_summary("cs_test_123")

        assert summary.model_dump() == {
            "customer_email": "architect@example.com",
            "sheet_count": "31",
            "includes_calc": "yes",
            "facility_name": "Mercy General Hospital",
            "status": "paid",
        }

    def test_tolerates_missing_details(self, checkout: CheckoutService, gateway: MagicMock):
        gateway.retrieve_checkout_session.return_value = {
            "id": "cs_test_123",
            "payment_status": "unpaid",
            "customer_details": None,
            "metadata": {},
        }

        summary = checkout.get_session_summary("cs_test_123")

        assert summary.customer_email is None
        assert summary.sheet_count is None
        assert summary.status == "unpaid"

    def test_unknown_session_raises_not_found(self, checkout: CheckoutService, gateway: MagicMock):
        gateway.retrieve_checkout_session.side_effect = StripeServiceError("No such checkout.session")

        with pytest.raises(SessionNotFoundError) as exc_info:
            checkout.get_session_summary("does-not-exist")

        assert exc_info.value.message == "Session not found"
        assert exc_info.value.session_id == "does-not-exist"
