"""Checkout session creation and lookup."""

from typing import Any

from planguard.config import Settings
from planguard.models.checkout import CheckoutRequest, CheckoutSessionResponse, SessionSummary
from planguard.models.errors import CheckoutSessionError, SessionNotFoundError
from planguard.models.pricing import PriceQuote
from planguard.services.pricing import build_line_items, quote_price
from planguard.services.stripe_service import StripeService, StripeServiceError
from planguard.utils.logging import get_logger, log_checkout_operation

logger = get_logger(__name__)

# Collected on the hosted checkout page
CUSTOM_FIELDS: list[dict[str, Any]] = [
    {
        "key": "facility_name",
        "label": {"type": "custom", "custom": "Facility Name"},
        "type": "text",
        "optional": False,
    },
    {
        "key": "hcai_app_number",
        "label": {"type": "custom", "custom": "HCAI Application Number (if available)"},
        "type": "text",
        "optional": True,
    },
]


def build_metadata(request: CheckoutRequest, quote: PriceQuote) -> dict[str, str]:
    """Session metadata; Stripe only stores strings."""
    return {
        "sheet_count": str(quote.sheet_count),
        "includes_calc": "yes" if quote.include_calc else "no",
        "total_price": str(quote.total),
        "facility_name": request.facility_name,
        "hcai_app_number": request.hcai_app_number,
    }


class CheckoutService:
    """Prices intake requests and manages their Stripe checkout sessions."""

    def __init__(self, settings: Settings, stripe_service: StripeService) -> None:
        """Initialize checkout service.

        Args:
            settings: Application settings (pricing, redirect domain)
            stripe_service: Stripe gateway
        """
        self._settings = settings
        self._stripe = stripe_service

    def quote(self, request: CheckoutRequest) -> PriceQuote:
        return quote_price(request.sheets, request.include_calc, self._settings.pricing)

    def create_session(self, request: CheckoutRequest) -> CheckoutSessionResponse:
        """Create a hosted checkout session for an intake request.

        Args:
            request: Validated request; the sheet count is already clamped

        Returns:
            Session ID and the hosted page URL

        Raises:
            CheckoutSessionError: If Stripe rejects the session. The message
                is Stripe's; nothing is retried.
        """
        quote = self.quote(request)

        try:
            session = self._stripe.create_checkout_session(
                line_items=build_line_items(quote),
                success_url=self._settings.success_url,
                cancel_url=self._settings.cancel_url,
                metadata=build_metadata(request, quote),
                custom_fields=CUSTOM_FIELDS,
            )
        except StripeServiceError as e:
            log_checkout_operation(
                logger,
                "create_checkout_session",
                sheet_count=quote.sheet_count,
                total=quote.total,
                error=str(e),
            )
            raise CheckoutSessionError(str(e), stripe_error_code=e.stripe_error_code) from e

        log_checkout_operation(
            logger,
            "create_checkout_session",
            session_id=session["session_id"],
            sheet_count=quote.sheet_count,
            total=quote.total,
            include_calc=quote.include_calc,
        )
        return CheckoutSessionResponse(session_id=session["session_id"], url=session["checkout_url"])

    def get_session_summary(self, session_id: str) -> SessionSummary:
        """Look up a session for the thank-you page.

        Raises:
            SessionNotFoundError: For any retrieval failure.
        """
        try:
            session = self._stripe.retrieve_checkout_session(session_id)
        except StripeServiceError as e:
            raise SessionNotFoundError(session_id) from e

        metadata = session.get("metadata") or {}
        customer_details = session.get("customer_details") or {}
        return SessionSummary(
            customer_email=customer_details.get("email"),
            sheet_count=metadata.get("sheet_count"),
            includes_calc=metadata.get("includes_calc"),
            facility_name=metadata.get("facility_name"),
            status=session.get("payment_status"),
        )
