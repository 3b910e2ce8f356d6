"""Webhook handler for processing Stripe events.

Keeps signature verification and event dispatch apart from HTTP routing so
the flow can be tested without a server. The route answers 400 when
``handle`` raises and 200 for everything else.
"""

from typing import Any, Callable

from planguard.models.webhook import CompletedOrder, WebhookResult
from planguard.services.order_recorder import OrderRecorder
from planguard.services.stripe_service import StripeService
from planguard.utils.logging import get_logger, log_webhook_event

logger = get_logger(__name__)

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"
PAYMENT_INTENT_SUCCEEDED = "payment_intent.succeeded"


def _event_object(event: dict) -> dict:
    data = event.get("data")
    obj = data.get("object") if isinstance(data, dict) else None
    return obj if isinstance(obj, dict) else {}


def extract_completed_order(event: dict) -> CompletedOrder:
    """Pull the order snapshot out of a checkout.session.completed event.

    Missing fields come back as None rather than failing the delivery.
    """
    session = _event_object(event)
    metadata = session.get("metadata") or {}
    customer_details = session.get("customer_details") or {}

    return CompletedOrder(
        event_id=event.get("id", ""),
        session_id=session.get("id"),
        customer_email=customer_details.get("email"),
        sheet_count=metadata.get("sheet_count"),
        includes_calc=metadata.get("includes_calc"),
        facility_name=metadata.get("facility_name"),
        hcai_app_number=metadata.get("hcai_app_number"),
        amount_total=session.get("amount_total"),
        currency=session.get("currency"),
        payment_intent_id=session.get("payment_intent"),
    )


class WebhookHandler:
    """Verifies Stripe webhook deliveries and dispatches them by type.

    No state is kept between deliveries; duplicates are recorded again.
    """

    def __init__(self, stripe_service: StripeService, recorder: OrderRecorder) -> None:
        self._stripe = stripe_service
        self._recorder = recorder
        self._dispatch: dict[str, Callable[[dict], None]] = {
            CHECKOUT_SESSION_COMPLETED: self.process_checkout_completed,
            PAYMENT_INTENT_SUCCEEDED: self.process_payment_succeeded,
        }

    def handle(self, payload: bytes, signature: str | None) -> WebhookResult:
        """Verify and process one delivery.

        Args:
            payload: Raw, unparsed request body
            signature: Stripe-Signature header value

        Returns:
            WebhookResult; ``received`` is always True once verified

        Raises:
            StripeServiceError: If the delivery cannot be verified
                (WebhookSignatureError for bad signatures).
        """
        event = self._stripe.verify_webhook_signature(payload, signature)

        event_id = str(event.get("id") or "")
        event_type = str(event.get("type") or "")
        log_webhook_event(logger, event_type, event_id, result="received")

        try:
            handler = self._dispatch.get(event_type)
            if handler:
                handler(event)
                processing_result = "success"
            else:
                self._recorder.record_unhandled(event_id, event_type)
                processing_result = "unhandled"
            log_webhook_event(
                logger,
                event_type,
                event_id,
                session_id=_event_object(event).get("id"),
                result=processing_result,
            )
        except Exception as e:
            # Stripe must not redeliver because recording failed
            logger.exception("Failed to record webhook event %s", event_id)
            log_webhook_event(logger, event_type, event_id, result="error", error=str(e))
            processing_result = "error"

        return WebhookResult(
            received=True,
            event_id=event_id,
            event_type=event_type,
            processing_result=processing_result,
        )

    def process_checkout_completed(self, event: dict) -> None:
        """Record a completed checkout session."""
        self._recorder.record_checkout_completed(extract_completed_order(event))

    def process_payment_succeeded(self, event: dict) -> None:
        """Record a succeeded payment intent."""
        payment_intent: Any = _event_object(event)
        self._recorder.record_payment_succeeded(event.get("id", ""), payment_intent.get("id"))
