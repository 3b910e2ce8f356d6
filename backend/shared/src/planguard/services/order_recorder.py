"""Side effects for verified webhook events.

WebhookHandler calls an OrderRecorder once per event. The shipped
LoggingOrderRecorder only writes to the log; a database or notification
backed recorder can be passed to ``create_app(recorder=...)`` instead.
"""

import logging
from typing import Protocol

from planguard.models.webhook import CompletedOrder

logger = logging.getLogger(__name__)


class OrderRecorder(Protocol):
    """One method per webhook event kind.

    Stripe delivers at least once, so implementations may see the same
    ``event_id`` more than once.
    """

    def record_checkout_completed(self, order: CompletedOrder) -> None: ...

    def record_payment_succeeded(self, event_id: str, payment_intent_id: str | None) -> None: ...

    def record_unhandled(self, event_id: str, event_type: str) -> None: ...


class LoggingOrderRecorder:
    """Records orders by logging them."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def record_checkout_completed(self, order: CompletedOrder) -> None:
        self._log.info(
            "─── NEW ORDER ───\n"
            "Customer: %s\n"
            "Sheets: %s\n"
            "Calc Add-On: %s\n"
            "Facility: %s\n"
            "HCAI App#: %s\n"
            "Amount: %s\n"
            "Payment ID: %s\n"
            "─────────────────",
            order.customer_email,
            order.sheet_count,
            order.includes_calc,
            order.facility_name,
            order.hcai_app_number,
            order.amount_display,
            order.payment_intent_id,
        )

    def record_payment_succeeded(self, event_id: str, payment_intent_id: str | None) -> None:
        self._log.info("Payment succeeded: %s", payment_intent_id)

    def record_unhandled(self, event_id: str, event_type: str) -> None:
        self._log.info("Unhandled event type: %s", event_type)
