"""Models for Stripe webhook processing."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CompletedOrder(BaseModel):
    """Order snapshot taken from a checkout.session.completed event.

    Used by order recorders; the Stripe session remains the system of record.
    """

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(..., description="Stripe event ID (evt_xxx)", examples=["evt_1ABC123DEF456"])
    session_id: Optional[str] = Field(default=None, description="Checkout session ID (cs_xxx)")
    customer_email: Optional[str] = None
    sheet_count: Optional[str] = None
    includes_calc: Optional[str] = None
    facility_name: Optional[str] = None
    hcai_app_number: Optional[str] = None
    amount_total: Optional[int] = Field(default=None, description="Total charged, in cents")
    currency: Optional[str] = None
    payment_intent_id: Optional[str] = None

    @property
    def amount_display(self) -> str:
        """Amount formatted for humans, e.g. ``1169.00 USD``."""
        amount = (self.amount_total or 0) / 100
        return f"{amount:.2f} {(self.currency or '').upper()}".rstrip()


class WebhookResult(BaseModel):
    """Outcome of handling one webhook delivery."""

    received: bool = True
    event_id: Optional[str] = None
    event_type: Optional[str] = None
    processing_result: str = Field(
        default="success",
        description="success, unhandled or error",
    )
