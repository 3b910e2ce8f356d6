"""Pydantic models for Plan Guard Pro checkout."""

from .checkout import (
    MAX_SHEETS,
    MIN_SHEETS,
    CheckoutRequest,
    CheckoutSessionResponse,
    SessionSummary,
    parse_sheet_count,
)
from .errors import (
    CheckoutError,
    CheckoutSessionError,
    ErrorCode,
    SessionNotFoundError,
)
from .pricing import PriceQuote, PricingConfig
from .webhook import CompletedOrder, WebhookResult

__all__ = [
    # Checkout
    "CheckoutRequest",
    "CheckoutSessionResponse",
    "SessionSummary",
    "parse_sheet_count",
    "MIN_SHEETS",
    "MAX_SHEETS",
    # Errors
    "CheckoutError",
    "CheckoutSessionError",
    "ErrorCode",
    "SessionNotFoundError",
    # Pricing
    "PriceQuote",
    "PricingConfig",
    # Webhooks
    "CompletedOrder",
    "WebhookResult",
]
