"""Backend services for Plan Guard Pro checkout."""

from .checkout import CheckoutService
from .order_recorder import LoggingOrderRecorder, OrderRecorder
from .pricing import build_line_items, calculate_price, quote_price
from .secrets import SecretUnavailableError, StripeSecrets
from .stripe_service import StripeService, StripeServiceError, WebhookSignatureError
from .webhook_handler import WebhookHandler

__all__ = [
    "CheckoutService",
    "LoggingOrderRecorder",
    "OrderRecorder",
    "build_line_items",
    "calculate_price",
    "quote_price",
    "SecretUnavailableError",
    "StripeSecrets",
    "StripeService",
    "StripeServiceError",
    "WebhookSignatureError",
    "WebhookHandler",
]
