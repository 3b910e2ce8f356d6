"""API-specific response models.

Request bodies and domain responses (CheckoutRequest, SessionSummary, ...)
are in planguard.models and are reused here.
"""

from planguard_api.models.common import (
    ErrorResponse,
    HealthResponse,
    ValidationErrorResponse,
    WebhookAck,
)

__all__ = ["ErrorResponse", "HealthResponse", "ValidationErrorResponse", "WebhookAck"]
