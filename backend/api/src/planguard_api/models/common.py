"""Shared API response models.

Domain models (CheckoutRequest, SessionSummary, ...) live in
planguard.models; this module holds HTTP-layer wrappers only.
"""

from typing import Any

from pydantic import BaseModel, Field

from planguard.models.errors import ERROR_MESSAGES, ErrorCode

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "ValidationErrorDetail",
    "ValidationErrorResponse",
    "WebhookAck",
    "format_validation_errors",
]


class ErrorResponse(BaseModel):
    """JSON error body used by every JSON endpoint."""

    error: str = Field(..., description="Human-readable error message", examples=["Session not found"])


class ValidationErrorDetail(BaseModel):
    """Detail of a single validation error."""

    loc: list[str | int] = Field(
        ...,
        description="Path to the field that failed validation",
        examples=[["body", "includeCalc"]],
    )
    msg: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Error type identifier", examples=["bool_parsing"])


class ValidationErrorResponse(BaseModel):
    """Response format for request validation errors (HTTP 422)."""

    error: str = ERROR_MESSAGES[ErrorCode.INVALID_REQUEST]
    details: list[ValidationErrorDetail] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Liveness payload."""

    status: str = Field(default="ok", examples=["ok"])
    service: str = Field(..., examples=["planguardpro-stripe"])


class WebhookAck(BaseModel):
    """Acknowledgement returned to Stripe."""

    received: bool = True


def format_validation_errors(errors: list[dict[str, Any]]) -> ValidationErrorResponse:
    """Convert Pydantic validation errors to ValidationErrorResponse.

    Args:
        errors: List of error dicts from RequestValidationError.errors()

    Returns:
        ValidationErrorResponse ready for JSON serialization.
    """
    details = [
        ValidationErrorDetail(
            loc=[str(loc) for loc in error.get("loc", [])],
            msg=error.get("msg", ""),
            type=error.get("type", ""),
        )
        for error in errors
    ]
    return ValidationErrorResponse(details=details)
