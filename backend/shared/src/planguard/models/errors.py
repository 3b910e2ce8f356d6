"""Standard error codes for the checkout backend.

Every failure that reaches an HTTP client is raised as a CheckoutError
carrying one of these codes. The API layer maps codes to status codes and
renders the message as ``{"error": message}``.
"""

from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Error codes surfaced by checkout operations."""

    INVALID_REQUEST = "ERR_001"
    SESSION_NOT_FOUND = "ERR_002"

    # Stripe error codes (ERR_STRIPE_001-ERR_STRIPE_002)
    INVALID_WEBHOOK_SIGNATURE = "ERR_STRIPE_001"
    STRIPE_API_ERROR = "ERR_STRIPE_002"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_REQUEST: "Request validation failed",
    ErrorCode.SESSION_NOT_FOUND: "Session not found",
    ErrorCode.INVALID_WEBHOOK_SIGNATURE: "Invalid webhook signature",
    ErrorCode.STRIPE_API_ERROR: "Stripe API error occurred",
}


class CheckoutError(Exception):
    """Exception raised by checkout operations.

    The API layer converts it into a JSON error response.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: Optional[str] = None,
        details: Optional[dict[str, str]] = None,
    ):
        self.code = code
        self.message = message or ERROR_MESSAGES[code]
        self.details = details
        super().__init__(self.message)

    def to_response(self) -> dict:
        """Render the error as a response body."""
        body: dict = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class SessionNotFoundError(CheckoutError):
    """Raised when a checkout session cannot be retrieved from Stripe."""

    def __init__(self, session_id: str) -> None:
        super().__init__(ErrorCode.SESSION_NOT_FOUND)
        self.session_id = session_id


class CheckoutSessionError(CheckoutError):
    """Raised when Stripe refuses to create a checkout session.

    The message is Stripe's own message, passed through to the caller.
    """

    def __init__(self, message: str, stripe_error_code: Optional[str] = None) -> None:
        super().__init__(ErrorCode.STRIPE_API_ERROR, message=message)
        self.stripe_error_code = stripe_error_code
