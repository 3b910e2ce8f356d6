"""Checkout endpoints.

Provides REST endpoints for:
- Creating a Stripe Checkout session from an intake request
- Looking up a session for the thank-you page

Handlers are plain functions: FastAPI runs them in its threadpool, so a
slow Stripe call only holds up its own request.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from planguard.models.checkout import CheckoutRequest, CheckoutSessionResponse, SessionSummary
from planguard.services.checkout import CheckoutService
from planguard_api.dependencies import get_checkout_service
from planguard_api.models.common import ErrorResponse, ValidationErrorResponse

router = APIRouter(tags=["checkout"])


@router.post(
    "/create-checkout-session",
    summary="Create checkout session",
    description="""
Price an intake request and open a hosted Stripe Checkout session.

**Notes:**
- `sheets` is clamped to 1-100; non-numeric or missing values count as 1
- Total = $249 base + $25/sheet (first 30) + $20/sheet (31+), +$150 with `includeCalc`
- Redirect the browser to the returned `url`
""",
    response_model=CheckoutSessionResponse,
    responses={
        200: {"description": "Session created"},
        422: {"description": "Malformed request body", "model": ValidationErrorResponse},
        500: {"description": "Stripe rejected the session", "model": ErrorResponse},
    },
)
def create_checkout_session(
    body: Optional[CheckoutRequest] = None,
    checkout: CheckoutService = Depends(get_checkout_service),
) -> CheckoutSessionResponse:
    """Create a checkout session; an empty body prices one sheet."""
    return checkout.create_session(body or CheckoutRequest())


@router.get(
    "/checkout-session/{session_id}",
    summary="Get checkout session",
    description="Read-only session summary for the confirmation page.",
    response_model=SessionSummary,
    responses={
        200: {"description": "Session found"},
        404: {"description": "Unknown or invalid session ID", "model": ErrorResponse},
    },
)
def get_checkout_session(
    session_id: str,
    checkout: CheckoutService = Depends(get_checkout_service),
) -> SessionSummary:
    return checkout.get_session_summary(session_id)
