"""Webhook endpoint for Stripe.

Registered in the Stripe dashboard as ``{DOMAIN}/webhook`` for
checkout.session.completed and payment_intent.succeeded.

This endpoint does NOT require authentication; the payload signature is
verified against the webhook signing secret instead.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool
from starlette.responses import Response
from starlette.status import HTTP_400_BAD_REQUEST

from planguard.services.stripe_service import StripeServiceError
from planguard.services.webhook_handler import WebhookHandler
from planguard.utils.logging import get_logger
from planguard_api.dependencies import get_webhook_handler
from planguard_api.models.common import WebhookAck

logger = get_logger(__name__)

router = APIRouter(tags=["webhooks"])

SIGNATURE_HEADER = "Stripe-Signature"


@router.post(
    "/webhook",
    summary="Receive Stripe webhook events",
    description="""
Handles:
- checkout.session.completed: records the new order
- payment_intent.succeeded: records the payment

Other event types are acknowledged and ignored. Once the signature
verifies, the response is always 200 so Stripe does not redeliver.
""",
    response_model=WebhookAck,
    responses={
        200: {"description": "Event received"},
        400: {
            "description": "Missing or invalid signature (text/plain)",
            "content": {"text/plain": {"example": "Webhook Error: No signatures found matching the expected signature for payload"}},
        },
    },
)
async def stripe_webhook(
    request: Request,
    handler: WebhookHandler = Depends(get_webhook_handler),
) -> Response | WebhookAck:
    """Verify the raw body, then dispatch the event."""
    # Signature covers the exact bytes; do not parse before verifying
    payload = await request.body()
    signature = request.headers.get(SIGNATURE_HEADER)

    try:
        await run_in_threadpool(handler.handle, payload, signature)
    except StripeServiceError as e:
        logger.error("Webhook signature verification failed: %s", e)
        return PlainTextResponse(f"Webhook Error: {e}", status_code=HTTP_400_BAD_REQUEST)

    return WebhookAck(received=True)
