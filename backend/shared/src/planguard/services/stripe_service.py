"""Stripe gateway for checkout sessions and webhook verification.

Provides integration with Stripe using the v8+ StripeClient pattern.
Credentials come from StripeSecrets (environment first, then SSM).
"""

import logging
from typing import Any, Optional

import stripe
from stripe import StripeClient

from planguard.config import Settings
from .secrets import SecretUnavailableError, StripeSecrets

logger = logging.getLogger(__name__)


class StripeServiceError(Exception):
    """Raised when a Stripe operation fails."""

    def __init__(self, message: str, stripe_error_code: str | None = None) -> None:
        """Initialize with message and optional Stripe error code.

        Args:
            message: Human-readable error message.
            stripe_error_code: Stripe-specific error code if available.
        """
        super().__init__(message)
        self.stripe_error_code = stripe_error_code


class WebhookSignatureError(StripeServiceError):
    """Raised when a webhook payload fails signature verification."""


class StripeService:
    """Service for Stripe payment operations.

    Handles:
    - Checkout session creation
    - Checkout session retrieval
    - Webhook signature validation

    The client is created on first use so a missing key only fails the
    request that needs it.
    """

    def __init__(self, settings: Settings, secrets: Optional[StripeSecrets] = None) -> None:
        """Initialize Stripe service.

        Args:
            settings: Application settings (timeout, credentials).
            secrets: Credential resolver (default: built from settings).
        """
        self._settings = settings
        self._secrets = secrets or StripeSecrets(settings)
        self._client: StripeClient | None = None

    def _get_client(self) -> StripeClient:
        """Get or create the Stripe client (lazy initialization).

        Returns:
            Initialized StripeClient instance.

        Raises:
            StripeServiceError: If credentials cannot be retrieved.
        """
        if self._client is None:
            try:
                secret_key = self._secrets.secret_key
            except SecretUnavailableError as e:
                raise StripeServiceError(str(e)) from e
            self._client = StripeClient(
                secret_key,
                http_client=stripe.RequestsClient(timeout=self._settings.stripe_timeout_seconds),
                max_network_retries=0,
            )
            logger.info(
                "Stripe client initialized (timeout %.1fs)",
                self._settings.stripe_timeout_seconds,
            )
        return self._client

    def _get_webhook_secret(self) -> str:
        try:
            return self._secrets.webhook_secret
        except SecretUnavailableError as e:
            raise StripeServiceError(str(e)) from e

    def create_checkout_session(
        self,
        *,
        line_items: list[dict[str, Any]],
        success_url: str,
        cancel_url: str,
        metadata: dict[str, str],
        custom_fields: list[dict[str, Any]] | None = None,
    ) -> dict:
        """Create a card-only Stripe Checkout session.

        The session always creates a customer and requires a billing
        address.

        Args:
            line_items: Ad-hoc line items with inline price_data.
            success_url: URL to redirect on success (supports {CHECKOUT_SESSION_ID}).
            cancel_url: URL to redirect on cancel.
            metadata: String metadata echoed back on retrieval and webhooks.
            custom_fields: Extra fields collected on the hosted page.

        Returns:
            Dict with session details:
                - session_id: Stripe checkout session ID
                - checkout_url: URL to redirect user

        Raises:
            StripeServiceError: If session creation fails.
        """
        client = self._get_client()

        params: dict[str, Any] = {
            "mode": "payment",
            "payment_method_types": ["card"],
            "line_items": line_items,
            "customer_creation": "always",
            "billing_address_collection": "required",
            "metadata": metadata,
            "success_url": success_url,
            "cancel_url": cancel_url,
        }
        if custom_fields:
            params["custom_fields"] = custom_fields

        try:
            session = client.checkout.sessions.create(params=params)
        except stripe.StripeError as e:
            error_code = getattr(e, "code", None)
            logger.error(
                "Stripe checkout session creation failed: %s (code: %s)",
                e.user_message or str(e),
                error_code,
            )
            raise StripeServiceError(
                e.user_message or str(e),
                stripe_error_code=error_code,
            ) from e

        logger.info("Checkout session created: %s", session.id)
        return {
            "session_id": session.id,
            "checkout_url": session.url,
        }

    def retrieve_checkout_session(self, session_id: str) -> Any:
        """Fetch a checkout session by ID.

        Args:
            session_id: Stripe checkout session ID (cs_xxx).

        Returns:
            The Stripe Session object.

        Raises:
            StripeServiceError: If the session cannot be retrieved.
        """
        client = self._get_client()
        try:
            return client.checkout.sessions.retrieve(session_id)
        except stripe.StripeError as e:
            logger.warning("Failed to retrieve checkout session %s: %s", session_id, e)
            raise StripeServiceError(
                f"Failed to retrieve checkout session: {e}",
                stripe_error_code=getattr(e, "code", None),
            ) from e

    def verify_webhook_signature(self, payload: bytes, signature: str | None) -> dict:
        """Verify a webhook signature and parse the event.

        The payload must be the raw request body; parsing it first would
        change the signed bytes.

        Args:
            payload: Raw request body bytes.
            signature: Stripe-Signature header value.

        Returns:
            Parsed Stripe event dictionary.

        Raises:
            WebhookSignatureError: If the header is missing, the signature is
                invalid or the payload is not a Stripe event.
            StripeServiceError: If the signing secret is not available.
        """
        if not signature:
            raise WebhookSignatureError("Missing Stripe-Signature header")

        webhook_secret = self._get_webhook_secret()

        try:
            event = stripe.Webhook.construct_event(payload, signature, webhook_secret)
        except stripe.SignatureVerificationError as e:
            logger.warning("Invalid webhook signature: %s", str(e))
            raise WebhookSignatureError(str(e)) from e
        except (ValueError, AttributeError) as e:
            # AttributeError: signed JSON that is not an object
            logger.warning("Invalid webhook payload: %s", str(e))
            raise WebhookSignatureError(f"Invalid payload: {e}") from e

        logger.info("Webhook signature verified for event: %s", event.get("id"))
        return event.to_dict_recursive()
