"""Stripe credentials from the environment or SSM Parameter Store.

``STRIPE_SECRET_KEY`` and ``STRIPE_WEBHOOK_SECRET`` win when set. When one
is empty and ``ENVIRONMENT`` names a deployment, the value is read once
from the SecureString ``/planguard/{environment}/stripe/{secret}``.
"""

import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import ClientError

from planguard.config import Settings

logger = logging.getLogger(__name__)

PARAMETER_PREFIX = "/planguard"
SECRET_KEY = "secret_key"
WEBHOOK_SECRET = "webhook_secret"

_LABELS = {
    SECRET_KEY: "Stripe secret key",
    WEBHOOK_SECRET: "Stripe webhook secret",
}


class SecretUnavailableError(Exception):
    """Raised when a Stripe credential cannot be resolved."""


def parameter_name(environment: str, secret: str) -> str:
    """SSM path of a Stripe secret, e.g. ``/planguard/prod/stripe/secret_key``."""
    return f"{PARAMETER_PREFIX}/{environment}/stripe/{secret}"


class StripeSecrets:
    """Resolves the Stripe API key and webhook signing secret.

    Each secret is resolved on first access and kept for the life of the
    instance; the SSM client is only created if a lookup is needed.
    """

    def __init__(self, settings: Settings, ssm_client: Optional[Any] = None) -> None:
        self._configured = {
            SECRET_KEY: settings.stripe_secret_key,
            WEBHOOK_SECRET: settings.stripe_webhook_secret,
        }
        self._environment = settings.environment
        self._ssm_client = ssm_client
        self._resolved: dict[str, str] = {}

    @property
    def secret_key(self) -> str:
        return self._get(SECRET_KEY)

    @property
    def webhook_secret(self) -> str:
        return self._get(WEBHOOK_SECRET)

    def _get(self, secret: str) -> str:
        if secret not in self._resolved:
            self._resolved[secret] = self._configured[secret] or self._fetch(secret)
        return self._resolved[secret]

    def _fetch(self, secret: str) -> str:
        """Read one secret from Parameter Store.

        Raises:
            SecretUnavailableError: If no deployment is configured, or the
                parameter is missing or unreadable.
        """
        label = _LABELS[secret]
        if not self._environment:
            raise SecretUnavailableError(f"{label} is not configured")

        name = parameter_name(self._environment, secret)
        if self._ssm_client is None:
            self._ssm_client = boto3.client("ssm")

        try:
            response = self._ssm_client.get_parameter(Name=name, WithDecryption=True)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code == "ParameterNotFound":
                raise SecretUnavailableError(f"{label} is not configured: {name} does not exist") from e
            if error_code == "AccessDeniedException":
                raise SecretUnavailableError(
                    f"{label} is not readable: access denied to {name} (needs ssm:GetParameter)"
                ) from e
            raise SecretUnavailableError(f"Failed to get {label} from {name}: {e}") from e

        logger.info("%s loaded from %s", label, name)
        return response["Parameter"]["Value"]
