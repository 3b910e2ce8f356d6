"""Runtime settings for the checkout backend.

Settings are read from the environment once, at process start, and passed
explicitly to every service. A Stripe secret left empty is read from SSM
Parameter Store when ``ENVIRONMENT`` is set (see planguard.services.secrets).
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from planguard.models.pricing import PricingConfig

DEFAULT_DOMAIN = "https://planguardpro.com"
DEFAULT_PORT = 3001
SERVICE_NAME = "planguardpro-stripe"


class Settings(BaseModel):
    """Immutable application settings."""

    model_config = ConfigDict(frozen=True)

    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    environment: Optional[str] = Field(
        default=None,
        description="Deployment name (dev, prod) selecting the SSM secret paths",
    )
    domain: str = Field(
        default=DEFAULT_DOMAIN,
        description="Public site origin, used for redirects and CORS",
    )
    port: int = Field(default=DEFAULT_PORT, gt=0, lt=65536)
    stripe_timeout_seconds: float = Field(default=20.0, gt=0)
    log_level: str = "INFO"
    pricing: PricingConfig = Field(default_factory=PricingConfig)

    @field_validator("domain")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def success_url(self) -> str:
        # Stripe substitutes the session ID into the placeholder
        return f"{self.domain}/thank-you?session_id={{CHECKOUT_SESSION_ID}}"

    @property
    def cancel_url(self) -> str:
        return f"{self.domain}/#pricing"

    @property
    def webhook_url(self) -> str:
        return f"{self.domain}/webhook"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Settings instance; unset variables fall back to defaults.
        """
        env = os.environ if environ is None else environ

        values: dict = {
            "stripe_secret_key": env.get("STRIPE_SECRET_KEY", ""),
            "stripe_webhook_secret": env.get("STRIPE_WEBHOOK_SECRET", ""),
            "environment": env.get("ENVIRONMENT") or None,
            "domain": env.get("DOMAIN") or DEFAULT_DOMAIN,
            "log_level": env.get("LOG_LEVEL", "INFO").upper(),
        }
        if env.get("PORT"):
            values["port"] = env["PORT"]
        if env.get("STRIPE_TIMEOUT_SECONDS"):
            values["stripe_timeout_seconds"] = env["STRIPE_TIMEOUT_SECONDS"]

        return cls(**values)
