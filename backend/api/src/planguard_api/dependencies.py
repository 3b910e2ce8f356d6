"""FastAPI dependency providers for shared services.

Services are built once by ``create_app`` and kept on ``app.state``;
these providers hand them to route handlers.

Usage in routes:
    from planguard_api.dependencies import get_checkout_service

    @router.post("/create-checkout-session")
    def create_checkout_session(
        body: CheckoutRequest,
        checkout: CheckoutService = Depends(get_checkout_service),
    ):
        ...

Service Dependency Graph:
    Settings
        └── StripeService
                ├── CheckoutService
                └── WebhookHandler (+ OrderRecorder)

Testing:
    Pass a mocked StripeService or recorder to create_app(), or use
    app.dependency_overrides.
"""

from fastapi import Request

from planguard.config import Settings
from planguard.services.checkout import CheckoutService
from planguard.services.webhook_handler import WebhookHandler


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_checkout_service(request: Request) -> CheckoutService:
    return request.app.state.checkout_service


def get_webhook_handler(request: Request) -> WebhookHandler:
    return request.app.state.webhook_handler
