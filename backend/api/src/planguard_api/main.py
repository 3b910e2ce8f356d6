"""FastAPI application for the Plan Guard Pro checkout backend.

This package provides REST endpoints for:
- Health checks
- Checkout session creation and lookup
- The Stripe webhook receiver

Settings are read once at import time for the module-level ``app``;
tests and embedders build their own app with ``create_app``.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from planguard.config import Settings
from planguard.services.checkout import CheckoutService
from planguard.services.order_recorder import LoggingOrderRecorder, OrderRecorder
from planguard.services.stripe_service import StripeService
from planguard.services.webhook_handler import WebhookHandler
from planguard.utils.logging import configure_logging
from planguard_api import __version__
from planguard_api.exceptions import register_exception_handlers
from planguard_api.middleware.correlation import CorrelationIdMiddleware
from planguard_api.routes.checkout import router as checkout_router
from planguard_api.routes.health import router as health_router
from planguard_api.routes.webhooks import router as webhooks_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    stripe_service: Optional[StripeService] = None,
    recorder: Optional[OrderRecorder] = None,
) -> FastAPI:
    """Build the application and its services.

    Args:
        settings: Application settings (default: read from the environment)
        stripe_service: Stripe gateway (default: built from settings)
        recorder: Webhook side effects (default: log only)

    Returns:
        Configured FastAPI app
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    stripe_service = stripe_service or StripeService(settings)

    app = FastAPI(
        title="Plan Guard Pro Checkout API",
        description="Sheet-based pricing, Stripe Checkout sessions and webhooks",
        version=__version__,
    )
    app.state.settings = settings
    app.state.checkout_service = CheckoutService(settings, stripe_service)
    app.state.webhook_handler = WebhookHandler(stripe_service, recorder or LoggingOrderRecorder())

    # Only the public site may call the JSON endpoints
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.domain],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIdMiddleware)

    register_exception_handlers(app)

    app.include_router(health_router, prefix="/api")
    app.include_router(checkout_router, prefix="/api")
    # Stripe dashboard points at /webhook, outside /api
    app.include_router(webhooks_router)

    return app


app = create_app()

# Lambda handler - Mangum wraps FastAPI for AWS Lambda + API Gateway
handler = Mangum(app, lifespan="off")


def run_server(host: str = "0.0.0.0", port: Optional[int] = None, reload: bool = False) -> None:
    """Run the FastAPI server.

    Args:
        host: Host to bind to (default: 0.0.0.0)
        port: Port to listen on (default: PORT setting, 3001)
        reload: Enable hot reload for development (default: False)
    """
    import uvicorn

    settings: Settings = app.state.settings
    port = port or settings.port

    logger.info("Plan Guard Pro Stripe server running on port %d", port)
    logger.info("Webhook endpoint: %s", settings.webhook_url)

    if reload:
        # Use string reference for reload mode (uvicorn requirement)
        uvicorn.run(
            "planguard_api.main:app",
            host=host,
            port=port,
            reload=True,
            reload_dirs=["backend/api/src", "backend/shared/src"],
        )
    else:
        uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
