"""API routes package.

Routers are organized by domain:

- health: Liveness probe
- checkout: Checkout session creation and lookup
- webhooks: Stripe webhook receiver

main.py mounts health and checkout under /api; the webhook lives at
/webhook, the URL registered in the Stripe dashboard.
"""

from planguard_api.routes.checkout import router as checkout_router
from planguard_api.routes.health import router as health_router
from planguard_api.routes.webhooks import router as webhooks_router

__all__ = [
    "checkout_router",
    "health_router",
    "webhooks_router",
]
