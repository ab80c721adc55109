"""API routes package.

Routers are organized by resource:

- health: Liveness endpoints (server root and base path)
- payment_methods: PaymentMethod CRUD
- hub: Listener registration
- users: User creation and listing

payment_methods, hub and the base-path health router are mounted under
BASE_PATH in main.py; users and the root health router are not.
"""

from tmf_api.routes.health import root_router as root_health_router
from tmf_api.routes.health import router as health_router
from tmf_api.routes.hub import router as hub_router
from tmf_api.routes.payment_methods import router as payment_methods_router
from tmf_api.routes.users import router as users_router

__all__ = [
    "health_router",
    "hub_router",
    "payment_methods_router",
    "root_health_router",
    "users_router",
]
