"""FastAPI application for the TMF670 Payment Method API.

This package provides REST endpoints for:
- PaymentMethod CRUD with listener notification
- Listener (hub) registration
- Users
- Health checks

Resource routes are mounted under BASE_PATH (default
/tmf-api/paymentMethod/v4); /users and / sit at the server root.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from tmf_api.dependencies import close_event_delivery
from tmf_api.exceptions import register_exception_handlers
from tmf_api.middleware.correlation import CorrelationIdMiddleware
from tmf_api.routes import (
    health_router,
    hub_router,
    payment_methods_router,
    root_health_router,
    users_router,
)
from tmf_shared.config import get_settings
from tmf_shared.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Release the event delivery thread pool and HTTP client on shutdown."""
    yield
    close_event_delivery()
    logger.info("Event delivery closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        A configured FastAPI instance ready to be served.
    """
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="TMF670 Payment Method API",
        description="REST API for payment methods, event listeners and users",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIdMiddleware)

    # Register exception handlers for consistent error responses
    register_exception_handlers(app)

    app.include_router(root_health_router)
    app.include_router(users_router)
    app.include_router(health_router, prefix=settings.base_path)
    app.include_router(payment_methods_router, prefix=settings.base_path)
    app.include_router(hub_router, prefix=settings.base_path)

    logger.info(
        "PaymentMethod API configured at %s/paymentMethod (environment=%s)",
        settings.base_path,
        settings.environment,
    )
    return app


app = create_app()

# Lambda handler - Mangum wraps FastAPI for AWS Lambda + API Gateway
handler = Mangum(app, lifespan="off")


def run_server(host: str = "0.0.0.0", port: int = 3000, reload: bool = False) -> None:
    """Run the FastAPI server.

    Args:
        host: Host to bind to (default: 0.0.0.0)
        port: Port to listen on (default: 3000)
        reload: Enable hot reload for development (default: False)
    """
    import uvicorn

    if reload:
        # Use string reference for reload mode (uvicorn requirement)
        uvicorn.run("tmf_api.main:app", host=host, port=port, reload=True)
    else:
        uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
