"""Health check endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from tmf_api.models.common import HealthResponse

SERVICE_NAME = "tmf670-payment-method-api"

router = APIRouter(tags=["health"])
root_router = APIRouter(tags=["health"])


@root_router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root() -> str:
    """Plain-text liveness line at the server root."""
    return "TMF670 PaymentMethod API is running"


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        timestamp=datetime.now(UTC).isoformat(),
        service=SERVICE_NAME,
    )
