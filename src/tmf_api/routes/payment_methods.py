"""PaymentMethod endpoints.

Provides REST endpoints for:
- Creating a payment method (type-conditional validation)
- Listing payment methods with equality filters and projection
- Getting, patching and deleting a payment method by ID

Every successful mutation notifies registered listeners.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query, Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from tmf_api.dependencies import get_payment_method_service
from tmf_shared.models import ErrorResponse, PaymentMethodCreate, PaymentMethodUpdate
from tmf_shared.services.payment_method_service import PaymentMethodService

router = APIRouter(tags=["paymentMethod"])

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"description": "Validation failed", "model": ErrorResponse},
    404: {"description": "Payment method not found", "model": ErrorResponse},
    500: {"description": "Document store error", "model": ErrorResponse},
}


def parse_fields(
    fields: str | None = Query(
        default=None,
        description="Comma-separated attributes to return (id is always included)",
        examples=["name,status"],
    ),
) -> list[str] | None:
    """Parse the ``fields`` projection parameter."""
    if not fields:
        return None
    parsed = [field.strip() for field in fields.split(",") if field.strip()]
    return parsed or None


@router.post(
    "/paymentMethod",
    summary="Create payment method",
    description="""
Create a payment method.

`name` and `@type` are required. `@type` must be one of the ten TMF670
variants, and the detail fields of that variant must be present:

- BankCard: cardNumber, brand, expirationDate, nameOnCard
- BankAccountTransfer / BankAccountDebit: accountNumber, owner, bank
- DigitalWallet: service, walletId
- Check: checkId, drawer, payee, signedDate, bank
""",
    status_code=HTTP_201_CREATED,
    responses={k: v for k, v in ERROR_RESPONSES.items() if k != 404},
)
async def create_payment_method(
    body: PaymentMethodCreate,
    service: PaymentMethodService = Depends(get_payment_method_service),
) -> dict[str, Any]:
    """Create a payment method and notify listeners."""
    return service.create_payment_method(body).to_response()


@router.get(
    "/paymentMethod",
    summary="List payment methods",
    description="List payment methods. Filters are exact matches and combine with AND.",
    responses={500: ERROR_RESPONSES[500]},
)
async def list_payment_methods(
    status: str | None = Query(default=None, description="Filter by status"),
    payment_type: str | None = Query(
        default=None, alias="@type", description="Filter by @type"
    ),
    name: str | None = Query(default=None, description="Filter by name"),
    fields: list[str] | None = Depends(parse_fields),
    service: PaymentMethodService = Depends(get_payment_method_service),
) -> list[dict[str, Any]]:
    """List payment methods, honoring the ``fields`` projection."""
    payment_methods = service.list_payment_methods(
        status=status, payment_type=payment_type, name=name, fields=fields
    )
    return [payment_method.to_response(fields) for payment_method in payment_methods]


@router.get(
    "/paymentMethod/{payment_method_id}",
    summary="Get payment method",
    responses={404: ERROR_RESPONSES[404], 500: ERROR_RESPONSES[500]},
)
async def get_payment_method(
    payment_method_id: str,
    fields: list[str] | None = Depends(parse_fields),
    service: PaymentMethodService = Depends(get_payment_method_service),
) -> dict[str, Any]:
    """Get one payment method by ID."""
    return service.get_payment_method(payment_method_id, fields).to_response(fields)


@router.patch(
    "/paymentMethod/{payment_method_id}",
    summary="Update payment method",
    description="""
Partially update a payment method. Only include fields you want to change.

The stored payment method merged with the patch must still satisfy the
rules of its `@type`. `statusDate` is refreshed on every update.
""",
    responses=ERROR_RESPONSES,
)
async def update_payment_method(
    payment_method_id: str,
    body: PaymentMethodUpdate,
    service: PaymentMethodService = Depends(get_payment_method_service),
) -> dict[str, Any]:
    """Patch a payment method and notify listeners."""
    return service.update_payment_method(payment_method_id, body).to_response()


@router.delete(
    "/paymentMethod/{payment_method_id}",
    summary="Delete payment method",
    status_code=HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: ERROR_RESPONSES[404], 500: ERROR_RESPONSES[500]},
)
async def delete_payment_method(
    payment_method_id: str,
    service: PaymentMethodService = Depends(get_payment_method_service),
) -> Response:
    """Delete a payment method and notify listeners."""
    service.delete_payment_method(payment_method_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
