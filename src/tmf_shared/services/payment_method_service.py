"""PaymentMethod resource service.

Orchestrates validation, persistence and notification for PaymentMethod
mutations, and serializes stored documents for responses.
"""

from collections.abc import Callable
from functools import reduce
from typing import TYPE_CHECKING, Any

from boto3.dynamodb.conditions import Attr

from ..models import (
    BASE_TYPE,
    ErrorCode,
    EventType,
    PaymentMethod,
    PaymentMethodCreate,
    PaymentMethodStatus,
    PaymentMethodUpdate,
    ResourceError,
)
from ..utils.ids import generate_resource_id
from ..utils.logging import get_logger, log_resource_operation
from .notification import Clock, utc_now
from .validation import merge_for_update, validate_payment_method

if TYPE_CHECKING:
    from .dynamodb import DynamoDBService
    from .notification import NotificationDispatcher

logger = get_logger(__name__)

RESOURCE = "paymentMethod"


class PaymentMethodService:
    """Service for creating, reading, patching and deleting PaymentMethods."""

    PAYMENT_METHODS_TABLE = "payment-methods"

    def __init__(
        self,
        db: "DynamoDBService",
        notifier: "NotificationDispatcher",
        base_path: str,
        clock: Clock = utc_now,
        id_factory: Callable[[], str] = generate_resource_id,
    ) -> None:
        """Initialize payment method service.

        Args:
            db: DynamoDB service instance
            notifier: Dispatcher for mutation events
            base_path: API base path used to build ``href``
            clock: Source of ``statusDate`` and audit timestamps
            id_factory: Source of new resource IDs
        """
        self.db = db
        self.notifier = notifier
        self.base_path = base_path
        self.clock = clock
        self.id_factory = id_factory

    def _to_resource(self, item: dict[str, Any]) -> PaymentMethod:
        return PaymentMethod.from_item(item, self.base_path)

    def create_payment_method(self, data: PaymentMethodCreate) -> PaymentMethod:
        """Validate and store a new PaymentMethod, then notify listeners.

        Raises:
            ResourceError: VALIDATION_FAILED if the body breaks a variant rule
        """
        document = data.to_document()
        validation = validate_payment_method(document, is_create=True)
        if not validation.valid:
            log_resource_operation(
                logger, "create", resource=RESOURCE, error=validation.error
            )
            raise ResourceError(ErrorCode.VALIDATION_FAILED, validation.error)

        now = self.clock().isoformat()
        item = {
            **document,
            "id": self.id_factory(),
            "status": document.get("status") or PaymentMethodStatus.ACTIVE.value,
            "statusDate": now,
            "@baseType": BASE_TYPE,
            "createdAt": now,
            "updatedAt": now,
        }
        self.db.put_item(self.PAYMENT_METHODS_TABLE, item)

        payment_method = self._to_resource(item)
        log_resource_operation(
            logger,
            "create",
            resource=RESOURCE,
            resource_id=payment_method.id,
            status=item["status"],
            type=item["@type"],
        )
        self.notifier.notify(EventType.CREATE, payment_method.to_response())
        return payment_method

    def list_payment_methods(
        self,
        status: str | None = None,
        payment_type: str | None = None,
        name: str | None = None,
        fields: list[str] | None = None,
    ) -> list[PaymentMethod]:
        """List PaymentMethods matching all given equality filters.

        Args:
            status: Exact ``status`` to match
            payment_type: Exact ``@type`` to match
            name: Exact ``name`` to match
            fields: Optional attribute projection

        Returns:
            Matching PaymentMethods, possibly empty
        """
        conditions = [
            Attr(attribute).eq(value)
            for attribute, value in (
                ("status", status),
                ("@type", payment_type),
                ("name", name),
            )
            if value
        ]
        filter_expression = reduce(lambda a, b: a & b, conditions) if conditions else None

        items = self.db.scan(
            self.PAYMENT_METHODS_TABLE,
            filter_expression=filter_expression,
            fields=_with_id(fields),
        )
        return [self._to_resource(item) for item in items]

    def get_payment_method(
        self, payment_method_id: str, fields: list[str] | None = None
    ) -> PaymentMethod:
        """Get a PaymentMethod by ID.

        Raises:
            ResourceError: NOT_FOUND if the ID does not resolve
        """
        item = self.db.get_item(
            self.PAYMENT_METHODS_TABLE,
            {"id": payment_method_id},
            fields=_with_id(fields),
        )
        if not item:
            raise ResourceError(ErrorCode.NOT_FOUND, details={"id": payment_method_id})
        return self._to_resource(item)

    def update_payment_method(
        self, payment_method_id: str, data: PaymentMethodUpdate
    ) -> PaymentMethod:
        """Apply a partial update, validating the merged document.

        Only the patch fields (plus ``statusDate`` and ``updatedAt``) are
        written back.

        Raises:
            ResourceError: NOT_FOUND if the ID does not resolve,
                VALIDATION_FAILED if the merged document breaks a variant rule
        """
        now = self.clock().isoformat()
        patch = {**data.to_document(), "statusDate": now, "updatedAt": now}

        existing = self.db.get_item(self.PAYMENT_METHODS_TABLE, {"id": payment_method_id})
        if not existing:
            raise ResourceError(ErrorCode.NOT_FOUND, details={"id": payment_method_id})

        validation = validate_payment_method(
            merge_for_update(existing, patch), is_create=False
        )
        if not validation.valid:
            log_resource_operation(
                logger,
                "patch",
                resource=RESOURCE,
                resource_id=payment_method_id,
                error=validation.error,
            )
            raise ResourceError(ErrorCode.VALIDATION_FAILED, validation.error)

        updated = self.db.update_attributes(
            self.PAYMENT_METHODS_TABLE, {"id": payment_method_id}, patch
        )
        if not updated:
            # Deleted between the read and the write
            raise ResourceError(ErrorCode.NOT_FOUND, details={"id": payment_method_id})

        payment_method = self._to_resource(updated)
        log_resource_operation(
            logger,
            "patch",
            resource=RESOURCE,
            resource_id=payment_method_id,
            status=updated.get("status"),
            fields=",".join(sorted(patch)),
        )
        self.notifier.notify(EventType.ATTRIBUTE_VALUE_CHANGE, payment_method.to_response())
        return payment_method

    def delete_payment_method(self, payment_method_id: str) -> PaymentMethod:
        """Delete a PaymentMethod and notify listeners with its last state.

        Raises:
            ResourceError: NOT_FOUND if the ID does not resolve
        """
        deleted = self.db.delete_item(self.PAYMENT_METHODS_TABLE, {"id": payment_method_id})
        if not deleted:
            raise ResourceError(ErrorCode.NOT_FOUND, details={"id": payment_method_id})

        payment_method = self._to_resource(deleted)
        log_resource_operation(
            logger, "delete", resource=RESOURCE, resource_id=payment_method_id
        )
        self.notifier.notify(EventType.DELETE, payment_method.to_response())
        return payment_method


def _with_id(fields: list[str] | None) -> list[str] | None:
    """Projection that always keeps the key attribute."""
    if not fields:
        return None
    return ["id", *(f for f in fields if f != "id")]
