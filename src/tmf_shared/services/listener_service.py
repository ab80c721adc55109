"""Listener (hub) registration service.

Callback URLs are unique: each listener is written together with a guard
item keyed by its callback, so a second registration of the same URL fails
atomically in the store.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING

from ..models import ErrorCode, Listener, ListenerCreate, ResourceError
from ..utils.ids import generate_resource_id
from ..utils.logging import get_logger, log_resource_operation
from .notification import Clock, utc_now

if TYPE_CHECKING:
    from .dynamodb import DynamoDBService

logger = get_logger(__name__)

RESOURCE = "hub"


class ListenerService:
    """Service for registering and deregistering event listeners."""

    LISTENERS_TABLE = "listeners"
    CALLBACKS_TABLE = "listener-callbacks"

    def __init__(
        self,
        db: "DynamoDBService",
        clock: Clock = utc_now,
        id_factory: Callable[[], str] = generate_resource_id,
    ) -> None:
        """Initialize listener service.

        Args:
            db: DynamoDB service instance
            clock: Source of ``createdAt``
            id_factory: Source of new listener IDs
        """
        self.db = db
        self.clock = clock
        self.id_factory = id_factory

    def register(self, data: ListenerCreate) -> Listener:
        """Register a listener for PaymentMethod events.

        Raises:
            ResourceError: VALIDATION_FAILED if ``callback`` is missing,
                CONFLICT if the callback is already registered
        """
        if not data.callback:
            raise ResourceError(ErrorCode.VALIDATION_FAILED, "callback is required")

        listener_id = self.id_factory()
        item: dict[str, str] = {
            "id": listener_id,
            "callback": data.callback,
            "createdAt": self.clock().isoformat(),
        }
        if data.query:
            item["query"] = data.query

        stored = self.db.put_unique(
            self.LISTENERS_TABLE,
            item,
            key_name="id",
            guard_table=self.CALLBACKS_TABLE,
            guard_key={"callback": data.callback, "id": listener_id},
        )
        if not stored:
            log_resource_operation(
                logger,
                "register",
                resource=RESOURCE,
                error="already registered",
                callback=data.callback,
            )
            raise ResourceError(
                ErrorCode.CONFLICT,
                "Already registered",
                details={"callback": data.callback},
            )

        log_resource_operation(
            logger,
            "register",
            resource=RESOURCE,
            resource_id=listener_id,
            callback=data.callback,
        )
        return Listener.model_validate(item)

    def list_listeners(self) -> list[Listener]:
        """All registered listeners, in store order."""
        return [
            Listener.model_validate(item) for item in self.db.scan(self.LISTENERS_TABLE)
        ]

    def deregister(self, listener_id: str) -> None:
        """Remove a listener and release its callback.

        Raises:
            ResourceError: NOT_FOUND if the ID does not resolve
        """
        existing = self.db.get_item(self.LISTENERS_TABLE, {"id": listener_id})
        if not existing:
            raise ResourceError(ErrorCode.NOT_FOUND, details={"id": listener_id})

        deleted = self.db.delete_unique(
            self.LISTENERS_TABLE,
            {"id": listener_id},
            guard_table=self.CALLBACKS_TABLE,
            guard_key={"callback": existing["callback"]},
        )
        if not deleted:
            raise ResourceError(ErrorCode.NOT_FOUND, details={"id": listener_id})

        log_resource_operation(
            logger,
            "deregister",
            resource=RESOURCE,
            resource_id=listener_id,
            callback=existing["callback"],
        )
