"""User service.

Users carry no validation beyond store-level uniqueness of ``email``.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ..models import ErrorCode, ResourceError, User, UserCreate
from ..utils.ids import generate_resource_id
from ..utils.logging import get_logger, log_resource_operation

if TYPE_CHECKING:
    from .dynamodb import DynamoDBService

logger = get_logger(__name__)

RESOURCE = "user"


class UserService:
    """Service for creating and listing users."""

    USERS_TABLE = "users"
    EMAILS_TABLE = "user-emails"

    def __init__(
        self,
        db: "DynamoDBService",
        id_factory: Callable[[], str] = generate_resource_id,
    ) -> None:
        """Initialize user service.

        Args:
            db: DynamoDB service instance
            id_factory: Source of new user IDs
        """
        self.db = db
        self.id_factory = id_factory

    def create_user(self, data: UserCreate) -> User:
        """Store a new user.

        Users without an email have no unique key and always insert.

        Raises:
            ResourceError: CONFLICT if the email is already taken
        """
        user_id = self.id_factory()
        item: dict[str, Any] = {
            "id": user_id,
            **data.model_dump(exclude_none=True),
        }

        if data.email:
            stored = self.db.put_unique(
                self.USERS_TABLE,
                item,
                key_name="id",
                guard_table=self.EMAILS_TABLE,
                guard_key={"email": data.email, "id": user_id},
            )
        else:
            stored = self.db.put_item(self.USERS_TABLE, item)

        if not stored:
            log_resource_operation(
                logger, "create", resource=RESOURCE, error="duplicate email"
            )
            raise ResourceError(
                ErrorCode.CONFLICT,
                "User already exists",
                details={"email": data.email or ""},
            )

        log_resource_operation(logger, "create", resource=RESOURCE, resource_id=user_id)
        return User.model_validate(item)

    def list_users(self) -> list[User]:
        """All users, in store order."""
        return [User.model_validate(item) for item in self.db.scan(self.USERS_TABLE)]
