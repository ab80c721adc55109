"""Backend services for the TMF670 Payment Method API."""

from .dynamodb import DynamoDBService, get_dynamodb_service, reset_dynamodb_service
from .listener_service import ListenerService
from .notification import (
    EventDelivery,
    HttpEventDelivery,
    LoggingEventDelivery,
    NotificationDispatcher,
    generate_event_id,
    utc_now,
)
from .payment_method_service import PaymentMethodService
from .user_service import UserService
from .validation import ValidationResult, merge_for_update, validate_payment_method

__all__ = [
    "DynamoDBService",
    "get_dynamodb_service",
    "reset_dynamodb_service",
    "ListenerService",
    "EventDelivery",
    "HttpEventDelivery",
    "LoggingEventDelivery",
    "NotificationDispatcher",
    "generate_event_id",
    "utc_now",
    "PaymentMethodService",
    "UserService",
    "ValidationResult",
    "merge_for_update",
    "validate_payment_method",
]
