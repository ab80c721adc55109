"""Pydantic models for TMF670 Payment Method API entities."""

from .enums import (
    EventType,
    NotificationDelivery,
    PaymentMethodStatus,
    PaymentMethodType,
)
from .errors import (
    ERROR_MESSAGES,
    ERROR_RECOVERY,
    ErrorCode,
    ErrorResponse,
    ResourceError,
)
from .event import NotificationEvent
from .listener import Listener, ListenerCreate, ListenerCreated
from .payment_method import (
    BASE_TYPE,
    PAYMENT_METHOD_VARIANTS,
    BankAccountDetails,
    BankCardDetails,
    CheckDetails,
    DigitalWalletDetails,
    PaymentMethod,
    PaymentMethodCreate,
    PaymentMethodFields,
    PaymentMethodUpdate,
    required_fields_for,
    variant_label,
)
from .user import User, UserCreate, UserCreated

__all__ = [
    # Enums
    "EventType",
    "NotificationDelivery",
    "PaymentMethodStatus",
    "PaymentMethodType",
    # Errors
    "ERROR_MESSAGES",
    "ERROR_RECOVERY",
    "ErrorCode",
    "ErrorResponse",
    "ResourceError",
    # Events
    "NotificationEvent",
    # Listeners
    "Listener",
    "ListenerCreate",
    "ListenerCreated",
    # Payment methods
    "BASE_TYPE",
    "PAYMENT_METHOD_VARIANTS",
    "BankAccountDetails",
    "BankCardDetails",
    "CheckDetails",
    "DigitalWalletDetails",
    "PaymentMethod",
    "PaymentMethodCreate",
    "PaymentMethodFields",
    "PaymentMethodUpdate",
    "required_fields_for",
    "variant_label",
    # Users
    "User",
    "UserCreate",
    "UserCreated",
]
