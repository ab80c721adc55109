"""Enumeration types for TMF670 data models."""

from enum import Enum


class PaymentMethodType(str, Enum):
    """Concrete PaymentMethod variants (the ``@type`` discriminator)."""

    BANK_CARD = "BankCard"
    BANK_ACCOUNT_TRANSFER = "BankAccountTransfer"
    BANK_ACCOUNT_DEBIT = "BankAccountDebit"
    DIGITAL_WALLET = "DigitalWallet"
    CHECK = "Check"
    VOUCHER = "Voucher"
    CASH = "Cash"
    BUCKET_PAYMENT_METHOD = "BucketPaymentMethod"
    ACCOUNT_PAYMENT_METHOD = "AccountPaymentMethod"
    LOYALTY_PAYMENT_METHOD = "LoyaltyPaymentMethod"


class PaymentMethodStatus(str, Enum):
    """Lifecycle status of a PaymentMethod."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"
    SUSPENDED = "Suspended"
    EXPIRED = "Expired"
    CANCELLED = "Cancelled"


class EventType(str, Enum):
    """Notification event types emitted to registered listeners."""

    CREATE = "PaymentMethodCreateEvent"
    ATTRIBUTE_VALUE_CHANGE = "PaymentMethodAttributeValueChangeEvent"
    DELETE = "PaymentMethodDeleteEvent"


class NotificationDelivery(str, Enum):
    """How notification events leave the process."""

    LOG = "log"
    HTTP = "http"
