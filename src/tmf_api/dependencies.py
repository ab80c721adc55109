"""FastAPI dependency injection providers for shared services.

Factory functions cached with @lru_cache give one service instance per
process. Services are lazily instantiated on first use.

Usage in routes:
    from tmf_api.dependencies import get_payment_method_service

    @router.get("/paymentMethod")
    async def list_payment_methods(
        service: PaymentMethodService = Depends(get_payment_method_service),
    ):
        ...

Service Dependency Graph:
    DynamoDBService (singleton via get_dynamodb_service)
        ├── ListenerService
        │       └── NotificationDispatcher ── EventDelivery (log or http)
        │               └── PaymentMethodService
        └── UserService

Testing:
    Use reset_services() to clear cached instances between tests, or
    override a provider with app.dependency_overrides.
"""

from functools import lru_cache

from tmf_shared.config import get_settings
from tmf_shared.models import NotificationDelivery
from tmf_shared.services.dynamodb import get_dynamodb_service
from tmf_shared.services.listener_service import ListenerService
from tmf_shared.services.notification import (
    EventDelivery,
    HttpEventDelivery,
    LoggingEventDelivery,
    NotificationDispatcher,
)
from tmf_shared.services.payment_method_service import PaymentMethodService
from tmf_shared.services.user_service import UserService


@lru_cache
def get_event_delivery() -> EventDelivery:
    """Get the configured event delivery strategy.

    Returns:
        HttpEventDelivery when NOTIFICATION_DELIVERY=http, else logging.
    """
    settings = get_settings()
    if settings.notification_delivery == NotificationDelivery.HTTP:
        return HttpEventDelivery(timeout=settings.notification_timeout_seconds)
    return LoggingEventDelivery()


@lru_cache
def get_notification_dispatcher() -> NotificationDispatcher:
    """Get cached NotificationDispatcher instance."""
    return NotificationDispatcher(
        listeners=get_listener_service(),
        delivery=get_event_delivery(),
    )


@lru_cache
def get_payment_method_service() -> PaymentMethodService:
    """Get cached PaymentMethodService instance.

    Returns:
        PaymentMethodService configured with DynamoDB and the dispatcher.
    """
    return PaymentMethodService(
        db=get_dynamodb_service(),
        notifier=get_notification_dispatcher(),
        base_path=get_settings().base_path,
    )


@lru_cache
def get_listener_service() -> ListenerService:
    """Get cached ListenerService instance."""
    return ListenerService(db=get_dynamodb_service())


@lru_cache
def get_user_service() -> UserService:
    """Get cached UserService instance."""
    return UserService(db=get_dynamodb_service())


def close_event_delivery() -> None:
    """Close the cached HTTP delivery, if one was created.

    Services holding the closed delivery are dropped from the cache so a
    later request builds fresh ones.
    """
    if get_event_delivery.cache_info().currsize:
        delivery = get_event_delivery()
        if isinstance(delivery, HttpEventDelivery):
            delivery.close()

    get_event_delivery.cache_clear()
    get_notification_dispatcher.cache_clear()
    get_payment_method_service.cache_clear()


def reset_services() -> None:
    """Clear all cached service instances.

    Call this in test fixtures to ensure clean state between tests.
    Also resets the underlying DynamoDB singleton and settings.
    """
    from tmf_shared.config import reset_settings
    from tmf_shared.services.dynamodb import reset_dynamodb_service

    get_event_delivery.cache_clear()
    get_notification_dispatcher.cache_clear()
    get_payment_method_service.cache_clear()
    get_listener_service.cache_clear()
    get_user_service.cache_clear()

    reset_dynamodb_service()
    reset_settings()
