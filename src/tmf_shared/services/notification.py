"""Event notification for PaymentMethod mutations.

After a create, patch or delete has been stored, every registered listener
gets one event describing the PaymentMethod as it stands after the
mutation. Delivery is best effort: nothing here may fail the request that
triggered it, and nothing is retried.
"""

import datetime as dt
import json
import time
import uuid
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, Protocol

import httpx

from ..models.enums import EventType
from ..models.event import NotificationEvent
from ..models.listener import Listener
from ..utils.logging import get_logger, log_notification_event

if TYPE_CHECKING:
    from .listener_service import ListenerService

logger = get_logger(__name__)

Clock = Callable[[], dt.datetime]
IdFactory = Callable[[], str]


def utc_now() -> dt.datetime:
    """Current time in UTC."""
    return dt.datetime.now(dt.UTC)


def generate_event_id() -> str:
    """Generate an event ID: epoch milliseconds plus a random suffix."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}"


class EventDelivery(Protocol):
    """Sends one event to one listener."""

    def deliver(self, listener: Listener, event: NotificationEvent) -> None: ...


class LoggingEventDelivery:
    """Records events in the log instead of sending them."""

    def deliver(self, listener: Listener, event: NotificationEvent) -> None:
        log_notification_event(
            logger,
            event.event_type.value,
            event.event_id,
            callback=listener.callback,
            result="logged",
            payload=json.dumps(event.to_payload()),
        )


class HttpEventDelivery:
    """POSTs events to listener callbacks on a background thread pool.

    ``deliver`` returns immediately. Failures are logged, never raised.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        executor: ThreadPoolExecutor | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._executor = executor or ThreadPoolExecutor(
            max_workers=4, thread_name_prefix="notify"
        )
        self._client = client or httpx.Client(timeout=timeout)

    def deliver(self, listener: Listener, event: NotificationEvent) -> None:
        self._executor.submit(self._post, listener.callback, event)

    def _post(self, callback: str, event: NotificationEvent) -> None:
        try:
            response = self._client.post(callback, json=event.to_payload())
            response.raise_for_status()
        except httpx.HTTPError as e:
            log_notification_event(
                logger,
                event.event_type.value,
                event.event_id,
                callback=callback,
                result="error",
                error=str(e),
            )
            return
        log_notification_event(
            logger,
            event.event_type.value,
            event.event_id,
            callback=callback,
            result="delivered",
        )

    def close(self) -> None:
        """Wait for in-flight deliveries and release the HTTP client."""
        self._executor.shutdown(wait=True)
        self._client.close()


class NotificationDispatcher:
    """Fans PaymentMethod mutation events out to every registered listener."""

    def __init__(
        self,
        listeners: "ListenerService",
        delivery: EventDelivery | None = None,
        clock: Clock = utc_now,
        id_factory: IdFactory = generate_event_id,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            listeners: Source of registered listeners
            delivery: Event delivery strategy, logging by default
            clock: Source of event timestamps
            id_factory: Source of event IDs
        """
        self.listeners = listeners
        self.delivery = delivery or LoggingEventDelivery()
        self.clock = clock
        self.id_factory = id_factory

    def build_event(
        self, event_type: EventType, subject: dict[str, Any]
    ) -> NotificationEvent:
        """Build a fresh event record for one listener."""
        return NotificationEvent(
            event_id=self.id_factory(),
            event_time=self.clock().isoformat(),
            event_type=event_type,
            event={"paymentMethod": subject},
        )

    def notify(self, event_type: EventType, subject: dict[str, Any]) -> None:
        """Send one event per listener for a committed mutation.

        Listeners are notified in store order, without filtering by their
        ``query`` and without deduplication.

        Args:
            event_type: Kind of mutation
            subject: Serialized PaymentMethod after the mutation
        """
        try:
            registered = self.listeners.list_listeners()
        except Exception:
            logger.exception("Failed to load listeners for %s", event_type.value)
            return

        for listener in registered:
            try:
                self.delivery.deliver(listener, self.build_event(event_type, subject))
            except Exception:
                logger.exception(
                    "Failed to notify listener %s of %s", listener.id, event_type.value
                )
