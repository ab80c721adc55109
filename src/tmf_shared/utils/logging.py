"""Logging helpers shared by the API and the services.

Every record carries the correlation ID of the request that produced it,
taken from a ContextVar that CorrelationIdMiddleware sets per request.
Resource mutations and notification events are logged as one
``key=value`` line each so they can be grepped per resource or event ID.

Usage:
    from tmf_shared.utils.logging import get_logger, log_resource_operation

    logger = get_logger(__name__)
    log_resource_operation(logger, "create", resource="paymentMethod", resource_id=pm_id)
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Any

# Set per request; async tasks and worker threads see their own copy
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)

NO_CORRELATION_ID = "-"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Bind a correlation ID to the current context, generating one if absent.

    Returns:
        The ID now in effect
    """
    cid = correlation_id or str(uuid.uuid4())
    _correlation_id.set(cid)
    return cid


def get_correlation_id() -> str | None:
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set(None)


class CorrelationIdFilter(logging.Filter):
    """Stamps ``record.correlation_id``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or NO_CORRELATION_ID
        return True


class StructuredFormatter(logging.Formatter):
    """Prefixes each line with ``[correlation-id]``."""

    def format(self, record: logging.LogRecord) -> str:
        cid = getattr(record, "correlation_id", None) or get_correlation_id()
        return f"[{cid or NO_CORRELATION_ID}] {super().format(record)}"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once at application start."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    for handler in logging.getLogger().handlers:
        if not isinstance(handler.formatter, StructuredFormatter):
            handler.setFormatter(StructuredFormatter(LOG_FORMAT))


def get_logger(name: str) -> logging.Logger:
    """Module logger with the correlation ID filter attached once."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, CorrelationIdFilter) for f in logger.filters):
        logger.addFilter(CorrelationIdFilter())
    return logger


def _emit(
    logger: logging.Logger, headline: str, context: dict[str, Any], level: int
) -> None:
    """Log ``headline | k=v | ...`` with ``context`` attached as record extras."""
    pairs = [f"{key}={value}" for key, value in context.items() if value is not None]
    extras = {key: value for key, value in context.items() if value is not None}
    logger.log(level, " | ".join([headline, *pairs]), extra=extras)


def log_resource_operation(
    logger: logging.Logger,
    operation: str,
    *,
    resource: str,
    resource_id: str | None = None,
    status: str | None = None,
    error: str | None = None,
    **extra: Any,
) -> None:
    """Log one create/patch/delete/register on a resource.

    Failed operations (``error`` set) are logged at WARNING.

    Args:
        logger: Logger instance
        operation: Operation name, e.g. "create", "patch", "register"
        resource: Resource family: "paymentMethod", "hub" or "user"
        resource_id: ID of the affected resource, when known
        status: Resulting status, for resources that have one
        error: Failure reason
        **extra: Additional context fields
    """
    context: dict[str, Any] = {
        "resource_id": resource_id,
        "status": status,
        "error": error,
        **extra,
    }
    _emit(
        logger,
        f"{resource} {operation}",
        context,
        logging.WARNING if error else logging.INFO,
    )


def log_notification_event(
    logger: logging.Logger,
    event_type: str,
    event_id: str,
    *,
    callback: str,
    result: str | None = None,
    error: str | None = None,
    payload: str | None = None,
) -> None:
    """Log one event sent, or attempted, to one listener callback.

    ``result`` is one of ``logged``, ``delivered`` or ``error``; errors are
    logged at ERROR.
    """
    context: dict[str, Any] = {
        "callback": callback,
        "result": result,
        "error": error,
        "event": payload,
    }
    _emit(
        logger,
        f"Notification event: {event_type} ({event_id})",
        context,
        logging.ERROR if result == "error" else logging.INFO,
    )
