"""FastAPI exception handlers for converting errors to HTTP responses.

Every failure leaves the API as an ErrorResponse. The ErrorCode-to-HTTP
status mapping:
- 400 Bad Request: validation failures (domain rules and request parsing)
- 404 Not Found: unknown resource ID
- 409 Conflict: duplicate listener callback or user email
- 500 Internal Server Error: document store failures

Usage:
    from tmf_api.exceptions import register_exception_handlers
    register_exception_handlers(app)
"""

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from tmf_api.models.common import format_validation_errors
from tmf_shared.models.errors import ErrorCode, ErrorResponse, ResourceError
from tmf_shared.utils.logging import get_logger

logger = get_logger(__name__)

ERROR_CODE_TO_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_FAILED: HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.CONFLICT: HTTP_409_CONFLICT,
    ErrorCode.STORE_FAILURE: HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_http_status_for_error(code: ErrorCode) -> int:
    """Get HTTP status code for an ErrorCode, defaulting to 400."""
    return ERROR_CODE_TO_HTTP_STATUS.get(code, HTTP_400_BAD_REQUEST)


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def resource_error_handler(request: Request, exc: ResourceError) -> JSONResponse:
    """Handle ResourceError exceptions raised by services.

    Args:
        request: The incoming request (unused but required by FastAPI)
        exc: The ResourceError exception

    Returns:
        JSONResponse with error details and the status mapped from its code.
    """
    return _error_response(get_http_status_for_error(exc.code), exc.to_error_response())


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request parsing failures as 400 instead of FastAPI's 422."""
    return _error_response(HTTP_400_BAD_REQUEST, format_validation_errors(list(exc.errors())))


async def store_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle document store errors that escaped a service.

    The underlying store message is passed through to the client.
    """
    logger.error("Document store error on %s %s: %s", request.method, request.url.path, exc)
    return _error_response(
        HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse.from_code(ErrorCode.STORE_FAILURE, str(exc)),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback for uncaught exceptions.

    Internal details are logged, not returned.
    """
    logger.exception("Unhandled exception: %s", exc)
    return _error_response(
        HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse.from_code(ErrorCode.STORE_FAILURE, "An unexpected error occurred"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(ResourceError, resource_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError, request_validation_error_handler  # type: ignore[arg-type]
    )
    app.add_exception_handler(ClientError, store_error_handler)
    app.add_exception_handler(BotoCoreError, store_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
