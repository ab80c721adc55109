"""Standard error codes for the Payment Method API.

Every failure a resource service can report maps onto one of four codes.
The API layer turns a ResourceError into an ErrorResponse with the HTTP
status registered for its code.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Standard error codes."""

    VALIDATION_FAILED = "ERR_VALIDATION"
    NOT_FOUND = "ERR_NOT_FOUND"
    CONFLICT = "ERR_CONFLICT"
    STORE_FAILURE = "ERR_STORE"


# Default human-readable messages, used when a ResourceError carries none
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_FAILED: "Request validation failed",
    ErrorCode.NOT_FOUND: "Not found",
    ErrorCode.CONFLICT: "Already registered",
    ErrorCode.STORE_FAILURE: "Document store operation failed",
}

# Recovery suggestions for API clients
ERROR_RECOVERY: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_FAILED: "Fix the request body or query and try again",
    ErrorCode.NOT_FOUND: "Verify the resource id",
    ErrorCode.CONFLICT: "The resource already exists; use the existing one",
    ErrorCode.STORE_FAILURE: "Try again later",
}


class ErrorResponse(BaseModel):
    """JSON body returned for every failed request."""

    model_config = ConfigDict(strict=True)

    error_code: ErrorCode
    error: str
    recovery: str
    details: Optional[Any] = None

    @classmethod
    def from_code(
        cls,
        code: ErrorCode,
        message: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> "ErrorResponse":
        """Create an ErrorResponse from an error code.

        Args:
            code: The error code
            message: Message overriding the default for the code
            details: Optional additional context about the error

        Returns:
            An ErrorResponse with the message and recovery hint for the code.
        """
        return cls(
            error_code=code,
            error=message or ERROR_MESSAGES[code],
            recovery=ERROR_RECOVERY[code],
            details=details,
        )


class ResourceError(Exception):
    """Exception raised by resource services.

    Caught by the API exception handlers and converted to an ErrorResponse.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: Optional[str] = None,
        details: Optional[dict[str, str]] = None,
    ):
        self.code = code
        self.message = message or ERROR_MESSAGES[code]
        self.recovery = ERROR_RECOVERY[code]
        self.details = details
        super().__init__(self.message)

    def to_error_response(self) -> ErrorResponse:
        """Convert this exception to an ErrorResponse."""
        return ErrorResponse.from_code(self.code, self.message, self.details)
