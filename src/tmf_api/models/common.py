"""Shared API request/response models.

HTTP/API layer concerns only: health payloads and the formatting of
request validation errors into the standard ErrorResponse.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Re-export ErrorResponse for convenience - this is the standard error format
from tmf_shared.models.errors import ErrorCode, ErrorResponse

__all__ = [
    "ErrorCode",
    "ErrorResponse",
    "HealthResponse",
    "ValidationErrorDetail",
    "format_validation_errors",
]


class ValidationErrorDetail(BaseModel):
    """Detail of a single validation error."""

    model_config = ConfigDict(strict=True)

    loc: list[str | int] = Field(
        ...,
        description="Path to the field that failed validation",
        examples=[["body", "status"]],
    )
    msg: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Input should be 'Active', 'Inactive', 'Suspended', 'Expired' or 'Cancelled'"],
    )
    type: str = Field(
        ...,
        description="Error type identifier",
        examples=["enum"],
    )


class HealthResponse(BaseModel):
    """Health check payload."""

    status: str = "ok"
    timestamp: str
    service: str


def format_validation_errors(errors: list[dict[str, Any]]) -> ErrorResponse:
    """Convert Pydantic validation errors to an ErrorResponse.

    Args:
        errors: List of error dicts from Pydantic's ValidationError.errors()

    Returns:
        ErrorResponse whose message names the first violated rule and whose
        details list every error.
    """
    details = [
        ValidationErrorDetail(
            loc=[str(loc) for loc in error.get("loc", [])],
            msg=str(error.get("msg", "")),
            type=str(error.get("type", "")),
        )
        for error in errors
    ]
    message = None
    if details:
        first = details[0]
        message = f"{'.'.join(str(part) for part in first.loc)}: {first.msg}"
    return ErrorResponse.from_code(
        ErrorCode.VALIDATION_FAILED,
        message,
        [detail.model_dump() for detail in details],
    )
