"""Type-conditional validation for PaymentMethod payloads.

The same check runs on create (the request body) and on partial update
(the stored document overlaid with the patch). Empty strings and nulls
count as missing.
"""

from collections.abc import Mapping
from typing import Any, NamedTuple

from ..models.enums import PaymentMethodType
from ..models.payment_method import required_fields_for, variant_label

VALID_TYPES: tuple[str, ...] = tuple(t.value for t in PaymentMethodType)


class ValidationResult(NamedTuple):
    """Outcome of a validation; ``error`` is set only when invalid."""

    valid: bool
    error: str | None = None


def validate_payment_method(
    data: Mapping[str, Any], is_create: bool = True
) -> ValidationResult:
    """Check a PaymentMethod document against the variant rules.

    Args:
        data: Flat document keyed by wire names (``@type``, ``cardNumber``...)
        is_create: Whether ``name`` and ``@type`` are mandatory

    Returns:
        The first failure found, or a valid result.
    """
    name = data.get("name")
    payment_type = data.get("@type")

    if is_create and (not name or not payment_type):
        return ValidationResult(False, "name and @type are required")

    # Present but blank on update: the patch cleared it
    if not is_create and any(
        key in data and not data[key] for key in ("name", "@type")
    ):
        return ValidationResult(False, "name and @type cannot be empty")

    if not payment_type:
        return ValidationResult(True)

    if payment_type not in VALID_TYPES:
        return ValidationResult(
            False, f"Invalid @type. Must be one of: {', '.join(VALID_TYPES)}"
        )

    variant = PaymentMethodType(payment_type)
    missing = [field for field in required_fields_for(variant) if not data.get(field)]
    if missing:
        return ValidationResult(
            False,
            f"Required fields for {variant_label(variant)} missing: {', '.join(missing)}",
        )

    return ValidationResult(True)


def merge_for_update(
    existing: Mapping[str, Any], patch: Mapping[str, Any]
) -> dict[str, Any]:
    """Overlay patch fields on the stored document."""
    return {**existing, **patch}
