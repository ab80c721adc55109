"""PaymentMethod models.

A PaymentMethod is a common envelope (id, name, status, statusDate, @type)
plus a detail variant selected by ``@type``. The wire and stored format is
flat, as in TMF670, so the variants only describe which detail fields a type
requires; they are not nested in the document.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import PaymentMethodStatus, PaymentMethodType

BASE_TYPE = "PaymentMethod"


class BankCardDetails(BaseModel):
    """Detail fields required for ``BankCard``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    card_number: str
    brand: str
    expiration_date: str
    name_on_card: str


class BankAccountDetails(BaseModel):
    """Detail fields required for ``BankAccountTransfer`` and ``BankAccountDebit``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    account_number: str
    owner: str
    bank: str


class DigitalWalletDetails(BaseModel):
    """Detail fields required for ``DigitalWallet``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    service: str
    wallet_id: str


class CheckDetails(BaseModel):
    """Detail fields required for ``Check``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    check_id: str
    drawer: str
    payee: str
    signed_date: str
    bank: str


# Variant table: types mapped to None carry no extra required fields
PAYMENT_METHOD_VARIANTS: dict[PaymentMethodType, type[BaseModel] | None] = {
    PaymentMethodType.BANK_CARD: BankCardDetails,
    PaymentMethodType.BANK_ACCOUNT_TRANSFER: BankAccountDetails,
    PaymentMethodType.BANK_ACCOUNT_DEBIT: BankAccountDetails,
    PaymentMethodType.DIGITAL_WALLET: DigitalWalletDetails,
    PaymentMethodType.CHECK: CheckDetails,
    PaymentMethodType.VOUCHER: None,
    PaymentMethodType.CASH: None,
    PaymentMethodType.BUCKET_PAYMENT_METHOD: None,
    PaymentMethodType.ACCOUNT_PAYMENT_METHOD: None,
    PaymentMethodType.LOYALTY_PAYMENT_METHOD: None,
}


def required_fields_for(payment_type: PaymentMethodType) -> tuple[str, ...]:
    """Wire names of the detail fields a variant requires."""
    variant = PAYMENT_METHOD_VARIANTS[payment_type]
    if variant is None:
        return ()
    return tuple(
        field.alias or name for name, field in variant.model_fields.items()
    )


def variant_label(payment_type: PaymentMethodType) -> str:
    """Name used in error messages for a variant.

    Types sharing a detail model are reported together, e.g.
    ``BankAccountTransfer/BankAccountDebit``.
    """
    variant = PAYMENT_METHOD_VARIANTS[payment_type]
    if variant is None:
        return payment_type.value
    return "/".join(
        t.value for t, model in PAYMENT_METHOD_VARIANTS.items() if model is variant
    )


class PaymentMethodFields(BaseModel):
    """Client-writable PaymentMethod attributes.

    Everything is optional here: required fields depend on ``@type`` and
    on whether the request creates or patches, and are enforced by the
    validation engine so failures surface as 400 with a readable message.
    ``@type`` is a plain string for the same reason.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    type: str | None = Field(default=None, alias="@type", examples=["BankCard"])
    schema_location: str | None = Field(default=None, alias="@schemaLocation")
    name: str | None = Field(default=None, examples=["Corporate Visa"])
    description: str | None = None
    status: PaymentMethodStatus | None = None

    # Card
    card_number: str | None = None
    brand: str | None = None
    expiration_date: str | None = None
    name_on_card: str | None = None
    # Bank account
    account_number: str | None = None
    owner: str | None = None
    bank: str | None = None
    # Digital wallet
    service: str | None = None
    wallet_id: str | None = None
    # Check
    check_id: str | None = None
    drawer: str | None = None
    payee: str | None = None
    signed_date: str | None = None

    def to_document(self) -> dict[str, object]:
        """Provided attributes keyed by wire name; nulls count as not provided."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PaymentMethodCreate(PaymentMethodFields):
    """Body of ``POST /paymentMethod``."""


class PaymentMethodUpdate(PaymentMethodFields):
    """Body of ``PATCH /paymentMethod/{id}``. Only include fields to change."""


class PaymentMethod(PaymentMethodFields):
    """A stored PaymentMethod as returned to clients.

    ``id`` and ``href`` are derived from the document key at serialization
    time. Envelope fields stay optional so projected documents parse too.
    """

    id: str
    href: str | None = None
    base_type: str | None = Field(default=None, alias="@baseType")
    status_date: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_item(cls, item: dict[str, object], base_path: str) -> "PaymentMethod":
        """Build the resource from a stored document."""
        payment_method = cls.model_validate(item)
        payment_method.href = f"{base_path}/paymentMethod/{payment_method.id}"
        return payment_method

    def to_response(self, fields: list[str] | None = None) -> dict[str, object]:
        """Serialize for the response body.

        Args:
            fields: Optional projection; ``id`` is always kept and ``href``
                only when requested.

        Returns:
            JSON-compatible dict keyed by wire names.
        """
        body = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        if fields is None:
            return body
        keep = {"id", *fields}
        return {key: value for key, value in body.items() if key in keep}
