"""Listener (hub) models for event subscribers."""

from pydantic import BaseModel, ConfigDict, Field


class ListenerCreate(BaseModel):
    """Body of ``POST /hub``.

    ``callback`` is optional at the schema level so a missing callback is
    reported by the service as a validation error rather than a 422.
    """

    model_config = ConfigDict(extra="ignore")

    callback: str | None = Field(
        default=None,
        description="URL events are delivered to",
        examples=["https://client.example.com/listener/paymentMethod"],
    )
    query: str | None = Field(
        default=None,
        description="Subscription filter (stored, not applied to dispatch)",
    )


class Listener(BaseModel):
    """A registered listener."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    callback: str
    query: str | None = None
    created_at: str | None = Field(default=None, alias="createdAt")


class ListenerCreated(BaseModel):
    """Response of ``POST /hub``."""

    id: str
    callback: str
