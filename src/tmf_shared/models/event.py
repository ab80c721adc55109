"""Notification event model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .enums import EventType


class NotificationEvent(BaseModel):
    """One event record sent to one listener.

    Events are built per listener and never persisted.
    """

    model_config = ConfigDict(populate_by_name=True)

    event_id: str = Field(..., alias="eventId")
    event_time: str = Field(..., alias="eventTime")
    event_type: EventType = Field(..., alias="eventType")
    event: dict[str, Any] = Field(
        ..., description="Payload, keyed by resource name: {'paymentMethod': {...}}"
    )

    def to_payload(self) -> dict[str, Any]:
        """JSON-compatible body keyed by wire names."""
        return self.model_dump(mode="json", by_alias=True)
