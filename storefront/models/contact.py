# storefront/models/contact.py
import uuid
from datetime import datetime, timezone

from pydantic import field_serializer
from sqlmodel import Field

from storefront.models.base import CamelModel, iso_millis


class ContactMessage(CamelModel):
    """Message left through the contact form (messages.json)."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str
    email: str
    message: str
    submitted_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    @field_serializer("submitted_at", when_used="json")
    def _submitted_at_millis(self, value: datetime) -> str:
        return iso_millis(value)
