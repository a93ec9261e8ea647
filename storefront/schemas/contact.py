# storefront/schemas/contact.py
from typing import Any, Literal

from sqlmodel import SQLModel

from storefront.core.coerce import clean_text

NAME_MAX = 120
EMAIL_MAX = 160
MESSAGE_MAX = 800


class ContactCreate(SQLModel):
    """
    Sanitized contact form submission.

    Blank or non-string fields come out as None; the service decides
    whether that is acceptable.
    """

    name: str | None = None
    email: str | None = None
    message: str | None = None

    @classmethod
    def from_raw(cls, body: Any) -> "ContactCreate":
        if not isinstance(body, dict):
            body = {}
        return cls(
            name=clean_text(body.get("name"), NAME_MAX),
            email=clean_text(body.get("email"), EMAIL_MAX),
            message=clean_text(body.get("message"), MESSAGE_MAX),
        )

    @property
    def is_complete(self) -> bool:
        return bool(self.name and self.email and self.message)


class ContactAck(SQLModel):
    success: Literal[True] = True
