# storefront/services/contact_service.py
import logging
from typing import Any

from fastapi import HTTPException, status

from storefront.database import JsonCollection
from storefront.models.contact import ContactMessage
from storefront.repositories.contact_repo import ContactRepository
from storefront.schemas.contact import ContactAck, ContactCreate

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Champs requis manquants."


class ContactService:
    """
    Business logic for the contact form.

    Rules:
      - name, email and message are required (after trimming)
      - name <= 120, email <= 160, message <= 800 characters
    """

    def __init__(self, repo: ContactRepository):
        self.repo = repo

    def submit(self, body: Any, messages: JsonCollection) -> ContactAck:
        payload = ContactCreate.from_raw(body)
        if not payload.is_complete:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=MISSING_FIELDS_MESSAGE,
            )

        entry = ContactMessage(
            name=payload.name,
            email=payload.email,
            message=payload.message,
        )
        self.repo.create(messages, entry)
        logger.info("Contact message %s received", entry.id)
        return ContactAck()
