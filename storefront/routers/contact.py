# storefront/routers/contact.py
from typing import Any

from fastapi import APIRouter, Body, Depends

from storefront.database import JsonCollection, get_messages_collection
from storefront.repositories.contact_repo import ContactRepository
from storefront.schemas.common import ErrorResponse
from storefront.schemas.contact import ContactAck
from storefront.services.contact_service import ContactService

router = APIRouter(prefix="/contact", tags=["Contact"])

repo = ContactRepository()
service = ContactService(repo)


@router.post("", response_model=ContactAck, responses={400: {"model": ErrorResponse}})
def send_message(
    body: Any = Body(default=None),
    messages: JsonCollection = Depends(get_messages_collection),
):
    """
    Store a contact form message.

    Requires non-blank name, email and message.
    """
    return service.submit(body, messages)
