# storefront/repositories/contact_repo.py
from storefront.database import JsonCollection
from storefront.models.contact import ContactMessage


class ContactRepository:
    """Append-only access to messages.json."""

    def create(self, collection: JsonCollection, message: ContactMessage) -> ContactMessage:
        collection.append(message.to_json())
        return message
