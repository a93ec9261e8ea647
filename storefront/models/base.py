# storefront/models/base.py
from datetime import datetime, timezone

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel


def iso_millis(value: datetime) -> str:
    """UTC timestamp as `2024-05-01T12:30:00.123Z`."""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CamelModel(SQLModel):
    """
    Base for every record that crosses the wire or hits a JSON file.

    Attributes stay snake_case in Python; JSON keys are camelCase
    (`product_id` <-> `productId`). Both spellings are accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
