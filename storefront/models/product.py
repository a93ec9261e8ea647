# storefront/models/product.py
from pydantic import ConfigDict, field_validator
from sqlmodel import Field

from storefront.models.base import CamelModel


class Product(CamelModel):
    """
    Catalog entry, as stored in products.json.

    The catalog file is the price authority for every order.
    Unknown keys in the file are kept and passed through to clients.
    """

    model_config = ConfigDict(extra="allow")

    id: int = Field(gt=0, description="Catalog identifier")
    name: str = Field(description="Display name of the dish")
    description: str | None = Field(default=None, description="Short description")
    price: float = Field(ge=0, description="Unit price (EUR)")
    image: str | None = Field(default=None, description="Image URI")

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, v):
        # products.json may store prices as strings ("12.50")
        if isinstance(v, str):
            return float(v.strip())
        return v
