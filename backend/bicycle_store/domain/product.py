"""
Product Domain Model

Represents a product in the bicycle store catalog.
"""
from pydantic import Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from bicycle_store.domain.customer import CamelModel


class Product(CamelModel):
    """
    Product domain model - represents a product in our catalog

    Fields:
        id: Internal product ID (primary key)
        name: Product name
        description: Product description (optional)
        category: Product category (bikes, parts, accessories, ...)
        price: Sale price
        stock: Units in stock
        is_active: Whether product is active in catalog
        created_at: When product was created
        updated_at: When product was last updated
    """

    id: int = Field(..., description="Internal product ID")
    name: str = Field(..., description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    category: Optional[str] = Field(None, description="Product category")

    price: Decimal = Field(..., description="Sale price", ge=0)
    stock: int = Field(0, description="Units in stock")

    is_active: bool = Field(True, description="Whether product is active")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    @property
    def is_out_of_stock(self) -> bool:
        """Check if product has no stock left"""
        return self.stock <= 0

    def to_dict(self) -> dict:
        """Convert to camelCase dictionary with Decimal to float conversion"""
        data = self.model_dump(by_alias=True)
        data["price"] = float(self.price)
        for field in ("createdAt", "updatedAt"):
            if data.get(field) is not None:
                data[field] = data[field].isoformat()
        return data
