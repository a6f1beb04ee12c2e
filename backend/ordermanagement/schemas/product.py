"""
Pydantic schemas for the product catalog.
"""

from decimal import Decimal
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from ordermanagement.models.product import Product
from ordermanagement.schemas.common import CamelModel, IdString, MoneyAmount


class CreateProductRequest(CamelModel):
    """
    Request body for adding a product to the catalog.

    Attributes:
        name: Product name (not blank)
        description: Free text description (optional)
        price: Unit price in EUR, greater than zero
        stock_quantity: Units in stock, zero or more
    """
    name: str = Field(min_length=1, max_length=255, description="Product name")
    description: Optional[str] = Field(default=None, description="Product description")
    price: Decimal = Field(gt=0, decimal_places=2, description="Unit price in EUR")
    stock_quantity: int = Field(ge=0, description="Units in stock")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Product name cannot be blank")
        return v.strip()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Laptop",
                "description": "High-performance laptop for professionals",
                "price": 1299.99,
                "stockQuantity": 50,
            }
        }
    )


class ProductResponse(CamelModel):
    product_id: IdString
    name: str
    description: Optional[str] = None
    price: MoneyAmount
    currency: str
    stock_quantity: int

    @classmethod
    def from_domain(cls, product: Product) -> "ProductResponse":
        return cls(
            product_id=product.id,
            name=product.name,
            description=product.description,
            price=product.price.amount,
            currency=product.price.currency,
            stock_quantity=product.stock_quantity,
        )
