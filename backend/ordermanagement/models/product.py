"""
Product model for the catalog.

A product is its own aggregate: orders reference it by id only and take a
snapshot of its name and price when an order item is created.
"""

from typing import Optional

from sqlalchemy import Column, Integer, Numeric, String, Text, Index

from ordermanagement.models.base import AggregateRoot, Base, TimestampMixin
from ordermanagement.models.exceptions import InsufficientStockError
from ordermanagement.models.money import Money


class Product(Base, TimestampMixin, AggregateRoot):
    """
    Catalog product with its current stock level.

    Attributes:
        id: Generated integer primary key
        name: Product name (not blank)
        description: Optional long description
        price_amount / price_currency: Persisted parts of ``price``
        stock_quantity: Units available for new orders (never negative)
    """

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(
        String(255),
        nullable=False,
        doc="Product name"
    )

    description = Column(
        Text,
        nullable=True,
        doc="Detailed description of the product"
    )

    price_amount = Column(
        "price",
        Numeric(10, 2),
        nullable=False,
        doc="Unit price amount"
    )

    price_currency = Column(
        "currency",
        String(3),
        nullable=False,
        default="EUR",
        doc="ISO 4217 currency code of the price"
    )

    stock_quantity = Column(
        Integer,
        nullable=False,
        default=0,
        doc="Units in stock"
    )

    __table_args__ = (
        Index("idx_product_name", "name"),
    )

    def __init__(
        self,
        name: str,
        description: Optional[str],
        price: Money,
        stock_quantity: int,
        id: Optional[int] = None,
    ):
        if name is None or price is None or stock_quantity is None:
            raise TypeError("Product name, price and stock quantity are required")
        if not name.strip():
            raise ValueError("Product name cannot be blank")
        if stock_quantity < 0:
            raise ValueError("Stock quantity cannot be negative")

        super().__init__()
        self.id = id
        self.name = name
        self.description = description
        self.price = price
        self.stock_quantity = stock_quantity

    @property
    def price(self) -> Money:
        return Money(self.price_amount, self.price_currency)

    @price.setter
    def price(self, value: Money) -> None:
        self.price_amount = value.amount
        self.price_currency = value.currency

    def is_available(self, quantity: int) -> bool:
        return self.stock_quantity >= quantity

    def reduce_stock(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValueError("Quantity must be positive")
        if not self.is_available(quantity):
            raise InsufficientStockError(self.name, quantity, self.stock_quantity)
        self.stock_quantity -= quantity

    def increase_stock(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValueError("Quantity must be positive")
        self.stock_quantity += quantity

    def __repr__(self) -> str:
        return f"Product(id={self.id!r}, name={self.name!r}, stock_quantity={self.stock_quantity!r})"
