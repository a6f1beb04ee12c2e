"""
Customer model and its embedded postal address.
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import Column, Integer, String, Index
from sqlalchemy.orm import composite

from ordermanagement.models.base import AggregateRoot, Base, TimestampMixin


@dataclass(frozen=True)
class Address:
    """Postal address value object, stored as columns of ``customers``."""

    street: str
    city: str
    postal_code: str
    country: str

    def __post_init__(self):
        for name in ("street", "city", "postal_code", "country"):
            if getattr(self, name) is None:
                raise TypeError(f"{name.replace('_', ' ').capitalize()} cannot be None")

    def __composite_values__(self):
        return self.street, self.city, self.postal_code, self.country


class Customer(Base, TimestampMixin, AggregateRoot):
    """
    Customer who places orders.

    Orders reference customers by id only.

    Attributes:
        id: Generated integer primary key
        first_name / last_name: Customer name
        email: Contact email (unique)
        address: Embedded postal address
    """

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True)

    street = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)
    postal_code = Column("postal_code", String(20), nullable=False)
    country = Column(String(100), nullable=False)

    address = composite(Address, street, city, postal_code, country)

    __table_args__ = (
        Index("idx_customer_email", "email"),
    )

    def __init__(
        self,
        first_name: str,
        last_name: str,
        email: str,
        address: Address,
        id: Optional[int] = None,
    ):
        if first_name is None or last_name is None or email is None:
            raise TypeError("Customer name and email are required")
        if address is None:
            raise TypeError("Address cannot be None")

        super().__init__()
        self.id = id
        self.first_name = first_name
        self.last_name = last_name
        self.email = email
        self.address = address

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"Customer(id={self.id!r}, email={self.email!r})"
