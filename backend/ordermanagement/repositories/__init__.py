"""
Repository layer for data access.

Provides data access abstractions following the Repository pattern,
isolating database access from business logic.
"""

from ordermanagement.repositories.customer import CustomerRepository
from ordermanagement.repositories.order import OrderRepository
from ordermanagement.repositories.product import ProductRepository

__all__ = [
    "CustomerRepository",
    "OrderRepository",
    "ProductRepository",
]
