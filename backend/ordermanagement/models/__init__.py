"""
SQLAlchemy ORM models and domain value objects for order management.

Import models from this module to ensure they're registered with SQLAlchemy.
"""

from ordermanagement.models.base import Base, TimestampMixin, AggregateRoot
from ordermanagement.models.money import Money
from ordermanagement.models.customer import Address, Customer
from ordermanagement.models.product import Product
from ordermanagement.models.order import Order, OrderItem, OrderStatus
from ordermanagement.models.events import (
    DomainEvent,
    OrderCreated,
    OrderConfirmed,
    OrderPaid,
    OrderShipped,
)

# Export all models
__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "AggregateRoot",
    # Value objects
    "Money",
    "Address",
    # Models
    "Customer",
    "Product",
    "Order",
    "OrderItem",
    "OrderStatus",
    # Events
    "DomainEvent",
    "OrderCreated",
    "OrderConfirmed",
    "OrderPaid",
    "OrderShipped",
]
