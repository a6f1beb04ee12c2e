"""
Domain events for the order aggregate.

Events are immutable records of something that happened in the domain.
Each carries a generated ``event_id`` and the ``occurred_on`` timestamp;
both are keyword-only so the payload fields can be passed positionally.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from ordermanagement.models.base import utc_now


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Base type for all domain events."""

    event_id: uuid.UUID = field(default_factory=uuid.uuid4)
    occurred_on: datetime = field(default_factory=utc_now)

    @property
    def event_type(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class OrderCreated(DomainEvent):
    """A new order was placed by a customer."""

    order_id: int
    customer_id: int


@dataclass(frozen=True)
class OrderConfirmed(DomainEvent):
    """An order moved from PENDING to CONFIRMED and its stock was reserved."""

    order_id: int


@dataclass(frozen=True)
class OrderPaid(DomainEvent):
    """An order was paid. Triggers automatic shipping."""

    order_id: int


@dataclass(frozen=True)
class OrderShipped(DomainEvent):
    """An order moved from PAID to SHIPPED."""

    order_id: int
