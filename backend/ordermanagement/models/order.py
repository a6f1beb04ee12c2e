"""
Order aggregate: Order, its OrderItems and the OrderStatus lifecycle.

Status flow:

    PENDING -> CONFIRMED -> PAID -> SHIPPED -> DELIVERED -> RETURNED
       |           |          |
       +-----------+----------+--> CANCELLED

Every transition is guarded; an illegal one raises InvalidOrderStateError
and leaves the order untouched.
"""

from datetime import timedelta
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional

from sqlalchemy import Column, Enum as SAEnum, ForeignKey, Integer, Numeric, String, Index
from sqlalchemy.orm import relationship

from ordermanagement.models.base import AggregateRoot, Base, TimestampMixin, utc_now
from ordermanagement.models.events import OrderConfirmed, OrderCreated, OrderPaid, OrderShipped
from ordermanagement.models.exceptions import InvalidOrderStateError
from ordermanagement.models.money import EURO, Money


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PAID = "PAID"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    RETURNED = "RETURNED"


# Statuses in which stock is reserved for the order's items
STOCK_RESERVED_STATUSES = frozenset({OrderStatus.CONFIRMED, OrderStatus.PAID})

_CANCELLABLE = frozenset({OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PAID})


class OrderItem(Base):
    """
    One line of an order.

    Product name and unit price are copied from the catalog when the line
    is created so later catalog changes do not alter placed orders.
    """

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(
        Integer,
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
    )
    product_id = Column(Integer, nullable=False)
    product_name = Column(String(255), nullable=False)
    unit_price_amount = Column("unit_price", Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default=EURO)
    quantity = Column(Integer, nullable=False)
    total_price_amount = Column("total_price", Numeric(10, 2), nullable=False)

    order = relationship("Order", back_populates="items")

    def __init__(
        self,
        product_id: int,
        product_name: str,
        unit_price: Money,
        quantity: int,
    ):
        if product_id is None:
            raise TypeError("Product ID cannot be None")
        if product_name is None:
            raise TypeError("Product name cannot be None")
        if unit_price is None:
            raise TypeError("Unit price cannot be None")
        if quantity is None or quantity <= 0:
            raise ValueError("Quantity must be positive")

        super().__init__()
        self.product_id = product_id
        self.product_name = product_name
        self.unit_price_amount = unit_price.amount
        self.currency = unit_price.currency
        self.quantity = quantity
        self.total_price_amount = unit_price.multiply(quantity).amount

    @property
    def unit_price(self) -> Money:
        return Money(self.unit_price_amount, self.currency)

    @property
    def total_price(self) -> Money:
        return Money(self.total_price_amount, self.currency)

    def __repr__(self) -> str:
        return (
            f"OrderItem(product_id={self.product_id!r}, "
            f"quantity={self.quantity!r}, unit_price={self.unit_price_amount!r})"
        )


class Order(Base, TimestampMixin, AggregateRoot):
    """
    Customer order and lifecycle state machine.

    Attributes:
        id: Generated integer primary key
        customer_id: Id of the ordering customer (reference by id)
        status: Current OrderStatus
        total_amount_value / currency: Persisted parts of ``total_amount``
        items: Order lines (loaded eagerly, deleted with the order)
    """

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, nullable=False)
    status = Column(
        SAEnum(OrderStatus, native_enum=False, length=20),
        nullable=False,
        default=OrderStatus.PENDING,
    )
    total_amount_value = Column("total_amount", Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default=EURO)

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="OrderItem.id",
    )

    __table_args__ = (
        Index("idx_order_customer", "customer_id"),
        Index("idx_order_status", "status"),
    )

    def __init__(
        self,
        customer_id: int,
        items: Iterable[OrderItem],
        id: Optional[int] = None,
    ):
        if customer_id is None:
            raise TypeError("Customer ID cannot be None")
        items = list(items or [])
        if not items:
            raise ValueError("Order must contain at least one item")

        super().__init__()
        total = items[0].total_price
        for item in items[1:]:
            total = total.add(item.total_price)

        now = utc_now()
        self.id = id
        self.customer_id = customer_id
        self.status = OrderStatus.PENDING
        self.items = items
        self.total_amount_value = total.amount
        self.currency = total.currency
        self.created_at = now
        self.updated_at = now

        if id is not None:
            self.register_creation_event()

    @property
    def total_amount(self) -> Money:
        return Money(
            self.total_amount_value if self.total_amount_value is not None else Decimal("0"),
            self.currency or EURO,
        )

    def register_creation_event(self) -> None:
        """Record OrderCreated once the order has an id."""
        if self.id is None:
            raise ValueError("Order must be persisted before its creation event is registered")
        self.register_event(OrderCreated(self.id, self.customer_id))

    def confirm(self) -> None:
        self._transition("confirm", {OrderStatus.PENDING}, OrderStatus.CONFIRMED)
        self.register_event(OrderConfirmed(self.id))

    def mark_as_paid(self) -> None:
        self._transition("pay", {OrderStatus.CONFIRMED}, OrderStatus.PAID)
        self.register_event(OrderPaid(self.id))

    def ship(self) -> None:
        self._transition("ship", {OrderStatus.PAID}, OrderStatus.SHIPPED)
        self.register_event(OrderShipped(self.id))

    def deliver(self) -> None:
        self._transition("deliver", {OrderStatus.SHIPPED}, OrderStatus.DELIVERED)

    def cancel(self) -> None:
        self._transition("cancel", _CANCELLABLE, OrderStatus.CANCELLED)

    def return_order(self) -> None:
        self._transition("return", {OrderStatus.DELIVERED}, OrderStatus.RETURNED)

    @property
    def has_reserved_stock(self) -> bool:
        return self.status in STOCK_RESERVED_STATUSES

    def _transition(self, action: str, allowed_from, target: OrderStatus) -> None:
        if self.status not in allowed_from:
            raise InvalidOrderStateError(action, self.status)
        self.status = target
        self._touch()

    def _touch(self) -> None:
        now = utc_now()
        # updated_at must move strictly past created_at even on coarse clocks
        if self.created_at is not None and now <= self.created_at:
            now = self.created_at + timedelta(microseconds=1)
        if self.updated_at is not None and now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now

    def __repr__(self) -> str:
        return f"Order(id={self.id!r}, customer_id={self.customer_id!r}, status={self.status!r})"
