"""
Order application service.

Coordinates the Order aggregate with the product catalog, the payment and
shipping providers, and the event publisher. Every operation works inside
the caller's unit of work: changes are flushed through the repositories
but never committed here.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ordermanagement.core.logging_config import log_with_context
from ordermanagement.models.exceptions import (
    InsufficientStockError,
    InvalidOrderStateError,
    OrderNotFoundError,
    PaymentFailedError,
    ProductNotFoundError,
)
from ordermanagement.models.order import Order, OrderItem, OrderStatus
from ordermanagement.repositories.order import OrderRepository
from ordermanagement.repositories.product import ProductRepository
from ordermanagement.services.event_publisher import EventPublisher
from ordermanagement.services.payment import PaymentService
from ordermanagement.services.shipping import ShippingService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderLine:
    """Requested product and quantity for a new order."""

    product_id: int
    quantity: int


class OrderService:
    """
    Use cases of the order lifecycle.

    Stock is reserved when an order is confirmed and handed back when a
    confirmed or paid order is cancelled, or when a delivered order is
    returned.
    """

    def __init__(
        self,
        order_repository: OrderRepository,
        product_repository: ProductRepository,
        payment_service: PaymentService,
        shipping_service: ShippingService,
        event_publisher: EventPublisher,
    ):
        self.orders = order_repository
        self.products = product_repository
        self.payment = payment_service
        self.shipping = shipping_service
        self.publisher = event_publisher

    async def create_order(self, customer_id: int, items: Iterable[OrderLine]) -> Order:
        """
        Place a new PENDING order.

        Args:
            customer_id: Ordering customer
            items: Requested lines; product name and price are snapshotted

        Returns:
            Persisted order with id

        Raises:
            ProductNotFoundError: A line references an unknown product
            InsufficientStockError: A line asks for more than is in stock
        """
        order_items: List[OrderItem] = []
        for line in items:
            product = await self.products.get(line.product_id)
            if product is None:
                raise ProductNotFoundError(line.product_id)
            if not product.is_available(line.quantity):
                raise InsufficientStockError(product.name, line.quantity, product.stock_quantity)
            order_items.append(
                OrderItem(
                    product_id=product.id,
                    product_name=product.name,
                    unit_price=product.price,
                    quantity=line.quantity,
                )
            )

        order = Order(customer_id=customer_id, items=order_items)
        order = await self.orders.save(order)
        order.register_creation_event()
        self._publish_events(order)

        log_with_context(
            logger, "info",
            f"Order created with {len(order_items)} items, total {order.total_amount}",
            order_id=order.id,
            customer_id=customer_id,
        )
        return order

    async def confirm_order(self, order_id: int) -> Order:
        """
        Confirm a PENDING order and reserve stock for its items.

        Raises:
            OrderNotFoundError: Unknown order
            InvalidOrderStateError: Order is not PENDING
            InsufficientStockError: Stock ran out since the order was placed
        """
        order = await self._load(order_id)
        self._require_status(order, "confirm", OrderStatus.PENDING)

        for item in order.items:
            product = await self.products.get_for_update(item.product_id)
            if product is None:
                raise ProductNotFoundError(item.product_id)
            product.reduce_stock(item.quantity)
            await self.products.save(product)

        order.confirm()
        return await self._commit_transition(order, "Order confirmed")

    async def process_payment(self, order_id: int) -> Order:
        """
        Charge a CONFIRMED order and mark it as paid.

        Raises:
            OrderNotFoundError: Unknown order
            InvalidOrderStateError: Order is not CONFIRMED
            PaymentFailedError: The provider declined; the order is unchanged
        """
        order = await self._load(order_id)
        self._require_status(order, "pay", OrderStatus.CONFIRMED)

        if not await self.payment.process_payment(order.total_amount):
            log_with_context(logger, "warning", "Payment failed", order_id=order_id)
            raise PaymentFailedError(order_id)

        order.mark_as_paid()
        return await self._commit_transition(order, "Order paid")

    async def ship_order(self, order_id: int) -> Order:
        order = await self._load(order_id)
        self._require_status(order, "ship", OrderStatus.PAID)

        tracking_number = await self.shipping.create_shipment(order)
        order.ship()
        return await self._commit_transition(
            order, f"Order shipped with tracking number {tracking_number}"
        )

    async def deliver_order(self, order_id: int) -> Order:
        order = await self._load(order_id)
        order.deliver()
        return await self._commit_transition(order, "Order delivered")

    async def cancel_order(self, order_id: int) -> Order:
        """
        Cancel an order that has not shipped yet.

        Reserved stock (CONFIRMED or PAID orders) goes back to the catalog.
        """
        order = await self._load(order_id)
        was_reserved = order.has_reserved_stock
        order.cancel()

        if was_reserved:
            await self._restock(order)

        return await self._commit_transition(order, "Order cancelled")

    async def return_order(self, order_id: int) -> Order:
        order = await self._load(order_id)
        order.return_order()
        await self._restock(order)
        return await self._commit_transition(order, "Order returned")

    async def find_by_id(self, order_id: int) -> Optional[Order]:
        return await self.orders.get(order_id)

    async def find_by_customer_id(self, customer_id: int) -> List[Order]:
        return await self.orders.find_by_customer_id(customer_id)

    async def find_by_status(self, status: OrderStatus) -> List[Order]:
        return await self.orders.find_by_status(status)

    async def find_all(self) -> List[Order]:
        return await self.orders.list_all()

    async def _load(self, order_id: int) -> Order:
        order = await self.orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    @staticmethod
    def _require_status(order: Order, action: str, expected: OrderStatus) -> None:
        if order.status != expected:
            raise InvalidOrderStateError(action, order.status)

    async def _restock(self, order: Order) -> None:
        for item in order.items:
            product = await self.products.get_for_update(item.product_id)
            if product is None:
                # product was removed from the catalog after the order
                logger.warning(
                    f"Cannot restock missing product {item.product_id}",
                    extra={"order_id": order.id, "product_id": item.product_id}
                )
                continue
            product.increase_stock(item.quantity)
            await self.products.save(product)

    async def _commit_transition(self, order: Order, message: str) -> Order:
        order = await self.orders.save(order)
        self._publish_events(order)
        log_with_context(
            logger, "info", message,
            order_id=order.id,
            status=order.status.value,
        )
        return order

    def _publish_events(self, order: Order) -> None:
        for event in order.domain_events:
            self.publisher.publish(event)
        order.clear_events()
