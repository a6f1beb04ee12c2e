"""
Domain event handlers.

Handlers run after the transaction that raised their event has committed,
each in a session of its own.
"""

import logging
from typing import Optional

from ordermanagement.core.config import Settings, settings as default_settings
from ordermanagement.core.database import async_session_maker
from ordermanagement.models.events import OrderPaid
from ordermanagement.repositories.order import OrderRepository
from ordermanagement.repositories.product import ProductRepository
from ordermanagement.services.event_publisher import EventPublisher
from ordermanagement.services.order import OrderService
from ordermanagement.services.payment import PaymentService
from ordermanagement.services.shipping import ShippingService

logger = logging.getLogger(__name__)


class OrderPaidEventHandler:
    """Ships an order as soon as its payment has gone through."""

    def __init__(self, order_service: OrderService):
        self.order_service = order_service

    async def handle_order_paid(self, event: OrderPaid) -> None:
        logger.info(
            "Handling OrderPaid, shipping order",
            extra={"order_id": event.order_id, "event_type": event.event_type}
        )
        await self.order_service.ship_order(event.order_id)


async def ship_paid_order(event: OrderPaid) -> None:
    """
    Run OrderPaidEventHandler in a fresh unit of work.

    Commits on success and dispatches the events the shipment raised.
    Failures roll back and are logged; the order then stays PAID and can be
    shipped manually.
    """
    publisher = build_event_publisher()
    async with async_session_maker() as session:
        service = OrderService(
            order_repository=OrderRepository(session),
            product_repository=ProductRepository(session),
            payment_service=PaymentService(),
            shipping_service=ShippingService(),
            event_publisher=publisher,
        )
        try:
            await OrderPaidEventHandler(service).handle_order_paid(event)
            await session.commit()
        except Exception:
            await session.rollback()
            publisher.discard()
            logger.error(
                f"Automatic shipping failed for order {event.order_id}",
                extra={"order_id": event.order_id, "event_type": event.event_type},
                exc_info=True
            )
            return

    await publisher.dispatch()


def register_event_handlers(publisher: EventPublisher, config: Optional[Settings] = None) -> EventPublisher:
    """Subscribe the application's event handlers on ``publisher``."""
    config = config or default_settings
    if config.auto_ship_on_payment:
        publisher.subscribe(OrderPaid, ship_paid_order)
    return publisher


def build_event_publisher(config: Optional[Settings] = None) -> EventPublisher:
    """Create a publisher for one unit of work with all handlers registered."""
    return register_event_handlers(EventPublisher(), config)
