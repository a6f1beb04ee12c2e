"""
Tests for the OrderPaid event handler and handler registration.
"""

import logging

import pytest
from unittest.mock import AsyncMock

from ordermanagement.core.config import Settings
from ordermanagement.core.database import async_session_maker
from ordermanagement.models.events import OrderPaid
from ordermanagement.models.money import Money
from ordermanagement.models.order import Order, OrderItem, OrderStatus
from ordermanagement.services.event_handlers import (
    OrderPaidEventHandler,
    build_event_publisher,
    register_event_handlers,
    ship_paid_order,
)
from ordermanagement.services.event_publisher import EventPublisher


async def persist_order(status: OrderStatus) -> int:
    async with async_session_maker() as session:
        order = Order(
            customer_id=1,
            items=[OrderItem(product_id=1, product_name="Laptop", unit_price=Money.euro("1299.99"), quantity=1)],
        )
        order.status = status
        session.add(order)
        await session.commit()
        return order.id


async def load_status(order_id: int) -> OrderStatus:
    async with async_session_maker() as session:
        order = await session.get(Order, order_id)
        return order.status


class TestOrderPaidEventHandler:
    @pytest.mark.anyio
    async def test_handler_ships_the_paid_order(self):
        order_service = AsyncMock()
        handler = OrderPaidEventHandler(order_service)

        await handler.handle_order_paid(OrderPaid(order_id=5))

        order_service.ship_order.assert_awaited_once_with(5)


class TestShipPaidOrder:
    """Tests for the handler running in its own unit of work."""

    @pytest.mark.anyio
    async def test_ships_and_commits(self, db_engine):
        """
        Test automatic shipping after payment.

        Arrange: A PAID order committed to the database
        Act: Deliver OrderPaid to ship_paid_order
        Assert: The order is SHIPPED in a fresh session
        """
        # Arrange
        order_id = await persist_order(OrderStatus.PAID)

        # Act
        await ship_paid_order(OrderPaid(order_id=order_id))

        # Assert
        assert await load_status(order_id) == OrderStatus.SHIPPED

    @pytest.mark.anyio
    async def test_failure_is_logged_not_raised(self, db_engine, caplog):
        order_id = await persist_order(OrderStatus.CONFIRMED)

        with caplog.at_level(logging.ERROR, logger="ordermanagement.services.event_handlers"):
            await ship_paid_order(OrderPaid(order_id=order_id))

        assert await load_status(order_id) == OrderStatus.CONFIRMED
        assert any("Automatic shipping failed" in r.getMessage() for r in caplog.records)

    @pytest.mark.anyio
    async def test_unknown_order_is_logged_not_raised(self, db_engine, caplog):
        with caplog.at_level(logging.ERROR, logger="ordermanagement.services.event_handlers"):
            await ship_paid_order(OrderPaid(order_id=999))

        assert any("999" in r.getMessage() for r in caplog.records)


class TestRegistration:
    def test_auto_ship_registered_by_default(self):
        publisher = build_event_publisher(Settings(auto_ship_on_payment=True))

        assert ship_paid_order in publisher._handlers_for(OrderPaid(order_id=1))

    def test_auto_ship_can_be_disabled(self):
        publisher = register_event_handlers(EventPublisher(), Settings(auto_ship_on_payment=False))

        assert publisher._handlers_for(OrderPaid(order_id=1)) == []
