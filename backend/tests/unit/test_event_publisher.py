"""
Unit tests for EventPublisher.

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

import pytest
from unittest.mock import AsyncMock

from ordermanagement.models.events import DomainEvent, OrderConfirmed, OrderCreated, OrderPaid
from ordermanagement.services.event_publisher import EventPublisher


class TestPublish:
    def test_publish_queues_without_delivering(self):
        # Arrange
        handler = AsyncMock()
        publisher = EventPublisher()
        publisher.subscribe(OrderPaid, handler)
        event = OrderPaid(order_id=1)

        # Act
        publisher.publish(event)

        # Assert
        assert publisher.pending == (event,)
        handler.assert_not_called()

    def test_discard_drops_queue(self):
        publisher = EventPublisher()
        publisher.publish(OrderPaid(order_id=1))
        publisher.publish(OrderConfirmed(order_id=1))

        dropped = publisher.discard()

        assert dropped == 2
        assert publisher.pending == ()


class TestDispatch:
    """Tests for post-commit delivery."""

    @pytest.mark.anyio
    async def test_dispatch_delivers_to_matching_handlers_in_order(self):
        """
        Test events reach only handlers subscribed to their type.

        Arrange: Handlers for OrderPaid and OrderConfirmed
        Act: Publish one of each and dispatch
        Assert: Each handler got its event; queue is empty
        """
        # Arrange
        received = []

        async def on_paid(event):
            received.append(("paid", event.order_id))

        async def on_confirmed(event):
            received.append(("confirmed", event.order_id))

        publisher = EventPublisher()
        publisher.subscribe(OrderPaid, on_paid)
        publisher.subscribe(OrderConfirmed, on_confirmed)
        publisher.publish(OrderConfirmed(order_id=1))
        publisher.publish(OrderPaid(order_id=1))
        publisher.publish(OrderCreated(order_id=2, customer_id=1))

        # Act
        delivered = await publisher.dispatch()

        # Assert
        assert received == [("confirmed", 1), ("paid", 1)]
        assert delivered == 2
        assert publisher.pending == ()

    @pytest.mark.anyio
    async def test_base_type_subscription_sees_all_events(self):
        handler = AsyncMock()
        publisher = EventPublisher({DomainEvent: [handler]})
        publisher.publish(OrderPaid(order_id=1))
        publisher.publish(OrderConfirmed(order_id=1))

        await publisher.dispatch()

        assert handler.await_count == 2

    @pytest.mark.anyio
    async def test_failing_handler_does_not_stop_others(self):
        # Arrange
        failing = AsyncMock(side_effect=RuntimeError("boom"))
        healthy = AsyncMock()
        publisher = EventPublisher()
        publisher.subscribe(OrderPaid, failing)
        publisher.subscribe(OrderPaid, healthy)
        event = OrderPaid(order_id=9)
        publisher.publish(event)

        # Act
        delivered = await publisher.dispatch()

        # Assert
        failing.assert_awaited_once_with(event)
        healthy.assert_awaited_once_with(event)
        assert delivered == 1

    @pytest.mark.anyio
    async def test_events_published_by_handlers_are_delivered(self):
        publisher = EventPublisher()
        confirmed_handler = AsyncMock()

        async def on_paid(event):
            publisher.publish(OrderConfirmed(order_id=event.order_id))

        publisher.subscribe(OrderPaid, on_paid)
        publisher.subscribe(OrderConfirmed, confirmed_handler)
        publisher.publish(OrderPaid(order_id=3))

        await publisher.dispatch()

        confirmed_handler.assert_awaited_once()

    @pytest.mark.anyio
    async def test_dispatch_with_nothing_queued(self):
        assert await EventPublisher().dispatch() == 0
