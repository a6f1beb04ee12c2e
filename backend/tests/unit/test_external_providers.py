"""
Unit tests for the simulated payment and shipping providers.
"""

import random
import re

import pytest

from ordermanagement.core.config import Settings
from ordermanagement.models.money import Money
from ordermanagement.models.order import Order, OrderItem
from ordermanagement.services.payment import PaymentService
from ordermanagement.services.shipping import ShippingService


def make_settings(**overrides) -> Settings:
    values = {
        "environment": "development",
        "payment_latency_seconds": 0,
        "shipping_latency_seconds": 0,
    }
    values.update(overrides)
    return Settings(**values)


class TestPaymentService:
    @pytest.mark.anyio
    async def test_test_profile_always_succeeds(self):
        service = PaymentService(make_settings(environment="test", payment_failure_rate=1.0))

        assert await service.process_payment(Money.euro(10)) is True

    @pytest.mark.anyio
    async def test_declines_at_failure_rate_one(self):
        service = PaymentService(make_settings(payment_failure_rate=1.0))

        assert await service.process_payment(Money.euro(10)) is False

    @pytest.mark.anyio
    async def test_accepts_at_failure_rate_zero(self):
        service = PaymentService(make_settings(payment_failure_rate=0.0))

        assert await service.process_payment(Money.euro(10)) is True

    @pytest.mark.anyio
    async def test_failure_rate_is_roughly_honoured(self):
        """
        Test the decline share with a seeded generator.

        Arrange: 5% failure rate, deterministic RNG
        Act: Charge 1000 times
        Assert: Declines stay well inside 1%..10%
        """
        # Arrange
        service = PaymentService(make_settings(payment_failure_rate=0.05), rng=random.Random(1234))

        # Act
        results = [await service.process_payment(Money.euro(1)) for _ in range(1000)]

        # Assert
        declined = results.count(False)
        assert 10 <= declined <= 100


class TestShippingService:
    @pytest.mark.anyio
    async def test_tracking_number_format(self):
        order = Order(
            customer_id=1,
            items=[OrderItem(product_id=1, product_name="Laptop", unit_price=Money.euro(1), quantity=1)],
        )
        service = ShippingService(make_settings())

        tracking_numbers = {await service.create_shipment(order) for _ in range(5)}

        assert len(tracking_numbers) == 5
        for tracking in tracking_numbers:
            assert re.fullmatch(r"TRACK-[0-9A-F]{8}", tracking)
