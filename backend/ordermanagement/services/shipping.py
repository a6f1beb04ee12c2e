"""
Shipping carrier integration (simulated).

Stands in for a carrier API such as DHL or UPS and hands out tracking numbers.
"""

import asyncio
import uuid
from typing import Optional

from ordermanagement.core.config import Settings, settings as default_settings
from ordermanagement.models.order import Order


class ShippingService:
    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings

    async def create_shipment(self, order: Order) -> str:
        """
        Register a shipment for ``order`` with the carrier.

        Returns:
            Tracking number of the form ``TRACK-1A2B3C4D``
        """
        if self.config.shipping_latency_seconds:
            await asyncio.sleep(self.config.shipping_latency_seconds)
        return "TRACK-" + uuid.uuid4().hex[:8].upper()
