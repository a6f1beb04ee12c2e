"""
Payment provider integration (simulated).

Stands in for a real provider such as Stripe or PayPal: waits for a
configurable round trip and declines a configurable share of charges.
Under the ``test`` profile every charge succeeds so test runs are not flaky.
"""

import asyncio
import logging
import random
from typing import Optional

from ordermanagement.core.config import Settings, settings as default_settings
from ordermanagement.models.money import Money

logger = logging.getLogger(__name__)


class PaymentService:
    def __init__(self, config: Optional[Settings] = None, rng: Optional[random.Random] = None):
        self.config = config or default_settings
        self._rng = rng or random.Random()

    async def process_payment(self, amount: Money) -> bool:
        """
        Charge ``amount``.

        Returns:
            True if the provider accepted the charge, False if it declined
        """
        if self.config.is_test:
            return True

        await asyncio.sleep(self.config.payment_latency_seconds)

        accepted = self._rng.random() >= self.config.payment_failure_rate
        if not accepted:
            logger.warning(f"Payment declined for {amount}")
        return accepted
