"""
Domain event publisher.

Collects the domain events raised during one unit of work and hands them
to subscribed handlers once that unit of work has committed:

1. Application services call ``publish(event)`` while the transaction is open
2. The API layer commits the session
3. ``dispatch()`` runs (as a FastAPI background task) and awaits every
   handler subscribed to each event's type, in publication order

Handlers never see events from a transaction that rolled back; the API
layer calls ``discard()`` instead of ``dispatch()`` in that case. A failing
handler is logged and skipped so it cannot affect the request that raised
the event or the other handlers.
"""

import logging
from typing import Awaitable, Callable, Dict, List, Optional, Type

from ordermanagement.models.events import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], Awaitable[None]]


class EventPublisher:
    """
    In-memory publisher scoped to a single unit of work.

    Attributes:
        pending: Events published but not yet dispatched (read-only view)
    """

    def __init__(self, handlers: Optional[Dict[Type[DomainEvent], List[EventHandler]]] = None):
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = {
            event_type: list(subscribers)
            for event_type, subscribers in (handlers or {}).items()
        }
        self._pending: List[DomainEvent] = []

    @property
    def pending(self) -> tuple:
        return tuple(self._pending)

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        Register an async handler for an event type.

        Handlers also receive events of subclasses of ``event_type``.
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def publish(self, event: DomainEvent) -> None:
        """
        Queue an event for dispatch after commit.

        Example:
            publisher.publish(OrderPaid(order.id))
        """
        self._pending.append(event)
        logger.info(
            "Domain event published",
            extra={
                "event_type": event.event_type,
                "event_id": str(event.event_id),
                "order_id": getattr(event, "order_id", None),
            }
        )

    def discard(self) -> int:
        """
        Drop queued events after a rollback.

        Returns:
            Number of events dropped
        """
        dropped = len(self._pending)
        self._pending.clear()
        if dropped:
            logger.debug(f"Discarded {dropped} undispatched domain events")
        return dropped

    def _handlers_for(self, event: DomainEvent) -> List[EventHandler]:
        matched: List[EventHandler] = []
        for event_type, subscribers in self._handlers.items():
            if isinstance(event, event_type):
                matched.extend(subscribers)
        return matched

    async def dispatch(self) -> int:
        """
        Deliver queued events to their handlers.

        Events published by handlers while dispatching are delivered in the
        same call.

        Returns:
            Number of successful handler invocations
        """
        delivered = 0
        while self._pending:
            event = self._pending.pop(0)
            for handler in self._handlers_for(event):
                try:
                    await handler(event)
                    delivered += 1
                except Exception:
                    logger.error(
                        f"Domain event handler failed for {event.event_type}",
                        extra={
                            "event_type": event.event_type,
                            "event_id": str(event.event_id),
                            "handler": getattr(handler, "__qualname__", repr(handler)),
                        },
                        exc_info=True
                    )
        return delivered
