"""
Order repository for order aggregate persistence.

Order items are loaded eagerly with their order (``selectin``), so every
method returns fully populated aggregates that are safe to use outside
the async session's greenlet context.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ordermanagement.models.order import Order, OrderStatus


class OrderRepository:
    """
    Repository for order data access.

    Attributes:
        session: SQLAlchemy async session for database operations
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, order: Order) -> Order:
        """
        Persist an order together with its items.

        Returns:
            The same Order instance, with generated ids populated
        """
        self.session.add(order)
        await self.session.flush()
        return order

    async def get(self, order_id: int) -> Optional[Order]:
        stmt = select(Order).where(Order.id == order_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Order]:
        stmt = select(Order).order_by(Order.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_by_customer_id(self, customer_id: int) -> list[Order]:
        stmt = select(Order).where(Order.customer_id == customer_id).order_by(Order.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_by_status(self, status: OrderStatus) -> list[Order]:
        stmt = select(Order).where(Order.status == status).order_by(Order.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
