"""
Customer repository.

Provides data access for customers with email uniqueness checking.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ordermanagement.models.customer import Customer


class CustomerRepository:
    """
    Repository for customer data access.

    Attributes:
        session: SQLAlchemy async session for database operations
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, customer: Customer) -> Customer:
        self.session.add(customer)
        await self.session.flush()
        return customer

    async def get(self, customer_id: int) -> Optional[Customer]:
        return await self.session.get(Customer, customer_id)

    async def list_all(self) -> list[Customer]:
        stmt = select(Customer).order_by(Customer.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def email_exists(self, email: str) -> bool:
        """
        Check if an email is already registered (case-insensitive).

        Note:
            Used before inserting to give a clearer error than the
            unique constraint violation.
        """
        stmt = select(Customer.id).where(func.lower(Customer.email) == email.lower())
        result = await self.session.execute(stmt)
        return result.first() is not None
