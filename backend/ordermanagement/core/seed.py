"""
Reference data.

Customers and catalog products every fresh installation starts with.
"""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ordermanagement.models.customer import Address, Customer
from ordermanagement.models.money import Money
from ordermanagement.models.product import Product


REFERENCE_CUSTOMERS = [
    {
        "first_name": "Max",
        "last_name": "Mustermann",
        "email": "max.mustermann@example.com",
        "address": Address("Berliner Tor 7", "Hamburg", "20099", "Germany"),
    },
    {
        "first_name": "Erika",
        "last_name": "Musterfrau",
        "email": "erika.musterfrau@example.com",
        "address": Address("Unter den Linden 1", "Berlin", "10117", "Germany"),
    },
]

REFERENCE_PRODUCTS = [
    ("Laptop", "High-performance laptop for professionals", "1299.99", 50),
    ("Smartphone", "Latest generation smartphone", "799.99", 30),
    ("Headphones", "Noise-cancelling wireless headphones", "199.99", 100),
    ("Desktop Computer", "Tower workstation with dedicated graphics", "1499.00", 10),
    ("Tablet Computer", "10 inch tablet with stylus support", "449.50", 25),
    ("USB-C Cable", "1m braided charging cable", "12.99", 500),
]


async def _is_empty(session: AsyncSession, model) -> bool:
    count = await session.scalar(select(func.count()).select_from(model))
    return not count


async def seed_initial_data(session: AsyncSession) -> int:
    """
    Insert reference customers and products into empty tables.

    Each table is seeded only when it holds no rows, so running this
    against an existing database changes nothing.

    Returns:
        Number of rows added (0 when already seeded)
    """
    added = 0

    if await _is_empty(session, Customer):
        for data in REFERENCE_CUSTOMERS:
            session.add(Customer(**data))
            added += 1

    if await _is_empty(session, Product):
        for name, description, price, stock in REFERENCE_PRODUCTS:
            session.add(
                Product(
                    name=name,
                    description=description,
                    price=Money.euro(Decimal(price)),
                    stock_quantity=stock,
                )
            )
            added += 1

    await session.flush()
    return added
