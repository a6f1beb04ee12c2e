"""
Product repository for catalog data access.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ordermanagement.models.product import Product


class ProductRepository:
    """
    Repository for product data access.

    Provides async CRUD and search operations for the product catalog.

    Attributes:
        session: SQLAlchemy async session for database operations
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, product: Product) -> Product:
        """
        Persist a new or modified product.

        Flushes so a new product has its generated id afterwards; committing
        is left to the caller's unit of work.
        """
        self.session.add(product)
        await self.session.flush()
        return product

    async def get(self, product_id: int) -> Optional[Product]:
        """
        Retrieve a product by ID.

        Returns:
            Product instance if found, None otherwise
        """
        return await self.session.get(Product, product_id)

    async def get_for_update(self, product_id: int) -> Optional[Product]:
        """
        Get a product and lock its row until the transaction ends.

        Used before changing stock so concurrent reservations serialize on
        PostgreSQL. SQLite ignores the lock clause.
        """
        stmt = (
            select(Product)
            .where(Product.id == product_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Product]:
        stmt = select(Product).order_by(Product.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search_by_name(self, term: str) -> list[Product]:
        """
        Find products whose name contains ``term``, ignoring case.

        Example:
            >>> products = await repo.search_by_name("laptop")
            >>> [p.name for p in products]
            ["Laptop", "Gaming Laptop"]
        """
        stmt = (
            select(Product)
            .where(Product.name.icontains(term, autoescape=True))
            .order_by(Product.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_available(self) -> list[Product]:
        """Products with at least one unit in stock."""
        stmt = select(Product).where(Product.stock_quantity > 0).order_by(Product.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_by_min_stock(self, min_quantity: int) -> list[Product]:
        stmt = (
            select(Product)
            .where(Product.stock_quantity >= min_quantity)
            .order_by(Product.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete(self, product: Product) -> None:
        await self.session.delete(product)
        await self.session.flush()
