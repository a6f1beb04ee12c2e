"""
Seed reference customers and products.

Creates the schema if needed and loads the reference data into empty
tables. Running it again changes nothing.

Usage:
    python scripts/seed_demo.py
"""

import asyncio
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from ordermanagement.core.database import async_session_maker, close_db, create_schema
from ordermanagement.core.seed import seed_initial_data


async def seed_demo() -> int:
    await create_schema()
    async with async_session_maker() as session:
        added = await seed_initial_data(session)
        await session.commit()
    return added


async def main():
    try:
        added = await seed_demo()
    finally:
        await close_db()

    if added:
        print(f"Seeded {added} reference records")
    else:
        print("Reference data already present, nothing to do")


if __name__ == "__main__":
    asyncio.run(main())
