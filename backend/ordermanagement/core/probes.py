"""
Dependency probes behind the readiness endpoint.

The order service has a single hard dependency, the database holding the
catalog, customers and orders. Payment and shipping are simulated in
process and are not probed.
"""

import asyncio

from sqlalchemy import text

from ordermanagement.core.database import async_session_maker


async def check_database(timeout_seconds: float = 2.0) -> bool:
    """
    Round-trip ``SELECT 1`` through a fresh session.

    Never raises. Any error, or a round trip slower than
    ``timeout_seconds``, reports the store as down.
    """
    try:
        async with asyncio.timeout(timeout_seconds):
            async with async_session_maker() as session:
                await session.scalar(text("SELECT 1"))
        return True
    except Exception:
        return False
