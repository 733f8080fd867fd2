"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, backoffice.configs
System role: Database schema initialization

Usage:
    python -m backoffice.boundary.db.create_tables
    python -m backoffice.boundary.db.create_tables --drop
"""

import asyncio
import logging
import sys

from backoffice.boundary.db.base import Base
from backoffice.boundary.db.connection import get_async_engine
from backoffice.boundary.db import models  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables() -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: existing tables remain unchanged.

    Raises:
        SQLAlchemyError: If database connection or table creation fails
    """
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("All tables created", extra={"tables": sorted(Base.metadata.tables)})


async def drop_all_tables() -> None:
    """Drop all database tables and their data."""
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.warning("All tables dropped")


async def _main(drop: bool) -> None:
    if drop:
        await drop_all_tables()
    await create_all_tables()
    await get_async_engine().dispose()


if __name__ == "__main__":
    from backoffice.observability.logger import configure_logging

    configure_logging()
    asyncio.run(_main(drop="--drop" in sys.argv))
