"""
baucrew/database/init_db.py

Creates or drops all tables registered on the declarative metadata.
Used at application startup when AUTO_CREATE_TABLES is set, and by the test suite.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from baucrew.database import models  # noqa: F401  (registers every mapped table)
from baucrew.database.base import Base

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"[DB] Tables ensured: {', '.join(sorted(Base.metadata.tables))}")


async def drop_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info("[DB] All tables dropped")
