"""
Database bootstrapping.
Creates the schema for all registered models.
"""

from fxdeals.db import session as db_session
from fxdeals.db.base import Base
from fxdeals.core.logging import get_logger

# Registers every model on Base.metadata
import fxdeals.models  # noqa: F401

logger = get_logger(__name__)


async def create_tables() -> None:
    """Create all database tables that do not exist yet."""
    if db_session.engine is None:
        db_session.create_engine()

    async with db_session.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info(
        "Database tables initialized",
        extra={"tables": sorted(Base.metadata.tables.keys())},
    )
