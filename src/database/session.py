import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from src.database.engine import async_session

logger = logging.getLogger(__name__)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session: committed when the handler returns, rolled back if it raises."""
    async with async_session() as session:
        try:
            yield session
        except Exception:
            logger.debug("Rolling back request session")
            await session.rollback()
            raise
        else:
            await session.commit()
