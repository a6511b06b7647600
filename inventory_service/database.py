from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.engine import make_url
from . import config
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(database_url: str) -> AsyncEngine:
    """Create the async engine for snapshot storage."""
    safe_url = make_url(database_url).render_as_string(hide_password=True)
    logger.info(f"Creating database engine for URL: {safe_url}")
    try:
        return create_async_engine(database_url, echo=config.DATABASE_ECHO, pool_pre_ping=True)
    except Exception as e:
        logger.error(f"FATAL: Failed to create database engine: {e}")
        raise RuntimeError(f"Could not initialize database connection: {e}") from e


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables(engine: AsyncEngine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
