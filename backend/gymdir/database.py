"""
Database connection and session management.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from gymdir.config import get_settings

settings = get_settings()


def to_async_url(url: str) -> str:
    """Convert a standard PostgreSQL URL to its asyncpg variant."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


database_url = to_async_url(settings.database_url)

# Create async engine
if database_url.startswith("sqlite"):
    # aiosqlite connections are bound to the event loop that opened them
    engine = create_async_engine(database_url, poolclass=NullPool)
else:
    engine = create_async_engine(
        database_url,
        echo=settings.debug and settings.log_level.upper() == "DEBUG",
        pool_pre_ping=True,  # Verify connections before using
    )

# Session factory
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Base class for models
Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.
    Automatically handles commit/rollback and closing.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db() -> None:
    """Initialize database tables."""
    # Import models so their tables are registered on Base.metadata
    from gymdir import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
