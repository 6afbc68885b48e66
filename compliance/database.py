"""
Database configuration and session management.

This module contains SQLAlchemy engine, session configuration,
and database table creation utilities.
"""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from compliance.config import settings

database_url = settings.SQLALCHEMY_DATABASE_URI
if database_url.startswith("postgresql://"):
    database_url = database_url.replace("postgresql://", "postgresql+asyncpg://")

# Create async engine
engine = create_async_engine(
    database_url,
    echo=settings.DEBUG,
    future=True,
    poolclass=StaticPool if settings.DEBUG and database_url.startswith("sqlite") else None,
)

# Create async session factory
async_session = sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Base class for all database models
Base = declarative_base()


async def create_tables():
    """
    Create all database tables.

    Must run before the first report is generated against a new database.
    """
    async with engine.begin() as conn:
        # Import all models to ensure they are registered with Base
        import compliance.models  # noqa: F401
        await conn.run_sync(Base.metadata.create_all)

