from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from vyom.config import config

# Database URL for async drivers
# Convert postgresql:// to postgresql+asyncpg://
if config.DATABASE_URL.startswith("postgresql://"):
    DATABASE_URL = config.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://", 1)
else:
    DATABASE_URL = config.DATABASE_URL

# SQLite needs its directory to exist before the first connection
if DATABASE_URL.startswith("sqlite"):
    database_path = make_url(DATABASE_URL).database
    if database_path:
        Path(database_path).parent.mkdir(parents=True, exist_ok=True)
    engine_options = {}
else:
    engine_options = {"pool_pre_ping": True, "pool_recycle": 300}

# Create async engine
engine = create_async_engine(
    DATABASE_URL,
    echo=config.DATABASE_ECHO,
    future=True,
    **engine_options,
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Base class for models
Base = declarative_base()


async def get_db() -> AsyncSession:
    """Request-scoped session; committed on success, rolled back on error"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db():
    """Create missing tables; called from each service's startup"""
    async with engine.begin() as conn:
        from vyom.database import models  # noqa: F401
        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    await engine.dispose()
