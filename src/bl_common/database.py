from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import settings

engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_size=20,
    max_overflow=10,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Transaction-scoped advisory lock serializing every draw-pool mutation with
# the re-evaluation pass and the cycle reset.
DRAW_POOL_LOCK_KEY = 0x626F6C61  # "bola"

_ADVISORY_LOCK_SQL = text("SELECT pg_advisory_xact_lock(:key)")


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: yields an AsyncSession, auto-closes after request."""
    async with async_session_factory() as session:
        yield session


async def lock_draw_pool(db: AsyncSession) -> None:
    """Block until this transaction owns the draw-pool lock (released on commit/rollback)."""
    await db.execute(_ADVISORY_LOCK_SQL, {"key": DRAW_POOL_LOCK_KEY})
