from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from connectibles.shared.models.base import Base
from connectibles.shared.utils.logger import get_logger
from .config import settings

logger = get_logger(__name__)


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # In-memory SQLite only survives on a single shared connection
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    return {
        "pool_size": 20,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 3600,
    }


engine = create_async_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# Session of the outermost open scope in the current task
_current_session: ContextVar[Optional[AsyncSession]] = ContextVar("current_session", default=None)


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """One unit of work: commit on success, roll back on any error.

    A scope opened inside another one joins it, so a service can wrap
    several repository calls in one transaction and nothing is committed
    until the outermost scope exits.
    """
    current = _current_session.get()
    if current is not None:
        yield current
        return

    async with AsyncSessionLocal() as session:
        token = _current_session.set(session)
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            _current_session.reset(token)


def load_models():
    # Registers every table on Base.metadata
    from connectibles.domains.auth import models as _auth  # noqa: F401
    from connectibles.domains.connections import models as _connections  # noqa: F401
    from connectibles.domains.messages import models as _messages  # noqa: F401
    from connectibles.domains.notifications import models as _notifications  # noqa: F401
    from connectibles.domains.moderation import models as _moderation  # noqa: F401
    from connectibles.domains.games import models as _games  # noqa: F401
    from connectibles.domains.truth_dare import models as _truth_dare  # noqa: F401
    from connectibles.domains.feed import models as _feed  # noqa: F401


async def init_db():
    load_models()
    if settings.AUTO_CREATE_TABLES:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")
    else:
        # Deployed environments are migrated with alembic
        logger.info("Skipping auto table creation")


async def check_connection() -> bool:
    try:
        async with engine.connect():
            return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False
