from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from dbwriter.config import Settings

Base = declarative_base()


def make_engine(url: str, pool_size: int = 8, max_overflow: int = 0,
                pool_recycle: int = 3600, echo: bool = False) -> AsyncEngine:
    """Create the async engine and its connection pool.

    The pool keeps ``pool_size`` connections warm, opens at most
    ``pool_size + max_overflow`` at once and replaces any connection older
    than ``pool_recycle`` seconds. SQLite engines keep SQLAlchemy's defaults.
    """
    if make_url(url).get_backend_name() == "sqlite":
        return create_async_engine(url, echo=echo)
    return create_async_engine(
        url,
        echo=echo,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_recycle=pool_recycle,
        pool_pre_ping=True,
    )


def engine_from_settings(settings: Settings) -> AsyncEngine:
    return make_engine(
        settings.database_url,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_recycle=settings.pool_recycle,
        echo=settings.sql_echo,
    )


def make_session_factory(engine: AsyncEngine):
    return sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False
    )
