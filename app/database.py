"""
Engine, session factory and the per-request session dependency.

``build_engine`` is shared by the application, the seed script and the test
suite, so every engine gets the same SQLite handling and the SQL query
counter behind the ``X-Query-Count`` header.
"""
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.middleware import install_query_counter


def build_engine(database_url: str, **kwargs) -> AsyncEngine:
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        # An in-memory database lives on one connection; every session must share it.
        if url.database in (None, "", ":memory:"):
            kwargs.setdefault("poolclass", StaticPool)
    else:
        kwargs.setdefault("pool_pre_ping", True)

    engine = create_async_engine(url, echo=settings.SQL_ECHO, **kwargs)
    install_query_counter(engine)
    return engine


engine = build_engine(settings.DATABASE_URL)

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def get_db():
    """
    Yield one session per request.

    Repositories only flush; the commit (or rollback on any exception) happens
    here so a request is a single transaction.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
