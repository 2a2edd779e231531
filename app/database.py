"""
Database handle.

One `Database` is created at process start (see app.main lifespan), shared by
the API and the reconciliation scheduler, and disposed on shutdown.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.core.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models"""
    pass


class Database:
    """
    Owns the async engine and session factory.
    """

    def __init__(self, url: str, echo: bool = False, pool_size: int = 10, max_overflow: int = 10):
        self.url = url

        if url.startswith("sqlite"):
            # In-memory SQLite must share one connection across sessions
            kwargs = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in url:
                kwargs["poolclass"] = StaticPool
            self.engine: AsyncEngine = create_async_engine(url, echo=echo, **kwargs)
        else:
            self.engine = create_async_engine(
                url,
                echo=echo,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=True,
            )

        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.DATABASE_URL,
            echo=settings.DATABASE_ECHO,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Plain session; callers decide when to commit.

        Usage:
            async with database.session() as session:
                async with session.begin():
                    ...
        """
        session = self.session_factory()
        try:
            yield session
        finally:
            await session.close()

    async def create_all(self) -> None:
        """Create all tables (development / tests; production uses Alembic)"""
        # Register every model on Base.metadata
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("Database connections closed")


def get_database(request: Request) -> Database:
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database not initialized")
    return database


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding a session bound to the application's database.
    Commits on success, rolls back on error.
    """
    database = get_database(request)
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
