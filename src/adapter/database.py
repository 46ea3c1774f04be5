"""
Database lifecycle.

One engine and session factory per process, built at startup and disposed
at shutdown. Request handlers get sessions from here through src.depends.
"""

import logging

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain.entities  # noqa: F401  (registers tables on SQLModel.metadata)

logger = logging.getLogger(__name__)


class Database:
    """Owns the async engine and hands out AsyncSessions"""

    def __init__(self, db_uri: str, echo: bool = False):
        self.db_uri = db_uri
        self.engine = create_async_engine(db_uri, echo=echo, future=True)
        self.session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

    def session(self) -> AsyncSession:
        return self.session_factory()

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database tables ensured")

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed")
