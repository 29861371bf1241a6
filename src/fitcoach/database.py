from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from fitcoach.config import get_settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores FOREIGN KEY constraints unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Async engine for `url`, with foreign keys enforced on SQLite."""
    db_engine = create_async_engine(url, echo=echo)
    if db_engine.dialect.name == "sqlite":
        event.listen(db_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return db_engine


settings = get_settings()

engine = create_engine(settings.db_url, echo=settings.debug)

async_session = async_sessionmaker(engine, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        yield session
