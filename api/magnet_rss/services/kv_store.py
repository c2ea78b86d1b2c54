"""Key-value storage backends.

The service keeps exactly two scalar values, so storage is modelled as a
narrow ``get``/``put`` interface. ``put_many`` groups the writes of one
logical update; backends that can commit several keys atomically do so.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from magnet_rss.config import Settings
from magnet_rss.database import Base, create_engine, create_session_factory
from magnet_rss.models.kv_entry import KVEntry

logger = logging.getLogger(__name__)

LATEST_MAGNET_KEY = "latest_magnet"
LAST_UPDATED_KEY = "last_updated"


class StorageError(RuntimeError):
    """Raised when the underlying store fails to read or write."""


class KeyValueStore(ABC):
    @abstractmethod
    async def get(self, key: str) -> Optional[str]: ...

    @abstractmethod
    async def put(self, key: str, value: str) -> None: ...

    async def put_many(self, items: Mapping[str, str]) -> None:
        """Write every pair back-to-back; any failure fails the whole update."""
        for key, value in items.items():
            await self.put(key, value)

    async def close(self) -> None:
        pass


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def put(self, key: str, value: str) -> None:
        self._data[key] = value

    async def put_many(self, items: Mapping[str, str]) -> None:
        self._data.update(items)


class DatabaseKeyValueStore(KeyValueStore):
    """PostgreSQL-backed store over the ``kv_entries`` table."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._session_factory = create_session_factory(engine)

    async def create_schema(self) -> None:
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError("Failed to create storage schema") from exc

    async def get(self, key: str) -> Optional[str]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(KVEntry.value).where(KVEntry.key == key)
                )
                return result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError(f"Failed to read key {key!r}") from exc

    async def put(self, key: str, value: str) -> None:
        await self.put_many({key: value})

    async def put_many(self, items: Mapping[str, str]) -> None:
        if not items:
            return
        stmt = insert(KVEntry).values(
            [{"key": key, "value": value} for key, value in items.items()]
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[KVEntry.key],
            set_={"value": stmt.excluded["value"], "updated_at": func.now()},
        )
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(stmt)
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError(f"Failed to write keys {sorted(items)}") from exc

    async def close(self) -> None:
        await self._engine.dispose()


async def create_store(settings: Settings) -> KeyValueStore:
    """Build the store selected by ``DATABASE_URL``."""
    if not settings.uses_database():
        logger.warning("DATABASE_URL is not set; using the in-memory store")
        return MemoryKeyValueStore()
    store = DatabaseKeyValueStore(create_engine(settings.database_url))
    await store.create_schema()
    return store
