"""Image Store backed by a relational table.

The store is a write-only sink from the pipeline's point of view: workers
hand it (name, bytes) pairs and it persists each pair as one row of the
``images`` table.

Concurrency:
    Every ``put`` opens its own short transaction on a session drawn from the
    engine's connection pool, so calls from concurrent workers do not share
    connection state. SQLite allows a single writer at a time; for SQLite
    URLs writes are additionally serialized by an asyncio.Lock.

Schema:
    ``ensure_schema()`` issues CREATE TABLE IF NOT EXISTS semantics and is
    safe to call on every run. Call it once when the store is initialized,
    not per item.

Usage:
    store = ImageStore.from_url("postgresql+asyncpg://user:pass@db/images")
    await store.ensure_schema()
    await store.put("a1b2c3d4-000001.jpg", jpeg_bytes)
    await store.close()
"""

import asyncio

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from thumbnailer.database import create_engine, create_session_factory
from thumbnailer.exceptions import StoreError
from thumbnailer.models import Base, StoredImage
from thumbnailer.utils.logging import get_logger

log = get_logger(__name__)


class ImageStore:
    """Durable binary-blob sink backed by the ``images`` table.

    Attributes:
        engine: Async SQLAlchemy engine (owns the connection pool)
    """

    def __init__(self, engine: AsyncEngine, serialize_writes: bool | None = None):
        """Initialize the store around an existing engine.

        Args:
            engine: Async engine connected to the target database
            serialize_writes: Force (or disable) write serialization. Defaults
                to True for SQLite engines and False otherwise.
        """
        self.engine = engine
        self._session_factory = create_session_factory(engine)

        if serialize_writes is None:
            serialize_writes = engine.dialect.name == "sqlite"
        self._write_lock: asyncio.Lock | None = asyncio.Lock() if serialize_writes else None

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False) -> "ImageStore":
        """Create a store with a new engine for ``database_url``."""
        return cls(create_engine(database_url, echo=echo))

    async def ensure_schema(self) -> None:
        """Create the images table if it does not exist.

        Raises:
            StoreError: If the database is unreachable or the DDL fails.
        """
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(
                    Base.metadata.create_all,
                    tables=[StoredImage.__table__],
                    checkfirst=True,
                )
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(f"Cannot initialize images table: {e}") from e

        log.info("image_store_schema_ready", table=StoredImage.__tablename__)

    async def put(self, name: str, data: bytes) -> None:
        """Persist one image as a new row.

        Args:
            name: Destination file name (non-empty, need not be unique)
            data: Encoded image bytes

        Raises:
            ValueError: If name is empty
            StoreError: If the insert fails
        """
        if not name:
            raise ValueError("Image name cannot be empty")

        if self._write_lock is None:
            await self._insert(name, data)
            return

        async with self._write_lock:
            await self._insert(name, data)

    async def _insert(self, name: str, data: bytes) -> None:
        try:
            async with self._session_factory() as session, session.begin():
                session.add(StoredImage(filename=name, data=data))
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(f"Cannot store image {name}: {e}") from e

        log.debug("image_row_inserted", filename=name, size_bytes=len(data))

    async def count(self, name: str | None = None) -> int:
        """Count stored rows, optionally only those with a given filename.

        Raises:
            StoreError: If the query fails
        """
        query = select(func.count()).select_from(StoredImage)
        if name is not None:
            query = query.where(StoredImage.filename == name)

        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(f"Cannot count stored images: {e}") from e

        return int(result.scalar_one())

    async def close(self) -> None:
        """Dispose the engine and its connection pool."""
        await self.engine.dispose()
