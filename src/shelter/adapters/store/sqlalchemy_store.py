"""Implementation of ShelterStore using SQLAlchemy's asyncio extension."""

from __future__ import annotations

import abc
import logging
from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import and_, func, select
from sqlalchemy.exc import DBAPIError, OperationalError

from shelter.adapters.db.dialects import upsert_insert
from shelter.adapters.db.metadata import metadata
from shelter.interfaces.errors import ConnectionFailure
from shelter.interfaces.store import CatRecord, Collection, FavoriteEntry, ShelterStore

from .schema import cats, favorites

if TYPE_CHECKING:
    from sqlalchemy import Row, Table
    from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine
    from sqlalchemy.sql.dml import Insert

logger = logging.getLogger(__name__)

R = TypeVar("R", CatRecord, FavoriteEntry)
K = TypeVar("K")

COLLABORATOR = "store"


class _SqlAlchemyCollection(Collection[R, K], Generic[R, K]):
    """Shared mechanics for table-backed collections: get, find, upsert, delete."""

    TABLE: Table
    KEY_COLUMNS: tuple[str, ...]

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    # --- mapping hooks ---

    @abc.abstractmethod
    def _to_record(self, row: Row[Any]) -> R:
        """Build a record from a table row."""

    @abc.abstractmethod
    def _to_values(self, record: R) -> dict[str, Any]:
        """Return the column values for ``record``."""

    @abc.abstractmethod
    def _key_values(self, key: K) -> tuple[Any, ...]:
        """Split ``key`` into values ordered like `KEY_COLUMNS`."""

    def _key_clause(self, key: K):
        return and_(
            *(
                self.TABLE.c[column] == value
                for column, value in zip(self.KEY_COLUMNS, self._key_values(key))
            )
        )

    # --- connection handling ---

    @asynccontextmanager
    async def _begin(self) -> AsyncIterator[AsyncConnection]:
        """Open a transaction, reporting an unreachable backend as ConnectionFailure."""
        try:
            async with self._engine.begin() as conn:
                yield conn
        except OperationalError as e:
            logger.debug("Store operation failed on %s: %s", self.TABLE.name, e)
            raise ConnectionFailure(COLLABORATOR, str(e.orig)) from e
        except DBAPIError as e:
            if not e.connection_invalidated:
                raise
            raise ConnectionFailure(COLLABORATOR, str(e.orig)) from e

    # --- reads ---

    async def get(self, key: K) -> R | None:
        stmt = select(self.TABLE).where(self._key_clause(key))
        async with self._begin() as conn:
            row = (await conn.execute(stmt)).first()
        return None if row is None else self._to_record(row)

    async def find(self, predicate: Callable[[R], bool]) -> Sequence[R]:
        # Predicates are arbitrary callables, so filtering happens client-side.
        async with self._begin() as conn:
            rows = (await conn.execute(select(self.TABLE))).all()
        return [record for record in map(self._to_record, rows) if predicate(record)]

    async def count(self) -> int:
        stmt = select(func.count()).select_from(self.TABLE)  # pylint: disable=not-callable
        async with self._begin() as conn:
            return int((await conn.execute(stmt)).scalar_one())

    # --- writes ---

    async def write(self, record: R) -> None:
        values = self._to_values(record)
        async with self._begin() as conn:
            await conn.execute(self._build_upsert(conn.dialect.name, values))

    async def delete(self, key: K) -> None:
        async with self._begin() as conn:
            await conn.execute(self.TABLE.delete().where(self._key_clause(key)))

    # --- dialect-specific upsert builder ---

    def _build_upsert(self, dialect: str, values: dict[str, Any]) -> Insert:
        stmt = upsert_insert(dialect, self.TABLE).values(**values)

        updates = {
            column: stmt.excluded[column]
            for column in values
            if column not in self.KEY_COLUMNS
        }
        if not updates:
            return stmt.on_conflict_do_nothing(index_elements=list(self.KEY_COLUMNS))
        return stmt.on_conflict_do_update(
            index_elements=list(self.KEY_COLUMNS), set_=updates
        )


class SqlAlchemyCatCollection(_SqlAlchemyCollection[CatRecord, UUID]):
    """Cat records stored in the ``cats`` table."""

    TABLE = cats
    KEY_COLUMNS = ("id",)

    def _to_record(self, row: Row[Any]) -> CatRecord:
        return CatRecord(
            id=row.id, added_by=row.added_by, name=row.name, photo=row.photo
        )

    def _to_values(self, record: CatRecord) -> dict[str, Any]:
        return {
            "id": record.id,
            "added_by": record.added_by,
            "name": record.name,
            "photo": record.photo,
        }

    def _key_values(self, key: UUID) -> tuple[Any, ...]:
        return (key,)


class SqlAlchemyFavoriteCollection(
    _SqlAlchemyCollection[FavoriteEntry, tuple[UUID, UUID]]
):
    """Favourite entries stored in the ``favorites`` table."""

    TABLE = favorites
    KEY_COLUMNS = ("user_id", "cat_id")

    def _to_record(self, row: Row[Any]) -> FavoriteEntry:
        return FavoriteEntry(user_id=row.user_id, cat_id=row.cat_id)

    def _to_values(self, record: FavoriteEntry) -> dict[str, Any]:
        return {"user_id": record.user_id, "cat_id": record.cat_id}

    def _key_values(self, key: tuple[UUID, UUID]) -> tuple[Any, ...]:
        return key


class SqlAlchemyShelterStore(ShelterStore):
    """ShelterStore backed by SQLite or PostgreSQL."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.cats = SqlAlchemyCatCollection(engine)
        self.favorites = SqlAlchemyFavoriteCollection(engine)

    async def create_schema(self) -> None:
        """Create the tables directly from metadata (no Alembic history).

        Intended for tests and throwaway databases; use ``shelter db upgrade``
        for anything that must be migrated later.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(metadata.create_all)

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()
