"""Dialect names and dialect-specific statement builders.

SHELTER persists to SQLite or PostgreSQL. Both support ``INSERT ... ON
CONFLICT``, but through separate SQLAlchemy constructs, so the store asks
this module for the right ``insert()`` instead of branching on strings.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

if TYPE_CHECKING:
    from sqlalchemy import Table
    from sqlalchemy.dialects.postgresql import Insert as PgInsert
    from sqlalchemy.dialects.sqlite import Insert as SqliteInsert


class UnsupportedDialect(Exception):
    """Raised for a backend SHELTER cannot upsert into."""


class DialectName(str, Enum):
    """Backends the SQLAlchemy store supports."""

    POSTGRES = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def from_string(cls, dialect_str: str | None) -> DialectName:
        """Map a dialect or ``dialect+driver`` string to a member.

        Accepts ``engine.dialect.name`` values as well as URL prefixes such
        as ``postgresql+psycopg`` and ``sqlite+aiosqlite``.

        Raises:
            UnsupportedDialect: For anything other than SQLite or PostgreSQL.
        """
        base = (dialect_str or "").strip().lower().partition("+")[0]
        if base in {"postgres", "postgresql", "pg"}:
            return cls.POSTGRES
        if base == "sqlite":
            return cls.SQLITE
        raise UnsupportedDialect(f"Unsupported dialect: {dialect_str!r}")


def upsert_insert(dialect: str, table: Table) -> PgInsert | SqliteInsert:
    """Return an ``insert(table)`` that supports ``on_conflict_do_*`` for ``dialect``."""
    if DialectName.from_string(dialect) is DialectName.POSTGRES:
        return pg_insert(table)
    return sqlite_insert(table)
