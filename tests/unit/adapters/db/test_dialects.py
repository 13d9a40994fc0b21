"""Unit tests for database dialect handling."""

import pytest

from shelter.adapters.db.dialects import DialectName, UnsupportedDialect, upsert_insert
from shelter.adapters.store.schema import cats


@pytest.mark.parametrize(
    "input_str,expected",
    [
        ("postgresql", DialectName.POSTGRES),
        ("postgres", DialectName.POSTGRES),
        ("pg", DialectName.POSTGRES),
        ("postgresql+psycopg", DialectName.POSTGRES),
        ("sqlite", DialectName.SQLITE),
        ("sqlite+aiosqlite", DialectName.SQLITE),
        ("  SQLite ", DialectName.SQLITE),
    ],
)
def test_from_string_aliases(input_str, expected):
    """Various dialect string aliases map correctly to DialectName."""
    assert DialectName.from_string(input_str) is expected


@pytest.mark.parametrize("bad", [None, "", "  ", "mysql", "duckdb"])
def test_from_string_rejects_unsupported(bad):
    """Unsupported or invalid dialect strings raise UnsupportedDialect."""
    with pytest.raises(UnsupportedDialect):
        DialectName.from_string(bad)


@pytest.mark.parametrize(
    "dialect,module",
    [("sqlite", "sqlite"), ("postgresql", "postgresql"), ("sqlite+aiosqlite", "sqlite")],
)
def test_upsert_insert_matches_dialect(dialect, module):
    """The returned insert construct comes from the dialect's own module."""
    stmt = upsert_insert(dialect, cats)
    assert type(stmt).__module__ == f"sqlalchemy.dialects.{module}.dml"
    assert hasattr(stmt, "on_conflict_do_update")


def test_upsert_insert_rejects_other_backends():
    """Backends without ON CONFLICT support are refused."""
    with pytest.raises(UnsupportedDialect):
        upsert_insert("mysql", cats)
