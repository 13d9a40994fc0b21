"""Store fixtures: every contract test runs against each ShelterStore adapter."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest_asyncio

from shelter.adapters.db.engine import make_engine
from shelter.adapters.store import InMemoryShelterStore, SqlAlchemyShelterStore
from shelter.interfaces.store import ShelterStore


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def store(request) -> AsyncIterator[ShelterStore]:
    """A fresh, empty store for each adapter."""
    if request.param == "memory":
        yield InMemoryShelterStore()
        return

    sql_store = SqlAlchemyShelterStore(make_engine("sqlite+aiosqlite:///:memory:"))
    await sql_store.create_schema()
    try:
        yield sql_store
    finally:
        await sql_store.dispose()
