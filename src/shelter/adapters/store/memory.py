"""In-memory ShelterStore implementation for testing purposes."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Generic, TypeVar
from uuid import UUID

from shelter.interfaces.store import CatRecord, Collection, FavoriteEntry, ShelterStore

R = TypeVar("R", CatRecord, FavoriteEntry)
K = TypeVar("K")


class InMemoryCollection(Collection[R, K], Generic[R, K]):
    """Dict-backed collection keyed by each record's ``key`` property.

    Note: This implementation is not thread-safe and is intended
    solely for use in single-event-loop test scenarios.
    """

    def __init__(self) -> None:
        self.records: dict[K, R] = {}

    async def get(self, key: K) -> R | None:
        return self.records.get(key)

    async def find(self, predicate: Callable[[R], bool]) -> Sequence[R]:
        return [record for record in self.records.values() if predicate(record)]

    async def write(self, record: R) -> None:
        self.records[record.key] = record  # type: ignore[index]

    async def delete(self, key: K) -> None:
        self.records.pop(key, None)

    async def count(self) -> int:
        return len(self.records)


class InMemoryShelterStore(ShelterStore):
    """ShelterStore keeping both collections in memory."""

    def __init__(self) -> None:
        self.cats: InMemoryCollection[CatRecord, UUID] = InMemoryCollection()
        self.favorites: InMemoryCollection[FavoriteEntry, tuple[UUID, UUID]] = (
            InMemoryCollection()
        )
