"""Interfaces for the persisted key-value store.

The store holds two collections:

- ``cats``: `CatRecord` keyed by UUID. A record's ``id`` is the ledger
  product identifier; no separate identifier is ever minted for it.
- ``favorites``: `FavoriteEntry` keyed by the composite ``(user_id, cat_id)``.

Contract overview
-----------------
- ``get(key)`` returns the record or None.
- ``find(predicate)`` returns every record for which ``predicate`` is true.
- ``write(record)`` is an upsert keyed by the record's key.
- ``delete(key)`` removes the record; deleting a missing key is not an error.
- Adapters report an unreachable backend as
  `shelter.interfaces.errors.ConnectionFailure` so callers may retry.
"""

from __future__ import annotations

import abc
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar
from uuid import UUID

R = TypeVar("R")  # Record
K = TypeVar("K")  # Key


@dataclass(frozen=True, slots=True)
class CatRecord:
    """Persisted part of a cat; immutable once written."""

    id: UUID
    added_by: UUID
    name: str
    photo: bytes | None = None

    @property
    def key(self) -> UUID:
        """Collection key for this record."""
        return self.id


@dataclass(frozen=True, slots=True)
class FavoriteEntry:
    """A user's favourite; identity is the pair itself."""

    user_id: UUID
    cat_id: UUID

    @property
    def key(self) -> tuple[UUID, UUID]:
        """Collection key for this entry."""
        return (self.user_id, self.cat_id)


class Collection(abc.ABC, Generic[R, K]):
    """A keyed collection of records."""

    @abc.abstractmethod
    async def get(self, key: K) -> R | None:
        """Return the record stored under ``key``, or None."""

    @abc.abstractmethod
    async def find(self, predicate: Callable[[R], bool]) -> Sequence[R]:
        """Return every record matching ``predicate``."""

    @abc.abstractmethod
    async def write(self, record: R) -> None:
        """Insert or replace ``record``."""

    @abc.abstractmethod
    async def delete(self, key: K) -> None:
        """Remove the record stored under ``key``; no-op when absent."""

    @abc.abstractmethod
    async def count(self) -> int:
        """Return the number of stored records."""


class ShelterStore(abc.ABC):
    """Bundle of the collections persisted by SHELTER."""

    cats: Collection[CatRecord, UUID]
    favorites: Collection[FavoriteEntry, tuple[UUID, UUID]]
