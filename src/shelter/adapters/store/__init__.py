"""Persisted store adapters.

- `InMemoryShelterStore`: dict-backed, for tests and demos.
- `SqlAlchemyShelterStore`: durable storage through a SQLAlchemy async engine
  (SQLite or PostgreSQL).
"""

from .memory import InMemoryCollection, InMemoryShelterStore
from .sqlalchemy_store import SqlAlchemyShelterStore

__all__ = [
    "InMemoryCollection",
    "InMemoryShelterStore",
    "SqlAlchemyShelterStore",
]
