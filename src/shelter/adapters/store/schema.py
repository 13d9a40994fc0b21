"""Persisted store schema.

Defines the ``cats`` and ``favorites`` tables.

| Table       | Key                  | Notes                                     |
|-------------|----------------------|-------------------------------------------|
| cats        | id                   | same value as the ledger product id       |
| favorites   | (user_id, cat_id)    | no FK to cats: pruned lazily at read time |
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    Index,
    LargeBinary,
    PrimaryKeyConstraint,
    String,
    Table,
    Uuid,
)

from shelter.adapters.db.metadata import metadata

__all__ = ["cats", "favorites"]

cats = Table(
    "cats",
    metadata,
    Column(
        "id",
        Uuid,
        primary_key=True,
        comment="Cat identifier; equal to the billing ledger product id.",
    ),
    Column(
        "added_by",
        Uuid,
        nullable=False,
        comment="User who put the cat up for sale.",
    ),
    Column("name", String(200), nullable=False, comment="Cat name."),
    Column("photo", LargeBinary, nullable=True, comment="Optional cat photo."),
    comment="Persisted cat records. Immutable once written.",
)

favorites = Table(
    "favorites",
    metadata,
    Column("user_id", Uuid, nullable=False, comment="Owner of the favourite."),
    Column("cat_id", Uuid, nullable=False, comment="Favourite cat id."),
    PrimaryKeyConstraint("user_id", "cat_id"),
    Index("ix_favorites_user_id", "user_id"),
    comment="User favourites. One row per (user, cat) pair.",
)
