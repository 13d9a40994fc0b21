"""Conversions between persisted records and domain objects.

Each conversion is an ordinary function. `ConversionRegistry` gathers them
under their ``(source type, target type)`` pair so the facade can ask for a
conversion by the types it holds; the registrations are fixed when the
registry is built.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, TypeVar
from uuid import UUID

from shelter.domain.errors import ConfigurationError
from shelter.domain.models import AddCatRequest, Cat
from shelter.interfaces.store import CatRecord, FavoriteEntry

T = TypeVar("T")

Converter = Callable[..., Any]


def to_cat(record: CatRecord) -> Cat:
    """Start a `Cat` view from its persisted record (breed and prices unset)."""
    return Cat(
        id=record.id,
        added_by=record.added_by,
        name=record.name,
        photo=record.photo,
    )


def to_cat_record(request: AddCatRequest, *, cat_id: UUID, added_by: UUID) -> CatRecord:
    """Build the persisted record for a new cat.

    Args:
        request: The add-cat request carrying name and photo.
        cat_id: Identifier shared with the freshly minted ledger product.
        added_by: The requesting user.
    """
    return CatRecord(
        id=cat_id,
        added_by=added_by,
        name=request.name,
        photo=request.photo,
    )


def to_favorite_entry(key: tuple[UUID, UUID]) -> FavoriteEntry:
    """Build a favourite entry from a ``(user_id, cat_id)`` pair."""
    user_id, cat_id = key
    return FavoriteEntry(user_id=user_id, cat_id=cat_id)


class ConversionRegistry:
    """Read-only lookup of conversions keyed by (source type, target type)."""

    def __init__(self, converters: Mapping[tuple[type, type], Converter]) -> None:
        self._converters = MappingProxyType(dict(converters))

    @property
    def pairs(self) -> frozenset[tuple[type, type]]:
        """Every registered (source type, target type) pair."""
        return frozenset(self._converters)

    def convert(self, value: object, target: type[T], **context: Any) -> T:
        """Convert ``value`` to ``target``.

        Args:
            value: The object to convert; its exact type selects the converter.
            target: The requested result type.
            **context: Extra keyword arguments forwarded to the converter.

        Raises:
            ConfigurationError: If no converter is registered for the pair.
        """
        key = (type(value), target)
        if not (converter := self._converters.get(key)):
            raise ConfigurationError(
                f"Conversion from {key[0].__name__} to {target.__name__} "
                "is not registered"
            )
        return converter(value, **context)


def default_registry() -> ConversionRegistry:
    """Registry with the standard SHELTER conversions."""
    return ConversionRegistry(
        {
            (CatRecord, Cat): to_cat,
            (AddCatRequest, CatRecord): to_cat_record,
            (tuple, FavoriteEntry): to_favorite_entry,
        }
    )
