"""Interface for the breed catalog lookup service."""

import abc
from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class BreedInfo:
    """Breed metadata owned by the catalog."""

    breed_id: UUID
    breed_name: str
    breed_photo: bytes


class BreedCatalog(abc.ABC):
    """Contract for the external breed catalog."""

    @abc.abstractmethod
    async def find_by_breed_name(self, breed_name: str) -> BreedInfo | None:
        """Look up a breed by its display name; None when unknown."""

    @abc.abstractmethod
    async def find_by_breed_id(self, breed_id: UUID) -> BreedInfo:
        """Look up a breed by identifier."""
