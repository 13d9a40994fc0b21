"""In-memory implementations of the external collaborators.

These stand in for the real authorization, billing, breed catalog and price
exchange services in tests, demos and local development.

Note: These implementations are not thread-safe and are intended for
single-event-loop use.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Sequence
from decimal import Decimal

from shelter.interfaces.authorization import AuthorizationResult, AuthorizationService
from shelter.interfaces.billing import Bill, BillingService, Product
from shelter.interfaces.breed_catalog import BreedCatalog, BreedInfo
from shelter.interfaces.price_exchange import PriceExchange, PricePoint


class InMemoryAuthorizationService(AuthorizationService):
    """Authorizes sessions from a token -> user id mapping."""

    def __init__(self, sessions: dict[str, uuid.UUID] | None = None) -> None:
        self.sessions: dict[str, uuid.UUID] = dict(sessions or {})

    def open_session(self, user_id: uuid.UUID, token: str | None = None) -> str:
        """Create a session for ``user_id`` and return its token."""
        token = token or uuid.uuid4().hex
        self.sessions[token] = user_id
        return token

    def revoke(self, token: str) -> None:
        """Expire a session."""
        self.sessions.pop(token, None)

    async def authorize(self, session: str) -> AuthorizationResult:
        if (user_id := self.sessions.get(session)) is None:
            return AuthorizationResult(success=False)
        return AuthorizationResult(success=True, user_id=user_id)


class InMemoryBillingService(BillingService):
    """Ledger keeping products in insertion order and every issued bill."""

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self.products: dict[uuid.UUID, Product] = {p.id: p for p in products}
        self.bills: list[Bill] = []

    async def get_product(self, product_id: uuid.UUID) -> Product | None:
        return self.products.get(product_id)

    async def get_products(self, skip: int, limit: int) -> Sequence[Product]:
        return list(self.products.values())[skip : skip + limit]

    async def add_product(self, product: Product) -> None:
        self.products[product.id] = product

    async def sell_product(self, product_id: uuid.UUID, price: Decimal) -> Bill:
        bill = Bill(id=uuid.uuid4(), product_id=product_id, price=price)
        self.bills.append(bill)
        return bill

    def remove_product(self, product_id: uuid.UUID) -> None:
        """Drop a product from the ledger (as an external actor would)."""
        self.products.pop(product_id, None)


class InMemoryBreedCatalog(BreedCatalog):
    """Breed catalog backed by a list of `BreedInfo`."""

    def __init__(self, breeds: Iterable[BreedInfo] = ()) -> None:
        self.breeds: dict[uuid.UUID, BreedInfo] = {b.breed_id: b for b in breeds}

    def add(self, breed: BreedInfo) -> None:
        """Register a breed."""
        self.breeds[breed.breed_id] = breed

    async def find_by_breed_name(self, breed_name: str) -> BreedInfo | None:
        wanted = breed_name.strip().casefold()
        for breed in self.breeds.values():
            if breed.breed_name.casefold() == wanted:
                return breed
        return None

    async def find_by_breed_id(self, breed_id: uuid.UUID) -> BreedInfo:
        try:
            return self.breeds[breed_id]
        except KeyError as e:
            raise LookupError(f"Breed ({breed_id}) not found in catalog") from e


class InMemoryPriceExchange(PriceExchange):
    """Price exchange holding one history per breed."""

    def __init__(
        self, histories: dict[uuid.UUID, Sequence[PricePoint]] | None = None
    ) -> None:
        self.histories: dict[uuid.UUID, list[PricePoint]] = {
            breed_id: list(points) for breed_id, points in (histories or {}).items()
        }

    def record(self, breed_id: uuid.UUID, point: PricePoint) -> None:
        """Append a price observation for ``breed_id``."""
        self.histories.setdefault(breed_id, []).append(point)

    async def get_price_history(self, breed_id: uuid.UUID) -> Sequence[PricePoint]:
        return list(self.histories.get(breed_id, ()))
