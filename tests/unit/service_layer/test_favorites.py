"""Unit tests for the favourites consistency maintainer (through the facade)."""

from __future__ import annotations

import pytest

from shelter.domain.errors import InvalidRequestError
from shelter.interfaces.store import FavoriteEntry
from tests.fixtures.collaborators import OTHER_TOKEN, OTHER_USER_ID, TOKEN, USER_ID


class TestAddFavourite:
    """add_cat_to_favourites()."""

    @staticmethod
    @pytest.mark.asyncio
    async def test_adds_entry(shelter):
        """A resolvable cat becomes a favourite of the caller."""
        cat_id = shelter.seed_cat()
        await shelter.service.add_cat_to_favourites(TOKEN, cat_id)
        assert (USER_ID, cat_id) in shelter.store.favorites.records

    @staticmethod
    @pytest.mark.asyncio
    async def test_adding_twice_keeps_one_entry(shelter):
        """The store's upsert makes repeated adds harmless."""
        cat_id = shelter.seed_cat()
        await shelter.service.add_cat_to_favourites(TOKEN, cat_id)
        await shelter.service.add_cat_to_favourites(TOKEN, cat_id)
        assert await shelter.store.favorites.count() == 1

    @staticmethod
    @pytest.mark.asyncio
    async def test_missing_product_deletes_stale_record(shelter):
        """No ledger product: the request fails and the stale record is removed."""
        cat_id = shelter.seed_cat(in_ledger=False)

        with pytest.raises(InvalidRequestError) as exc_info:
            await shelter.service.add_cat_to_favourites(TOKEN, cat_id)

        assert exc_info.value.cat_id == cat_id
        assert cat_id not in shelter.store.cats.records
        assert not shelter.store.favorites.records

    @staticmethod
    @pytest.mark.asyncio
    async def test_unknown_everywhere_is_invalid(shelter):
        """A cat known to neither side is rejected without side effects."""
        cat_id = shelter.seed_cat(in_ledger=False, persisted=False)
        with pytest.raises(InvalidRequestError):
            await shelter.service.add_cat_to_favourites(TOKEN, cat_id)
        assert not shelter.store.favorites.records

    @staticmethod
    @pytest.mark.asyncio
    async def test_ledger_only_cat_is_invalid(shelter):
        """A product without a persisted record cannot be favourited."""
        cat_id = shelter.seed_cat(persisted=False)
        with pytest.raises(InvalidRequestError):
            await shelter.service.add_cat_to_favourites(TOKEN, cat_id)
        assert cat_id in shelter.billing.products
        assert not shelter.store.favorites.records


class TestListFavourites:
    """get_favourite_cats()."""

    @staticmethod
    @pytest.mark.asyncio
    async def test_lists_only_callers_favourites(shelter):
        """Each user sees their own favourites, enriched."""
        mine = shelter.seed_cat("Tom")
        theirs = shelter.seed_cat("Felix")
        await shelter.service.add_cat_to_favourites(TOKEN, mine)
        await shelter.service.add_cat_to_favourites(OTHER_TOKEN, theirs)

        cats = await shelter.service.get_favourite_cats(TOKEN)

        assert [cat.id for cat in cats] == [mine]
        assert cats[0].breed == "Siamese"
        assert (OTHER_USER_ID, theirs) in shelter.store.favorites.records

    @staticmethod
    @pytest.mark.asyncio
    async def test_entry_for_missing_record_is_pruned(shelter):
        """An entry whose cat record is gone is deleted and never comes back."""
        cat_id = shelter.seed_cat()
        await shelter.service.add_cat_to_favourites(TOKEN, cat_id)
        del shelter.store.cats.records[cat_id]

        assert await shelter.service.get_favourite_cats(TOKEN) == []
        assert (USER_ID, cat_id) not in shelter.store.favorites.records
        assert await shelter.service.get_favourite_cats(TOKEN) == []

    @staticmethod
    @pytest.mark.asyncio
    async def test_cat_dropped_from_ledger_is_cleaned_up_lazily(shelter):
        """First listing removes the stale cat record, the next one its entry."""
        cat_id = shelter.seed_cat()
        await shelter.service.add_cat_to_favourites(TOKEN, cat_id)
        shelter.billing.remove_product(cat_id)

        assert await shelter.service.get_favourite_cats(TOKEN) == []
        assert cat_id not in shelter.store.cats.records
        assert (USER_ID, cat_id) in shelter.store.favorites.records

        assert await shelter.service.get_favourite_cats(TOKEN) == []
        assert (USER_ID, cat_id) not in shelter.store.favorites.records


class TestRemoveFavourite:
    """delete_cat_from_favourites()."""

    @staticmethod
    @pytest.mark.asyncio
    async def test_removes_entry(shelter):
        """The composite key is deleted."""
        cat_id = shelter.seed_cat()
        await shelter.service.add_cat_to_favourites(TOKEN, cat_id)
        await shelter.service.delete_cat_from_favourites(TOKEN, cat_id)
        assert not shelter.store.favorites.records

    @staticmethod
    @pytest.mark.asyncio
    async def test_removing_absent_entry_is_not_an_error(shelter):
        """Deleting a favourite that does not exist succeeds silently."""
        await shelter.service.delete_cat_from_favourites(TOKEN, shelter.seed_cat())

    @staticmethod
    @pytest.mark.asyncio
    async def test_only_the_callers_entry_is_removed(shelter):
        """Another user's favourite of the same cat survives."""
        cat_id = shelter.seed_cat()
        shelter.store.favorites.records[(OTHER_USER_ID, cat_id)] = FavoriteEntry(
            user_id=OTHER_USER_ID, cat_id=cat_id
        )
        await shelter.service.add_cat_to_favourites(TOKEN, cat_id)

        await shelter.service.delete_cat_from_favourites(TOKEN, cat_id)

        assert list(shelter.store.favorites.records) == [(OTHER_USER_ID, cat_id)]
