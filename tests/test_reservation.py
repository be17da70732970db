"""Tests for short code reservation."""

import string
from datetime import datetime, timezone

import pytest

from shortener.database.models import AliasRecord
from shortener.errors import (
    AliasTaken,
    ExhaustedRetries,
    RepeatedSpecialChar,
    ReservedName,
    StoreError,
)
from shortener.reservation import (
    MAX_RANDOM_ATTEMPTS,
    CustomAlias,
    RandomAlias,
    UniquenessResolver,
)

from fakes import AlwaysCollidingStore, BrokenStore


async def _seed(store, code, url="https://example.com/"):
    now = datetime.now(timezone.utc)
    await store.insert(AliasRecord(short_code=code, original_url=url, created_at=now))


@pytest.mark.asyncio
class TestCustomReservation:
    """Reserving user supplied names."""

    async def test_free_name_is_normalized(self, store, logger):
        resolver = UniquenessResolver(store, logger=logger)
        assert await resolver.reserve(CustomAlias("  My-Link ")) == "my-link"

    async def test_existing_name_is_taken(self, store, logger):
        await _seed(store, "promo")
        resolver = UniquenessResolver(store, logger=logger)

        with pytest.raises(AliasTaken):
            await resolver.reserve(CustomAlias("promo"))

    async def test_taken_check_is_case_insensitive(self, store, logger):
        await _seed(store, "promo")
        resolver = UniquenessResolver(store, logger=logger)

        with pytest.raises(AliasTaken):
            await resolver.reserve(CustomAlias("PROMO"))

    async def test_validation_error_surfaces(self, store, logger):
        resolver = UniquenessResolver(store, logger=logger)

        with pytest.raises(RepeatedSpecialChar):
            await resolver.reserve(CustomAlias("ab..c"))

    async def test_store_error_propagates(self, logger):
        resolver = UniquenessResolver(BrokenStore(fail_on={"find_by_code"}), logger=logger)

        with pytest.raises(StoreError):
            await resolver.reserve(CustomAlias("promo"))

    @pytest.mark.parametrize("name", ["health", "Shorten", " API "])
    async def test_route_names_are_reserved(self, store, logger, name):
        resolver = UniquenessResolver(store, logger=logger)

        with pytest.raises(ReservedName):
            await resolver.reserve(CustomAlias(name))


@pytest.mark.asyncio
class TestRandomReservation:
    """Reserving generated codes."""

    async def test_random_code_shape(self, store, logger):
        resolver = UniquenessResolver(store, logger=logger)
        code = await resolver.reserve(RandomAlias())

        assert len(code) == 6
        assert set(code) <= set(string.ascii_lowercase + string.digits)

    async def test_exhausted_after_ten_attempts(self, logger):
        store = AlwaysCollidingStore(logger=logger)
        resolver = UniquenessResolver(store, logger=logger)

        with pytest.raises(ExhaustedRetries):
            await resolver.reserve(RandomAlias())

        assert MAX_RANDOM_ATTEMPTS == 10
        assert len(store.lookups) == 10

    async def test_retries_past_collisions(self, store, logger, monkeypatch):
        await _seed(store, "aaaaaa")
        await _seed(store, "bbbbbb")
        codes = iter(["aaaaaa", "bbbbbb", "cccccc"])
        monkeypatch.setattr("shortener.codec.random_code", lambda length=6: next(codes))

        resolver = UniquenessResolver(store, logger=logger)
        assert await resolver.reserve(RandomAlias()) == "cccccc"

    async def test_skips_reserved_route_names(self, store, logger, monkeypatch):
        codes = iter(["health", "abc123"])
        monkeypatch.setattr("shortener.codec.random_code", lambda length=6: next(codes))

        resolver = UniquenessResolver(store, logger=logger)
        assert await resolver.reserve(RandomAlias()) == "abc123"

    async def test_does_not_write(self, store, logger):
        resolver = UniquenessResolver(store, logger=logger)
        await resolver.reserve(RandomAlias())
        await resolver.reserve(CustomAlias("reserved-only"))

        assert len(store) == 0
