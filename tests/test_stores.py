"""Tests for store implementations and the record model."""

from datetime import datetime, timedelta, timezone

import pytest

from shortener.database.models import AliasRecord
from shortener.database.postgres import PostgresAliasStore, _as_utc
from shortener.errors import DuplicateKeyError


T0 = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)


class TestAliasRecord:
    """Test the record model."""

    def test_code_is_lowercased(self):
        record = AliasRecord(short_code="MiXeD", original_url="https://e.com", created_at=T0)
        assert record.short_code == "mixed"

    def test_last_access_defaults_to_creation(self):
        record = AliasRecord(short_code="abc", original_url="https://e.com", created_at=T0)
        assert record.last_accessed_at == T0

    def test_to_dict(self):
        record = AliasRecord(short_code="abc", original_url="https://e.com", created_at=T0)
        assert record.to_dict() == {
            "short_code": "abc",
            "original_url": "https://e.com",
            "created_at": "2025-03-01T09:30:00+00:00",
            "last_accessed_at": "2025-03-01T09:30:00+00:00",
        }

    def test_from_row(self):
        row = {
            "short_code": "abc",
            "original_url": "https://e.com",
            "created_at": T0,
            "last_clicked_at": T0 + timedelta(days=2),
        }
        record = AliasRecord.from_row(row)
        assert record.last_accessed_at == T0 + timedelta(days=2)


@pytest.mark.asyncio
class TestInMemoryAliasStore:
    """Test the in-memory store contract."""

    async def test_insert_and_find(self, store):
        await store.insert(AliasRecord(short_code="abc", original_url="https://e.com", created_at=T0))

        record = await store.find_by_code("ABC")

        assert record.original_url == "https://e.com"

    async def test_duplicate_insert_rejected(self, store):
        await store.insert(AliasRecord(short_code="abc", original_url="https://one.com", created_at=T0))

        with pytest.raises(DuplicateKeyError):
            await store.insert(AliasRecord(short_code="ABC", original_url="https://two.com", created_at=T0))

        assert (await store.find_by_code("abc")).original_url == "https://one.com"

    async def test_returned_records_are_copies(self, store):
        await store.insert(AliasRecord(short_code="abc", original_url="https://e.com", created_at=T0))

        record = await store.find_by_code("abc")
        record.last_accessed_at = T0 + timedelta(days=100)

        assert (await store.find_by_code("abc")).last_accessed_at == T0

    async def test_update_missing_code_is_noop(self, store):
        await store.update_last_accessed("ghost", T0)
        assert len(store) == 0

    async def test_delete_older_than_returns_codes(self, store):
        await store.insert(AliasRecord(short_code="old", original_url="https://e.com", created_at=T0))
        await store.insert(AliasRecord(
            short_code="new", original_url="https://e.com", created_at=T0 + timedelta(days=10),
        ))

        deleted = await store.delete_older_than(T0 + timedelta(days=1))

        assert deleted == ["old"]
        assert await store.health_check() is True


class TestPostgresAliasStore:
    """Pieces of the PostgreSQL store that don't need a server."""

    def test_as_utc(self):
        naive = datetime(2025, 1, 1, 12, 0)
        assert _as_utc(naive) == datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert _as_utc(T0) is T0

    def test_schema_enforces_uniqueness(self):
        assert "short_code TEXT PRIMARY KEY" in PostgresAliasStore.CREATE_TABLE_SQL
        assert "last_clicked_at" in PostgresAliasStore.CREATE_TABLE_SQL
