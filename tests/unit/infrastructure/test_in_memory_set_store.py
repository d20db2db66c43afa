"""Unit tests for the in-memory set store."""

import pytest

from clerq.domain.exceptions import StoreError, StoreNotConnectedError


class TestInMemorySetStore:
    """Test cases for InMemorySetStore."""

    @pytest.mark.asyncio
    async def test_add_reports_new_members(self, store):
        assert await store.add("k", "a") == 1
        assert await store.add("k", "a") == 0
        assert await store.add("k", "b") == 1
        assert sorted(await store.members("k")) == ["a", "b"]

    @pytest.mark.asyncio
    async def test_remove(self, store):
        await store.add("k", "a")

        assert await store.remove("k", "a") == 1
        assert await store.remove("k", "a") == 0
        assert await store.remove("missing", "a") == 0

    @pytest.mark.asyncio
    async def test_empty_set_disappears(self, store):
        await store.add("k", "a")
        await store.expire("k", 10)
        await store.remove("k", "a")

        assert await store.keys("*") == []
        assert store.ttl("k") is None

    @pytest.mark.asyncio
    async def test_empty_member_rejected(self, store):
        with pytest.raises(StoreError):
            await store.add("k", "")
        with pytest.raises(StoreError):
            await store.remove("k", "")

    @pytest.mark.asyncio
    async def test_random_member(self, store):
        assert await store.random_member("k") is None

        await store.add("k", "a")
        await store.add("k", "b")

        assert await store.random_member("k") in {"a", "b"}

    @pytest.mark.asyncio
    async def test_keys_glob(self, store):
        await store.add("clerq::a", "x")
        await store.add("clerq::b", "x")
        await store.add("other::c", "x")

        assert sorted(await store.keys("clerq*")) == ["clerq::a", "clerq::b"]

    @pytest.mark.asyncio
    async def test_expire_missing_key(self, store):
        assert await store.expire("missing", 10) is False

    @pytest.mark.asyncio
    async def test_expiry(self, store, clock):
        await store.add("k", "a")
        assert await store.expire("k", 2) is True

        clock.advance(seconds=1.9)
        assert await store.members("k") == ["a"]

        clock.advance(seconds=0.1)
        assert await store.members("k") == []
        assert await store.keys("*") == []

    @pytest.mark.asyncio
    async def test_expire_refresh_resets_countdown(self, store, clock):
        await store.add("k", "a")
        await store.expire("k", 2)
        clock.advance(seconds=1.5)

        await store.expire("k", 2)
        clock.advance(seconds=1.5)

        assert await store.members("k") == ["a"]

    @pytest.mark.asyncio
    async def test_non_positive_expire_deletes(self, store):
        await store.add("k", "a")

        assert await store.expire("k", 0) is True
        assert await store.members("k") == []

    @pytest.mark.asyncio
    async def test_closed_store(self, store):
        await store.close()
        await store.close()

        with pytest.raises(StoreNotConnectedError):
            await store.add("k", "a")
        with pytest.raises(StoreNotConnectedError):
            await store.keys("*")

    @pytest.mark.asyncio
    async def test_clear(self, store):
        await store.add("k", "a")
        store.clear()

        assert await store.keys("*") == []
