"""
Tests for the session store backends.

Tests cover:
- MemorySessionStore get/set/delete/delete_all/take_and_delete and expiry
- RedisSessionStore command mapping and error conversion
- store_operation error conversion
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from navigator_edgesession.exceptions import StoreError
from navigator_edgesession.result import Err, Ok
from navigator_edgesession.storages import (
    AtomicTake,
    MemorySessionStore,
    SessionStore,
    store_operation
)
from navigator_edgesession.storages.redis_store import RedisSessionStore


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def memory():
    return MemorySessionStore()


@pytest.fixture
def redis_client():
    client = AsyncMock()
    client.get.return_value = None
    client.getdel.return_value = None
    return client


# --- Test MemorySessionStore ---

class TestMemorySessionStore:
    """Tests for the in-memory backend."""

    def test_implements_protocols(self, memory):
        """Test the memory store satisfies both store protocols."""
        assert isinstance(memory, SessionStore)
        assert isinstance(memory, AtomicTake)

    @pytest.mark.asyncio
    async def test_get_missing(self, memory):
        """Test a missing key reads as None."""
        assert await memory.get("data:x:a") == Ok(None)

    @pytest.mark.asyncio
    async def test_set_get(self, memory):
        """Test a stored value is read back."""
        assert await memory.set("data:x:a", '"v"') == Ok(None)
        assert await memory.get("data:x:a") == Ok('"v"')
        assert "data:x:a" in memory

    @pytest.mark.asyncio
    async def test_delete(self, memory):
        """Test delete removes the key."""
        await memory.set("data:x:a", "1")
        assert await memory.delete("data:x:a") == Ok(None)
        assert await memory.get("data:x:a") == Ok(None)

    @pytest.mark.asyncio
    async def test_delete_missing(self, memory):
        """Test deleting a missing key succeeds."""
        assert await memory.delete("data:x:a") == Ok(None)

    @pytest.mark.asyncio
    async def test_delete_all_prefix(self, memory):
        """Test delete_all only removes keys under the prefix."""
        await memory.set("data:x:a", "1")
        await memory.set("data:x:b", "2")
        await memory.set("data:y:a", "3")
        assert await memory.delete_all("data:x:") == Ok(None)
        assert len(memory) == 1
        assert "data:y:a" in memory

    @pytest.mark.asyncio
    async def test_take_and_delete(self, memory):
        """Test take_and_delete returns the value once."""
        await memory.set("flash:x:a", "true", expires_in=60)
        assert await memory.take_and_delete("flash:x:a") == Ok("true")
        assert await memory.take_and_delete("flash:x:a") == Ok(None)

    @pytest.mark.asyncio
    async def test_expired_entry(self):
        """Test expired entries read as missing."""
        clock = FakeClock()
        memory = MemorySessionStore(clock=clock)
        await memory.set("flash:x:a", "true", expires_in=10)
        clock.now += 11
        assert await memory.get("flash:x:a") == Ok(None)
        assert len(memory) == 0

    @pytest.mark.asyncio
    async def test_set_without_expiry_clears_previous(self):
        """Test setting without expiry drops a previous expiry."""
        clock = FakeClock()
        memory = MemorySessionStore(clock=clock)
        await memory.set("data:x:a", "1", expires_in=10)
        await memory.set("data:x:a", "2")
        clock.now += 11
        assert await memory.get("data:x:a") == Ok("2")


# --- Test RedisSessionStore ---

class TestRedisSessionStore:
    """Tests for the redis.asyncio backend."""

    def test_implements_protocols(self, redis_client):
        """Test the redis store satisfies both store protocols."""
        store = RedisSessionStore(redis_client)
        assert isinstance(store, SessionStore)
        assert isinstance(store, AtomicTake)

    @pytest.mark.asyncio
    async def test_get_decodes_bytes(self, redis_client):
        """Test bytes replies are decoded to str."""
        redis_client.get.return_value = b'{"foo": "bar"}'
        store = RedisSessionStore(redis_client)
        assert await store.get("data:x:a") == Ok('{"foo": "bar"}')
        redis_client.get.assert_awaited_once_with("data:x:a")

    @pytest.mark.asyncio
    async def test_get_missing(self, redis_client):
        """Test a missing key reads as None."""
        store = RedisSessionStore(redis_client)
        assert await store.get("data:x:a") == Ok(None)

    @pytest.mark.asyncio
    async def test_set_with_expiry(self, redis_client):
        """Test set passes the expiry as ex."""
        store = RedisSessionStore(redis_client)
        assert await store.set("flash:x:a", "true", expires_in=120) == Ok(None)
        redis_client.set.assert_awaited_once_with("flash:x:a", "true", ex=120)

    @pytest.mark.asyncio
    async def test_delete(self, redis_client):
        """Test delete maps to DEL."""
        store = RedisSessionStore(redis_client)
        assert await store.delete("data:x:a") == Ok(None)
        redis_client.delete.assert_awaited_once_with("data:x:a")

    @pytest.mark.asyncio
    async def test_delete_all_scans_prefix(self, redis_client):
        """Test delete_all scans the prefix and deletes every match."""
        async def scan(match=None, count=None):
            for key in ("data:x:a", "data:x:b"):
                yield key

        redis_client.scan_iter = MagicMock(side_effect=scan)
        store = RedisSessionStore(redis_client)
        assert await store.delete_all("data:x:") == Ok(None)
        redis_client.scan_iter.assert_called_once_with(match="data:x:*", count=100)
        assert redis_client.delete.await_count == 2

    @pytest.mark.asyncio
    async def test_delete_all_nothing_to_delete(self, redis_client):
        """Test delete_all with no matches issues no DEL."""
        async def scan(match=None, count=None):
            return
            yield

        redis_client.scan_iter = MagicMock(side_effect=scan)
        store = RedisSessionStore(redis_client)
        assert await store.delete_all("data:x:") == Ok(None)
        redis_client.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_take_and_delete_uses_getdel(self, redis_client):
        """Test take_and_delete maps to GETDEL."""
        redis_client.getdel.return_value = "true"
        store = RedisSessionStore(redis_client)
        assert await store.take_and_delete("flash:x:a") == Ok("true")
        redis_client.getdel.assert_awaited_once_with("flash:x:a")

    @pytest.mark.asyncio
    async def test_redis_error_becomes_store_error(self, redis_client):
        """Test redis errors become StoreError results."""
        redis_client.get.side_effect = RedisConnectionError("connection refused")
        store = RedisSessionStore(redis_client)
        res = await store.get("data:x:a")
        assert res == Err(StoreError("connection refused", operation="get", key="data:x:a"))

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self, redis_client):
        """Test non-redis errors propagate."""
        redis_client.set.side_effect = ValueError("bad value")
        store = RedisSessionStore(redis_client)
        with pytest.raises(ValueError):
            await store.set("data:x:a", object())


# --- Test store_operation ---

class TestStoreOperation:
    """Tests for the Result-returning wrapper."""

    @pytest.mark.asyncio
    async def test_wraps_return_value(self):
        """Test the return value is wrapped in Ok."""
        class Store:
            @store_operation(KeyError)
            async def get(self, key):
                return key.upper()

        assert await Store().get("abc") == Ok("ABC")

    @pytest.mark.asyncio
    async def test_converts_listed_errors(self):
        """Test listed exceptions become Err(StoreError)."""
        class Store:
            @store_operation(KeyError)
            async def get(self, key):
                raise KeyError(key)

        res = await Store().get("abc")
        assert isinstance(res, Err)
        assert res.error.operation == "get"
        assert res.error.key == "abc"
