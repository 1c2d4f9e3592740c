"""Redis-backed session store using ``redis.asyncio``."""
import asyncio
import logging
from typing import Any, Optional

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from .abstract import store_operation

logger = logging.getLogger("navigator.edgesession")


class RedisSessionStore:
    """Session store backed by a ``redis.asyncio`` client.

    Payloads are stored as the serialized strings handed over by the
    session engine; ``delete_all`` scans ``<prefix>*`` and deletes the
    matches concurrently.
    """

    def __init__(self, client: Any, scan_count: int = 100) -> None:
        self._client = client
        self._scan_count = scan_count

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "RedisSessionStore":
        client = aioredis.from_url(url, decode_responses=True, **kwargs)
        return cls(client)

    async def close(self) -> None:
        await self._client.aclose()

    @staticmethod
    def _decode(raw: Any) -> Any:
        if isinstance(raw, bytes):
            return raw.decode("utf-8")
        return raw

    @store_operation(RedisError)
    async def get(self, key: str) -> Any:
        return self._decode(await self._client.get(key))

    @store_operation(RedisError)
    async def set(self, key: str, value: Any, expires_in: Optional[int] = None) -> None:
        await self._client.set(key, value, ex=expires_in)

    @store_operation(RedisError)
    async def delete(self, key: str) -> None:
        await self._client.delete(key)

    @store_operation(RedisError)
    async def delete_all(self, prefix: str) -> None:
        keys = [
            key async for key in self._client.scan_iter(
                match=f"{prefix}*", count=self._scan_count
            )
        ]
        if not keys:
            return
        await asyncio.gather(*(self._client.delete(key) for key in keys))
        logger.debug("Deleted %d key(s) under session prefix", len(keys))

    @store_operation(RedisError)
    async def take_and_delete(self, key: str) -> Any:
        # GETDEL needs Redis >= 6.2
        return self._decode(await self._client.getdel(key))
