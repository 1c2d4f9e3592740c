"""In-memory session store."""
import time
import logging
from collections.abc import Callable
from typing import Any, Optional

from ..exceptions import StoreError
from ..result import Ok, Result
from .abstract import store_operation

logger = logging.getLogger("navigator.edgesession")


class MemorySessionStore:
    """Dict-backed store for tests and single-process deployments.

    Entries may carry an expiry (seconds); expired entries are dropped
    lazily when touched. Not shared between processes.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._data: dict[str, Any] = {}
        self._expires: dict[str, float] = {}

    def _expired(self, key: str) -> bool:
        deadline = self._expires.get(key)
        if deadline is not None and deadline <= self._clock():
            self._data.pop(key, None)
            self._expires.pop(key, None)
            return True
        return False

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._data and not self._expired(key)

    def __len__(self) -> int:
        return sum(1 for key in list(self._data) if not self._expired(key))

    @store_operation()
    async def get(self, key: str) -> Any:
        if self._expired(key):
            return None
        return self._data.get(key)

    @store_operation()
    async def set(self, key: str, value: Any, expires_in: Optional[int] = None) -> None:
        self._data[key] = value
        if expires_in is not None:
            self._expires[key] = self._clock() + expires_in
        else:
            self._expires.pop(key, None)

    @store_operation()
    async def delete(self, key: str) -> None:
        self._data.pop(key, None)
        self._expires.pop(key, None)

    @store_operation()
    async def delete_all(self, prefix: str) -> None:
        keys = [k for k in self._data if k.startswith(prefix)]
        for key in keys:
            self._data.pop(key, None)
            self._expires.pop(key, None)
        logger.debug("Deleted %d key(s) under session prefix", len(keys))

    async def take_and_delete(self, key: str) -> Result[Any, StoreError]:
        # no await between read and removal
        if self._expired(key):
            return Ok(None)
        self._expires.pop(key, None)
        return Ok(self._data.pop(key, None))
