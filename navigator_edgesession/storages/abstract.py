"""Session store protocol.

Every backend (in-memory, Redis, managed KV...) exposes the same four
coroutines and reports failures as ``Err(StoreError)`` instead of raising.
"""
import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Optional, Protocol, runtime_checkable

from ..exceptions import StoreError
from ..result import Err, Ok, Result

logger = logging.getLogger("navigator.edgesession")


@runtime_checkable
class SessionStore(Protocol):
    """Abstract key-value persistence for session entries."""

    async def get(self, key: str) -> Result[Any, StoreError]: ...

    async def set(
        self,
        key: str,
        value: Any,
        expires_in: Optional[int] = None
    ) -> Result[None, StoreError]: ...

    async def delete(self, key: str) -> Result[None, StoreError]: ...

    async def delete_all(self, prefix: str) -> Result[None, StoreError]: ...


@runtime_checkable
class AtomicTake(Protocol):
    """Optional capability: read a key and remove it in one step."""

    async def take_and_delete(self, key: str) -> Result[Any, StoreError]: ...


def store_operation(
    *errors: type[BaseException]
) -> Callable[[Callable[..., Awaitable[Any]]], Callable[..., Awaitable[Result]]]:
    """Turn a raising store coroutine into a ``Result`` returning one.

    Only the listed backend exceptions are converted; anything else
    propagates.
    """
    catch = errors or (Exception,)

    def decorator(fn: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Result]]:
        @functools.wraps(fn)
        async def wrapper(self, key: str, *args, **kwargs) -> Result:
            try:
                data = await fn(self, key, *args, **kwargs)
            except catch as err:
                logger.error(
                    "Session store %s failed for %s: %s",
                    fn.__name__, key, err,
                )
                return Err(StoreError(str(err), operation=fn.__name__, key=key))
            return Ok(data)
        return wrapper
    return decorator
