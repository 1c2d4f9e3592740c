"""
Key Material — lazily derived, memoized HMAC-SHA256 signing key.

Security Note:
    Never log key material.
"""
import asyncio
import logging
from typing import Optional

from ..exceptions import KeyDerivationError

logger = logging.getLogger("navigator.edgesession")


class KeyMaterial:
    """One-shot cell holding the signing key derived from ``secret``.

    The first ``get()`` derives the key; concurrent callers wait on the same
    lock and every later call returns the cached bytes.
    """

    def __init__(self, secret: str) -> None:
        if not isinstance(secret, str) or not secret:
            raise KeyDerivationError("Signing secret must be a non-empty string")
        self._secret = secret
        self._key: Optional[bytes] = None
        self._lock = asyncio.Lock()

    def _derive(self) -> bytes:
        # raw import: the secret bytes are the HMAC key
        try:
            return self._secret.encode("utf-8")
        except UnicodeEncodeError as err:
            raise KeyDerivationError(
                "Signing secret is not encodable as UTF-8"
            ) from err

    @property
    def ready(self) -> bool:
        return self._key is not None

    async def get(self) -> bytes:
        if self._key is not None:
            return self._key
        async with self._lock:
            if self._key is None:
                self._key = self._derive()
                logger.debug("Session signing key derived")
        return self._key
