"""
Signature — ``message.hexmac`` tokens for the session cookie.

The MAC is computed over the SHA-256 digest of the message, not over the
message itself: ``HMAC-SHA256(key, SHA256(message))``. Changing this breaks
every cookie already issued.
"""
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac

from ..exceptions import DecodeError, SignatureError
from ..result import Err, Ok, Result
from . import hexcodec
from .keys import KeyMaterial

SEPARATOR = "."


def _digest(message: str) -> bytes:
    h = hashes.Hash(hashes.SHA256())
    h.update(message.encode("utf-8"))
    return h.finalize()


class Signature:
    """Signs and verifies short strings with a secret-derived key."""

    def __init__(self, secret: str) -> None:
        self._key = KeyMaterial(secret)

    async def _mac(self) -> hmac.HMAC:
        return hmac.HMAC(await self._key.get(), hashes.SHA256())

    async def sign(self, message: str) -> str:
        """Return ``message`` followed by ``.`` and its hex encoded MAC."""
        mac = await self._mac()
        mac.update(_digest(message))
        return message + SEPARATOR + hexcodec.encode(mac.finalize())

    async def unsign(self, token: str) -> Result[str, SignatureError]:
        """Verify ``token`` and return its message part.

        Never raises on malformed input; every failure is an ``Err``.
        """
        parts = token.split(SEPARATOR)
        if len(parts) != 2 or not all(parts):
            return Err(SignatureError.MALFORMED)
        message, signed = parts
        decoded = hexcodec.decode(signed)
        if not decoded.success:
            # a digit outside [0-9a-f] can never match an issued MAC
            if decoded.error is DecodeError.INVALID_DIGIT:
                return Err(SignatureError.INVALID)
            return Err(SignatureError.MALFORMED)
        mac = await self._mac()
        mac.update(_digest(message))
        try:
            # constant-time comparison
            mac.verify(decoded.data)
        except InvalidSignature:
            return Err(SignatureError.INVALID)
        return Ok(message)
