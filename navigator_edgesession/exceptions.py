"""EdgeSession error taxonomy.

Signature and hex decoding failures are plain enum members carried inside
``Err``; store failures are ``StoreError`` instances carried the same way.
Only ``KeyDerivationError`` is ever raised.
"""
from enum import Enum
from typing import Optional


class SignatureError(str, Enum):
    MALFORMED = "malformed"
    INVALID = "invalid"


class DecodeError(str, Enum):
    ODD_LENGTH = "odd_length"
    INVALID_DIGIT = "invalid_digit"


class KeyDerivationError(RuntimeError):
    """The signing key could not be derived from the configured secret."""


class StoreError(Exception):
    """Opaque failure reported by a session store backend.

    Args:
        message: human readable description.
        operation: store operation that failed (``get``, ``set``, ...).
        key: store key or prefix involved, if any.
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        key: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.key = key

    def __repr__(self) -> str:
        return (
            f'<StoreError operation={self.operation!r} key={self.key!r}: '
            f'{self.message}>'
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StoreError):
            return NotImplemented
        return (
            self.message,
            self.operation,
            self.key
        ) == (other.message, other.operation, other.key)

    def __hash__(self) -> int:
        return hash((self.message, self.operation, self.key))
