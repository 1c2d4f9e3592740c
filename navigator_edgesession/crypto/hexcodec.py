"""Fixed-width byte <-> hex string conversion for MAC values."""
from ..exceptions import DecodeError
from ..result import Err, Ok, Result

# lowercase only, as produced by ``encode``
_HEXDIGITS = frozenset("0123456789abcdef")


def encode(data: bytes) -> str:
    """Lowercase hex, two digits per byte, no separators."""
    return data.hex()


def decode(text: str) -> Result[bytes, DecodeError]:
    """Parse a hex string back into bytes.

    ``bytes.fromhex`` tolerates whitespace between pairs, so every character
    is checked before parsing.
    """
    if len(text) % 2 != 0:
        return Err(DecodeError.ODD_LENGTH)
    if not _HEXDIGITS.issuperset(text):
        return Err(DecodeError.INVALID_DIGIT)
    return Ok(bytes.fromhex(text))
