"""Navigator EdgeSession.

Signed, cookie-addressed session state for stateless request handlers.
"""
from .version import (
    __title__,
    __description__,
    __version__,
    __author__,
    __author_email__,
    __license__
)
from .conf import SESSION_COOKIE, EdgeSessionConfig
from .cookies import AiohttpCookieJar, RequestCookies, ResponseCookies
from .crypto import KeyMaterial, Signature
from .exceptions import (
    DecodeError,
    KeyDerivationError,
    SignatureError,
    StoreError
)
from .result import Err, Ok, Result
from .session import EdgeSession
from .storages import AtomicTake, MemorySessionStore, SessionStore

__all__ = (
    "__version__",
    "SESSION_COOKIE",
    "EdgeSessionConfig",
    "AiohttpCookieJar",
    "RequestCookies",
    "ResponseCookies",
    "KeyMaterial",
    "Signature",
    "DecodeError",
    "KeyDerivationError",
    "SignatureError",
    "StoreError",
    "Err",
    "Ok",
    "Result",
    "EdgeSession",
    "AtomicTake",
    "MemorySessionStore",
    "SessionStore",
)
