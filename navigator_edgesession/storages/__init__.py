"""Session store backends."""
from .abstract import AtomicTake, SessionStore, store_operation
from .memory import MemorySessionStore

__all__ = (
    "AtomicTake",
    "SessionStore",
    "MemorySessionStore",
    "store_operation",
)
