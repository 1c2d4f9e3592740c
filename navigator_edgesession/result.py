"""Tagged success/failure values returned by every session operation."""
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``data``."""
    data: T = None
    success = True


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying ``error``."""
    error: E
    success = False


Result = Union[Ok[T], Err[E]]
