# models/lookup.py
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True)
class Absent:
    """A lookup that produced nothing. `reason` is for logs only."""
    reason: str


Lookup = Union[Found[T], Absent]
