"""
Result Type

Explicit success-or-failure values threaded through the request pipeline.

Services, the token resolver and the validator all return ``Ok`` or ``Err``
instead of raising, so the HTTP boundary can decide which error domain a
failure belongs to and return the matching response early.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying a domain error."""

    error: E


Result = Union[Ok[T], Err[E]]
