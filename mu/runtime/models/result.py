"""
Result wrapper for handlers.

Lets a handler say "this failed" without raising:

    async def retrieve(req: UserQuery) -> Result[User, str]:
        user = await repository.find(req.email)
        return Ok(user) if user else Err("unknown user")

The invocation loop publishes Ok values as responses and Err causes as
errors; the ALB adapter turns them into 200 and 500 responses.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


class Result(ABC, Generic[T, E]):
    """Either Ok(value) or Err(cause)."""

    __slots__ = ()

    @abstractmethod
    def is_ok(self) -> bool: ...


@dataclass(frozen=True)
class Ok(Result[T, E]):
    value: T

    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err(Result[T, E]):
    cause: E

    def is_ok(self) -> bool:
        return False
