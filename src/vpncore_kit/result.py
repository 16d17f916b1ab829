"""Result type for API calls.

Every VpnAPI call returns either ``Ok(value)`` or ``Err(error)``; nothing is
raised across the API boundary. Both variants are frozen.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result holding the decoded value."""

    value: T

    @property
    def error(self) -> None:
        return None

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    is_success = is_ok
    is_failure = is_err

    def get(self) -> Optional[T]:
        return self.value

    def unwrap(self) -> T:
        return self.value

    def get_or_default(self, default: T) -> T:
        return self.value

    unwrap_or = get_or_default

    def map(self, func: Callable[[T], U]) -> "Result[U, Any]":
        return Ok(func(self.value))

    def flat_map(self, func: Callable[[T], "Result[U, F]"]) -> "Result[U, F]":
        return func(self.value)

    def map_err(self, func: Callable[[E], F]) -> "Result[T, F]":
        return self


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed result holding a classified error."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    is_success = is_ok
    is_failure = is_err

    def get(self) -> None:
        return None

    def unwrap(self):
        raise RuntimeError(f"Called unwrap() on Err: {self.error}")

    def get_or_default(self, default: T) -> T:
        return default

    unwrap_or = get_or_default

    def map(self, func: Callable[[Any], U]) -> "Result[U, E]":
        return self

    def flat_map(self, func: Callable[[Any], "Result[U, E]"]) -> "Result[U, E]":
        return self

    def map_err(self, func: Callable[[E], F]) -> "Result[Any, F]":
        return Err(func(self.error))


Result = Union[Ok[T], Err[E]]
