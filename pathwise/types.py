"""
Outcome types for pathwise.

Either (Left/Right) backs the fail-fast Decoder; Outcome (Success/Failure)
backs the error-accumulating Validator. Each variant implements its
combinators directly so that matching on the variant is all a caller needs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from .errors import Error, UnwrapError
from .seq import Seq

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Left(Generic[E]):
    """Failed computation holding a single error."""

    error: E

    def is_left(self) -> bool:
        return True

    def is_right(self) -> bool:
        return False

    def map(self, f: Callable[[Any], Any]) -> Left[E]:
        return self

    def map_left(self, f: Callable[[E], U]) -> Left[U]:
        return Left(f(self.error))

    def bind(self, f: Callable[[Any], Either[E, U]]) -> Left[E]:
        return self

    def apply(self, other: Either[E, Any]) -> Left[E]:
        return self

    def or_else(self, f: Callable[[E], Either[Any, T]]) -> Either[Any, T]:
        return f(self.error)

    def unwrap_or_else(self, f: Callable[[E], T]) -> T:
        return f(self.error)

    def unwrap(self) -> Any:
        raise UnwrapError(Seq.singleton(self.error), str(self.error))


@dataclass(frozen=True, slots=True)
class Right(Generic[T]):
    """Successful computation holding a value."""

    value: T

    def is_left(self) -> bool:
        return False

    def is_right(self) -> bool:
        return True

    def map(self, f: Callable[[T], U]) -> Right[U]:
        return Right(f(self.value))

    def map_left(self, f: Callable[[Any], Any]) -> Right[T]:
        return self

    def bind(self, f: Callable[[T], Either[E, U]]) -> Either[E, U]:
        return f(self.value)

    def apply(self, other: Either[E, Any]) -> Either[E, Any]:
        """Apply the held function to `other`'s value; `other`'s Left wins."""
        if isinstance(other, Left):
            return other
        return Right(self.value(other.value))

    def or_else(self, f: Callable[[Any], Any]) -> Right[T]:
        return self

    def unwrap_or_else(self, f: Callable[[Any], Any]) -> T:
        return self.value

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """Validation passed."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def map(self, f: Callable[[T], U]) -> Success[U]:
        return Success(f(self.value))

    def map_failure(self, f: Callable[[Seq[Error]], Seq[Error]]) -> Success[T]:
        return self

    def bind(self, f: Callable[[T], Outcome[U]]) -> Outcome[U]:
        return f(self.value)

    def apply(self, other: Outcome[Any]) -> Outcome[Any]:
        if isinstance(other, Failure):
            return other
        return Success(self.value(other.value))

    def unwrap_or_else(self, f: Callable[[Seq[Error]], Any]) -> T:
        return self.value

    def unwrap(self) -> T:
        return self.value

    def to_either(self) -> Right[T]:
        return Right(self.value)


@dataclass(frozen=True, slots=True)
class Failure:
    """Validation failed with one or more errors."""

    errors: Seq[Error]

    def __post_init__(self) -> None:
        if self.errors.is_empty():
            raise ValueError("Failure requires at least one error")

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def map(self, f: Callable[[Any], Any]) -> Failure:
        return self

    def map_failure(self, f: Callable[[Seq[Error]], Seq[Error]]) -> Failure:
        return Failure(f(self.errors))

    def bind(self, f: Callable[[Any], Outcome[Any]]) -> Failure:
        return self

    def apply(self, other: Outcome[Any]) -> Failure:
        """Both sides failed: keep every error, ours first."""
        if isinstance(other, Failure):
            return Failure(self.errors.append(other.errors))
        return self

    def unwrap_or_else(self, f: Callable[[Seq[Error]], T]) -> T:
        return f(self.errors)

    def unwrap(self) -> Any:
        raise UnwrapError(self.errors, self.errors.intercalate("; "))

    def to_either(self) -> Left[Error]:
        return Left(self.errors.head)


# Type aliases
Either = Union[Left[E], Right[T]]
Outcome = Union[Success[T], Failure]
