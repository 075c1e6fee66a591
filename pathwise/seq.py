"""
Persistent singly-linked sequence.

Seq is the container behind error lists and combinator fan-out. Every
operation returns a new sequence; cons and append share the untouched tail
with their input. Operations loop over the cells instead of recursing, so
long sequences never grow the call stack.
"""

from __future__ import annotations

from itertools import islice
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class Seq(Generic[T]):
    """
    Immutable ordered list: either empty, or a head followed by a tail.

    Usage:
        Seq.from_iterable([1, 2, 3]).map(str).intercalate(", ")  # "1, 2, 3"
        Seq.empty().cons(2).cons(1)                              # Seq([1, 2])
    """

    __slots__ = ("_head", "_tail", "_size")

    _head: T
    _tail: Seq[T] | None
    _size: int

    def __init__(self) -> None:
        self._tail = None
        self._size = 0

    # Construction

    @classmethod
    def empty(cls) -> Seq[Any]:
        return _EMPTY

    mempty = empty

    @classmethod
    def singleton(cls, value: T) -> Seq[T]:
        return _EMPTY.cons(value)

    pure = singleton

    @classmethod
    def from_iterable(cls, values: Iterable[T]) -> Seq[T]:
        """Build a sequence keeping the iteration order of `values`."""
        if isinstance(values, Seq):
            return values
        return _build(list(values), _EMPTY)

    def cons(self, head: T) -> Seq[T]:
        """Prepend `head`; the receiver becomes the shared tail."""
        cell: Seq[T] = Seq.__new__(Seq)
        cell._head = head
        cell._tail = self
        cell._size = self._size + 1
        return cell

    # Inspection

    @property
    def head(self) -> T:
        if self._tail is None:
            raise IndexError("head of empty Seq")
        return self._head

    @property
    def tail(self) -> Seq[T]:
        if self._tail is None:
            raise IndexError("tail of empty Seq")
        return self._tail

    def is_empty(self) -> bool:
        return self._tail is None

    def length(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        cell = self
        while cell._tail is not None:
            yield cell._head
            cell = cell._tail

    def to_list(self) -> list[T]:
        return list(self)

    # Monoid

    def append(self, other: Seq[T]) -> Seq[T]:
        """Concatenate; `other` is reused as-is as the tail of the result."""
        if self._tail is None:
            return other
        if other._tail is None:
            return self
        return _build(list(self), other)

    combine = append

    def __add__(self, other: Seq[T]) -> Seq[T]:
        if not isinstance(other, Seq):
            return NotImplemented
        return self.append(other)

    def concat(self: Seq[Seq[U]]) -> Seq[U]:
        """Flatten a sequence of sequences."""
        result: Seq[U] = _EMPTY
        for part in reversed(list(self)):
            result = part.append(result)
        return result

    # Functor / Applicative / Monad

    def map(self, f: Callable[[T], U]) -> Seq[U]:
        return _build([f(x) for x in self], _EMPTY)

    def bind(self, f: Callable[[T], Seq[U]]) -> Seq[U]:
        return self.map(f).concat()

    def apply(self: Seq[Callable[[Any], U]], other: Seq[Any]) -> Seq[U]:
        return _build([f(x) for f in self for x in other], _EMPTY)

    # Folds

    def foldl(self, f: Callable[[U, T], U], initial: U) -> U:
        acc = initial
        for x in self:
            acc = f(acc, x)
        return acc

    def foldr(self, f: Callable[[T, U], U], initial: U) -> U:
        acc = initial
        for x in reversed(list(self)):
            acc = f(x, acc)
        return acc

    # Reshaping

    def reverse(self) -> Seq[T]:
        result: Seq[T] = _EMPTY
        for x in self:
            result = result.cons(x)
        return result

    def take(self, n: int) -> Seq[T]:
        if n >= self._size:
            return self
        return _build(list(islice(self, max(n, 0))), _EMPTY)

    def zip_with_index(self) -> Seq[tuple[int, T]]:
        return _build(list(enumerate(self)), _EMPTY)

    def intercalate(self, separator: str) -> str:
        return separator.join(str(x) for x in self)

    # Value semantics

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Seq):
            return NotImplemented
        if self._size != other._size:
            return False
        return all(a == b for a, b in zip(self, other))

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f"Seq({list(self)!r})"


def _build(items: list[T], tail: Seq[T]) -> Seq[T]:
    """Cons `items` in front of `tail`, keeping their order."""
    result = tail
    for x in reversed(items):
        result = result.cons(x)
    return result


_EMPTY: Seq[Any] = Seq()
