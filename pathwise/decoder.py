"""
Fail-fast decoders.

A Decoder turns a raw value into a typed one, stopping at the first problem.
Decoders are immutable values built from primitives and combinators:

    user = Decoder.lift(
        User,
        Decoder.string().required().field("name"),
        Decoder.int().field("age"),
    )
    user.decode({"name": "Ada", "age": "36"})  # Right(value=User(name='Ada', age=36))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterable, TypeVar

from .context import is_strict
from .errors import Error, Terminal
from .lib.coercion import to_bool, to_float, to_int
from .lib.core_helpers import (
    get_field,
    get_index,
    is_array,
    is_email,
    is_empty,
    is_number,
    is_object,
    text_length,
)
from .lib.curry import curry
from .seq import Seq
from .types import Either, Failure, Left, Right, Success

if TYPE_CHECKING:
    from .validator import Validator

A = TypeVar("A")
B = TypeVar("B")


@dataclass(frozen=True, slots=True)
class Decoder(Generic[A]):
    """
    Immutable fail-fast decoder node.

    Wraps `run: value -> Either[Error, A]`. `type_hint` records the native
    type a primitive decoder yields; combinators that change the value
    drop it.
    """

    run: Callable[[Any], Either[Error, A]]
    type_hint: type | None = None

    def decode(self, value: Any) -> Either[Error, A]:
        """
        Decode a raw value.

        Returns:
            Right(result) if decoding succeeds
            Left(error) with the first problem found
        """
        return self.run(value)

    def __call__(self, value: Any) -> Either[Error, A]:
        return self.run(value)

    # Constructors

    @classmethod
    def succeed(cls, value: A) -> Decoder[A]:
        """Always succeed with `value`, ignoring the input."""
        return Decoder(lambda _: Right(value))

    pure = succeed

    @classmethod
    def fail(cls, message: str) -> Decoder[Any]:
        """Always fail with `message`, keeping the input as the bad value."""
        return Decoder(lambda v: Left(Terminal(message, v)))

    @classmethod
    def mixed(cls) -> Decoder[Any]:
        """Accept anything unchanged."""
        return Decoder(Right)

    @classmethod
    def null(cls, value: Any = None) -> Decoder[Any]:
        """Accept only None, producing `value`."""
        return cls.mixed().bind(
            lambda v: cls.succeed(value) if v is None else cls.fail("Expecting NULL")
        )

    @classmethod
    def one_of(cls, decoders: Iterable[Decoder[Any]]) -> Decoder[Any]:
        """
        Try each decoder in order and keep the first success.

        When all of them fail the error is an Alternatives holding every
        attempt's error in order; with no decoders at all it is empty.
        """
        options = tuple(decoders)

        def run(value: Any) -> Either[Error, Any]:
            errors: list[Error] = []
            for decoder in options:
                result = decoder.decode(value)
                if isinstance(result, Right):
                    return result
                errors.append(result.error)
            return Left(Error.alternatives(errors))

        return Decoder(run)

    @classmethod
    def lift(cls, f: Callable[..., B], first: Decoder[Any], *rest: Decoder[Any]) -> Decoder[B]:
        """
        Apply an n-ary function to the results of n decoders.

        All decoders read the same input; the first failure, left to right,
        is the one reported.
        """
        step = first.map(curry(f, 1 + len(rest)))
        for decoder in rest:
            step = step.apply(decoder)
        return step

    @classmethod
    def lazy(cls, thunk: Callable[[], Decoder[A]]) -> Decoder[A]:
        """Build the decoder on first use; lets recursive types refer to themselves."""
        cell: list[Decoder[A]] = []

        def run(value: Any) -> Either[Error, A]:
            if not cell:
                cell.append(thunk())
            return cell[0].decode(value)

        return Decoder(run)

    # Functor / Applicative / Monad

    def map(self, f: Callable[[A], B]) -> Decoder[B]:
        return Decoder(lambda v: self.decode(v).map(f))

    def bind(self, f: Callable[[A], Decoder[B]]) -> Decoder[B]:
        """
        Sequence another decoder chosen from this one's result.

        The next decoder runs on the decoded value, not on the original
        input, so `Decoder.string().bind(...)` sees a string.
        """

        def run(value: Any) -> Either[Error, B]:
            result = self.decode(value)
            if isinstance(result, Left):
                return result
            return f(result.value).decode(result.value)

        return Decoder(run)

    def apply(self: Decoder[Callable[[Any], B]], other: Decoder[Any]) -> Decoder[B]:
        """Decode both sides from the same input and apply ours to theirs."""
        return Decoder(lambda v: self.decode(v).apply(other.decode(v)))

    # Structure

    def field(self, name: str) -> Decoder[A]:
        """Decode `value[name]`; a missing key is decoded as None."""
        return Decoder(
            lambda v: self.decode(get_field(v, name)).map_left(lambda e: e.field(name))
        )

    def index(self, position: int) -> Decoder[A]:
        """Decode the element at `position`; out of range is decoded as None."""
        return Decoder(
            lambda v: self.decode(get_index(v, position)).map_left(
                lambda e: e.index(position)
            )
        )

    def array(self) -> Decoder[list[A]]:
        """
        Decode every element of a list or tuple.

        Every element is decoded; if any fail, the lowest-indexed failure is
        reported.
        """

        def run(value: Any) -> Either[Error, list[A]]:
            if not is_array(value):
                return Left(Terminal("Expecting an ARRAY", value))

            items: list[A] = []
            first_error: Error | None = None
            for i, item in enumerate(value):
                result = self.decode(item)
                if isinstance(result, Right):
                    items.append(result.value)
                elif first_error is None:
                    first_error = result.error.index(i)

            if first_error is not None:
                return Left(first_error)
            return Right(items)

        return Decoder(run)

    def nullable(self) -> Decoder[A | None]:
        return Decoder.one_of([Decoder.null(), self])

    # Checks

    def required(self) -> Decoder[A]:
        """
        Reject empty input, then decode with this decoder.

        Empty means None, "", 0, False or zero length. A number or boolean
        given to an int/float/bool decoder is a value, not an absence.
        """
        scalar = self.type_hint in (int, float, bool)

        def run(value: Any) -> Either[Error, A]:
            if is_empty(value) and not (scalar and is_number(value)):
                return Left(Terminal("Must not be empty", value))
            return self.decode(value)

        return Decoder(run, self.type_hint)

    def min(self, length: int) -> Decoder[A]:
        return self._check(
            lambda s: text_length(s) >= length,
            f"Expecting the string to be at least {length} characters",
        )

    def max(self, length: int) -> Decoder[A]:
        return self._check(
            lambda s: text_length(s) <= length,
            f"Expecting the string to be at most {length} characters",
        )

    def email(self) -> Decoder[A]:
        return self._check(is_email, "It's not a valid email address")

    def _check(self, predicate: Callable[[A], bool], message: str) -> Decoder[A]:
        checked = self.bind(
            lambda v: Decoder.succeed(v) if predicate(v) else Decoder.fail(message)
        )
        return Decoder(checked.run, self.type_hint)

    # Conversion

    def to_validator(self) -> Validator[A]:
        """Lift into a Validator whose failures carry this decoder's one error."""
        from .validator import Validator

        def run(value: Any):
            result = self.decode(value)
            if isinstance(result, Left):
                return Failure(Seq.singleton(result.error))
            return Success(result.value)

        return Validator(run, self.type_hint)

    # Primitives (defined last: they shadow builtins inside the class body)

    @classmethod
    def string(cls) -> Decoder[str]:
        return Decoder(
            lambda v: Right(v) if isinstance(v, str) else Left(Terminal("Expecting a STRING", v)),
            str,
        )

    @classmethod
    def int(cls) -> Decoder[Any]:
        return _coercing(to_int, "Expecting an INT", int)

    @classmethod
    def float(cls) -> Decoder[Any]:
        return _coercing(to_float, "Expecting a FLOAT", float)

    @classmethod
    def bool(cls) -> Decoder[Any]:
        return _coercing(to_bool, "Expecting a BOOL", bool)

    @classmethod
    def object(cls) -> Decoder[Any]:
        return Decoder(
            lambda v: Right(v) if is_object(v) else Left(Terminal("Expecting an OBJECT", v))
        )


def _coercing(coerce: Callable[[Any, bool], Any], message: str, hint: type) -> Decoder[Any]:
    strict = is_strict()

    def run(value: Any) -> Either[Error, Any]:
        coerced = coerce(value, strict)
        if coerced is None:
            return Left(Terminal(message, value))
        return Right(coerced)

    return Decoder(run, hint)
