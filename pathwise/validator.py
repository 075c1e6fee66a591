"""
Error-accumulating validators.

A Validator has the same surface as a Decoder, but independent branches
(sibling fields, array elements) report all of their errors together, which
is what a form needs:

    signup = Validator.lift(
        Signup,
        Validator.string().required().email().field("email"),
        Validator.string().min(8).field("password"),
    )
    signup.validate({"email": "nope", "password": "short"})
    # Failure with one error for .email and one for .password
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, TypeVar

from .context import is_strict
from .decoder import Decoder
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
from .types import Failure, Left, Outcome, Right, Success

A = TypeVar("A")
B = TypeVar("B")


def _failure(message: str, value: Any) -> Failure:
    return Failure(Seq.singleton(Terminal(message, value)))


@dataclass(frozen=True, slots=True)
class Validator(Generic[A]):
    """
    Immutable error-accumulating validator node.

    Wraps `run: value -> Outcome[A]`; `type_hint` as on Decoder.
    """

    run: Callable[[Any], Outcome[A]]
    type_hint: type | None = None

    def validate(self, value: Any) -> Outcome[A]:
        """
        Validate a raw value.

        Returns:
            Success(result) if validation passes
            Failure(errors) with every problem found, never empty
        """
        return self.run(value)

    def __call__(self, value: Any) -> Outcome[A]:
        return self.run(value)

    # Constructors

    @classmethod
    def succeed(cls, value: A) -> Validator[A]:
        return Validator(lambda _: Success(value))

    pure = succeed

    @classmethod
    def fail(cls, message: str) -> Validator[Any]:
        return Validator(lambda v: _failure(message, v))

    @classmethod
    def mixed(cls) -> Validator[Any]:
        return Validator(Success)

    @classmethod
    def null(cls, value: Any = None) -> Validator[Any]:
        return cls.mixed().bind(
            lambda v: cls.succeed(value) if v is None else cls.fail("This field must be null")
        )

    @classmethod
    def one_of(cls, validators: Iterable[Validator[Any]]) -> Validator[Any]:
        """
        Try each validator in order and keep the first success.

        On total failure the result holds a single Alternatives error whose
        entries are all the alternatives' errors, flattened in order.
        """
        options = tuple(validators)

        def run(value: Any) -> Outcome[Any]:
            errors: Seq[Error] = Seq.empty()
            for validator in options:
                result = validator.validate(value)
                if isinstance(result, Success):
                    return result
                errors = errors.append(result.errors)
            return Failure(Seq.singleton(Error.alternatives(errors)))

        return Validator(run)

    @classmethod
    def lift(
        cls, f: Callable[..., B], first: Validator[Any], *rest: Validator[Any]
    ) -> Validator[B]:
        """
        Apply an n-ary function to the results of n validators.

        Every validator runs; the errors of all failing ones are collected
        in argument order.
        """
        step = first.map(curry(f, 1 + len(rest)))
        for validator in rest:
            step = step.apply(validator)
        return step

    @classmethod
    def lazy(cls, thunk: Callable[[], Validator[A]]) -> Validator[A]:
        cell: list[Validator[A]] = []

        def run(value: Any) -> Outcome[A]:
            if not cell:
                cell.append(thunk())
            return cell[0].validate(value)

        return Validator(run)

    # Functor / Applicative / Monad

    def map(self, f: Callable[[A], B]) -> Validator[B]:
        return Validator(lambda v: self.validate(v).map(f))

    def bind(self, f: Callable[[A], Validator[B]]) -> Validator[B]:
        """Sequence on the validated value; a failure here stops the chain."""

        def run(value: Any) -> Outcome[B]:
            result = self.validate(value)
            if isinstance(result, Failure):
                return result
            return f(result.value).validate(result.value)

        return Validator(run)

    def apply(self: Validator[Callable[[Any], B]], other: Validator[Any]) -> Validator[B]:
        """Validate both sides from the same input; if both fail, keep both."""
        return Validator(lambda v: self.validate(v).apply(other.validate(v)))

    # Structure

    def field(self, name: str) -> Validator[A]:
        return Validator(
            lambda v: self.validate(get_field(v, name)).map_failure(
                lambda errors: errors.map(lambda e: e.field(name))
            )
        )

    def index(self, position: int) -> Validator[A]:
        return Validator(
            lambda v: self.validate(get_index(v, position)).map_failure(
                lambda errors: errors.map(lambda e: e.index(position))
            )
        )

    def array(self) -> Validator[list[A]]:
        """Validate every element, collecting the errors of all failing ones."""

        def run(value: Any) -> Outcome[list[A]]:
            if not is_array(value):
                return _failure("This field must be an array", value)

            items: list[A] = []
            errors: list[Error] = []
            for i, item in enumerate(value):
                result = self.validate(item)
                if isinstance(result, Success):
                    items.append(result.value)
                else:
                    errors.extend(e.index(i) for e in result.errors)

            if errors:
                return Failure(Seq.from_iterable(errors))
            return Success(items)

        return Validator(run)

    def nullable(self) -> Validator[A | None]:
        return Validator.one_of([Validator.null(), self])

    # Checks

    def required(self) -> Validator[A]:
        scalar = self.type_hint in (int, float, bool)

        def run(value: Any) -> Outcome[A]:
            if is_empty(value) and not (scalar and is_number(value)):
                return _failure("This field is required", value)
            return self.validate(value)

        return Validator(run, self.type_hint)

    def min(self, length: int) -> Validator[A]:
        return self._check(
            lambda s: text_length(s) >= length, f"Must be at least {length} characters"
        )

    def max(self, length: int) -> Validator[A]:
        return self._check(
            lambda s: text_length(s) <= length,
            f"Must not be greater than {length} characters",
        )

    def email(self) -> Validator[A]:
        return self._check(is_email, "It's not a valid email address")

    def _check(self, predicate: Callable[[A], bool], message: str) -> Validator[A]:
        checked = self.bind(
            lambda v: Validator.succeed(v) if predicate(v) else Validator.fail(message)
        )
        return Validator(checked.run, self.type_hint)

    # Conversion

    def to_decoder(self) -> Decoder[A]:
        """Lower to a Decoder that reports only the first collected error."""

        def run(value: Any):
            result = self.validate(value)
            if isinstance(result, Failure):
                return Left(result.errors.head)
            return Right(result.value)

        return Decoder(run, self.type_hint)

    # Primitives (defined last: they shadow builtins inside the class body)

    @classmethod
    def string(cls) -> Validator[str]:
        return Validator(
            lambda v: Success(v)
            if isinstance(v, str)
            else _failure("This field must be a string", v),
            str,
        )

    @classmethod
    def int(cls) -> Validator[Any]:
        return _coercing(to_int, "This field must be an integer", int)

    @classmethod
    def float(cls) -> Validator[Any]:
        return _coercing(to_float, "This field must be a number", float)

    @classmethod
    def bool(cls) -> Validator[Any]:
        return _coercing(to_bool, "This field must be true or false", bool)

    @classmethod
    def object(cls) -> Validator[Any]:
        return Validator(
            lambda v: Success(v) if is_object(v) else _failure("This field must be an object", v)
        )


def _coercing(coerce: Callable[[Any, bool], Any], message: str, hint: type) -> Validator[Any]:
    strict = is_strict()

    def run(value: Any) -> Outcome[Any]:
        coerced = coerce(value, strict)
        if coerced is None:
            return _failure(message, value)
        return Success(coerced)

    return Validator(run, hint)
