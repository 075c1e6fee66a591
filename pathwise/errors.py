"""
Path-annotated error tree produced by decoders and validators.

An error is one of four shapes. Field and Index record the step taken into
the input; Alternatives holds one error per attempted option of a one_of;
Terminal is the leaf carrying the message and the offending value. Walking
from the root to the leaf rebuilds the access path, e.g. `.user.tags[2]`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from pydantic_core import to_json

from .seq import Seq


class Error:
    """Common surface of the four error shapes."""

    __slots__ = ()

    def field(self, name: str) -> Field:
        """Record that this error happened under field `name`."""
        return Field(name, self)

    def index(self, position: int) -> Index:
        """Record that this error happened at `position` of a collection."""
        return Index(position, self)

    @staticmethod
    def alternatives(errors: Iterable[Error]) -> Alternatives:
        return Alternatives(Seq.from_iterable(errors))

    @staticmethod
    def terminal(message: str, value: Any) -> Terminal:
        return Terminal(message, value)

    def to_pair(self) -> tuple[str, str]:
        """
        Render as `(path, message)`.

        Returns:
            The path to the failing value (`""` at the root) and the leaf
            message, without the narrative wrapper of `str(error)`.
        """
        path, leaf = _descend(self)
        match leaf:
            case Terminal(message=message):
                return path, message
            case Alternatives(errors=errors) if errors.is_empty():
                return path, "No possibilities!"
            case Alternatives(errors=errors):
                return path, errors.map(lambda e: e.to_pair()[1]).intercalate(" / ")
        raise TypeError(f"Unknown error shape: {leaf!r}")

    def __str__(self) -> str:
        path, leaf = _descend(self)
        match leaf:
            case Terminal(message=message, value=value):
                where = f"value at {path}" if path else "given value"
                return f"Problem with the {where}: {render_value(value)}: {message}"
            case Alternatives(errors=errors) if errors.is_empty():
                where = f" at {path}" if path else "!"
                return f"Ran into an alternatives-step with no possibilities{where}"
            case Alternatives(errors=errors):
                starter = f"The alternatives-step at {path}" if path else "alternatives"
                ways = (
                    errors.zip_with_index()
                    .map(lambda pair: f"({pair[0] + 1}) {pair[1]}")
                    .intercalate("; ")
                )
                return f"{starter} failed in the following {len(errors)} ways: {ways}"
        raise TypeError(f"Unknown error shape: {leaf!r}")


@dataclass(frozen=True, slots=True)
class Field(Error):
    """Failure while decoding the field `name` of a mapping."""

    name: str
    error: Error


@dataclass(frozen=True, slots=True)
class Index(Error):
    """Failure at `position` inside an ordered collection."""

    position: int
    error: Error


@dataclass(frozen=True, slots=True)
class Alternatives(Error):
    """Every option of a one_of failed; one entry per error, in order."""

    errors: Seq[Error]


@dataclass(frozen=True, slots=True)
class Terminal(Error):
    """Leaf failure: the message and the raw value that caused it."""

    message: str
    value: Any


class UnwrapError(ValueError):
    """Raised by `unwrap()` when a decode or validate result is a failure."""

    def __init__(self, errors: Seq[Error], message: str):
        super().__init__(message)
        self.errors = errors


def render_value(value: Any) -> str:
    """Compact JSON for the offending value; `repr` for what JSON can't hold."""
    try:
        return to_json(value, fallback=repr).decode()
    except ValueError:
        # circular containers
        return repr(value)


def _segment(step: Error) -> str:
    match step:
        case Field(name=name):
            name = str(name)
            return f".{name}" if name.isidentifier() else f"['{name}']"
        case Index(position=position):
            return f"[{position}]"
    raise TypeError(f"Not a path step: {step!r}")


def _descend(error: Error) -> tuple[str, Error]:
    """
    Follow Field/Index steps and single-option Alternatives down to the
    error that carries the message, collecting the path on the way.
    """
    segments: list[str] = []
    current = error
    while True:
        match current:
            case Field(error=inner) | Index(error=inner):
                segments.append(_segment(current))
                current = inner
            case Alternatives(errors=errors) if len(errors) == 1:
                current = errors.head
            case _:
                return "".join(segments), current
