"""
Mixins that give a class its own derived decoder or validator.

    @dataclass
    class Point(Decodable):
        x: int
        y: int

    Point.decode({"x": 1, "y": 2})  # Right(value=Point(x=1, y=2))

A nested field typed with such a class uses the class's own `decoder()` when a
Decoder is derived and its own `validator()` when a Validator is; a class
without the matching method is derived from its fields. Derived decoders are
built once per class.
"""

from __future__ import annotations

from typing import Any

from .decoder import Decoder
from .errors import Error
from .introspect import schema_for
from .schema import Layout, derive_for
from .types import Either, Outcome
from .validator import Validator

_DERIVED: dict[tuple[type, Any], Any] = {}


def _derived(cls: type, engine: Any) -> Any:
    key = (cls, engine)
    if key not in _DERIVED:
        _DERIVED[key] = derive_for(schema_for(cls), engine)
    return _DERIVED[key]


class Decodable:
    """Fields read by name: `{"x": 1, "y": 2}`."""

    __slots__ = ()

    @classmethod
    def decoder(cls) -> Decoder[Any]:
        return _derived(cls, Decoder)

    @classmethod
    def decode(cls, value: Any) -> Either[Error, Any]:
        return cls.decoder().decode(value)


class Validatable(Decodable):
    """Like Decodable, plus `validate()` collecting every error."""

    __slots__ = ()

    @classmethod
    def validator(cls) -> Validator[Any]:
        return _derived(cls, Validator)

    @classmethod
    def validate(cls, value: Any) -> Outcome[Any]:
        return cls.validator().validate(value)

    @classmethod
    def decoder(cls) -> Decoder[Any]:
        return cls.validator().to_decoder()


class TupleDecodable(Decodable):
    """Fields read by position: `[1, 2]`; a single field reads the bare value."""

    __slots__ = ()
    __pathwise_layout__ = Layout.TUPLE


class TupleValidatable(Validatable):
    __slots__ = ()
    __pathwise_layout__ = Layout.TUPLE


class EnumDecodable(Decodable):
    """
    Each field is a choice of tags: `"Red"` for a tag class without fields,
    `{"Rgb": {"r": 1, "g": 2, "b": 3}}` for one with fields.
    """

    __slots__ = ()
    __pathwise_layout__ = Layout.TAGGED


class EnumValidatable(Validatable):
    __slots__ = ()
    __pathwise_layout__ = Layout.TAGGED

