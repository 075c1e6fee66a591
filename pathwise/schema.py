"""
Structural schemas and the derivation of decoders/validators from them.

A TypeSchema describes how to build a target value: its constructor and an
ordered list of fields, each with one type (or several, for a union) and a
nullability flag. `derive_for` turns that description into a Decoder or a
Validator; it never inspects Python classes itself (see `introspect`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Union

from .decoder import Decoder
from .validator import Validator

logger = logging.getLogger(__name__)

SCALAR_KINDS = frozenset({"string", "int", "float", "bool", "object", "mixed"})


class Layout(Enum):
    """
    How the fields of a composite are read from the input.

    - RECORD: each field under its name (`{"x": 1, "y": 2}`)
    - TUPLE: each field at its position (`[1, 2]`); a single field is read
      from the value itself
    - TAGGED: each field is one of several tags; a tag without fields is
      the string of its name (`"Red"`), a tag with fields is nested under
      its name (`{"Rgb": {...}}`)
    """

    RECORD = "record"
    TUPLE = "tuple"
    TAGGED = "tagged"


@dataclass(frozen=True, slots=True)
class Scalar:
    """A primitive: one of string, int, float, bool, object, mixed."""

    kind: str

    def __post_init__(self) -> None:
        if self.kind not in SCALAR_KINDS:
            raise ValueError(f"Unknown scalar kind: {self.kind!r}")


@dataclass(frozen=True, slots=True)
class ListOf:
    """
    An ordered collection. Each element is one of `types` (several for a
    union), or None when `nullable`.
    """

    types: tuple[TypeRef, ...]
    nullable: bool = False


@dataclass(frozen=True, slots=True)
class Deferred:
    """
    A composite known by its target, described on demand by `resolve()`.

    Lets a schema refer to itself (trees, linked records) and to targets
    that bring their own decoder/validator.
    """

    target: Any
    resolve: Callable[[], TypeSchema] = field(compare=False)


@dataclass(frozen=True, slots=True)
class FieldSchema:
    name: str
    types: tuple[TypeRef, ...]
    nullable: bool = False


@dataclass(frozen=True, slots=True)
class TypeSchema:
    """
    Description of a composite target.

    `target` is called with the decoded fields, positionally and in field
    order. `name` overrides the short name used for tags. With
    `positional` set, a TUPLE layout indexes even a single field, as a
    fixed-size tuple does.
    """

    target: Callable[..., Any]
    fields: tuple[FieldSchema, ...] = ()
    layout: Layout = Layout.RECORD
    name: str | None = None
    positional: bool = False

    @property
    def short_name(self) -> str:
        if self.name is not None:
            return self.name
        return getattr(self.target, "__name__", repr(self.target))


TypeRef = Union[Scalar, ListOf, Deferred, TypeSchema]
Engine = Union[type[Decoder], type[Validator]]

_HOOKS = {Decoder: "decoder", Validator: "validator"}


def derive_for(schema: TypeSchema, engine: Engine = Decoder) -> Any:
    """
    Build a Decoder (default) or a Validator for `schema`.

    - no fields: always succeed with `target()`
    - otherwise: `engine.lift(target, *field_decoders)`, so a Decoder stops
      at the first bad field and a Validator reports every bad field

    Usage:
        point = TypeSchema(Point, (
            FieldSchema("x", (Scalar("int"),)),
            FieldSchema("y", (Scalar("int"),)),
        ))
        derive_for(point).decode({"x": 1, "y": "2"})  # Right(value=Point(x=1, y=2))
    """
    return _Derivation(engine).derive(schema)


def derive_decoder(schema: TypeSchema) -> Decoder[Any]:
    return derive_for(schema, Decoder)


def derive_validator(schema: TypeSchema) -> Validator[Any]:
    return derive_for(schema, Validator)


class _Derivation:
    """One derivation run; memoizes deferred targets so cycles tie back."""

    def __init__(self, engine: Engine):
        if engine not in _HOOKS:
            raise TypeError(f"Cannot derive for engine {engine!r}")
        self.engine = engine
        self.memo: dict[Any, Any] = {}
        self.in_progress: set[Any] = set()

    def derive(self, schema: TypeSchema) -> Any:
        engine = self.engine
        logger.debug(
            "Deriving %s for %s (%s, %d fields)",
            engine.__name__,
            schema.short_name,
            schema.layout.value,
            len(schema.fields),
        )

        if not schema.fields:
            return engine.succeed(schema.target())

        parts = [
            self.field(schema, position, field_schema)
            for position, field_schema in enumerate(schema.fields)
        ]
        return engine.lift(schema.target, *parts)

    def field(self, schema: TypeSchema, position: int, field_schema: FieldSchema) -> Any:
        read = self.tag if schema.layout is Layout.TAGGED else self.type
        decoder = self.choice(read, field_schema.types, field_schema.nullable)

        if schema.layout is Layout.RECORD:
            return decoder.field(field_schema.name)
        if schema.layout is Layout.TUPLE and (schema.positional or len(schema.fields) > 1):
            return decoder.index(position)
        return decoder

    def choice(
        self, read: Callable[[TypeRef], Any], types: tuple[TypeRef, ...], nullable: bool
    ) -> Any:
        """One of `types` (any value when there are none), optionally null."""
        engine = self.engine
        options = [read(ref) for ref in types]

        if not options:
            decoder = engine.mixed()
        elif len(options) == 1:
            decoder = options[0]
        else:
            decoder = engine.one_of(options)

        if nullable:
            decoder = decoder.nullable()
        return decoder

    def type(self, ref: TypeRef) -> Any:
        engine = self.engine
        match ref:
            case Scalar(kind=kind):
                return getattr(engine, kind)()
            case ListOf(types=types, nullable=nullable):
                return self.choice(self.type, types, nullable).array()
            case Deferred(target=target, resolve=resolve):
                return self.deferred(target, resolve)
            case TypeSchema(target=target):
                hook = self.hook(target)
                if hook is not None:
                    return engine.lazy(hook)
                return self.derive(ref)
        raise TypeError(f"Not a schema type: {ref!r}")

    def deferred(self, target: Any, resolve: Callable[[], TypeSchema]) -> Any:
        hook = self.hook(target)
        if hook is not None:
            return self.engine.lazy(hook)

        if target in self.memo:
            return self.memo[target]
        if target in self.in_progress:
            return self.engine.lazy(lambda: self.memo[target])

        self.in_progress.add(target)
        try:
            derived = self.derive(resolve())
        finally:
            self.in_progress.discard(target)
        self.memo[target] = derived
        return derived

    def tag(self, ref: TypeRef) -> Any:
        engine = self.engine
        match ref:
            case Deferred(resolve=resolve):
                schema = resolve()
            case TypeSchema():
                schema = ref
            case _:
                return self.type(ref)

        name = schema.short_name
        if schema.fields:
            return self.type(ref).field(name)

        target = schema.target
        return engine.string().bind(
            lambda s: engine.succeed(target())
            if s == name
            else engine.fail(f'Does not match "{name}"')
        )

    def hook(self, target: Any) -> Callable[[], Any] | None:
        """
        The target's own classmethod for this engine, if it has one.

        A target that only provides the other engine's classmethod is
        derived from its fields instead.
        """
        make = getattr(target, _HOOKS[self.engine], None)
        if callable(make):
            return make
        return None
