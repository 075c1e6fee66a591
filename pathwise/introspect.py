"""
Build TypeSchemas from Python classes.

schema_for understands dataclasses, pydantic models, NamedTuples, Enums and
plain classes with an annotated `__init__`. Nested classes become Deferred
references, so recursive types are fine.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import inspect
import logging
import types
from functools import partial
from typing import Any, Callable, Union, get_args, get_origin, get_type_hints

from .decoder import Decoder
from .lib.model_helpers import (
    is_dataclass_type,
    is_enum_type,
    is_named_tuple,
    is_pydantic_model,
    is_user_class,
)
from .schema import Deferred, FieldSchema, Layout, ListOf, Scalar, TypeRef, TypeSchema, derive_for
from .validator import Validator

logger = logging.getLogger(__name__)

LAYOUT_ATTRIBUTE = "__pathwise_layout__"

_SCALARS: dict[Any, str] = {
    str: "string",
    int: "int",
    float: "float",
    bool: "bool",
    object: "object",
    Any: "mixed",
}

_SEQUENCE_ORIGINS = (list, tuple, collections.abc.Sequence, collections.abc.MutableSequence)


def schema_for(target: type) -> TypeSchema:
    """
    Describe how to build `target` from its fields.

    The layout comes from the class attribute `__pathwise_layout__` when set
    (see the Tuple*/Enum* mixins); NamedTuples default to TUPLE, everything
    else to RECORD.

    Raises:
        TypeError: if the target's fields or type hints can't be read
    """
    if is_enum_type(target):
        return _enum_schema(target)

    default_layout = Layout.TUPLE if is_named_tuple(target) else Layout.RECORD
    layout = getattr(target, LAYOUT_ATTRIBUTE, default_layout)

    if is_pydantic_model(target):
        return _pydantic_schema(target, layout)

    names_and_hints = _constructor_fields(target)
    fields = tuple(_field_schema(name, hint) for name, hint in names_and_hints)
    names = [name for name, _ in names_and_hints]
    return TypeSchema(
        target=partial(_construct, target, names),
        fields=fields,
        layout=layout,
        name=target.__name__,
    )


def decoder_for(target: type) -> Decoder[Any]:
    """Derive a Decoder for `target` from its introspected schema."""
    return derive_for(schema_for(target), Decoder)


def validator_for(target: type) -> Validator[Any]:
    """Derive a Validator for `target` from its introspected schema."""
    return derive_for(schema_for(target), Validator)


def type_ref(hint: Any) -> TypeRef:
    """Map a single (non-union) type hint to a schema type."""
    if hint in _SCALARS:
        return Scalar(_SCALARS[hint])

    origin = get_origin(hint)
    args = get_args(hint)

    if hint in (list, tuple) or origin in _SEQUENCE_ORIGINS:
        if origin is tuple and args and args[-1] is not Ellipsis:
            return _fixed_tuple(args)
        refs, nullable = _alternatives(args[0] if args else Any)
        return ListOf(refs, nullable)

    if is_user_class(hint):
        return Deferred(hint, partial(schema_for, hint))

    logger.debug("No schema type for %r, accepting any value", hint)
    return Scalar("mixed")


def _field_schema(name: str, hint: Any) -> FieldSchema:
    refs, nullable = _alternatives(hint)
    return FieldSchema(name, refs, nullable)


def _alternatives(hint: Any) -> tuple[tuple[TypeRef, ...], bool]:
    """The schema types a hint allows (several for a union) and whether None is one."""
    origin = get_origin(hint)
    if origin is Union or origin is types.UnionType:
        members = get_args(hint)
        refs = tuple(type_ref(m) for m in members if m is not type(None))
        return refs, type(None) in members

    if hint is None or hint is type(None):
        return (Scalar("mixed"),), True

    return (type_ref(hint),), False


def _fixed_tuple(args: tuple[Any, ...]) -> TypeSchema:
    fields = tuple(_field_schema(str(i), hint) for i, hint in enumerate(args))
    return TypeSchema(
        target=_as_tuple, fields=fields, layout=Layout.TUPLE, name="tuple", positional=True
    )


def _as_tuple(*items: Any) -> tuple[Any, ...]:
    return items


def _construct(target: type, names: list[str], *values: Any) -> Any:
    return target(**dict(zip(names, values)))


def _constant(value: Any) -> Callable[[], Any]:
    return lambda: value


def _identity(value: Any) -> Any:
    return value


def _hints(obj: Any) -> dict[str, Any]:
    try:
        return get_type_hints(obj)
    except (NameError, TypeError) as e:
        raise TypeError(f"Cannot resolve type hints of {obj!r}") from e


def _constructor_fields(target: type) -> list[tuple[str, Any]]:
    """(name, type hint) for each constructor argument, in order."""
    if is_dataclass_type(target):
        hints = _hints(target)
        return [(f.name, hints.get(f.name, Any)) for f in dataclasses.fields(target) if f.init]

    if is_named_tuple(target):
        hints = _hints(target)
        return [(name, hints.get(name, Any)) for name in target._fields]

    if not isinstance(target, type):
        raise TypeError(f"Cannot describe {target!r}: not a class")

    try:
        signature = inspect.signature(target)
    except (TypeError, ValueError) as e:
        raise TypeError(f"Cannot read the constructor of {target!r}") from e

    init = target.__init__
    hints = _hints(init) if inspect.isfunction(init) else {}
    return [
        (param.name, hints.get(param.name, Any))
        for param in signature.parameters.values()
        if param.kind in (param.POSITIONAL_OR_KEYWORD, param.KEYWORD_ONLY)
    ]


def _pydantic_schema(model: Any, layout: Layout) -> TypeSchema:
    """Fields read by alias when one is set; built without re-validation."""
    names = list(model.model_fields)
    fields = tuple(
        _field_schema(info.alias or name, info.annotation)
        for name, info in model.model_fields.items()
    )

    def build(*values: Any) -> Any:
        return model.model_construct(**dict(zip(names, values)))

    return TypeSchema(target=build, fields=fields, layout=layout, name=model.__name__)


def _enum_schema(enum_type: Any) -> TypeSchema:
    """One tag per member, matched on the member's name."""
    tags = tuple(
        TypeSchema(target=_constant(member), name=member.name) for member in enum_type
    )
    return TypeSchema(
        target=_identity,
        fields=(FieldSchema("value", tags),),
        layout=Layout.TAGGED,
        name=enum_type.__name__,
    )
