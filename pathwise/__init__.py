"""
pathwise - decode untyped data into typed values, with path-annotated errors.

Usage:
    from pathwise import Decoder, Validator

    age = Decoder.int().field("age")
    age.decode({"age": "42"})          # Right(value=42)
    age.decode({"age": "old"})         # Left(error=Field(name='age', error=Terminal(...)))

    str(age.decode({"age": "old"}).error)
    # 'Problem with the value at .age: "old": Expecting an INT'
"""

from .context import coercion_context, is_strict
from .decodable import (
    Decodable,
    EnumDecodable,
    EnumValidatable,
    TupleDecodable,
    TupleValidatable,
    Validatable,
)
from .decoder import Decoder
from .errors import Alternatives, Error, Field, Index, Terminal, UnwrapError
from .introspect import decoder_for, schema_for, validator_for
from .schema import (
    Deferred,
    FieldSchema,
    Layout,
    ListOf,
    Scalar,
    TypeSchema,
    derive_decoder,
    derive_for,
    derive_validator,
)
from .seq import Seq
from .types import Either, Failure, Left, Outcome, Right, Success
from .validator import Validator

__all__ = [
    # Containers and outcomes
    "Seq",
    "Either",
    "Left",
    "Right",
    "Outcome",
    "Success",
    "Failure",
    # Errors
    "Error",
    "Field",
    "Index",
    "Alternatives",
    "Terminal",
    "UnwrapError",
    # Engines
    "Decoder",
    "Validator",
    # Schema derivation
    "Layout",
    "Scalar",
    "ListOf",
    "Deferred",
    "FieldSchema",
    "TypeSchema",
    "derive_for",
    "derive_decoder",
    "derive_validator",
    "schema_for",
    "decoder_for",
    "validator_for",
    # Mixins
    "Decodable",
    "Validatable",
    "TupleDecodable",
    "TupleValidatable",
    "EnumDecodable",
    "EnumValidatable",
    # Configuration
    "coercion_context",
    "is_strict",
]
