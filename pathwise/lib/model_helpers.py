"""
Helper functions for recognizing the kinds of classes schema_for understands.
"""

import dataclasses
from enum import Enum
from typing import Any, Type

from pydantic import BaseModel


def is_pydantic_model(model_class: Type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    try:
        return (
            isinstance(model_class, type)
            and issubclass(model_class, BaseModel)
            and hasattr(model_class, "model_fields")
        )
    except TypeError:
        return False


def is_dataclass_type(cls: Any) -> bool:
    return isinstance(cls, type) and dataclasses.is_dataclass(cls)


def is_named_tuple(cls: Any) -> bool:
    return isinstance(cls, type) and issubclass(cls, tuple) and hasattr(cls, "_fields")


def is_enum_type(cls: Any) -> bool:
    return isinstance(cls, type) and issubclass(cls, Enum)


def is_user_class(cls: Any) -> bool:
    """A class defined outside the builtins (something with a constructor to describe)."""
    return isinstance(cls, type) and cls.__module__ != "builtins"
