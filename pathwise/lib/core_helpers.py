"""
Helper functions for reading into raw input values.
"""

from collections.abc import Mapping, Sized
from typing import Any

from email_validator import EmailNotValidError, validate_email


def get_field(data: Any, key: str) -> Any:
    """Read `key` from a mapping; a missing key or a non-mapping reads as None."""
    if isinstance(data, Mapping):
        return data.get(key)
    return None


def get_index(data: Any, idx: int) -> Any:
    """Read position `idx` of a list/tuple, or key `idx` of a mapping."""
    if isinstance(data, (list, tuple)):
        if 0 <= idx < len(data):
            return data[idx]
        return None

    if isinstance(data, Mapping):
        return data.get(idx)

    return None


def is_array(data: Any) -> bool:
    return isinstance(data, (list, tuple))


def is_object(data: Any) -> bool:
    """Structured non-scalar: not null, a scalar, an array or a mapping."""
    return not (
        data is None
        or isinstance(data, (bool, int, float, str, bytes, list, tuple, Mapping))
    )


def is_empty(data: Any) -> bool:
    """
    Emptiness used by `required()`.

    None, "", 0, 0.0 and False are empty, and so is anything sized with a
    length of zero (lists, dicts, objects exposing `__len__`). Other objects
    are present.
    """
    if data is None:
        return True
    if isinstance(data, (bool, int, float, str, bytes)):
        return not data
    if isinstance(data, Sized):
        return len(data) == 0
    return False


def is_number(data: Any) -> bool:
    return isinstance(data, (bool, int, float))


def text_length(data: Any) -> int:
    """Length in characters of a string-like value."""
    if isinstance(data, Sized):
        return len(data)
    return len(str(data))


def is_email(data: Any) -> bool:
    """Syntax check of an email address; no DNS lookups."""
    if not isinstance(data, str):
        return False
    try:
        validate_email(data, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True
