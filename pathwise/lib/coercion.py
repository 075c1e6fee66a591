"""
Permissive scalar coercion used by the primitive decoders and validators.

Each function returns the coerced value, or None when the input can't be
read losslessly as the target type. With `strict=True` only the native type
is accepted (a float target still takes ints).
"""

import math
import re
from typing import Any

_INT_RE = re.compile(r"[+-]?(0|[1-9][0-9]*)")
_FLOAT_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")

_TRUE_WORDS = frozenset({"1", "true", "on", "yes"})
_FALSE_WORDS = frozenset({"0", "false", "off", "no", ""})


def to_int(value: Any, strict: bool = False) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if strict:
        return None

    if isinstance(value, float):
        return int(value) if value.is_integer() else None

    if isinstance(value, str):
        text = value.strip()
        if _INT_RE.fullmatch(text):
            try:
                return int(text)
            except ValueError:
                # beyond the interpreter's digit limit
                return None

    return None


def to_float(value: Any, strict: bool = False) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _finite(value)
    if strict:
        return None

    if isinstance(value, str):
        text = value.strip()
        if _FLOAT_RE.fullmatch(text):
            return _finite(text)

    return None


def _finite(value: int | float | str) -> float | None:
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def to_bool(value: Any, strict: bool = False) -> bool | None:
    if isinstance(value, bool):
        return value
    if strict:
        return None

    if isinstance(value, (int, float)):
        if value == 1:
            return True
        if value == 0:
            return False
        return None

    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False

    return None
