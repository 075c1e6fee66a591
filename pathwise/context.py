"""
Strict coercion switch for the int/float/bool primitives.

Permissive by default: `Decoder.int()` reads "42" and 42.0 as 42. Inside
`coercion_context(strict=True)` newly built primitives take native values
only. The flag is captured when a primitive is built:

    with coercion_context(strict=True):
        exact = Decoder.int()

    exact.decode("42")   # Left(error=Terminal(message='Expecting an INT', value='42'))
    exact.decode(42)     # Right(value=42)
"""

from contextlib import contextmanager
from contextvars import ContextVar

_strict_coercion: ContextVar[bool] = ContextVar("pathwise_strict_coercion", default=False)


def is_strict() -> bool:
    return _strict_coercion.get()


@contextmanager
def coercion_context(*, strict: bool = False):
    """Build primitives with `strict` coercion for the duration of the block."""
    token = _strict_coercion.set(strict)
    try:
        yield
    finally:
        _strict_coercion.reset(token)
