"""
Currying helper for assembling constructors one argument at a time.
"""

from functools import partial
from typing import Callable


def curry(f: Callable, arity: int) -> Callable:
    """
    Turn an n-ary function into a chain of one-argument functions.

    Usage:
        curry(lambda a, b, c: a + b + c, 3)(1)(2)(3)  # 6
    """
    if arity <= 1:
        return f

    def step(arg):
        return curry(partial(f, arg), arity - 1)

    return step
