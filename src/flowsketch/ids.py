"""
Identity generation for graph nodes and edges.

The parser takes an id factory (any zero-argument callable returning a fresh
string) so callers can inject a deterministic sequence in tests.
"""

import itertools
from typing import Callable

from nanoid import generate

IdFactory = Callable[[], str]


def generate_id(size: int = 10) -> str:
    """Return a random URL-safe id of the given length."""
    return generate(size=size)


class SequentialIdFactory:
    """
    Deterministic id factory producing prefix1, prefix2, ...

    Example:
        >>> ids = SequentialIdFactory("n")
        >>> ids(), ids()
        ('n1', 'n2')
    """

    def __init__(self, prefix: str = "n", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}{next(self._counter)}"
