"""Python call-depth budget for parsing and running Cosmo programs.

Both the recursive-descent parser and the tree-walking interpreter spend
several Python frames per level of Cosmo nesting (a parenthesised group,
a block, a function call). Python's default limit of 1000 frames would
cap ordinary Cosmo recursion at roughly a hundred calls, so the front
end and `Interpreter.interpret` raise the limit while they work.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Iterator

# Roughly 8 Python frames per Cosmo call, so about 6000 nested calls.
COSMO_RECURSION_LIMIT = 50_000


@contextmanager
def recursion_limit(limit: int = COSMO_RECURSION_LIMIT) -> Iterator[None]:
    """Raise the interpreter's recursion limit for the duration of the block."""
    previous = sys.getrecursionlimit()
    if limit > previous:
        sys.setrecursionlimit(limit)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)
