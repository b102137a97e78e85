from __future__ import annotations
from itertools import count
from typing import Iterable, Optional

from sublisp.config import get_fresh_prefix


class NameGenerator:
    """
    Source of fresh identifiers for hygienic renaming.

    Generated names are `prefix` followed by a strictly increasing counter, so
    a generator never repeats itself. The default prefix cannot be spelled as
    an identifier in source text; `fresh` additionally skips any name the
    caller says is already in use, which keeps renaming sound even for trees
    built directly from Python.

    A generator is plain state owned by one evaluation. Evaluations running in
    different threads should each use their own.
    """

    def __init__(self, prefix: Optional[str] = None):
        self.prefix: str = prefix if prefix is not None else get_fresh_prefix()
        self._counter = count(1)

    def next(self) -> str:
        return f"{self.prefix}{next(self._counter)}"

    def fresh(self, avoid: Iterable[str] = ()) -> str:
        taken = avoid if isinstance(avoid, (set, frozenset)) else set(avoid)
        candidate = self.next()
        while candidate in taken:
            candidate = self.next()
        return candidate

    def __repr__(self) -> str:
        return f"NameGenerator(prefix={self.prefix!r})"
