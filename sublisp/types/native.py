"""Native procedure handle stored inside NativeCall values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from sublisp import NativeFn


@dataclass(frozen=True)
class NativeProcedure:
    """A Python function exposed to sublisp code.

    `arity` is the number of arguments collected before `fn` is invoked, or
    None for a variadic procedure that takes whatever the call supplies.
    Two handles are equal when they share a name, arity and function object.
    """

    name: str
    arity: Optional[int]
    fn: NativeFn = field(repr=False)

    def __post_init__(self):
        if self.arity is not None and self.arity < 1:
            raise ValueError(f"Native procedure {self.name} needs a positive arity")

    @property
    def is_variadic(self) -> bool:
        return self.arity is None

    def __str__(self) -> str:
        return self.name
