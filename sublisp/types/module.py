"""Definition table for sublisp.

A Module maps top-level names to expressions. It is the only namespace the
evaluator consults: names bound inside an expression are eliminated by
substitution before they are ever looked up. Modules are filled in once
(typically by the native registry) and then only read during evaluation;
drivers that need to grow a namespace between evaluations do so with
`define` or take an independent `copy`.
"""

from __future__ import annotations

from io import StringIO
from types import MappingProxyType
from typing import Mapping, Optional

from sublisp.errors import UnboundName
from sublisp.types.expression import Expression


class Module:
    """Named mapping from identifiers to expressions."""

    __slots__ = ("name", "_defines")

    def __init__(self, name: str, defines: Optional[Mapping[str, Expression]] = None):
        self.name: str = name
        self._defines: dict[str, Expression] = {}
        if defines:
            self.update(defines)

    @property
    def defines(self) -> Mapping[str, Expression]:
        """Read-only view of the definitions."""
        return MappingProxyType(self._defines)

    def define(self, name: str, value: Expression) -> None:
        """Bind `name` to `value`, replacing any previous definition.

        Raises TypeError if `name` is not a string or `value` is not an
        Expression.
        """
        if not isinstance(name, str):
            raise TypeError(f"Cannot define {name!r}: names are strings")
        if not isinstance(value, Expression):
            raise TypeError(f"Cannot define {name} as {value!r}: not an expression")
        self._defines[name] = value

    def update(self, mapping: Mapping[str, Expression]) -> None:
        """Bulk-define a mapping of name -> expression."""
        for k, v in mapping.items():
            self.define(k, v)

    def lookup(self, name: str) -> Expression:
        """Return the expression bound to `name`; raises UnboundName."""
        try:
            return self._defines[name]
        except KeyError:
            raise UnboundName(name) from None

    def names(self) -> list[str]:
        return list(self._defines)

    def copy(self, name: Optional[str] = None) -> Module:
        """Independent module with the same definitions."""
        return Module(name if name is not None else self.name, self._defines)

    def __contains__(self, name: object) -> bool:
        return name in self._defines

    def __len__(self) -> int:
        return len(self._defines)

    def _write_defines(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v}" for k, v in self._defines.items()))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write(f"{self.name} ")
            self._write_defines(buffer)
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Module {self.name!r} with {len(self)} definitions>"
