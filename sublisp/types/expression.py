"""Expression model for sublisp.

Source code, runtime values and quoted data all share this one representation:
an immutable tree of frozen dataclasses. Composite variants own their children
(no sharing is observable since nothing is mutable), so substitution builds new
trees and never aliases into the tree it was given.

`str()` renders an expression for display (print/println and error messages);
the rendering is not guaranteed to read back as the identical tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import Iterable, Union

from sublisp.types.native import NativeProcedure

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class Expression:
    """Base class of every expression variant."""

    __slots__ = ()


@dataclass(frozen=True)
class Unit(Expression):
    def __str__(self) -> str:
        return "nil"


Nil = Unit()


@dataclass(frozen=True)
class Boolean(Expression):
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class Integer(Expression):
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Integer expects an int, got {self.value!r}")
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(f"{self.value} does not fit in a signed 64-bit integer")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Text(Expression):
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Name(Expression):
    id: str

    def __str__(self) -> str:
        return self.id


@dataclass(frozen=True)
class Abstraction(Expression):
    param: str
    body: Expression

    def __str__(self) -> str:
        return f"(\\ ({self.param}) {self.body})"


@dataclass(frozen=True)
class Application(Expression):
    fn: Expression
    arg: Expression

    def __str__(self) -> str:
        return f"({self.fn} {self.arg})"


@dataclass(frozen=True)
class Sequence(Expression):
    items: tuple[Expression, ...] = ()

    def __post_init__(self):
        # accept any iterable, store a tuple so the value stays hashable
        object.__setattr__(self, "items", tuple(self.items))

    def __str__(self) -> str:
        return "(" + " ".join(str(item) for item in self.items) + ")"


@dataclass(frozen=True)
class Conditional(Expression):
    condition: Expression
    then: Expression
    otherwise: Expression

    def __str__(self) -> str:
        return f"(if {self.condition} {self.then} {self.otherwise})"


@dataclass(frozen=True)
class Quotation(Expression):
    inner: Expression

    def __str__(self) -> str:
        return f"'{self.inner}"


@dataclass(frozen=True)
class Binding(Expression):
    """Non-recursive `(let (name value) body)`; `name` is not in scope of `value`."""

    name: str
    value: Expression
    body: Expression

    def __str__(self) -> str:
        return f"(let ({self.name} {self.value}) {self.body})"


@dataclass(frozen=True)
class Match(Expression):
    """`(case scrutinee (pattern result) ...)`, first matching clause wins."""

    scrutinee: Expression
    clauses: tuple[tuple[Expression, Expression], ...] = ()

    def __post_init__(self):
        object.__setattr__(
            self, "clauses", tuple((pattern, result) for pattern, result in self.clauses)
        )

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write(f"(case {self.scrutinee}")
            for pattern, result in self.clauses:
                buffer.write(f" ({pattern} {result})")
            buffer.write(")")
            return buffer.getvalue()


@dataclass(frozen=True)
class NativeCall(Expression):
    """A native procedure together with the arguments collected so far."""

    procedure: NativeProcedure
    args: tuple[Expression, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(self.args))
        arity = self.procedure.arity
        if arity is not None and len(self.args) > arity:
            raise ValueError(
                f"{self.procedure.name} takes {arity} arguments, got {len(self.args)}"
            )

    def with_argument(self, arg: Expression) -> NativeCall:
        return NativeCall(self.procedure, self.args + (arg,))

    @property
    def is_saturated(self) -> bool:
        return self.procedure.arity is not None and len(self.args) == self.procedure.arity

    def __str__(self) -> str:
        parts = [f"#native {self.procedure.name}", *(str(a) for a in self.args)]
        return "(" + " ".join(parts) + ")"


# Variants that evaluate to themselves once they are values.
SELF_EVALUATING = (Unit, Boolean, Integer, Text, Abstraction, NativeCall)

# Procedure values: what an Application may have in function position.
PROCEDURES = (Abstraction, NativeCall)


# -------------------------------
# Constructors
# -------------------------------
def nil() -> Unit:
    return Nil


def boolean(b: bool) -> Boolean:
    return Boolean(b)


def integer(i: int) -> Integer:
    return Integer(i)


def text(s: str) -> Text:
    return Text(s)


def name(n: str) -> Name:
    return Name(n)


def lam(params: Union[str, Iterable[str]], body: Expression) -> Expression:
    """Curried lambda: lam(["x", "y"], b) is (\\ (x) (\\ (y) b))."""
    if isinstance(params, str):
        params = [params]
    for param in reversed(list(params)):
        body = Abstraction(param, body)
    return body


def apply(fn: Expression, *args: Expression) -> Expression:
    """Curried application: apply(f, a, b) is ((f a) b)."""
    for arg in args:
        fn = Application(fn, arg)
    return fn


def seq(*items: Expression) -> Sequence:
    return Sequence(items)


def if_(condition: Expression, then: Expression, otherwise: Expression) -> Conditional:
    return Conditional(condition, then, otherwise)


def quote(e: Expression) -> Quotation:
    return Quotation(e)


def let(bind: str, value: Expression, body: Expression) -> Binding:
    return Binding(bind, value, body)


def case(scrutinee: Expression, *clauses: tuple[Expression, Expression]) -> Match:
    return Match(scrutinee, clauses)
