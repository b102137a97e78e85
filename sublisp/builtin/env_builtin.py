"""Standard native procedures for sublisp.

This module defines integer arithmetic, structural comparison, list
construction and access, text manipulation and output, and the registration
helpers that build the default module. Every procedure receives its arguments
already evaluated and validates them itself, raising ArityOrTypeMismatch with
the argument list when they do not fit.
"""
from __future__ import annotations

from sublisp.builtin.registry import insert
from sublisp.errors import ArityOrTypeMismatch, DivideByZero, IntegerOverflow
from sublisp.types.expression import (
    INT64_MAX,
    INT64_MIN,
    Application,
    Boolean,
    Expression,
    Integer,
    Name,
    Nil,
    Sequence,
    Text,
)
from sublisp.types.module import Module
from sublisp.types.native import NativeProcedure

DEFAULT_MODULE_NAME = "##default##"

Args = tuple[Expression, ...]


def _integers(args: Args) -> tuple[int, int]:
    lhs, rhs = args
    if not isinstance(lhs, Integer) or not isinstance(rhs, Integer):
        raise ArityOrTypeMismatch(args)
    return lhs.value, rhs.value


def _text(args: Args) -> str:
    (x,) = args
    if not isinstance(x, Text):
        raise ArityOrTypeMismatch(args)
    return x.value


def _items(args: Args, x: Expression) -> tuple[Expression, ...]:
    if not isinstance(x, Sequence):
        raise ArityOrTypeMismatch(args)
    return x.items


def _checked(result: int, args: Args) -> Integer:
    if not INT64_MIN <= result <= INT64_MAX:
        raise IntegerOverflow(Application(*args))
    return Integer(result)


# -------------------------------
# Arithmetic
# -------------------------------
def add(args: Args, module: Module) -> Expression:
    lhs, rhs = _integers(args)
    return _checked(lhs + rhs, args)


def sub(args: Args, module: Module) -> Expression:
    lhs, rhs = _integers(args)
    return _checked(lhs - rhs, args)


def mul(args: Args, module: Module) -> Expression:
    lhs, rhs = _integers(args)
    return _checked(lhs * rhs, args)


def div(args: Args, module: Module) -> Expression:
    """Integer division truncating toward zero."""
    lhs, rhs = _integers(args)
    if rhs == 0:
        raise DivideByZero(Application(*args))
    quotient = abs(lhs) // abs(rhs)
    if (lhs < 0) != (rhs < 0):
        quotient = -quotient
    return _checked(quotient, args)


# -------------------------------
# Comparison
# -------------------------------
def equals(args: Args, module: Module) -> Expression:
    lhs, rhs = args
    return Boolean(lhs == rhs)


def not_equals(args: Args, module: Module) -> Expression:
    lhs, rhs = args
    return Boolean(lhs != rhs)


# -------------------------------
# Lists
# -------------------------------
def cons(args: Args, module: Module) -> Expression:
    """(cons 1 '(2 3)) => (1 2 3); a non-list tail becomes the second element."""
    head, tail = args
    if isinstance(tail, Sequence):
        return Sequence((head, *tail.items))
    return Sequence((head, tail))


def list_builtin(args: Args, module: Module) -> Expression:
    return Sequence(args)


def is_atom(args: Args, module: Module) -> Expression:
    (x,) = args
    return Boolean(not isinstance(x, Sequence))


def _element(args: Args, index: int) -> Expression:
    items = _items(args, args[-1])
    if not 0 <= index < len(items):
        raise ArityOrTypeMismatch(args)
    return items[index]


def first(args: Args, module: Module) -> Expression:
    return _element(args, 0)


def second(args: Args, module: Module) -> Expression:
    return _element(args, 1)


def third(args: Args, module: Module) -> Expression:
    return _element(args, 2)


def nth(args: Args, module: Module) -> Expression:
    """(nth n xs) => element n of xs, counting from 0."""
    n, _ = args
    if not isinstance(n, Integer):
        raise ArityOrTypeMismatch(args)
    return _element(args, n.value)


# -------------------------------
# Output
# -------------------------------
def print_builtin(args: Args, module: Module) -> Expression:
    """Write the value followed by a space; returns nil."""
    (x,) = args
    print(x, end=" ", flush=True)
    return Nil


def println_builtin(args: Args, module: Module) -> Expression:
    """Write the value followed by a newline; returns nil."""
    (x,) = args
    print(x, flush=True)
    return Nil


# -------------------------------
# Text
# -------------------------------
def string_append(args: Args, module: Module) -> Expression:
    lhs, rhs = args
    if not isinstance(lhs, Text) or not isinstance(rhs, Text):
        raise ArityOrTypeMismatch(args)
    return Text(lhs.value + rhs.value)


def string_head(args: Args, module: Module) -> Expression:
    return Text(_text(args)[:1])


def string_tail(args: Args, module: Module) -> Expression:
    return Text(_text(args)[1:])


def string_init(args: Args, module: Module) -> Expression:
    s = _text(args)
    if not s:
        raise ArityOrTypeMismatch(args)
    return Text(s[:-1])


def string_last(args: Args, module: Module) -> Expression:
    return Text(_text(args)[-1:])


def symbol_to_string(args: Args, module: Module) -> Expression:
    """(symbol->string 'abc) => "abc" """
    (x,) = args
    if not isinstance(x, Name):
        raise ArityOrTypeMismatch(args)
    return Text(x.id)


STANDARD_PROCEDURES = [
    NativeProcedure("+", 2, add),
    NativeProcedure("-", 2, sub),
    NativeProcedure("*", 2, mul),
    NativeProcedure("/", 2, div),
    NativeProcedure("==", 2, equals),
    NativeProcedure("/=", 2, not_equals),
    NativeProcedure("cons", 2, cons),
    NativeProcedure("list", None, list_builtin),
    NativeProcedure("atom?", 1, is_atom),
    NativeProcedure("first", 1, first),
    NativeProcedure("second", 1, second),
    NativeProcedure("third", 1, third),
    NativeProcedure("nth", 2, nth),
    NativeProcedure("print", 1, print_builtin),
    NativeProcedure("println", 1, println_builtin),
    NativeProcedure("string-append", 2, string_append),
    NativeProcedure("string-head", 1, string_head),
    NativeProcedure("string-tail", 1, string_tail),
    NativeProcedure("string-init", 1, string_init),
    NativeProcedure("string-last", 1, string_last),
    NativeProcedure("symbol->string", 1, symbol_to_string),
]


def register(module: Module) -> None:
    """Register all standard native procedures into the given module."""
    for procedure in STANDARD_PROCEDURES:
        insert(module, procedure)


def default_module() -> Module:
    module = Module(DEFAULT_MODULE_NAME)
    register(module)
    return module
