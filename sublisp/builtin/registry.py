"""Registration of native procedures into a module.

A native procedure is a Python function `fn(args, module)` receiving a tuple of
already-evaluated argument expressions and returning an expression (or raising
an EvalError). Unary and variadic natives are bound directly as bare
NativeCall values; natives of arity two or more are bound as curried
abstractions whose body applies the bare NativeCall to each parameter in turn,
so `(+ 1)` is an ordinary one-argument procedure value.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from sublisp import NativeFn
from sublisp.types.expression import Expression, Name, NativeCall, apply, lam
from sublisp.types.module import Module
from sublisp.types.native import NativeProcedure

logger = logging.getLogger(__name__)


def native(name: str, arity: Optional[int]) -> Callable[[NativeFn], NativeProcedure]:
    """Decorator turning a Python function into a NativeProcedure."""

    def wrap(fn: NativeFn) -> NativeProcedure:
        return NativeProcedure(name, arity, fn)

    return wrap


def curried(procedure: NativeProcedure) -> Expression:
    """(\\ (x0) (\\ (x1) ... (((#native f) x0) x1) ...)) for a fixed-arity native."""
    if procedure.arity is None:
        raise ValueError(f"Cannot curry variadic native {procedure.name}")
    params = [f"x{i}" for i in range(procedure.arity)]
    body = apply(NativeCall(procedure), *(Name(p) for p in params))
    return lam(params, body)


def insert_native(module: Module, procedure: NativeProcedure) -> None:
    logger.debug("registering native %s/%s", procedure.name, procedure.arity)
    module.define(procedure.name, NativeCall(procedure))


def insert_curried(module: Module, procedure: NativeProcedure) -> None:
    logger.debug("registering curried native %s/%s", procedure.name, procedure.arity)
    module.define(procedure.name, curried(procedure))


def insert(module: Module, procedure: NativeProcedure) -> None:
    """Bind `procedure` the canonical way for its arity."""
    if procedure.arity is not None and procedure.arity >= 2:
        insert_curried(module, procedure)
    else:
        insert_native(module, procedure)
