"""Core evaluator for sublisp.

Reduction is eager (call-by-value) and works by substitution: applying an
abstraction substitutes the argument value into its body, so the only
namespace ever consulted is the module of top-level definitions.
"""

from __future__ import annotations

import logging
import sys
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from sublisp.builtin.env_builtin import default_module
from sublisp.config import get_recursion_limit
from sublisp.errors import EvaluationDepthExceeded
from sublisp.evaluation.apply import apply, ensure_procedure
from sublisp.evaluation.special_forms import SPECIAL_FORMS
from sublisp.types.expression import SELF_EVALUATING, Application, Expression, Name
from sublisp.types.module import Module
from sublisp.types.names import NameGenerator

logger = logging.getLogger(__name__)


# The interpreter's recursion limit is process-wide, so it is shared by every
# evaluation in flight: it is raised when the first one starts and restored
# when the last one finishes, never lowered in between.
_limit_lock = threading.Lock()
_active_evaluations = 0
_host_limit: Optional[int] = None


@contextmanager
def recursion_limit(limit: int) -> Iterator[int]:
    """Run with the recursion limit at least `limit`; yields the limit in force."""
    global _active_evaluations, _host_limit
    with _limit_lock:
        if _active_evaluations == 0:
            _host_limit = sys.getrecursionlimit()
        _active_evaluations += 1
        if sys.getrecursionlimit() < limit:
            sys.setrecursionlimit(limit)
        in_force = sys.getrecursionlimit()
    try:
        yield in_force
    finally:
        with _limit_lock:
            _active_evaluations -= 1
            if _active_evaluations == 0:
                sys.setrecursionlimit(_host_limit)
                _host_limit = None


def evaluate(
    expr: Expression, module: Module, names: Optional[NameGenerator] = None
) -> Expression:
    """
    Reduce `expr` to a value against the definitions in `module`.

    Raises an EvalError subclass if the expression cannot be reduced, and
    EvaluationDepthExceeded if reduction nests deeper than the recursion
    limit: the configured one, or the host's own if that is already higher.
    A fresh NameGenerator is used unless one is given.
    """
    if names is None:
        names = NameGenerator()

    with recursion_limit(get_recursion_limit()) as limit:
        try:
            return evaluate0(expr, module, names)
        except RecursionError:
            raise EvaluationDepthExceeded(limit) from None


def evaluate0(expr: Expression, module: Module, names: NameGenerator) -> Expression:
    """
    Core evaluator: one reduction rule per expression variant, recursing into
    sub-expressions. Returns the fully reduced value.
    """
    match expr:
        case Name(id=n):
            # definitions are values already; they are not reduced again
            return module.lookup(n)
        case Application(fn=fn, arg=arg):
            head = ensure_procedure(evaluate0(fn, module, names))
            value = evaluate0(arg, module, names)
            return apply(head, value, module, names, evaluate0)

    handler = SPECIAL_FORMS.get(type(expr))
    if handler is not None:
        return handler(expr, module, names, evaluate0)

    # --- Values evaluate to themselves ---
    if isinstance(expr, SELF_EVALUATING):
        return expr
    raise TypeError(f"Cannot evaluate {expr!r}: not an expression")


def eval_default_module(expr: Expression) -> Expression:
    """Evaluate `expr` against a fresh standard module."""
    return evaluate(expr, default_module())
