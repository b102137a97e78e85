"""Application engine for sublisp.

Both kinds of procedure value go through `apply`:

- an Abstraction is applied by substituting the argument for its parameter
  and evaluating the resulting body (beta reduction);
- a NativeCall collects the argument, and once it holds as many arguments as
  its procedure's arity the Python implementation is invoked. Until then the
  extended NativeCall is itself the (partially applied) result.

Binary and larger natives are registered wrapped in curried Abstractions whose
body applies a bare NativeCall, so partial application of natives and of
interpreted procedures is the same thing.
"""

from __future__ import annotations

import logging

from sublisp import EvaluatorFn
from sublisp.errors import NotApplicable
from sublisp.evaluation.substitution import substitute
from sublisp.types.expression import (
    PROCEDURES,
    SELF_EVALUATING,
    Abstraction,
    Expression,
    NativeCall,
    Quotation,
)
from sublisp.types.module import Module
from sublisp.types.names import NameGenerator

logger = logging.getLogger(__name__)


def as_operand(value: Expression) -> Expression:
    """Return an expression that evaluates back to `value`.

    Values are substituted into code that will be evaluated again; a value
    such as a symbol or a list would otherwise be looked up or applied a
    second time, so it is quoted.
    """
    if isinstance(value, SELF_EVALUATING):
        return value
    return Quotation(value)


def ensure_procedure(value: Expression) -> Expression:
    if not isinstance(value, PROCEDURES):
        raise NotApplicable(value)
    return value


def apply_abstraction(
    fn: Abstraction,
    arg: Expression,
    module: Module,
    names: NameGenerator,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    logger.debug("beta: %s <- %s", fn.param, arg)
    body = substitute(fn.body, fn.param, as_operand(arg), names)
    return evaluate_fn(body, module, names)


def apply_native(call: NativeCall, arg: Expression, module: Module) -> Expression:
    """Add `arg` to `call`; invoke the procedure once it has all its arguments."""
    call = call.with_argument(arg)
    if call.procedure.is_variadic or call.is_saturated:
        return invoke_native(call, module)
    return call


def invoke_native(call: NativeCall, module: Module) -> Expression:
    logger.debug("invoking native %s with %d argument(s)", call.procedure.name, len(call.args))
    result = call.procedure.fn(call.args, module)
    if not isinstance(result, Expression):
        raise TypeError(
            f"Native procedure {call.procedure.name} returned {result!r}, not an expression"
        )
    return result


def apply(
    head: Expression,
    arg: Expression,
    module: Module,
    names: NameGenerator,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    """Apply the procedure value `head` to the evaluated argument `arg`."""
    if isinstance(head, Abstraction):
        return apply_abstraction(head, arg, module, names, evaluate_fn)
    elif isinstance(head, NativeCall):
        return apply_native(head, arg, module)
    else:
        raise NotApplicable(head)
