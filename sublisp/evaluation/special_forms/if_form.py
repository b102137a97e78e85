from sublisp import EvaluatorFn
from sublisp.errors import TypeMismatch
from sublisp.types.expression import Boolean, Conditional, Expression
from sublisp.types.module import Module
from sublisp.types.names import NameGenerator


def if_form(
    expr: Conditional,
    module: Module,
    names: NameGenerator,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    cond = evaluate_fn(expr.condition, module, names)
    # no truthiness: only booleans select a branch
    if not isinstance(cond, Boolean):
        raise TypeMismatch("boolean condition", cond)

    if cond.value:
        return evaluate_fn(expr.then, module, names)
    return evaluate_fn(expr.otherwise, module, names)
