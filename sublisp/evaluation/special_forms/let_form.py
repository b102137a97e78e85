from sublisp import EvaluatorFn
from sublisp.evaluation.apply import as_operand
from sublisp.evaluation.substitution import substitute
from sublisp.types.expression import Binding, Expression
from sublisp.types.module import Module
from sublisp.types.names import NameGenerator


def let_form(
    expr: Binding,
    module: Module,
    names: NameGenerator,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    # (let (x v) body) behaves as ((\ (x) body) v); x is not visible in v
    value = evaluate_fn(expr.value, module, names)
    body = substitute(expr.body, expr.name, as_operand(value), names)
    return evaluate_fn(body, module, names)
