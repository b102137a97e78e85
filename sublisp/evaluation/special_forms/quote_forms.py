from sublisp import EvaluatorFn
from sublisp.types.expression import Expression, Quotation
from sublisp.types.module import Module
from sublisp.types.names import NameGenerator


def quote_form(
    expr: Quotation,
    module: Module,
    names: NameGenerator,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    # only the outermost layer is removed: ''x evaluates to 'x
    return expr.inner
