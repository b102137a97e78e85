from sublisp import EvaluatorFn
from sublisp.evaluation.apply import apply, ensure_procedure, invoke_native
from sublisp.types.expression import PROCEDURES, Expression, NativeCall, Sequence
from sublisp.types.module import Module
from sublisp.types.names import NameGenerator


def list_form(
    expr: Sequence,
    module: Module,
    names: NameGenerator,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    # A list whose head is a procedure is the call form (f a b ...) = ((f a) b) ...;
    # any other list literal evaluates each element, left to right.
    if not expr.items:
        return expr

    head = evaluate_fn(expr.items[0], module, names)
    tail_args = expr.items[1:]

    if isinstance(head, NativeCall) and head.procedure.is_variadic:
        args = [evaluate_fn(arg, module, names) for arg in tail_args]
        return invoke_native(NativeCall(head.procedure, head.args + tuple(args)), module)

    if isinstance(head, PROCEDURES) and tail_args:
        result = head
        for arg in tail_args:
            ensure_procedure(result)
            value = evaluate_fn(arg, module, names)
            result = apply(result, value, module, names, evaluate_fn)
        return result

    return Sequence([head, *(evaluate_fn(item, module, names) for item in tail_args)])
