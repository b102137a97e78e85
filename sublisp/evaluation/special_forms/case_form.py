"""The `case` form: first-match dispatch on the value of a scrutinee.

Clause patterns are literals (see sublisp.evaluation.patterns). The names a
matching pattern binds are substituted into the clause result before it is
evaluated, just as an argument is substituted into an abstraction body.
"""

from sublisp import EvaluatorFn
from sublisp.errors import NonExhaustiveMatch
from sublisp.evaluation.apply import as_operand
from sublisp.evaluation.patterns import match_pattern
from sublisp.evaluation.substitution import all_names, rename, substitute
from sublisp.types.expression import Expression, Match
from sublisp.types.module import Module
from sublisp.types.names import NameGenerator


def bind_clause(
    result: Expression, bindings: dict[str, Expression], names: NameGenerator
) -> Expression:
    """Substitute every pattern binding into `result` simultaneously.

    Each binder is first renamed to a name that occurs neither in the result
    nor in any bound value, so substituting one binding can never disturb
    another.
    """
    if not bindings:
        return result
    taken = set(all_names(result))
    for value in bindings.values():
        taken |= all_names(value)
    staged: list[tuple[str, Expression]] = []
    for binder, value in bindings.items():
        temp = names.fresh(taken)
        taken.add(temp)
        result = rename(result, binder, temp, names)
        staged.append((temp, value))
    for temp, value in staged:
        result = substitute(result, temp, as_operand(value), names)
    return result


def case_form(
    expr: Match,
    module: Module,
    names: NameGenerator,
    evaluate_fn: EvaluatorFn,
) -> Expression:
    value = evaluate_fn(expr.scrutinee, module, names)
    for pattern, result in expr.clauses:
        bindings = match_pattern(pattern, value)
        if bindings is not None:
            return evaluate_fn(bind_clause(result, bindings, names), module, names)
    raise NonExhaustiveMatch(value)
