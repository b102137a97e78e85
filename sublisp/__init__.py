# Core type aliases for sublisp.
# Expressions are immutable dataclass trees (see sublisp.types.expression); code,
# runtime values and quoted data share that one representation, and evaluation
# rewrites trees by substitution instead of keeping a variable environment.
#
# Naming guidance:
# - EvaluatorFn: the recursive evaluation step handed to special-form handlers.
# - NativeFn:    the Python function behind a native procedure. It receives the
#                already-evaluated arguments and the module being evaluated against.

from typing import Any, Callable

__version__ = "0.1.0"

# Evaluator function type: (expression, module, names) -> expression
EvaluatorFn = Callable[..., Any]

# Native procedure implementation: (args, module) -> expression
NativeFn = Callable[..., Any]
