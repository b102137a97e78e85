"""Exception taxonomy for sublisp.

Evaluation failures are raised rather than returned; every subclass of
EvalError is terminal for the `evaluate` call that produced it and carries the
offending sub-expression for diagnostics.
"""


class SublispError(Exception):
    """ Base class for all sublisp errors"""
    pass


class EvalError(SublispError):
    """ Raised when an expression cannot be reduced to a value"""
    pass


class UnboundName(EvalError):
    """ Raised when a free name has no entry in the module"""

    def __init__(self, name: str):
        super().__init__(f"Unbound name {name}")
        self.name = name


class TypeMismatch(EvalError):
    """ Raised when a construct receives a value of the wrong shape"""

    def __init__(self, expected: str, value):
        super().__init__(f"Expected {expected}, got {value}")
        self.expected = expected
        self.value = value


class NotApplicable(EvalError):
    """ Raised when a value that is not a procedure is applied"""

    def __init__(self, value):
        super().__init__(f"Cannot apply non-procedure {value}")
        self.value = value


class NonExhaustiveMatch(EvalError):
    """ Raised when no case clause matches the scrutinee"""

    def __init__(self, value):
        super().__init__(f"No case clause matches {value}")
        self.value = value


class ArityOrTypeMismatch(EvalError):
    """ Raised by native procedures that reject their arguments"""

    def __init__(self, args):
        super().__init__(
            "Invalid arguments: (" + " ".join(str(a) for a in args) + ")"
        )
        self.arguments = tuple(args)


class DivideByZero(EvalError):
    """ Raised on integer division by zero"""

    def __init__(self, expression):
        super().__init__(f"Division by zero in {expression}")
        self.expression = expression


class IntegerOverflow(EvalError):
    """ Raised when integer arithmetic leaves the signed 64-bit range"""

    def __init__(self, expression):
        super().__init__(f"Integer overflow in {expression}")
        self.expression = expression


class EvaluationDepthExceeded(SublispError):
    """ Raised when evaluation exhausts the recursion limit; not recoverable"""

    def __init__(self, limit: int):
        super().__init__(f"Evaluation exceeded the recursion limit of {limit}")
        self.limit = limit
