import pytest

from sublisp.builtin.env_builtin import default_module
from sublisp.builtin.registry import curried, insert, insert_curried, native
from sublisp.errors import ArityOrTypeMismatch, DivideByZero, IntegerOverflow
from sublisp.evaluation.evaluator import eval_default_module, evaluate
from sublisp.types.expression import (
    INT64_MAX,
    INT64_MIN,
    Abstraction,
    Application,
    Boolean,
    Integer,
    Name,
    NativeCall,
    Nil,
    Quotation,
    Sequence,
    Text,
    apply,
    seq,
)
from sublisp.types.module import Module


def call(fn: str, *args):
    """(fn args...) in the list call form."""
    return seq(Name(fn), *args)


def ints(*values):
    return Quotation(seq(*(Integer(v) for v in values)))


# -----------------------------------------------------
# Arithmetic and comparison
# -----------------------------------------------------

@pytest.mark.parametrize(
    "expr,expected",
    [
        (call("+", Integer(1), Integer(2)), Integer(3)),
        (call("-", Integer(1), Integer(2)), Integer(-1)),
        (call("*", Integer(-2), Integer(3)), Integer(-6)),
        (call("/", Integer(12), Integer(3)), Integer(4)),
        (call("/", Integer(7), Integer(2)), Integer(3)),
        (call("/", Integer(-7), Integer(2)), Integer(-3)),
        (call("/", Integer(7), Integer(-2)), Integer(-3)),
        (call("+", call("*", Integer(2), Integer(3)), call("-", Integer(10), Integer(4))), Integer(12)),
        (call("==", Integer(1), Integer(1)), Boolean(True)),
        (call("/=", Integer(1), Integer(1)), Boolean(False)),
        (call("/=", ints(1, 2), Integer(2)), Boolean(True)),
        (call("==", ints(1, 2), Integer(2)), Boolean(False)),
        (call("==", ints(1, 2), ints(1, 2)), Boolean(True)),
        (call("==", Text("a"), Quotation(Name("a"))), Boolean(False)),
    ],
)
def test_arithmetic_and_comparison(expr, expected):
    assert eval_default_module(expr) == expected


def test_division_by_zero_carries_operands(module):
    expr = apply(Name("/"), Integer(1), Integer(0))
    with pytest.raises(DivideByZero) as excinfo:
        evaluate(expr, module)
    assert excinfo.value.expression == Application(Integer(1), Integer(0))


@pytest.mark.parametrize(
    "expr",
    [
        call("+", Integer(INT64_MAX), Integer(1)),
        call("-", Integer(INT64_MIN), Integer(1)),
        call("*", Integer(INT64_MAX), Integer(2)),
        call("/", Integer(INT64_MIN), Integer(-1)),
    ],
)
def test_integer_overflow(module, expr):
    with pytest.raises(IntegerOverflow):
        evaluate(expr, module)


def test_arithmetic_rejects_non_integers(module):
    with pytest.raises(ArityOrTypeMismatch) as excinfo:
        evaluate(call("+", Integer(1), Text("2")), module)
    assert excinfo.value.arguments == (Integer(1), Text("2"))
    with pytest.raises(ArityOrTypeMismatch):
        evaluate(call("*", Boolean(True), Integer(2)), module)


def test_partially_applied_native_is_a_procedure(module):
    add_one = evaluate(Application(Name("+"), Integer(1)), module)
    assert isinstance(add_one, Abstraction)
    assert evaluate(call("atom?", Quotation(add_one)), module) == Boolean(True)

# -----------------------------------------------------
# Lists
# -----------------------------------------------------

@pytest.mark.parametrize(
    "expr,expected",
    [
        (call("cons", Integer(1), ints(2, 3)), seq(Integer(1), Integer(2), Integer(3))),
        (call("cons", Integer(1), Integer(2)), seq(Integer(1), Integer(2))),
        (call("cons", ints(1, 2), Integer(3)), seq(seq(Integer(1), Integer(2)), Integer(3))),
        (call("cons", Integer(1), Quotation(seq())), seq(Integer(1))),
        (call("list", Integer(1), Integer(2), Integer(3)), seq(Integer(1), Integer(2), Integer(3))),
        (call("list", call("+", Integer(1), Integer(2))), seq(Integer(3))),
        (Application(Name("list"), Integer(1)), seq(Integer(1))),
        (call("atom?", Integer(1)), Boolean(True)),
        (call("atom?", Quotation(Name("a"))), Boolean(True)),
        (call("atom?", ints(1, 2)), Boolean(False)),
        (call("first", ints(1, 2)), Integer(1)),
        (call("second", ints(1, 2)), Integer(2)),
        (call("third", ints(1, 2, 3)), Integer(3)),
        (call("nth", Integer(5), ints(1, 2, 3, 4, 5, 6, 7)), Integer(6)),
        (call("nth", Integer(0), ints(9)), Integer(9)),
    ],
)
def test_lists(expr, expected):
    assert eval_default_module(expr) == expected


@pytest.mark.parametrize(
    "expr",
    [
        call("third", ints(1, 2)),
        call("first", Quotation(seq())),
        call("first", Integer(1)),
        call("nth", Integer(7), ints(1, 2)),
        call("nth", Integer(-1), ints(1, 2)),
        call("nth", Text("0"), ints(1, 2)),
    ],
)
def test_list_access_out_of_range(module, expr):
    with pytest.raises(ArityOrTypeMismatch):
        evaluate(expr, module)

# -----------------------------------------------------
# Text
# -----------------------------------------------------

@pytest.mark.parametrize(
    "expr,expected",
    [
        (call("string-append", Text("abc"), Text("def")), Text("abcdef")),
        (call("string-head", Text("abc")), Text("a")),
        (call("string-tail", Text("abc")), Text("bc")),
        (call("string-init", Text("abc")), Text("ab")),
        (call("string-last", Text("abc")), Text("c")),
        (call("string-head", Text("")), Text("")),
        (call("string-tail", Text("")), Text("")),
        (call("string-last", Text("")), Text("")),
        (call("symbol->string", Quotation(Name("abc"))), Text("abc")),
    ],
)
def test_text(expr, expected):
    assert eval_default_module(expr) == expected


@pytest.mark.parametrize(
    "expr",
    [
        call("string-append", Text("a"), Integer(1)),
        call("string-head", Integer(1)),
        call("string-init", Text("")),
        call("symbol->string", Text("abc")),
    ],
)
def test_text_rejects_bad_arguments(module, expr):
    with pytest.raises(ArityOrTypeMismatch):
        evaluate(expr, module)

# -----------------------------------------------------
# Output
# -----------------------------------------------------

def test_print_and_println(module, capsys):
    assert evaluate(call("print", Integer(5)), module) == Nil
    assert evaluate(call("print", Text("a b")), module) == Nil
    assert evaluate(call("println", ints(1, 2)), module) is Nil
    assert capsys.readouterr().out == "5 a b (1 2)\n"


def test_println_renders_values(module, capsys):
    evaluate(call("println", Quotation(Name("sym"))), module)
    evaluate(call("println", Boolean(False)), module)
    evaluate(call("println", call("list")), module)
    assert capsys.readouterr().out == "sym\nfalse\n()\n"

# -----------------------------------------------------
# Registry
# -----------------------------------------------------

@native("twice", 1)
def twice(args, module):
    (x,) = args
    return Sequence((x, x))


@native("between?", 3)
def between(args, module):
    lo, x, hi = (a.value for a in args)
    return Boolean(lo <= x <= hi)


def test_custom_natives():
    m = Module("custom")
    insert(m, twice)
    insert(m, between)
    assert isinstance(m.lookup("twice"), NativeCall)
    assert isinstance(m.lookup("between?"), Abstraction)
    assert evaluate(Application(Name("twice"), Integer(1)), m) == seq(Integer(1), Integer(1))
    assert evaluate(apply(Name("between?"), Integer(1), Integer(2), Integer(3)), m) == Boolean(True)
    partial = evaluate(apply(Name("between?"), Integer(1), Integer(5)), m)
    assert evaluate(Application(partial, Integer(4)), m) == Boolean(False)


def test_bare_native_call_accumulates_arguments():
    m = Module("custom")
    m.define("between?", NativeCall(between))
    partial = evaluate(apply(Name("between?"), Integer(1), Integer(2)), m)
    assert partial == NativeCall(between, (Integer(1), Integer(2)))
    assert evaluate(Application(partial, Integer(3)), m) == Boolean(True)


def test_curried_wrapper_shape():
    assert curried(between) == Abstraction(
        "x0",
        Abstraction(
            "x1",
            Abstraction(
                "x2",
                apply(NativeCall(between), Name("x0"), Name("x1"), Name("x2")),
            ),
        ),
    )
    with pytest.raises(ValueError):
        insert_curried(Module("custom"), native("variadic", None)(twice.fn))


def test_curried_parameters_do_not_capture(module):
    # (== 'x1 'x1): the symbol arguments share names with the wrapper parameters
    expr = call("==", Quotation(Name("x1")), Quotation(Name("x1")))
    assert evaluate(expr, module) == Boolean(True)
    m = default_module()
    m.define("x1", Integer(3))
    # (+ x1) yields a procedure whose inner parameter must not capture x1's value
    assert evaluate(call("+", Name("x1"), Integer(4)), m) == Integer(7)
