"""Capture-avoiding substitution.

`substitute(expr, name, value, names)` replaces the free occurrences of `name`
in `expr` by `value` without letting any binder in `expr` capture a free name
of `value`: a binder that would capture is first renamed to a fresh name drawn
from the NameGenerator. Binders are abstraction parameters, `let` names and
the names bound by `case` patterns. Quoted data is never entered.
"""

from __future__ import annotations

import logging
from typing import Iterable

from sublisp.evaluation.patterns import pattern_binders, rename_pattern
from sublisp.types.expression import (
    Abstraction,
    Application,
    Binding,
    Conditional,
    Expression,
    Match,
    Name,
    NativeCall,
    Quotation,
    Sequence,
)
from sublisp.types.names import NameGenerator

logger = logging.getLogger(__name__)


def free_names(expr: Expression) -> frozenset[str]:
    """Names occurring free in `expr`."""
    return _free_names(expr, {})


def _free_names(expr: Expression, cache: dict) -> frozenset[str]:
    # cache maps id(node) -> (node, names); keeping the node alive keeps its id unique
    hit = cache.get(id(expr))
    if hit is not None:
        return hit[1]

    def free(e: Expression) -> frozenset[str]:
        return _free_names(e, cache)

    match expr:
        case Name(id=n):
            result = frozenset((n,))
        case Abstraction(param=p, body=body):
            result = free(body) - {p}
        case Application(fn=fn, arg=arg):
            result = free(fn) | free(arg)
        case Sequence(items=items):
            result = _union(free(item) for item in items)
        case Conditional(condition=c, then=t, otherwise=o):
            result = free(c) | free(t) | free(o)
        case Binding(name=p, value=v, body=body):
            result = free(v) | (free(body) - {p})
        case Match(scrutinee=s, clauses=clauses):
            result = free(s) | _union(
                free(res) - set(pattern_binders(pattern)) for pattern, res in clauses
            )
        case NativeCall(args=args):
            result = _union(free(a) for a in args)
        case _:
            # literals and quotations
            result = frozenset()
    cache[id(expr)] = (expr, result)
    return result


def all_names(expr: Expression) -> frozenset[str]:
    """Every identifier spelled anywhere in `expr`, bound, free or quoted."""
    match expr:
        case Name(id=n):
            return frozenset((n,))
        case Abstraction(param=p, body=body):
            return all_names(body) | {p}
        case Application(fn=fn, arg=arg):
            return all_names(fn) | all_names(arg)
        case Sequence(items=items):
            return _union(all_names(item) for item in items)
        case Conditional(condition=c, then=t, otherwise=o):
            return all_names(c) | all_names(t) | all_names(o)
        case Quotation(inner=inner):
            return all_names(inner)
        case Binding(name=p, value=v, body=body):
            return all_names(v) | all_names(body) | {p}
        case Match(scrutinee=s, clauses=clauses):
            return all_names(s) | _union(
                all_names(pattern) | all_names(result) for pattern, result in clauses
            )
        case NativeCall(args=args):
            return _union(all_names(a) for a in args)
    return frozenset()


def rename(expr: Expression, old: str, new: str, names: NameGenerator) -> Expression:
    """Replace free `old` by `new`; `new` must not occur anywhere in `expr`."""
    return substitute(expr, old, Name(new), names)


def substitute(
    expr: Expression, name: str, value: Expression, names: NameGenerator
) -> Expression:
    """Return `expr` with every free occurrence of `name` replaced by `value`."""
    value_free = free_names(value)
    cache: dict = {}
    taken: set[str] = set()

    def free_in(e: Expression) -> frozenset[str]:
        return _free_names(e, cache)

    def fresh_for(old: str) -> str:
        # avoid every name spelled in the whole substitution, and earlier renames
        if not taken:
            taken.update(all_names(expr), all_names(value), (name,))
        new = names.fresh(taken)
        taken.add(new)
        logger.debug("alpha-renaming %s to %s to avoid capture", old, new)
        return new

    def under_binder(param: str, body: Expression) -> tuple[str, Expression]:
        # Substitute into the scope of `param`; the caller has checked param != name.
        if name not in free_in(body):
            return param, body
        if param in value_free:
            new = fresh_for(param)
            body = rename(body, param, new, names)
            param = new
        return param, subst(body)

    def subst(e: Expression) -> Expression:
        if name not in free_in(e):
            return e
        match e:
            case Name(id=n):
                return value if n == name else e
            case Abstraction(param=p, body=body):
                if p == name:
                    return e
                p, body = under_binder(p, body)
                return Abstraction(p, body)
            case Application(fn=fn, arg=arg):
                return Application(subst(fn), subst(arg))
            case Sequence(items=items):
                return Sequence(subst(item) for item in items)
            case Conditional(condition=c, then=t, otherwise=o):
                return Conditional(subst(c), subst(t), subst(o))
            case Binding(name=p, value=v, body=body):
                v = subst(v)
                if p == name:
                    return Binding(p, v, body)
                p, body = under_binder(p, body)
                return Binding(p, v, body)
            case Match(scrutinee=s, clauses=clauses):
                return Match(subst(s), [subst_clause(pat, res) for pat, res in clauses])
            case NativeCall(procedure=proc, args=args):
                return NativeCall(proc, [subst(a) for a in args])
        # literals and quotations
        return e

    def subst_clause(pattern: Expression, result: Expression) -> tuple[Expression, Expression]:
        binders = pattern_binders(pattern)
        if name in binders or name not in free_in(result):
            return pattern, result
        for binder in binders:
            if binder in value_free:
                new = fresh_for(binder)
                pattern = rename_pattern(pattern, binder, new)
                result = rename(result, binder, new, names)
        return pattern, subst(result)

    return subst(expr)


def alpha_equivalent(a: Expression, b: Expression) -> bool:
    """True when `a` and `b` differ at most in the names of their binders."""
    return _alpha(a, b, {}, {}, 0)


def _alpha(a: Expression, b: Expression, env_a: dict, env_b: dict, depth: int) -> bool:
    match a, b:
        case Name(id=x), Name(id=y):
            if x in env_a or y in env_b:
                return env_a.get(x) == env_b.get(y) and x in env_a and y in env_b
            return x == y
        case Abstraction(param=p, body=ba), Abstraction(param=q, body=bb):
            return _alpha(ba, bb, {**env_a, p: depth}, {**env_b, q: depth}, depth + 1)
        case Application(fn=fa, arg=aa), Application(fn=fb, arg=ab):
            return _alpha(fa, fb, env_a, env_b, depth) and _alpha(aa, ab, env_a, env_b, depth)
        case Sequence(items=xs), Sequence(items=ys):
            return len(xs) == len(ys) and all(
                _alpha(x, y, env_a, env_b, depth) for x, y in zip(xs, ys)
            )
        case Conditional(), Conditional():
            return all(
                _alpha(x, y, env_a, env_b, depth)
                for x, y in ((a.condition, b.condition), (a.then, b.then), (a.otherwise, b.otherwise))
            )
        case Binding(name=p, value=va, body=ba), Binding(name=q, value=vb, body=bb):
            return _alpha(va, vb, env_a, env_b, depth) and _alpha(
                ba, bb, {**env_a, p: depth}, {**env_b, q: depth}, depth + 1
            )
        case Match(scrutinee=sa, clauses=ca), Match(scrutinee=sb, clauses=cb):
            if len(ca) != len(cb) or not _alpha(sa, sb, env_a, env_b, depth):
                return False
            return all(
                _alpha_clause(pa, ra, pb, rb, env_a, env_b, depth)
                for (pa, ra), (pb, rb) in zip(ca, cb)
            )
        case NativeCall(procedure=fa, args=xs), NativeCall(procedure=fb, args=ys):
            return fa == fb and len(xs) == len(ys) and all(
                _alpha(x, y, env_a, env_b, depth) for x, y in zip(xs, ys)
            )
    # literals and quoted data compare structurally
    return a == b


def _alpha_clause(pa, ra, pb, rb, env_a: dict, env_b: dict, depth: int) -> bool:
    binders_a, binders_b = pattern_binders(pa), pattern_binders(pb)
    if len(binders_a) != len(binders_b):
        return False
    scope_a, scope_b = dict(env_a), dict(env_b)
    for offset, (x, y) in enumerate(zip(binders_a, binders_b)):
        scope_a[x] = depth + offset
        scope_b[y] = depth + offset
    depth += len(binders_a)
    return _alpha(pa, pb, scope_a, scope_b, depth) and _alpha(ra, rb, scope_a, scope_b, depth)


def _union(sets: Iterable[frozenset[str]]) -> frozenset[str]:
    result: frozenset[str] = frozenset()
    for s in sets:
        result |= s
    return result
