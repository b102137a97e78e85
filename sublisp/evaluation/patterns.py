"""Pattern matching for `case` clauses.

Patterns are literals, never evaluated:

- a literal (nil, boolean, integer, text) matches an equal value;
- `_` matches anything and binds nothing;
- any other name matches anything and binds it; a name repeated within one
  pattern must see equal values each time;
- a sequence pattern matches a sequence of the same length element-wise;
- a quoted pattern matches exactly the quoted datum (this is how symbols and
  literal lists containing symbols are matched);
- any other shape matches only a structurally equal value.
"""

from __future__ import annotations

from typing import Optional

from sublisp.types.expression import Expression, Name, Quotation, Sequence

WILDCARD = "_"


def pattern_binders(pattern: Expression) -> list[str]:
    """Names bound by `pattern`, in first-occurrence order, without duplicates."""
    found: list[str] = []

    def walk(p: Expression) -> None:
        match p:
            case Name(id=n):
                if n != WILDCARD and n not in found:
                    found.append(n)
            case Sequence(items=items):
                for item in items:
                    walk(item)

    walk(pattern)
    return found


def rename_pattern(pattern: Expression, old: str, new: str) -> Expression:
    """Rename the binder `old` to `new` wherever it occurs in `pattern`."""
    match pattern:
        case Name(id=n) if n == old:
            return Name(new)
        case Sequence(items=items):
            return Sequence(rename_pattern(item, old, new) for item in items)
    return pattern


def match_pattern(pattern: Expression, value: Expression) -> Optional[dict[str, Expression]]:
    """Match `value` against `pattern`.

    Returns the bindings made by the pattern (possibly empty), or None when
    the value does not match.
    """
    bindings: dict[str, Expression] = {}
    if _match(pattern, value, bindings):
        return bindings
    return None


def _match(pattern: Expression, value: Expression, bindings: dict[str, Expression]) -> bool:
    match pattern:
        case Name(id=n):
            if n == WILDCARD:
                return True
            if n in bindings:
                return bindings[n] == value
            bindings[n] = value
            return True
        case Sequence(items=items):
            if not isinstance(value, Sequence) or len(value.items) != len(items):
                return False
            return all(_match(p, v, bindings) for p, v in zip(items, value.items))
        case Quotation(inner=datum):
            return datum == value
    return pattern == value
