from __future__ import annotations
import os

# Defaults
_DEFAULT_RECURSION_LIMIT = 10000
_DEFAULT_FRESH_PREFIX = "#:g"


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{var} must be positive, got {value}")
    return value


def get_recursion_limit() -> int:
    return int_from_env('SUBLISP_RECURSION_LIMIT', _DEFAULT_RECURSION_LIMIT)


def get_fresh_prefix() -> str:
    # generated names are never valid reader identifiers with the default prefix
    raw = os.environ.get('SUBLISP_FRESH_PREFIX')
    if raw is None:
        return _DEFAULT_FRESH_PREFIX
    if not raw:
        raise ValueError("SUBLISP_FRESH_PREFIX must not be empty")
    return raw
