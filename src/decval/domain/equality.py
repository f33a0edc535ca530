"""Structural equality over object graphs."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any


def _fields(obj: Any, ignored: frozenset[str]) -> dict[str, Any]:
    return {k: v for k, v in vars(obj).items() if not k.startswith("_") and k not in ignored}


def is_equal(a: Any, b: Any, *ignored: str) -> bool:
    """Compare *a* and *b* field by field.

    Objects with a ``__dict__`` are equal when they share a class and every
    public field not listed in *ignored* is equal. Ignored names apply to the
    top level only.
    """
    if a is b:
        return True
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        return a.keys() == b.keys() and all(is_equal(a[k], b[k]) for k in a)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        return type(a) is type(b) and len(a) == len(b) and all(is_equal(x, y) for x, y in zip(a, b, strict=True))
    if _is_record(a) and _is_record(b):
        if type(a) is not type(b):
            return False
        skip = frozenset(ignored)
        left, right = _fields(a, skip), _fields(b, skip)
        return left.keys() == right.keys() and all(is_equal(left[k], right[k]) for k in left)
    return bool(a == b)


def _is_record(obj: Any) -> bool:
    return hasattr(obj, "__dict__") and not isinstance(obj, (type, Enum)) and not callable(obj)
