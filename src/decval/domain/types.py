"""Type-name checks and annotation inspection.

Validators compare values against *type names* rather than classes, so that
rules can be declared before the classes they mention exist and so that
serialized payloads can refer to them. A value matches a name when the name
(case-insensitive) is one of the classes in ``type(value).__mro__`` or one of
the aliases in :data:`TYPE_ALIASES`.
"""

from __future__ import annotations

import types
import typing
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from decval.domain.keys import RESERVED_TYPES

WILDCARD_TYPES: frozenset[str] = frozenset({"any", "object"})

TYPE_ALIASES: dict[str, frozenset[str]] = {
    "number": frozenset({"int", "float", "decimal"}),
    "string": frozenset({"str"}),
    "boolean": frozenset({"bool"}),
    "date": frozenset({"date", "datetime"}),
    "array": frozenset({"list", "tuple"}),
}


def type_name(value: Any) -> str:
    """Name reported in type error messages."""
    return type(value).__name__


def mro_names(value: Any) -> list[str]:
    """Lowercase class names of ``type(value)`` and its bases, minus ``object``."""
    return [cls.__name__.lower() for cls in type(value).__mro__ if cls is not object]


def check_type(value: Any, name: str) -> bool:
    """Whether *value* is acceptable for the declared type *name*."""
    lowered = name.lower()
    if lowered in WILDCARD_TYPES:
        return True
    accepted = TYPE_ALIASES.get(lowered, frozenset({lowered}))
    if isinstance(value, bool) and not accepted & {"bool"}:
        return False
    return any(candidate in accepted for candidate in mro_names(value))


def check_types(value: Any, names: Iterable[str]) -> bool:
    """Whether *value* matches at least one of *names*."""
    return any(check_type(value, name) for name in names)


def model_type_names(names: Iterable[str]) -> list[str]:
    """The entries of *names* that can only be resolved through the model registry."""
    return [n for n in names if n.lower() not in RESERVED_TYPES and n.lower() not in WILDCARD_TYPES]


@dataclass(frozen=True)
class DesignType:
    """The type information carried by a property annotation.

    Attributes:
        names: Acceptable type names (several for ``X | Y``).
        element_types: Element classes for ``list[X]``-style annotations.
        optional: Whether ``None`` was part of the annotation.
    """

    names: tuple[str, ...]
    element_types: tuple[type, ...] = ()
    optional: bool = False


def _class_name(hint: Any) -> str:
    if hint is Any:
        return "Any"
    if isinstance(hint, type):
        return hint.__name__
    return getattr(hint, "__name__", None) or str(hint)


def design_type(hint: Any) -> DesignType:
    """Reduce a (non-``Annotated``) type hint to a :class:`DesignType`."""
    origin = typing.get_origin(hint)
    if origin in (typing.Union, types.UnionType):
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        optional = len(args) != len(typing.get_args(hint))
        if len(args) == 1:
            inner = design_type(args[0])
            return DesignType(inner.names, inner.element_types, optional)
        return DesignType(tuple(_class_name(arg) for arg in args), (), optional)
    if origin is typing.Literal:
        return DesignType(tuple(sorted({type(arg).__name__ for arg in typing.get_args(hint)})))
    if origin is not None:
        elements = tuple(arg for arg in typing.get_args(hint) if isinstance(arg, type))
        return DesignType((_class_name(origin),), elements)
    return DesignType((_class_name(hint),))
