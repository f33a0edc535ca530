"""Validation context — where a value sits in the object graph.

The engine hands every validator a :class:`ValidationContext` instead of
attaching temporary parent references to nested model instances. A context
is created per model visit and is never shared between two validation runs,
so validating the same nested instance from two call sites cannot leak
state between them.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from decval.domain.keys import PATH_ERROR_MESSAGES
from decval.domain.strings import sf

_PATH_PARTS = re.compile(r"\.\.|[^/.]+")


def _get(obj: Any, part: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(part)
    return getattr(obj, part, None)


@dataclass(frozen=True)
class ValidationContext:
    """Position of the model currently being validated.

    Attributes:
        instance: The model instance that owns the properties being checked.
        parent: Context of the model that holds *instance*, if any.
        prop: Name of the property of *parent* that holds *instance*.
        is_async: Whether the run was started through the async entry point.
    """

    instance: Any
    parent: ValidationContext | None = None
    prop: str | None = None
    is_async: bool = False

    def child(self, instance: Any, prop: str) -> ValidationContext:
        """Context for a nested model held by *prop*."""
        return ValidationContext(instance, self, prop, self.is_async)

    @property
    def path(self) -> str:
        """Dotted path from the root model to :attr:`instance`."""
        parts: list[str] = []
        ctx: ValidationContext | None = self
        while ctx is not None and ctx.prop is not None:
            parts.append(ctx.prop)
            ctx = ctx.parent
        return ".".join(reversed(parts))

    @property
    def root(self) -> ValidationContext:
        ctx = self
        while ctx.parent is not None:
            ctx = ctx.parent
        return ctx

    def resolve(self, path: str) -> Any:
        """Resolve *path* relative to :attr:`instance`.

        ``..`` climbs to the parent model; other segments (separated by ``.``
        or ``/``) read properties.

        Raises:
            ValueError: If the path is empty, climbs above the root, or hits
                a missing or ``None`` property.
        """
        if not isinstance(path, str) or not path.strip():
            raise ValueError(sf(PATH_ERROR_MESSAGES["INVALID_PATH"], path))

        ctx: ValidationContext = self
        current: Any = self.instance
        descended: list[Any] = []
        for index, part in enumerate(_PATH_PARTS.findall(path)):
            if part == "..":
                if descended:
                    current = descended.pop()
                    continue
                if ctx.parent is None:
                    raise ValueError(sf(PATH_ERROR_MESSAGES["CONTEXT_NOT_OBJECT"], index + 1, path))
                ctx = ctx.parent
                current = ctx.instance
                continue
            descended.append(current)
            current = _get(current, part)
            if current is None:
                raise ValueError(sf(PATH_ERROR_MESSAGES["PROPERTY_INVALID"], path, part))
        return current
