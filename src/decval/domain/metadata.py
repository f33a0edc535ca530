"""Metadata store — key/value annotations on classes and their properties.

Entries are keyed by ``(class, property, key)``. A ``None`` property holds
class-level metadata (model name, hashing method, serializer).

Lookups are inheritance-aware: they walk the class MRO so that a subclass
sees the rules declared on its bases, and a rule redeclared on a subclass
shadows the inherited one (first-found-wins during the climb).
"""

from __future__ import annotations

from typing import Any

from decval.domain.keys import ModelKeys

_MISSING = object()


def _as_class(target: object) -> type:
    return target if isinstance(target, type) else type(target)


class MetadataStore:
    """In-memory metadata store keyed by class identity."""

    def __init__(self) -> None:
        self._store: dict[type, dict[str | None, dict[str, Any]]] = {}

    def define(self, key: str, value: Any, target: object, prop: str | None = None) -> None:
        """Attach *value* under *key* to *target* (and *prop*, if given)."""
        cls = _as_class(target)
        self._store.setdefault(cls, {}).setdefault(prop, {})[key] = value

    def get_own(
        self, key: str, target: object, prop: str | None = None, default: Any = None
    ) -> Any:
        """Look *key* up on *target* only, ignoring its bases."""
        entry = self._store.get(_as_class(target), {}).get(prop, {})
        return entry.get(key, default)

    def get(self, key: str, target: object, prop: str | None = None, default: Any = None) -> Any:
        """Look *key* up on *target*, then on each class of its MRO."""
        for cls in _as_class(target).__mro__:
            entry = self._store.get(cls, {}).get(prop)
            if entry is None:
                continue
            value = entry.get(key, _MISSING)
            if value is not _MISSING:
                return value
        return default

    def get_keys(self, target: object, prop: str | None = None) -> list[str]:
        """Return every key visible on *target*/*prop*, most-derived first."""
        keys: list[str] = []
        for cls in _as_class(target).__mro__:
            entry = self._store.get(cls, {}).get(prop)
            if not entry:
                continue
            for key in entry:
                if key not in keys:
                    keys.append(key)
        return keys

    def get_all(self, target: object, prop: str | None = None) -> dict[str, Any]:
        """Return the effective ``key -> value`` mapping for *target*/*prop*."""
        return {key: self.get(key, target, prop) for key in self.get_keys(target, prop)}

    def properties(self, target: object) -> list[str]:
        """Return decorated property names, base classes first."""
        names: list[str] = []
        for cls in reversed(_as_class(target).__mro__):
            for prop in self._store.get(cls, {}):
                if prop is not None and prop not in names:
                    names.append(prop)
        return names

    def has(self, key: str, target: object, prop: str | None = None) -> bool:
        """Whether *key* is visible on *target*/*prop*."""
        return self.get(key, target, prop, _MISSING) is not _MISSING

    def clear(self, target: object | None = None) -> None:
        """Drop all metadata, or only the metadata owned by *target*."""
        if target is None:
            self._store.clear()
            return
        self._store.pop(_as_class(target), None)


metadata = MetadataStore()
"""Process-wide store used by the rule builders and the validation engine."""


def is_model(value: Any) -> bool:
    """Whether *value* is an instance of a class registered as a model."""
    return value is not None and not isinstance(value, type) and metadata.has(ModelKeys.MODEL, type(value))
