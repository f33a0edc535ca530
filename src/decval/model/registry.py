"""Model registry — class name to constructor.

Used to rebuild typed instances from plain records carrying the ``__model``
anchor, and by the engine to resolve nested model types. Registering a name
twice keeps the latest class and logs the override.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from decval.domain.keys import ModelKeys
from decval.exceptions import ConfigurationError, ModelBuildError, ModelNotRegisteredError

logger = logging.getLogger(__name__)

ModelEntry = type | tuple[str, type]


class ModelRegistry:
    """Name-keyed store of model classes, last registration wins."""

    def __init__(self, *models: ModelEntry) -> None:
        self._cache: dict[str, type] = {}
        for entry in models:
            if isinstance(entry, tuple):
                self.register(entry[1], entry[0])
            else:
                self.register(entry)

    def register(self, constructor: Any, name: str | None = None) -> None:
        """Store *constructor* under *name* (default: its ``__name__``).

        Raises:
            ConfigurationError: If *constructor* is not a class.
        """
        if not isinstance(constructor, type):
            msg = f"Model registration requires a class, got {constructor!r}"
            raise ConfigurationError(msg)
        name = name or constructor.__name__
        previous = self._cache.get(name)
        if previous is not None and previous is not constructor:
            logger.info("Model %s re-registered: %s replaces %s", name, constructor.__qualname__, previous.__qualname__)
        self._cache[name] = constructor

    def get(self, name: str) -> type | None:
        return self._cache.get(name)

    def names(self) -> list[str]:
        return list(self._cache)

    def __contains__(self, name: object) -> bool:
        return name in self._cache

    def build(self, obj: Mapping[str, Any] | Any, clazz: str | None = None) -> Any:
        """Instantiate the model named by *clazz* or by *obj*'s anchor.

        Raises:
            ModelNotRegisteredError: If no anchor is present, or the name is
                not registered.
            ModelBuildError: If the constructor rejects the record.
        """
        if clazz is None:
            clazz = _anchor(obj)
            if clazz is None:
                raise ModelNotRegisteredError("<unknown>", "Provided obj is not a Model object")
        constructor = self.get(clazz)
        if constructor is None:
            raise ModelNotRegisteredError(clazz)
        try:
            return constructor(obj)
        except (TypeError, ValueError) as exc:
            msg = f"Could not build {clazz}: {exc}"
            raise ModelBuildError(msg) from exc


def _anchor(obj: Any) -> str | None:
    if isinstance(obj, Mapping):
        return obj.get(ModelKeys.ANCHOR)
    return getattr(obj, ModelKeys.ANCHOR, None)


_registry: ModelRegistry | None = None


def get_registry() -> ModelRegistry:
    """Process-wide registry, created on first access."""
    global _registry
    if _registry is None:
        _registry = ModelRegistry()
    return _registry


def set_registry(registry: ModelRegistry, migrate: bool = False) -> None:
    """Swap the process-wide registry.

    Args:
        registry: The new registry.
        migrate: Copy the current entries into *registry* first.
    """
    global _registry
    if migrate and _registry is not None:
        for name in _registry.names():
            registry.register(_registry.get(name), name)
    _registry = registry


def bulk_model_register(*models: ModelEntry) -> None:
    """Register several classes, or ``(name, class)`` pairs, at once."""
    registry = get_registry()
    for entry in models:
        if isinstance(entry, tuple):
            registry.register(entry[1], entry[0])
        else:
            registry.register(entry)

