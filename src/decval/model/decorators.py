"""Class decorators for models."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from decval.domain.hashing import Hashing
from decval.domain.keys import ModelKeys
from decval.domain.metadata import metadata
from decval.model.registry import get_registry
from decval.serialization.serializers import Serialization

T = TypeVar("T", bound=type)

InstanceCallback = Callable[[Any, Any], None]


def register_model(cls: type, name: str | None = None) -> type:
    """Register *cls* in the model registry and record its anchor name."""
    name = name or cls.__name__
    get_registry().register(cls, name)
    metadata.define(ModelKeys.MODEL, name, cls)
    return cls


def model(name: str | None = None, instance_callback: InstanceCallback | None = None) -> Callable[[T], T]:
    """Register a class as a model, optionally under another name.

    Args:
        name: Registry and anchor name (default: the class name).
        instance_callback: Called as ``callback(instance, data)`` at the end
            of construction.
    """

    def decorate(cls: T) -> T:
        register_model(cls, name)
        if instance_callback is not None:
            metadata.define(ModelKeys.BUILDER, instance_callback, cls)
        return cls

    return decorate


def hashed_by(key: str) -> Callable[[T], T]:
    """Use the hashing method registered under *key* for this class."""
    Hashing.get(key)

    def decorate(cls: T) -> T:
        metadata.define(ModelKeys.HASHING, key, cls)
        return cls

    return decorate


def serialized_by(key: str) -> Callable[[T], T]:
    """Use the serializer registered under *key* for this class."""
    Serialization.get(key)

    def decorate(cls: T) -> T:
        metadata.define(ModelKeys.SERIALIZATION, key, cls)
        return cls

    return decorate
