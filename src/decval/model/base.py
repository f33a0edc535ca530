"""The :class:`Model` base class.

Subclasses declare their properties with annotations; rules ride along in
``Annotated`` metadata::

    class Address(Model):
        street: Annotated[str, required()]
        city: Annotated[str, required()]

    class User(Model):
        name: Annotated[str, required(), minlength(3)]
        email: Annotated[str, required(), email()]
        address: Address | None = None

Every subclass is registered in the model registry under its class name
when it is defined.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from decval.domain.equality import is_equal
from decval.domain.hashing import Hashing
from decval.domain.keys import ModelKeys
from decval.domain.metadata import metadata
from decval.model.construction import apply_defaults, from_model, from_object
from decval.model.decorators import register_model
from decval.model.errors import ModelErrorDefinition
from decval.model.registry import get_registry
from decval.serialization.serializers import Serialization, to_plain
from decval.validation.engine import validate, validate_async


class Model:
    """Base class for validatable, serializable models.

    Args:
        data: Mapping or object whose matching properties are copied in.
            Nested records are rebuilt into their declared model types.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        register_model(cls)

    def __init__(self, data: Any = None) -> None:
        apply_defaults(self)
        from_model(self, data)
        builder = metadata.get(ModelKeys.BUILDER, type(self))
        if builder is not None:
            builder(self, data)

    # --- Validation ---

    def has_errors(self, *ignored: str) -> ModelErrorDefinition | None:
        """Validate this instance, skipping async rules.

        Returns:
            The error report, or ``None`` when valid.
        """
        return validate(self, *ignored)

    async def has_errors_async(self, *ignored: str) -> ModelErrorDefinition | None:
        """Validate this instance including async rules."""
        return await validate_async(self, *ignored)

    # --- Equality and hashing ---

    def equals(self, other: Any, *ignored: str) -> bool:
        """Structural equality, skipping the *ignored* top-level properties."""
        return is_equal(self, other, *ignored)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return self.equals(other)

    def to_hash(self) -> str:
        return Hashing.hash(self, metadata.get(ModelKeys.HASHING, type(self)))

    def __hash__(self) -> int:
        return hash(self.to_hash())

    # --- Serialization ---

    def serialize(self) -> str:
        return Serialization.serialize(self)

    @classmethod
    def deserialize(cls, text: str, method: str | None = None) -> Any:
        """Rebuild a model from *text*; the anchor picks the class."""
        return Serialization.deserialize(text, method or metadata.get(ModelKeys.SERIALIZATION, cls))

    def to_dict(self) -> dict[str, Any]:
        return to_plain(self)

    def __str__(self) -> str:
        return f"{type(self).__name__}: {json.dumps(to_plain(self), default=str)}"

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in vars(self).items() if not k.startswith("_"))
        return f"{type(self).__name__}({fields})"

    # --- Registry helpers ---

    @staticmethod
    def build(obj: Any, clazz: str | None = None) -> Any:
        return get_registry().build(obj, clazz)

    @staticmethod
    def register(constructor: type, name: str | None = None) -> None:
        register_model(constructor, name)

    @staticmethod
    def get(name: str) -> type | None:
        return get_registry().get(name)

    @classmethod
    def set_builder(cls, builder: Callable[[Any, Any], None] | None) -> None:
        """Run *builder(instance, data)* after every construction of *cls*."""
        metadata.define(ModelKeys.BUILDER, builder, cls)

    @staticmethod
    def from_object(obj: Any, source: Any) -> Any:
        return from_object(obj, source)

    @staticmethod
    def from_model(obj: Any, source: Any) -> Any:
        return from_model(obj, source)
