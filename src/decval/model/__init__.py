"""Model layer — base class, registry, construction and error reports."""

from decval.model.base import Model
from decval.model.decorators import hashed_by, model, register_model, serialized_by
from decval.model.errors import ModelErrorDefinition
from decval.model.registry import (
    ModelRegistry,
    bulk_model_register,
    get_registry,
    set_registry,
)

__all__ = [
    "Model",
    "ModelErrorDefinition",
    "ModelRegistry",
    "bulk_model_register",
    "get_registry",
    "hashed_by",
    "model",
    "register_model",
    "serialized_by",
    "set_registry",
]
