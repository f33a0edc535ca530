"""decval — declarative model validation and (de)serialization.

Models declare typed properties with rules attached through ``Annotated``;
the engine walks those rules to produce structured error reports, and the
model registry rebuilds typed instances from plain data.
"""

from decval.domain.hashing import Hashing
from decval.domain.keys import ModelKeys, ValidationKeys
from decval.domain.metadata import metadata
from decval.domain.rules import ValidationRule
from decval.exceptions import (
    ConfigurationError,
    DecvalError,
    InvalidPatternError,
    ModelBuildError,
    ModelNotRegisteredError,
    SerializationError,
    ValidatorNotFoundError,
)
from decval.model import (
    Model,
    ModelErrorDefinition,
    ModelRegistry,
    bulk_model_register,
    get_registry,
    hashed_by,
    model,
    serialized_by,
    set_registry,
)
from decval.serialization import JSONSerializer, Serialization, Serializer, YamlSerializer
from decval.validation.context import ValidationContext
from decval.validation.decorators import (
    apply_rules,
    date,
    diff,
    email,
    enum_,
    eq,
    gt,
    gte,
    list_,
    lt,
    lte,
    max_,
    maxlength,
    min_,
    minlength,
    option,
    password,
    pattern,
    required,
    rule,
    step,
    type_,
    url,
)
from decval.validation.engine import validate, validate_async
from decval.validation.registry import Validation, ValidatorDefinition, ValidatorRegistry, validator
from decval.validation.validators import AsyncValidator, Validator

__version__ = "0.1.0"

__all__ = [
    "AsyncValidator",
    "ConfigurationError",
    "DecvalError",
    "Hashing",
    "InvalidPatternError",
    "JSONSerializer",
    "Model",
    "ModelBuildError",
    "ModelErrorDefinition",
    "ModelKeys",
    "ModelNotRegisteredError",
    "ModelRegistry",
    "Serialization",
    "SerializationError",
    "Serializer",
    "Validation",
    "ValidationContext",
    "ValidationKeys",
    "ValidationRule",
    "Validator",
    "ValidatorDefinition",
    "ValidatorNotFoundError",
    "ValidatorRegistry",
    "YamlSerializer",
    "apply_rules",
    "bulk_model_register",
    "date",
    "diff",
    "email",
    "enum_",
    "eq",
    "get_registry",
    "gt",
    "gte",
    "hashed_by",
    "list_",
    "lt",
    "lte",
    "max_",
    "maxlength",
    "metadata",
    "min_",
    "minlength",
    "model",
    "option",
    "password",
    "pattern",
    "required",
    "rule",
    "serialized_by",
    "set_registry",
    "step",
    "type_",
    "url",
    "validate",
    "validate_async",
    "validator",
]
