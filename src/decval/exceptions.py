"""Exception hierarchy for decval.

Two families, following the error taxonomy of the engine:

- Validation *failures* are never raised. They are collected as messages in
  a :class:`~decval.model.errors.ModelErrorDefinition`.
- Configuration *errors* are programmer mistakes (unknown rule keys, models
  missing from the registry, malformed patterns) and always propagate.
"""

from __future__ import annotations


class DecvalError(Exception):
    """Base class for every error raised by decval."""


class ConfigurationError(DecvalError):
    """A model, rule or registry was set up incorrectly."""


class ValidatorNotFoundError(ConfigurationError):
    """A declared rule key has no validator in the registry."""

    def __init__(self, key: str, prop: str | None = None) -> None:
        self.key = key
        self.prop = prop
        where = f" for property '{prop}'" if prop else ""
        super().__init__(f"No validator registered under '{key}'{where}")


class ModelNotRegisteredError(ConfigurationError):
    """A model name could not be resolved through the model registry."""

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f"Provided class {name} is not a registered Model object")


class InvalidPatternError(ConfigurationError):
    """A pattern rule carries a regular expression that does not compile."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        super().__init__(f"Invalid pattern '{pattern}': {reason}")


class ModelBuildError(DecvalError):
    """A plain record could not be turned into a model instance."""


class SerializationError(DecvalError):
    """A model could not be serialized, or a payload could not be read back."""
