"""Validator registry — rule key to validator instance.

Registration is idempotent: the first validator registered under a key
keeps it, later registrations under the same key are skipped. Classes are
stored as-is and instantiated on first :meth:`ValidatorRegistry.get`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import ClassVar, TypeVar

from decval.domain.keys import reflect_key
from decval.validation.validators import BUILTIN_VALIDATORS
from decval.validation.validators.base import BaseValidator

logger = logging.getLogger(__name__)

ValidatorLike = BaseValidator | type[BaseValidator]
V = TypeVar("V", bound=type[BaseValidator])


@dataclass(frozen=True)
class ValidatorDefinition:
    """Explicit registration entry.

    Attributes:
        key: Rule key the validator answers to.
        validator: Validator instance or class.
        save: Whether the key is reported by
            :meth:`ValidatorRegistry.get_custom_keys`.
    """

    key: str
    validator: ValidatorLike
    save: bool = True


class ValidatorRegistry:
    """Maps rule keys to validators, first registration wins."""

    def __init__(self, *validators: ValidatorLike | ValidatorDefinition) -> None:
        self._cache: dict[str, ValidatorLike] = {}
        self._custom: dict[str, str] = {}
        self.register(*validators)

    def register(self, *validators: ValidatorLike | ValidatorDefinition) -> None:
        """Add validators, skipping keys that are already taken.

        Each entry is a :class:`ValidatorDefinition`, or a validator class or
        instance that declares its keys through ``keys``.
        """
        for entry in validators:
            for key, validator, save in self._entries(entry):
                if key in self._cache:
                    logger.debug("Validator for %s already registered, skipping", key)
                    continue
                self._cache[key] = validator
                if save:
                    self._custom[key] = reflect_key(key)

    @staticmethod
    def _entries(entry: ValidatorLike | ValidatorDefinition) -> Iterable[tuple[str, ValidatorLike, bool]]:
        if isinstance(entry, ValidatorDefinition):
            return [(entry.key, entry.validator, entry.save)]
        keys = getattr(entry, "keys", ())
        if not keys:
            logger.warning("Validator %r declares no keys, ignoring", entry)
        return [(key, entry, False) for key in keys]

    def get(self, key: str) -> BaseValidator | None:
        """Return the validator for *key*, instantiating a stored class once."""
        validator = self._cache.get(key)
        if validator is None:
            return None
        if isinstance(validator, type):
            validator = validator()
            self._cache[key] = validator
        return validator

    def get_keys(self) -> list[str]:
        return list(self._cache)

    def get_custom_keys(self) -> dict[str, str]:
        """Keys added through definitions, mapped to their metadata-store key."""
        return dict(self._custom)

    def __contains__(self, key: object) -> bool:
        return key in self._cache


def default_registry() -> ValidatorRegistry:
    """A fresh registry holding the built-in validators."""
    return ValidatorRegistry(*BUILTIN_VALIDATORS)


class Validation:
    """Process-wide access to the active :class:`ValidatorRegistry`."""

    _registry: ClassVar[ValidatorRegistry | None] = None

    @staticmethod
    def key(key: str) -> str:
        return reflect_key(key)

    @classmethod
    def registry(cls) -> ValidatorRegistry:
        if cls._registry is None:
            cls._registry = default_registry()
        return cls._registry

    @classmethod
    def set_registry(cls, registry: ValidatorRegistry) -> None:
        cls._registry = registry

    @classmethod
    def get(cls, key: str) -> BaseValidator | None:
        return cls.registry().get(key)

    @classmethod
    def register(cls, *validators: ValidatorLike | ValidatorDefinition) -> None:
        cls.registry().register(*validators)

    @classmethod
    def keys(cls) -> list[str]:
        return cls.registry().get_keys()

    @classmethod
    def reset(cls) -> None:
        """Drop custom validators and go back to the built-ins."""
        cls._registry = None


def validator(*keys: str, save: bool = True) -> Callable[[V], V]:
    """Class decorator registering a custom validator under *keys*.

    Example::

        @validator("even")
        class EvenValidator(Validator):
            def has_errors(self, value, options=None, context=None):
                return None if value % 2 == 0 else "must be even"
    """

    def decorate(cls: V) -> V:
        cls.keys = tuple(keys) or cls.keys
        Validation.register(*(ValidatorDefinition(key, cls, save) for key in cls.keys))
        return cls

    return decorate
