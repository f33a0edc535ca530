"""Length validators for strings and collections."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from decval.domain.keys import DEFAULT_ERROR_MESSAGES, ValidationKeys
from decval.validation.validators.base import Options, Validator

if TYPE_CHECKING:
    from decval.validation.context import ValidationContext

SIZED_TYPES: tuple[str, ...] = ("str", "list", "tuple", "set", "frozenset", "dict")


class MinLengthValidator(Validator):
    """``len(value)`` must be at least ``options["minlength"]``."""

    keys: ClassVar[tuple[str, ...]] = (ValidationKeys.MIN_LENGTH,)

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGES["MIN_LENGTH"]) -> None:
        super().__init__(message, *SIZED_TYPES)

    def has_errors(
        self,
        value: Any,
        options: Options | None = None,
        context: ValidationContext | None = None,
    ) -> str | None:
        if value is None:
            return None
        minimum = (options or {})[ValidationKeys.MIN_LENGTH]
        if len(value) < minimum:
            return self.get_message(self.message_for(options), minimum)
        return None


class MaxLengthValidator(Validator):
    """``len(value)`` must be at most ``options["maxlength"]``."""

    keys: ClassVar[tuple[str, ...]] = (ValidationKeys.MAX_LENGTH,)

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGES["MAX_LENGTH"]) -> None:
        super().__init__(message, *SIZED_TYPES)

    def has_errors(
        self,
        value: Any,
        options: Options | None = None,
        context: ValidationContext | None = None,
    ) -> str | None:
        if value is None:
            return None
        maximum = (options or {})[ValidationKeys.MAX_LENGTH]
        if len(value) > maximum:
            return self.get_message(self.message_for(options), maximum)
        return None
