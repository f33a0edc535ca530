"""Option validator — value restricted to a fixed set."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

from decval.domain.keys import DEFAULT_ERROR_MESSAGES, ValidationKeys
from decval.validation.validators.base import Options, Validator

if TYPE_CHECKING:
    from decval.validation.context import ValidationContext


def allowed_values(choices: Any) -> list[Any]:
    """Flatten a list of options or an :class:`Enum` class into plain values."""
    if isinstance(choices, type) and issubclass(choices, Enum):
        return [member.value for member in choices]
    return list(choices)


class OptionValidator(Validator):
    """Value must be one of ``options["enum"]``."""

    keys: ClassVar[tuple[str, ...]] = (ValidationKeys.ENUM,)

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGES["ENUM"]) -> None:
        super().__init__(message)

    def has_errors(
        self,
        value: Any,
        options: Options | None = None,
        context: ValidationContext | None = None,
    ) -> str | None:
        if value is None:
            return None
        options = options or {}
        choices = allowed_values(options.get(ValidationKeys.ENUM) or ())
        candidate = value.value if isinstance(value, Enum) else value
        if candidate in choices:
            return None
        return self.get_message(self.message_for(options), choices)
