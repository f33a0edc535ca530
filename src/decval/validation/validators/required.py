"""Required validator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from decval.domain.keys import DEFAULT_ERROR_MESSAGES, ValidationKeys
from decval.validation.validators.base import Options, Validator

if TYPE_CHECKING:
    from decval.validation.context import ValidationContext


class RequiredValidator(Validator):
    """Fails for any falsy value.

    ``None``, ``""``, ``0``, ``False`` and empty containers all count as
    missing.
    """

    keys: ClassVar[tuple[str, ...]] = (ValidationKeys.REQUIRED,)

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGES["REQUIRED"]) -> None:
        super().__init__(message)

    def has_errors(
        self,
        value: Any,
        options: Options | None = None,
        context: ValidationContext | None = None,
    ) -> str | None:
        if value:
            return None
        return self.get_message(self.message_for(options))
