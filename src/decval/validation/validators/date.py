"""Date validator."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any, ClassVar

from decval.domain.keys import DEFAULT_DATE_FORMAT, DEFAULT_ERROR_MESSAGES, ValidationKeys
from decval.validation.validators.base import Options, Validator

if TYPE_CHECKING:
    from decval.validation.context import ValidationContext

DATE_TYPES: tuple[str, ...] = ("datetime", "date", "str", "int", "float")


class DateValidator(Validator):
    """Value must be a date, a timestamp, or a string in ``options["format"]``.

    Coercion of assigned values is done by the property descriptor installed
    by the ``date`` rule; this validator only reports what is left over.
    """

    keys: ClassVar[tuple[str, ...]] = (ValidationKeys.DATE,)

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGES["DATE"]) -> None:
        super().__init__(message, *DATE_TYPES)

    def has_errors(
        self,
        value: Any,
        options: Options | None = None,
        context: ValidationContext | None = None,
    ) -> str | None:
        if value is None or isinstance(value, date):
            return None
        options = options or {}
        if isinstance(value, str):
            try:
                datetime.strptime(value, options.get("format") or DEFAULT_DATE_FORMAT)
            except ValueError:
                return self.get_message(self.message_for(options))
            return None
        try:
            datetime.fromtimestamp(value)
        except (OverflowError, OSError, ValueError):
            return self.get_message(self.message_for(options))
        return None
