"""Type validator — shared by explicit ``type`` rules and design types."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from decval.domain.keys import DEFAULT_ERROR_MESSAGES, ModelKeys, ValidationKeys
from decval.domain.types import check_types, type_name
from decval.validation.validators.base import Options, Validator

if TYPE_CHECKING:
    from decval.validation.context import ValidationContext


class TypeValidator(Validator):
    """Value must match one of ``options["types"]``.

    Registered under both the explicit ``type`` key and the implicit
    ``design:type`` key recorded from annotations.
    """

    keys: ClassVar[tuple[str, ...]] = (ValidationKeys.TYPE, ModelKeys.TYPE)

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGES["TYPE"]) -> None:
        super().__init__(message)

    def has_errors(
        self,
        value: Any,
        options: Options | None = None,
        context: ValidationContext | None = None,
    ) -> str | None:
        if value is None:
            return None
        types = (options or {}).get("types") or ()
        if isinstance(types, str):
            types = (types,)
        if not types or check_types(value, types):
            return None
        return self.get_message(self.message_for(options), ", ".join(types), type_name(value))
