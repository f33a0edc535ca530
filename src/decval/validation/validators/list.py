"""List validator — element types of list/tuple/set properties."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from decval.domain.keys import DEFAULT_ERROR_MESSAGES, ValidationKeys
from decval.domain.metadata import is_model
from decval.domain.types import check_types, model_type_names
from decval.validation.validators.base import Options, Validator

if TYPE_CHECKING:
    from decval.validation.context import ValidationContext

LIST_TYPES: tuple[str, ...] = ("list", "tuple", "set", "frozenset")


class ListValidator(Validator):
    """Every element must match one of ``options["clazz"]``.

    When ``clazz`` names model types, model elements are left to the engine:
    it resolves those names through the model registry, reports a wrong class
    on the offending element only, and then validates each element's rules.
    """

    keys: ClassVar[tuple[str, ...]] = (ValidationKeys.LIST,)

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGES["LIST"]) -> None:
        super().__init__(message, *LIST_TYPES)

    def has_errors(
        self,
        value: Any,
        options: Options | None = None,
        context: ValidationContext | None = None,
    ) -> str | None:
        if not value:
            return None
        clazz = (options or {}).get("clazz") or ()
        if isinstance(clazz, str):
            clazz = (clazz,)
        if not clazz:
            return None
        defers_models = bool(model_type_names(clazz))
        for element in value:
            if defers_models and is_model(element):
                continue
            if not check_types(element, clazz):
                return self.get_message(self.message_for(options), ", ".join(clazz))
        return None
