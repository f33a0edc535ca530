"""Numeric and relational validators.

``MinValidator``, ``MaxValidator`` and ``StepValidator`` compare against a
constant declared on the rule. ``ComparisonValidator`` compares against
another property, addressed by a path resolved through the validation
context (``"other"``, ``"../sibling"``, ``"child.prop"``).
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Any, ClassVar

from decval.domain.dates import comparable
from decval.domain.keys import (
    DEFAULT_ERROR_MESSAGES,
    PATH_ERROR_MESSAGES,
    ValidationKeys,
)
from decval.domain.strings import sf
from decval.exceptions import ConfigurationError
from decval.validation.validators.base import Options, Validator

if TYPE_CHECKING:
    from decval.validation.context import ValidationContext


def _bound(value: Any, bound: Any, key: str) -> tuple[Any, Any]:
    try:
        return comparable(value, bound)
    except ValueError as exc:
        msg = f"Invalid {key} param defined: {bound!r}"
        raise ConfigurationError(msg) from exc


class MinValidator(Validator):
    """Value must be greater than or equal to ``options["min"]``."""

    keys: ClassVar[tuple[str, ...]] = (ValidationKeys.MIN,)

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGES["MIN"]) -> None:
        super().__init__(message, "number", "date")

    def has_errors(
        self,
        value: Any,
        options: Options | None = None,
        context: ValidationContext | None = None,
    ) -> str | None:
        if value is None:
            return None
        minimum = (options or {})[ValidationKeys.MIN]
        value, minimum = _bound(value, minimum, ValidationKeys.MIN)
        if value < minimum:
            return self.get_message(self.message_for(options), minimum)
        return None


class MaxValidator(Validator):
    """Value must be less than or equal to ``options["max"]``."""

    keys: ClassVar[tuple[str, ...]] = (ValidationKeys.MAX,)

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGES["MAX"]) -> None:
        super().__init__(message, "number", "date")

    def has_errors(
        self,
        value: Any,
        options: Options | None = None,
        context: ValidationContext | None = None,
    ) -> str | None:
        if value is None:
            return None
        maximum = (options or {})[ValidationKeys.MAX]
        value, maximum = _bound(value, maximum, ValidationKeys.MAX)
        if value > maximum:
            return self.get_message(self.message_for(options), maximum)
        return None


class StepValidator(Validator):
    """Value must be a multiple of ``options["step"]``."""

    keys: ClassVar[tuple[str, ...]] = (ValidationKeys.STEP,)

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGES["STEP"]) -> None:
        super().__init__(message, "number")

    def has_errors(
        self,
        value: Any,
        options: Options | None = None,
        context: ValidationContext | None = None,
    ) -> str | None:
        if value is None:
            return None
        step = (options or {})[ValidationKeys.STEP]
        if not step:
            msg = f"Invalid step param defined: {step!r}"
            raise ConfigurationError(msg)
        # Decimal keeps 0.3 % 0.1 exact.
        remainder = Decimal(str(value)) % Decimal(str(step))
        if remainder != 0:
            return self.get_message(self.message_for(options), step)
        return None


COMPARISON_OPERATORS: dict[str, tuple[Callable[[Any, Any], bool], str]] = {
    ValidationKeys.EQUALS: (operator.eq, "EQUALS"),
    ValidationKeys.DIFF: (operator.ne, "DIFF"),
    ValidationKeys.LESS_THAN: (operator.lt, "LESS_THAN"),
    ValidationKeys.LESS_THAN_OR_EQUAL: (operator.le, "LESS_THAN_OR_EQUAL"),
    ValidationKeys.GREATER_THAN: (operator.gt, "GREATER_THAN"),
    ValidationKeys.GREATER_THAN_OR_EQUAL: (operator.ge, "GREATER_THAN_OR_EQUAL"),
}

_ORDERING_KEYS = frozenset(COMPARISON_OPERATORS) - {ValidationKeys.EQUALS, ValidationKeys.DIFF}


def _orderable(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal, date, str)) and not isinstance(value, bool)


class ComparisonValidator(Validator):
    """Compares a value with another property of the model graph.

    The rule options carry ``comparison`` (one of the comparison keys),
    ``other`` (the path of the property to compare against) and an optional
    ``label`` used in the message instead of the path.
    """

    keys: ClassVar[tuple[str, ...]] = tuple(COMPARISON_OPERATORS)

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGES["DEFAULT"]) -> None:
        super().__init__(message)

    def has_errors(
        self,
        value: Any,
        options: Options | None = None,
        context: ValidationContext | None = None,
    ) -> str | None:
        options = options or {}
        comparison = options.get("comparison")
        if comparison not in COMPARISON_OPERATORS:
            msg = f"Unknown comparison {comparison!r}; rules must declare one of {sorted(COMPARISON_OPERATORS)}"
            raise ConfigurationError(msg)
        if context is None:
            msg = f"Comparison rule '{comparison}' needs a validation context"
            raise ConfigurationError(msg)

        other_path = options["other"]
        try:
            other = context.resolve(other_path)
        except ValueError as exc:
            return str(exc)

        handler, message_key = COMPARISON_OPERATORS[comparison]
        label = options.get("label") or other_path
        if comparison in _ORDERING_KEYS:
            if value is None:
                return None
            if not (_orderable(value) and _orderable(other)):
                return sf(PATH_ERROR_MESSAGES["UNSUPPORTED_TYPES"], type(value).__name__, type(other).__name__)
            try:
                value, other = comparable(value, other)
                ok = handler(value, other)
            except (TypeError, ValueError):
                return sf(PATH_ERROR_MESSAGES["UNSUPPORTED_TYPES"], type(value).__name__, type(other).__name__)
        else:
            ok = handler(value, other)
        if ok:
            return None
        message = options.get("message") or DEFAULT_ERROR_MESSAGES[message_key]
        return self.get_message(message, label)
