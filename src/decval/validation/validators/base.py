"""Validator ABCs — one rule kind, one class.

A validator is stateless apart from its default message. The engine calls
:meth:`Validator.check` (or awaits :meth:`AsyncValidator.check`), which
rejects values outside the validator's accepted types before delegating to
:meth:`has_errors`.

Contract:
    - ``has_errors`` returns ``None`` when the value passes and a formatted
      message when it does not.
    - Ordinary invalid input never raises; only programmer errors do
      (bad rule parameters, malformed patterns).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from decval.domain.keys import DEFAULT_ERROR_MESSAGES
from decval.domain.strings import sf
from decval.domain.types import check_types, type_name

if TYPE_CHECKING:
    from decval.validation.context import ValidationContext

Options = Mapping[str, Any]


class BaseValidator(ABC):
    """Shared behaviour of sync and async validators.

    Attributes:
        keys: Rule keys the class registers under when passed to the
            registry as a class. Set by :func:`~decval.validation.registry.validator`
            or declared directly on built-ins.
        is_async: Whether :meth:`has_errors` is a coroutine function.
    """

    keys: ClassVar[tuple[str, ...]] = ()
    is_async: ClassVar[bool] = False

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGES["DEFAULT"], *accepted_types: str) -> None:
        self.message = message
        self.accepted_types: tuple[str, ...] | None = accepted_types or None

    def get_message(self, message: str | None, *args: Any) -> str:
        return sf(message or self.message, *args)

    def message_for(self, options: Options | None) -> str:
        """The rule's own message, falling back to the validator default."""
        if options and options.get("message"):
            return str(options["message"])
        return self.message

    def type_error(self, value: Any) -> str | None:
        """Type message if *value* falls outside :attr:`accepted_types`."""
        if value is None or not self.accepted_types:
            return None
        if check_types(value, self.accepted_types):
            return None
        return sf(DEFAULT_ERROR_MESSAGES["TYPE"], ", ".join(self.accepted_types), type_name(value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(keys={list(self.keys)!r})"


class Validator(BaseValidator):
    """Synchronous validator."""

    @abstractmethod
    def has_errors(
        self,
        value: Any,
        options: Options | None = None,
        context: ValidationContext | None = None,
    ) -> str | None: ...

    def check(
        self,
        value: Any,
        options: Options | None = None,
        context: ValidationContext | None = None,
    ) -> str | None:
        return self.type_error(value) or self.has_errors(value, options or {}, context)


class AsyncValidator(BaseValidator):
    """Asynchronous validator, skipped entirely by synchronous runs."""

    is_async: ClassVar[bool] = True

    @abstractmethod
    async def has_errors(
        self,
        value: Any,
        options: Options | None = None,
        context: ValidationContext | None = None,
    ) -> str | None: ...

    async def check(
        self,
        value: Any,
        options: Options | None = None,
        context: ValidationContext | None = None,
    ) -> str | None:
        type_error = self.type_error(value)
        if type_error:
            return type_error
        return await self.has_errors(value, options or {}, context)
