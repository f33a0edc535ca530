"""Regular-expression validators: pattern, email, URL and password."""

from __future__ import annotations

import functools
import re
from typing import TYPE_CHECKING, Any, ClassVar

from decval.domain.keys import DEFAULT_ERROR_MESSAGES, DEFAULT_PATTERNS, ValidationKeys
from decval.exceptions import InvalidPatternError
from decval.validation.validators.base import Options, Validator

if TYPE_CHECKING:
    from decval.validation.context import ValidationContext

# ``/source/flags`` form, as written in JSON payloads and config files.
_REGEXP_LITERAL = re.compile(r"^/(.+)/([gimsuy]*)$", re.DOTALL)

_FLAGS: dict[str, re.RegexFlag] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
}


@functools.lru_cache(maxsize=256)
def compile_pattern(source: str) -> re.Pattern[str]:
    """Compile *source*, honouring the ``/source/flags`` literal form.

    Flags ``g``, ``u`` and ``y`` are accepted and ignored.

    Raises:
        InvalidPatternError: If the expression does not compile.
    """
    flags = 0
    match = _REGEXP_LITERAL.match(source)
    if match:
        source, flag_chars = match.group(1), match.group(2)
        for char in flag_chars:
            flags |= _FLAGS.get(char, 0)
    try:
        return re.compile(source, flags)
    except re.error as exc:
        raise InvalidPatternError(source, str(exc)) from exc


class PatternValidator(Validator):
    """String must contain a match for ``options["pattern"]``."""

    keys: ClassVar[tuple[str, ...]] = (ValidationKeys.PATTERN,)
    default_pattern: ClassVar[re.Pattern[str] | None] = None

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGES["PATTERN"]) -> None:
        super().__init__(message, "str")

    def get_pattern(self, options: Options) -> re.Pattern[str]:
        pattern = options.get(ValidationKeys.PATTERN) or self.default_pattern
        if pattern is None:
            msg = "missing pattern"
            raise InvalidPatternError("", msg)
        if isinstance(pattern, re.Pattern):
            return pattern
        return compile_pattern(str(pattern))

    def has_errors(
        self,
        value: Any,
        options: Options | None = None,
        context: ValidationContext | None = None,
    ) -> str | None:
        if not value:
            return None
        options = options or {}
        if self.get_pattern(options).search(value) is None:
            return self.get_message(self.message_for(options))
        return None


class EmailValidator(PatternValidator):
    keys: ClassVar[tuple[str, ...]] = (ValidationKeys.EMAIL,)
    default_pattern: ClassVar[re.Pattern[str] | None] = DEFAULT_PATTERNS["EMAIL"]

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGES["EMAIL"]) -> None:
        super().__init__(message)


class URLValidator(PatternValidator):
    keys: ClassVar[tuple[str, ...]] = (ValidationKeys.URL,)
    default_pattern: ClassVar[re.Pattern[str] | None] = DEFAULT_PATTERNS["URL"]

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGES["URL"]) -> None:
        super().__init__(message)


class PasswordValidator(PatternValidator):
    keys: ClassVar[tuple[str, ...]] = (ValidationKeys.PASSWORD,)
    default_pattern: ClassVar[re.Pattern[str] | None] = DEFAULT_PATTERNS["PASSWORD"]

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGES["PASSWORD"]) -> None:
        super().__init__(message)
