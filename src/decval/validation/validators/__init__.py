"""Built-in validators."""

from __future__ import annotations

from decval.validation.validators.base import AsyncValidator, BaseValidator, Validator
from decval.validation.validators.comparison import (
    ComparisonValidator,
    MaxValidator,
    MinValidator,
    StepValidator,
)
from decval.validation.validators.date import DateValidator
from decval.validation.validators.length import MaxLengthValidator, MinLengthValidator
from decval.validation.validators.list import ListValidator
from decval.validation.validators.option import OptionValidator
from decval.validation.validators.pattern import (
    EmailValidator,
    PasswordValidator,
    PatternValidator,
    URLValidator,
)
from decval.validation.validators.required import RequiredValidator
from decval.validation.validators.type import TypeValidator

BUILTIN_VALIDATORS: tuple[type[BaseValidator], ...] = (
    TypeValidator,
    RequiredValidator,
    MinValidator,
    MaxValidator,
    StepValidator,
    MinLengthValidator,
    MaxLengthValidator,
    PatternValidator,
    EmailValidator,
    URLValidator,
    PasswordValidator,
    DateValidator,
    ListValidator,
    OptionValidator,
    ComparisonValidator,
)

__all__ = [
    "BUILTIN_VALIDATORS",
    "AsyncValidator",
    "BaseValidator",
    "ComparisonValidator",
    "DateValidator",
    "EmailValidator",
    "ListValidator",
    "MaxLengthValidator",
    "MaxValidator",
    "MinLengthValidator",
    "MinValidator",
    "OptionValidator",
    "PasswordValidator",
    "PatternValidator",
    "RequiredValidator",
    "StepValidator",
    "TypeValidator",
    "URLValidator",
    "Validator",
]
