"""Rule builders and their application to model properties.

Builders return :class:`~decval.domain.rules.ValidationRule` records. They
are attached to a property either through an ``Annotated`` hint on a model
class::

    class User(Model):
        name: Annotated[str, required(), minlength(3)]

or explicitly with :func:`apply_rules`.

A ``message`` left as ``None`` is not stored, so the validator's default
message applies.
"""

from __future__ import annotations

import inspect
import re
import typing
from collections.abc import Iterable
from datetime import date as _date
from enum import Enum
from typing import Any

from decval.domain.dates import coerce_date, get_default_format
from decval.domain.keys import ModelKeys, ValidationKeys, reflect_key
from decval.domain.metadata import metadata
from decval.domain.rules import ValidationRule
from decval.domain.types import DesignType, design_type
from decval.exceptions import ConfigurationError
from decval.validation.validators.date import DATE_TYPES
from decval.validation.validators.list import LIST_TYPES
from decval.validation.validators.pattern import compile_pattern

TypeRef = str | type


def _props(message: str | None, **props: Any) -> dict[str, Any]:
    if message is not None:
        props["message"] = message
    return props


def _names(refs: Iterable[TypeRef]) -> list[str]:
    return [ref if isinstance(ref, str) else ref.__name__ for ref in refs]


def rule(key: str, *, async_: bool = False, message: str | None = None, **props: Any) -> ValidationRule:
    """Rule for a custom validator registered under *key*."""
    if async_:
        props["async"] = True
    return ValidationRule(key, _props(message, **props))


def required(message: str | None = None) -> ValidationRule:
    return ValidationRule(ValidationKeys.REQUIRED, _props(message))


def min_(value: float | _date | str, message: str | None = None) -> ValidationRule:
    return ValidationRule(ValidationKeys.MIN, _props(message, min=value))


def max_(value: float | _date | str, message: str | None = None) -> ValidationRule:
    return ValidationRule(ValidationKeys.MAX, _props(message, max=value))


def step(value: float, message: str | None = None) -> ValidationRule:
    return ValidationRule(ValidationKeys.STEP, _props(message, step=value))


def minlength(value: int, message: str | None = None) -> ValidationRule:
    return ValidationRule(ValidationKeys.MIN_LENGTH, _props(message, minlength=value))


def maxlength(value: int, message: str | None = None) -> ValidationRule:
    return ValidationRule(ValidationKeys.MAX_LENGTH, _props(message, maxlength=value))


def pattern(value: str | re.Pattern[str], message: str | None = None) -> ValidationRule:
    """Regular-expression rule.

    String sources are compiled when the rule is built, so a malformed
    expression raises :class:`~decval.exceptions.InvalidPatternError` before
    any value is checked.
    """
    if isinstance(value, str):
        compile_pattern(value)
    return ValidationRule(ValidationKeys.PATTERN, _props(message, pattern=value))


def email(message: str | None = None) -> ValidationRule:
    return ValidationRule(ValidationKeys.EMAIL, _props(message))


def url(message: str | None = None) -> ValidationRule:
    return ValidationRule(ValidationKeys.URL, _props(message))


def password(value: str | re.Pattern[str] | None = None, message: str | None = None) -> ValidationRule:
    props: dict[str, Any] = {}
    if value is not None:
        if isinstance(value, str):
            compile_pattern(value)
        props["pattern"] = value
    return ValidationRule(ValidationKeys.PASSWORD, _props(message, **props))


def type_(*types: TypeRef, message: str | None = None) -> ValidationRule:
    """Explicit type rule, overriding the annotation's design type."""
    return ValidationRule(ValidationKeys.TYPE, _props(message, types=_names(types)))


def list_(*clazz: TypeRef, collection: str | None = None, message: str | None = None) -> ValidationRule:
    """Element-type rule for ``list``/``tuple``/``set`` properties.

    Args:
        clazz: Allowed element types, as classes or type names. Taken from
            the annotation (``list[Address]``) when omitted.
        collection: Container restored on rebuild: ``"list"``, ``"tuple"``,
            ``"set"`` or ``"frozenset"``. Taken from the annotation when
            omitted.
        message: Override for the default message.
    """
    if collection is not None and collection not in LIST_TYPES:
        msg = f"Unsupported collection {collection!r}, expected one of {LIST_TYPES}"
        raise ValueError(msg)
    return ValidationRule(
        ValidationKeys.LIST,
        _props(message, clazz=_names(clazz), collection=collection, types=list(LIST_TYPES)),
    )


def date(fmt: str | None = None, message: str | None = None) -> ValidationRule:
    """Date rule; also makes the property coerce assigned values into ``datetime``.

    *fmt* defaults to the configured date format (``%Y-%m-%d`` unless
    overridden through settings).
    """
    props = _props(message, format=fmt or get_default_format(), types=list(DATE_TYPES))
    return ValidationRule(ValidationKeys.DATE, props)


def option(choices: Iterable[Any] | type[Enum], message: str | None = None) -> ValidationRule:
    value = choices if isinstance(choices, type) else list(choices)
    return ValidationRule(ValidationKeys.ENUM, _props(message, enum=value))


enum_ = option


def _comparison(key: str, other: str, label: str | None, message: str | None) -> ValidationRule:
    props: dict[str, Any] = {"comparison": key, "other": other}
    if label is not None:
        props["label"] = label
    return ValidationRule(key, _props(message, **props))


def eq(other: str, label: str | None = None, message: str | None = None) -> ValidationRule:
    return _comparison(ValidationKeys.EQUALS, other, label, message)


def diff(other: str, label: str | None = None, message: str | None = None) -> ValidationRule:
    return _comparison(ValidationKeys.DIFF, other, label, message)


def lt(other: str, label: str | None = None, message: str | None = None) -> ValidationRule:
    return _comparison(ValidationKeys.LESS_THAN, other, label, message)


def lte(other: str, label: str | None = None, message: str | None = None) -> ValidationRule:
    return _comparison(ValidationKeys.LESS_THAN_OR_EQUAL, other, label, message)


def gt(other: str, label: str | None = None, message: str | None = None) -> ValidationRule:
    return _comparison(ValidationKeys.GREATER_THAN, other, label, message)


def gte(other: str, label: str | None = None, message: str | None = None) -> ValidationRule:
    return _comparison(ValidationKeys.GREATER_THAN_OR_EQUAL, other, label, message)


def design_type_rule(design: DesignType) -> ValidationRule:
    """Implicit type rule recorded from a property annotation."""
    return ValidationRule(
        ModelKeys.TYPE,
        {
            "types": list(design.names),
            "element_types": [cls.__name__ for cls in design.element_types],
            "optional": design.optional,
        },
    )


_UNSET = object()


class DateProperty:
    """Data descriptor coercing assigned values with a date format.

    The coerced value is kept in the instance ``__dict__`` under the
    property name, so ``vars(instance)`` still lists it.
    """

    def __init__(self, name: str, fmt: str, default: Any = None) -> None:
        self.name = name
        self.format = fmt
        self.default = default

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return instance.__dict__.get(self.name, self.default)

    def __set__(self, instance: Any, value: Any) -> None:
        instance.__dict__[self.name] = coerce_date(value, self.format)

    def __delete__(self, instance: Any) -> None:
        instance.__dict__.pop(self.name, None)


def apply_rules(cls: type, prop: str, *rules: ValidationRule) -> None:
    """Attach *rules* to ``cls.prop`` in the metadata store."""
    for item in rules:
        if not isinstance(item, ValidationRule):
            msg = f"Expected a ValidationRule for {cls.__name__}.{prop}, got {item!r}"
            raise TypeError(msg)
        metadata.define(reflect_key(item.key), item, cls, prop)
        if item.key == ValidationKeys.DATE:
            current = cls.__dict__.get(prop, _UNSET)
            default = current.default if isinstance(current, DateProperty) else current
            setattr(cls, prop, DateProperty(prop, item.props["format"], None if default is _UNSET else default))


_RESOLVED = "__decval_resolved__"


def _complete(item: ValidationRule, design: DesignType) -> ValidationRule:
    """Fill list-rule defaults from the annotation."""
    if item.key != ValidationKeys.LIST:
        return item
    changes: dict[str, Any] = {}
    if not item.props.get("clazz") and design.element_types:
        changes["clazz"] = [cls.__name__ for cls in design.element_types]
    if item.props.get("collection") is None:
        declared = [name.lower() for name in design.names if name.lower() in LIST_TYPES]
        changes["collection"] = declared[0] if declared else "list"
    return item.with_props(**changes) if changes else item


def resolve_rules(cls: type) -> None:
    """Record the rules declared through annotations on *cls* and its bases.

    Each class is processed once. Resolution is deferred until first use so
    that annotations may refer to classes defined later in the module.

    Raises:
        ConfigurationError: If an annotation names an undefined class.
    """
    for klass in reversed(cls.__mro__):
        if klass.__module__ == "builtins" or klass.__dict__.get(_RESOLVED):
            continue
        own = inspect.get_annotations(klass)
        if own:
            try:
                hints = typing.get_type_hints(klass, include_extras=True)
            except NameError as exc:
                msg = f"Cannot resolve annotations of {klass.__name__}: {exc}"
                raise ConfigurationError(msg) from exc
            for name in own:
                hint = hints.get(name)
                if name.startswith("_") or typing.get_origin(hint) is typing.ClassVar:
                    continue
                rules: list[ValidationRule] = []
                if typing.get_origin(hint) is typing.Annotated:
                    hint, *extras = typing.get_args(hint)
                    rules = [extra for extra in extras if isinstance(extra, ValidationRule)]
                design = design_type(hint)
                apply_rules(klass, name, design_type_rule(design), *(_complete(r, design) for r in rules))
        setattr(klass, _RESOLVED, True)
