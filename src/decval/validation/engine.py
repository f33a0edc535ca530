"""Validation engine — walks declared rules and assembles error reports.

Each property goes through the same steps:

1. Discover: collect the rules visible on ``(class, property)``, most-derived
   declaration per rule key.
2. Classify: an explicit ``type`` rule, or any rule whose ``types`` covers the
   annotation, drops the implicit design-type rule. Properties without any
   type rule are skipped. Collection properties need a ``list`` rule.
3. Validate: run each rule's validator. Synchronous runs skip async rules.
4. Recurse: model values and model elements of collections are validated in
   turn, but only when the property itself passed.
5. Merge: nested reports are flattened under ``parent.child`` keys.

:func:`validate` and :func:`validate_async` share the discovery, the
classification and the recursion targets; they differ only in how rule
checks and nested visits are executed.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from decval.domain.keys import (
    COLLECTION_TYPES,
    DEFAULT_ERROR_MESSAGES,
    REFLECT_PREFIX,
    ModelKeys,
    ValidationKeys,
)
from decval.domain.metadata import is_model, metadata
from decval.domain.rules import ValidationRule
from decval.domain.strings import sf
from decval.domain.types import model_type_names
from decval.exceptions import ModelNotRegisteredError, ValidatorNotFoundError
from decval.validation.context import ValidationContext
from decval.validation.decorators import resolve_rules
from decval.validation.registry import Validation
from decval.validation.validators.base import BaseValidator

if TYPE_CHECKING:
    from decval.model.errors import ModelErrorDefinition

logger = logging.getLogger(__name__)

ErrorMap = dict[str, Any]


@dataclass
class _PropertyCheck:
    """Everything needed to validate one property of one instance."""

    prop: str
    value: Any
    rules: list[tuple[ValidationRule, BaseValidator]]
    type_names: tuple[str, ...]
    list_rule: ValidationRule | None = None
    errors: dict[str, str] = field(default_factory=dict)


@dataclass
class _Nested:
    """A recursion target: a nested model or the elements of a collection."""

    prop: str
    model: Any = None
    elements: list[Any] | None = None
    element_errors: dict[int, dict[str, str]] = field(default_factory=dict)


# --- Discover / classify ---


def _properties(obj: Any, ignored: Iterable[str]) -> list[str]:
    skip = set(ignored)
    names = [p for p in metadata.properties(obj) if p not in skip and not p.startswith("_")]
    for name in vars(obj):
        if name not in names and name not in skip and not name.startswith("_"):
            names.append(name)
    return names


def _discover(cls: type, prop: str) -> list[ValidationRule]:
    rules = []
    for key in metadata.get_keys(cls, prop):
        if not key.startswith(REFLECT_PREFIX):
            continue
        value = metadata.get(key, cls, prop)
        if isinstance(value, ValidationRule):
            rules.append(value)
    return rules


def _classify(prop: str, value: Any, rules: list[ValidationRule], is_async: bool) -> _PropertyCheck | None:
    explicit = next((r for r in rules if r.key == ValidationKeys.TYPE), None)
    design = next((r for r in rules if r.key == ModelKeys.TYPE), None)
    if explicit is None and design is None:
        return None

    type_names = (explicit or design).types  # type: ignore[union-attr]
    if design is not None:
        design_names = {name.lower() for name in design.types}
        covered = explicit is not None or any(
            design_names & {name.lower() for name in r.types} for r in rules if r is not design
        )
        if covered:
            rules = [r for r in rules if r is not design]

    list_rule = next((r for r in rules if r.key == ValidationKeys.LIST), None)
    if list_rule is not None:
        # Shape of the collection is checked before anything else.
        rules = [list_rule, *(r for r in rules if r is not list_rule)]

    resolved: list[tuple[ValidationRule, BaseValidator]] = []
    for item in rules:
        if not is_async and item.is_async:
            continue
        validator = Validation.get(item.key)
        if validator is None:
            raise ValidatorNotFoundError(item.key, prop)
        if not is_async and validator.is_async:
            continue
        resolved.append((item, validator))

    check = _PropertyCheck(prop, value, resolved, type_names, list_rule)
    if list_rule is None and any(name.lower() in COLLECTION_TYPES for name in type_names):
        check.errors[ValidationKeys.LIST.value] = sf(DEFAULT_ERROR_MESSAGES["LIST_REQUIRED"], prop)
    return check


def _plan(obj: Any, ignored: Iterable[str], is_async: bool) -> list[_PropertyCheck]:
    cls = type(obj)
    resolve_rules(cls)
    checks = []
    for prop in _properties(obj, ignored):
        check = _classify(prop, getattr(obj, prop, None), _discover(cls, prop), is_async)
        if check is not None:
            checks.append(check)
    return checks


def _error_key(item: ValidationRule) -> str:
    return ValidationKeys.TYPE.value if item.key == ModelKeys.TYPE else item.key


# --- Recurse ---


def _model_class(name: str) -> type | None:
    from decval.model.registry import get_registry

    return get_registry().get(name)


def _nested(check: _PropertyCheck) -> _Nested | None:
    """Recursion target for a property that passed its own rules.

    Raises:
        ModelNotRegisteredError: If a model value is declared with a type
            name missing from the model registry.
    """
    value = check.value
    if value is None or check.errors:
        return None

    if check.list_rule is not None and isinstance(value, (list, tuple, set, frozenset)):
        allowed = model_type_names(check.list_rule.props.get("clazz") or ())
        elements: list[Any] = []
        target = _Nested(check.prop, elements=elements)
        for index, element in enumerate(value):
            if not is_model(element):
                elements.append(None)
                continue
            classes = []
            for name in allowed:
                clazz = _model_class(name)
                if clazz is None:
                    raise ModelNotRegisteredError(name, sf(DEFAULT_ERROR_MESSAGES["MODEL_NOT_FOUND"], name))
                classes.append(clazz)
            if classes and not isinstance(element, tuple(classes)):
                target.element_errors[index] = {
                    ValidationKeys.LIST.value: sf(DEFAULT_ERROR_MESSAGES["LIST_ELEMENT"], ", ".join(allowed))
                }
                elements.append(None)
                continue
            elements.append(element)
        return target

    if not is_model(value):
        return None
    declared = model_type_names(check.type_names)
    if not declared:
        return _Nested(check.prop, model=value)
    for name in declared:
        clazz = _model_class(name)
        if clazz is None:
            raise ModelNotRegisteredError(name)
        if isinstance(value, clazz):
            return _Nested(check.prop, model=value)
    return None


def _merge_nested(errors: ErrorMap, target: _Nested, results: list[ErrorMap | None]) -> None:
    if target.elements is None:
        nested = results[0]
        for key, value in (nested or {}).items():
            errors[f"{target.prop}.{key}"] = value
        return
    per_element: list[ErrorMap | None] = []
    for index, result in enumerate(results):
        per_element.append(target.element_errors.get(index) or result or None)
    if any(per_element):
        errors[target.prop] = per_element


def _targets(target: _Nested) -> list[Any]:
    if target.elements is None:
        return [target.model]
    return target.elements


# --- Synchronous visitor ---


def _visit(obj: Any, ctx: ValidationContext, ignored: Iterable[str] = ()) -> ErrorMap:
    errors: ErrorMap = {}
    for check in _plan(obj, ignored, is_async=False):
        for item, validator in check.rules:
            message = validator.check(check.value, item.props, ctx)
            if message:
                check.errors.setdefault(_error_key(item), message)
        if check.errors:
            errors[check.prop] = dict(check.errors)
            continue
        target = _nested(check)
        if target is None:
            continue
        results = [None if child is None else _visit(child, ctx.child(child, check.prop)) for child in _targets(target)]
        _merge_nested(errors, target, results)
    return errors


def validate(obj: Any, *ignored: str) -> ModelErrorDefinition | None:
    """Validate *obj* synchronously, skipping async rules.

    Args:
        obj: Model instance (or any object whose class declares rules).
        *ignored: Property names to leave out.

    Returns:
        The error report, or ``None`` when every rule passed.

    Raises:
        ValidatorNotFoundError: A declared rule key has no validator.
        ModelNotRegisteredError: A nested model type is not registered.
    """
    from decval.model.errors import ModelErrorDefinition

    errors = _visit(obj, ValidationContext(obj), ignored)
    return ModelErrorDefinition(errors) if errors else None


# --- Asynchronous visitor ---


async def _settle(item: ValidationRule, validator: BaseValidator, value: Any, ctx: ValidationContext) -> str | None:
    result = validator.check(value, item.props, ctx)
    if inspect.isawaitable(result):
        result = await result
    return result


def _describe(item: ValidationRule, outcome: BaseException) -> str:
    logger.warning("Rule %s failed with %s: %s", item.key, type(outcome).__name__, outcome)
    return str(outcome) or type(outcome).__name__


async def _check_property(check: _PropertyCheck, ctx: ValidationContext) -> ErrorMap:
    outcomes = await asyncio.gather(
        *(_settle(item, validator, check.value, ctx) for item, validator in check.rules),
        return_exceptions=True,
    )
    for (item, _), outcome in zip(check.rules, outcomes, strict=True):
        if isinstance(outcome, BaseException):
            outcome = _describe(item, outcome)
        if outcome:
            check.errors.setdefault(_error_key(item), outcome)
    if check.errors:
        return {check.prop: dict(check.errors)}

    target = _nested(check)
    if target is None:
        return {}
    visits: list[Awaitable[ErrorMap | None]] = [
        _none() if child is None else _visit_async(child, ctx.child(child, check.prop)) for child in _targets(target)
    ]
    results = await asyncio.gather(*visits)
    errors: ErrorMap = {}
    _merge_nested(errors, target, list(results))
    return errors


async def _none() -> None:
    return None


async def _visit_async(obj: Any, ctx: ValidationContext, ignored: Iterable[str] = ()) -> ErrorMap:
    checks = _plan(obj, ignored, is_async=True)
    partials = await asyncio.gather(*(_check_property(check, ctx) for check in checks))
    errors: ErrorMap = {}
    for partial in partials:
        errors.update(partial)
    return errors


async def validate_async(obj: Any, *ignored: str) -> ModelErrorDefinition | None:
    """Validate *obj*, running async rules concurrently.

    All property checks and nested visits of one call are gathered together.
    An exception raised by a rule becomes that rule's error message; results
    keep declaration order regardless of completion order.

    Raises:
        ValidatorNotFoundError: A declared rule key has no validator.
        ModelNotRegisteredError: A nested model type is not registered.
    """
    from decval.model.errors import ModelErrorDefinition

    errors = await _visit_async(obj, ValidationContext(obj, is_async=True), ignored)
    return ModelErrorDefinition(errors) if errors else None
