"""Building model instances from plain data.

:func:`from_object` copies matching properties; :func:`from_model` also
rebuilds nested values (model records, collections of model records, date
strings) according to the declared types. Nested rebuilding is best-effort:
a record whose model cannot be resolved stays as raw data and the miss is
logged.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from decval.domain.dates import parse_date
from decval.domain.keys import ModelKeys, ValidationKeys, reflect_key
from decval.domain.metadata import metadata
from decval.domain.rules import ValidationRule
from decval.domain.types import model_type_names
from decval.exceptions import DecvalError
from decval.model.registry import get_registry
from decval.validation.decorators import resolve_rules

logger = logging.getLogger(__name__)

_CONTAINERS: dict[str, type] = {"list": list, "tuple": tuple, "set": set, "frozenset": frozenset}


def declared_properties(target: Any) -> list[str]:
    """Properties declared on *target*'s class (annotations or rules)."""
    cls = target if isinstance(target, type) else type(target)
    resolve_rules(cls)
    return [name for name in metadata.properties(cls) if not name.startswith("_")]


def _rule(obj: Any, prop: str, key: str) -> ValidationRule | None:
    value = metadata.get(reflect_key(key), type(obj), prop)
    return value if isinstance(value, ValidationRule) else None


def _lookup(source: Any, prop: str) -> tuple[bool, Any]:
    if isinstance(source, Mapping):
        return (prop in source, source.get(prop))
    if hasattr(source, prop):
        return True, getattr(source, prop)
    return False, None


def apply_defaults(obj: Any) -> None:
    """Give every declared property an instance value.

    The class attribute default is copied (shallowly, so mutable defaults are
    not shared); properties without a default start as ``None``.
    """
    for prop in declared_properties(obj):
        if prop in vars(obj):
            continue
        setattr(obj, prop, copy.copy(getattr(obj, prop, None)))


def from_object(obj: Any, source: Any) -> Any:
    """Copy the properties of *source* that *obj* declares.

    *source* may be a mapping or any object. Unknown keys are ignored.
    """
    if source is None:
        return obj
    for prop in declared_properties(obj):
        found, value = _lookup(source, prop)
        if found:
            setattr(obj, prop, value)
    return obj


def _build_record(record: Mapping[str, Any], candidates: list[str], owner: str) -> Any:
    registry = get_registry()
    try:
        if ModelKeys.ANCHOR in record:
            return registry.build(record)
        if len(candidates) == 1:
            return registry.build(record, candidates[0])
    except (DecvalError, TypeError, ValueError) as exc:
        logger.warning("Could not rebuild %s as %s: %s", owner, candidates or "anchored model", exc)
        return record
    logger.debug("No single model type for %s, keeping raw data", owner)
    return record


def _rebuild_dates(value: Any, names: list[str]) -> Any:
    lowered = {n.lower() for n in names}
    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        return value
    if not lowered & {"datetime", "date"}:
        return value
    try:
        parsed = parse_date(value)
    except (ValueError, OverflowError, OSError):
        logger.debug("Keeping unparsable date value %r", value)
        return value
    if "datetime" not in lowered:
        return parsed.date()
    return parsed


def _rebuild(obj: Any, prop: str, value: Any) -> Any:
    design = _rule(obj, prop, ModelKeys.TYPE)
    explicit = _rule(obj, prop, ValidationKeys.TYPE)
    names = list((explicit or design).types) if (explicit or design) else []
    list_rule = _rule(obj, prop, ValidationKeys.LIST)
    owner = f"{type(obj).__name__}.{prop}"

    if list_rule is not None and isinstance(value, (list, tuple, set, frozenset)):
        allowed = model_type_names(list(list_rule.props.get("clazz") or ()))
        elements = [
            _build_record(element, allowed, owner) if isinstance(element, Mapping) else element
            for element in value
        ]
        container = _CONTAINERS.get(list_rule.props.get("collection") or "list", list)
        try:
            return container(elements)
        except TypeError as exc:
            logger.warning("Could not restore %s as %s: %s", owner, container.__name__, exc)
            return elements

    if isinstance(value, Mapping):
        candidates = model_type_names(names)
        if candidates or ModelKeys.ANCHOR in value:
            return _build_record(value, candidates, owner)
        return value

    if _rule(obj, prop, ValidationKeys.DATE) is None:
        return _rebuild_dates(value, names)
    return value


def from_model(obj: Any, source: Any) -> Any:
    """Copy *source* into *obj*, then rebuild nested values by declared type."""
    from_object(obj, source)
    if source is None:
        return obj
    for prop in declared_properties(obj):
        value = getattr(obj, prop, None)
        if value is None or isinstance(value, (datetime, date)):
            continue
        rebuilt = _rebuild(obj, prop, value)
        if rebuilt is not value:
            setattr(obj, prop, rebuilt)
    return obj
