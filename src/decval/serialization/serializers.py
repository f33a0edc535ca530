"""Serializers for model instances.

The serialized form is a mapping of the model's public fields plus the
``__model`` anchor naming the registered class. Nested models carry their
own anchor, sets become lists and dates are rendered as strings (through the
property's date format when it has a ``date`` rule, ISO-8601 otherwise).
Reading a payload back goes through the model registry.
"""

from __future__ import annotations

import io
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import date
from enum import Enum
from typing import Any, ClassVar

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from decval.domain.dates import format_date
from decval.domain.keys import ModelKeys, ValidationKeys, reflect_key
from decval.domain.metadata import metadata
from decval.exceptions import ConfigurationError, ModelNotRegisteredError, SerializationError

logger = logging.getLogger(__name__)

DEFAULT_SERIALIZATION_METHOD = "json"


def model_name(cls: type) -> str:
    """Name a class is registered (and anchored) under."""
    return metadata.get(ModelKeys.MODEL, cls) or cls.__name__


def _date_format(owner: Any, prop: str) -> str | None:
    rule = metadata.get(reflect_key(ValidationKeys.DATE), type(owner), prop)
    return rule.props.get("format") if rule is not None else None


def _plain_value(value: Any, fmt: str | None = None) -> Any:
    if metadata.has(ModelKeys.MODEL, type(value)) and not isinstance(value, type):
        return to_plain(value)
    if isinstance(value, Mapping):
        return {str(k): _plain_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain_value(v, fmt) for v in value]
    if isinstance(value, (set, frozenset)):
        return sorted((_plain_value(v, fmt) for v in value), key=repr)
    if isinstance(value, date):
        return format_date(value, fmt) if fmt else value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def to_plain(model: Any) -> dict[str, Any]:
    """Plain ``dict`` form of *model*, anchor first."""
    data: dict[str, Any] = {ModelKeys.ANCHOR.value: model_name(type(model))}
    for key, value in vars(model).items():
        if key.startswith("_"):
            continue
        data[key] = _plain_value(value, _date_format(model, key))
    return data


def _build(data: Any) -> Any:
    if not isinstance(data, Mapping) or ModelKeys.ANCHOR not in data:
        msg = f"Payload is not a serialized model: missing '{ModelKeys.ANCHOR}' anchor"
        raise SerializationError(msg)
    from decval.model.registry import get_registry

    try:
        return get_registry().build(data)
    except ModelNotRegisteredError as exc:
        raise SerializationError(str(exc)) from exc


class Serializer(ABC):
    """Turns a model into text and back."""

    @abstractmethod
    def serialize(self, model: Any) -> str: ...

    @abstractmethod
    def deserialize(self, text: str) -> Any: ...


class JSONSerializer(Serializer):
    """JSON text via the stdlib :mod:`json` module."""

    def __init__(self, indent: int | None = None, sort_keys: bool = False) -> None:
        self.indent = indent
        self.sort_keys = sort_keys

    def serialize(self, model: Any) -> str:
        return json.dumps(to_plain(model), indent=self.indent, sort_keys=self.sort_keys, default=str)

    def deserialize(self, text: str) -> Any:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            msg = f"Invalid JSON payload: {exc}"
            raise SerializationError(msg) from exc
        return _build(data)


class YamlSerializer(Serializer):
    """YAML documents via ruamel.yaml (safe loader)."""

    def __init__(self, indent: int | None = None, sort_keys: bool = False) -> None:
        self.indent = indent
        self.sort_keys = sort_keys

    def _yaml(self) -> YAML:
        yaml = YAML(typ="safe", pure=True)
        yaml.default_flow_style = False
        if self.indent:
            yaml.indent(mapping=self.indent, sequence=self.indent, offset=max(self.indent - 2, 0))
        return yaml

    def serialize(self, model: Any) -> str:
        data = to_plain(model)
        if self.sort_keys:
            data = _sorted(data)
        stream = io.StringIO()
        self._yaml().dump(data, stream)
        return stream.getvalue()

    def deserialize(self, text: str) -> Any:
        try:
            data = self._yaml().load(text)
        except YAMLError as exc:
            msg = f"Invalid YAML payload: {exc}"
            raise SerializationError(msg) from exc
        return _build(data)


def _sorted(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: _sorted(data[k]) for k in sorted(data)}
    if isinstance(data, list):
        return [_sorted(v) for v in data]
    return data


class Serialization:
    """Registry of named serializers with a switchable default."""

    _current: ClassVar[str] = DEFAULT_SERIALIZATION_METHOD
    _cache: ClassVar[dict[str, Serializer]] = {
        DEFAULT_SERIALIZATION_METHOD: JSONSerializer(),
        "yaml": YamlSerializer(),
    }

    @classmethod
    def get(cls, key: str) -> Serializer:
        """Return the serializer registered under *key*.

        Raises:
            ConfigurationError: If nothing is registered under *key*.
        """
        try:
            return cls._cache[key]
        except KeyError:
            msg = f"No serialization method registered under {key}"
            raise ConfigurationError(msg) from None

    @classmethod
    def register(cls, key: str, serializer: Serializer, *, default: bool = False) -> None:
        """Add (or replace) the serializer under *key*."""
        if key in cls._cache:
            logger.info("Serialization method %s replaced", key)
        cls._cache[key] = serializer
        if default:
            cls._current = key

    @classmethod
    def set_default(cls, key: str) -> None:
        cls.get(key)
        cls._current = key

    @classmethod
    def current(cls) -> str:
        return cls._current

    @classmethod
    def serialize(cls, model: Any, method: str | None = None) -> str:
        method = method or metadata.get(ModelKeys.SERIALIZATION, type(model)) or cls._current
        return cls.get(method).serialize(model)

    @classmethod
    def deserialize(cls, text: str, method: str | None = None) -> Any:
        return cls.get(method or cls._current).deserialize(text)
